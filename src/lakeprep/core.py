# Google API endpoints
DATAPLEX_API = "https://dataplex.googleapis.com/v1"
STORAGE_API = "https://storage.googleapis.com/storage/v1"
CLOUD_PLATFORM_SCOPE = "https://www.googleapis.com/auth/cloud-platform"

# APIs the lab depends on, enabled before anything else
REQUIRED_APIS = [
    "dataplex.googleapis.com",
    "storage.googleapis.com",
]

DEFAULT_REGION = "us-central1"

# Environment lookups, first non-empty value wins
PROJECT_ENV_VARS = [
    "DEVSHELL_PROJECT_ID",
    "GOOGLE_CLOUD_PROJECT",
    "CLOUDSDK_CORE_PROJECT",
]
REGION_ENV_VARS = [
    "GOOGLE_CLOUD_REGION",
    "CLOUDSDK_COMPUTE_REGION",
]

# Lab resource identifiers
LAKE_ID = "customer-engagements"
LAKE_DISPLAY_NAME = "Customer Engagements"

ZONE_ID = "raw-event-data"
ZONE_DISPLAY_NAME = "Raw Event Data"
ZONE_TYPE = "RAW"
ZONE_LOCATION_TYPE = "SINGLE_REGION"

ASSET_ID = "raw-event-files"
ASSET_DISPLAY_NAME = "Raw Event Files"

ASPECT_TYPE_ID = "protected-raw-data-aspect"
ASPECT_TYPE_DISPLAY_NAME = "Protected Raw Data Aspect"
ASPECT_FIELD = "protected_raw_data_flag"
ASPECT_FIELD_DISPLAY_NAME = "Protected Raw Data Flag"
ASPECT_FLAG_VALUES = ["Y", "N"]

# Long-running operations (lake/zone creation can take several minutes)
OPERATION_TIMEOUT = 900
OPERATION_POLL_INTERVAL = 5
HTTP_TIMEOUT = 60
