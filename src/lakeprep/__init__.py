"""lakeprep: idempotent provisioner for the Dataplex lake/zone/asset lab."""

import warnings
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("lakeprep")
except PackageNotFoundError:
    __version__ = "unknown"

# google-api-core and google-auth warn on import about interpreter support
warnings.filterwarnings(
    "ignore", category=FutureWarning, module=r"google\.(api_core|auth|cloud)"
)
