from google.api_core import exceptions

from .. import rest
from ..clients import get_storage_client
from ..core import STORAGE_API
from ..errors import ProvisionError
from ..provision import ensure
from ..schemas.lab import LabConfig
from ..schemas.results import ProvisionResult


def bucket_exists(bucket_name: str) -> bool:
    try:
        return get_storage_client().lookup_bucket(bucket_name) is not None
    except exceptions.GoogleAPICallError:
        # lookup_bucket only swallows NotFound; a 403 means it exists elsewhere
        # or we lack access, and the create call will report which
        return False


def confirm_owned(bucket_name: str) -> None:
    """
    Bucket names are global, so a 409 on create only means the name is taken.
    Raises ProvisionError unless the bucket is readable from this project.
    """
    try:
        get_storage_client().get_bucket(bucket_name)
    except exceptions.Forbidden as e:
        raise ProvisionError(
            "bucket", bucket_name, "name is already taken by another project"
        ) from e


def ensure_bucket(config: LabConfig) -> ProvisionResult:
    """
    Creates the lab bucket in the configured region.
    Falls back to the Cloud Storage JSON API if the client library call fails.
    """

    def create() -> None:
        try:
            get_storage_client().create_bucket(
                config.bucket_name, project=config.project_id, location=config.region
            )
        except exceptions.Conflict:
            confirm_owned(config.bucket_name)
            raise

    def fallback() -> None:
        try:
            rest.post_json(
                f"{STORAGE_API}/b",
                {"name": config.bucket_name, "location": config.region},
                params={"project": config.project_id},
            )
        except exceptions.Conflict:
            confirm_owned(config.bucket_name)
            raise

    return ensure(
        "bucket",
        config.bucket_name,
        probe=lambda: bucket_exists(config.bucket_name),
        create=create,
        fallback=fallback,
    )
