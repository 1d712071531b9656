import shutil
import subprocess
from typing import Any

from ..clients import get_serviceusage_client
from ..core import REQUIRED_APIS
from ..errors import ProvisionError
from ..logger import logger
from ..rest import poll_operation
from ..schemas.lab import LabConfig
from ..schemas.results import ProvisionResult, ProvisionStatus


def batch_enable(project_id: str, apis: list[str]) -> dict[str, Any]:
    """Enables the APIs through the Service Usage API and waits for completion."""
    service = get_serviceusage_client()
    operation = (
        service.services()
        .batchEnable(parent=f"projects/{project_id}", body={"serviceIds": apis})
        .execute()
    )
    name = operation.get("name", "")
    if operation.get("done") or not name:
        return poll_operation(lambda: {**operation, "done": True}, name)
    return poll_operation(
        lambda: service.operations().get(name=name).execute(), name
    )


def gcloud_enable(project_id: str, apis: list[str]) -> None:
    if shutil.which("gcloud") is None:
        raise RuntimeError("gcloud is not installed")

    cmd = ["gcloud", "services", "enable", *apis, f"--project={project_id}", "--quiet"]
    res = subprocess.run(cmd, capture_output=True, text=True)
    if res.returncode != 0:
        err = res.stderr.strip().splitlines()[-1] if res.stderr else "Unknown error"
        raise RuntimeError(err)


def enable_apis(
    config: LabConfig, apis: list[str] | None = None
) -> ProvisionResult:
    """
    Enables the required APIs. Enabling an already-enabled API is a no-op,
    so there is no existence probe for this step.
    """
    apis = apis or REQUIRED_APIS
    name = ", ".join(apis)

    try:
        batch_enable(config.project_id, apis)
        return ProvisionResult(kind="apis", name=name, status=ProvisionStatus.ENABLED)
    except Exception as e:
        logger.warning(f"Service Usage batchEnable failed: {e}")

    try:
        gcloud_enable(config.project_id, apis)
    except Exception as e:
        raise ProvisionError("apis", name, f"enablement failed: {e}") from e

    return ProvisionResult(
        kind="apis", name=name, status=ProvisionStatus.ENABLED, detail="via gcloud"
    )
