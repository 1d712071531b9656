import os
import shutil
import subprocess
from typing import Any

from google.auth import exceptions as auth_exceptions
from pydantic import ValidationError

from .clients import get_credentials
from .core import DEFAULT_REGION, PROJECT_ENV_VARS, REGION_ENV_VARS
from .errors import ConfigError
from .logger import logger
from .schemas.lab import LabConfig


def _from_env(names: list[str]) -> str | None:
    for name in names:
        value = os.environ.get(name, "").strip()
        if value:
            logger.debug(f"Using {name}={value}")
            return value
    return None


def gcloud_config_value(prop: str) -> str | None:
    """Reads a property from the active gcloud configuration, if gcloud exists."""
    if shutil.which("gcloud") is None:
        return None

    cmd = ["gcloud", "config", "get-value", prop, "--quiet"]
    try:
        res = subprocess.run(cmd, capture_output=True, text=True, timeout=30)
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug(f"gcloud config get-value {prop} failed: {e}")
        return None

    value = res.stdout.strip()
    # gcloud prints "(unset)" on some versions when the property is empty
    if res.returncode != 0 or not value or value == "(unset)":
        return None
    return value


def resolve_project(explicit: str | None = None) -> str:
    project = (explicit or "").strip() or _from_env(PROJECT_ENV_VARS)

    if not project:
        project = gcloud_config_value("project")

    if not project:
        try:
            _, project = get_credentials()
        except auth_exceptions.DefaultCredentialsError:
            project = None

    if not project:
        raise ConfigError(
            "No project id found. Pass --project-id, set GOOGLE_CLOUD_PROJECT "
            "or run 'gcloud config set project <id>'."
        )
    return project


def resolve_region(explicit: str | None = None) -> str:
    region = (explicit or "").strip() or _from_env(REGION_ENV_VARS)
    if not region:
        region = gcloud_config_value("compute/region")
    return region or DEFAULT_REGION


def check_credentials() -> None:
    """Fails before any remote call when no application-default credentials exist."""
    try:
        get_credentials()
    except auth_exceptions.DefaultCredentialsError as e:
        raise ConfigError(
            "Application-default credentials not found. "
            "Run 'gcloud auth application-default login'."
        ) from e


def load_config(
    project_id: str | None = None, region: str | None = None, **overrides: Any
) -> LabConfig:
    """Resolves project/region and builds the validated lab configuration."""
    check_credentials()

    values = {k: v for k, v in overrides.items() if v}
    try:
        return LabConfig(
            project_id=resolve_project(project_id),
            region=resolve_region(region),
            **values,
        )
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
