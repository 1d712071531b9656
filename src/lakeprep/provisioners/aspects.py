import requests
from google.api_core import exceptions
from google.auth import exceptions as auth_exceptions

from .. import rest
from ..clients import get_catalog_client
from ..core import (
    ASPECT_FIELD,
    ASPECT_FIELD_DISPLAY_NAME,
    ASPECT_FLAG_VALUES,
    DATAPLEX_API,
    OPERATION_TIMEOUT,
)
from ..errors import ProvisionError
from ..logger import logger
from ..provision import ensure, probe_exists, wait_for_result
from ..schemas.aspects import AspectPayload, AspectTypeSpec, EnumValue, TemplateField
from ..schemas.lab import LabConfig
from ..schemas.results import ProvisionResult, ProvisionStatus
from .dataplex import rest_create


def protected_raw_data_aspect_type(config: LabConfig) -> AspectTypeSpec:
    """Aspect type with a single required Y/N flag marking protected raw data."""
    return AspectTypeSpec(
        aspect_type_id=config.aspect_type_id,
        display_name=config.aspect_type_display_name,
        description="Marks raw data that is subject to protection rules",
        fields=[
            TemplateField(
                name=ASPECT_FIELD,
                display_name=ASPECT_FIELD_DISPLAY_NAME,
                index=1,
                enum_values=[
                    EnumValue(index=i, name=v)
                    for i, v in enumerate(ASPECT_FLAG_VALUES, start=1)
                ],
            )
        ],
    )


def build_aspect(
    spec: AspectTypeSpec, config: LabConfig, flag: str = "Y"
) -> AspectPayload:
    data = {ASPECT_FIELD: flag}
    spec.validate_data(data)
    return AspectPayload(aspect_type=config.aspect_type_path, data=data)


def ensure_aspect_type(config: LabConfig) -> ProvisionResult:
    client = get_catalog_client()
    spec = protected_raw_data_aspect_type(config)

    def create() -> None:
        operation = client.create_aspect_type(
            parent=config.location_path,
            aspect_type_id=config.aspect_type_id,
            aspect_type=spec.to_message(),
        )
        wait_for_result(
            operation, "aspect type", config.aspect_type_id, OPERATION_TIMEOUT
        )

    return ensure(
        "aspect type",
        config.aspect_type_id,
        probe=lambda: probe_exists(
            lambda: client.get_aspect_type(name=config.aspect_type_path)
        ),
        create=create,
        fallback=lambda: rest_create(
            config.location_path,
            "aspectTypes",
            "aspectTypeId",
            config.aspect_type_id,
            spec.to_body(),
        ),
    )


def attach_aspect(config: LabConfig, flag: str = "Y") -> ProvisionResult:
    """
    Attaches an aspect of the lab aspect type to the zone with a direct REST call.
    Any non-2xx answer other than 409 aborts the run.
    """
    spec = protected_raw_data_aspect_type(config)
    payload = build_aspect(spec, config, flag)
    url = f"{DATAPLEX_API}/{config.zone_path}/aspects"

    try:
        response = rest.post_json(url, payload.to_body())
        if "/operations/" in response.get("name", ""):
            rest.wait_for_operation(response, DATAPLEX_API)
    except exceptions.Conflict:
        logger.info(f"Aspect already attached to {config.zone_path}")
        return ProvisionResult(
            kind="aspect", name=config.aspect_type_id, status=ProvisionStatus.EXISTS
        )
    except (
        exceptions.GoogleAPICallError,
        auth_exceptions.GoogleAuthError,
        requests.RequestException,
    ) as e:
        raise ProvisionError(
            "aspect", config.aspect_type_id, f"attach to zone failed: {e}"
        ) from e

    return ProvisionResult(
        kind="aspect",
        name=config.aspect_type_id,
        status=ProvisionStatus.ATTACHED,
        detail=f"{ASPECT_FIELD}={flag}",
    )
