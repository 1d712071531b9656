import json
from typing import Any

from google.cloud import dataplex_v1

from .. import rest
from ..clients import get_dataplex_client
from ..core import DATAPLEX_API, OPERATION_TIMEOUT
from ..logger import logger
from ..provision import ensure, probe_exists, wait_for_result
from ..schemas.lab import LabConfig
from ..schemas.results import ProvisionResult


def rest_create(
    parent: str, collection: str, id_param: str, resource_id: str, body: dict[str, Any]
) -> dict[str, Any]:
    """
    Creates a Dataplex resource through the REST API and waits for the
    long-running operation it returns.
    """
    operation = rest.post_json(
        f"{DATAPLEX_API}/{parent}/{collection}",
        body,
        params={id_param: resource_id},
    )
    return rest.wait_for_operation(operation, DATAPLEX_API)


def lake_body(config: LabConfig) -> dict[str, Any]:
    return {"displayName": config.lake_display_name}


def zone_body(config: LabConfig) -> dict[str, Any]:
    return {
        "displayName": config.zone_display_name,
        "type": config.zone_type,
        "resourceSpec": {"locationType": config.zone_location_type},
        "discoverySpec": {"enabled": False},
    }


def asset_body(config: LabConfig) -> dict[str, Any]:
    return {
        "displayName": config.asset_display_name,
        "resourceSpec": {"name": config.bucket_resource, "type": "STORAGE_BUCKET"},
    }


def ensure_lake(config: LabConfig) -> ProvisionResult:
    client = get_dataplex_client()
    body = lake_body(config)

    def create() -> None:
        operation = client.create_lake(
            parent=config.location_path,
            lake_id=config.lake_id,
            lake=dataplex_v1.Lake.from_json(json.dumps(body)),
        )
        wait_for_result(operation, "lake", config.lake_id, OPERATION_TIMEOUT)
        logger.debug(f"Lake {config.lake_path} created")

    return ensure(
        "lake",
        config.lake_id,
        probe=lambda: probe_exists(lambda: client.get_lake(name=config.lake_path)),
        create=create,
        fallback=lambda: rest_create(
            config.location_path, "lakes", "lakeId", config.lake_id, body
        ),
    )


def ensure_zone(config: LabConfig) -> ProvisionResult:
    client = get_dataplex_client()
    body = zone_body(config)

    def create() -> None:
        operation = client.create_zone(
            parent=config.lake_path,
            zone_id=config.zone_id,
            zone=dataplex_v1.Zone.from_json(json.dumps(body)),
        )
        wait_for_result(operation, "zone", config.zone_id, OPERATION_TIMEOUT)
        logger.debug(f"Zone {config.zone_path} created")

    return ensure(
        "zone",
        config.zone_id,
        probe=lambda: probe_exists(lambda: client.get_zone(name=config.zone_path)),
        create=create,
        fallback=lambda: rest_create(
            config.lake_path, "zones", "zoneId", config.zone_id, body
        ),
    )


def ensure_asset(config: LabConfig) -> ProvisionResult:
    client = get_dataplex_client()
    body = asset_body(config)

    def create() -> None:
        operation = client.create_asset(
            parent=config.zone_path,
            asset_id=config.asset_id,
            asset=dataplex_v1.Asset.from_json(json.dumps(body)),
        )
        wait_for_result(operation, "asset", config.asset_id, OPERATION_TIMEOUT)
        logger.debug(f"Asset {config.asset_path} -> {config.bucket_resource}")

    return ensure(
        "asset",
        config.asset_id,
        probe=lambda: probe_exists(
            lambda: client.get_asset(name=config.asset_path)
        ),
        create=create,
        fallback=lambda: rest_create(
            config.zone_path, "assets", "assetId", config.asset_id, body
        ),
    )
