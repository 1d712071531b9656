from ..clients import get_catalog_client, get_dataplex_client
from ..provision import probe_exists
from ..provisioners.storage import bucket_exists
from ..schemas.lab import LabConfig
from ..schemas.results import ProvisionResult, ProvisionStatus


def run_status(config: LabConfig) -> list[ProvisionResult]:
    """Probes every lab resource without creating anything."""
    dataplex = get_dataplex_client()
    catalog = get_catalog_client()

    probes = [
        (
            "lake",
            config.lake_id,
            lambda: probe_exists(lambda: dataplex.get_lake(name=config.lake_path)),
        ),
        (
            "zone",
            config.zone_id,
            lambda: probe_exists(lambda: dataplex.get_zone(name=config.zone_path)),
        ),
        ("bucket", config.bucket_name, lambda: bucket_exists(config.bucket_name)),
        (
            "asset",
            config.asset_id,
            lambda: probe_exists(lambda: dataplex.get_asset(name=config.asset_path)),
        ),
        (
            "aspect type",
            config.aspect_type_id,
            lambda: probe_exists(
                lambda: catalog.get_aspect_type(name=config.aspect_type_path)
            ),
        ),
    ]

    results = []
    for kind, name, probe in probes:
        found = probe()
        status = ProvisionStatus.EXISTS if found else ProvisionStatus.MISSING
        results.append(ProvisionResult(kind=kind, name=name, status=status))
    return results
