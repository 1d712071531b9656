import io

import pytest
from google.api_core import exceptions
from rich.console import Console

from lakeprep.errors import ProvisionError
from lakeprep.modes.setup import run_setup
from lakeprep.schemas.results import ProvisionResult, ProvisionStatus

STEPS = [
    ("lakeprep.provisioners.services.enable_apis", "apis"),
    ("lakeprep.provisioners.dataplex.ensure_lake", "lake"),
    ("lakeprep.provisioners.dataplex.ensure_zone", "zone"),
    ("lakeprep.provisioners.storage.ensure_bucket", "bucket"),
    ("lakeprep.provisioners.dataplex.ensure_asset", "asset"),
    ("lakeprep.provisioners.aspects.ensure_aspect_type", "aspect type"),
    ("lakeprep.provisioners.aspects.attach_aspect", "aspect"),
]


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=120)


@pytest.fixture
def step_mocks(mocker):
    calls = []
    mocks = {}
    for target, kind in STEPS:

        def record(config, kind=kind):
            calls.append(kind)
            return ProvisionResult(
                kind=kind, name=kind, status=ProvisionStatus.CREATED
            )

        mocks[kind] = mocker.patch(target, side_effect=record)
    return calls, mocks


def test_run_setup_order(step_mocks, console, lab_config):
    calls, _ = step_mocks

    results = run_setup(lab_config, console)

    assert calls == [kind for _, kind in STEPS]
    assert len(results) == 7
    output = console.file.getvalue()
    assert "[1/7] Enabling required APIs" in output
    assert "[7/7] Attaching aspect to zone" in output


def test_enable_failure_stops_run(step_mocks, console, lab_config):
    calls, mocks = step_mocks
    mocks["apis"].side_effect = ProvisionError("apis", "dataplex", "denied")

    with pytest.raises(ProvisionError):
        run_setup(lab_config, console)

    for kind in ("lake", "zone", "bucket", "asset", "aspect type", "aspect"):
        mocks[kind].assert_not_called()


def test_failure_midway_skips_remaining_steps(step_mocks, console, lab_config):
    calls, mocks = step_mocks
    mocks["bucket"].side_effect = ProvisionError("bucket", "b", "all paths failed")

    with pytest.raises(ProvisionError):
        run_setup(lab_config, console)

    assert calls == ["apis", "lake", "zone"]
    mocks["asset"].assert_not_called()
    mocks["aspect"].assert_not_called()


@pytest.fixture
def cloud(mocker):
    """Patches every Google client used by the provisioners."""
    usage = mocker.patch(
        "lakeprep.provisioners.services.get_serviceusage_client"
    ).return_value
    usage.services.return_value.batchEnable.return_value.execute.return_value = {
        "name": "operations/enable",
        "done": True,
    }
    dataplex = mocker.patch(
        "lakeprep.provisioners.dataplex.get_dataplex_client"
    ).return_value
    storage = mocker.patch(
        "lakeprep.provisioners.storage.get_storage_client"
    ).return_value
    catalog = mocker.patch(
        "lakeprep.provisioners.aspects.get_catalog_client"
    ).return_value
    post = mocker.patch("lakeprep.rest.post_json")
    return {
        "dataplex": dataplex,
        "storage": storage,
        "catalog": catalog,
        "post": post,
    }


def test_fresh_project_creates_everything(cloud, console, lab_config):
    not_found = exceptions.NotFound("missing")
    cloud["dataplex"].get_lake.side_effect = not_found
    cloud["dataplex"].get_zone.side_effect = not_found
    cloud["dataplex"].get_asset.side_effect = not_found
    cloud["catalog"].get_aspect_type.side_effect = not_found
    cloud["storage"].lookup_bucket.return_value = None
    cloud["post"].return_value = {"name": f"{lab_config.zone_path}/aspects/a"}

    results = run_setup(lab_config, console)

    statuses = {r.kind: r.status for r in results}
    assert statuses == {
        "apis": ProvisionStatus.ENABLED,
        "lake": ProvisionStatus.CREATED,
        "zone": ProvisionStatus.CREATED,
        "bucket": ProvisionStatus.CREATED,
        "asset": ProvisionStatus.CREATED,
        "aspect type": ProvisionStatus.CREATED,
        "aspect": ProvisionStatus.ATTACHED,
    }
    cloud["dataplex"].create_lake.assert_called_once()
    cloud["dataplex"].create_zone.assert_called_once()
    cloud["dataplex"].create_asset.assert_called_once()
    cloud["storage"].create_bucket.assert_called_once()
    cloud["catalog"].create_aspect_type.assert_called_once()


def test_second_run_is_a_no_op(cloud, console, lab_config):
    # Every getter answers, so every probe reports the resource as present
    cloud["storage"].lookup_bucket.return_value = object()
    cloud["post"].side_effect = exceptions.Conflict("aspect already attached")

    results = run_setup(lab_config, console)

    assert all(
        r.status == ProvisionStatus.EXISTS for r in results if r.kind != "apis"
    )
    cloud["dataplex"].create_lake.assert_not_called()
    cloud["dataplex"].create_zone.assert_not_called()
    cloud["dataplex"].create_asset.assert_not_called()
    cloud["storage"].create_bucket.assert_not_called()
    cloud["catalog"].create_aspect_type.assert_not_called()
    # Only the aspect attachment POST is issued
    cloud["post"].assert_called_once()


def test_fallback_success_continues_run(cloud, console, lab_config):
    cloud["dataplex"].get_lake.side_effect = exceptions.NotFound("missing")
    cloud["dataplex"].create_lake.side_effect = exceptions.InvalidArgument("bad")
    cloud["storage"].lookup_bucket.return_value = object()
    cloud["post"].side_effect = [
        {"name": f"{lab_config.location_path}/operations/lake", "done": True},
        {"name": f"{lab_config.zone_path}/aspects/a"},
    ]

    results = run_setup(lab_config, console)

    statuses = {r.kind: r.status for r in results}
    assert statuses["lake"] == ProvisionStatus.CREATED_FALLBACK
    assert statuses["aspect"] == ProvisionStatus.ATTACHED
    assert len(results) == 7
