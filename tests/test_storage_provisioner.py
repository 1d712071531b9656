import pytest
from google.api_core import exceptions

from lakeprep.errors import ProvisionError
from lakeprep.provisioners.storage import ensure_bucket
from lakeprep.schemas.results import ProvisionStatus


@pytest.fixture
def mock_storage(mocker):
    mock_get = mocker.patch("lakeprep.provisioners.storage.get_storage_client")
    return mock_get.return_value


def test_bucket_exists(mock_storage, lab_config):
    mock_storage.lookup_bucket.return_value = object()

    result = ensure_bucket(lab_config)

    assert result.status == ProvisionStatus.EXISTS
    mock_storage.lookup_bucket.assert_called_once_with("test-project")
    mock_storage.create_bucket.assert_not_called()


def test_bucket_created_in_region(mock_storage, lab_config):
    mock_storage.lookup_bucket.return_value = None

    result = ensure_bucket(lab_config)

    assert result.status == ProvisionStatus.CREATED
    mock_storage.create_bucket.assert_called_once_with(
        "test-project", project="test-project", location="us-central1"
    )


def test_bucket_rest_fallback(mocker, mock_storage, lab_config):
    mock_storage.lookup_bucket.return_value = None
    mock_storage.create_bucket.side_effect = exceptions.ServiceUnavailable("503")
    mock_post = mocker.patch(
        "lakeprep.provisioners.storage.rest.post_json", return_value={}
    )

    result = ensure_bucket(lab_config)

    assert result.status == ProvisionStatus.CREATED_FALLBACK
    mock_post.assert_called_once_with(
        "https://storage.googleapis.com/storage/v1/b",
        {"name": "test-project", "location": "us-central1"},
        params={"project": "test-project"},
    )


def test_bucket_conflict_is_existing(mock_storage, lab_config):
    mock_storage.lookup_bucket.side_effect = exceptions.Forbidden("403")
    mock_storage.create_bucket.side_effect = exceptions.Conflict("409")

    result = ensure_bucket(lab_config)

    assert result.status == ProvisionStatus.EXISTS


def test_bucket_taken_by_another_project(mocker, mock_storage, lab_config):
    mock_storage.lookup_bucket.side_effect = exceptions.Forbidden("403")
    mock_storage.create_bucket.side_effect = exceptions.Conflict(
        "The requested bucket name is not available."
    )
    mock_storage.get_bucket.side_effect = exceptions.Forbidden("403")
    mock_post = mocker.patch("lakeprep.provisioners.storage.rest.post_json")

    with pytest.raises(ProvisionError, match="another project"):
        ensure_bucket(lab_config)

    mock_storage.get_bucket.assert_called_once_with("test-project")
    mock_post.assert_not_called()


def test_bucket_fallback_conflict_checks_ownership(mocker, mock_storage, lab_config):
    mock_storage.lookup_bucket.return_value = None
    mock_storage.create_bucket.side_effect = exceptions.ServiceUnavailable("503")
    mock_storage.get_bucket.side_effect = exceptions.Forbidden("403")
    mocker.patch(
        "lakeprep.provisioners.storage.rest.post_json",
        side_effect=exceptions.Conflict("409"),
    )

    with pytest.raises(ProvisionError, match="another project"):
        ensure_bucket(lab_config)
