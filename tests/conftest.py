import pytest

from lakeprep.schemas.lab import LabConfig


@pytest.fixture
def lab_config():
    return LabConfig(project_id="test-project", region="us-central1")
