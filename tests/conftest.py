import pytest
from click.testing import CliRunner
from unittest.mock import MagicMock

from spoon.models.options import SpoonOptions


@pytest.fixture
def cli_runner():
    """Provides a Click CLI runner for testing commands."""
    return CliRunner()


@pytest.fixture
def mock_docker_client():
    """Provides a mocked Docker client."""
    mock_client = MagicMock()
    mock_client.ping.return_value = True
    mock_client.containers.list.return_value = []
    mock_client.images.list.return_value = []
    return mock_client


@pytest.fixture
def make_container():
    """Builds mock containers with a real name attribute."""
    def _make(name, container_id="abc123", status="running", ports=None):
        container = MagicMock()
        container.name = name
        container.id = container_id
        container.status = status
        container.ports = ports if ports is not None else {}
        return container
    return _make


@pytest.fixture
def options():
    """Provides options pointing at a remote engine."""
    return SpoonOptions(url="tcp://docker.example.com:2375")


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the real ~/.spoonrc."""
    config_path = tmp_path / ".spoonrc"
    monkeypatch.setattr("spoon.utils.config_manager.DEFAULT_CONFIG_PATH", config_path)
    monkeypatch.delenv("DOCKER_HOST", raising=False)
    return config_path


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo the root logger setup done by the CLI."""
    import logging

    from spoon.cli import helpers

    root = logging.getLogger()
    level = root.level
    yield
    if helpers._log_handler is not None:
        root.removeHandler(helpers._log_handler)
        helpers._log_handler = None
    root.setLevel(level)
