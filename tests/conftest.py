"""Shared pytest fixtures for all tests."""

import pytest

from config import Config
from models.session import Session
from services.base import Services
from tests.helpers import FakeBackend, make_record


@pytest.fixture
def test_config(tmp_path):
    """Create a test configuration pointing at a dummy backend.

    Args:
        tmp_path: pytest tmp_path fixture for temporary directory.

    Returns:
        Config: Test configuration object.
    """
    return Config(
        base_dir=tmp_path / "catsync",
        base_url="http://backend.test/catagory.php",
        timeout=2.0,
        device_type="web",
        username="tester",
        log_level="DEBUG",
        log_dir=tmp_path / "catsync" / "logs",
    )


@pytest.fixture
def session():
    return Session(username="tester", device_type="web")


@pytest.fixture
def backend():
    """Fake backend listing three categories."""
    return FakeBackend(
        [
            make_record(1, "Food"),
            make_record(2, "Transport"),
            make_record(3, "Utilities"),
        ]
    )


@pytest.fixture
def services(test_config, backend):
    """Create a Services container wired to the fake backend.

    Args:
        test_config: Test configuration fixture.
        backend: Fake backend fixture.

    Returns:
        Services: Services container for testing.
    """
    return Services(test_config, backend=backend)


@pytest.fixture
def loaded(services):
    """Services whose category page has already been loaded."""
    assert services.forms.load()
    return services
