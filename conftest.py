import pytest
from fxmigrate.common import bus
from fxmigrate.test_utils import LegacyProjectFactory, SpyBus


@pytest.fixture
def project_factory(tmp_path):
    # A fresh legacy project root for each test
    return LegacyProjectFactory(tmp_path / "project")


@pytest.fixture
def spy_bus(monkeypatch):
    spy = SpyBus()
    with spy.patch(monkeypatch):
        yield spy


@pytest.fixture(autouse=True)
def _silent_bus():
    # Tests that exercise the CLI install a renderer; don't leak it.
    yield
    bus.set_renderer(None)
