import pytest

from growth_engine.services.workspace import ScenarioWorkspace


@pytest.fixture(autouse=True)
def _fresh_workspace():
    # Each test sees the built-in assets and default config
    ScenarioWorkspace.reset_instance()
    yield
    ScenarioWorkspace.reset_instance()
