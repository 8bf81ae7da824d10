from growth_engine.services.workspace import ScenarioWorkspace


def get_workspace() -> ScenarioWorkspace:
    """FastAPI dependency returning the process-wide scenario workspace."""
    return ScenarioWorkspace.get()
