"""Domain models — assets, scenario configuration, and simulation results."""
from growth_engine.models.asset import Asset
from growth_engine.models.scenario import CrisisType, RecoveryType, ScenarioConfig
from growth_engine.models.results import AssetMetrics, SimulationResult

__all__ = [
    "Asset",
    "CrisisType",
    "RecoveryType",
    "ScenarioConfig",
    "AssetMetrics",
    "SimulationResult",
]
