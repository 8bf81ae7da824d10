"""Fee and inflation drag applied as an annual deflator."""
from __future__ import annotations

from collections.abc import Mapping

from growth_engine.models.asset import Asset
from growth_engine.models.scenario import ScenarioConfig
from growth_engine.simulation.baseline import Trajectory, copy_trajectory


def combined_drag(config: ScenarioConfig) -> float:
    """Annual fees plus inflation, as a decimal."""
    return (config.annual_fees + config.inflation_rate) / 100


def apply_drag(
    trajectory: Trajectory,
    assets: Mapping[str, Asset],
    config: ScenarioConfig,
) -> Trajectory:
    """Deflate year y of every non-baseline asset by (1 + drag)^y.

    Year 0 and the baseline asset are untouched. Returns a new trajectory.
    """
    drag = combined_drag(config)
    adjusted = copy_trajectory(trajectory)
    for year_index in range(1, config.years + 1):
        for name, asset in assets.items():
            if asset.is_baseline:
                continue
            adjusted[year_index][name] = adjusted[year_index][name] / (1 + drag) ** year_index
    return adjusted
