from __future__ import annotations

from collections.abc import Mapping

from growth_engine.models.asset import Asset
from growth_engine.simulation.baseline import Trajectory, copy_trajectory, round_cents


def apply_volatility(
    trajectory: Trajectory,
    assets: Mapping[str, Asset],
    random_factors: Mapping[str, list[float]],
) -> Trajectory:
    """Scale years 1..N of each non-baseline asset by (1 + factor[y]).

    Results are rounded to cents. Returns a new trajectory.
    """
    noisy = copy_trajectory(trajectory)
    for year_index in range(1, len(noisy)):
        for name, asset in assets.items():
            if asset.is_baseline:
                continue
            noisy[year_index][name] = round_cents(
                noisy[year_index][name] * (1 + random_factors[name][year_index])
            )
    return noisy
