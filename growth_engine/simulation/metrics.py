"""Metrics calculator: CAGR, realized volatility, max drawdown.

A zero start value makes every ratio undefined; the results come back as
NaN instead of raising, so callers can still render the other assets.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence

import numpy as np

from growth_engine.models.asset import Asset
from growth_engine.models.results import AssetMetrics
from growth_engine.simulation.baseline import Trajectory, round_cents


def compute_asset_metrics(values: Sequence[float], years: int) -> AssetMetrics:
    """Summary statistics for one asset's yearly values (index 0..years)."""
    series = np.asarray(values[: years + 1], dtype=float)
    start_value = series[0]
    end_value = series[years]

    with np.errstate(divide="ignore", invalid="ignore"):
        cagr = (np.power(end_value / start_value, 1.0 / years) - 1) * 100

        # Simple year-over-year returns; population std (ddof=0)
        returns = np.diff(series) / series[:-1]
        volatility = np.std(returns) * 100

        # Running peak starts at the initial value; only dips below it count
        peaks = np.maximum.accumulate(series)
        drawdowns = np.where(series < peaks, (peaks - series) / peaks * 100, 0.0)
        max_drawdown = np.max(drawdowns[1:])

    return AssetMetrics(
        cagr=round_cents(float(cagr)),
        volatility=round_cents(float(volatility)),
        max_drawdown=round_cents(float(max_drawdown)),
    )


def compute_metrics(
    trajectory: Trajectory,
    assets: Mapping[str, Asset],
    years: int,
) -> dict[str, AssetMetrics]:
    """Metrics for every non-baseline asset, in asset order."""
    metrics: dict[str, AssetMetrics] = {}
    for name, asset in assets.items():
        if asset.is_baseline:
            continue
        values = [point[name] for point in trajectory]
        metrics[name] = compute_asset_metrics(values, years)
    return metrics
