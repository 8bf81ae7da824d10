"""Baseline projector — stress-free nominal compounding per asset."""
from __future__ import annotations

import math
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal

from growth_engine.models.asset import Asset
from growth_engine.models.scenario import ScenarioConfig

Trajectory = list[dict[str, float]]

_CENT = Decimal("0.01")


def round_cents(value: float) -> float:
    """Round to 2 decimals, ties away from zero on the exact binary value.

    Non-finite values pass through unchanged.
    """
    if not math.isfinite(value):
        return value
    return float(Decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP))


def project_baseline(assets: Mapping[str, Asset], config: ScenarioConfig) -> Trajectory:
    """Compound each asset's annual return over years 0..config.years.

    Compounding is iterative (value *= 1 + r) rather than closed-form, and every
    value is rounded to cents as it is stored. The baseline asset stays at the
    initial amount.
    """
    trajectory: Trajectory = []
    for year_index in range(config.years + 1):
        point: dict[str, float] = {}
        for name, asset in assets.items():
            if asset.is_baseline:
                point[name] = round_cents(config.initial_amount)
                continue
            value = config.initial_amount
            for _ in range(year_index):
                value *= 1 + asset.annual_return / 100
            point[name] = round_cents(value)
        trajectory.append(point)
    return trajectory


def copy_trajectory(trajectory: Trajectory) -> Trajectory:
    """Structural copy: a new dict per year, so stages never alias."""
    return [dict(point) for point in trajectory]
