"""Seeded random stream — Lehmer (Park–Miller) uniforms and Box–Muller normals.

State is threaded explicitly through every call so identical seeds reproduce
identical streams, independent of any global random state.
"""
from __future__ import annotations

import math
from collections.abc import Mapping
from functools import lru_cache

from growth_engine.models.asset import Asset

_MULTIPLIER = 16807
_MODULUS = 2147483647


def next_uniform(state: int) -> tuple[float, int]:
    """Advance the stream one step; return (value in [0, 1), new state)."""
    new_state = (state * _MULTIPLIER) % _MODULUS
    return (new_state - 1) / (_MODULUS - 1), new_state


def next_normal(state: int) -> tuple[float, int]:
    """Draw one standard-normal deviate, consuming two uniforms."""
    u1, state = next_uniform(state)
    u2, state = next_uniform(state)
    # A state of 1 yields u1 == 0; the radius is then unbounded rather than an error
    radius = math.sqrt(-2.0 * math.log(u1)) if u1 > 0 else math.inf
    return radius * math.cos(2.0 * math.pi * u2), state


@lru_cache(maxsize=128)
def _factor_table(
    seed: int,
    years: int,
    volatility_level: float,
    asset_key: tuple[tuple[str, float, bool], ...],
) -> tuple[tuple[float, ...], ...]:
    state = seed
    table = []
    for _name, volatility, is_baseline in asset_key:
        if is_baseline:
            table.append((0.0,) * (years + 1))
            continue
        row = []
        for _ in range(years + 1):
            z, state = next_normal(state)
            row.append(z * volatility * volatility_level)
        table.append(tuple(row))
    return tuple(table)


def generate_random_factors(
    assets: Mapping[str, Asset],
    years: int,
    volatility_level: float,
    seed: int,
) -> dict[str, list[float]]:
    """Per-asset yearly noise factors, indexed 0..years.

    Assets are walked in insertion order against a single stream, so the
    ordering of the mapping is part of the result. Baseline assets get zeros
    and consume no draws.
    """
    asset_key = tuple(
        (name, asset.volatility, asset.is_baseline) for name, asset in assets.items()
    )
    table = _factor_table(seed, years, volatility_level, asset_key)
    return {name: list(row) for (name, _, _), row in zip(asset_key, table)}
