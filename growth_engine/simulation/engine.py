"""Scenario engine — runs the full projection pipeline for one configuration.

Baseline -> Drag -> Crisis (if enabled) -> Volatility (if enabled) -> Metrics.
Every call recomputes from scratch; nothing is cached between runs except
the seeded noise table.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timezone

from growth_engine.models.asset import Asset
from growth_engine.models.results import SimulationResult
from growth_engine.models.scenario import ScenarioConfig
from growth_engine.simulation.baseline import project_baseline
from growth_engine.simulation.crisis import apply_crisis, crisis_active
from growth_engine.simulation.drag import apply_drag
from growth_engine.simulation.metrics import compute_metrics
from growth_engine.simulation.rng import generate_random_factors
from growth_engine.simulation.volatility import apply_volatility

logger = logging.getLogger(__name__)


def simulate(assets: Mapping[str, Asset], config: ScenarioConfig) -> SimulationResult:
    """Project every asset under the scenario and summarize the result.

    The asset mapping is snapshotted on entry, so later edits by the caller
    cannot leak into this run. Iteration order of the mapping decides which
    slice of the seeded stream each asset receives.
    """
    assets = dict(assets)
    logger.debug(
        "Simulating %d assets over %d years (crisis=%s, volatility=%s)",
        len(assets), config.years, config.crisis_type.value if crisis_active(config) else "off",
        config.enable_volatility,
    )

    baseline = project_baseline(assets, config)
    scenario = apply_drag(baseline, assets, config)
    scenario = apply_crisis(scenario, baseline, assets, config)

    if config.enable_volatility:
        factors = generate_random_factors(
            assets, config.years, config.volatility_level, config.random_seed_base,
        )
        scenario = apply_volatility(scenario, assets, factors)

    metrics = compute_metrics(scenario, assets, config.years)

    return SimulationResult(
        trajectory=scenario,
        metrics=metrics,
        config=config,
        computed_at=datetime.now(timezone.utc),
    )
