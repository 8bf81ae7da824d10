"""Crisis model — immediate drawdown, shaped recovery, and permanent damage.

For each non-baseline asset the crisis:
  1. knocks year 1 down by the asset's scaled drawdown,
  2. recovers toward a permanently reduced target over the recovery window,
     following a V/U/L-shaped curve,
  3. then grows at a damaged rate, never above the reduced target.

The permanent damage ratio is not clamped: extreme drawdown
and sensitivity combinations can push it below 0 or above 1.
"""
from __future__ import annotations

from collections.abc import Mapping

from growth_engine.models.asset import Asset
from growth_engine.models.scenario import CrisisType, RecoveryType, ScenarioConfig
from growth_engine.simulation.baseline import Trajectory, copy_trajectory
from growth_engine.simulation.drag import combined_drag

_PERMANENT_SHARE = 0.4  # share of the initial drawdown that never recovers

_RECOVERY_EXPONENTS: dict[RecoveryType, float] = {
    RecoveryType.V_SHAPED: 0.5,
    RecoveryType.U_SHAPED: 1.5,
    RecoveryType.L_SHAPED: 3.0,
}


def recovery_exponent(recovery_type: RecoveryType) -> float:
    """Exponent on normalized recovery progress; higher means slower start."""
    return _RECOVERY_EXPONENTS.get(recovery_type, _RECOVERY_EXPONENTS[RecoveryType.L_SHAPED])


def drawdown_impact_decimal(config: ScenarioConfig, asset: Asset) -> float:
    """Market drawdown scaled by the asset's impact and crisis sensitivity."""
    return (config.drawdown / 100) * asset.drawdown_impact * asset.crisis_sensitivity


def permanent_damage_ratio(
    crisis_type: CrisisType,
    impact_decimal: float,
    crisis_sensitivity: float,
) -> float:
    """Fraction of the no-crisis value still reachable after the crisis."""
    base_damage = impact_decimal * _PERMANENT_SHARE
    adjusted_damage = base_damage * crisis_sensitivity

    if crisis_type == CrisisType.RISK_OFF:
        return 0.90 - adjusted_damage
    if crisis_type == CrisisType.RISING_RATES:
        rates_sensitivity = min(1.5 * crisis_sensitivity, 1)
        return 0.85 - adjusted_damage * rates_sensitivity
    return 0.95 - adjusted_damage


def crisis_active(config: ScenarioConfig) -> bool:
    return config.enable_risk and config.crisis_type != CrisisType.NONE


def apply_crisis(
    trajectory: Trajectory,
    baseline: Trajectory,
    assets: Mapping[str, Asset],
    config: ScenarioConfig,
) -> Trajectory:
    """Apply the crisis to a drag-adjusted trajectory.

    Args:
        trajectory: Drag-adjusted values (not modified).
        baseline: Un-dragged baseline projection, used for the no-crisis
            counterfactual of each year.
        assets: Asset definitions, in trajectory column order.
        config: Scenario parameters.

    Returns:
        A new trajectory. When the crisis is disabled it is a plain copy.
    """
    scenario = copy_trajectory(trajectory)
    if not crisis_active(config):
        return scenario

    drag = combined_drag(config)
    exponent = recovery_exponent(config.recovery_type)

    for name, asset in assets.items():
        if asset.is_baseline:
            continue

        impact = drawdown_impact_decimal(config, asset)
        damage_ratio = permanent_damage_ratio(config.crisis_type, impact, asset.crisis_sensitivity)

        if config.years >= 1:
            scenario[1][name] = scenario[1][name] * (1 - impact)

        reduced_return = asset.annual_return * damage_ratio
        drawdown_value = scenario[1][name]

        for y in range(2, config.years + 1):
            no_crisis_value = baseline[y][name] / (1 + drag) ** y
            recovery_target = no_crisis_value * damage_ratio

            if y <= config.recovery_years + 1:
                progress = (y - 1) / config.recovery_years
                recovery_factor = progress ** exponent
                scenario[y][name] = min(
                    drawdown_value + (recovery_target - drawdown_value) * recovery_factor,
                    recovery_target,
                )
            else:
                value = scenario[y - 1][name] * (1 + reduced_return / 100)
                scenario[y][name] = min(value, recovery_target)

    return scenario
