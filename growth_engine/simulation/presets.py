"""Scenario presets — named crisis/volatility parameter sets.

A preset only overrides the stress fields of a ScenarioConfig; the investment
amount, horizon, fees, and inflation stay as the user set them.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass

from growth_engine.models.scenario import CrisisType, RecoveryType, ScenarioConfig


class UnknownPresetError(KeyError):
    """Raised when a preset label is not in the table."""


@dataclass(frozen=True)
class ScenarioPreset:
    """Partial ScenarioConfig override for a named scenario."""
    enable_risk: bool
    crisis_type: CrisisType
    drawdown: float
    recovery_years: float
    recovery_type: RecoveryType
    enable_volatility: bool
    volatility_level: float

    def overrides(self) -> dict:
        return asdict(self)


_PRESETS: dict[str, ScenarioPreset] = {
    "Nada": ScenarioPreset(
        enable_risk=False,
        crisis_type=CrisisType.NONE,
        drawdown=0,
        recovery_years=1,
        recovery_type=RecoveryType.V_SHAPED,
        enable_volatility=False,
        volatility_level=1,
    ),
    "Mild Recession": ScenarioPreset(
        enable_risk=True,
        crisis_type=CrisisType.RISK_OFF,
        drawdown=20,
        recovery_years=2,
        recovery_type=RecoveryType.V_SHAPED,
        enable_volatility=True,
        volatility_level=1,
    ),
    "Severe Crisis": ScenarioPreset(
        enable_risk=True,
        crisis_type=CrisisType.RISK_OFF,
        drawdown=40,
        recovery_years=4,
        recovery_type=RecoveryType.U_SHAPED,
        enable_volatility=True,
        volatility_level=1.5,
    ),
    "Rising Rates Shock": ScenarioPreset(
        enable_risk=True,
        crisis_type=CrisisType.RISING_RATES,
        drawdown=25,
        recovery_years=3,
        recovery_type=RecoveryType.L_SHAPED,
        enable_volatility=True,
        volatility_level=1.2,
    ),
    "Steady Growth": ScenarioPreset(
        enable_risk=False,
        crisis_type=CrisisType.NONE,
        drawdown=0,
        recovery_years=1,
        recovery_type=RecoveryType.V_SHAPED,
        enable_volatility=False,
        volatility_level=1,
    ),
}


def get_preset(name: str) -> ScenarioPreset:
    """Return the preset for a label; raise UnknownPresetError if missing."""
    try:
        return _PRESETS[name]
    except KeyError:
        raise UnknownPresetError(name) from None


def list_preset_names() -> list[str]:
    """Return all preset labels in display order."""
    return list(_PRESETS.keys())


def apply_preset(config: ScenarioConfig, name: str) -> ScenarioConfig:
    """Return a copy of config with the preset's stress fields replaced."""
    return config.with_changes(**get_preset(name).overrides())
