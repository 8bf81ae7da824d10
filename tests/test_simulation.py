"""Tests for the projection pipeline — baseline, drag, crisis, volatility, metrics."""
import math

import pytest

from growth_engine.models.asset import Asset
from growth_engine.models.scenario import CrisisType, RecoveryType, ScenarioConfig
from growth_engine.simulation.baseline import copy_trajectory, project_baseline, round_cents
from growth_engine.simulation.crisis import (
    apply_crisis,
    drawdown_impact_decimal,
    permanent_damage_ratio,
    recovery_exponent,
)
from growth_engine.simulation.drag import apply_drag, combined_drag
from growth_engine.simulation.engine import simulate
from growth_engine.simulation.metrics import compute_asset_metrics
from growth_engine.simulation.rng import generate_random_factors
from growth_engine.simulation.volatility import apply_volatility

BASELINE = "Baseline (No Scenario)"


def _make_assets(**overrides) -> dict[str, Asset]:
    spx = dict(
        annual_return=7,
        volatility=0.15,
        drawdown_impact=1.0,
        crisis_sensitivity=1.0,
    )
    spx.update(overrides)
    return {
        BASELINE: Asset(is_baseline=True, color="#000000"),
        "SPX": Asset(**spx),
    }


def _make_config(**overrides) -> ScenarioConfig:
    defaults = dict(
        initial_amount=100_000,
        years=5,
        annual_fees=0,
        inflation_rate=0,
        enable_risk=False,
        enable_volatility=False,
    )
    defaults.update(overrides)
    return ScenarioConfig(**defaults)


def _crisis_config(**overrides) -> ScenarioConfig:
    params = dict(
        enable_risk=True,
        crisis_type=CrisisType.RISK_OFF,
        drawdown=20,
        recovery_years=2,
        recovery_type=RecoveryType.V_SHAPED,
    )
    params.update(overrides)
    return _make_config(**params)


# --- Baseline projector ---


def test_baseline_year_zero_is_initial_amount():
    traj = project_baseline(_make_assets(), _make_config())
    assert traj[0] == {BASELINE: 100_000, "SPX": 100_000}


def test_baseline_compounds_and_rounds():
    traj = project_baseline(_make_assets(), _make_config())
    assert len(traj) == 6
    assert traj[1]["SPX"] == 107_000.0
    assert traj[5]["SPX"] == 140_255.17


def test_baseline_asset_is_flat():
    traj = project_baseline(_make_assets(), _make_config(years=10))
    assert all(point[BASELINE] == 100_000 for point in traj)


def test_copy_trajectory_does_not_alias():
    traj = project_baseline(_make_assets(), _make_config())
    copy = copy_trajectory(traj)
    copy[1]["SPX"] = 0.0
    assert traj[1]["SPX"] == 107_000.0


# --- Drag adjuster ---


def test_combined_drag():
    assert combined_drag(_make_config(annual_fees=1, inflation_rate=2)) == pytest.approx(0.03)


def test_drag_deflates_non_baseline_only():
    config = _make_config(annual_fees=1, inflation_rate=2)
    assets = _make_assets()
    baseline = project_baseline(assets, config)
    dragged = apply_drag(baseline, assets, config)
    assert dragged[0]["SPX"] == 100_000
    for y in range(1, 6):
        assert dragged[y]["SPX"] == pytest.approx(baseline[y]["SPX"] / 1.03 ** y)
        assert dragged[y][BASELINE] == 100_000
    # Input untouched
    assert baseline[1]["SPX"] == 107_000.0


def test_zero_drag_is_identity():
    config = _make_config()
    assets = _make_assets()
    baseline = project_baseline(assets, config)
    assert apply_drag(baseline, assets, config) == baseline


# --- Crisis model ---


def test_drawdown_impact_decimal():
    asset = Asset(annual_return=6, drawdown_impact=0.7, crisis_sensitivity=0.8)
    assert drawdown_impact_decimal(_crisis_config(drawdown=40), asset) == pytest.approx(0.4 * 0.7 * 0.8)


def test_permanent_damage_ratio_risk_off():
    assert permanent_damage_ratio(CrisisType.RISK_OFF, 0.20, 1.0) == pytest.approx(0.82)


def test_permanent_damage_ratio_rising_rates():
    # ratesSensitivity = min(1.5 * 0.5, 1) = 0.75
    ratio = permanent_damage_ratio(CrisisType.RISING_RATES, 0.125, 0.5)
    assert ratio == pytest.approx(0.85 - 0.125 * 0.4 * 0.5 * 0.75)


def test_permanent_damage_ratio_rising_rates_caps_sensitivity_at_one():
    ratio = permanent_damage_ratio(CrisisType.RISING_RATES, 0.3, 1.2)
    assert ratio == pytest.approx(0.85 - 0.3 * 0.4 * 1.2 * 1.0)


def test_permanent_damage_ratio_fallback():
    assert permanent_damage_ratio(CrisisType.NONE, 0.2, 1.0) == pytest.approx(0.95 - 0.08)


def test_permanent_damage_ratio_is_not_clamped():
    # drawdown 50%, impact 2.0, sensitivity 2.0 -> impact decimal 2.0
    ratio = permanent_damage_ratio(CrisisType.RISK_OFF, 2.0, 2.0)
    assert ratio == pytest.approx(0.90 - 1.6)
    assert ratio < 0


def test_recovery_exponents():
    assert recovery_exponent(RecoveryType.V_SHAPED) == 0.5
    assert recovery_exponent(RecoveryType.U_SHAPED) == 1.5
    assert recovery_exponent(RecoveryType.L_SHAPED) == 3.0


def test_crisis_disabled_is_plain_copy():
    assets = _make_assets()
    config = _make_config(crisis_type=CrisisType.RISK_OFF, drawdown=30)
    baseline = project_baseline(assets, config)
    assert apply_crisis(baseline, baseline, assets, config) == baseline


def test_crisis_type_none_is_noop_even_when_enabled():
    assets = _make_assets()
    config = _make_config(enable_risk=True, crisis_type=CrisisType.NONE, drawdown=30)
    baseline = project_baseline(assets, config)
    assert apply_crisis(baseline, baseline, assets, config) == baseline


def test_crisis_risk_off_path():
    assets = _make_assets()
    config = _crisis_config()
    baseline = project_baseline(assets, config)
    scenario = apply_crisis(apply_drag(baseline, assets, config), baseline, assets, config)
    values = [p["SPX"] for p in scenario]
    ratio = 0.90 - 0.20 * 0.4

    assert values[0] == 100_000
    assert values[1] == pytest.approx(107_000 * 0.80)

    drawdown_value = values[1]
    target2 = baseline[2]["SPX"] * ratio
    assert values[2] == pytest.approx(drawdown_value + (target2 - drawdown_value) * math.sqrt(0.5))
    # progress hits 1.0 at the end of the window
    assert values[3] == pytest.approx(baseline[3]["SPX"] * ratio)
    # Post-recovery growth at the damaged rate
    reduced = 7 * ratio
    assert values[4] == pytest.approx(values[3] * (1 + reduced / 100))
    assert values[5] == pytest.approx(values[4] * (1 + reduced / 100))
    assert scenario[3][BASELINE] == 100_000


def test_crisis_post_recovery_capped_at_target():
    # A falling asset loses less per year at the damaged rate (-9%) than its
    # counterfactual does (-10%), so the target ceiling takes over.
    assets = _make_assets(annual_return=-10, drawdown_impact=0.0)
    config = _crisis_config(years=8, recovery_years=1)
    baseline = project_baseline(assets, config)
    scenario = apply_crisis(baseline, baseline, assets, config)
    for y in range(2, 9):
        target = baseline[y]["SPX"] * 0.90
        assert scenario[y]["SPX"] <= target
        assert scenario[y]["SPX"] == pytest.approx(target)


def test_crisis_fractional_recovery_window():
    # recovery_years = 1.5 -> window is y <= 2.5, so only year 2 recovers
    assets = _make_assets()
    config = _crisis_config(recovery_years=1.5, recovery_type=RecoveryType.U_SHAPED)
    baseline = project_baseline(assets, config)
    scenario = apply_crisis(baseline, baseline, assets, config)
    ratio = 0.82
    dd = scenario[1]["SPX"]
    target2 = baseline[2]["SPX"] * ratio
    assert scenario[2]["SPX"] == pytest.approx(dd + (target2 - dd) * (1 / 1.5) ** 1.5)
    target3 = baseline[3]["SPX"] * ratio
    expected3 = min(scenario[2]["SPX"] * (1 + 7 * ratio / 100), target3)
    assert scenario[3]["SPX"] == pytest.approx(expected3)


def test_crisis_single_year_only_shocks():
    assets = _make_assets()
    config = _crisis_config(years=1, recovery_years=1)
    baseline = project_baseline(assets, config)
    scenario = apply_crisis(baseline, baseline, assets, config)
    assert len(scenario) == 2
    assert scenario[1]["SPX"] == pytest.approx(107_000 * 0.8)


def test_crisis_zero_sensitivity_means_no_shock():
    assets = _make_assets(crisis_sensitivity=0.0)
    config = _crisis_config()
    baseline = project_baseline(assets, config)
    scenario = apply_crisis(baseline, baseline, assets, config)
    assert scenario[1]["SPX"] == baseline[1]["SPX"]


def test_extreme_crisis_goes_negative_without_clamping():
    assets = _make_assets(drawdown_impact=2.0, crisis_sensitivity=2.0)
    config = _crisis_config(drawdown=50)
    baseline = project_baseline(assets, config)
    scenario = apply_crisis(baseline, baseline, assets, config)
    # 1 - impact decimal (2.0) = -1
    assert scenario[1]["SPX"] == pytest.approx(-107_000)
    assert all(math.isfinite(p["SPX"]) for p in scenario)


# --- Volatility injector ---


def test_volatility_applies_factors_and_rounds():
    assets = _make_assets()
    config = _make_config()
    baseline = project_baseline(assets, config)
    factors = {BASELINE: [0.0] * 6, "SPX": [0.5, 0.1, -0.1, 0.0, 0.012345, 0.2]}
    noisy = apply_volatility(baseline, assets, factors)
    assert noisy[0]["SPX"] == 100_000
    assert noisy[1]["SPX"] == round_cents(107_000 * 1.1)
    assert noisy[2]["SPX"] == round_cents(baseline[2]["SPX"] * 0.9)
    assert noisy[4]["SPX"] == round_cents(baseline[4]["SPX"] * (1 + 0.012345))
    assert noisy[3][BASELINE] == 100_000


# --- Metrics ---


def test_metrics_monotonic_series():
    m = compute_asset_metrics([100.0, 110.0, 121.0], 2)
    assert m.cagr == 10.0
    assert m.volatility == 0.0
    assert m.max_drawdown == 0.0


def test_metrics_drawdown_and_volatility():
    values = [100.0, 80.0, 120.0, 90.0]
    m = compute_asset_metrics(values, 3)
    returns = [-0.2, 0.5, -0.25]
    mean = sum(returns) / 3
    std = math.sqrt(sum((r - mean) ** 2 for r in returns) / 3)
    assert m.volatility == round_cents(std * 100)
    # Peak 120 -> 90 is 25%, deeper than 100 -> 80
    assert m.max_drawdown == 25.0
    assert m.cagr == round_cents(((90 / 100) ** (1 / 3) - 1) * 100)


def test_metrics_zero_start_is_nan():
    m = compute_asset_metrics([0.0, 0.0, 0.0], 2)
    assert math.isnan(m.cagr)
    assert math.isnan(m.volatility)
    assert m.max_drawdown == 0.0


# --- Orchestrator ---


def test_simulate_no_risk_end_to_end():
    assets = {BASELINE: Asset(is_baseline=True), "Stock": Asset(annual_return=7)}
    result = simulate(assets, _make_config())
    assert len(result.trajectory) == 6
    assert result.trajectory[5]["Stock"] == 140_255.17
    assert set(result.metrics) == {"Stock"}
    assert result.metrics["Stock"].cagr == 7.0
    assert result.metrics["Stock"].max_drawdown == 0.0


def test_simulate_crisis_end_to_end():
    result = simulate(_make_assets(), _crisis_config())
    assert result.trajectory[1]["SPX"] == pytest.approx(85_600)
    # 100,000 -> 85,600 is the deepest dip below the running peak
    assert result.metrics["SPX"].max_drawdown == 14.4
    assert result.trajectory[5][BASELINE] == 100_000


def test_simulate_volatility_uses_seeded_factors():
    assets = _make_assets()
    config = _make_config(enable_volatility=True, random_seed_base=123)
    result = simulate(assets, config)
    factors = generate_random_factors(assets, 5, 1.0, 123)
    baseline = project_baseline(assets, config)
    for y in range(1, 6):
        assert result.trajectory[y]["SPX"] == round_cents(baseline[y]["SPX"] * (1 + factors["SPX"][y]))


def test_simulate_reproducible():
    config = _crisis_config(enable_volatility=True, random_seed_base=99)
    r1 = simulate(_make_assets(), config)
    r2 = simulate(_make_assets(), config)
    assert r1.trajectory == r2.trajectory
    assert r1.metrics == r2.metrics


def test_simulate_does_not_mutate_input_mapping():
    assets = _make_assets()
    before = dict(assets)
    simulate(assets, _crisis_config(enable_volatility=True))
    assert assets == before
    assert list(assets) == list(before)


def test_simulate_survives_zero_uniform_draw():
    # The stream steps to state 1 on the second normal's first uniform
    config = _make_config(enable_volatility=True, random_seed_base=1207672015)
    result = simulate(_make_assets(), config)
    assert math.isinf(result.trajectory[1]["SPX"])
    assert result.trajectory[1][BASELINE] == 100_000
    assert len(result.trajectory) == 6


def test_simulate_zero_draw_in_unused_year_zero_slot():
    config = _make_config(enable_volatility=True, random_seed_base=1407677000)
    result = simulate(_make_assets(), config)
    assert result.trajectory[0]["SPX"] == 100_000
    assert all(math.isfinite(p["SPX"]) for p in result.trajectory)


# --- Cent rounding ---


@pytest.mark.parametrize("value, expected", [
    (100.125, 100.13),
    (-100.125, -100.13),
    (0.125, 0.13),
    (2.675, 2.67),  # binary value sits just below the tie
    (107_000.0, 107_000.0),
])
def test_round_cents_rounds_ties_away_from_zero(value, expected):
    assert round_cents(value) == expected


def test_round_cents_passes_non_finite_through():
    assert round_cents(math.inf) == math.inf
    assert math.isnan(round_cents(math.nan))


def test_baseline_rounds_exact_tie_up():
    traj = project_baseline(_make_assets(), _make_config(initial_amount=100.125, years=1))
    assert traj[0]["SPX"] == 100.13
    assert traj[0][BASELINE] == 100.13
