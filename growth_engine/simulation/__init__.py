"""Simulation engine — seeded noise, projection stages, metrics, and presets."""
from growth_engine.simulation.presets import (
    ScenarioPreset,
    UnknownPresetError,
    apply_preset,
    get_preset,
    list_preset_names,
)
from growth_engine.simulation.rng import generate_random_factors, next_normal, next_uniform
from growth_engine.simulation.metrics import compute_asset_metrics, compute_metrics
from growth_engine.simulation.engine import simulate

__all__ = [
    "ScenarioPreset",
    "UnknownPresetError",
    "apply_preset",
    "get_preset",
    "list_preset_names",
    "generate_random_factors",
    "next_normal",
    "next_uniform",
    "compute_asset_metrics",
    "compute_metrics",
    "simulate",
]
