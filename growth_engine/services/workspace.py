"""Scenario workspace — the current asset table and scenario config.

One process-wide instance backs the workspace API. Mutations and snapshots
are serialized by a lock; runs operate on snapshots, so an edit that lands
mid-run only affects the next run.
"""
from __future__ import annotations

import logging
import random
import threading
from typing import Any

from growth_engine.models.asset import Asset
from growth_engine.models.results import SimulationResult
from growth_engine.models.scenario import ScenarioConfig
from growth_engine.services.asset_registry import AssetRegistry
from growth_engine.simulation.engine import simulate
from growth_engine.simulation.presets import apply_preset

logger = logging.getLogger(__name__)


class ScenarioWorkspace:
    """Singleton holding the editable assets and scenario configuration."""

    _instance: "ScenarioWorkspace | None" = None

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self.assets = AssetRegistry()
        self._config = ScenarioConfig()
        self.selected_preset: str | None = None

    @classmethod
    def get(cls) -> "ScenarioWorkspace":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the singleton — mainly for testing."""
        cls._instance = None

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    @property
    def config(self) -> ScenarioConfig:
        return self._config

    def update_config(self, **changes: Any) -> ScenarioConfig:
        """Replace config fields; raises pydantic.ValidationError on bad input."""
        with self._lock:
            self._config = self._config.with_changes(**changes)
            self.selected_preset = None
            logger.info("Scenario config updated: %s", sorted(changes))
            return self._config

    def apply_preset(self, name: str) -> ScenarioConfig:
        with self._lock:
            self._config = apply_preset(self._config, name)
            self.selected_preset = name
            logger.info("Applied scenario preset %r", name)
            return self._config

    def reseed(self) -> ScenarioConfig:
        """Replace the random seed with a fresh one in 1..999999."""
        with self._lock:
            self._config = self._config.with_changes(random_seed_base=random.randint(1, 999_999))
            logger.info("Random seed set to %d", self._config.random_seed_base)
            return self._config

    def reset_to_defaults(self) -> None:
        """Restore the built-in assets and the default scenario config."""
        with self._lock:
            self.assets.reset()
            self._config = ScenarioConfig()
            self.selected_preset = None
            logger.info("Workspace reset to defaults")

    def snapshot(self) -> tuple[dict[str, Asset], ScenarioConfig]:
        with self._lock:
            return self.assets.snapshot(), self._config

    def run(self) -> SimulationResult:
        assets, config = self.snapshot()
        return simulate(assets, config)
