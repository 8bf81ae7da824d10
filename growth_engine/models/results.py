import math
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_serializer
from pydantic.alias_generators import to_camel

from growth_engine.models.scenario import ScenarioConfig


class AssetMetrics(BaseModel):
    """Summary statistics for one asset's finished trajectory, in percent.

    Values are NaN when the start value is zero; JSON output carries them
    as null.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    cagr: float
    volatility: float
    max_drawdown: float

    @field_serializer("cagr", "volatility", "max_drawdown", when_used="json")
    def _non_finite_as_null(self, value: float) -> Optional[float]:
        return value if math.isfinite(value) else None


class SimulationResult(BaseModel):
    """Atomic output of one pipeline run.

    trajectory[y] maps asset name to value for year y (0..years).
    metrics excludes the baseline asset. Non-finite values reach JSON as null.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    trajectory: list[dict[str, float]]
    metrics: dict[str, AssetMetrics]
    config: ScenarioConfig
    computed_at: datetime

    @field_serializer("trajectory", when_used="json")
    def _trajectory_non_finite_as_null(self, trajectory: list[dict[str, float]]) -> list[dict[str, Optional[float]]]:
        return [
            {name: value if math.isfinite(value) else None for name, value in point.items()}
            for point in trajectory
        ]
