from typing import Literal, Optional

from fastapi import APIRouter, Response
from pydantic import BaseModel, model_validator

from growth_engine.models.asset import Asset
from growth_engine.models.results import SimulationResult
from growth_engine.models.scenario import ScenarioConfig
from growth_engine.services.export import to_csv, to_excel
from growth_engine.simulation.engine import simulate

router = APIRouter(tags=["simulations"])

_XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class SimulationRequest(BaseModel):
    """Request body for a stateless run — inline assets, optional config."""
    assets: dict[str, Asset]
    config: Optional[ScenarioConfig] = None

    @model_validator(mode="after")
    def _check_asset_table(self) -> "SimulationRequest":
        if any(not name.strip() for name in self.assets):
            raise ValueError("asset names must not be empty")
        baselines = sum(1 for asset in self.assets.values() if asset.is_baseline)
        if baselines != 1:
            raise ValueError(f"exactly one baseline asset is required, got {baselines}")
        return self


@router.post("/simulations/run", response_model=SimulationResult)
def run_simulation_endpoint(request: SimulationRequest):
    """Project the given assets under the scenario.

    Returns the yearly trajectory for every asset and metrics for each
    non-baseline asset.
    """
    return simulate(request.assets, request.config or ScenarioConfig())


@router.post("/simulations/export")
def export_simulation_endpoint(request: SimulationRequest, format: Literal["csv", "xlsx"] = "csv"):
    """Run the scenario and return the trajectory as a CSV or Excel file."""
    result = simulate(request.assets, request.config or ScenarioConfig())
    if format == "xlsx":
        return Response(
            content=to_excel(result),
            media_type=_XLSX_MEDIA_TYPE,
            headers={"Content-Disposition": 'attachment; filename="trajectory.xlsx"'},
        )
    return Response(
        content=to_csv(result),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="trajectory.csv"'},
    )
