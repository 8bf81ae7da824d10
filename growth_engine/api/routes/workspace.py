from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from growth_engine.api.deps import get_workspace
from growth_engine.models.asset import Asset
from growth_engine.models.results import SimulationResult
from growth_engine.models.scenario import CrisisType, RecoveryType, ScenarioConfig
from growth_engine.services.asset_registry import (
    AssetNotFoundError,
    BaselineAssetError,
    DuplicateAssetNameError,
    InvalidAssetNameError,
)
from growth_engine.services.workspace import ScenarioWorkspace
from growth_engine.simulation.presets import UnknownPresetError

router = APIRouter(tags=["workspace"])


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WorkspaceState(_CamelModel):
    assets: dict[str, Asset]
    config: ScenarioConfig
    selected_preset: Optional[str] = None


class ConfigUpdate(_CamelModel):
    """Partial config change; ranges are checked when merged."""
    initial_amount: Optional[float] = None
    years: Optional[int] = None
    annual_fees: Optional[float] = None
    inflation_rate: Optional[float] = None
    enable_risk: Optional[bool] = None
    crisis_type: Optional[CrisisType] = None
    drawdown: Optional[float] = None
    recovery_years: Optional[float] = None
    recovery_type: Optional[RecoveryType] = None
    enable_volatility: Optional[bool] = None
    volatility_level: Optional[float] = None
    random_seed_base: Optional[int] = None


class AssetUpdate(_CamelModel):
    annual_return: Optional[float] = None
    volatility: Optional[float] = None
    drawdown_impact: Optional[float] = None
    crisis_sensitivity: Optional[float] = None
    color: Optional[str] = None


class RenameRequest(_CamelModel):
    new_name: str


def _state(workspace: ScenarioWorkspace) -> WorkspaceState:
    assets, config = workspace.snapshot()
    return WorkspaceState(assets=assets, config=config, selected_preset=workspace.selected_preset)


@router.get("/workspace", response_model=WorkspaceState)
def get_workspace_state(workspace: ScenarioWorkspace = Depends(get_workspace)):
    return _state(workspace)


@router.patch("/workspace/config", response_model=ScenarioConfig)
def update_workspace_config(update: ConfigUpdate, workspace: ScenarioWorkspace = Depends(get_workspace)):
    try:
        return workspace.update_config(**update.model_dump(exclude_unset=True))
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/workspace/presets/{name}", response_model=ScenarioConfig)
def apply_workspace_preset(name: str, workspace: ScenarioWorkspace = Depends(get_workspace)):
    try:
        return workspace.apply_preset(name)
    except UnknownPresetError:
        raise HTTPException(status_code=404, detail=f"Unknown preset '{name}'")
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/workspace/reseed", response_model=ScenarioConfig)
def reseed_workspace(workspace: ScenarioWorkspace = Depends(get_workspace)):
    return workspace.reseed()


@router.post("/workspace/reset", response_model=WorkspaceState)
def reset_workspace(workspace: ScenarioWorkspace = Depends(get_workspace)):
    workspace.reset_to_defaults()
    return _state(workspace)


@router.post("/workspace/run", response_model=SimulationResult)
def run_workspace(workspace: ScenarioWorkspace = Depends(get_workspace)):
    return workspace.run()


# --- Assets ---


@router.get("/workspace/assets", response_model=dict[str, Asset])
def list_workspace_assets(workspace: ScenarioWorkspace = Depends(get_workspace)):
    return workspace.snapshot()[0]


@router.post("/workspace/assets", status_code=201)
def add_workspace_asset(workspace: ScenarioWorkspace = Depends(get_workspace)):
    with workspace.lock:
        name = workspace.assets.add()
        asset = workspace.assets.get(name)
    return {"name": name, "asset": asset.model_dump(by_alias=True)}


@router.patch("/workspace/assets/{name:path}", response_model=Asset)
def update_workspace_asset(
    name: str, update: AssetUpdate, workspace: ScenarioWorkspace = Depends(get_workspace),
):
    try:
        with workspace.lock:
            return workspace.assets.update(name, update.model_dump(exclude_unset=True))
    except AssetNotFoundError:
        raise HTTPException(status_code=404, detail=f"Unknown asset '{name}'")
    except BaselineAssetError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/workspace/assets/{name:path}/rename", response_model=list[str])
def rename_workspace_asset(
    name: str, request: RenameRequest, workspace: ScenarioWorkspace = Depends(get_workspace),
):
    """Rename an asset and return the new ordered list of names."""
    try:
        with workspace.lock:
            workspace.assets.rename(name, request.new_name)
            return workspace.assets.names()
    except AssetNotFoundError:
        raise HTTPException(status_code=404, detail=f"Unknown asset '{name}'")
    except (BaselineAssetError, DuplicateAssetNameError) as e:
        raise HTTPException(status_code=409, detail=str(e))
    except InvalidAssetNameError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.delete("/workspace/assets/{name:path}", status_code=204)
def remove_workspace_asset(name: str, workspace: ScenarioWorkspace = Depends(get_workspace)):
    try:
        with workspace.lock:
            removed = workspace.assets.remove(name)
    except AssetNotFoundError:
        raise HTTPException(status_code=404, detail=f"Unknown asset '{name}'")
    if not removed:
        raise HTTPException(status_code=409, detail=f"Baseline asset '{name}' cannot be removed")
    return Response(status_code=204)
