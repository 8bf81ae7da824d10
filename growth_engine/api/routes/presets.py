from fastapi import APIRouter, HTTPException

from growth_engine.simulation.presets import UnknownPresetError, get_preset, list_preset_names

router = APIRouter(tags=["presets"])


@router.get("/presets")
def get_presets():
    """Return every preset label with its config overrides."""
    return {name: get_preset(name).overrides() for name in list_preset_names()}


@router.get("/presets/{name}")
def get_preset_by_name(name: str):
    try:
        return get_preset(name).overrides()
    except UnknownPresetError:
        raise HTTPException(status_code=404, detail=f"Unknown preset '{name}'")
