from fastapi import APIRouter

from growth_engine.simulation.presets import list_preset_names

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check():
    return {
        "status": "ok",
        "presets": len(list_preset_names()),
    }
