from fastapi import APIRouter, HTTPException

from originctl.errors import OriginctlError
from originctl.modules.markers import MarkerStore
from originctl.modules.models import Stage
from originctl.modules.settings import load_provision_config

router = APIRouter()

@router.get("/status")
def stage_status():
    try:
        config = load_provision_config()
    except OriginctlError as e:
        raise HTTPException(status_code=400, detail=str(e))
    done = MarkerStore(config.marker_dir).completed()
    return {
        "marker_dir": config.marker_dir,
        "stages": [
            {"stage": s.value, "complete": s in done, "completed_at": done.get(s)}
            for s in Stage.ordered()
        ],
    }
