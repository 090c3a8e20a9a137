from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from originctl.errors import OriginctlError
from originctl.modules.markers import MarkerStore
from originctl.modules.models import Stage
from originctl.modules.settings import load_provision_config
from originctl.modules.utils import logger

router = APIRouter()

class ResetRequest(BaseModel):
    stages: Optional[List[Stage]] = None
    all: bool = False

@router.post("/reset")
def reset_markers(req: ResetRequest):
    if not req.stages and not req.all:
        raise HTTPException(status_code=400, detail="Pass at least one stage or all=true")
    try:
        config = load_provision_config()
    except OriginctlError as e:
        raise HTTPException(status_code=400, detail=str(e))
    markers = MarkerStore(config.marker_dir)
    targets = Stage.ordered() if req.all else req.stages
    cleared = [s.value for s in targets if markers.clear(s)]
    logger.info(f"[RESET] cleared={cleared}")
    return {"status": "success", "cleared": cleared}
