from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from originctl.errors import OriginctlError
from originctl.modules.models import Stage
from originctl.modules.provision import provision
from originctl.modules.settings import load_provision_config
from originctl.modules.utils import logger
from originctl.utils import redact_sensitive_data

router = APIRouter()

class ProvisionRequest(BaseModel):
    stages: Optional[List[Stage]] = None
    force: bool = False
    dry_run: bool = False
    config_file: Optional[str] = None

@router.post("/provision")
def run_provision(req: ProvisionRequest):
    logger.info(f"[PROVISION] stages={req.stages or 'all'}, force={req.force}, dry_run={req.dry_run}")
    try:
        config = load_provision_config(req.config_file)
    except OriginctlError as e:
        raise HTTPException(status_code=400, detail=str(e))
    state = provision(config, stages=req.stages, force=req.force, dry_run=req.dry_run)
    return redact_sensitive_data(state.to_dict())
