from fastapi import APIRouter, HTTPException

from originctl.errors import OriginctlError
from originctl.modules.settings import load_provision_config
from originctl.modules.verify import verify_cluster

router = APIRouter()

@router.get("/verify")
def verify():
    try:
        config = load_provision_config()
    except OriginctlError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return verify_cluster(config)
