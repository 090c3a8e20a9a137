from fastapi import FastAPI
from originctl.api.routes import status, provision, reset, verify
from originctl.api.middleware import AuthMiddleware
from originctl.logging import setup_audit_log
from dotenv import load_dotenv

load_dotenv()
setup_audit_log()
app = FastAPI(title="originctl")
app.add_middleware(AuthMiddleware)

app.include_router(status.router)
app.include_router(provision.router)
app.include_router(reset.router)
app.include_router(verify.router)
