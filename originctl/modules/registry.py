"""Deploy the integrated docker registry."""
import logging

from originctl.modules.context import StageContext

logger = logging.getLogger("originctl.registry")

REGISTRY_NAMESPACE = "default"
REGISTRY_SERVICE_ACCOUNT = "registry"


def deploy_registry(ctx: StageContext) -> None:
    logger.info("🚀 Deploying the integrated docker registry")
    ctx.oc.oadm(
        "policy", "add-scc-to-user", "privileged",
        f"system:serviceaccount:{REGISTRY_NAMESPACE}:{REGISTRY_SERVICE_ACCOUNT}",
    )
    ctx.oc.oadm("registry", f"--service-account={REGISTRY_SERVICE_ACCOUNT}")
    logger.info("✅ Docker registry deployed")
