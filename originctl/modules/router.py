"""Deploy the HAProxy router."""
import logging

from originctl.modules.context import StageContext

logger = logging.getLogger("originctl.router")


def deploy_router(ctx: StageContext) -> None:
    logger.info("🚀 Deploying the router")
    # The router binds ports 80/443 on the host network
    ctx.oc.oadm("policy", "add-scc-to-user", "hostnetwork", "-z", "router", namespace="default")
    ctx.oc.oadm("router", "router", "--replicas=1", "--service-account=router")
    logger.info(f"✅ Router deployed for *.{ctx.config.routing_suffix}")
