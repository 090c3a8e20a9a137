"""Install the OpenShift client binaries and the admin kubeconfig."""
import logging
from pathlib import Path

from originctl.modules.context import StageContext

logger = logging.getLogger("originctl.binaries")

# The all-in-one image ships a single multi-call binary
OPENSHIFT_BINARY = "/usr/bin/openshift"
CLIENT_LINKS = ("oc", "oadm", "kubectl")


def install_binaries(ctx: StageContext) -> None:
    """Copy the openshift binary out of the origin container and link the CLIs to it."""
    config = ctx.config
    bin_dir = Path(config.bin_dir)
    target = bin_dir / "openshift"

    logger.info(f"📦 Installing OpenShift client binaries into {bin_dir}")
    ctx.runner.run(["mkdir", "-p", str(bin_dir)])
    ctx.runner.run(["docker", "cp", f"{config.container_name}:{OPENSHIFT_BINARY}", str(target)])
    ctx.runner.run(["chmod", "0755", str(target)])

    for name in CLIENT_LINKS:
        # -n replaces a stale link instead of descending into it
        ctx.runner.run(["ln", "-sfn", "openshift", str(bin_dir / name)])
        logger.debug(f"Linked {bin_dir / name} -> openshift")

    install_kubeconfig(ctx)
    logger.info(f"✅ Installed {', '.join(CLIENT_LINKS)}")


def install_kubeconfig(ctx: StageContext) -> None:
    """Make the cluster admin kubeconfig the default for the provisioning user."""
    config = ctx.config
    source = config.admin_kubeconfig
    dest = Path(config.kube_dir) / "config"
    ctx.runner.run(["install", "-D", "-m", "0600", source, str(dest)])
    logger.info(f"🔑 Installed admin kubeconfig at {dest}")
