"""Create the cluster admin and developer accounts."""
import logging

from originctl.modules.context import StageContext

logger = logging.getLogger("originctl.users")


def ensure_user(ctx: StageContext, name: str) -> bool:
    """Create a user with an identity from the configured provider.

    Returns:
        bool: True if the user was created, False if it already existed
    """
    if ctx.oc.exists("user", name):
        logger.info(f"⏭️  User {name} already exists")
        return False

    identity = f"{ctx.config.identity_provider}:{name}"
    ctx.oc.oc("create", "user", name)
    ctx.oc.oc("create", "identity", identity)
    ctx.oc.oc("create", "useridentitymapping", identity, name)
    logger.info(f"👤 Created user {name}")
    return True


def setup_users(ctx: StageContext) -> None:
    config = ctx.config
    ensure_user(ctx, config.admin_user)
    ensure_user(ctx, config.developer_user)

    ctx.oc.oadm("policy", "add-cluster-role-to-user", "cluster-admin", config.admin_user)
    logger.info(f"✅ {config.admin_user} is cluster-admin")

    project = config.developer_project
    if project:
        if ctx.oc.exists("project", project):
            logger.info(f"⏭️  Project {project} already exists")
        else:
            ctx.oc.oadm("new-project", project, f"--admin={config.developer_user}")
            logger.info(f"✅ Created project {project} for {config.developer_user}")
