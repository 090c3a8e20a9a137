"""Load image streams and templates into the shared catalog namespace."""
import logging
from pathlib import Path

from originctl.errors import CommandError
from originctl.modules.context import StageContext

logger = logging.getLogger("originctl.templates")


def is_remote(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def load_catalogs(ctx: StageContext) -> None:
    config = ctx.config
    if not config.catalogs:
        logger.info("No template catalogs configured")
        return

    logger.info(f"📚 Loading {len(config.catalogs)} catalog(s) into '{config.catalog_namespace}'")
    for source in config.catalogs:
        if not is_remote(source):
            path = Path(source).expanduser()
            if not path.exists():
                raise CommandError(["oc", "apply", "-f", source], 1,
                                   stderr=f"catalog source not found: {path}")
            source = str(path)
        ctx.oc.oc("apply", "-f", source, namespace=config.catalog_namespace)
        logger.info(f"✅ Loaded {source}")
