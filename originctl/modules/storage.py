"""NFS-backed persistent volumes.

Each volume gets its own exported directory under the NFS root and a
matching PersistentVolume object in the cluster.
"""
import logging
from pathlib import Path
from typing import List

from originctl.modules.context import StageContext
from originctl.modules.models import PersistentVolumeSpec
from originctl.utils.manifests import dump_manifest, export_entry, merge_exports, pv_manifest, pv_specs

logger = logging.getLogger("originctl.storage")


def prepare_directories(ctx: StageContext, specs: List[PersistentVolumeSpec]) -> None:
    paths = [spec.path for spec in specs]
    ctx.runner.run(["mkdir", "-p", *paths])
    ctx.runner.run(["chown", ctx.config.nfs_owner, *paths])
    ctx.runner.run(["chmod", "0777", *paths])


def update_exports(ctx: StageContext, specs: List[PersistentVolumeSpec]) -> List[str]:
    """Add missing entries to the exports file and return them."""
    exports = Path(ctx.config.exports_file)
    existing = exports.read_text() if exports.exists() else ""
    content, added = merge_exports(existing, [export_entry(spec) for spec in specs])

    if not added:
        logger.info(f"All volumes already exported in {exports}")
        return []
    if ctx.dry_run:
        for entry in added:
            logger.info(f"[dry-run] would add to {exports}: {entry}")
        return added

    exports.write_text(content)
    logger.info(f"📝 Added {len(added)} export(s) to {exports}")
    return added


def reload_nfs(ctx: StageContext) -> None:
    ctx.runner.run(["systemctl", "enable", "nfs-server"])
    ctx.runner.run(["systemctl", "restart", "nfs-server"])
    ctx.runner.run(["exportfs", "-ra"])


def create_volumes(ctx: StageContext, specs: List[PersistentVolumeSpec]) -> int:
    created = 0
    for spec in specs:
        if ctx.oc.exists("pv", spec.name):
            logger.info(f"⏭️  PersistentVolume {spec.name} already exists")
            continue
        ctx.oc.oc("create", "-f", "-", input=dump_manifest(pv_manifest(spec)))
        logger.debug(f"Created PersistentVolume {spec.name} -> {ctx.config.nfs_server}:{spec.path}")
        created += 1
    return created


def setup_persistent_volumes(ctx: StageContext) -> None:
    specs = pv_specs(ctx.config)
    if not specs:
        logger.info("No persistent volumes requested")
        return

    logger.info(f"💾 Setting up {len(specs)} NFS persistent volumes under {ctx.config.nfs_root}")
    prepare_directories(ctx, specs)
    update_exports(ctx, specs)
    reload_nfs(ctx)
    created = create_volumes(ctx, specs)
    logger.info(f"✅ Persistent volumes ready ({created} created)")
