"""Rendering of PersistentVolume manifests and NFS export entries."""

import logging
from typing import Any, Dict, Iterable, List, Tuple

import yaml

from originctl.modules.models import PersistentVolumeSpec, ProvisionConfig

logger = logging.getLogger("originctl.utils.manifests")

EXPORT_OPTIONS = "*(rw,root_squash,no_wdelay)"


def pv_specs(config: ProvisionConfig) -> List[PersistentVolumeSpec]:
    """Build the volume specs pv01..pvNN for the configured count."""
    return [
        PersistentVolumeSpec(
            index=i,
            nfs_root=config.nfs_root,
            server=config.nfs_server,
            capacity=config.pv_capacity,
        )
        for i in range(1, config.pv_count + 1)
    ]


def pv_manifest(spec: PersistentVolumeSpec) -> Dict[str, Any]:
    """Return the PersistentVolume object for a spec."""
    return {
        'apiVersion': 'v1',
        'kind': 'PersistentVolume',
        'metadata': {'name': spec.name},
        'spec': {
            'capacity': {'storage': spec.capacity},
            'accessModes': list(spec.access_modes),
            'persistentVolumeReclaimPolicy': spec.reclaim_policy,
            'nfs': {'server': spec.server, 'path': spec.path},
        },
    }


def dump_manifest(manifest: Dict[str, Any]) -> str:
    return yaml.safe_dump(manifest, default_flow_style=False, sort_keys=False)


def dump_manifests(manifests: Iterable[Dict[str, Any]]) -> str:
    """Render several objects as one multi-document YAML stream."""
    return yaml.safe_dump_all(list(manifests), default_flow_style=False, sort_keys=False)


def export_entry(spec: PersistentVolumeSpec) -> str:
    return f"{spec.path} {EXPORT_OPTIONS}"


def merge_exports(existing: str, entries: Iterable[str]) -> Tuple[str, List[str]]:
    """Append export entries whose path is not exported yet.

    Args:
        existing: Current contents of the exports file
        entries: Export lines to ensure

    Returns:
        tuple: (new file contents, entries that were added)
    """
    exported = set()
    for line in existing.splitlines():
        line = line.strip()
        if line and not line.startswith('#'):
            exported.add(line.split()[0])

    added = [e for e in entries if e.split()[0] not in exported]
    if not added:
        return existing, []

    content = existing
    if content and not content.endswith('\n'):
        content += '\n'
    content += '\n'.join(added) + '\n'
    return content, added
