"""Post-provision verification of the cluster objects the stages create."""
import logging
from typing import Any, Dict, Optional

from kubernetes.client.rest import ApiException

from originctl.modules.models import ProvisionConfig
from originctl.modules.oc import OcClient
from originctl.modules.runner import CommandRunner
from originctl.utils.kube import core_api

logger = logging.getLogger("originctl.verify")

REQUIRED_SERVICES = ("docker-registry", "router")


def verify_cluster(config: ProvisionConfig, api=None, oc: Optional[OcClient] = None) -> Dict[str, Any]:
    """Check that the registry, router, volumes and accounts exist.

    Args:
        config: Provisioning configuration
        api: CoreV1Api instance (default: built from the admin kubeconfig)
        oc: OcClient used for the user lookups

    Returns:
        Dict with 'healthy', 'checks' and 'issues'
    """
    health = {
        'healthy': False,
        'checks': {},
        'issues': [],
    }

    try:
        api = api or core_api(config.admin_kubeconfig)
    except (FileNotFoundError, ValueError) as e:
        health['issues'].append(f"Cannot load kubeconfig: {e}")
        return health

    for name in REQUIRED_SERVICES:
        try:
            svc = api.read_namespaced_service(name, "default")
            health['checks'][f"service/{name}"] = svc.spec.cluster_ip
        except ApiException as e:
            health['checks'][f"service/{name}"] = None
            health['issues'].append(f"Service {name} not found in default ({e.status})")

    try:
        pvs = [pv.metadata.name for pv in api.list_persistent_volume().items]
        ours = sorted(n for n in pvs if n.startswith("pv"))
        health['checks']['persistent_volumes'] = len(ours)
        if len(ours) < config.pv_count:
            health['issues'].append(
                f"Expected {config.pv_count} persistent volumes, found {len(ours)}"
            )
    except ApiException as e:
        health['issues'].append(f"Cannot list persistent volumes ({e.status})")

    oc = oc or OcClient(CommandRunner(), config.admin_kubeconfig, config.bin_dir)
    for user in (config.admin_user, config.developer_user):
        present = oc.exists("user", user)
        health['checks'][f"user/{user}"] = present
        if not present:
            health['issues'].append(f"User {user} does not exist")

    if not health['issues']:
        health['healthy'] = True
    else:
        for issue in health['issues']:
            logger.warning(f"⚠️  {issue}")

    return health
