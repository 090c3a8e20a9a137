import os
from pathlib import Path
from kubernetes import client, config

def load_kubeconfig(path: str) -> str:
    """
    Load the kubeconfig at the given path.
    Returns the resolved path used to load the kubeconfig.
    """
    if not path:
        raise ValueError("No kubeconfig path provided.")

    resolved = Path(os.path.expanduser(path)).resolve()
    if not resolved.exists():
        raise FileNotFoundError(f"❌ Kubeconfig not found: {resolved}")
    config.load_kube_config(config_file=str(resolved))
    return str(resolved)


def core_api(path: str) -> client.CoreV1Api:
    """Return a CoreV1Api bound to the given kubeconfig."""
    load_kubeconfig(path)
    return client.CoreV1Api()
