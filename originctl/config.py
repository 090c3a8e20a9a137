"""Configuration management for the originctl application."""
import os
from typing import Dict, Any
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()

class Config:
    """Application configuration with sensible defaults."""

    # Origin master API
    API_URL: str = os.getenv("ORIGIN_API_URL", "https://127.0.0.1:8443")
    HEALTH_PATH: str = os.getenv("ORIGIN_HEALTH_PATH", "/healthz/ready")
    CONTAINER_NAME: str = os.getenv("ORIGIN_CONTAINER", "origin")

    # Readiness polling
    WAIT_ATTEMPTS: int = int(os.getenv("ORIGIN_WAIT_ATTEMPTS", "60"))
    WAIT_INTERVAL: float = float(os.getenv("ORIGIN_WAIT_INTERVAL", "5"))
    HTTP_TIMEOUT: float = float(os.getenv("ORIGIN_HTTP_TIMEOUT", "5"))

    # Paths
    MASTER_CONFIG_DIR: str = os.getenv(
        "ORIGIN_MASTER_CONFIG_DIR", "/var/lib/origin/openshift.local.config/master"
    )
    MARKER_DIR: str = os.getenv("ORIGINCTL_MARKER_DIR", "/var/lib/originctl/markers")
    BIN_DIR: str = os.getenv("ORIGIN_BIN_DIR", "/usr/local/bin")
    KUBE_DIR: str = os.getenv("ORIGIN_KUBE_DIR", str(Path("~/.kube").expanduser()))
    DOCKER_CERTS_DIR: str = os.getenv("ORIGIN_DOCKER_CERTS_DIR", "/etc/docker/certs.d")

    # Routing
    ROUTING_SUFFIX: str = os.getenv("ORIGIN_ROUTING_SUFFIX", "apps.10.2.2.2.xip.io")

    # NFS persistent volumes
    NFS_ROOT: str = os.getenv("ORIGIN_NFS_ROOT", "/nfsvolumes")
    NFS_SERVER: str = os.getenv("ORIGIN_NFS_SERVER", "10.2.2.2")
    NFS_OWNER: str = os.getenv("ORIGIN_NFS_OWNER", "nfsnobody:nfsnobody")
    EXPORTS_FILE: str = os.getenv("ORIGIN_EXPORTS_FILE", "/etc/exports")
    PV_COUNT: int = int(os.getenv("ORIGIN_PV_COUNT", "10"))
    PV_CAPACITY: str = os.getenv("ORIGIN_PV_CAPACITY", "10Gi")

    # Template catalogs
    CATALOGS: str = os.getenv("ORIGIN_CATALOGS", "")
    CATALOG_NAMESPACE: str = os.getenv("ORIGIN_CATALOG_NAMESPACE", "openshift")

    # Accounts
    ADMIN_USER: str = os.getenv("ORIGIN_ADMIN_USER", "admin")
    DEV_USER: str = os.getenv("ORIGIN_DEV_USER", "user")
    DEV_PROJECT: str = os.getenv("ORIGIN_DEV_PROJECT", "")
    IDENTITY_PROVIDER: str = os.getenv("ORIGIN_IDENTITY_PROVIDER", "anypassword")

    # Optional YAML override file
    CONFIG_FILE: str = os.getenv("ORIGINCTL_CONFIG", "")

    # API
    API_KEY: str = os.getenv("ORIGINCTL_API_KEY", "originctl-secret")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FORMAT: str = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    LOG_FILE: str = os.getenv("ORIGINCTL_LOG_FILE", "")

    # Security
    REDACT_KEYS: tuple = ("api_key", "password", "secret", "token")

    @classmethod
    def as_dict(cls) -> Dict[str, Any]:
        """Return the provisioning defaults keyed by ProvisionConfig field name."""
        return {
            "api_url": cls.API_URL,
            "health_path": cls.HEALTH_PATH,
            "container_name": cls.CONTAINER_NAME,
            "wait_attempts": cls.WAIT_ATTEMPTS,
            "wait_interval": cls.WAIT_INTERVAL,
            "http_timeout": cls.HTTP_TIMEOUT,
            "master_config_dir": cls.MASTER_CONFIG_DIR,
            "marker_dir": cls.MARKER_DIR,
            "bin_dir": cls.BIN_DIR,
            "kube_dir": cls.KUBE_DIR,
            "docker_certs_dir": cls.DOCKER_CERTS_DIR,
            "routing_suffix": cls.ROUTING_SUFFIX,
            "nfs_root": cls.NFS_ROOT,
            "nfs_server": cls.NFS_SERVER,
            "nfs_owner": cls.NFS_OWNER,
            "exports_file": cls.EXPORTS_FILE,
            "pv_count": cls.PV_COUNT,
            "pv_capacity": cls.PV_CAPACITY,
            "catalogs": [c.strip() for c in cls.CATALOGS.split(",") if c.strip()],
            "catalog_namespace": cls.CATALOG_NAMESPACE,
            "admin_user": cls.ADMIN_USER,
            "developer_user": cls.DEV_USER,
            "developer_project": cls.DEV_PROJECT or None,
            "identity_provider": cls.IDENTITY_PROVIDER,
        }

    @classmethod
    def validate(cls) -> None:
        """Validate required configuration."""
        required = {
            "ORIGIN_API_URL": cls.API_URL,
            "ORIGINCTL_MARKER_DIR": cls.MARKER_DIR,
            "ORIGIN_MASTER_CONFIG_DIR": cls.MASTER_CONFIG_DIR,
        }
        missing = [k for k, v in required.items() if not v]
        if missing:
            raise ValueError(f"Missing required configuration: {', '.join(missing)}")

# Don't validate on import to allow for dynamic configuration
# Call Config.validate() explicitly when needed
