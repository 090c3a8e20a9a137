"""Build the ProvisionConfig from environment defaults and an optional YAML file."""
import logging
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from jsonschema import validate, ValidationError

from originctl.config import Config
from originctl.errors import ConfigError
from originctl.modules.models import ProvisionConfig

logger = logging.getLogger("originctl.settings")

PROVISION_SCHEMA = {
    "type": "object",
    "properties": {
        "api_url": {"type": "string", "pattern": "^https?://"},
        "health_path": {"type": "string"},
        "container_name": {"type": "string", "minLength": 1},
        "wait_attempts": {"type": "integer", "minimum": 1},
        "wait_interval": {"type": "number", "minimum": 0},
        "http_timeout": {"type": "number", "exclusiveMinimum": 0},
        "master_config_dir": {"type": "string"},
        "marker_dir": {"type": "string"},
        "bin_dir": {"type": "string"},
        "kube_dir": {"type": "string"},
        "docker_certs_dir": {"type": "string"},
        "routing_suffix": {"type": "string"},
        "nfs_root": {"type": "string"},
        "nfs_server": {"type": "string"},
        "nfs_owner": {"type": "string"},
        "exports_file": {"type": "string"},
        "pv_count": {"type": "integer", "minimum": 0, "maximum": 99},
        "pv_capacity": {"type": "string", "pattern": "^[0-9]+[KMGT]i$"},
        "catalogs": {"type": "array", "items": {"type": "string"}},
        "catalog_namespace": {"type": "string"},
        "admin_user": {"type": "string", "minLength": 1},
        "developer_user": {"type": "string", "minLength": 1},
        "developer_project": {"type": ["string", "null"]},
        "identity_provider": {"type": "string", "minLength": 1},
    },
    "additionalProperties": False,
}


def read_config_file(path: str) -> Dict[str, Any]:
    """Read and validate a YAML override file."""
    config_path = Path(path).expanduser()
    if not config_path.exists():
        raise ConfigError(f"❌ Config file not found: {config_path}")

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"❌ Invalid YAML in {config_path}: {e}") from e

    try:
        validate(instance=data, schema=PROVISION_SCHEMA)
    except ValidationError as ve:
        raise ConfigError(f"❌ YAML validation error in {config_path}: {ve.message}") from ve

    logger.debug("Loaded overrides from %s: %s", config_path, sorted(data))
    return data


def load_provision_config(path: Optional[str] = None, **overrides: Any) -> ProvisionConfig:
    """Merge environment defaults, the YAML file and explicit overrides.

    Later sources win: Config (env/.env) < YAML file < keyword overrides.
    Overrides set to None are ignored.
    """
    try:
        Config.validate()
    except ValueError as e:
        raise ConfigError(str(e)) from e
    values = Config.as_dict()

    path = path or Config.CONFIG_FILE
    if path:
        values.update(read_config_file(path))

    known = {f.name for f in fields(ProvisionConfig)}
    for key, value in overrides.items():
        if key not in known:
            raise ConfigError(f"Unknown configuration key: {key}")
        if value is not None:
            values[key] = value

    if values["developer_user"] == values["admin_user"]:
        raise ConfigError("Admin and developer accounts must be different users")

    return ProvisionConfig(**values)
