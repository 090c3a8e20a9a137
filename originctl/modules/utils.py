import json
import logging

from originctl.utils import redact_sensitive_data

# API requests; reaches ORIGINCTL_LOG_FILE through the originctl logger
logger = logging.getLogger("originctl.audit")


def export_state_to_json(data, filename="provision-state.json"):
    with open(filename, "w") as f:
        json.dump(redact_sensitive_data(data), f, indent=2)
    logger.info(f"✅ Provisioning state exported to {filename}")
