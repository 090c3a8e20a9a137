"""Wait for the OpenShift master API to become ready."""

import logging
import time
from typing import Callable, Optional

import requests
import urllib3

from originctl.errors import ApiNotReadyError, CommandError
from originctl.modules.models import ProvisionConfig
from originctl.modules.runner import CommandRunner

logger = logging.getLogger("originctl.readiness")

# The all-in-one master serves a self-signed certificate
urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)


def container_running(runner: CommandRunner, container_name: str) -> bool:
    """Return True if a running container matches the given name."""
    try:
        container = runner.output(["docker", "ps", "-q", "-f", f"name={container_name}"])
    except CommandError as e:
        logger.debug(f"docker ps failed: {e}")
        return False
    return bool(container)


def api_healthy(url: str, timeout: float, session: Optional[requests.Session] = None) -> bool:
    """Return True if the health endpoint answers 200."""
    http = session or requests
    response = http.get(url, verify=False, timeout=timeout)
    return response.status_code == 200


def wait_for_api(
    config: ProvisionConfig,
    runner: CommandRunner,
    session: Optional[requests.Session] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Poll until the origin container runs and the API reports ready.

    Args:
        config: Provisioning configuration
        runner: Command runner used for the docker check
        session: Optional requests session
        sleep: Sleep function between attempts

    Returns:
        int: The attempt on which the API was ready

    Raises:
        ApiNotReadyError: If every attempt failed
    """
    if runner.dry_run:
        logger.info("[dry-run] skipping wait for the OpenShift API")
        return 0

    url = config.health_url
    attempts = max(1, config.wait_attempts)
    logger.info(f"⏳ Waiting for OpenShift API at {url} (up to {attempts} attempts)")

    last_error = ""
    for attempt in range(1, attempts + 1):
        if not container_running(runner, config.container_name):
            last_error = f"container '{config.container_name}' is not running"
        else:
            try:
                if api_healthy(url, config.http_timeout, session):
                    logger.info(f"✅ OpenShift API is ready (attempt {attempt})")
                    return attempt
                last_error = f"{url} is not ready yet"
            except requests.RequestException as e:
                last_error = str(e)

        if attempt % 12 == 0:
            logger.info(f"⏳ Still waiting for OpenShift API ({attempt}/{attempts}): {last_error}")
        else:
            logger.debug(f"Attempt {attempt}/{attempts}: {last_error}")

        if attempt < attempts:
            sleep(config.wait_interval)

    logger.error(f"❌ Timed out waiting for OpenShift API. Last error: {last_error}")
    raise ApiNotReadyError(attempts, last_error)
