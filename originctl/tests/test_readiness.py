from types import SimpleNamespace

import pytest
import requests

from originctl.errors import ApiNotReadyError
from originctl.modules.readiness import wait_for_api
from originctl.modules.runner import CommandRunner
from originctl.tests.fakes import FakeRunner


class FakeSession:
    def __init__(self, statuses):
        self.statuses = list(statuses)
        self.urls = []

    def get(self, url, verify=True, timeout=None):
        self.urls.append(url)
        status = self.statuses.pop(0)
        if isinstance(status, Exception):
            raise status
        return SimpleNamespace(status_code=status)


def running():
    return FakeRunner(rules=[("docker ps", 0, "0123abcd")])


def test_ready_after_a_few_attempts(config):
    sleeps = []
    session = FakeSession([503, 503, 200])

    attempt = wait_for_api(config, running(), session=session, sleep=sleeps.append)

    assert attempt == 3
    assert len(sleeps) == 2
    assert session.urls[0] == "https://127.0.0.1:8443/healthz/ready"


def test_gives_up_after_the_attempt_budget(config):
    sleeps = []
    session = FakeSession([503, 503, 503, 200])

    with pytest.raises(ApiNotReadyError) as exc:
        wait_for_api(config, running(), session=session, sleep=sleeps.append)

    assert exc.value.attempts == 3
    assert len(sleeps) == 2
    assert len(session.urls) == 3


def test_container_must_be_running(config):
    runner = FakeRunner(rules=[("docker ps", 0, "")])
    session = FakeSession([])

    with pytest.raises(ApiNotReadyError) as exc:
        wait_for_api(config, runner, session=session, sleep=lambda s: None)

    assert "origin" in exc.value.reason
    assert session.urls == []


def test_connection_errors_count_as_not_ready(config):
    session = FakeSession([requests.ConnectionError("refused"), 200])

    assert wait_for_api(config, running(), session=session, sleep=lambda s: None) == 2


def test_docker_failure_counts_as_not_ready(config):
    runner = FakeRunner(rules=[("docker ps", 1, "")])

    with pytest.raises(ApiNotReadyError):
        wait_for_api(config, runner, session=FakeSession([]), sleep=lambda s: None)


def test_dry_run_skips_the_wait(config):
    assert wait_for_api(config, CommandRunner(dry_run=True), session=FakeSession([])) == 0
