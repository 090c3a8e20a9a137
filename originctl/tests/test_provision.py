import json
from pathlib import Path

import pytest

from originctl.errors import ApiNotReadyError, StageError
from originctl.modules import provision as provision_module
from originctl.modules import secure_registry as secure_registry_module
from originctl.modules.models import ProvisionPhase, Stage
from originctl.modules.provision import provision, run_stage, select_stages
from originctl.modules.utils import export_state_to_json


@pytest.fixture(autouse=True)
def api_ready(monkeypatch):
    monkeypatch.setattr(provision_module, "wait_for_api", lambda config, runner: 1)
    monkeypatch.setattr(secure_registry_module, "wait_for_api", lambda config, runner: 1)


def test_select_stages_keeps_provisioning_order():
    assert select_stages(None) == Stage.ordered()
    assert select_stages(["users", Stage.BINARIES]) == [Stage.BINARIES, Stage.USERS]


def test_select_stages_rejects_unknown():
    with pytest.raises(ValueError):
        select_stages(["database"])


def test_full_run_marks_every_stage(config, ctx):
    state = provision(config, ctx=ctx)

    assert state.phase == ProvisionPhase.COMPLETED
    assert state.success
    assert [r.stage for r in state.results] == Stage.ordered()
    assert all(not r.skipped for r in state.results)
    assert set(ctx.markers.completed()) == set(Stage.ordered())
    assert state.metadata["api_attempts"] == 1


def test_rerun_is_a_no_op(config, ctx, runner):
    provision(config, ctx=ctx)
    runner.calls.clear()

    state = provision(config, ctx=ctx)

    assert state.success
    assert all(r.skipped for r in state.results)
    assert runner.calls == []


def test_failure_stops_the_run(config, ctx, runner):
    runner.rules.insert(0, ("oadm router router", 1, ""))

    state = provision(config, ctx=ctx)

    assert state.phase == ProvisionPhase.FAILED
    assert not state.success
    assert [r.stage for r in state.results] == [Stage.BINARIES, Stage.REGISTRY, Stage.ROUTER]
    assert state.results[-1].success is False
    assert "router" in state.errors[0]
    assert ctx.markers.is_complete(Stage.REGISTRY)
    assert not ctx.markers.is_complete(Stage.ROUTER)
    assert not runner.ran("create-server-cert")


def test_failed_stage_runs_again_next_time(config, ctx, runner):
    failing = ("oadm router router", 1, "")
    runner.rules.insert(0, failing)
    provision(config, ctx=ctx)
    runner.rules.remove(failing)
    runner.calls.clear()

    state = provision(config, ctx=ctx)

    assert state.success
    skipped = {r.stage for r in state.results if r.skipped}
    assert skipped == {Stage.BINARIES, Stage.REGISTRY}
    assert runner.ran("oadm router router")


def test_run_stage_raises_stage_error(ctx, runner):
    runner.rules.insert(0, ("oadm registry", 1, ""))

    with pytest.raises(StageError) as exc:
        run_stage(Stage.REGISTRY, ctx)

    assert exc.value.stage == "registry"
    assert not ctx.markers.is_complete(Stage.REGISTRY)


def test_force_reruns_completed_stage(ctx, runner):
    run_stage(Stage.ROUTER, ctx)
    runner.calls.clear()

    assert run_stage(Stage.ROUTER, ctx).skipped
    assert runner.calls == []

    result = run_stage(Stage.ROUTER, ctx, force=True)
    assert not result.skipped
    assert runner.ran("oadm router router")
    assert ctx.markers.is_complete(Stage.ROUTER)


def test_api_not_ready_runs_nothing(config, ctx, runner, monkeypatch):
    def not_ready(config, runner):
        raise ApiNotReadyError(3, "connection refused")

    monkeypatch.setattr(provision_module, "wait_for_api", not_ready)

    state = provision(config, ctx=ctx)

    assert state.phase == ProvisionPhase.FAILED
    assert state.results == []
    assert "connection refused" in state.errors[0]
    assert runner.calls == []


def test_dry_run_executes_and_marks_nothing(config, monkeypatch):
    def no_subprocess(*args, **kwargs):
        raise AssertionError("subprocess must not run in dry-run mode")

    monkeypatch.setattr("originctl.modules.runner.subprocess.run", no_subprocess)

    state = provision(config, dry_run=True)

    assert state.success
    assert state.metadata["dry_run"] is True
    assert len(state.results) == len(Stage.ordered())
    assert not Path(config.marker_dir).exists()


def test_state_to_dict(config, ctx):
    data = provision(config, stages=["router"], ctx=ctx).to_dict()

    assert data["phase"] == "completed"
    assert data["results"] == [
        {"stage": "router", "skipped": False, "success": True, "message": "configured"}
    ]
    assert data["metadata"]["stages"] == ["router"]


def registry_already_secured(runner):
    """Make the fake cluster answer as if the registry TLS objects exist."""
    runner.rules[:0] = [
        ("get secret registry-secret", 0, "registry-secret"),
        ("get route docker-registry", 0, "docker-registry"),
        ("get sa registry", 0, "registry-dockercfg-x registry-secret"),
        ("secrets new registry-secret", 1, "already exists"),
        ("secrets add", 1, "already exists"),
        ("create route passthrough", 1, "already exists"),
    ]


def test_secure_registry_resumes_after_restart_failure(config, ctx, runner, monkeypatch):
    def not_ready(config, runner):
        raise ApiNotReadyError(3, "connection refused")

    monkeypatch.setattr(secure_registry_module, "wait_for_api", not_ready)
    state = provision(config, ctx=ctx)
    assert state.phase == ProvisionPhase.FAILED
    assert not ctx.markers.is_complete(Stage.SECURE_REGISTRY)

    monkeypatch.setattr(secure_registry_module, "wait_for_api", lambda config, runner: 1)
    registry_already_secured(runner)

    state = provision(config, ctx=ctx)

    assert state.success, state.errors
    assert ctx.markers.is_complete(Stage.SECURE_REGISTRY)


def test_force_secure_registry_on_configured_cluster(ctx, runner):
    run_stage(Stage.SECURE_REGISTRY, ctx)
    registry_already_secured(runner)

    result = run_stage(Stage.SECURE_REGISTRY, ctx, force=True)

    assert not result.skipped
    assert ctx.markers.is_complete(Stage.SECURE_REGISTRY)


def test_unwritable_marker_becomes_stage_error(config, ctx, monkeypatch):
    def read_only(stage):
        raise PermissionError(13, "Permission denied", str(config.marker_dir))

    monkeypatch.setattr(ctx.markers, "mark_complete", read_only)

    with pytest.raises(StageError) as exc:
        run_stage(Stage.ROUTER, ctx)
    assert isinstance(exc.value.cause, PermissionError)

    state = provision(config, stages=["router"], ctx=ctx)
    assert state.phase == ProvisionPhase.FAILED
    assert "Permission denied" in state.errors[0]


def test_marker_clear_failure_on_force_becomes_stage_error(ctx, monkeypatch):
    def read_only(stage):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(ctx.markers, "clear", read_only)

    with pytest.raises(StageError):
        run_stage(Stage.ROUTER, ctx, force=True)


def test_exported_state_is_redacted(tmp_path):
    out = tmp_path / "state.json"

    export_state_to_json({"phase": "completed", "metadata": {"api_token": "abc", "stages": ["users"]}}, str(out))

    data = json.loads(out.read_text())
    assert data["metadata"] == {"api_token": "[REDACTED]", "stages": ["users"]}
