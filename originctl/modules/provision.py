"""Ordered provisioning of an all-in-one OpenShift VM.

Every stage is gated by a marker file: once a stage has succeeded it is
skipped on later runs unless forced. Stages run in a fixed order and the
first failure stops the run.
"""
import logging
from typing import Callable, Dict, Iterable, List, Optional

from originctl.errors import ApiNotReadyError, CommandError, StageError
from originctl.modules.binaries import install_binaries
from originctl.modules.context import StageContext
from originctl.modules.models import ProvisionConfig, ProvisionPhase, ProvisionState, Stage, StageResult
from originctl.modules.readiness import wait_for_api
from originctl.modules.registry import deploy_registry
from originctl.modules.router import deploy_router
from originctl.modules.secure_registry import secure_registry
from originctl.modules.storage import setup_persistent_volumes
from originctl.modules.templates import load_catalogs
from originctl.modules.users import setup_users

logger = logging.getLogger("originctl.provision")

StageFunc = Callable[[StageContext], None]

STAGES: Dict[Stage, StageFunc] = {
    Stage.BINARIES: install_binaries,
    Stage.REGISTRY: deploy_registry,
    Stage.ROUTER: deploy_router,
    Stage.SECURE_REGISTRY: secure_registry,
    Stage.PERSISTENT_VOLUMES: setup_persistent_volumes,
    Stage.TEMPLATES: load_catalogs,
    Stage.USERS: setup_users,
}


def select_stages(stages: Optional[Iterable] = None) -> List[Stage]:
    """Normalise a stage selection into provisioning order."""
    if not stages:
        return Stage.ordered()
    wanted = {Stage(s) for s in stages}
    return [stage for stage in Stage.ordered() if stage in wanted]


def run_stage(stage: Stage, ctx: StageContext, force: bool = False) -> StageResult:
    """Run one stage unless its marker says it already succeeded.

    Raises:
        StageError: If any command of the stage fails
    """
    stage = Stage(stage)
    if ctx.markers.is_complete(stage) and not force:
        logger.info(f"⏭️  {stage.value}: already configured")
        return StageResult(stage=stage, skipped=True, message="already configured")

    logger.info(f"🚀 {stage.value}: configuring")
    try:
        if force:
            ctx.markers.clear(stage)
        STAGES[stage](ctx)
        ctx.markers.mark_complete(stage)
    except (CommandError, ApiNotReadyError, OSError) as e:
        logger.error(f"❌ {stage.value}: {e}")
        raise StageError(stage.value, e) from e

    logger.info(f"✅ {stage.value}: done")
    return StageResult(stage=stage, message="configured")


def provision(
    config: ProvisionConfig,
    stages: Optional[Iterable] = None,
    force: bool = False,
    dry_run: bool = False,
    ctx: Optional[StageContext] = None,
) -> ProvisionState:
    """Wait for the API and run the selected stages in order.

    Args:
        config: Provisioning configuration
        stages: Stages to run (default: all)
        force: Re-run stages even if their marker exists
        dry_run: Log commands instead of running them
        ctx: Pre-built stage context (tests)

    Returns:
        ProvisionState: Outcome of the run; errors are recorded, not raised
    """
    ctx = ctx or StageContext.create(config, dry_run=dry_run)
    selected = select_stages(stages)
    state = ProvisionState(metadata={"stages": [s.value for s in selected], "dry_run": ctx.dry_run})

    state.update_phase(ProvisionPhase.WAITING_FOR_API)
    try:
        state.metadata["api_attempts"] = wait_for_api(config, ctx.runner)
    except ApiNotReadyError as e:
        state.add_error(str(e))
        state.update_phase(ProvisionPhase.FAILED)
        return state

    state.update_phase(ProvisionPhase.RUNNING_STAGES)
    for stage in selected:
        try:
            state.results.append(run_stage(stage, ctx, force=force))
        except StageError as e:
            state.results.append(StageResult(stage=stage, success=False, message=str(e.cause)))
            state.add_error(str(e))
            state.update_phase(ProvisionPhase.FAILED)
            return state

    state.update_phase(ProvisionPhase.COMPLETED)
    skipped = sum(1 for r in state.results if r.skipped)
    logger.info(f"🎉 Provisioning complete ({len(state.results) - skipped} configured, {skipped} skipped)")
    return state
