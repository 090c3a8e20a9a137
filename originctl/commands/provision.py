"""Provisioning commands.

Runs the marker-gated stages against the local all-in-one cluster.
"""
import logging
from typing import List, Optional

import typer

from originctl.errors import OriginctlError
from originctl.modules.runner import CommandRunner
from originctl.modules.models import Stage
from originctl.modules.provision import provision
from originctl.modules.readiness import wait_for_api
from originctl.modules.settings import load_provision_config
from originctl.modules.utils import export_state_to_json

logger = logging.getLogger("originctl.commands.provision")

app = typer.Typer(help="Provision the all-in-one OpenShift cluster")


@app.command("run")
def run_cmd(
    stage: Optional[List[Stage]] = typer.Option(None, "--stage", "-s", help="Stage to run (repeatable, default: all)"),
    force: bool = typer.Option(False, "--force", "-f", help="Re-run stages even if already configured"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show the commands without running them"),
    config_file: Optional[str] = typer.Option(None, "--config", "-c", help="YAML file overriding the environment"),
    pv_count: Optional[int] = typer.Option(None, "--pv-count", help="Number of NFS persistent volumes"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write the run result to a JSON file"),
):
    """Wait for the API, then run every stage that has not completed yet."""
    try:
        config = load_provision_config(config_file, pv_count=pv_count)
    except OriginctlError as e:
        logger.error(str(e))
        raise typer.Exit(code=1)

    state = provision(config, stages=stage, force=force, dry_run=dry_run)

    for result in state.results:
        mark = "⏭️ " if result.skipped else ("✅" if result.success else "❌")
        typer.echo(f"{mark} {result.stage.value}: {result.message}")

    if output:
        export_state_to_json(state.to_dict(), output)

    if not state.success:
        for error in state.errors:
            logger.error(f"❌ {error}")
        raise typer.Exit(code=1)


@app.command("wait")
def wait_cmd(
    config_file: Optional[str] = typer.Option(None, "--config", "-c", help="YAML file overriding the environment"),
    attempts: Optional[int] = typer.Option(None, "--attempts", help="Maximum number of polling attempts"),
):
    """Block until the OpenShift API answers its readiness check."""
    try:
        config = load_provision_config(config_file, wait_attempts=attempts)
        wait_for_api(config, CommandRunner())
    except OriginctlError as e:
        logger.error(str(e))
        raise typer.Exit(code=1)
    typer.echo("✅ OpenShift API is ready")
