import logging
from typing import List, Optional

import typer

from originctl.errors import OriginctlError
from originctl.modules.markers import MarkerStore
from originctl.modules.models import Stage
from originctl.modules.settings import load_provision_config

logger = logging.getLogger(__name__)

app = typer.Typer()

@app.callback(invoke_without_command=True)
def reset_cmd(
    stage: Optional[List[Stage]] = typer.Option(None, "--stage", "-s", help="Stage marker to remove (repeatable)"),
    all_stages: bool = typer.Option(False, "--all", help="Remove every stage marker"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation prompt"),
    config_file: Optional[str] = typer.Option(None, "--config", "-c", help="YAML file overriding the environment"),
):
    """
    Forget that stages completed so the next provisioning run repeats them.

    Only the marker files are removed; objects already created in the
    cluster are left untouched.
    """
    if not stage and not all_stages:
        raise typer.BadParameter("Pass --stage at least once or --all")

    try:
        config = load_provision_config(config_file)
    except OriginctlError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(code=1)

    markers = MarkerStore(config.marker_dir)
    targets = Stage.ordered() if all_stages else [Stage(s) for s in stage]

    if not yes:
        typer.confirm(
            f"⚠️  Remove markers for: {', '.join(s.value for s in targets)}?",
            abort=True
        )

    for target in targets:
        if markers.clear(target):
            typer.echo(f"🔁 Reset {target.value}")
        else:
            typer.echo(f"   {target.value} was not marked complete")
    logger.info(f"Reset {len(targets)} stage marker(s) in {config.marker_dir}")
