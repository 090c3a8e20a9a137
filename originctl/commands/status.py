import typer
from typing import Optional

from originctl.errors import OriginctlError
from originctl.modules.markers import MarkerStore
from originctl.modules.models import Stage
from originctl.modules.settings import load_provision_config

app = typer.Typer()

@app.callback(invoke_without_command=True)
def status_cmd(
    config_file: Optional[str] = typer.Option(None, "--config", "-c", help="YAML file overriding the environment"),
):
    """Show which provisioning stages have completed."""
    try:
        config = load_provision_config(config_file)
    except OriginctlError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(code=1)

    done = MarkerStore(config.marker_dir).completed()
    typer.echo(f"📡 Provisioning status ({config.marker_dir})")
    for stage in Stage.ordered():
        if stage in done:
            typer.echo(f"  ✅ {stage.value:<20} {done[stage]}")
        else:
            typer.echo(f"  ⏳ {stage.value:<20} pending")
