import json
from typing import Optional

import typer

from originctl.errors import OriginctlError
from originctl.modules.settings import load_provision_config
from originctl.modules.verify import verify_cluster

app = typer.Typer()

@app.callback(invoke_without_command=True)
def verify_cmd(
    config_file: Optional[str] = typer.Option(None, "--config", "-c", help="YAML file overriding the environment"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw result as JSON"),
):
    """Check the registry, router, volumes and accounts in the cluster."""
    try:
        config = load_provision_config(config_file)
    except OriginctlError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(code=1)

    health = verify_cluster(config)
    if as_json:
        typer.echo(json.dumps(health, indent=2))
    else:
        for check, value in health['checks'].items():
            typer.echo(f"  {check:<28} {value}")
        for issue in health['issues']:
            typer.echo(f"  ⚠️  {issue}")
        typer.echo("✅ Cluster healthy" if health['healthy'] else "❌ Cluster has issues")

    if not health['healthy']:
        raise typer.Exit(code=1)
