from typing import Optional

import typer

from originctl.errors import OriginctlError
from originctl.modules.settings import load_provision_config
from originctl.utils.manifests import dump_manifests, export_entry, pv_manifest, pv_specs

app = typer.Typer(help="Render the generated manifests without touching the cluster")


@app.command("pv")
def pv_cmd(
    config_file: Optional[str] = typer.Option(None, "--config", "-c", help="YAML file overriding the environment"),
    pv_count: Optional[int] = typer.Option(None, "--pv-count", help="Number of NFS persistent volumes"),
):
    """Print the PersistentVolume manifests as a YAML stream."""
    try:
        config = load_provision_config(config_file, pv_count=pv_count)
    except OriginctlError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(dump_manifests(pv_manifest(spec) for spec in pv_specs(config)), nl=False)


@app.command("exports")
def exports_cmd(
    config_file: Optional[str] = typer.Option(None, "--config", "-c", help="YAML file overriding the environment"),
    pv_count: Optional[int] = typer.Option(None, "--pv-count", help="Number of NFS persistent volumes"),
):
    """Print the NFS export entries for the volumes."""
    try:
        config = load_provision_config(config_file, pv_count=pv_count)
    except OriginctlError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(code=1)
    for spec in pv_specs(config):
        typer.echo(export_entry(spec))
