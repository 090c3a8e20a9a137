import typer
import logging
import sys
from originctl.commands import provision, status, reset, verify, manifests
from originctl.config import Config
from originctl.logging import setup_audit_log

# Create a callback for global options
app = typer.Typer(help="Provision an all-in-one OpenShift Origin VM")

# Global debug flag
debug_mode = False

# Configure logging
def setup_logging(debug_mode: bool = False):
    """Configure logging based on debug mode."""
    log_level = logging.DEBUG if debug_mode else Config.LOG_LEVEL
    logging.basicConfig(
        level=log_level,
        format=Config.LOG_FORMAT,
        handlers=[
            logging.StreamHandler()
        ]
    )
    # Disable debug logging for noisy libraries
    if not debug_mode:
        logging.getLogger('urllib3').setLevel(logging.WARNING)
        logging.getLogger('kubernetes').setLevel(logging.WARNING)
    setup_audit_log()

# Add all command groups
app.add_typer(provision.app, name="provision")
app.add_typer(status.app, name="status")
app.add_typer(reset.app, name="reset")
app.add_typer(verify.app, name="verify")
app.add_typer(manifests.app, name="manifests")

@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", help="Address to bind"),
    port: int = typer.Option(8000, help="Port to listen on"),
):
    """Serve the provisioning HTTP API."""
    import uvicorn
    uvicorn.run("originctl.api.main:app", host=host, port=port)

# Global options callback
@app.callback()
def main(
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug logging"),
):
    """originctl - all-in-one OpenShift provisioner."""
    global debug_mode
    debug_mode = debug
    setup_logging(debug)
    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.debug("Debug mode enabled")

def run():
    try:
        app()
    except Exception as e:
        if debug_mode:
            import traceback
            logging.error(f"Unhandled exception: {e}\n{traceback.format_exc()}")
        else:
            logging.error(f"Error: {e}")
        sys.exit(1)

if __name__ == "__main__":
    run()
