"""Secure the integrated registry with a certificate signed by the master CA.

The registry is switched to HTTPS, exposed through a passthrough route and
the master CA is trusted by the local docker daemon for every name the
registry answers to. Restarting docker bounces the origin container, so the
API is awaited again before the stage completes.
"""
import json
import logging
from pathlib import Path
from typing import List

from originctl.errors import CommandError
from originctl.modules.context import StageContext
from originctl.modules.readiness import wait_for_api

logger = logging.getLogger("originctl.secure_registry")

REGISTRY_NAMESPACE = "default"
REGISTRY_DC = "dc/docker-registry"
REGISTRY_SERVICE_HOST = "docker-registry.default.svc.cluster.local"
REGISTRY_PORT = 5000
REGISTRY_SECRET = "registry-secret"
REGISTRY_SA = "registry"
REGISTRY_VOLUME = "registry-certificates"
REGISTRY_ROUTE = "docker-registry"
SECRETS_MOUNT = "/etc/secrets"

# Both probes default to plain HTTP and would fail once TLS is on
PROBE_PATCH = {
    "spec": {
        "template": {
            "spec": {
                "containers": [{
                    "name": "registry",
                    "livenessProbe": {"httpGet": {"scheme": "HTTPS"}},
                    "readinessProbe": {"httpGet": {"scheme": "HTTPS"}},
                }]
            }
        }
    }
}


def registry_hostnames(ctx: StageContext, service_ip: str) -> List[str]:
    names = [REGISTRY_SERVICE_HOST, ctx.config.registry_route_host]
    if service_ip:
        names.insert(0, service_ip)
    return names


def get_registry_ip(ctx: StageContext) -> str:
    ip = ctx.oc.oc_output(
        "get", "svc", "docker-registry", "-o", "jsonpath={.spec.clusterIP}",
        namespace=REGISTRY_NAMESPACE,
    )
    if not ip and not ctx.dry_run:
        raise CommandError(["oc", "get", "svc", "docker-registry"], 1,
                           stderr="docker-registry service has no cluster IP")
    return ip


def create_server_cert(ctx: StageContext, hostnames: List[str]) -> None:
    master = Path(ctx.config.master_config_dir)
    ctx.oc.oadm(
        "ca", "create-server-cert",
        f"--signer-cert={master / 'ca.crt'}",
        f"--signer-key={master / 'ca.key'}",
        f"--signer-serial={master / 'ca.serial.txt'}",
        f"--hostnames={','.join(hostnames)}",
        f"--cert={master / 'registry.crt'}",
        f"--key={master / 'registry.key'}",
    )


def configure_registry_tls(ctx: StageContext) -> None:
    master = Path(ctx.config.master_config_dir)
    ns = REGISTRY_NAMESPACE
    oc = ctx.oc

    if oc.exists("secret", REGISTRY_SECRET, namespace=ns):
        logger.info(f"⏭️  Secret {REGISTRY_SECRET} already exists")
    else:
        oc.oc("secrets", "new", REGISTRY_SECRET,
              str(master / "registry.crt"), str(master / "registry.key"), namespace=ns)

    linked = oc.oc_output("get", "sa", REGISTRY_SA, "-o", "jsonpath={.secrets[*].name}", namespace=ns)
    if REGISTRY_SECRET not in linked.split():
        oc.oc("secrets", "add", f"serviceaccounts/{REGISTRY_SA}", f"secrets/{REGISTRY_SECRET}", namespace=ns)

    # --overwrite replaces the named volume left by an earlier run
    oc.oc("volume", REGISTRY_DC, "--add", "--overwrite", f"--name={REGISTRY_VOLUME}", "--type=secret",
          f"--secret-name={REGISTRY_SECRET}", "-m", SECRETS_MOUNT, namespace=ns)
    oc.oc("env", REGISTRY_DC,
          f"REGISTRY_HTTP_TLS_CERTIFICATE={SECRETS_MOUNT}/registry.crt",
          f"REGISTRY_HTTP_TLS_KEY={SECRETS_MOUNT}/registry.key", namespace=ns)
    oc.oc("patch", REGISTRY_DC, "-p", json.dumps(PROBE_PATCH), namespace=ns)


def expose_registry(ctx: StageContext) -> None:
    host = ctx.config.registry_route_host
    if ctx.oc.exists("route", REGISTRY_ROUTE, namespace=REGISTRY_NAMESPACE):
        logger.info(f"⏭️  Route {REGISTRY_ROUTE} already exists")
        return
    ctx.oc.oc("create", "route", "passthrough", REGISTRY_ROUTE,
              "--service=docker-registry", f"--hostname={host}",
              namespace=REGISTRY_NAMESPACE)
    logger.info(f"🌐 Registry exposed at https://{host}")


def trust_registry_ca(ctx: StageContext, hostnames: List[str]) -> None:
    ca = Path(ctx.config.master_config_dir) / "ca.crt"
    certs_dir = Path(ctx.config.docker_certs_dir)
    for host in hostnames:
        dest = certs_dir / f"{host}:{REGISTRY_PORT}" / "ca.crt"
        ctx.runner.run(["install", "-D", "-m", "0644", str(ca), str(dest)])
        logger.debug(f"Trusted master CA for {host}:{REGISTRY_PORT}")


def secure_registry(ctx: StageContext) -> None:
    logger.info("🔒 Securing the docker registry")
    service_ip = get_registry_ip(ctx)
    hostnames = registry_hostnames(ctx, service_ip)
    logger.info(f"Registry hostnames: {', '.join(hostnames)}")

    create_server_cert(ctx, hostnames)
    configure_registry_tls(ctx)
    expose_registry(ctx)
    trust_registry_ca(ctx, hostnames)

    logger.info("🔁 Restarting docker to pick up the registry CA")
    ctx.runner.run(["systemctl", "restart", "docker"])
    wait_for_api(ctx.config, ctx.runner)
    logger.info("✅ Docker registry secured")
