"""Data models for the originctl provisioner."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any
from enum import Enum
from pathlib import Path


class Stage(str, Enum):
    """Provisioning stages, in the order they run."""
    BINARIES = 'binaries'
    REGISTRY = 'registry'
    ROUTER = 'router'
    SECURE_REGISTRY = 'secure-registry'
    PERSISTENT_VOLUMES = 'persistent-volumes'
    TEMPLATES = 'templates'
    USERS = 'users'

    @classmethod
    def ordered(cls) -> List['Stage']:
        return list(cls)


class ProvisionPhase(str, Enum):
    """Phases of a provisioning run."""
    NOT_STARTED = 'not_started'
    WAITING_FOR_API = 'waiting_for_api'
    RUNNING_STAGES = 'running_stages'
    COMPLETED = 'completed'
    FAILED = 'failed'


@dataclass
class ProvisionConfig:
    """Everything the stages need to know about the target VM."""
    api_url: str = 'https://127.0.0.1:8443'
    health_path: str = '/healthz/ready'
    container_name: str = 'origin'
    wait_attempts: int = 60
    wait_interval: float = 5.0
    http_timeout: float = 5.0
    master_config_dir: str = '/var/lib/origin/openshift.local.config/master'
    marker_dir: str = '/var/lib/originctl/markers'
    bin_dir: str = '/usr/local/bin'
    kube_dir: str = '/root/.kube'
    docker_certs_dir: str = '/etc/docker/certs.d'
    routing_suffix: str = 'apps.10.2.2.2.xip.io'
    nfs_root: str = '/nfsvolumes'
    nfs_server: str = '10.2.2.2'
    nfs_owner: str = 'nfsnobody:nfsnobody'
    exports_file: str = '/etc/exports'
    pv_count: int = 10
    pv_capacity: str = '10Gi'
    catalogs: List[str] = field(default_factory=list)
    catalog_namespace: str = 'openshift'
    admin_user: str = 'admin'
    developer_user: str = 'user'
    developer_project: Optional[str] = None
    identity_provider: str = 'anypassword'

    @property
    def admin_kubeconfig(self) -> str:
        return str(Path(self.master_config_dir) / 'admin.kubeconfig')

    @property
    def health_url(self) -> str:
        return self.api_url.rstrip('/') + '/' + self.health_path.lstrip('/')

    @property
    def registry_route_host(self) -> str:
        return f'hub.{self.routing_suffix}'


@dataclass
class PersistentVolumeSpec:
    """An NFS-backed persistent volume derived from its index."""
    index: int
    nfs_root: str
    server: str
    capacity: str = '10Gi'
    access_modes: List[str] = field(default_factory=lambda: ['ReadWriteOnce', 'ReadWriteMany'])
    reclaim_policy: str = 'Recycle'

    @property
    def name(self) -> str:
        return f'pv{self.index:02d}'

    @property
    def path(self) -> str:
        return f"{self.nfs_root.rstrip('/')}/{self.name}"


@dataclass
class StageResult:
    """Outcome of a single stage."""
    stage: Stage
    skipped: bool = False
    success: bool = True
    message: str = ''


@dataclass
class ProvisionState:
    """Tracks the state of a provisioning run."""
    phase: ProvisionPhase = ProvisionPhase.NOT_STARTED
    results: List[StageResult] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def update_phase(self, phase: ProvisionPhase) -> None:
        """Update the provisioning phase."""
        self.phase = phase

    def add_error(self, error: str) -> None:
        """Add an error message to the provisioning state."""
        self.errors.append(error)

    @property
    def success(self) -> bool:
        return self.phase == ProvisionPhase.COMPLETED and not self.errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            'phase': self.phase.value,
            'success': self.success,
            'results': [
                {
                    'stage': r.stage.value,
                    'skipped': r.skipped,
                    'success': r.success,
                    'message': r.message,
                }
                for r in self.results
            ],
            'errors': list(self.errors),
            'metadata': dict(self.metadata),
        }
