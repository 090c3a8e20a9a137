import pytest

from originctl.modules.context import StageContext
from originctl.modules.markers import MarkerStore
from originctl.modules.models import ProvisionConfig
from originctl.tests.fakes import FakeRunner


@pytest.fixture
def config(tmp_path):
    master = tmp_path / "master"
    master.mkdir()
    return ProvisionConfig(
        master_config_dir=str(master),
        marker_dir=str(tmp_path / "markers"),
        bin_dir=str(tmp_path / "bin"),
        kube_dir=str(tmp_path / "kube"),
        docker_certs_dir=str(tmp_path / "certs.d"),
        nfs_root=str(tmp_path / "nfs"),
        exports_file=str(tmp_path / "exports"),
        pv_count=3,
        wait_attempts=3,
        wait_interval=0,
    )


@pytest.fixture
def runner():
    return FakeRunner(rules=[
        ("get svc docker-registry", 0, "172.30.1.1"),
        ("get pv ", 1, ""),
        ("get user ", 1, ""),
        ("get project ", 1, ""),
        ("get secret ", 1, ""),
        ("get route ", 1, ""),
    ])


@pytest.fixture
def ctx(config, runner):
    return StageContext(config=config, runner=runner, markers=MarkerStore(config.marker_dir))
