import pytest

from originctl.config import Config
from originctl.errors import ConfigError
from originctl.modules.settings import load_provision_config, read_config_file


def test_defaults_come_from_config(monkeypatch):
    monkeypatch.setattr(Config, "CONFIG_FILE", "")
    monkeypatch.setattr(Config, "PV_COUNT", 7)
    monkeypatch.setattr(Config, "CATALOGS", "a.json, https://x/b.json,")

    config = load_provision_config()

    assert config.pv_count == 7
    assert config.catalogs == ["a.json", "https://x/b.json"]
    assert config.admin_user == Config.ADMIN_USER


def test_yaml_file_overrides_environment(tmp_path):
    path = tmp_path / "originctl.yaml"
    path.write_text("""
pv_count: 4
nfs_server: 192.168.33.10
catalogs:
  - /vagrant/templates
developer_project: demo
""")

    config = load_provision_config(str(path))

    assert config.pv_count == 4
    assert config.nfs_server == "192.168.33.10"
    assert config.catalogs == ["/vagrant/templates"]
    assert config.developer_project == "demo"


def test_keyword_overrides_win_and_none_is_ignored(tmp_path):
    path = tmp_path / "originctl.yaml"
    path.write_text("pv_count: 4\n")

    assert load_provision_config(str(path), pv_count=2).pv_count == 2
    assert load_provision_config(str(path), pv_count=None).pv_count == 4


def test_schema_violation(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("pv_count: lots\n")

    with pytest.raises(ConfigError, match="validation"):
        read_config_file(str(path))


def test_unknown_key_in_file(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("registry_replicas: 3\n")

    with pytest.raises(ConfigError):
        load_provision_config(str(path))


def test_bad_capacity(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("pv_capacity: 10GB\n")

    with pytest.raises(ConfigError):
        read_config_file(str(path))


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_provision_config(str(tmp_path / "missing.yaml"))


def test_unknown_override():
    with pytest.raises(ConfigError):
        load_provision_config(registry_replicas=3)


def test_accounts_must_differ():
    with pytest.raises(ConfigError):
        load_provision_config(admin_user="same", developer_user="same")


def test_derived_paths(tmp_path):
    config = load_provision_config(master_config_dir=str(tmp_path), routing_suffix="apps.example.com")
    assert config.admin_kubeconfig == str(tmp_path / "admin.kubeconfig")
    assert config.registry_route_host == "hub.apps.example.com"
    assert config.health_url.endswith("/healthz/ready")
