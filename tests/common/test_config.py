import pytest
from omegaconf import OmegaConf
from trafficpulse.common.config import ConfigManager
from trafficpulse.common.exceptions import ConfigurationError

@pytest.fixture
def config_dir(tmp_path):
    (tmp_path / "config.yaml").write_text(
        "database:\n"
        "  url: sqlite://\n"
        "resolver:\n"
        "  tolerance_degrees: 0.00001\n"
        "server:\n"
        "  port: 9000\n"
        "auth:\n"
        "  secret_key: abc\n"
    )
    return tmp_path

def test_structure_defaults():
    cfg = ConfigManager.structure()
    assert cfg.resolver.tolerance_degrees == 0.00001
    assert cfg.database.query_timeout_seconds == 5.0
    assert cfg.server.api_prefix == "/api"
    assert cfg.simulation.revenue_per_violation == 1000.0

def test_structure_merges_partial_settings():
    cfg = ConfigManager.structure({"server": {"port": 9100}})
    assert cfg.server.port == 9100
    assert cfg.server.host == "0.0.0.0"

def test_structure_rejects_unknown_keys():
    with pytest.raises(ConfigurationError):
        ConfigManager.structure({"server": {"no_such_key": 1}})

def test_structure_rejects_wrong_types():
    with pytest.raises(ConfigurationError):
        ConfigManager.structure({"server": {"port": "not-a-port"}})

def test_structure_rejects_non_positive_timeout():
    with pytest.raises(ConfigurationError):
        ConfigManager.structure({"database": {"query_timeout_seconds": 0}})

def test_structure_ignores_hydra_node():
    raw = OmegaConf.create({"hydra": {"run": {"dir": "."}}, "server": {"port": 8100}})
    cfg = ConfigManager.structure(raw)
    assert cfg.server.port == 8100
    assert "hydra" not in cfg

def test_load_app_config_from_file(config_dir):
    cfg = ConfigManager(config_dir).load_app_config()
    assert cfg.server.port == 9000
    assert cfg.auth.secret_key == "abc"
    # Sections absent from the file fall back to defaults
    assert cfg.simulation.enabled is True

def test_load_app_config_overrides(config_dir):
    cfg = ConfigManager(config_dir).load_app_config(overrides=["server.port=9500", "logging.level=DEBUG"])
    assert cfg.server.port == 9500
    assert cfg.logging.level == "DEBUG"

def test_load_app_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        ConfigManager(tmp_path).load_app_config("absent")

def test_load_app_config_missing_section(tmp_path):
    (tmp_path / "config.yaml").write_text("database:\n  url: sqlite://\n")
    with pytest.raises(ConfigurationError):
        ConfigManager(tmp_path).load_app_config()

def test_repository_config_is_valid(monkeypatch):
    monkeypatch.delenv("TRAFFICPULSE_DATABASE_URL", raising=False)
    monkeypatch.delenv("ADMIN_KEY_SECRET", raising=False)
    cfg = ConfigManager().load_app_config()
    assert cfg.database.url == "sqlite:///data/trafficpulse.db"
    assert cfg.auth.secret_key == "change-me"
    assert cfg.resolver.tolerance_degrees == 0.00001

def test_repository_config_reads_environment(monkeypatch):
    monkeypatch.setenv("TRAFFICPULSE_DATABASE_URL", "sqlite://")
    cfg = ConfigManager().load_app_config()
    assert cfg.database.url == "sqlite://"
