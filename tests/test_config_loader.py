import pytest

from ingredient_alert.config.loader import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG,
    DEFAULT_CONFIG_PATH,
    load_scan_config,
    resolve_config_path,
)
from ingredient_alert.errors import ConfigError


def test_bundled_config_loads(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    cfg = load_scan_config()

    assert cfg["alert_duration_flagged_ms"] == 5000
    assert cfg["alert_duration_safe_ms"] == 2500
    assert cfg["camera_index"] == "auto"
    assert set(DEFAULT_CONFIG) <= set(cfg)


def test_partial_file_merges_over_defaults(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("cooldown_ms: 750\nenable_speech: false\n", encoding="utf-8")

    cfg = load_scan_config(str(path))

    assert cfg["cooldown_ms"] == 750
    assert cfg["enable_speech"] is False
    assert cfg["conf_threshold"] == DEFAULT_CONFIG["conf_threshold"]


def test_empty_file_uses_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_scan_config(str(path)) == DEFAULT_CONFIG


def test_env_var_overrides_default_path(tmp_path, monkeypatch):
    path = tmp_path / "env.yaml"
    path.write_text("frame_width: 1280\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    assert resolve_config_path() == str(path)
    assert load_scan_config()["frame_width"] == 1280
    assert resolve_config_path("explicit.yaml") == "explicit.yaml"


def test_default_path_without_env(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    assert resolve_config_path() == DEFAULT_CONFIG_PATH


def test_missing_file_raises(tmp_path):
    with pytest.raises(ConfigError):
        load_scan_config(str(tmp_path / "nope.yaml"))


def test_non_mapping_raises(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_scan_config(str(path))


def test_invalid_yaml_raises(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("key: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_scan_config(str(path))
