from types import SimpleNamespace

import pytest

from tunnel_conf.config import Settings, load_yaml, parse_settings


def test_defaults():
    s = Settings()
    assert s.log_level == "WARNING"
    assert s.log_json is False
    assert s.log_file is None
    assert s.validate() == []


def test_from_env_parsing():
    env = {
        "TUNCONF_LOG_LEVEL": "debug",
        "TUNCONF_LOG_JSON": "yes",
        "TUNCONF_LOG_FILE": "/tmp/tunnel-conf.log",
        "OTHER_LOG_LEVEL": "ERROR",
    }
    s = Settings.from_env(env)
    assert s.log_level == "DEBUG"
    assert s.log_json is True
    assert s.log_file == "/tmp/tunnel-conf.log"


def test_from_env_ignores_unparsable_bool():
    assert Settings.from_env({"TUNCONF_LOG_JSON": "maybe"}).log_json is False


def test_apply_args_overrides():
    s = Settings.from_env({"TUNCONF_LOG_LEVEL": "ERROR"})
    s.apply_args_overrides(SimpleNamespace(log_level="info", log_json=True, log_file=None))
    assert s.log_level == "INFO"
    assert s.log_json is True
    assert s.log_file is None


def test_read_file_layers_over_base(tmp_path):
    p = tmp_path / "settings.yml"
    p.write_text("log-level: error\nlog-json: false\n", encoding="utf-8")
    base = Settings.from_env({"TUNCONF_LOG_JSON": "1", "TUNCONF_LOG_FILE": "x.log"})
    s = Settings.read_file(str(p), base=base)
    assert s.log_level == "ERROR"
    assert s.log_json is False
    assert s.log_file == "x.log"


def test_parse_settings_clears_log_file():
    s = parse_settings({"log-file": None}, Settings(log_file="x.log"))
    assert s.log_file is None


def test_load_yaml_rejects_non_mapping():
    assert load_yaml("") == {}
    with pytest.raises(ValueError):
        load_yaml("- a\n- b\n")


def test_validate_or_raise_on_bad_level():
    s = Settings(log_level="LOUD")
    assert any("log_level invalid" in e for e in s.validate())
    with pytest.raises(ValueError):
        s.validate_or_raise()
