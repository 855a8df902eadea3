from taskledger.core.config import JIRA_DEFAULT_SERVER, TIMEZONE
from taskledger.core.settings import load_settings


def _clear_env(monkeypatch):
    for name in ("JIRA_PAT", "JIRA_SERVER", "TASKLEDGER_CONFIG"):
        monkeypatch.delenv(name, raising=False)


def test_defaults_when_file_missing(tmp_path, monkeypatch):
    _clear_env(monkeypatch)
    settings = load_settings(tmp_path / "none.yaml", refresh=True)
    assert settings.jira_server == JIRA_DEFAULT_SERVER
    assert settings.timezone == TIMEZONE
    assert settings.worklog_path == "worklog.yml"
    assert settings.jira_token == ""


def test_file_then_environment_override(tmp_path, monkeypatch):
    _clear_env(monkeypatch)
    cfg = tmp_path / "config.yaml"
    cfg.write_text("jira_server: https://jira.example.com\ntimezone: UTC\nunknown: 1\n")
    monkeypatch.setenv("JIRA_PAT", "secret-token")
    settings = load_settings(cfg, refresh=True)
    assert settings.jira_server == "https://jira.example.com"
    assert settings.timezone == "UTC"
    assert settings.jira_token == "secret-token"
    assert "secret-token" not in repr(settings)

    monkeypatch.setenv("JIRA_SERVER", "https://env.example.com")
    assert load_settings(cfg, refresh=True).jira_server == "https://env.example.com"


def test_config_path_from_environment(tmp_path, monkeypatch):
    _clear_env(monkeypatch)
    cfg = tmp_path / "env-config.yaml"
    cfg.write_text("worklog_path: /tmp/log.yml\n")
    monkeypatch.setenv("TASKLEDGER_CONFIG", str(cfg))
    assert load_settings(refresh=True).worklog_path == "/tmp/log.yml"


def test_invalid_yaml_falls_back_to_defaults(tmp_path, monkeypatch, caplog):
    _clear_env(monkeypatch)
    cfg = tmp_path / "broken.yaml"
    cfg.write_text("jira_server: [oops\n")
    with caplog.at_level("WARNING"):
        settings = load_settings(cfg, refresh=True)
    assert settings.jira_server == JIRA_DEFAULT_SERVER
    assert "Ignoring unreadable config" in caplog.text


def test_results_are_cached_per_path(tmp_path, monkeypatch):
    _clear_env(monkeypatch)
    cfg = tmp_path / "config.yaml"
    cfg.write_text("timezone: UTC\n")
    first = load_settings(cfg, refresh=True)
    cfg.write_text("timezone: Europe/Paris\n")
    assert load_settings(cfg) is first
    assert load_settings(cfg, refresh=True).timezone == "Europe/Paris"


def test_config_file_is_read_as_utf8(tmp_path, monkeypatch):
    _clear_env(monkeypatch)
    cfg = tmp_path / "config.yaml"
    cfg.write_bytes("worklog_path: /tmp/journal-é.yml\n".encode("utf-8"))
    assert load_settings(cfg, refresh=True).worklog_path == "/tmp/journal-é.yml"
