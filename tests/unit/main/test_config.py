from __future__ import annotations

from axiom_client.main.config import AppSettings, get_settings
from axiom_client.shared.consts import EnumEnvironment


def test_get_settings_loads_defaults(monkeypatch) -> None:
    monkeypatch.delenv("AXIOM_BASE_URL", raising=False)
    monkeypatch.delenv("AXIOM_MAX_PAGES", raising=False)
    settings = get_settings()
    assert settings.axiom.base_url.startswith("http")
    assert settings.axiom.max_pages == 10000
    assert settings.axiom.application == "Web API"
    assert settings.environment == EnumEnvironment.DEVELOPMENT


def test_settings_respect_environment_variables(monkeypatch) -> None:
    monkeypatch.setenv("AXIOM_BASE_URL", "https://historian/AxiomWebAPI")
    monkeypatch.setenv("AXIOM_USERNAME", "reader")
    monkeypatch.setenv("AXIOM_MAX_PAGES", "25")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    settings = AppSettings()

    assert settings.axiom.base_url == "https://historian/AxiomWebAPI"
    assert settings.axiom.username == "reader"
    assert settings.axiom.max_pages == 25
    assert settings.logging.level.value == "DEBUG"


def test_password_loaded_from_secret_file(tmp_path, monkeypatch) -> None:
    secret = tmp_path / "password.txt"
    secret.write_text("from-file\n", encoding="utf-8")
    monkeypatch.setenv("AXIOM_PASSWORD", "")
    monkeypatch.setenv("AXIOM_PASSWORD_FILE", str(secret))

    settings = get_settings()

    assert settings.axiom.password == "from-file"
    assert "from-file" not in repr(settings.axiom)
