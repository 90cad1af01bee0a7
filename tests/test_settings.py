import pytest
from pydantic import ValidationError

from config.settings import Settings


def make_settings(**overrides):
    return Settings(_env_file=None, **overrides)


def test_wildcard_cors_rejected_in_production():
    with pytest.raises(ValidationError, match="Wildcard CORS"):
        make_settings(ENVIRONMENT="production", CORS_ORIGINS="*")


def test_wildcard_cors_rejected_when_production_comes_from_env_file(tmp_path, monkeypatch):
    monkeypatch.delenv("ENVIRONMENT", raising=False)
    monkeypatch.delenv("CORS_ORIGINS", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("ENVIRONMENT=production\nCORS_ORIGINS=*\n")

    with pytest.raises(ValidationError, match="Wildcard CORS"):
        Settings(_env_file=env_file)


def test_wildcard_cors_allowed_outside_production(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "production")
    settings = make_settings(ENVIRONMENT="development", CORS_ORIGINS="*")
    assert settings.cors_origins_list == ["*"]


def test_cors_origins_list_splits_and_trims():
    settings = make_settings(CORS_ORIGINS="https://a.example, https://b.example ,")
    assert settings.cors_origins_list == ["https://a.example", "https://b.example"]


def test_unknown_storage_backend_rejected():
    with pytest.raises(ValidationError):
        make_settings(STORAGE_BACKEND="redis")
