# tests/config/test_config_service.py
import pytest

from giftlist.config.config_service import ConfigService


@pytest.fixture(autouse=True)
def _fresh_singleton():
    ConfigService.reset()
    yield
    ConfigService.reset()


def test_yaml_defaults_are_loaded():
    config = ConfigService()
    assert config.get("preview.fetch_timeout_ms") == 8000
    assert config.get("preview.deadline_ms") == 9000
    assert config.get("preview.marketplaces.mercadolibre.domains") == ["mercadolibre.cl"]
    assert config.get("storage.bucket") == "item-images"


def test_singleton_and_missing_keys():
    config = ConfigService()
    assert ConfigService() is config
    assert config.get("no.such.key", "dflt") == "dflt"
    assert config.get("preview.fetch_timeout_ms.deeper") is None


def test_env_overrides_yaml(monkeypatch):
    monkeypatch.setenv("APP_PORT", "9100")
    monkeypatch.setenv("STORAGE_PUBLIC_URL", "https://proj.supabase.co")
    monkeypatch.setenv("LOG_LEVEL", "")

    config = ConfigService()

    assert config.get("server.port", cast=int) == 9100
    assert config.get("storage.public_base_url") == "https://proj.supabase.co"
    assert config.get("logging.level") == "INFO"


def test_cast_failure_returns_default(monkeypatch):
    monkeypatch.setenv("APP_PORT", "eighty")
    assert ConfigService().get("server.port", 8000, cast=int) == 8000
