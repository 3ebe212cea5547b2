import pytest
from pydantic import ValidationError

from medseller.conf.config import PROJECT_ROOT, Settings, resolve_data_path, validate_required_settings


def test_defaults():
    settings = Settings()

    assert settings.PRICE_CHEAP_THRESHOLD == 200
    assert settings.PRICE_PREMIUM_THRESHOLD == 500
    assert settings.RESULT_LIMIT == 5
    assert settings.SWEEP_RESULT_LIMIT == 3
    assert settings.FEATURED_MAX_ID == 3
    assert settings.MIN_TERM_LENGTH == 3
    assert settings.CHAT_PROXY_TIMEOUT == 30.0
    assert settings.intents_file == PROJECT_ROOT / "data" / "intents.yaml"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("RESULT_LIMIT", "8")
    monkeypatch.setenv("CURRENCY_SYMBOL", "$")

    settings = Settings()

    assert settings.RESULT_LIMIT == 8
    assert settings.CURRENCY_SYMBOL == "$"


def test_cheap_threshold_must_be_below_premium():
    with pytest.raises(ValidationError, match="PRICE_CHEAP_THRESHOLD"):
        Settings(PRICE_CHEAP_THRESHOLD=600, PRICE_PREMIUM_THRESHOLD=500)


def test_api_key_is_secret():
    settings = Settings(CHAT_PROXY_API_KEY="abc")

    assert "abc" not in repr(settings)
    assert settings.CHAT_PROXY_API_KEY.get_secret_value() == "abc"


def test_absolute_paths_are_kept(tmp_path):
    assert resolve_data_path(tmp_path / "x.json") == tmp_path / "x.json"
    assert resolve_data_path("data/x.json") == PROJECT_ROOT / "data" / "x.json"


class TestValidateRequiredSettings:
    def test_bundled_data_is_valid(self):
        validate_required_settings(Settings())

    def test_missing_intent_tables_is_fatal(self, tmp_path):
        settings = Settings(INTENTS_PATH=str(tmp_path / "missing.yaml"))

        with pytest.raises(RuntimeError, match="INTENTS_PATH"):
            validate_required_settings(settings)

    def test_missing_catalog_only_warns(self, tmp_path, caplog):
        settings = Settings(CATALOG_PATH=str(tmp_path / "missing.json"))

        validate_required_settings(settings)

        assert "CATALOG_PATH not found" in caplog.text

    def test_localhost_proxy_in_production_warns(self, caplog):
        settings = Settings(PUBLIC_BASE_URL="https://shop.example.com")

        validate_required_settings(settings)

        assert "CHAT_PROXY_URL points to localhost" in caplog.text
