"""Settings loading tests."""

import pytest

from config import DEFAULT_CHAT_MODEL, Settings


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "CHAT_MODEL", "API_KEY", "BASE_URL", "SERPER_API_KEY", "SERPER_URL",
        "SEARCH_RESULT_COUNT", "SEARCH_TIMEOUT", "RESPONDER_API_KEY", "CORS_ORIGINS",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("config.load_dotenv", lambda: False)
    return monkeypatch


class TestSettings:

    def test_defaults(self, clean_env):
        settings = Settings.from_env()
        assert settings.chat_model == DEFAULT_CHAT_MODEL == "gpt-3.5-turbo"
        assert settings.base_url is None
        assert settings.search_timeout is None
        assert settings.search_result_count == 10
        assert settings.cors_origins == ("*",)

    def test_overrides(self, clean_env):
        clean_env.setenv("CHAT_MODEL", "gpt-4o-mini")
        clean_env.setenv("API_KEY", "sk-test")
        clean_env.setenv("BASE_URL", "http://localhost:11434/v1")
        clean_env.setenv("SEARCH_TIMEOUT", "12.5")
        clean_env.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
        settings = Settings.from_env()
        assert settings.chat_model == "gpt-4o-mini"
        assert settings.api_key == "sk-test"
        assert settings.base_url == "http://localhost:11434/v1"
        assert settings.search_timeout == 12.5
        assert settings.cors_origins == ("http://a.test", "http://b.test")

    def test_empty_model_falls_back_to_default(self, clean_env):
        clean_env.setenv("CHAT_MODEL", "")
        assert Settings.from_env().chat_model == DEFAULT_CHAT_MODEL

    def test_bad_integer_raises(self, clean_env):
        clean_env.setenv("SEARCH_RESULT_COUNT", "many")
        with pytest.raises(ValueError):
            Settings.from_env()

    def test_frozen(self):
        settings = Settings()
        with pytest.raises(AttributeError):
            settings.chat_model = "other"  # type: ignore[misc]
