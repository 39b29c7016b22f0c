import pytest

from lead_dashboard.core import config


def setup_function(function):
    config.get_settings.cache_clear()


def teardown_function(function):
    config.get_settings.cache_clear()


def test_get_settings_reads_env(monkeypatch):
    monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "abc123")
    monkeypatch.setenv("SECRET_KEY", "s3cret")
    monkeypatch.setenv("AUTH_USERNAME", "syn")
    monkeypatch.setenv("AUTH_PASSWORD", "pw")
    monkeypatch.setenv("PORT", "9100")
    monkeypatch.setenv("SEARCH_MAX_RESULTS", "10")
    monkeypatch.setenv("SEARCH_MAX_WORKERS", "4")
    monkeypatch.setenv("SESSION_COOKIE_SECURE", "yes")

    settings = config.get_settings()

    assert settings.google_maps_api_key == "abc123"
    assert settings.secret_key == "s3cret"
    assert settings.auth_username == "syn"
    assert settings.auth_password == "pw"
    assert settings.port == 9100
    assert settings.max_result_count == 10
    assert settings.search_max_workers == 4
    assert settings.session_cookie_secure is True


def test_get_settings_warns_when_missing(monkeypatch, caplog):
    for name in ("GOOGLE_MAPS_API_KEY", "SECRET_KEY", "AUTH_USERNAME", "AUTH_PASSWORD", "PORT"):
        monkeypatch.setenv(name, "")

    with caplog.at_level("WARNING"):
        settings = config.get_settings()

    messages = " ".join(caplog.messages)
    assert "GOOGLE_MAPS_API_KEY is not configured" in messages
    assert "SECRET_KEY is not set" in messages
    assert "every login will be rejected" in messages
    assert settings.google_maps_api_key == ""
    assert settings.max_result_count == 20
    assert settings.session_cookie_secure is False


def test_get_settings_is_cached(monkeypatch):
    monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "first")
    first = config.get_settings()
    monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "second")
    assert config.get_settings() is first


def test_require_api_key():
    assert config.require_api_key(config.Settings(google_maps_api_key="key")) == "key"
    with pytest.raises(config.ConfigError):
        config.require_api_key(config.Settings(google_maps_api_key=""))
