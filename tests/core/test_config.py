from __future__ import annotations

import pytest

from cert_registry.core.config import AppEnv, Settings, load_settings

# ---- valid values ----


def test_load_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "APP_ENV",
        "LOG_LEVEL",
        "LOG_JSON",
        "DATABASE_URL",
        "REDIS_URL",
        "ADMIN_ADDRESS",
        "BATCH_MAX_SIZE",
        "SIGNING_KEY_PATH",
        "FEED_BACKLOG_MAX",
    ):
        monkeypatch.delenv(name, raising=False)
    settings = load_settings()
    assert settings.app_env == "dev"
    assert settings.log_level == "info"
    assert settings.log_json is False
    assert settings.database_url is None
    assert settings.redis_url is None
    assert settings.admin_address == "0xadmin"
    assert settings.batch_max_size == 500
    assert settings.signing_key_path is None
    assert settings.feed_backlog_max == 10_000


def test_load_settings_respects_env_vars(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", "prod")
    monkeypatch.setenv("LOG_LEVEL", "error")
    monkeypatch.setenv("LOG_JSON", "true")
    monkeypatch.setenv("ADMIN_ADDRESS", "0xdeployer")
    monkeypatch.setenv("BATCH_MAX_SIZE", "50")
    settings = load_settings()
    assert settings.app_env == "prod"
    assert settings.log_level == "error"
    assert settings.log_json is True
    assert settings.admin_address == "0xdeployer"
    assert settings.batch_max_size == 50


def test_load_settings_normalizes_case_and_whitespace(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("APP_ENV", "  PROD  ")
    monkeypatch.setenv("LOG_LEVEL", " DEBUG")
    settings = load_settings()
    assert settings.app_env == "prod"
    assert settings.log_level == "debug"


def test_blank_urls_mean_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "   ")
    monkeypatch.setenv("REDIS_URL", "")
    settings = load_settings()
    assert settings.database_url is None
    assert settings.redis_url is None


# ---- invalid values ----


def test_load_settings_rejects_invalid_app_env(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("APP_ENV", "staging")
    with pytest.raises(ValueError, match="APP_ENV must be dev|test|prod"):
        load_settings()


def test_load_settings_rejects_invalid_log_level(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("APP_ENV", "dev")
    monkeypatch.setenv("LOG_LEVEL", "verbose")
    with pytest.raises(ValueError, match="LOG_LEVEL must be debug|info|warning|error"):
        load_settings()


@pytest.mark.parametrize("raw", ["abc", "1.5", ""])
def test_load_settings_rejects_non_integer_batch_size(
    monkeypatch: pytest.MonkeyPatch, raw: str
) -> None:
    monkeypatch.setenv("BATCH_MAX_SIZE", raw)
    with pytest.raises(ValueError, match="BATCH_MAX_SIZE must be an integer"):
        load_settings()


def test_load_settings_rejects_zero_batch_size(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BATCH_MAX_SIZE", "0")
    with pytest.raises(ValueError, match="BATCH_MAX_SIZE must be >= 1"):
        load_settings()


def test_load_settings_rejects_bad_port(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "http")
    with pytest.raises(ValueError, match="PORT must be an integer"):
        load_settings()


def test_load_settings_rejects_blank_admin(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ADMIN_ADDRESS", "   ")
    with pytest.raises(ValueError, match="ADMIN_ADDRESS must be non-empty"):
        load_settings()


# ---- Settings properties ----


def _make_settings(app_env: AppEnv = "dev") -> Settings:
    return Settings(  # type: ignore[arg-type]
        app_env=app_env,
        log_level="info",
        log_json=False,
        port=8000,
        database_url=None,
        redis_url=None,
        admin_address="0xadmin",
        batch_max_size=500,
    )


def test_settings_env_flags() -> None:
    assert _make_settings("dev").is_dev is True
    assert _make_settings("test").is_test is True
    prod = _make_settings("prod")
    assert (prod.is_dev, prod.is_test, prod.is_prod) == (False, False, True)


def test_settings_is_frozen() -> None:
    s = _make_settings()
    with pytest.raises(AttributeError):
        s.admin_address = "0xother"  # type: ignore[misc]


def test_feed_backlog_max_must_be_positive(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FEED_BACKLOG_MAX", "0")
    with pytest.raises(ValueError, match="FEED_BACKLOG_MAX must be >= 1"):
        load_settings()
