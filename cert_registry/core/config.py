from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal

AppEnv = Literal["dev", "test", "prod"]
LogLevel = Literal["debug", "info", "warning", "error"]

_TRUTHY = ("1", "true", "yes", "on")


def _getenv(name: str, default: str) -> str:
    return os.environ.get(name, default).strip()


@dataclass(frozen=True)
class Settings:
    app_env: AppEnv
    log_level: LogLevel
    log_json: bool
    port: int
    database_url: str | None
    redis_url: str | None
    admin_address: str
    batch_max_size: int
    signing_key_path: str | None = None
    feed_backlog_max: int = 10_000

    @property
    def is_dev(self) -> bool:
        return self.app_env == "dev"

    @property
    def is_test(self) -> bool:
        return self.app_env == "test"

    @property
    def is_prod(self) -> bool:
        return self.app_env == "prod"


def _parse_int(name: str, raw: str, *, minimum: int) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer (got {raw!r})") from None
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum} (got {value})")
    return value


def load_settings() -> Settings:
    app_env_raw = _getenv("APP_ENV", "dev").lower()
    log_level_raw = _getenv("LOG_LEVEL", "info").lower()
    log_json_raw = _getenv("LOG_JSON", "false").lower()
    port_raw = _getenv("PORT", "8000")
    batch_max_raw = _getenv("BATCH_MAX_SIZE", "500")
    feed_backlog_raw = _getenv("FEED_BACKLOG_MAX", "10000")

    if app_env_raw not in ("dev", "test", "prod"):
        raise ValueError(f"APP_ENV must be dev|test|prod (got {app_env_raw!r})")

    if log_level_raw not in ("debug", "info", "warning", "error"):
        raise ValueError(
            f"LOG_LEVEL must be debug|info|warning|error (got {log_level_raw!r})"
        )

    port = _parse_int("PORT", port_raw, minimum=1)
    batch_max_size = _parse_int("BATCH_MAX_SIZE", batch_max_raw, minimum=1)
    feed_backlog_max = _parse_int("FEED_BACKLOG_MAX", feed_backlog_raw, minimum=1)

    # The deployer address receives the one AdminCredential at bootstrap.
    admin_address = _getenv("ADMIN_ADDRESS", "0xadmin")
    if not admin_address:
        raise ValueError("ADMIN_ADDRESS must be non-empty")

    database_url = _getenv("DATABASE_URL", "") or None
    redis_url = _getenv("REDIS_URL", "") or None
    signing_key_path = _getenv("SIGNING_KEY_PATH", "") or None

    return Settings(  # type: ignore[arg-type]
        app_env=app_env_raw,
        log_level=log_level_raw,
        log_json=log_json_raw in _TRUTHY,
        port=port,
        database_url=database_url,
        redis_url=redis_url,
        admin_address=admin_address,
        batch_max_size=batch_max_size,
        signing_key_path=signing_key_path,
        feed_backlog_max=feed_backlog_max,
    )


SETTINGS = load_settings()
