"""
Environment-backed settings.

Values are read at call time so tests can patch `os.environ` without
reloading modules.
"""

from __future__ import annotations

import os


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def app_env() -> str:
    return _env_str("APP_ENV", "development").lower()


def is_production() -> bool:
    return app_env() == "production"


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()


def jwt_secret() -> str:
    # Local default keeps development simple.
    # In production, set JWT_SECRET in environment.
    return _env_str("JWT_SECRET", "dev-change-this-secret")


def jwt_algorithm() -> str:
    return _env_str("JWT_ALG", "HS256")


def session_token_ttl_s() -> int:
    return _env_int("SESSION_TOKEN_TTL_S", 60 * 60 * 24)


def session_cookie_max_age_s() -> int:
    return _env_int("SESSION_COOKIE_MAX_AGE_S", 60 * 60 * 24 * 7)


def session_cookie_name() -> str:
    return _env_str("SESSION_COOKIE_NAME", "id")


def auth_bypass_operations() -> frozenset[str]:
    return frozenset(_env_list("AUTH_BYPASS_OPERATIONS", ["SignIn", "SignUp"]))


def survey_timezone() -> str:
    return _env_str("SURVEY_TIMEZONE", "Asia/Seoul")


def cors_origins() -> list[str]:
    return _env_list(
        "CORS_ORIGINS",
        ["http://localhost:3000", "https://sign-app-one.vercel.app"],
    )


def db_command_timeout_s() -> float:
    return _env_float("DB_COMMAND_TIMEOUT_S", 30.0)


def db_pool_max_size() -> int:
    return _env_int("DB_POOL_MAX_SIZE", 5)
