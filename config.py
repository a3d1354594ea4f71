import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


def _get(key, default=None):
    # env.yaml wins, then the process environment
    return data.get(key, os.environ.get(key, default))


def _get_bool(key, default):
    value = _get(key, default)
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


class ApplicationConfig:
    DB_URI = _get("DB_URI", "sqlite+aiosqlite:///./sessions.db")
    SESSION_STORE_BACKEND = _get("SESSION_STORE_BACKEND", "sql")
    API_PORT = int(_get("API_PORT", 8000))
    API_HOST = _get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = _get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = _get_bool("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = _get("LOG_LEVEL", "INFO")
    # No defaults: a missing secret must fail at startup
    ACCESS_TOKEN_SECRET = _get("ACCESS_TOKEN_SECRET")
    REFRESH_TOKEN_SECRET = _get("REFRESH_TOKEN_SECRET")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(_get("ACCESS_TOKEN_EXPIRE_MINUTES", 30))
    REFRESH_TOKEN_EXPIRE_DAYS = int(_get("REFRESH_TOKEN_EXPIRE_DAYS", 30))
    SESSION_HEADER_NAME = _get("SESSION_HEADER_NAME", "X-Session-Id")
    SESSION_COOKIE_NAME = _get("SESSION_COOKIE_NAME", "sessionId")
    SESSION_COOKIE_SECURE = _get_bool("SESSION_COOKIE_SECURE", False)
