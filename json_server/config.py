import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Config:
    DB_FILE = os.getenv("DB_FILE", "db.json")
    DB_MINIFIED = _env_flag("DB_MINIFIED")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "8080"))
    DEBUG = _env_flag("DEBUG")


class DevConfig(Config):
    DEBUG = _env_flag("DEBUG", "true")


class ProdConfig(Config):
    DEBUG = False
