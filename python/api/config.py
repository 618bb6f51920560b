"""
API Configuration

Settings read from environment variables.
"""

import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent.parent

DATA_MODE_DATABASE = "database"
DATA_MODE_FIXTURE = "fixture"


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _database_url() -> str:
    return os.getenv(
        "DATABASE_URL",
        f"postgresql+psycopg2://{os.getenv('POSTGRES_USER', 'ledger')}:"
        f"{os.getenv('POSTGRES_PASSWORD', 'password')}@"
        f"{os.getenv('POSTGRES_HOST', 'localhost')}:"
        f"{os.getenv('POSTGRES_PORT', '5432')}/"
        f"{os.getenv('POSTGRES_DB', 'fabric_ledger')}"
    )


def _data_mode() -> str:
    mode = os.getenv("LEDGER_DATA_MODE")
    if mode:
        mode = mode.strip().lower()
        if mode not in (DATA_MODE_DATABASE, DATA_MODE_FIXTURE):
            raise ValueError(f"LEDGER_DATA_MODE must be 'database' or 'fixture', got {mode!r}")
        return mode

    # No database configured: serve sample data
    if os.getenv("DATABASE_URL") or os.getenv("POSTGRES_HOST"):
        return DATA_MODE_DATABASE
    return DATA_MODE_FIXTURE


class Settings:
    """Runtime settings for the ledger API."""

    def __init__(self):
        self.environment = os.getenv("ENVIRONMENT", "development")
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        self.data_mode = _data_mode()
        self.database_url = _database_url()
        self.create_tables = _env_bool("LEDGER_CREATE_TABLES", True)
        self.bill_number_attempts = int(os.getenv("BILL_NUMBER_ATTEMPTS", "3"))
        self.cors_origins = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
            if origin.strip()
        ]
        self.acl_path = Path(os.getenv("LEDGER_ACL_PATH", str(PROJECT_ROOT / "config" / "ledger_acl.yaml")))

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


settings = Settings()
