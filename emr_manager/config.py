"""Environment configuration for the database connection."""

import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

DEFAULT_URL = "sqlite:///emr_db.sqlite3"
DEFAULT_USER = "root"
DEFAULT_PASSWORD = ""
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class DatabaseConfig:
    url: str = DEFAULT_URL
    user: str = DEFAULT_USER
    password: str = DEFAULT_PASSWORD
    log_level: str = DEFAULT_LOG_LEVEL

    def __repr__(self) -> str:
        return f"DatabaseConfig(url={self.url!r}, user={self.user!r}, password='****')"


def load_config() -> DatabaseConfig:
    """Build the configuration from the environment, loading .env from the working directory first."""
    load_dotenv(find_dotenv(usecwd=True), override=False)
    return DatabaseConfig(
        url=os.environ.get("EMR_DB_URL", DEFAULT_URL),
        user=os.environ.get("EMR_DB_USER", DEFAULT_USER),
        password=os.environ.get("EMR_DB_PASSWORD", DEFAULT_PASSWORD),
        log_level=os.environ.get("EMR_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
    )
