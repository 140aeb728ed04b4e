"""
# Configuration Management Module

This module provides the configuration system for the Event Blog API. It is built on
**Pydantic Settings** and loads values from the process environment, optionally seeded
from a dotenv file discovered at import time.

## Configuration Loading Hierarchy

```
┌─────────────────────────────────────────────────────────────┐
│  1. Environment Variables (HIGHEST PRIORITY)                │
├─────────────────────────────────────────────────────────────┤
│  2. EVENT_BLOG_CONFIG_PATH (custom dotenv file path)        │
├─────────────────────────────────────────────────────────────┤
│  3. .env File (Project Root)                                │
├─────────────────────────────────────────────────────────────┤
│  4. Default Values (LOWEST PRIORITY)                        │
└─────────────────────────────────────────────────────────────┘
```

## MongoDB Configuration

```python
MONGO_URL: Optional[str] = None  # REQUIRED at first connection use, no default
MONGO_DB_NAME: str = "event_blog"  # Fixed default database name
MONGO_OPERATION_TIMEOUT: float = 10.0  # Seconds allowed per storage round trip
MONGO_SERVER_SELECTION_TIMEOUT: int = 5000  # ms
MONGO_CONNECTION_TIMEOUT: int = 10000  # ms
PROVISION_ON_STARTUP: bool = True  # Warm every collection in the app lifespan
```

`MONGO_URL` is not required at load time. A missing URL fails the first database use
with `ConfigurationError`. The URL itself is parsed by the driver on that first use; a
malformed one fails it with `ConnectivityError`.

## Usage

```python
from event_blog.config import settings

print(settings.MONGO_DB_NAME)
```

Attributes:
    settings (Settings): Process-wide default settings instance.
"""

import os
from pathlib import Path
from typing import Any, List, Optional

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Constants ---
DEFAULT_ENV_FILENAME: str = ".env"
CONFIG_ENV_VAR: str = "EVENT_BLOG_CONFIG_PATH"
DEFAULT_DB_NAME: str = "event_blog"
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent.parent


# --- Config file discovery (no logging) ---
def get_config_path() -> Optional[str]:
    """
    Determines the dotenv file path based on a predefined precedence order.

    1.  **Environment Variable**: `EVENT_BLOG_CONFIG_PATH` (if set and file exists).
    2.  **Dotenv Config**: `.env` file in the project root directory.
    3.  **Fallback**: `None`, triggering environment-variable-only mode.

    Returns:
        Optional[str]: The path to the configuration file, or `None` if not found.
    """
    env_path: Optional[str] = os.environ.get(CONFIG_ENV_VAR)
    if env_path and os.path.exists(env_path):
        return env_path
    env_path_file: Path = PROJECT_ROOT / DEFAULT_ENV_FILENAME
    if env_path_file.exists():
        return str(env_path_file)
    return None


CONFIG_PATH: Optional[str] = get_config_path()
if CONFIG_PATH:
    load_dotenv(dotenv_path=CONFIG_PATH, override=False)


class Settings(BaseSettings):
    """
    Application configuration settings model.

    **Configuration Groups:**
    *   **Server**: Host, port, debug mode, CORS origins.
    *   **Database**: MongoDB endpoint, database name, timeouts.
    *   **Logging**: Root log level.
    """

    model_config = SettingsConfigDict(
        env_file=CONFIG_PATH if CONFIG_PATH else None,
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Server configuration
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    DEBUG: bool = False
    CORS_ALLOWED_ORIGINS: str = "http://localhost:5173"

    # MongoDB configuration
    MONGO_URL: Optional[str] = None
    MONGO_DB_NAME: str = DEFAULT_DB_NAME
    MONGO_OPERATION_TIMEOUT: float = 10.0
    MONGO_SERVER_SELECTION_TIMEOUT: int = 5000
    MONGO_CONNECTION_TIMEOUT: int = 10000
    PROVISION_ON_STARTUP: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"

    @field_validator("MONGO_URL", mode="before")
    @classmethod
    def blank_url_is_unset(cls, v: Any) -> Any:
        """Treat an empty or whitespace-only URL as not configured."""
        if isinstance(v, str):
            v = v.strip()
            if not v:
                return None
        return v

    @field_validator("MONGO_DB_NAME", mode="before")
    @classmethod
    def default_db_name(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_DB_NAME
        return v

    @field_validator(
        "MONGO_OPERATION_TIMEOUT", "MONGO_SERVER_SELECTION_TIMEOUT", "MONGO_CONNECTION_TIMEOUT", mode="before"
    )
    @classmethod
    def validate_timeout_values(cls, v: Any, info: Any) -> float:
        try:
            value = float(v)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"{info.field_name} must be a number") from exc
        if value <= 0:
            raise ValueError(f"{info.field_name} must be positive")
        return v

    @property
    def cors_allowed_origins_list(self) -> List[str]:
        """Comma-separated `CORS_ALLOWED_ORIGINS` as a list."""
        return [origin.strip() for origin in self.CORS_ALLOWED_ORIGINS.split(",") if origin.strip()]


# Global settings instance
settings: Settings = Settings()
