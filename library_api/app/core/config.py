"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Two values have no default and must be
provided for the service to start: the store connection string
(``DATABASE_URL``) and the key for the contact validation service
(``API_KEY``).  ``Settings.missing`` reports which of them are absent;
the application refuses to start until both are set.
"""

import os
from dataclasses import dataclass
from typing import List


class ConfigurationError(RuntimeError):
    """Raised at startup when required settings are absent."""


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Library API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Optional file that receives a copy of the console log.
    log_file: str = os.getenv("LOG_FILE", "")

    # Path or connection string for the SQLite store.  Accepts a plain
    # path, a ``sqlite:///`` URL or ``:memory:``.  Relative paths are
    # resolved against the current working directory by the ``db``
    # module.
    database_url: str = os.getenv("DATABASE_URL", "")
    # Seconds a store statement waits for another connection's write
    # lock before the request fails with ``StoreBusy``.
    store_timeout: float = float(os.getenv("STORE_TIMEOUT", "1"))

    # Key sent in the ``X-Api-Key`` header to the phone/email
    # validation service.
    api_key: str = os.getenv("API_KEY", "")
    validation_api_url: str = os.getenv("VALIDATION_API_URL", "https://api.api-ninjas.com/v1")
    validation_timeout: float = float(os.getenv("VALIDATION_TIMEOUT", "10"))

    def missing(self) -> List[str]:
        """Return the environment names of required settings that are empty."""
        absent = []
        if not self.database_url:
            absent.append("DATABASE_URL")
        if not self.api_key:
            absent.append("API_KEY")
        return absent

    def require(self) -> None:
        """Raise ``ConfigurationError`` if a required setting is missing."""
        absent = self.missing()
        if absent:
            raise ConfigurationError(f"Missing required settings: {', '.join(absent)}")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class creation time, environment variables should
# be set before importing this module.
settings = Settings()
