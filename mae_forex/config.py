"""Process configuration read once from the environment at job start."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from dotenv import load_dotenv

LOCAL_DB_PREFIX = "POSTGRES_"
REMOTE_DB_PREFIX = "GCLOUD_POSTGRES_"
LOCAL_DEFAULT_PORT = 5432
REMOTE_DEFAULT_PORT = 15432


class ConfigurationError(ValueError):
    """Raised when a required setting is missing or malformed."""


def load_environment(dotenv_path: str | None = None) -> Mapping[str, str]:
    """Load an optional ``.env`` file and return the process environment.

    Values already present in the environment win over the file.
    """

    load_dotenv(dotenv_path, override=False)
    return os.environ


def _require(environ: Mapping[str, str], key: str) -> str:
    value = environ.get(key, "").strip()
    if not value:
        raise ConfigurationError(f"{key} environment variable not set")
    return value


@dataclass(frozen=True, slots=True)
class DatabaseSettings:
    """Connection parameters for one PostgreSQL instance."""

    user: str
    password: str
    host: str
    port: int
    name: str
    label: str = "local"

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str],
        *,
        prefix: str = LOCAL_DB_PREFIX,
        default_port: int = LOCAL_DEFAULT_PORT,
        label: str = "local",
    ) -> "DatabaseSettings":
        raw_port = environ.get(f"{prefix}PORT", "").strip()
        if raw_port:
            try:
                port = int(raw_port)
            except ValueError as exc:
                raise ConfigurationError(
                    f"{prefix}PORT must be an integer, got {raw_port!r}"
                ) from exc
        else:
            port = default_port
        return cls(
            user=_require(environ, f"{prefix}USER"),
            password=environ.get(f"{prefix}PASSWORD", ""),
            host=_require(environ, f"{prefix}HOST"),
            port=port,
            name=_require(environ, f"{prefix}DB"),
            label=label,
        )

    def __repr__(self) -> str:
        return (
            f"DatabaseSettings(label={self.label!r}, user={self.user!r}, host={self.host!r}, "
            f"port={self.port!r}, name={self.name!r})"
        )


def local_database(environ: Mapping[str, str]) -> DatabaseSettings:
    return DatabaseSettings.from_env(environ)


def remote_database(environ: Mapping[str, str]) -> DatabaseSettings:
    return DatabaseSettings.from_env(
        environ,
        prefix=REMOTE_DB_PREFIX,
        default_port=REMOTE_DEFAULT_PORT,
        label="gcloud",
    )


@dataclass(frozen=True, slots=True)
class ApiSettings:
    """Credentials and endpoints for the MAE market-data API."""

    api_key: str | None = None
    legacy_url: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> "ApiSettings":
        return cls(
            api_key=environ.get("MAE_API_KEY", "").strip() or None,
            legacy_url=environ.get("MAE_LEGACY_URL", "").strip() or None,
        )

    def require_api_key(self) -> str:
        if not self.api_key:
            raise ConfigurationError("MAE_API_KEY environment variable not set")
        return self.api_key

    def require_legacy_url(self) -> str:
        if not self.legacy_url:
            raise ConfigurationError("MAE_LEGACY_URL environment variable not set")
        return self.legacy_url

    def __repr__(self) -> str:
        masked = "***" if self.api_key else None
        return f"ApiSettings(api_key={masked!r}, legacy_url={self.legacy_url!r})"


__all__ = [
    "ApiSettings",
    "ConfigurationError",
    "DatabaseSettings",
    "load_environment",
    "local_database",
    "remote_database",
]
