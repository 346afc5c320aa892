"""Environment-driven configuration for procjson."""

import os
from collections.abc import Mapping
from dataclasses import dataclass

import psutil

from procjson.errors import ConfigError
from procjson.scanner import ScanPolicy

DEFAULT_PORT = 8888
DEFAULT_HOST = "0.0.0.0"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "WARN", "ERROR", "CRITICAL")


def _get(env: Mapping[str, str], key: str, default: str) -> str:
    # Unset and empty are treated the same
    value = env.get(key, "").strip()
    return value or default


def _parse_int(key: str, value: str, minimum: int, maximum: int | None = None) -> int:
    try:
        number = int(value)
    except ValueError:
        raise ConfigError(f"{key} must be an integer, got {value!r}") from None
    if number < minimum or (maximum is not None and number > maximum):
        bounds = f">= {minimum}" if maximum is None else f"between {minimum} and {maximum}"
        raise ConfigError(f"{key} must be {bounds}, got {number}")
    return number


@dataclass(slots=True, frozen=True)
class Settings:
    """Runtime settings of the service."""

    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    log_level: str = "INFO"
    proc_root: str = psutil.PROCFS_PATH
    scan_policy: ScanPolicy = ScanPolicy.STRICT
    scan_workers: int = 1

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            env: Mapping to read from. Defaults to os.environ.

        Raises:
            ConfigError: If a variable holds an invalid value
        """
        if env is None:
            env = os.environ

        port = _parse_int("PORT", _get(env, "PORT", str(DEFAULT_PORT)), 1, 65535)

        log_level = _get(env, "LOG_LEVEL", "INFO").upper()
        if log_level not in LOG_LEVELS:
            raise ConfigError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}")

        policy_name = _get(env, "SCAN_POLICY", ScanPolicy.STRICT.value).lower()
        try:
            scan_policy = ScanPolicy(policy_name)
        except ValueError:
            choices = ", ".join(p.value for p in ScanPolicy)
            raise ConfigError(f"SCAN_POLICY must be one of {choices}, got {policy_name!r}") from None

        return cls(
            port=port,
            host=_get(env, "HOST", DEFAULT_HOST),
            log_level=log_level,
            proc_root=_get(env, "PROC_ROOT", psutil.PROCFS_PATH),
            scan_policy=scan_policy,
            scan_workers=_parse_int("SCAN_WORKERS", _get(env, "SCAN_WORKERS", "1"), 1),
        )

    @property
    def bind_address(self) -> str:
        """Get the host:port pair the server listens on."""
        return f"{self.host}:{self.port}"
