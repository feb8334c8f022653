"""Settings for plansync (remote endpoint, local data directory, timeouts)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from plansync.errors import ConfigError

ENV_SUPABASE_URL = "PLANSYNC_SUPABASE_URL"
ENV_SUPABASE_ANON_KEY = "PLANSYNC_SUPABASE_ANON_KEY"
ENV_DATA_DIR = "PLANSYNC_DATA_DIR"
ENV_REQUEST_TIMEOUT = "PLANSYNC_REQUEST_TIMEOUT"
ENV_PROBE_TIMEOUT = "PLANSYNC_PROBE_TIMEOUT"

DEFAULT_DATA_DIR = os.path.join("~", ".plansync")


@dataclass(slots=True, frozen=True)
class Settings:
    """
    Runtime settings.

    Required:
        - supabase_url: project URL (https://<ref>.supabase.co)
        - supabase_anon_key: anon/public API key
    """

    supabase_url: str
    supabase_anon_key: str
    data_dir: str = DEFAULT_DATA_DIR
    request_timeout_sec: float = 10.0
    probe_timeout_sec: float = 5.0

    def __post_init__(self) -> None:
        for name in ("supabase_url", "supabase_anon_key", "data_dir"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(f"Settings.{name} must be a non-empty string")

        if not self.supabase_url.startswith(("http://", "https://")):
            raise ConfigError(
                "Settings.supabase_url must be an http(s) URL",
                details={"supabase_url": self.supabase_url},
            )

        for name in ("request_timeout_sec", "probe_timeout_sec"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or value <= 0:
                raise ConfigError(f"Settings.{name} must be a positive number")

    @property
    def rest_url(self) -> str:
        """PostgREST base URL."""
        return self.supabase_url.rstrip("/") + "/rest/v1"

    @property
    def resolved_data_dir(self) -> str:
        return os.path.abspath(os.path.expanduser(self.data_dir))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Raises:
            ConfigError: if a required variable is missing or a value is invalid.
        """
        env = os.environ if environ is None else environ

        url = env.get(ENV_SUPABASE_URL, "").strip()
        key = env.get(ENV_SUPABASE_ANON_KEY, "").strip()
        if not url:
            raise ConfigError(f"Missing env var: {ENV_SUPABASE_URL}")
        if not key:
            raise ConfigError(f"Missing env var: {ENV_SUPABASE_ANON_KEY}")

        return cls(
            supabase_url=url,
            supabase_anon_key=key,
            data_dir=env.get(ENV_DATA_DIR, "").strip() or DEFAULT_DATA_DIR,
            request_timeout_sec=_float_env(env, ENV_REQUEST_TIMEOUT, 10.0),
            probe_timeout_sec=_float_env(env, ENV_PROBE_TIMEOUT, 5.0),
        )


def _float_env(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(
            f"{name} must be a number",
            details={name: raw},
            cause=exc,
        ) from exc
