"""Session configuration.

Values come from the environment and can be overridden per session by the
params of ``new`` (``device:N``, ``timeout:S``).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping

from fcp_rytm.errors import ConfigError
from fcp_rytm.logging_setup import parse_level

DEFAULT_DEVICE_ID = 0
DEFAULT_LOCK_TIMEOUT = 3.0
DEFAULT_LOG_LEVEL = "warn"


@dataclass(frozen=True)
class RytmConfig:
    device_id: int = DEFAULT_DEVICE_ID
    lock_timeout: float = DEFAULT_LOCK_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        if not 0 <= self.device_id <= 127:
            raise ConfigError(
                f"Invalid device id {self.device_id}. Device id must be between 0 and 127."
            )
        if self.lock_timeout <= 0:
            raise ConfigError(
                f"Invalid lock timeout {self.lock_timeout:g}. Timeout must be positive."
            )
        parse_level(self.log_level)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> RytmConfig:
        env = os.environ if environ is None else environ
        return cls(
            device_id=_int(env.get("RYTM_DEVICE_ID"), "RYTM_DEVICE_ID", DEFAULT_DEVICE_ID),
            lock_timeout=_float(
                env.get("RYTM_LOCK_TIMEOUT"), "RYTM_LOCK_TIMEOUT", DEFAULT_LOCK_TIMEOUT
            ),
            log_level=env.get("LOG_LEVEL", DEFAULT_LOG_LEVEL),
        )

    def with_params(self, params: Mapping[str, str]) -> RytmConfig:
        """Apply ``device:`` and ``timeout:`` session params."""
        changes: dict[str, object] = {}
        if "device" in params:
            changes["device_id"] = _int(params["device"], "device", self.device_id)
        if "timeout" in params:
            changes["lock_timeout"] = _float(params["timeout"], "timeout", self.lock_timeout)
        return replace(self, **changes) if changes else self


def _int(raw: str | None, name: str, default: int) -> int:
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"Invalid {name} '{raw}': expected an integer.") from None


def _float(raw: str | None, name: str, default: float) -> float:
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"Invalid {name} '{raw}': expected a number.") from None
