"""Runtime settings for the event emitter.

Settings come from keyword arguments or from ``EVENTEMITTER_*`` environment
variables via :meth:`EmitterSettings.from_env`.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from eventemitter.errors import ConfigurationError

DEFAULT_PRIORITY = 100

_TRUE_VALUES = ("1", "true", "yes")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class EmitterSettings:
    """
    Configuration for emitter behavior and logging.

    Args:
        default_priority: Priority used when ``on``/``once`` get none
        trace_emits: Log every emission at debug level
        log_level: Log level name passed to logging configuration
        json_logs: Render logs as JSON instead of console output
    """

    default_priority: int = DEFAULT_PRIORITY
    trace_emits: bool = False
    log_level: str = "INFO"
    json_logs: bool = False

    def __post_init__(self):
        if isinstance(self.default_priority, bool) or not isinstance(self.default_priority, int):
            raise ConfigurationError("default_priority", self.default_priority, "must be an integer")
        self.log_level = str(self.log_level).upper()
        if self.log_level not in _LOG_LEVELS:
            raise ConfigurationError(
                "log_level", self.log_level, f"must be one of {', '.join(_LOG_LEVELS)}"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> EmitterSettings:
        """Load settings from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``

        Returns:
            EmitterSettings instance
        """
        env = os.environ if environ is None else environ

        priority_raw = env.get("EVENTEMITTER_DEFAULT_PRIORITY")
        if priority_raw is None or not priority_raw.strip():
            priority = DEFAULT_PRIORITY
        else:
            try:
                priority = int(priority_raw.strip())
            except ValueError:
                raise ConfigurationError(
                    "default_priority", priority_raw, "must be an integer"
                ) from None

        return cls(
            default_priority=priority,
            trace_emits=_flag(env.get("EVENTEMITTER_TRACE_EMITS")),
            log_level=env.get("EVENTEMITTER_LOG_LEVEL", "INFO").strip() or "INFO",
            json_logs=_flag(env.get("EVENTEMITTER_LOG_JSON")),
        )


def _flag(value: str | None) -> bool:
    if value is None:
        return False
    return value.strip().lower() in _TRUE_VALUES
