"""
Configuration Models - Pydantic Models for Type-Safe Config.

All configuration is validated at load time using Pydantic.
"""

from __future__ import annotations

import os
from typing import Literal, Optional

from pydantic import BaseModel, Field

LogLevel = Literal["off", "error", "warn", "info", "debug", "trace"]


class ApiConfig(BaseModel):
    """Remote metrics service connection settings."""

    user: Optional[str] = Field(default=None)
    token: Optional[str] = Field(default=None)
    endpoint: str = Field(default="https://metrics-api.librato.com")
    timeout_seconds: float = Field(default=10.0, gt=0)

    @property
    def has_credentials(self) -> bool:
        return bool(self.user and self.token)


class TrackerConfig(BaseModel):
    """Tracker behavior settings."""

    source: Optional[str] = Field(default=None)
    source_pids: bool = False
    prefix: Optional[str] = Field(default=None)
    flush_interval_seconds: float = Field(default=60.0, ge=1)
    log_level: LogLevel = "info"
    log_target: str = Field(default="stderr")


class RelayConfig(BaseModel):
    """Root configuration object."""

    version: str = "1.0"
    api: ApiConfig = Field(default_factory=ApiConfig)
    tracker: TrackerConfig = Field(default_factory=TrackerConfig)

    model_config = {"populate_by_name": True, "validate_assignment": True}

    @property
    def qualified_source(self) -> Optional[str]:
        """Configured source, suffixed with the process id when source_pids is on."""
        source = self.tracker.source
        if not source:
            return None
        if self.tracker.source_pids:
            return f"{source}.{os.getpid()}"
        return source
