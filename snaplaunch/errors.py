"""Error types raised by the launcher stages.

Every fatal error carries the name of the stage that produced it so the
top-level diagnostic can say where the pipeline stopped.
"""

from __future__ import annotations

from typing import Optional


class LauncherError(RuntimeError):
    """Base error for all launcher failures."""

    stage = "launcher"

    def __init__(self, message: str, stage: Optional[str] = None):
        super().__init__(message)
        if stage:
            self.stage = stage


class ConfigurationError(LauncherError):
    """Missing or invalid configuration (including a required credential)."""

    stage = "config"


class CacheError(LauncherError):
    """Scratch directory could not be reset."""

    stage = "cache"


class FetchError(LauncherError):
    """Network, timeout or HTTP-status failure while downloading the archive."""

    stage = "fetch"

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class ExtractError(LauncherError):
    """Corrupt, unsupported or unexpected archive."""

    stage = "extract"


class NormalizationError(LauncherError):
    """Filesystem failure while rewriting the working tree."""

    stage = "normalize"


class OverlayError(LauncherError):
    """Overlay config could not be copied. Not fatal."""

    stage = "overlay"


class SpawnError(LauncherError):
    """Child executable missing or not launchable."""

    stage = "launch"
