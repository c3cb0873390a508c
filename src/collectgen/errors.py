from __future__ import annotations

"""Exception hierarchy shared by the library layers.

Library code raises these; only the CLI maps them to exit codes.
"""

from typing import Optional


class CollectgenError(Exception):
    """Base class for every error raised by collectgen."""


class ConfigError(CollectgenError, ValueError):
    """Invalid or missing configuration (flags, environment, credentials)."""


class ScanError(CollectgenError):
    """The source tree could not be traversed or a selected file could not be read."""


class CompletionError(CollectgenError):
    """The completion service failed or returned an unusable response."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
