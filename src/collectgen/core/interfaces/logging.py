from __future__ import annotations
"""Logging seams shared by the scanner, the completion client and the CLI.

Any object with the stdlib ``logging.Logger`` call surface fits; tests pass
plain ``logging.getLogger`` instances and capture them with ``assertLogs``.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class LoggerLikeProtocol(Protocol):
    """What collectgen components call on the logger they are given."""

    def debug(self, msg: str, *args, **kwargs) -> None: ...
    def info(self, msg: str, *args, **kwargs) -> None: ...
    def warning(self, msg: str, *args, **kwargs) -> None: ...
    def error(self, msg: str, *args, **kwargs) -> None: ...
    def exception(self, msg: str, *args, **kwargs) -> None: ...


@runtime_checkable
class LoggerFactoryProtocol(Protocol):
    """Hands out loggers below the ``collectgen`` namespace.

    The CLI builds one factory per run so that ``--json-logs`` and the
    verbosity flags are applied before the first record is emitted.
    """

    def get_logger(self, name: str) -> LoggerLikeProtocol:
        """Return the logger for component `name` (``'ai'``, ``'io.scanner'``...)."""
        ...
