from __future__ import annotations

"""Logger setup for collectgen runs.

Every component logs under the ``collectgen`` namespace; only the CLI attaches
a handler, so library callers keep control of their own logging tree.

    - JsonLogFormatter: one JSON object per record, for ``--json-logs``.
    - setup_base_logger / reset_base_logger: install or drop the CLI handler.
    - get_logger: ``'ai'`` -> ``collectgen.ai``; full names pass through.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Optional, TextIO

BASE_LOGGER_NAME = "collectgen"


class JsonLogFormatter(logging.Formatter):
    """Render a record as a single JSON line.

    Keys are ``ts`` (UTC, millisecond ISO-8601 with ``Z``), ``level``,
    ``module`` (the logger name, e.g. ``collectgen.io.scanner``), ``msg`` and
    ``version``. A non-empty dict passed as ``extra={"context": ...}`` is
    added under ``ctx``; exception info goes under ``exc``.
    """

    def __init__(self) -> None:
        super().__init__()
        self._version = self._resolve_version()

    @staticmethod
    def _resolve_version() -> str:
        try:
            # Lazy import; the package __init__ imports this module indirectly.
            from collectgen import __version__ as _v
            return str(_v)
        except ImportError:
            return os.getenv("COLLECTGEN_VERSION", "unknown")

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        ts_str = ts.isoformat(timespec="milliseconds").replace("+00:00", "Z")

        payload = {
            "ts": ts_str,
            "level": record.levelname,
            "module": record.name,
            "msg": record.getMessage(),
            "version": self._version,
        }

        ctx = getattr(record, "context", None)
        if isinstance(ctx, dict) and ctx:
            payload["ctx"] = ctx

        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False)


def setup_base_logger(
    *, json_logs: bool = False, level: int = logging.INFO, stream: Optional[TextIO] = None
) -> logging.Logger:
    """Attach the CLI handler to ``collectgen`` and return that logger.

    Plain records look like ``INFO: Total files read: 6``. A second call only
    updates the level; call `reset_base_logger` first to switch format.
    Records stop propagating to the root logger while the handler is attached.
    """
    base = logging.getLogger(BASE_LOGGER_NAME)
    if base.handlers:
        base.setLevel(level)
        return base

    base.setLevel(level)
    base.propagate = False

    handler = logging.StreamHandler(stream or sys.stderr)
    if json_logs:
        handler.setFormatter(JsonLogFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    base.addHandler(handler)

    return base


def reset_base_logger() -> None:
    """Drop handlers installed by `setup_base_logger` (used between CLI runs)."""
    base = logging.getLogger(BASE_LOGGER_NAME)
    for handler in list(base.handlers):
        base.removeHandler(handler)
    base.propagate = True


def get_logger(name: str | None = None) -> logging.Logger:
    """Map a component name onto the ``collectgen`` logger tree."""
    if not name or name == BASE_LOGGER_NAME:
        return logging.getLogger(BASE_LOGGER_NAME)
    if name.startswith(BASE_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{BASE_LOGGER_NAME}.{name}")
