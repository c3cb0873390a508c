from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from collectgen.errors import ScanError
from collectgen.logging.helpers import get_logger


def read_text_file(path: Path, *, logger: Optional[logging.Logger] = None) -> str:
    """Return the UTF-8 text of *path*.

    Invalid byte sequences decode to U+FFFD instead of failing, so binary or
    mis-encoded sources still end up in the prompt. I/O failures raise
    `ScanError` with the offending path.
    """
    log = logger or get_logger('io.readers')
    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        log.error('⚠  could not read %s (%s)', path, exc)
        raise ScanError(f'could not read {path}: {exc}') from exc
    return raw.decode('utf-8', errors='replace')
