from __future__ import annotations

"""Source-tree scanner.

Selection rules, evaluated per directory entry in sorted-name order:

* a directory whose name is exactly one of the targets is entered;
* the entry file (``app.ts`` by default) is read only from the scan root;
* any other regular file is read when a target name occurs in its path
  relative to the scan root.

Everything else (non-target directories, symlinks, special files) is skipped.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Dict, Optional, Sequence, Tuple

from collectgen.constants import DEFAULT_ENTRY_FILE
from collectgen.core.interfaces import ScannerProtocol
from collectgen.errors import ScanError
from collectgen.io.readers import read_text_file
from collectgen.logging.helpers import get_logger


class SourceScanner(ScannerProtocol):
    def __init__(
        self,
        *,
        entry_file: str = DEFAULT_ENTRY_FILE,
        read_text: Optional[Callable[[Path], str]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._entry_file = entry_file
        self._read_text = read_text or read_text_file
        self._log = logger or get_logger('io.scanner')

    def scan(self, root: Path, target_dirs: Sequence[str]) -> Dict[str, str]:
        """Return ``{full_path: text}`` for every selected file under *root*."""
        root = Path(root)
        if not root.is_dir():
            raise ScanError(f'source root {root} does not exist or is not a directory')

        # An empty name would match every path as a substring.
        targets: Tuple[str, ...] = tuple(dict.fromkeys(t for t in target_dirs if t))
        contents: Dict[str, str] = {}
        self._scan_dir(root, root, targets, contents)
        return contents

    def _scan_dir(self, directory: Path, root: Path, targets: Tuple[str, ...], contents: Dict[str, str]) -> None:
        self._log.info('Scanning directory: %s', directory)
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as exc:
            raise ScanError(f'could not list {directory}: {exc}') from exc

        for entry in entries:
            full_path = directory / entry.name
            if entry.is_dir(follow_symlinks=False):
                if entry.name in targets:
                    self._log.info('Entering target directory: %s', full_path)
                    self._scan_dir(full_path, root, targets, contents)
                continue
            if not entry.is_file(follow_symlinks=False):
                continue
            if entry.name == self._entry_file and directory == root:
                self._log.info('Reading main app file: %s', full_path)
                self._read_into(full_path, contents)
            elif self.matches_target(full_path, root, targets):
                self._log.info('Reading file: %s', full_path)
                self._read_into(full_path, contents)

    def _read_into(self, path: Path, contents: Dict[str, str]) -> None:
        key = str(path)
        if key in contents:
            return
        contents[key] = self._read_text(path)

    @staticmethod
    def matches_target(path: Path, root: Path, targets: Sequence[str]) -> bool:
        """True when any target name is a substring of *path* relative to *root*."""
        rel = path.relative_to(root).as_posix()
        return any(t in rel for t in targets)
