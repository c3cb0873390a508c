from __future__ import annotations
from pathlib import Path
from typing import Dict, Sequence, Protocol, runtime_checkable


@runtime_checkable
class ScannerProtocol(Protocol):
    """Source-tree scanner producing an ordered path → text mapping."""

    def scan(self, root: Path, target_dirs: Sequence[str]) -> Dict[str, str]:
        """Read the selected files under `root` in traversal order."""
        ...
