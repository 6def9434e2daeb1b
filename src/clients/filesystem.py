"""Local filesystem collaborator used by local discovery and reads."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Tuple


class LocalFileSystem:
    # Thin wrapper over os/pathlib so discovery can be exercised with fakes.

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def is_file(self, path: str) -> bool:
        return os.path.isfile(path)

    def list_dir(self, path: str) -> List[str]:
        # Raises OSError (e.g. PermissionError) for unreadable directories
        return sorted(os.listdir(path))

    def read_text(self, path: str) -> str:
        # Read text with replacement to avoid decode errors on bad files
        return Path(path).read_text(encoding="utf-8", errors="replace")

    def stat(self, path: str) -> Tuple[int, float]:
        st = os.stat(path)
        return st.st_size, st.st_mtime
