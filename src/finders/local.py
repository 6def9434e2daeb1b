"""Local filesystem discovery.

Resolves a source's paths against its root directory, walks directories
with an explicit stack, and returns the filtered files together with a
rendered tree view.
"""

from __future__ import annotations

import functools
import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple, Union

from clients.filesystem import LocalFileSystem
from core.errors import AccessDeniedError, DiscoveryError, NotFoundError
from core.interfaces import FileSystem
from core.models import LocalSource, TreeSource
from core.paths import contains_wildcard, glob_match, is_within, normalize_posix_relpath, split_posix
from filters.chain import apply_filters, build_filter_chain
from finders.models import DiscoveredItem, FinderResult
from tree.builder import FileStats, build_tree_view

logger = logging.getLogger(__name__)

LocalLikeSource = Union[LocalSource, TreeSource]


def _split_wildcard(path: str) -> Tuple[str, str]:
    """Split a path into its literal directory prefix and the glob remainder."""
    parts = path.replace("\\", "/").split("/")
    for i, seg in enumerate(parts):
        if contains_wildcard(seg):
            return "/".join(parts[:i]), "/".join(parts[i:])
    return path, ""


class LocalFinder:
    def __init__(self, filesystem: Optional[FileSystem] = None, *, project_root: Optional[Path] = None) -> None:
        self._fs = filesystem or LocalFileSystem()
        self._project_root = Path(project_root or ".").resolve()

    def find(self, source: LocalLikeSource) -> FinderResult:
        base = self._resolve_base(source.root)
        collected: Dict[str, DiscoveredItem] = {}

        for raw in source.source_paths:
            for abs_path, rel_path in self._discover(source, base, raw):
                if rel_path in collected:
                    continue
                collected[rel_path] = DiscoveredItem(
                    relative_path=rel_path,
                    location=abs_path,
                    reader=functools.partial(self._fs.read_text, abs_path),
                )

        items = [collected[k] for k in sorted(collected)]
        logger.debug("Discovered %d local files for %s", len(items), source.source_paths)

        if source.docs:
            wanted = {normalize_posix_relpath(d) for d in source.docs}
            items = [i for i in items if i.relative_path in wanted]

        files = apply_filters(build_filter_chain(source.criteria), items)
        if source.max_files:
            files = files[: source.max_files]

        tree_view = build_tree_view(
            [f.relative_path for f in files],
            source.tree_view,
            self._collect_stats(files, source) if source.tree_view.shows_metadata else None,
        )
        return FinderResult(files=tuple(files), tree_view=tree_view)

    # --- discovery helpers ---

    def _resolve_base(self, root: str) -> str:
        p = Path(root or ".")
        if not p.is_absolute():
            p = self._project_root / p
        return self._guard(os.path.normpath(str(p)), root or ".")

    def _guard(self, abs_path: str, shown: str) -> str:
        # Every resolved root, source path and wildcard anchor stays inside the project
        if not is_within(str(self._project_root), abs_path):
            raise AccessDeniedError(f"Access outside project root is not allowed: {shown}")
        return abs_path

    def _absolute(self, base: str, path: str) -> str:
        if os.path.isabs(path):
            return os.path.normpath(path)
        return os.path.normpath(os.path.join(base, path))

    def _relative(self, base: str, anchor: str, abs_path: str) -> str:
        rel = os.path.relpath(abs_path, base)
        if rel.startswith(".."):
            # Outside the source root: fall back to the path below the source anchor
            rel = os.path.relpath(abs_path, os.path.dirname(anchor))
        return Path(rel).as_posix()

    def _discover(self, source: LocalLikeSource, base: str, raw: str) -> List[Tuple[str, str]]:
        if contains_wildcard(raw):
            return self._discover_wildcard(source, base, raw)

        abs_path = self._guard(self._absolute(base, raw), raw)
        if self._fs.is_dir(abs_path):
            return [
                (f, self._relative(base, abs_path, f))
                for f in self._walk(abs_path, source)
            ]
        if self._fs.is_file(abs_path):
            return [(abs_path, self._relative(base, abs_path, abs_path))]
        raise NotFoundError(f"Source path not found: {raw}")

    def _discover_wildcard(self, source: LocalLikeSource, base: str, raw: str) -> List[Tuple[str, str]]:
        prefix, pattern = _split_wildcard(raw)
        anchor = self._guard(self._absolute(base, prefix or "."), raw)
        if not self._fs.is_dir(anchor):
            logger.debug("Wildcard anchor %s is not a directory, nothing matched", anchor)
            return []

        out: List[Tuple[str, str]] = []
        for f in self._walk(anchor, source):
            below = Path(os.path.relpath(f, anchor)).as_posix()
            parts = split_posix(below)
            # A pattern may select the file itself or any directory above it
            hit = any(glob_match("/".join(parts[:n]), pattern) for n in range(1, len(parts) + 1))
            if hit:
                out.append((f, self._relative(base, anchor, f)))
        return out

    def _walk(self, top: str, source: LocalLikeSource) -> List[str]:
        files: List[str] = []
        visited: Set[str] = set()
        stack: List[Tuple[str, int]] = [(top, 1)]

        while stack:
            current, depth = stack.pop()
            real = os.path.realpath(current)
            if real in visited:
                continue
            visited.add(real)

            try:
                names = self._fs.list_dir(current)
            except OSError as e:
                if source.ignore_unreadable_dirs:
                    logger.warning("Skipping unreadable directory %s: %s", current, e)
                    continue
                raise DiscoveryError(f"Unable to read directory {current}: {e}") from e

            subdirs: List[str] = []
            for name in names:
                full = os.path.join(current, name)
                if not is_within(str(self._project_root), full):
                    logger.warning("Skipping %s: resolves outside the project root", full)
                    continue
                if self._fs.is_dir(full):
                    if not source.max_depth or depth < source.max_depth:
                        subdirs.append(full)
                elif self._fs.is_file(full):
                    files.append(full)

            # Reversed so the stack pops directories in name order
            stack.extend((d, depth + 1) for d in reversed(subdirs))

        return files

    def _collect_stats(self, files: List[DiscoveredItem], source: LocalLikeSource) -> Dict[str, FileStats]:
        config = source.tree_view
        stats: Dict[str, FileStats] = {}
        for item in files:
            size: Optional[int] = None
            modified: Optional[float] = None
            if config.show_size or config.show_last_modified:
                size, modified = self._fs.stat(item.location)
            chars = len(item.read()) if config.show_char_count else None
            stats[item.relative_path] = FileStats(size=size, modified=modified, chars=chars)
        return stats
