"""Hierarchical tree builder.

Turns a flat list of relative POSIX paths into a nested TreeNode
structure and renders it as an ASCII tree. The builder does not care where
the paths came from (local walk or GitHub listing).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Mapping, Optional

from core.models import TreeViewConfig
from core.paths import split_posix

BRANCH = "├── "
LAST = "└── "
PIPE = "│   "
SPACE = "    "


@dataclass(frozen=True)
class FileStats:
    size: Optional[int] = None
    modified: Optional[float] = None
    chars: Optional[int] = None


@dataclass
class TreeNode:
    name: str
    is_dir: bool = True
    path: str = ""
    children: Dict[str, "TreeNode"] = field(default_factory=dict)
    stats: Optional[FileStats] = None

    def ensure_dir(self, name: str) -> "TreeNode":
        # Directories are keyed with a trailing "/" so a file and a directory
        # sharing a name (e.g. "a" and "a/b") are both kept
        key = name + "/"
        node = self.children.get(key)
        if node is None:
            child_path = f"{self.path}/{name}" if self.path else name
            node = TreeNode(name=name, is_dir=True, path=child_path)
            self.children[key] = node
        return node

    def add_file(self, name: str, stats: Optional[FileStats] = None) -> "TreeNode":
        node = self.children.get(name)
        if node is None:
            child_path = f"{self.path}/{name}" if self.path else name
            node = TreeNode(name=name, is_dir=False, path=child_path, stats=stats)
            self.children[name] = node
        return node


def flatten(root: TreeNode) -> List[str]:
    """Return the file paths held by a tree, in insertion order."""
    out: List[str] = []
    stack = [iter(root.children.values())]
    while stack:
        node = next(stack[-1], None)
        if node is None:
            stack.pop()
            continue
        if node.is_dir and node.children:
            stack.append(iter(node.children.values()))
        elif not node.is_dir:
            out.append(node.path)
    return out


def _format_size(size: int) -> str:
    value = float(size)
    for unit in ("B", "KB", "MB", "GB"):
        if value < 1024 or unit == "GB":
            return f"{int(value)} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{size} B"


class FileTreeBuilder:
    def __init__(self, config: Optional[TreeViewConfig] = None) -> None:
        self._config = config or TreeViewConfig()

    def build(self, paths: Iterable[str], stats: Optional[Mapping[str, FileStats]] = None) -> TreeNode:
        root = TreeNode(name="", is_dir=True)
        stats = stats or {}

        for raw in paths:
            parts = split_posix(raw)
            if not parts:
                continue
            node = root
            for seg in parts[:-1]:
                node = node.ensure_dir(seg)
            node.add_file(parts[-1], stats.get("/".join(parts)))

        return root

    def render(self, root: TreeNode) -> str:
        lines: List[str] = []
        self._render_children(root, prefix="", depth=1, lines=lines)
        return "\n".join(lines) + "\n" if lines else ""

    def _ordered(self, node: TreeNode) -> List[TreeNode]:
        children = list(node.children.values())
        if not self._config.include_files:
            children = [c for c in children if c.is_dir]

        order = self._config.order
        if order == "alpha":
            children.sort(key=lambda c: c.name.lower())
        elif order == "dirs_first":
            children.sort(key=lambda c: (not c.is_dir, c.name.lower()))
        return children

    def _render_children(self, node: TreeNode, *, prefix: str, depth: int, lines: List[str]) -> None:
        max_depth = self._config.max_depth
        if max_depth and depth > max_depth:
            return

        children = self._ordered(node)
        for i, child in enumerate(children):
            last = i == len(children) - 1
            lines.append(prefix + (LAST if last else BRANCH) + self._label(child))
            if child.is_dir:
                self._render_children(
                    child,
                    prefix=prefix + (SPACE if last else PIPE),
                    depth=depth + 1,
                    lines=lines,
                )

    def _label(self, node: TreeNode) -> str:
        if node.is_dir:
            label = node.name + "/"
            note = self._config.note_for(node.path)
            return f"{label}  # {note}" if note else label

        meta = self._metadata(node.stats)
        return f"{node.name} [{meta}]" if meta else node.name

    def _metadata(self, stats: Optional[FileStats]) -> str:
        if stats is None:
            return ""
        parts: List[str] = []
        if self._config.show_size and stats.size is not None:
            parts.append(_format_size(stats.size))
        if self._config.show_last_modified and stats.modified is not None:
            ts = datetime.fromtimestamp(stats.modified, tz=timezone.utc)
            parts.append(ts.strftime("%Y-%m-%d %H:%M"))
        if self._config.show_char_count and stats.chars is not None:
            parts.append(f"{stats.chars} chars")
        return ", ".join(parts)


def build_tree_view(
    paths: Iterable[str],
    config: Optional[TreeViewConfig] = None,
    stats: Optional[Mapping[str, FileStats]] = None,
) -> str:
    builder = FileTreeBuilder(config)
    return builder.render(builder.build(paths, stats))
