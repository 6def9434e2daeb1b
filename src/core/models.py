"""Immutable source models describing what to fetch.

Each variant is a frozen dataclass tagged by a ``kind`` class attribute
(``file``, ``github``, ``url``, ``tree``). All of them expose the same
``criteria`` capability so finders never branch on the concrete type to
build their filter chain.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Literal, Mapping, Optional, Tuple, Union

from clients.github.inputs import normalize_ref, parse_repository
from core.errors import ValidationError
from core.paths import PatternInput, as_patterns, contains_wildcard, normalize_posix_relpath, optional_patterns


Patterns = Tuple[str, ...]
TreeOrder = Literal["insertion", "alpha", "dirs_first"]

RENDER_FORMATS = ("ascii",)
TREE_ORDERS = ("insertion", "alpha", "dirs_first")


@dataclass(frozen=True)
class FilterCriteria:
    """Uniform filter capability exposed by every source.

    Each axis is None (no constraint) or a non-empty tuple of patterns.
    """

    name: Optional[Patterns] = None
    path: Optional[Patterns] = None
    not_path: Optional[Patterns] = None
    contains: Optional[Patterns] = None
    not_contains: Optional[Patterns] = None
    size: Optional[Patterns] = None
    date: Optional[Patterns] = None

    @classmethod
    def of(
        cls,
        *,
        name: PatternInput = None,
        path: PatternInput = None,
        not_path: PatternInput = None,
        contains: PatternInput = None,
        not_contains: PatternInput = None,
    ) -> "FilterCriteria":
        return cls(
            name=optional_patterns(name),
            path=optional_patterns(path),
            not_path=optional_patterns(not_path),
            contains=optional_patterns(contains),
            not_contains=optional_patterns(not_contains),
        )

    @property
    def is_empty(self) -> bool:
        return not any((self.name, self.path, self.not_path, self.contains, self.not_contains))


@dataclass(frozen=True)
class TreeViewConfig:
    enabled: bool = True
    show_size: bool = False
    show_last_modified: bool = False
    show_char_count: bool = False
    include_files: bool = True
    max_depth: int = 0  # 0 = unlimited
    dir_context: Mapping[str, str] = field(default_factory=dict)
    order: TreeOrder = "insertion"

    def __post_init__(self) -> None:
        if int(self.max_depth) < 0:
            raise ValidationError("maxDepth must be zero or positive")
        if self.order not in TREE_ORDERS:
            raise ValidationError(f"Invalid tree order: {self.order}. Allowed: {', '.join(TREE_ORDERS)}")
        # Keys are stored normalized so lookups are exact on clean POSIX paths
        notes = {normalize_posix_relpath(k).rstrip("/"): str(v) for k, v in dict(self.dir_context).items()}
        object.__setattr__(self, "dir_context", notes)

    @property
    def shows_metadata(self) -> bool:
        return self.show_size or self.show_last_modified or self.show_char_count

    def note_for(self, dir_path: str) -> Optional[str]:
        return self.dir_context.get(normalize_posix_relpath(dir_path).rstrip("/"))

    @classmethod
    def from_value(cls, value: Any) -> "TreeViewConfig":
        """Build from a bool (on/off) or a mapping of camelCase options."""
        if value is None or isinstance(value, bool):
            return cls(enabled=value is not False)
        if isinstance(value, TreeViewConfig):
            return value
        if not isinstance(value, Mapping):
            raise ValidationError("treeView must be a boolean or an object")

        dir_context = value.get("dirContext") or {}
        if not isinstance(dir_context, Mapping):
            raise ValidationError("dirContext must be an associative array")

        return cls(
            enabled=bool(value.get("enabled", True)),
            show_size=bool(value.get("showSize", False)),
            show_last_modified=bool(value.get("showLastModified", False)),
            show_char_count=bool(value.get("showCharCount", False)),
            include_files=bool(value.get("includeFiles", True)),
            max_depth=int(value.get("maxDepth", 0) or 0),
            dir_context=dict(dir_context),
            order=value.get("order", "insertion"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _compact(
            {
                "enabled": self.enabled,
                "showSize": self.show_size,
                "showLastModified": self.show_last_modified,
                "showCharCount": self.show_char_count,
                "includeFiles": self.include_files,
                "maxDepth": self.max_depth,
                "dirContext": dict(self.dir_context),
                "order": None if self.order == "insertion" else self.order,
            },
            keep=("enabled", "includeFiles"),
        )


@dataclass(frozen=True)
class ModifierRef:
    """Reference to a registered modifier plus its per-source options."""

    id: str
    context: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not (self.id or "").strip():
            raise ValidationError("Modifier id must be non-empty")
        object.__setattr__(self, "id", self.id.strip())

    @classmethod
    def parse(cls, raw: Any) -> "ModifierRef":
        if isinstance(raw, ModifierRef):
            return raw
        if isinstance(raw, str):
            return cls(id=raw)
        if isinstance(raw, Mapping):
            name = raw.get("name") or raw.get("id")
            if not isinstance(name, str):
                raise ValidationError("Modifier must define a 'name'")
            options = raw.get("options") or {}
            if not isinstance(options, Mapping):
                raise ValidationError(f"Options for modifier '{name}' must be an object")
            return cls(id=name, context=dict(options))
        raise ValidationError(f"Invalid modifier definition: {raw!r}")

    def to_dict(self) -> Any:
        if not self.context:
            return self.id
        return {"name": self.id, "options": dict(self.context)}


def _compact(data: Dict[str, Any], *, keep: Tuple[str, ...] = ()) -> Dict[str, Any]:
    # Drop empty optional values; `keep` names survive even when falsy
    return {k: v for k, v in data.items() if k in keep or v not in (None, "", (), [], {}, False, 0)}


def _as_modifiers(raw: Any) -> Tuple[ModifierRef, ...]:
    if raw is None:
        return tuple()
    if isinstance(raw, (str, Mapping, ModifierRef)):
        raw = [raw]
    return tuple(ModifierRef.parse(m) for m in raw)


def _require_paths(value: PatternInput, *, kind: str) -> Patterns:
    paths = as_patterns(value)
    if not paths:
        raise ValidationError(f"{kind} source must define at least one source path")
    return paths


@dataclass(frozen=True)
class LocalSource:
    """Files from the local filesystem, emitted as fenced code blocks."""

    kind: ClassVar[str] = "file"

    source_paths: Patterns
    description: str = ""
    root: str = "."
    path_prefix: Optional[str] = None
    docs: Optional[Patterns] = None
    file_pattern: Patterns = ("*",)
    path: Patterns = ()
    not_path: Patterns = ()
    contains: Patterns = ()
    not_contains: Patterns = ()
    show_tree_view: bool = True
    tree_view: TreeViewConfig = field(default_factory=TreeViewConfig)
    modifiers: Tuple[ModifierRef, ...] = ()
    ignore_unreadable_dirs: bool = True
    max_depth: int = 0
    max_files: int = 0
    tags: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "source_paths", _require_paths(self.source_paths, kind="Local"))
        object.__setattr__(self, "file_pattern", as_patterns(self.file_pattern))
        object.__setattr__(self, "path", as_patterns(self.path))
        object.__setattr__(self, "not_path", as_patterns(self.not_path))
        object.__setattr__(self, "contains", as_patterns(self.contains))
        object.__setattr__(self, "not_contains", as_patterns(self.not_contains))
        object.__setattr__(self, "docs", optional_patterns(self.docs))
        object.__setattr__(self, "modifiers", _as_modifiers(self.modifiers))
        object.__setattr__(self, "tags", as_patterns(self.tags))
        if self.max_depth < 0 or self.max_files < 0:
            raise ValidationError("maxDepth and maxFiles must be zero or positive")

    @property
    def has_wildcard(self) -> bool:
        return any(contains_wildcard(p) for p in self.source_paths)

    @property
    def criteria(self) -> FilterCriteria:
        return FilterCriteria.of(
            name=self.file_pattern,
            path=self.path,
            not_path=self.not_path,
            contains=self.contains,
            not_contains=self.not_contains,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.kind,
            **_compact(
                {
                    "description": self.description,
                    "sourcePaths": list(self.source_paths),
                    "pathPrefix": self.path_prefix,
                    "docs": list(self.docs or ()),
                    "filePattern": list(self.file_pattern),
                    "path": list(self.path),
                    "notPath": list(self.not_path),
                    "contains": list(self.contains),
                    "notContains": list(self.not_contains),
                    "showTreeView": self.show_tree_view,
                    "modifiers": [m.to_dict() for m in self.modifiers],
                    "maxDepth": self.max_depth,
                    "maxFiles": self.max_files,
                    "tags": list(self.tags),
                },
                keep=("showTreeView",),
            ),
        }


@dataclass(frozen=True)
class GithubSource:
    """Files from a GitHub repository listed through the contents API."""

    kind: ClassVar[str] = "github"

    repository: str
    source_paths: Patterns = ("",)
    description: str = ""
    branch: str = "main"
    github_token: Optional[str] = field(default=None, repr=False)
    file_pattern: Patterns = ("*",)
    path: Patterns = ()
    not_path: Patterns = ()
    contains: Patterns = ()
    not_contains: Patterns = ()
    show_tree_view: bool = True
    modifiers: Tuple[ModifierRef, ...] = ()
    tags: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # Fail fast on a malformed identifier before any request is made
        owner, repo = parse_repository(self.repository)
        object.__setattr__(self, "repository", f"{owner}/{repo}")
        object.__setattr__(self, "branch", normalize_ref(self.branch))

        paths = self.source_paths
        if isinstance(paths, str):
            paths = [paths]
        # An empty string is the repository root and must survive coercion
        cleaned = tuple(normalize_posix_relpath(p).rstrip("/") for p in (paths or [""]))
        object.__setattr__(self, "source_paths", cleaned or ("",))

        object.__setattr__(self, "file_pattern", as_patterns(self.file_pattern))
        object.__setattr__(self, "path", as_patterns(self.path))
        object.__setattr__(self, "not_path", as_patterns(self.not_path))
        object.__setattr__(self, "contains", as_patterns(self.contains))
        object.__setattr__(self, "not_contains", as_patterns(self.not_contains))
        object.__setattr__(self, "modifiers", _as_modifiers(self.modifiers))
        object.__setattr__(self, "tags", as_patterns(self.tags))

    @property
    def owner(self) -> str:
        return self.repository.split("/", 1)[0]

    @property
    def repo(self) -> str:
        return self.repository.split("/", 1)[1]

    @property
    def criteria(self) -> FilterCriteria:
        return FilterCriteria.of(
            name=self.file_pattern,
            path=self.path,
            not_path=self.not_path,
            contains=self.contains,
            not_contains=self.not_contains,
        )

    def to_dict(self) -> Dict[str, Any]:
        # Token is deliberately never serialized
        return {
            "type": self.kind,
            **_compact(
                {
                    "description": self.description,
                    "repository": self.repository,
                    "branch": self.branch,
                    "sourcePaths": list(self.source_paths),
                    "filePattern": list(self.file_pattern),
                    "path": list(self.path),
                    "notPath": list(self.not_path),
                    "contains": list(self.contains),
                    "notContains": list(self.not_contains),
                    "showTreeView": self.show_tree_view,
                    "modifiers": [m.to_dict() for m in self.modifiers],
                    "tags": list(self.tags),
                },
                keep=("showTreeView", "sourcePaths"),
            ),
        }


@dataclass(frozen=True)
class UrlSource:
    """Web pages fetched over HTTP and reduced to text."""

    kind: ClassVar[str] = "url"

    urls: Patterns
    description: str = ""
    selector: Optional[str] = None
    headers: Mapping[str, str] = field(default_factory=dict)
    tags: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        urls = as_patterns(self.urls)
        if not urls:
            raise ValidationError('URL source must have a "urls" array property')
        object.__setattr__(self, "urls", urls)
        object.__setattr__(self, "headers", {str(k): str(v) for k, v in dict(self.headers or {}).items()})
        object.__setattr__(self, "tags", as_patterns(self.tags))

    @property
    def has_selector(self) -> bool:
        return bool((self.selector or "").strip())

    @property
    def criteria(self) -> FilterCriteria:
        return FilterCriteria()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.kind,
            **_compact(
                {
                    "urls": list(self.urls),
                    "description": self.description,
                    "headers": dict(self.headers),
                    "selector": self.selector,
                    "tags": list(self.tags),
                }
            ),
        }


@dataclass(frozen=True)
class TreeSource:
    """Directory structure only, rendered as a tree view."""

    kind: ClassVar[str] = "tree"
    # Tree discovery shares the local walk; these mirror LocalSource defaults
    ignore_unreadable_dirs: ClassVar[bool] = True
    docs: ClassVar[Optional[Patterns]] = None
    max_depth: ClassVar[int] = 0
    max_files: ClassVar[int] = 0

    source_paths: Patterns
    description: str = ""
    root: str = "."
    file_pattern: Patterns = ("*",)
    path: Patterns = ()
    not_path: Patterns = ()
    contains: Patterns = ()
    not_contains: Patterns = ()
    render_format: str = "ascii"
    tree_view: TreeViewConfig = field(default_factory=TreeViewConfig)
    tags: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "source_paths", _require_paths(self.source_paths, kind="Tree"))
        if self.render_format not in RENDER_FORMATS:
            raise ValidationError(
                f"Invalid renderFormat: {self.render_format}. Allowed formats: {', '.join(RENDER_FORMATS)}"
            )
        object.__setattr__(self, "file_pattern", as_patterns(self.file_pattern))
        object.__setattr__(self, "path", as_patterns(self.path))
        object.__setattr__(self, "not_path", as_patterns(self.not_path))
        object.__setattr__(self, "contains", as_patterns(self.contains))
        object.__setattr__(self, "not_contains", as_patterns(self.not_contains))
        object.__setattr__(self, "tags", as_patterns(self.tags))

    @property
    def has_wildcard(self) -> bool:
        return any(contains_wildcard(p) for p in self.source_paths)

    @property
    def criteria(self) -> FilterCriteria:
        return FilterCriteria.of(
            name=self.file_pattern,
            path=self.path,
            not_path=self.not_path,
            contains=self.contains,
            not_contains=self.not_contains,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.kind,
            **_compact(
                {
                    "description": self.description,
                    "sourcePaths": list(self.source_paths),
                    "filePattern": list(self.file_pattern),
                    "path": list(self.path),
                    "notPath": list(self.not_path),
                    "contains": list(self.contains),
                    "notContains": list(self.not_contains),
                    "renderFormat": self.render_format,
                    "tags": list(self.tags),
                }
            ),
            **self.tree_view.to_dict(),
        }


Source = Union[LocalSource, GithubSource, UrlSource, TreeSource]
FilterableSource = Union[LocalSource, GithubSource, TreeSource]
