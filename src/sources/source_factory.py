"""Factory turning raw configuration records into source models.

Records use the camelCase keys of the configuration format; validation
happens here and in the model constructors so a bad record fails before
any I/O.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Mapping

from core.errors import ValidationError
from core.models import GithubSource, LocalSource, Source, TreeSource, TreeViewConfig, UrlSource


def _require(data: Mapping[str, Any], key: str, kind: str) -> Any:
    if key not in data or data[key] in (None, "", []):
        raise ValidationError(f'{kind} source must have a "{key}" property')
    return data[key]


def _string_list(value: Any, key: str) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return list(value)
    raise ValidationError(f"{key} must be a string or an array of strings")


def _common(data: Mapping[str, Any]) -> Dict[str, Any]:
    description = data.get("description") or ""
    if not isinstance(description, str):
        raise ValidationError("description must be a string")
    return {"description": description, "tags": tuple(_string_list(data.get("tags"), "tags"))}


def _filters(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "file_pattern": tuple(_string_list(data.get("filePattern", "*"), "filePattern")),
        "path": tuple(_string_list(data.get("path"), "path")),
        "not_path": tuple(_string_list(data.get("notPath"), "notPath")),
        "contains": tuple(_string_list(data.get("contains"), "contains")),
        "not_contains": tuple(_string_list(data.get("notContains"), "notContains")),
    }


def _local(data: Mapping[str, Any], root_path: str) -> LocalSource:
    paths = _string_list(_require(data, "sourcePaths", "File"), "sourcePaths")
    docs = data.get("docs")
    return LocalSource(
        source_paths=tuple(paths),
        root=root_path,
        path_prefix=data.get("pathPrefix"),
        docs=tuple(_string_list(docs, "docs")) if docs is not None else None,
        show_tree_view=bool(data.get("showTreeView", True)),
        tree_view=TreeViewConfig.from_value(data.get("treeView")),
        modifiers=data.get("modifiers") or (),
        ignore_unreadable_dirs=bool(data.get("ignoreUnreadableDirs", True)),
        max_depth=int(data.get("maxDepth", 0) or 0),
        max_files=int(data.get("maxFiles", 0) or 0),
        **_filters(data),
        **_common(data),
    )


def _github(data: Mapping[str, Any], root_path: str) -> GithubSource:
    repository = _require(data, "repository", "GitHub")
    if not isinstance(repository, str):
        raise ValidationError("repository must be a string")
    return GithubSource(
        repository=repository,
        source_paths=tuple(_string_list(data.get("sourcePaths", ""), "sourcePaths")) or ("",),
        branch=data.get("branch") or "main",
        github_token=data.get("githubToken"),
        show_tree_view=bool(data.get("showTreeView", True)),
        modifiers=data.get("modifiers") or (),
        **_filters(data),
        **_common(data),
    )


def _url(data: Mapping[str, Any], root_path: str) -> UrlSource:
    urls = data.get("urls")
    if not isinstance(urls, (list, tuple)) or not urls:
        raise ValidationError('URL source must have a "urls" array property')
    headers = data.get("headers") or {}
    if not isinstance(headers, Mapping):
        raise ValidationError("headers must be an object")
    selector = data.get("selector")
    if selector is not None and not isinstance(selector, str):
        raise ValidationError("selector must be a string")
    return UrlSource(urls=tuple(urls), selector=selector, headers=dict(headers), **_common(data))


def _tree(data: Mapping[str, Any], root_path: str) -> TreeSource:
    paths = _string_list(_require(data, "sourcePaths", "Tree"), "sourcePaths")
    render_format = data.get("renderFormat", "ascii")
    if not isinstance(render_format, str):
        raise ValidationError("renderFormat must be a string")

    # Tree options may sit at the top level of the record or under treeView
    options = {k: data[k] for k in ("showSize", "showLastModified", "showCharCount",
                                    "includeFiles", "maxDepth", "dirContext", "order") if k in data}
    nested = data.get("treeView")
    if isinstance(nested, Mapping):
        options = {**nested, **options}

    return TreeSource(
        source_paths=tuple(p.rstrip("/") or p for p in paths),
        root=root_path,
        render_format=render_format,
        tree_view=TreeViewConfig.from_value(options),
        **_filters(data),
        **_common(data),
    )


_FACTORIES: Dict[str, Callable[[Mapping[str, Any], str], Source]] = {
    "file": _local,
    "local": _local,
    "github": _github,
    "url": _url,
    "tree": _tree,
}


def create_source(data: Mapping[str, Any], *, root_path: str = ".") -> Source:
    """Build one source from its configuration record.

    Raises ValidationError for unknown types and malformed fields.
    """
    if not isinstance(data, Mapping):
        raise ValidationError("Source definition must be an object")

    kind = data.get("type")
    factory = _FACTORIES.get(kind) if isinstance(kind, str) else None
    if factory is None:
        raise ValidationError(f"Unknown source type: {kind!r}")
    return factory(data, root_path)


def create_sources(records: Iterable[Mapping[str, Any]], *, root_path: str = ".") -> List[Source]:
    return [create_source(r, root_path=root_path) for r in records]
