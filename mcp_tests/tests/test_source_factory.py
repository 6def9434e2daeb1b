import pytest

from core.errors import ValidationError
from core.models import GithubSource, LocalSource, ModifierRef, TreeSource, UrlSource
from sources.source_factory import create_source, create_sources


def test_create_local_source(tmp_path):
    src = create_source(
        {
            "type": "file",
            "description": "Code",
            "sourcePaths": "src",
            "filePattern": ["*.py"],
            "notPath": ["tests"],
            "pathPrefix": "/app",
            "treeView": {"showSize": True},
            "modifiers": ["sanitizer", {"name": "python-signature", "options": {"include_private": True}}],
            "maxFiles": 5,
        },
        root_path=str(tmp_path),
    )

    assert isinstance(src, LocalSource)
    assert src.root == str(tmp_path)
    assert src.source_paths == ("src",)
    assert src.file_pattern == ("*.py",)
    assert src.not_path == ("tests",)
    assert src.tree_view.show_size
    assert src.modifiers == (
        ModifierRef("sanitizer"),
        ModifierRef("python-signature", {"include_private": True}),
    )
    assert src.max_files == 5


def test_local_alias_and_single_modifier():
    src = create_source({"type": "local", "sourcePaths": ["."], "modifiers": "sanitizer"})

    assert isinstance(src, LocalSource)
    assert src.modifiers == (ModifierRef("sanitizer"),)


def test_create_github_source():
    src = create_source(
        {"type": "github", "repository": "octocat/Hello-World", "branch": "dev", "githubToken": "t"}
    )

    assert isinstance(src, GithubSource)
    assert src.branch == "dev"
    assert src.source_paths == ("",)
    assert src.github_token == "t"


def test_github_source_requires_valid_repository():
    with pytest.raises(ValidationError):
        create_source({"type": "github"})
    with pytest.raises(ValidationError):
        create_source({"type": "github", "repository": "https://github.com/octocat/Hello-World"})


def test_create_url_source():
    src = create_source(
        {"type": "url", "urls": ["https://example.com"], "selector": "main", "headers": {"X-Key": "1"}}
    )

    assert isinstance(src, UrlSource)
    assert src.selector == "main"
    assert src.headers == {"X-Key": "1"}


@pytest.mark.parametrize(
    "record",
    [
        {"type": "url"},
        {"type": "url", "urls": "https://example.com"},
        {"type": "url", "urls": ["https://example.com"], "headers": ["nope"]},
    ],
)
def test_url_source_validation(record):
    with pytest.raises(ValidationError):
        create_source(record)


def test_create_tree_source_options_top_level_or_nested():
    top = create_source({"type": "tree", "sourcePaths": ["src/"], "maxDepth": 2, "dirContext": {"src": "code"}})
    nested = create_source({"type": "tree", "sourcePaths": "src", "treeView": {"maxDepth": 2}})

    assert isinstance(top, TreeSource)
    assert top.source_paths == ("src",)
    assert top.tree_view.max_depth == 2
    assert top.tree_view.note_for("src") == "code"
    assert nested.tree_view.max_depth == 2


def test_tree_source_rejects_unknown_format():
    with pytest.raises(ValidationError):
        create_source({"type": "tree", "sourcePaths": ["."], "renderFormat": "mermaid"})


@pytest.mark.parametrize(
    "record",
    [
        "not a mapping",
        {"sourcePaths": ["src"]},
        {"type": "ftp"},
        {"type": "file"},
        {"type": "file", "sourcePaths": [1, 2]},
        {"type": "file", "sourcePaths": ["src"], "description": 3},
    ],
)
def test_invalid_records(record):
    with pytest.raises(ValidationError):
        create_source(record)


def test_create_sources_keeps_order():
    sources = create_sources(
        [
            {"type": "url", "urls": ["https://example.com"]},
            {"type": "file", "sourcePaths": ["src"]},
        ]
    )

    assert [s.kind for s in sources] == ["url", "file"]
