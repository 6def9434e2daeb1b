import pytest

from core.errors import ValidationError
from core.models import (
    FilterCriteria,
    GithubSource,
    LocalSource,
    ModifierRef,
    TreeSource,
    TreeViewConfig,
    UrlSource,
)


# ---------------------------
# FilterCriteria
# ---------------------------

def test_filter_criteria_normalizes_axes():
    c = FilterCriteria.of(name="*.py", path=["src", " "], not_path=None, contains=[])

    assert c.name == ("*.py",)
    assert c.path == ("src",)
    assert c.not_path is None
    assert c.contains is None
    assert not c.is_empty
    assert FilterCriteria().is_empty


# ---------------------------
# LocalSource
# ---------------------------

def test_local_source_defaults_and_criteria():
    s = LocalSource(source_paths="src", not_path=["vendor"])

    assert s.source_paths == ("src",)
    assert s.file_pattern == ("*",)
    assert s.show_tree_view is True
    assert s.criteria.name == ("*",)
    assert s.criteria.not_path == ("vendor",)
    assert s.criteria.contains is None
    assert not s.has_wildcard
    assert LocalSource(source_paths="src/**/*.py").has_wildcard


def test_local_source_requires_paths():
    with pytest.raises(ValidationError):
        LocalSource(source_paths=[])


def test_local_source_rejects_negative_limits():
    with pytest.raises(ValidationError):
        LocalSource(source_paths="src", max_files=-1)


def test_local_source_to_dict_omits_empty_values():
    s = LocalSource(source_paths=["src"], description="Code", modifiers=["sanitizer"])

    assert s.to_dict() == {
        "type": "file",
        "description": "Code",
        "sourcePaths": ["src"],
        "filePattern": ["*"],
        "showTreeView": True,
        "modifiers": ["sanitizer"],
    }


# ---------------------------
# GithubSource
# ---------------------------

def test_github_source_parses_repository():
    s = GithubSource(repository=" octocat/Hello-World ", branch=None)

    assert s.owner == "octocat"
    assert s.repo == "Hello-World"
    assert s.branch == "main"
    assert s.source_paths == ("",)


@pytest.mark.parametrize("bad", ["", "octocat", "a/b/c", "https://github.com/a/b"])
def test_github_source_rejects_bad_repository(bad):
    with pytest.raises(ValidationError):
        GithubSource(repository=bad)


def test_github_source_token_never_serialized():
    s = GithubSource(repository="o/r", source_paths=["/src/"], github_token="secret")

    assert s.source_paths == ("src",)
    assert "secret" not in repr(s)
    assert "secret" not in str(s.to_dict())


# ---------------------------
# UrlSource / TreeSource
# ---------------------------

def test_url_source_requires_urls():
    with pytest.raises(ValidationError):
        UrlSource(urls=[])


def test_url_source_blank_selector_is_no_selector():
    assert not UrlSource(urls="https://example.com", selector="  ").has_selector
    assert UrlSource(urls="https://example.com", selector="main").has_selector
    assert UrlSource(urls="https://example.com").criteria.is_empty


def test_tree_source_render_format():
    assert TreeSource(source_paths="src").render_format == "ascii"
    with pytest.raises(ValidationError):
        TreeSource(source_paths="src", render_format="mermaid")


# ---------------------------
# TreeViewConfig / ModifierRef
# ---------------------------

def test_tree_view_from_value():
    assert TreeViewConfig.from_value(True).enabled
    assert not TreeViewConfig.from_value(False).enabled

    cfg = TreeViewConfig.from_value(
        {"showSize": True, "maxDepth": 2, "dirContext": {"./src/": "code"}, "order": "alpha"}
    )
    assert cfg.show_size
    assert cfg.max_depth == 2
    assert cfg.order == "alpha"
    assert cfg.note_for("src") == "code"
    assert cfg.note_for("src/") == "code"
    assert cfg.note_for("docs") is None


def test_tree_view_rejects_bad_values():
    with pytest.raises(ValidationError):
        TreeViewConfig(order="random")
    with pytest.raises(ValidationError):
        TreeViewConfig(max_depth=-1)
    with pytest.raises(ValidationError):
        TreeViewConfig.from_value("yes")


def test_modifier_ref_parse():
    assert ModifierRef.parse("sanitizer") == ModifierRef("sanitizer")

    ref = ModifierRef.parse({"name": "python-signature", "options": {"keep_docstrings": False}})
    assert ref.id == "python-signature"
    assert ref.context == {"keep_docstrings": False}
    assert ref.to_dict() == {"name": "python-signature", "options": {"keep_docstrings": False}}

    with pytest.raises(ValidationError):
        ModifierRef.parse({"options": {}})
