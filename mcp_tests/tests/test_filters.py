from core.models import FilterCriteria
from filters.chain import apply_filters, build_filter_chain
from filters.contents import ContentsFilter
from filters.pattern import ExcludePathFilter, FilePatternFilter, PathFilter, path_matches


def _paths(items):
    return [i.relative_path for i in items]


# ---------------------------
# FilePatternFilter
# ---------------------------

def test_file_pattern_filter_matches_any_pattern(make_item):
    items = [make_item("src/a.py"), make_item("README.md"), make_item("src/b.txt")]

    out = FilePatternFilter(["*.py", "*.md"]).apply(items)
    assert _paths(out) == ["src/a.py", "README.md"]


def test_file_pattern_filter_empty_is_noop(make_item):
    items = [make_item("a.py"), make_item("b.md")]
    assert FilePatternFilter([]).apply(items) == items


def test_file_pattern_filter_case_sensitivity(make_item):
    items = [make_item("README.MD"), make_item("notes.md")]

    assert _paths(FilePatternFilter("*.md").apply(items)) == ["notes.md"]
    assert _paths(FilePatternFilter("*.md", case_sensitive=False).apply(items)) == ["README.MD", "notes.md"]


# ---------------------------
# PathFilter / ExcludePathFilter
# ---------------------------

def test_path_matches_substring_and_glob():
    assert path_matches("src/core/models.py", "core")
    assert path_matches("src/core/models.py", "src/**/*.py")
    assert path_matches("src/core/models.py", "src/*")
    assert not path_matches("docs/guide.md", "src")


def test_path_filter_keeps_matching(make_item):
    items = [make_item("src/a.py"), make_item("docs/b.md"), make_item("src/sub/c.py")]
    assert _paths(PathFilter("src").apply(items)) == ["src/a.py", "src/sub/c.py"]


def test_exclude_path_filter_drops_matching(make_item):
    items = [make_item("src/a.py"), make_item("vendor/x.py"), make_item("src/vendor/y.py")]
    assert _paths(ExcludePathFilter(["vendor"]).apply(items)) == ["src/a.py"]


def test_exclude_wins_over_include(make_item):
    items = [make_item("src/a.py"), make_item("src/generated/b.py")]
    criteria = FilterCriteria.of(path=["src"], not_path=["src"])

    assert apply_filters(build_filter_chain(criteria), items) == []


def test_filters_handle_empty_input():
    for f in (FilePatternFilter("*.py"), PathFilter("src"), ExcludePathFilter("x"), ContentsFilter(contains="y")):
        assert f.apply([]) == []


def test_filters_do_not_mutate_input(make_item):
    items = [make_item("a.py"), make_item("b.md")]
    snapshot = list(items)

    FilePatternFilter("*.py").apply(items)
    assert items == snapshot


# ---------------------------
# ContentsFilter
# ---------------------------

def test_contents_filter_all_contains_and_no_not_contains(make_item):
    items = [
        make_item("a.py", "import os\nclass A: pass"),
        make_item("b.py", "import os\n"),
        make_item("c.py", "import os\nclass C: pass\n# deprecated"),
    ]

    out = ContentsFilter(contains=["import os", "class"], not_contains="deprecated").apply(items)
    assert _paths(out) == ["a.py"]


def test_contents_filter_regex_pattern(make_item):
    items = [make_item("a.py", "def Foo():"), make_item("b.py", "def bar():")]

    out = ContentsFilter(contains="/def [A-Z]\\w+/").apply(items)
    assert _paths(out) == ["a.py"]


def test_contents_filter_without_patterns_never_reads(make_item):
    items = [make_item("a.py", "x"), make_item("b.py", "y")]

    out = ContentsFilter().apply(items)
    assert out == items
    assert all(i.reads == 0 for i in items)


def test_chain_runs_structural_filters_before_reading(make_item):
    kept = make_item("src/a.py", "needle")
    wrong_name = make_item("src/a.md", "needle")
    excluded = make_item("vendor/b.py", "needle")
    items = [kept, wrong_name, excluded]

    criteria = FilterCriteria.of(name="*.py", not_path="vendor", contains="needle")
    out = apply_filters(build_filter_chain(criteria), items)

    assert out == [kept]
    assert kept.reads == 1
    assert wrong_name.reads == 0
    assert excluded.reads == 0


def test_chain_order_is_name_path_exclude_contents():
    criteria = FilterCriteria.of(name="*.py", path="src", not_path="x", contains="y")
    chain = build_filter_chain(criteria)

    assert [type(f) for f in chain] == [FilePatternFilter, PathFilter, ExcludePathFilter, ContentsFilter]


def test_empty_criteria_builds_empty_chain(make_item):
    items = [make_item("a"), make_item("b")]

    assert build_filter_chain(FilterCriteria()) == []
    assert apply_filters([], items) == items
