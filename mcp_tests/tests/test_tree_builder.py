from core.models import TreeViewConfig
from tree.builder import FileStats, FileTreeBuilder, build_tree_view, flatten


def test_build_deduplicates_directories():
    root = FileTreeBuilder().build(["a/b/x.txt", "a/b/y.txt"])

    assert list(root.children) == ["a/"]
    b = root.children["a/"].children["b/"]
    assert b.is_dir
    assert list(b.children) == ["x.txt", "y.txt"]


def test_flatten_round_trip():
    paths = ["README.md", "src/app.py", "src/core/models.py", "docs/index.md"]
    root = FileTreeBuilder().build(paths)

    assert sorted(flatten(root)) == sorted(paths)


def test_render_ascii_insertion_order():
    out = build_tree_view(["src/app.py", "src/core/models.py", "README.md"])

    assert out == (
        "├── src/\n"
        "│   ├── app.py\n"
        "│   └── core/\n"
        "│       └── models.py\n"
        "└── README.md\n"
    )


def test_render_dirs_first_ordering():
    config = TreeViewConfig(order="dirs_first")
    out = build_tree_view(["b.txt", "a/x.txt", "c/y.txt"], config)

    assert out.splitlines()[0] == "├── a/"
    assert out.splitlines()[-1] == "└── b.txt"


def test_render_dirs_only():
    out = build_tree_view(["src/app.py", "src/core/m.py", "top.txt"], TreeViewConfig(include_files=False))

    assert out == "└── src/\n    └── core/\n"


def test_render_max_depth():
    out = build_tree_view(["a/b/c/d.txt"], TreeViewConfig(max_depth=2))

    assert out == "└── a/\n    └── b/\n"


def test_render_metadata_and_notes():
    config = TreeViewConfig(
        show_size=True,
        show_char_count=True,
        dir_context={"src/": "application code"},
    )
    stats = {"src/app.py": FileStats(size=2048, chars=120)}

    out = build_tree_view(["src/app.py"], config, stats)

    assert "src/  # application code" in out
    assert "app.py [2.0 KB, 120 chars]" in out


def test_empty_paths_render_empty_string():
    assert build_tree_view([]) == ""


def test_file_and_directory_with_same_name_are_both_kept():
    paths = ["a", "a/b.txt"]
    root = FileTreeBuilder().build(paths)

    assert flatten(root) == paths
    assert build_tree_view(paths) == "├── a\n└── a/\n    └── b.txt\n"
