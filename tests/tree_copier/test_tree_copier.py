"""Unit tests for the TreeCopier class."""

import logging
import os

import pytest

from templatize.exceptions import FilesystemError, PreconditionError
from templatize.tree_copier.decisions import Action, CopyAs, Skip, Transform
from templatize.tree_copier.tree_copier import TreeCopier, copy_tree


@pytest.fixture
def source_tree(tmp_path):
    root = tmp_path / "source"
    (root / "a" / "b" / "c").mkdir(parents=True)
    (root / "empty").mkdir()
    (root / "top.txt").write_text("top")
    (root / "a" / "one.txt").write_text("one")
    (root / "a" / "b" / "two.txt").write_text("two")
    (root / "a" / "b" / "c" / "three.txt").write_text("three")
    return root


def test_copy_everything_verbatim(source_tree, tmp_path, snapshot):
    dest = tmp_path / "dest"
    copier = copy_tree(source_tree, dest)

    assert snapshot(dest) == snapshot(source_tree)
    assert (dest / "empty").is_dir()
    assert copier.get_file_count() == 4
    assert copier.get_directory_count() == 4
    assert copier.get_skipped_count() == 0


def test_destination_root_is_created(source_tree, tmp_path):
    dest = tmp_path / "deeply" / "nested" / "dest"
    copy_tree(source_tree, dest)
    assert (dest / "top.txt").read_text() == "top"


def test_missing_source_root(tmp_path):
    with pytest.raises(PreconditionError, match="source directory does not exist"):
        TreeCopier(tmp_path / "missing", tmp_path / "dest").copy()
    assert not (tmp_path / "dest").exists()


def test_source_root_is_a_file(tmp_path):
    source = tmp_path / "file.txt"
    source.write_text("x")
    with pytest.raises(PreconditionError, match="not a directory"):
        TreeCopier(source, tmp_path / "dest").copy()


def test_decide_receives_relative_paths(source_tree, tmp_path):
    calls = []

    def decide(relative_path, name, is_dir):
        calls.append((relative_path, name, is_dir))
        return CopyAs(name)

    copy_tree(source_tree, tmp_path / "dest", decide)

    assert calls == [
        ("a", "a", True),
        ("a/b", "b", True),
        ("a/b/c", "c", True),
        ("a/b/c/three.txt", "three.txt", False),
        ("a/b/two.txt", "two.txt", False),
        ("a/one.txt", "one.txt", False),
        ("empty", "empty", True),
        ("top.txt", "top.txt", False),
    ]


def test_each_node_visited_once(source_tree, tmp_path):
    seen = []

    def decide(relative_path, name, is_dir):
        seen.append(relative_path)
        return CopyAs(name)

    copy_tree(source_tree, tmp_path / "dest", decide)
    assert len(seen) == len(set(seen)) == 8


def test_skipped_directory_is_not_descended(source_tree, tmp_path):
    seen = []

    def decide(relative_path, name, is_dir):
        seen.append(relative_path)
        return Skip() if name == "b" else CopyAs(name)

    dest = tmp_path / "dest"
    copier = copy_tree(source_tree, dest, decide)

    assert not any(path.startswith("a/b/") for path in seen)
    assert not (dest / "a" / "b").exists()
    assert (dest / "a" / "one.txt").exists()
    assert copier.get_skipped_count() == 1


def test_copy_as_renames(source_tree, tmp_path):
    def decide(relative_path, name, is_dir):
        return CopyAs("renamed.txt") if name == "one.txt" else CopyAs(name)

    dest = tmp_path / "dest"
    copy_tree(source_tree, dest, decide)
    assert (dest / "a" / "renamed.txt").read_text() == "one"
    assert not (dest / "a" / "one.txt").exists()


def test_transform_writes_through_function(source_tree, tmp_path):
    def shout(source, dest):
        dest.write_text(source.read_text().upper())

    def decide(relative_path, name, is_dir):
        return Transform(name, shout) if name == "top.txt" else CopyAs(name)

    dest = tmp_path / "dest"
    copier = copy_tree(source_tree, dest, decide)
    assert (dest / "top.txt").read_text() == "TOP"
    assert copier.get_transformed_count() == 1
    assert copier.get_file_count() == 4


def test_transform_on_directory_is_rejected(source_tree, tmp_path):
    def decide(relative_path, name, is_dir):
        return Transform(name, lambda s, d: None) if is_dir else CopyAs(name)

    with pytest.raises(ValueError, match="Cannot transform directory"):
        copy_tree(source_tree, tmp_path / "dest", decide)


def test_transform_os_error_becomes_filesystem_error(source_tree, tmp_path):
    def fail(source, dest):
        raise PermissionError(13, "Permission denied")

    def decide(relative_path, name, is_dir):
        return Transform(name, fail) if name == "top.txt" else CopyAs(name)

    with pytest.raises(FilesystemError, match="Cannot transform .*top.txt: Permission denied"):
        copy_tree(source_tree, tmp_path / "dest", decide)


def test_first_writer_wins_on_collision(tmp_path, caplog):
    source = tmp_path / "source"
    source.mkdir()
    (source / "a.txt").write_text("first")
    (source / "b.txt").write_text("second")

    def decide(relative_path, name, is_dir):
        return CopyAs("same.txt")

    dest = tmp_path / "dest"
    with caplog.at_level(logging.WARNING):
        copier = copy_tree(source, dest, decide)

    assert (dest / "same.txt").read_text() == "first"
    assert "already written" in caplog.text
    skipped = [node for node in copier.iterate_nodes() if node.action is Action.SKIP]
    assert [node.name for node in skipped] == ["b.txt"]
    assert skipped[0].reason == "destination already written"


def test_copy_failure_becomes_filesystem_error(source_tree, tmp_path, monkeypatch):
    def broken_copy(src, dst):
        raise OSError(28, "No space left on device")

    monkeypatch.setattr("templatize.tree_copier.tree_copier.shutil.copyfile", broken_copy)
    with pytest.raises(FilesystemError, match="No space left on device"):
        copy_tree(source_tree, tmp_path / "dest")


def test_unreadable_directory_becomes_filesystem_error(source_tree, tmp_path, monkeypatch):
    real_listdir = os.listdir

    def listdir(path):
        if str(path).endswith("b"):
            raise PermissionError(13, "Permission denied")
        return real_listdir(path)

    monkeypatch.setattr("templatize.tree_copier.tree_copier.os.listdir", listdir)
    with pytest.raises(FilesystemError, match="Cannot read directory"):
        copy_tree(source_tree, tmp_path / "dest")


def test_symlinked_file_is_copied_as_plain_file(source_tree, tmp_path):
    try:
        os.symlink(source_tree / "top.txt", source_tree / "link.txt")
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported")

    dest = tmp_path / "dest"
    copy_tree(source_tree, dest)
    assert not (dest / "link.txt").is_symlink()
    assert (dest / "link.txt").read_text() == "top"


def test_symlink_loop_is_skipped(source_tree, tmp_path, caplog):
    try:
        os.symlink(source_tree / "a", source_tree / "a" / "b" / "loop")
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported")

    dest = tmp_path / "dest"
    with caplog.at_level(logging.WARNING):
        copier = copy_tree(source_tree, dest)

    assert not (dest / "a" / "b" / "loop").exists()
    assert "symlink loop" in caplog.text
    assert copier.get_skipped_count() == 1


def test_decisions_are_logged(source_tree, tmp_path, caplog):
    def decide(relative_path, name, is_dir):
        return Skip() if name == "empty" else CopyAs(name)

    with caplog.at_level(logging.INFO):
        copy_tree(source_tree, tmp_path / "dest", decide)

    assert "Copying dir: a/" in caplog.text
    assert "Copying file: a/one.txt" in caplog.text
    assert "Skipping: empty/" in caplog.text


def test_tree_representation(source_tree, tmp_path):
    def decide(relative_path, name, is_dir):
        if name == "empty":
            return Skip()
        if name == "top.txt":
            return CopyAs("renamed.txt")
        return CopyAs(name)

    copier = copy_tree(source_tree, tmp_path / "dest", decide)

    assert "\n".join(copier.stream_tree_representation()) == "\n".join(
        [
            "dest/",
            "├── a/",
            "│   ├── b/",
            "│   │   ├── c/",
            "│   │   │   └── three.txt",
            "│   │   └── two.txt",
            "│   └── one.txt",
            "└── renamed.txt",
        ]
    )
    assert "\n".join(copier.stream_tree_representation(directories_only=True)) == "\n".join(
        ["dest/", "└── a/", "    └── b/", "        └── c/"]
    )


def test_get_report_runs_copy_lazily(source_tree, tmp_path):
    copier = TreeCopier(source_tree, tmp_path / "dest")
    report = copier.get_report()
    assert report is copier.get_report()
    assert (tmp_path / "dest" / "top.txt").exists()
