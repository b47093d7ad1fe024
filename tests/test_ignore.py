"""Tests for ignore rules."""

import pytest

from codetracker.watchers.ignore import DEFAULT_IGNORE, IgnorePredicate

pytestmark = pytest.mark.fast


@pytest.mark.parametrize("path", [
    "/proj/.git",
    "/proj/.svn",
    "/proj/web/node_modules",
    "/proj/library",
    "/proj/src/__pycache__",
])
def test_vcs_and_dependency_dirs_are_ignored(path):
    assert DEFAULT_IGNORE.is_ignored_dir(path)


@pytest.mark.parametrize("path", [
    "/proj/src",
    "/proj/libraries",
    "/proj/.github",
    "/proj/gitlab",
])
def test_regular_dirs_are_watched(path):
    assert not DEFAULT_IGNORE.is_ignored_dir(path)


def test_only_last_segment_is_checked():
    # Родитель уже проверен при обходе или регистрации
    assert not DEFAULT_IGNORE.is_ignored_dir("/home/alice/library/proj")


@pytest.mark.parametrize("name", [".main.py.swp", "notes.txt.swx", "main.py~", ".bashrc"])
def test_swap_backup_and_dotfiles_are_ignored(name):
    assert DEFAULT_IGNORE.is_ignored_file(f"/proj/src/{name}")


@pytest.mark.parametrize("name", ["main.py", "README.md", "swp.go"])
def test_source_files_are_not_ignored(name):
    assert not DEFAULT_IGNORE.is_ignored_file(f"/proj/src/{name}")


def test_custom_predicate():
    predicate = IgnorePredicate(dir_segments=frozenset({"build"}), file_prefixes=(), file_suffixes=(".o",))

    assert predicate.is_ignored_dir("/proj/build")
    assert not predicate.is_ignored_dir("/proj/.git")
    assert predicate.is_ignored_file("/proj/main.o")
    assert not predicate.is_ignored_file("/proj/.env")
