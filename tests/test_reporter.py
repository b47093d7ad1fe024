"""Tests for the modification reporter."""

import pytest

from codetracker.reporter import ModificationReporter, lookup_owner

pytestmark = pytest.mark.fast


def _reporter(sink, owners, tracked_user="alice", **kwargs):
    return ModificationReporter(
        tracked_user=tracked_user,
        sink=sink,
        owner_of=lambda path: owners.get(str(path)),
        clock=lambda: 1700000000.75,
        **kwargs,
    )


def test_tracked_user_modification_is_reported_once(sink):
    reporter = _reporter(sink, {"/proj/src/a.go": "alice"})

    assert reporter.report("/proj/src/a.go") is True
    assert sink.calls == [("alice", 1700000000)]


def test_superuser_modification_is_reported_as_tracked_user(sink):
    reporter = _reporter(sink, {"/proj/src/a.go": "root"})

    reporter.report("/proj/src/a.go")

    assert sink.calls == [("alice", 1700000000)]


def test_other_owner_is_discarded(sink):
    reporter = _reporter(sink, {"/proj/src/b.go": "bob"})

    assert reporter.report("/proj/src/b.go") is False
    assert sink.calls == []


def test_owner_lookup_failure_aborts_silently(sink):
    reporter = _reporter(sink, {})

    assert reporter.report("/proj/src/vanished.go") is False
    assert sink.calls == []


def test_custom_superuser(sink):
    reporter = _reporter(sink, {"/a": "root", "/b": "admin"}, superuser="admin")

    reporter.report("/a")
    reporter.report("/b")

    assert len(sink.calls) == 1


@pytest.mark.parametrize("name", [".a.go.swp", "a.go~", ".env"])
def test_editor_and_dot_files_are_not_reported(sink, name):
    path = f"/proj/src/{name}"
    reporter = _reporter(sink, {path: "alice"})

    assert reporter.report(path) is False
    assert sink.calls == []


@pytest.mark.component
def test_lookup_owner_real_file(tmp_path, current_user):
    target = tmp_path / "a.go"
    target.write_text("package main\n")

    assert lookup_owner(target) == current_user


@pytest.mark.component
def test_lookup_owner_missing_file(tmp_path):
    assert lookup_owner(tmp_path / "missing.go") is None
