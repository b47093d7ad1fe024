import logging
import os
import pwd
from pathlib import Path

import httpx
import pytest

from codetracker.adapters.collector import CollectorClient
from codetracker.config import RuntimeConfig
from codetracker.supervisor.pidfile import PidMarker
from codetracker.watchers.notifier import Event


# =====================
# Test doubles
# =====================

class FakeSource:
    """In-memory stand-in for NotificationSource."""

    def __init__(self, rejected: set[str] | None = None):
        self.rejected = rejected or set()
        self.active: dict[int, str] = {}
        self.canceled: list[int] = []
        self.queue: list[Event] = []
        self.closed = False
        self._next = 1

    def watch(self, path, mask=0) -> int:
        path = str(path)
        if path in self.rejected:
            raise PermissionError(13, "Permission denied", path)
        handle = self._next
        self._next += 1
        self.active[handle] = path
        return handle

    def cancel(self, handle: int) -> None:
        self.active.pop(handle, None)
        self.canceled.append(handle)

    def is_active(self, handle: int) -> bool:
        return handle in self.active

    def push(self, *events: Event) -> None:
        self.queue.extend(events)

    def poll(self) -> list[Event]:
        events, self.queue = self.queue, []
        return events

    def close(self) -> None:
        self.closed = True


class StubImage:
    """SelfImage, который меняется после заданного числа проверок"""

    def __init__(self, changes_after: int | None = None):
        self.timestamp = 1.0
        self.checks = 0
        self.changes_after = changes_after

    def changed(self) -> bool:
        self.checks += 1
        return self.changes_after is not None and self.checks > self.changes_after


class RecordingSink:
    def __init__(self):
        self.calls: list[tuple[str, int]] = []

    def notify(self, user: str, timestamp: int) -> bool:
        self.calls.append((user, timestamp))
        return True

    def close(self) -> None:
        pass


# =====================
# Fixtures
# =====================

@pytest.fixture
def marker(runtime):
    runtime.LOG_DIR.mkdir(parents=True)
    m = PidMarker(runtime.pid_file)
    m.acquire()
    return m


@pytest.fixture
def fake_source():
    return FakeSource()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def current_user() -> str:
    """Имя пользователя, которому принадлежат файлы в tmp_path"""
    return pwd.getpwuid(os.getuid()).pw_name


@pytest.fixture
def runtime(tmp_path) -> RuntimeConfig:
    return RuntimeConfig(
        LOG_DIR=tmp_path / "log",
        COLLECTOR_URL="http://collector.test:3000",
        POLL_INTERVAL=0.01,
        FORK_GRACE_PERIOD=0,
    )


@pytest.fixture
def collector_requests():
    return []


@pytest.fixture
def mock_collector(collector_requests):
    def handler(request: httpx.Request) -> httpx.Response:
        collector_requests.append(request)
        return httpx.Response(200, text="ok")

    client = CollectorClient("http://collector.test:3000", transport=httpx.MockTransport(handler))
    yield client
    client.close()


@pytest.fixture
def project(tmp_path) -> Path:
    """Дерево проекта: /proj со вложенными и игнорируемыми директориями"""
    root = tmp_path / "proj"
    (root / "pkg" / "sub").mkdir(parents=True)
    (root / ".git" / "objects").mkdir(parents=True)
    (root / "node_modules" / "left-pad").mkdir(parents=True)
    (root / "pkg" / "main.py").write_text("print('hello')\n")
    return root


@pytest.fixture
def restore_logging():
    """setup_logging(force=True) заменяет root handlers - возвращаем как было"""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
