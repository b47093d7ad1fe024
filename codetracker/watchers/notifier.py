"""
Notification Source - inotify-simple

Тонкая обёртка над native inotify: watch / cancel / неблокирующий poll.
События переводятся в полные пути через маппинг wd -> path.
"""

import enum
import errno
from dataclasses import dataclass
from pathlib import Path

import inotify_simple
from inotify_simple import flags

from infra.logger import get_logger

log = get_logger("codetracker.notifier")

WATCH_MASK = flags.MODIFY | flags.CREATE | flags.DELETE_SELF | flags.DONT_FOLLOW | flags.ONLYDIR


class EventKind(str, enum.Enum):
    CREATED = "created"
    MODIFIED = "modified"
    SELF_DELETED = "self_deleted"


@dataclass(frozen=True)
class Event:
    path: str
    kind: EventKind


class NotificationSource:
    """
    Мониторит пути через native inotify (C)

    Handles are inotify watch descriptors. ``poll`` never blocks and drops
    events for descriptors that are no longer registered here.
    """

    # Порядок важен: DELETE_SELF сильнее остальных
    FLAG_MAP: dict[int, EventKind] = {
        flags.DELETE_SELF: EventKind.SELF_DELETED,
        flags.CREATE: EventKind.CREATED,
        flags.MODIFY: EventKind.MODIFIED,
    }

    def __init__(self, inotify: inotify_simple.INotify | None = None):
        # inheritable=False: fd не переживёт execv при респавне
        self.IS = inotify if inotify is not None else inotify_simple.INotify(inheritable=False)
        self._wd_to_path: dict[int, Path] = {}

    def watch(self, path: str | Path, mask: int = WATCH_MASK) -> int:
        """Raises OSError if the kernel rejects the path."""
        path = Path(path)
        wd = self.IS.add_watch(path, mask)
        known = self._wd_to_path.get(wd)
        if known is not None and known != path:
            # Тот же inode под другим путём (bind mount): wd уже занят
            raise FileExistsError(errno.EEXIST, f"already watched as {known}", str(path))
        self._wd_to_path[wd] = path
        return wd

    def cancel(self, handle: int) -> None:
        self._wd_to_path.pop(handle, None)
        try:
            self.IS.rm_watch(handle)
        except OSError as e:
            # Ядро уже сняло watch (директория удалена)
            log.debug("notifier.cancel.stale", handle=handle, error=str(e))

    def is_active(self, handle: int) -> bool:
        return handle in self._wd_to_path

    def poll(self) -> list[Event]:
        """Non-blocking drain of everything currently queued."""
        result: list[Event] = []

        for raw in self.IS.read(timeout=0):
            if raw.mask & flags.Q_OVERFLOW:
                log.warning("notifier.queue_overflow")
                continue

            if raw.mask & flags.IGNORED:
                # Watch снят ядром или через rm_watch
                self._wd_to_path.pop(raw.wd, None)
                continue

            parent = self._wd_to_path.get(raw.wd)
            if parent is None:
                continue

            kind = self._map_mask(raw.mask)
            if kind is None:
                continue

            path = parent / raw.name if raw.name else parent
            result.append(Event(path=str(path), kind=kind))

        return result

    def close(self) -> None:
        self._wd_to_path.clear()
        self.IS.close()

    def _map_mask(self, mask: int) -> EventKind | None:
        for flag, kind in self.FLAG_MAP.items():
            if mask & flag:
                return kind
        return None
