"""
Watch Registry

Единственный владелец маппинга path -> Watch.
Вся мутация идёт через add / remove / remove_all.
"""

from dataclasses import dataclass
from pathlib import Path

from infra.logger import get_logger
from codetracker.watchers.notifier import NotificationSource, WATCH_MASK

log = get_logger("codetracker.registry")


@dataclass(frozen=True)
class Watch:
    path: str
    handle: int


class WatchRegistry:
    def __init__(self, source: NotificationSource):
        self.source = source
        self._watches: dict[str, Watch] = {}

    def add(self, path: str | Path) -> bool:
        """
        Register a watch for ``path``.

        No-op if the path is already watched. Rejections from the
        notification source (permission denied, path vanished) are logged
        and absorbed.

        Returns:
            True if a new watch was created
        """
        key = str(path)
        existing = self._watches.get(key)
        if existing is not None:
            if self.source.is_active(existing.handle):
                return False
            # Директорию пересоздали между poll-циклами, старый wd уже мёртв
            log.info("watch.stale", path=key, handle=existing.handle)
            del self._watches[key]

        try:
            handle = self.source.watch(key, WATCH_MASK)
        except OSError as e:
            log.warning("watch.rejected", path=key, error=str(e))
            return False

        self._watches[key] = Watch(path=key, handle=handle)
        log.info("watch.added", path=key)
        return True

    def remove(self, path: str | Path) -> bool:
        key = str(path)
        watch = self._watches.pop(key, None)
        if watch is None:
            return False

        self.source.cancel(watch.handle)
        log.info("watch.removed", path=key)
        return True

    def remove_all(self) -> int:
        """Cancel every active watch. Returns how many were released."""
        count = 0
        for path in list(self._watches):
            if self.remove(path):
                count += 1
        log.info("watch.removed_all", count=count)
        return count

    def get(self, path: str | Path) -> Watch | None:
        return self._watches.get(str(path))

    def paths(self) -> list[str]:
        return list(self._watches)

    def __contains__(self, path: object) -> bool:
        return str(path) in self._watches

    def __len__(self) -> int:
        return len(self._watches)
