"""
Event Dispatcher

Классифицирует событие по текущему состоянию пути на диске,
а не по типу события: к моменту dispatch состояние могло измениться.
"""

import os
import stat
from typing import Iterable

from infra.logger import get_logger
from codetracker.reporter import ModificationReporter
from codetracker.watchers.ignore import DEFAULT_IGNORE, IgnorePredicate
from codetracker.watchers.notifier import Event, EventKind
from codetracker.watchers.registry import WatchRegistry
from codetracker.watchers.scanner import iter_watchable_dirs

log = get_logger("codetracker.dispatch")


class EventDispatcher:
    def __init__(
            self,
            registry: WatchRegistry,
            reporter: ModificationReporter,
            ignore: IgnorePredicate = DEFAULT_IGNORE,
    ):
        self.registry = registry
        self.reporter = reporter
        self.ignore = ignore

    def dispatch(self, event: Event) -> None:
        try:
            # lstat: симлинк не директория и не файл, по нему не ходим
            mode = os.lstat(event.path).st_mode
        except FileNotFoundError:
            mode = None
        except OSError as e:
            log.warning("dispatch.stat_failed", path=event.path, error=str(e))
            return

        try:
            if mode is not None and stat.S_ISDIR(mode):
                self._on_directory(event)
            elif mode is not None and stat.S_ISREG(mode):
                # Новый файл с содержимым даёт CREATE + MODIFY: репортим только MODIFY
                if event.kind is EventKind.MODIFIED:
                    self.reporter.report(event.path)
            elif mode is None:
                self._on_gone(event)
        except Exception as e:
            log.error("dispatch.handler_failed", path=event.path, kind=event.kind.value, error=str(e), exc_info=True)

    def dispatch_all(self, events: Iterable[Event]) -> int:
        count = 0
        for event in events:
            self.dispatch(event)
            count += 1
        return count

    def _on_directory(self, event: Event) -> None:
        # MODIFY / DELETE_SELF на живой директории ничего не делают
        if event.kind is not EventKind.CREATED:
            return
        if self.ignore.is_ignored_dir(event.path):
            log.debug("dispatch.dir_ignored", path=event.path)
            return
        # mkdir -p: вложенные папки могли появиться до установки watch
        for directory in iter_watchable_dirs(event.path, self.ignore):
            self.registry.add(directory)

    def _on_gone(self, event: Event) -> None:
        if self.registry.remove(event.path):
            log.info("dispatch.dir_deleted", path=event.path)
