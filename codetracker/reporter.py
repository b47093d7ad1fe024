"""
Modification Reporter

Фильтрует modify-события по владельцу файла и отправляет их в коллектор.
"""

import os
import pwd
import time
from pathlib import Path
from typing import Callable, Protocol

from infra.logger import get_logger
from codetracker.watchers.ignore import DEFAULT_IGNORE, IgnorePredicate

log = get_logger("codetracker.reporter")


class EventSink(Protocol):
    def notify(self, user: str, timestamp: int) -> bool: ...


def lookup_owner(path: str | Path) -> str | None:
    """Owner user name of ``path``, or None if it cannot be resolved."""
    try:
        uid = os.stat(path).st_uid
        return pwd.getpwuid(uid).pw_name
    except (OSError, KeyError) as e:
        log.debug("reporter.owner_lookup_failed", path=str(path), error=str(e))
        return None


class ModificationReporter:
    def __init__(
            self,
            tracked_user: str,
            sink: EventSink,
            superuser: str = "root",
            ignore: IgnorePredicate = DEFAULT_IGNORE,
            clock: Callable[[], float] = time.time,
            owner_of: Callable[[str | Path], str | None] = lookup_owner,
    ):
        self.tracked_user = tracked_user
        self.sink = sink
        self.superuser = superuser
        self.ignore = ignore
        self._clock = clock
        self._owner_of = owner_of

    def accepts_owner(self, owner: str) -> bool:
        return owner in (self.tracked_user, self.superuser)

    def report(self, file_path: str | Path) -> bool:
        """
        Returns:
            True if the outbound notification was attempted
        """
        if self.ignore.is_ignored_file(file_path):
            return False

        owner = self._owner_of(file_path)
        if owner is None:
            return False

        # Чужие аккаунты на общей файловой системе не репортим
        if not self.accepts_owner(owner):
            return False

        timestamp = int(self._clock())
        log.info("reporter.modified", path=str(file_path), owner=owner)
        self.sink.notify(self.tracked_user, timestamp)
        return True
