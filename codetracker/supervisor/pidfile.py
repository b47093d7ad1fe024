"""
PID marker

Один экземпляр на хост. Check-then-write не атомарен: узкая гонка
между двумя одновременными стартами допустима.
"""

import os
from pathlib import Path

from infra.exceptions import FatalStartupError, SingletonViolationError
from infra.logger import get_logger

log = get_logger("codetracker.pidfile")


def is_process_alive(pid: int) -> bool:
    if pid <= 0:
        return False
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        # Процесс есть, но принадлежит другому пользователю
        return True
    return True


class PidMarker:
    def __init__(self, path: str | Path):
        self.path = Path(path)

    def read_pid(self) -> int | None:
        try:
            content = self.path.read_text(encoding="ascii").strip()
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            log.warning("pidfile.unreadable", path=str(self.path), error=str(e))
            return None

        try:
            return int(content)
        except ValueError:
            return None

    def acquire(self, pid: int | None = None) -> int:
        """
        Claim the marker for ``pid`` (defaults to the current process).

        Raises:
            SingletonViolationError: the recorded PID belongs to a live process
            FatalStartupError: the marker cannot be written
        """
        pid = os.getpid() if pid is None else pid

        recorded = self.read_pid()
        if recorded is not None and recorded != pid and is_process_alive(recorded):
            raise SingletonViolationError(recorded)

        if self.path.exists():
            log.info("pidfile.stale_removed", path=str(self.path), stale_pid=recorded)
            self._unlink()

        log.info("pidfile.creating", path=str(self.path))
        try:
            self.path.write_text(f"{pid}\n", encoding="ascii")
        except OSError as e:
            raise FatalStartupError(f"Cannot open PID file: {self.path}") from e
        return pid

    def release(self) -> None:
        self._unlink()
        log.info("pidfile.removed", path=str(self.path))

    def _unlink(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            log.warning("pidfile.unlink_failed", path=str(self.path), error=str(e))
