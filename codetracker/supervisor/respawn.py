"""
Self-image watch and respawn

"Executable image" of a Python daemon = launcher script + package sources.
Respawn is a full state reset: execv with the same arguments.
"""

import os
import sys
from pathlib import Path

import infra
from infra.exceptions import RespawnError
from infra.logger import get_logger

log = get_logger("codetracker.respawn")

SOURCE_DIRS = (
    Path(__file__).resolve().parent.parent,
    Path(infra.__file__).resolve().parent,
)


def default_image_paths() -> list[Path]:
    paths: list[Path] = []
    launcher = Path(sys.argv[0]) if sys.argv and sys.argv[0] else None
    if launcher is not None and launcher.is_file():
        paths.append(launcher.resolve())
    for source_dir in SOURCE_DIRS:
        paths.extend(sorted(source_dir.rglob("*.py")))
    return paths


class SelfImage:
    def __init__(self, paths: list[Path] | None = None):
        self.paths = list(paths) if paths is not None else default_image_paths()
        self.timestamp = self.current_timestamp()

    def current_timestamp(self) -> float | None:
        """Newest mtime among the image files, None if none is readable."""
        newest = None
        for path in self.paths:
            try:
                mtime = os.stat(path).st_mtime
            except OSError:
                continue
            if newest is None or mtime > newest:
                newest = mtime
        return newest

    def changed(self) -> bool:
        current = self.current_timestamp()
        if current is None:
            # Файлы в процессе замены, проверим на следующем цикле
            return False
        return current != self.timestamp


def build_respawn_argv(
        roots: list[str],
        tracked_user: str,
        foreground: bool = False,
) -> list[str]:
    argv = [sys.executable, "-m", "codetracker", "--user", tracked_user]
    if foreground:
        argv.append("--foreground")
    argv.append("--")
    argv.extend(roots)
    return argv


def exec_respawn(argv: list[str]) -> None:
    """Replace the process image. Returns only by raising RespawnError."""
    log.info("respawn.exec", argv=argv)
    try:
        os.execv(argv[0], argv)
    except OSError as e:
        raise RespawnError(f"execv failed: {e}") from e
