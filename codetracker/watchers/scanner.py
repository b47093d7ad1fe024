"""
Initial enumeration

Рекурсивный обход корней с inline фильтрацией, без shell-пайплайнов.
"""

import os
from pathlib import Path
from typing import Iterator

from infra.logger import get_logger
from codetracker.watchers.ignore import DEFAULT_IGNORE, IgnorePredicate
from codetracker.watchers.registry import WatchRegistry

log = get_logger("codetracker.scanner")


def iter_watchable_dirs(
        root: str | Path,
        ignore: IgnorePredicate = DEFAULT_IGNORE,
) -> Iterator[Path]:
    """Yield ``root`` and every subdirectory not pruned by ``ignore``."""
    root = Path(root)
    if root.is_symlink():
        # Корень из аргументов может быть симлинком, watch ставим на реальный путь
        root = root.resolve()

    def _on_error(err: OSError) -> None:
        log.warning("scanner.walk_error", path=err.filename, error=err.strerror)

    for current, dirs, _files in os.walk(root, onerror=_on_error):
        # Фильтруем директории на лету, чтобы не вешать лишние вотчеры
        dirs[:] = sorted(d for d in dirs if not ignore.is_ignored_dir(d))
        yield Path(current)


def register_roots(
        registry: WatchRegistry,
        roots: list[str],
        ignore: IgnorePredicate = DEFAULT_IGNORE,
) -> int:
    """Register watches for every watchable directory under ``roots``."""
    added = 0
    for root in roots:
        for directory in iter_watchable_dirs(root, ignore):
            if registry.add(directory):
                added += 1
        log.info("scanner.root_registered", root=str(root), watches=len(registry))
    return added
