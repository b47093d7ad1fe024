"""
Ignore rules

Статические правила: какие директории никогда не ставятся на watch
и какие файлы никогда не репортятся.
"""

from dataclasses import dataclass, field
from pathlib import Path

# Version control and dependency directories
IGNORED_DIR_SEGMENTS: frozenset[str] = frozenset({
    ".svn",
    ".git",
    ".hg",
    ".bzr",
    "CVS",
    "library",
    "node_modules",
    "bower_components",
    "__pycache__",
    ".venv",
    "site-packages",
})

# Dotfiles
IGNORED_FILE_PREFIXES: tuple[str, ...] = (".",)

# Editor swap and backup files
IGNORED_FILE_SUFFIXES: tuple[str, ...] = (".swp", ".swx", "~")


@dataclass(frozen=True)
class IgnorePredicate:
    dir_segments: frozenset[str] = field(default=IGNORED_DIR_SEGMENTS)
    file_prefixes: tuple[str, ...] = field(default=IGNORED_FILE_PREFIXES)
    file_suffixes: tuple[str, ...] = field(default=IGNORED_FILE_SUFFIXES)

    def is_ignored_dir(self, path: str | Path) -> bool:
        """
        Directory is ignored when its own name is an ignored segment.

        Only the last segment is checked: parents were already vetted when
        they were walked or registered.
        """
        return Path(path).name in self.dir_segments

    def is_ignored_file(self, path: str | Path) -> bool:
        name = Path(path).name
        if not name:
            return False
        return name.startswith(self.file_prefixes) or name.endswith(self.file_suffixes)


DEFAULT_IGNORE = IgnorePredicate()
