"""
Watchers Package

- NotificationSource: inotify watch / cancel / poll
- WatchRegistry: path -> Watch
- IgnorePredicate: какие директории и файлы пропускать
"""

from codetracker.watchers.ignore import DEFAULT_IGNORE, IgnorePredicate
from codetracker.watchers.notifier import Event, EventKind, NotificationSource
from codetracker.watchers.registry import Watch, WatchRegistry
from codetracker.watchers.scanner import iter_watchable_dirs, register_roots

__all__ = [
    "DEFAULT_IGNORE",
    "IgnorePredicate",
    "Event",
    "EventKind",
    "NotificationSource",
    "Watch",
    "WatchRegistry",
    "iter_watchable_dirs",
    "register_roots",
]
