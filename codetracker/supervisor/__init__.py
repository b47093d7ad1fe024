"""
Process Supervisor

- daemonize / redirect_standard_streams: отцепление от терминала
- PidMarker: singleton через PID-файл
- SelfImage: респавн при обновлении исходников
- DaemonService: основной poll-цикл
"""

from codetracker.supervisor.daemon import daemonize, redirect_standard_streams
from codetracker.supervisor.pidfile import PidMarker, is_process_alive
from codetracker.supervisor.respawn import SelfImage, build_respawn_argv, exec_respawn
from codetracker.supervisor.service import DaemonService

__all__ = [
    "daemonize",
    "redirect_standard_streams",
    "PidMarker",
    "is_process_alive",
    "SelfImage",
    "build_respawn_argv",
    "exec_respawn",
    "DaemonService",
]
