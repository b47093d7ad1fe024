"""
Daemonization

Side effects, in order:
1. fork: the parent waits a grace period and exits 0
2. setsid: the child becomes a session leader without a controlling terminal
3. stdin <- /dev/null, stdout/stderr -> append-only files
"""

import os
import sys
import time
from pathlib import Path

from infra.exceptions import FatalStartupError
from infra.logger import get_logger

log = get_logger("codetracker.daemon")


def daemonize(grace_period: float = 3.0) -> None:
    """Returns only in the detached child."""
    log.info("daemon.forking")

    try:
        pid = os.fork()
    except OSError as e:
        log.error("daemon.fork_failed", error=str(e))
        raise FatalStartupError(f"Process failed to fork: {e}") from e

    if pid > 0:
        log.info("daemon.parent_exiting", child_pid=pid)
        # Даём ребёнку время полностью отцепиться
        time.sleep(grace_period)
        os._exit(0)

    os.setsid()
    log.info("daemon.detached", pid=os.getpid())


def redirect_standard_streams(out_file: Path, err_file: Path) -> None:
    log.info("daemon.redirecting_streams", stdout=str(out_file), stderr=str(err_file))

    sys.stdout.flush()
    sys.stderr.flush()

    devnull = os.open(os.devnull, os.O_RDONLY)
    out_fd = os.open(out_file, os.O_WRONLY | os.O_CREAT | os.O_APPEND, 0o644)
    err_fd = os.open(err_file, os.O_WRONLY | os.O_CREAT | os.O_APPEND, 0o644)

    os.dup2(devnull, sys.stdin.fileno())
    os.dup2(out_fd, sys.stdout.fileno())
    os.dup2(err_fd, sys.stderr.fileno())

    for fd in (devnull, out_fd, err_fd):
        os.close(fd)
