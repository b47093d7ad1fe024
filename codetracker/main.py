"""
codetrackerd entry point

Запускает:
1. Проверку аргументов и лог-директории
2. Daemonization (fork + setsid), если не --foreground
3. Singleton-проверку через PID-файл
4. Poll-цикл inotify до сигнала или респавна
"""

import argparse
import getpass
import os
import signal
import sys
from pathlib import Path

from infra.exceptions import FatalStartupError, RespawnError
from infra.logger import get_logger, setup_logging
from codetracker.config import RuntimeConfig, runtime_config
from codetracker.supervisor import (
    DaemonService,
    PidMarker,
    SelfImage,
    daemonize,
    redirect_standard_streams,
)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="codetrackerd",
        description="Watch directory trees and report file modifications to the activity collector.",
    )
    parser.add_argument("paths", nargs="*", help="directories to watch recursively")
    parser.add_argument("-u", "--user", dest="user", default=None, help="tracked user name (default: login name)")
    parser.add_argument(
        "-f", "--foreground",
        action="store_true",
        help="do not fork or redirect standard streams; log to the console as well",
    )
    return parser.parse_args(argv)


def resolve_tracked_user(override: str | None) -> str:
    if override:
        return override
    try:
        return os.getlogin()
    except OSError:
        # Нет управляющего терминала
        return getpass.getuser()


def existing_roots(paths: list[str]) -> list[str]:
    roots = []
    for path in paths:
        if Path(path).is_dir():
            roots.append(path)
        else:
            print(f"Not a directory, skipping: {path}", file=sys.stderr)
    return roots


def _install_signal_handlers(service: DaemonService, log) -> None:
    """Устанавливает обработчики сигналов."""

    def _handler(signum, _frame):
        log.info("codetracker.shutdown.signal", signal=signal.Signals(signum).name)
        service.stop()

    for sig in (signal.SIGINT, signal.SIGTERM):
        signal.signal(sig, _handler)


def run(argv: list[str] | None = None, config: RuntimeConfig | None = None) -> int:
    args = parse_args(argv)
    config = config or runtime_config

    roots = existing_roots(args.paths)
    if not roots:
        print("No directory paths specified!", file=sys.stderr)
        return 1

    tracked_user = resolve_tracked_user(args.user)

    try:
        config.LOG_DIR.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        print(f"Cannot create log dir: {config.LOG_DIR} ({e})", file=sys.stderr)
        return 1

    setup_logging(log_file=config.log_file, log_level=config.LOG_LEVEL, console=args.foreground)
    log = get_logger("codetracker")

    log.info(
        "codetracker.boot",
        roots=roots,
        user=tracked_user,
        foreground=args.foreground,
        config=config.to_dict(),
    )

    # Снимок до fork: сравнивается на каждом цикле
    self_image = SelfImage()
    pid_marker = PidMarker(config.pid_file)

    try:
        if not args.foreground:
            daemonize(config.FORK_GRACE_PERIOD)
        pid = pid_marker.acquire()
    except FatalStartupError as e:
        log.error("codetracker.startup_failed", error=str(e))
        print(str(e), file=sys.stderr)
        return 1

    print(f"Code tracker daemon running (PID:{pid},USER:{tracked_user})")

    if not args.foreground:
        try:
            redirect_standard_streams(config.out_file, config.err_file)
        except OSError as e:
            log.error("codetracker.redirect_failed", error=str(e))
            print(f"Cannot redirect standard streams: {e}", file=sys.stderr)
            pid_marker.release()
            return 1

    service = DaemonService(
        roots=roots,
        tracked_user=tracked_user,
        config=config,
        pid_marker=pid_marker,
        self_image=self_image,
        foreground=args.foreground,
    )
    _install_signal_handlers(service, log)

    try:
        service.run_forever()
    except RespawnError as e:
        log.error("codetracker.respawn_failed", error=str(e))
        return 1

    log.info("codetracker.shutdown.complete")
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
