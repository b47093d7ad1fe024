"""
Daemon service

Single-threaded poll loop: drain events, dispatch them in delivery order,
check the self image, sleep. Stops on signal or replaces itself on update.
"""

import time
from typing import Callable

from infra.logger import get_logger
from codetracker.adapters.collector import CollectorClient
from codetracker.config import RuntimeConfig
from codetracker.dispatch import EventDispatcher
from codetracker.reporter import ModificationReporter
from codetracker.supervisor.pidfile import PidMarker
from codetracker.supervisor.respawn import SelfImage, build_respawn_argv, exec_respawn
from codetracker.watchers.notifier import NotificationSource
from codetracker.watchers.registry import WatchRegistry
from codetracker.watchers.scanner import register_roots

log = get_logger("codetracker.service")


class DaemonService:
    def __init__(
            self,
            roots: list[str],
            tracked_user: str,
            config: RuntimeConfig,
            pid_marker: PidMarker,
            self_image: SelfImage,
            source: NotificationSource | None = None,
            collector: CollectorClient | None = None,
            foreground: bool = False,
            sleep: Callable[[float], None] = time.sleep,
            exec_fn: Callable[[list[str]], None] = exec_respawn,
    ):
        self.roots = roots
        self.tracked_user = tracked_user
        self.config = config
        self.pid_marker = pid_marker
        self.self_image = self_image
        self.foreground = foreground
        self._sleep = sleep
        self._exec = exec_fn

        self.source = source if source is not None else NotificationSource()
        self.collector = collector if collector is not None else CollectorClient(config.COLLECTOR_URL)
        self.registry = WatchRegistry(self.source)
        self.reporter = ModificationReporter(
            tracked_user=tracked_user,
            sink=self.collector,
            superuser=config.SUPERUSER,
        )
        self.dispatcher = EventDispatcher(self.registry, self.reporter)

        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        log.info("service.starting", roots=self.roots, user=self.tracked_user)
        register_roots(self.registry, self.roots)
        self._running = True
        log.info("service.listening", watches=len(self.registry))

    def stop(self) -> None:
        """Safe to call from a signal handler."""
        self._running = False

    def run_once(self) -> bool:
        """
        One poll cycle.

        Returns:
            True if the self image changed and a respawn is due
        """
        try:
            events = self.source.poll()
        except OSError as e:
            log.error("service.poll_failed", error=str(e))
            events = []

        self.dispatcher.dispatch_all(events)
        return self.self_image.changed()

    def run_forever(self) -> None:
        self.start()

        while self._running:
            if self.run_once():
                self.respawn()
                return
            self._sleep(self.config.POLL_INTERVAL)

        self.shutdown()

    def release(self) -> None:
        self.registry.remove_all()
        self.source.close()
        self.collector.close()
        self.pid_marker.release()

    def shutdown(self) -> None:
        log.info("service.stopping")
        self.release()
        log.info("service.stopped")

    def respawn(self) -> None:
        """Release everything, then exec a fresh instance. Raises RespawnError on failure."""
        log.info("service.respawning", image_timestamp=self.self_image.timestamp)
        self.release()
        argv = build_respawn_argv(self.roots, self.tracked_user, self.foreground)
        self._exec(argv)
