"""
Custom exceptions for daemon errors.
"""


class FatalStartupError(RuntimeError):
    """Fatal error that prevents the daemon from starting."""
    pass


class SingletonViolationError(FatalStartupError):
    """Another live instance already owns the PID marker."""

    def __init__(self, pid: int) -> None:
        super().__init__(f"Process already running! (PID:{pid})")
        self.pid = pid


class RespawnError(RuntimeError):
    """Replacing the process image failed."""
    pass


class CollectorError(ConnectionError):
    """Base class for outbound notification failures."""
    pass


class FatalValidationError(CollectorError):
    """Request could not be built or was rejected outright."""
    pass


class ServiceUnavailableError(CollectorError):
    """Collector is temporarily unavailable."""
    pass


class InfraConnectionError(CollectorError):
    """Network-level connection error."""
    pass
