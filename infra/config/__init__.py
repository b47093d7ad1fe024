"""Config constants for services."""

from .endpoints import Collector
from .timeouts import Timeouts

__all__ = ["Collector", "Timeouts"]
