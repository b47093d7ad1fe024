"""Timeout values in seconds."""

from dataclasses import dataclass


@dataclass
class Timeouts:
    COLLECTOR_CONNECT: float = 3.0
    COLLECTOR_REQUEST: float = 5.0
