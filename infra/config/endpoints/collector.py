"""API endpoints for the activity collector."""

from dataclasses import dataclass


@dataclass
class Collector:
    SAVE_EVENT: str = "/save-event/{user}/{timestamp}"
