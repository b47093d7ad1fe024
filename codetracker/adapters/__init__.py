from codetracker.adapters.collector import CollectorClient

__all__ = ["CollectorClient"]
