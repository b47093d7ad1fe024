from .runtime import RuntimeConfig, runtime_config

__all__ = ["RuntimeConfig", "runtime_config"]
