"""
Infrastructure primitives.

This package contains low-level building blocks shared by the daemon:
logging setup, the error taxonomy and httpx error mapping.

No business logic.
No framework dependencies.
"""
