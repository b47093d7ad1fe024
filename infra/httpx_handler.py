import httpx
from infra.exceptions import (
    CollectorError,
    ServiceUnavailableError,
    FatalValidationError,
    InfraConnectionError,
)
from typing import Type


def map_httpx_error_to_exception(exc: httpx.HTTPError, context: str) -> CollectorError:
    """Map httpx errors to collector exceptions (switch-case)."""
    match exc:
        case httpx.ConnectError():
            return InfraConnectionError(f"{context}: connection failed")
        case httpx.ReadTimeout() | httpx.ConnectTimeout() | httpx.WriteTimeout() | httpx.PoolTimeout():
            return InfraConnectionError(f"{context}: timeout")
        case httpx.RemoteProtocolError():
            return InfraConnectionError(f"{context}: protocol error")
        case httpx.LocalProtocolError() | httpx.UnsupportedProtocol():
            return FatalValidationError(f"{context}: invalid request")
        case httpx.NetworkError():
            return InfraConnectionError(f"{context}: network error")
        case _:
            return FatalValidationError(f"{context}: {exc}")


def map_httpx_status_to_exception(status: int) -> Type[CollectorError]:
    """Map HTTP status codes to exceptions (switch-case)."""
    match status:
        case 429:
            return ServiceUnavailableError
        case 500 | 502 | 503 | 504:
            return ServiceUnavailableError
        case _:
            return FatalValidationError
