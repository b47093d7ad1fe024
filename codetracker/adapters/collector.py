"""
Collector client

Fire-and-forget GET на /save-event/{user}/{timestamp}.
Без retry, без очереди: ошибка логируется и забывается.
"""

from urllib.parse import quote

import httpx

from infra.config import Collector, Timeouts
from infra.httpx_handler import map_httpx_error_to_exception, map_httpx_status_to_exception
from infra.logger import get_logger

log = get_logger("codetracker.collector")


class CollectorClient:
    def __init__(
            self,
            base_url: str,
            transport: httpx.BaseTransport | None = None,
            timeout: httpx.Timeout | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout or httpx.Timeout(Timeouts.COLLECTOR_REQUEST, connect=Timeouts.COLLECTOR_CONNECT),
            transport=transport,
        )

    @staticmethod
    def event_path(user: str, timestamp: int) -> str:
        return Collector.SAVE_EVENT.format(user=quote(user, safe=""), timestamp=timestamp)

    def notify(self, user: str, timestamp: int) -> bool:
        """
        Send one event to the collector.

        The response body is not inspected. Never raises on network errors.

        Returns:
            True if a response was received
        """
        path = self.event_path(user, timestamp)
        log.info("collector.request", url=f"{self.base_url}{path}")

        try:
            response = self._client.get(path)
        except httpx.HTTPError as e:
            mapped = map_httpx_error_to_exception(e, "collector.save_event")
            log.warning("collector.failed", error=str(mapped), kind=type(mapped).__name__)
            return False
        except httpx.InvalidURL as e:
            log.warning("collector.failed", error=str(e), kind="InvalidURL")
            return False

        if response.is_error:
            # Тело не разбираем, только классифицируем статус для лога
            status_exc = map_httpx_status_to_exception(response.status_code)
            log.warning("collector.rejected", status=response.status_code, kind=status_exc.__name__)
        else:
            log.debug("collector.response", status=response.status_code)
        return True

    def close(self) -> None:
        self._client.close()
