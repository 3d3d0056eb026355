import logging

import httpx

from ports.transport import TransportError

logger = logging.getLogger(__name__)

DEFAULT_SERVER_URL = "http://127.0.0.1:51823"


class HttpxTransport:
    """POSTs a target and hands back the body text whatever the status code.

    There is no timeout: a poll waits as long as the server takes to answer.
    """

    def __init__(
        self,
        server_url: str = DEFAULT_SERVER_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._server_url = server_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self._server_url,
            timeout=httpx.Timeout(None),
            headers={"Accept": "text/plain"},
            transport=transport,
        )

    @property
    def server_url(self) -> str:
        return self._server_url

    async def send(self, target: str) -> str:
        try:
            response = await self._client.post(target)
        except httpx.TransportError as exc:
            raise TransportError(target, str(exc) or type(exc).__name__) from exc

        if response.is_error:
            logger.warning("%s answered HTTP %d, passing body through", target, response.status_code)
        body = response.content.decode("utf-8", errors="replace")
        logger.debug("%s -> %r", target, body[:80])
        return body

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
