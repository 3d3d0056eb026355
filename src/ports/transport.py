from typing import Protocol


class TransportError(Exception):
    """The request never produced a response body (connection refused, reset, ...)."""

    def __init__(self, target: str, detail: str) -> None:
        super().__init__(f"{target}: {detail}")
        self.target = target
        self.detail = detail


class TransportPort(Protocol):
    async def send(self, target: str) -> str: ...
    async def close(self) -> None: ...
