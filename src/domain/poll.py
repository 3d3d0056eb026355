import logging
from collections.abc import Callable
from enum import Enum, auto

from domain.message import Message, decode
from ports.transport import TransportPort

logger = logging.getLogger(__name__)

NEXT_MESSAGE_ENDPOINT = "/get_msg"


class PollAction(Enum):
    CONTINUE = auto()
    STOP = auto()


class PollLoop:
    def __init__(
        self,
        transport: TransportPort,
        endpoint: str = NEXT_MESSAGE_ENDPOINT,
    ) -> None:
        self._transport = transport
        self._endpoint = endpoint

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def run(self, on_message: Callable[[Message], PollAction]) -> Message:
        polls = 0
        while True:
            raw = await self._transport.send(self._endpoint)
            polls += 1
            message = decode(raw)
            if on_message(message) is PollAction.STOP:
                logger.debug("Poll loop stopped after %d polls (%s)", polls, message.kind.name)
                return message
