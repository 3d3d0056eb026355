import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum, auto

from domain.activation import ActivationGate
from domain.events import (
    CommandFinished,
    CommandStarted,
    FatalError,
    LogLine,
    LogStyle,
    TransportFailed,
    UnknownMessage,
)
from domain.message import Message, MessageKind, decode
from domain.poll import PollAction, PollLoop
from ports.transport import TransportError, TransportPort
from ports.view import ViewPort

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[str], Awaitable[None] | None]

_LOG_STYLES: dict[MessageKind, LogStyle] = {
    MessageKind.WARNING: LogStyle.WARNING,
    MessageKind.LOG: LogStyle.MESSAGE,
    MessageKind.INFO: LogStyle.INFORMATION,
}


class InvalidTargetError(ValueError):
    pass


class CommandStatus(Enum):
    FINISHED = auto()
    FAILED = auto()
    TRANSPORT_FAILED = auto()


@dataclass(frozen=True)
class CommandResult:
    target: str
    status: CommandStatus
    detail: str = ""

    @property
    def succeeded(self) -> bool:
        return self.status == CommandStatus.FINISHED


class CommandDispatcher:
    """Runs one command: initial request, then polling until a terminal message.

    Nothing here prevents two commands from overlapping; the gate disables
    the controls that would start a second one.
    """

    def __init__(
        self,
        transport: TransportPort,
        gate: ActivationGate,
        view: ViewPort,
        poll_loop: PollLoop | None = None,
    ) -> None:
        self._transport = transport
        self._gate = gate
        self._view = view
        self._poll_loop = poll_loop or PollLoop(transport)

    async def command(
        self,
        target: str,
        on_complete: CompletionCallback | None = None,
    ) -> CommandResult:
        if not target.startswith("/"):
            raise InvalidTargetError(f"Command target must be an absolute path: {target!r}")

        logger.info("command(%s)", target)
        self._gate.set_active(True)

        try:
            self._view.emit(CommandStarted(target=target))
            message = decode(await self._transport.send(target))
            if self.handle(message, target) is PollAction.CONTINUE:
                message = await self._poll_loop.run(lambda m: self.handle(m, target))
        except TransportError as exc:
            logger.error("Transport failure during %s: %s", target, exc.detail)
            self._gate.set_active(False)
            self._view.emit(TransportFailed(target=target, detail=exc.detail))
            return CommandResult(target, CommandStatus.TRANSPORT_FAILED, exc.detail)
        except BaseException:
            self._gate.set_active(False)
            raise

        if message.kind == MessageKind.ERROR:
            return CommandResult(target, CommandStatus.FAILED, message.payload)

        if on_complete is not None:
            outcome = on_complete(message.payload)
            if inspect.isawaitable(outcome):
                await outcome
        return CommandResult(target, CommandStatus.FINISHED, message.payload)

    def handle(self, message: Message, target: str = "") -> PollAction:
        kind = message.kind

        if kind == MessageKind.ERROR:
            self._gate.set_active(False)
            self._view.emit(LogLine(text=message.payload, style=LogStyle.WARNING))
            logger.error("Fatal error: %s", message.payload)
            self._view.emit(FatalError(text=message.payload))
            return PollAction.STOP

        if kind == MessageKind.FINISHED:
            self._gate.set_active(False)
            logger.info("Finished: %s", target)
            self._view.emit(CommandFinished(target=target, payload=message.payload))
            return PollAction.STOP

        if kind == MessageKind.UNKNOWN:
            if message.tag:
                logger.warning("Unrecognized message tag %r (%d payload chars)", message.tag, len(message.payload))
            else:
                logger.debug("Idle poll: empty reply")
            self._view.emit(UnknownMessage(tag=message.tag, payload=message.payload))
            return PollAction.CONTINUE

        self._view.emit(LogLine(text=message.payload, style=_LOG_STYLES[kind]))
        return PollAction.CONTINUE
