from collections import deque
from collections.abc import Callable

import pytest

from domain.activation import ActivationGate
from domain.branches import BranchListBuilder
from domain.dispatcher import CommandDispatcher
from domain.events import DomainEvent
from domain.message import MessageKind, encode
from domain.panel import ControlPanel
from domain.poll import PollLoop
from ports.transport import TransportError
from ports.view import Activation


def fin(payload: str = "") -> str:
    return encode(MessageKind.FINISHED, payload)


def err(payload: str = "") -> str:
    return encode(MessageKind.ERROR, payload)


def log(payload: str = "") -> str:
    return encode(MessageKind.LOG, payload)


def wrn(payload: str = "") -> str:
    return encode(MessageKind.WARNING, payload)


def inf(payload: str = "") -> str:
    return encode(MessageKind.INFO, payload)


class FakeTransport:
    """Replies from a per-target script; ``/get_msg`` replies are consumed in order."""

    def __init__(
        self,
        replies: dict[str, list[str]] | None = None,
        default: str = "FIN",
    ) -> None:
        self._replies = {target: deque(bodies) for target, bodies in (replies or {}).items()}
        self._default = default
        self._failures: dict[str, str] = {}
        self.sent: list[str] = []
        self.on_send: Callable[[str], None] | None = None
        self.closed = False

    def queue(self, target: str, *bodies: str) -> None:
        self._replies.setdefault(target, deque()).extend(bodies)

    def fail(self, target: str, detail: str = "Connection refused") -> None:
        self._failures[target] = detail

    async def send(self, target: str) -> str:
        self.sent.append(target)
        if self.on_send is not None:
            self.on_send(target)
        if target in self._failures:
            raise TransportError(target, self._failures[target])
        bodies = self._replies.get(target)
        if bodies:
            return bodies.popleft()
        return self._default

    async def close(self) -> None:
        self.closed = True


class FakeControl:
    def __init__(
        self,
        control_id: str,
        appearance: str = "blue",
        on_activate: Activation | None = None,
        label: str = "",
        group: str = "command",
    ) -> None:
        self._control_id = control_id
        self.appearance = appearance
        self.enabled = True
        self.on_activate = on_activate
        self.label = label
        self.group = group
        self.appearance_history: list[str] = []

    @property
    def control_id(self) -> str:
        return self._control_id

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = enabled

    def current_appearance(self) -> str:
        return self.appearance

    def set_appearance(self, appearance: str) -> None:
        self.appearance_history.append(appearance)
        self.appearance = appearance


class RecordingView:
    def __init__(self) -> None:
        self.events: list[DomainEvent] = []
        self.controls: list[FakeControl] = []

    def emit(self, event: DomainEvent) -> None:
        self.events.append(event)

    def add_control(
        self,
        control_id: str,
        label: str,
        group: str,
        on_activate: Activation,
    ) -> FakeControl:
        control = FakeControl(control_id, on_activate=on_activate, label=label, group=group)
        self.controls.append(control)
        return control

    def of_type(self, event_type: type) -> list:
        return [e for e in self.events if isinstance(e, event_type)]

    def control(self, control_id: str) -> FakeControl:
        return next(c for c in self.controls if c.control_id == control_id)


class FakePrompt:
    def __init__(self, answer: str | None = None) -> None:
        self._answer = answer
        self.questions: list[str] = []

    async def ask(self, question: str) -> str | None:
        self.questions.append(question)
        return self._answer


def make_panel(
    transport: FakeTransport,
    view: RecordingView,
    prompt: FakePrompt | None = None,
    delimiter: str = "\n",
) -> ControlPanel:
    gate = ActivationGate()
    dispatcher = CommandDispatcher(transport, gate, view, PollLoop(transport))
    builder = BranchListBuilder(dispatcher, gate, view, delimiter=delimiter)
    return ControlPanel(dispatcher, gate, view, prompt or FakePrompt(), builder)


@pytest.fixture
def fake_transport():
    return FakeTransport()


@pytest.fixture
def view():
    return RecordingView()


@pytest.fixture
def gate():
    return ActivationGate()


@pytest.fixture
def dispatcher(fake_transport, gate, view):
    return CommandDispatcher(fake_transport, gate, view, PollLoop(fake_transport))
