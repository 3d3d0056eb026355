from collections.abc import Awaitable, Callable
from typing import Protocol

from domain.events import DomainEvent

Activation = Callable[[], Awaitable[object]]


class ControlPort(Protocol):
    @property
    def control_id(self) -> str: ...

    def set_enabled(self, enabled: bool) -> None: ...
    def current_appearance(self) -> str: ...
    def set_appearance(self, appearance: str) -> None: ...


class ViewPort(Protocol):
    def emit(self, event: DomainEvent) -> None: ...

    def add_control(
        self,
        control_id: str,
        label: str,
        group: str,
        on_activate: Activation,
    ) -> ControlPort: ...


class PromptPort(Protocol):
    async def ask(self, question: str) -> str | None: ...
