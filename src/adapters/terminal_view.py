import logging
import sys
from typing import TextIO

from domain.events import (
    CommandFinished,
    CommandStarted,
    DomainEvent,
    FatalError,
    LogLine,
    LogStyle,
    TransportFailed,
    UnknownMessage,
)
from log_format import BOLD, CYAN, DIM, GREEN, RED, RESET, YELLOW
from ports.view import Activation

logger = logging.getLogger(__name__)

GROUP_APPEARANCE = {
    "command": "cyan",
    "branch": "green",
}

APPEARANCE_COLORS = {
    "cyan": CYAN,
    "green": GREEN,
    "grey": DIM,
}

STYLE_COLORS = {
    LogStyle.WARNING: RED,
    LogStyle.MESSAGE: "",
    LogStyle.INFORMATION: BOLD,
}


class TerminalButton:
    def __init__(
        self,
        control_id: str,
        label: str,
        group: str,
        on_activate: Activation,
    ) -> None:
        self._control_id = control_id
        self.label = label
        self.group = group
        self.on_activate = on_activate
        self.enabled = True
        self.appearance = GROUP_APPEARANCE.get(group, "default")

    @property
    def control_id(self) -> str:
        return self._control_id

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = enabled

    def current_appearance(self) -> str:
        return self.appearance

    def set_appearance(self, appearance: str) -> None:
        self.appearance = appearance


class TerminalView:
    def __init__(
        self,
        out: TextIO | None = None,
        err: TextIO | None = None,
        color: bool = True,
        interactive: bool = False,
    ) -> None:
        self._out = out or sys.stdout
        self._err = err or sys.stderr
        self._color = color
        self._interactive = interactive
        self._buttons: list[TerminalButton] = []

    @property
    def buttons(self) -> list[TerminalButton]:
        return list(self._buttons)

    def add_control(
        self,
        control_id: str,
        label: str,
        group: str,
        on_activate: Activation,
    ) -> TerminalButton:
        button = TerminalButton(control_id, label, group, on_activate)
        self._buttons.append(button)
        return button

    def emit(self, event: DomainEvent) -> None:
        if isinstance(event, LogLine):
            self._write(self._out, event.text, STYLE_COLORS[event.style])
        elif isinstance(event, FatalError):
            self._alert(f"Fatal error: {event.text}")
        elif isinstance(event, CommandStarted):
            self._write(self._out, f"> {event.target}", DIM)
        elif isinstance(event, CommandFinished):
            self._write(self._out, f"done {event.target}", DIM)
        elif isinstance(event, UnknownMessage):
            # Empty bodies are idle poll replies.
            if event.tag:
                self._write(self._err, f"unrecognized message {event.tag!r}", YELLOW)
        elif isinstance(event, TransportFailed):
            self._alert(f"Server unreachable ({event.target}): {event.detail}")
        else:
            logger.debug("Ignoring event %s", type(event).__name__)

    def render_controls(self) -> str:
        lines = []
        for index, button in enumerate(self._buttons, start=1):
            text = f"[{index}] {button.label}"
            if not button.enabled:
                text += " (busy)"
            lines.append(self._paint(text, APPEARANCE_COLORS.get(button.appearance, "")))
        return "\n".join(lines)

    def _alert(self, text: str) -> None:
        self._write(self._err, text, RED + BOLD)
        if self._interactive:
            try:
                input("Press Enter to continue ")
            except EOFError:
                self._err.write("\n")

    def _write(self, stream: TextIO, text: str, color: str) -> None:
        stream.write(self._paint(text, color) + "\n")
        stream.flush()

    def _paint(self, text: str, color: str) -> str:
        if not self._color or not color:
            return text
        return f"{color}{text}{RESET}"
