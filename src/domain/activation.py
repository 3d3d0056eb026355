import logging

from ports.view import ControlPort

logger = logging.getLogger(__name__)

BUSY_APPEARANCE = "grey"


class ActivationGate:
    """Tracks whether a command is in flight and keeps controls in step.

    Each control's original appearance is captured the first time the gate
    toggles it, and restored on every later deactivation.
    """

    def __init__(self, busy_appearance: str = BUSY_APPEARANCE) -> None:
        self._busy_appearance = busy_appearance
        self._active = False
        self._controls: dict[str, ControlPort] = {}
        self._original_appearance: dict[str, str] = {}

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def controls(self) -> list[ControlPort]:
        return list(self._controls.values())

    def original_appearance(self, control_id: str) -> str | None:
        return self._original_appearance.get(control_id)

    def register(self, control: ControlPort) -> None:
        self._controls[control.control_id] = control

    def set_active(self, active: bool) -> None:
        if active != self._active:
            logger.debug("Activation: %s -> %s", self._active, active)
        self._active = active
        for control_id, control in self._controls.items():
            control.set_enabled(not active)
            if control_id not in self._original_appearance:
                self._original_appearance[control_id] = control.current_appearance()
            if active:
                control.set_appearance(self._busy_appearance)
            else:
                control.set_appearance(self._original_appearance[control_id])
