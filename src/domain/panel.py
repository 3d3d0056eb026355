import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from domain.activation import ActivationGate
from domain.branches import BranchListBuilder, publish_target
from domain.dispatcher import CommandDispatcher, CommandResult
from ports.view import ControlPort, PromptPort, ViewPort

logger = logging.getLogger(__name__)

COMMAND_GROUP = "command"
NEED_PROMPT = "Mod ID of dependency to add"


@dataclass(frozen=True)
class CommandSpec:
    name: str
    label: str


COMMANDS: tuple[CommandSpec, ...] = (
    CommandSpec("find_project", "Find project"),
    CommandSpec("create_project", "Create project"),
    CommandSpec("update", "Update"),
    CommandSpec("need", "Add dependency"),
    CommandSpec("ns2", "Launch NS2"),
    CommandSpec("editor", "Launch editor"),
)


class ControlPanel:
    """One operator session: the command buttons, the branch buttons and the gate they share."""

    def __init__(
        self,
        dispatcher: CommandDispatcher,
        gate: ActivationGate,
        view: ViewPort,
        prompt: PromptPort,
        branch_builder: BranchListBuilder,
    ) -> None:
        self._dispatcher = dispatcher
        self._gate = gate
        self._view = view
        self._prompt = prompt
        self._branch_builder = branch_builder
        self._controls: dict[str, ControlPort] = {}

        handlers: dict[str, Callable[[], Awaitable[CommandResult | None]]] = {
            "find_project": self.find_project,
            "create_project": self.create_project,
            "update": self.update,
            "need": self.need,
            "ns2": self.ns2,
            "editor": self.editor,
        }
        for spec in COMMANDS:
            control = view.add_control(
                control_id=spec.name,
                label=spec.label,
                group=COMMAND_GROUP,
                on_activate=handlers[spec.name],
            )
            gate.register(control)
            self._controls[spec.name] = control

    @property
    def gate(self) -> ActivationGate:
        return self._gate

    @property
    def controls(self) -> list[ControlPort]:
        return list(self._controls.values()) + self._branch_builder.controls

    @property
    def branches(self) -> list[str]:
        return self._branch_builder.branches

    async def bootstrap(self) -> CommandResult:
        return await self._branch_builder.build()

    async def find_project(self) -> CommandResult:
        return await self._dispatcher.command("/find_project", self._on_project_found)

    async def create_project(self) -> CommandResult:
        return await self._dispatcher.command("/create_project")

    async def update(self) -> CommandResult:
        return await self._dispatcher.command("/update")

    async def need(self, mod_id: str | None = None) -> CommandResult | None:
        if mod_id is None:
            mod_id = await self._prompt.ask(NEED_PROMPT)
        if mod_id is None or not mod_id.strip():
            logger.info("No dependency given, nothing sent")
            return None
        return await self._dispatcher.command(f"/need?{mod_id.strip()}")

    async def ns2(self) -> CommandResult:
        return await self._dispatcher.command("/ns2")

    async def editor(self) -> CommandResult:
        return await self._dispatcher.command("/editor")

    async def publish(self, branch: str) -> CommandResult:
        return await self._dispatcher.command(publish_target(branch))

    def _on_project_found(self, kind: str) -> None:
        if kind == "new":
            logger.info("No laspad.toml in the selected directory; use create_project to set one up")
        else:
            logger.info("Existing laspad project found")
