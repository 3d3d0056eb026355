import logging

from domain.activation import ActivationGate
from domain.dispatcher import CommandDispatcher, CommandResult
from ports.view import Activation, ControlPort, ViewPort

logger = logging.getLogger(__name__)

BRANCHES_ENDPOINT = "/get_branches"
PUBLISH_ENDPOINT = "/publish"
BRANCH_GROUP = "branch"
NEWLINE_DELIMITER = "\n"
# Older laspad servers concatenate the laspad.toml table keys with no separator.
PER_CHARACTER_DELIMITER = ""


def split_branches(payload: str, delimiter: str = NEWLINE_DELIMITER) -> list[str]:
    if delimiter == PER_CHARACTER_DELIMITER:
        return list(payload)
    return [branch for branch in (part.strip() for part in payload.split(delimiter)) if branch]


def publish_target(branch: str) -> str:
    return f"{PUBLISH_ENDPOINT}?{branch}"


class BranchListBuilder:
    def __init__(
        self,
        dispatcher: CommandDispatcher,
        gate: ActivationGate,
        view: ViewPort,
        delimiter: str = NEWLINE_DELIMITER,
        endpoint: str = BRANCHES_ENDPOINT,
    ) -> None:
        self._dispatcher = dispatcher
        self._gate = gate
        self._view = view
        self._delimiter = delimiter
        self._endpoint = endpoint
        self._controls: dict[str, ControlPort] = {}

    @property
    def branches(self) -> list[str]:
        return list(self._controls)

    @property
    def controls(self) -> list[ControlPort]:
        return list(self._controls.values())

    async def build(self) -> CommandResult:
        return await self._dispatcher.command(self._endpoint, self.on_branches)

    def on_branches(self, payload: str) -> None:
        branches = split_branches(payload, self._delimiter)
        logger.info("Received %d publishable branches", len(branches))
        for branch in branches:
            if branch in self._controls:
                logger.warning("Duplicate branch %r ignored", branch)
                continue
            control = self._view.add_control(
                control_id=f"publish:{branch}",
                label=f"Publish {branch}",
                group=BRANCH_GROUP,
                on_activate=self._publisher(branch),
            )
            self._gate.register(control)
            self._controls[branch] = control

    def _publisher(self, branch: str) -> Activation:
        async def publish() -> CommandResult:
            return await self._dispatcher.command(publish_target(branch))

        return publish
