import logging

from config import LaspadUiConfig
from adapters.httpx_transport import HttpxTransport
from adapters.terminal_prompt import TerminalPrompt
from adapters.terminal_view import TerminalView
from domain.activation import ActivationGate
from domain.branches import BranchListBuilder
from domain.dispatcher import CommandDispatcher
from domain.panel import ControlPanel
from domain.poll import PollLoop
from ports.transport import TransportPort
from ports.view import PromptPort, ViewPort

logger = logging.getLogger(__name__)


def create_transport(config: LaspadUiConfig) -> HttpxTransport:
    return HttpxTransport(server_url=config.server_url)


def create_view(config: LaspadUiConfig, interactive: bool = False) -> TerminalView:
    return TerminalView(color=config.color, interactive=interactive)


def create_panel(
    config: LaspadUiConfig,
    transport: TransportPort,
    view: ViewPort,
    prompt: PromptPort | None = None,
) -> ControlPanel:
    gate = ActivationGate(busy_appearance=config.busy_appearance)
    poll_loop = PollLoop(transport, endpoint=config.poll_endpoint)
    dispatcher = CommandDispatcher(
        transport=transport,
        gate=gate,
        view=view,
        poll_loop=poll_loop,
    )
    branch_builder = BranchListBuilder(
        dispatcher=dispatcher,
        gate=gate,
        view=view,
        delimiter=config.branch_delimiter,
        endpoint=config.branches_endpoint,
    )
    logger.debug("Control panel wired against %s", config.server_url)
    return ControlPanel(
        dispatcher=dispatcher,
        gate=gate,
        view=view,
        prompt=prompt or TerminalPrompt(),
        branch_builder=branch_builder,
    )
