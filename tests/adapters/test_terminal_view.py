import io

import pytest

from adapters.terminal_prompt import TerminalPrompt
from adapters.terminal_view import TerminalView
from domain.activation import ActivationGate
from domain.dispatcher import CommandDispatcher, CommandStatus
from domain.events import (
    CommandStarted,
    FatalError,
    LogLine,
    LogStyle,
    TransportFailed,
    UnknownMessage,
)
from log_format import BOLD, RED

from tests.conftest import FakeTransport, err as err_reply


async def _noop():
    return None


@pytest.fixture
def streams():
    return io.StringIO(), io.StringIO()


class TestTerminalView:
    def test_plain_log_lines(self, streams):
        out, err = streams
        view = TerminalView(out=out, err=err, color=False)

        view.emit(LogLine(text="copying files", style=LogStyle.MESSAGE))
        view.emit(LogLine(text="mirror slow", style=LogStyle.WARNING))

        assert out.getvalue() == "copying files\nmirror slow\n"

    def test_styles_are_colored(self, streams):
        out, err = streams
        view = TerminalView(out=out, err=err, color=True)

        view.emit(LogLine(text="mirror slow", style=LogStyle.WARNING))
        view.emit(LogLine(text="Publishing", style=LogStyle.INFORMATION))
        view.emit(LogLine(text="plain", style=LogStyle.MESSAGE))

        lines = out.getvalue().splitlines()
        assert lines[0].startswith(RED)
        assert lines[1].startswith(BOLD)
        assert lines[2] == "plain"

    def test_fatal_error_goes_to_stderr(self, streams):
        out, err = streams
        view = TerminalView(out=out, err=err, color=False)

        view.emit(FatalError(text="steam not running"))

        assert err.getvalue() == "Fatal error: steam not running\n"
        assert out.getvalue() == ""

    def test_interactive_alert_blocks_for_acknowledgement(self, streams, monkeypatch):
        out, err = streams
        prompts = []
        monkeypatch.setattr("builtins.input", lambda text="": prompts.append(text) or "")
        view = TerminalView(out=out, err=err, color=False, interactive=True)

        view.emit(FatalError(text="boom"))

        assert len(prompts) == 1

    def test_alert_with_closed_stdin_returns(self, streams, monkeypatch):
        out, err = streams

        def closed_stdin(text=""):
            raise EOFError

        monkeypatch.setattr("builtins.input", closed_stdin)
        view = TerminalView(out=out, err=err, color=False, interactive=True)

        view.emit(FatalError(text="steam not running"))

        assert err.getvalue().startswith("Fatal error: steam not running\n")

    @pytest.mark.asyncio
    async def test_fatal_reply_with_closed_stdin_fails_cleanly(self, streams, monkeypatch):
        out, err = streams

        def closed_stdin(text=""):
            raise EOFError

        monkeypatch.setattr("builtins.input", closed_stdin)
        view = TerminalView(out=out, err=err, color=False, interactive=True)
        gate = ActivationGate()
        transport = FakeTransport({"/update": [err_reply("steam not running")]})
        dispatcher = CommandDispatcher(transport, gate, view)

        result = await dispatcher.command("/update")

        assert result.status == CommandStatus.FAILED
        assert gate.is_active is False

    def test_idle_poll_replies_are_not_printed(self, streams):
        out, err = streams
        view = TerminalView(out=out, err=err, color=False)

        for _ in range(100):
            view.emit(UnknownMessage(tag="", payload=""))
        view.emit(UnknownMessage(tag="XYZ", payload=""))

        assert err.getvalue() == "unrecognized message 'XYZ'\n"
        assert out.getvalue() == ""

    def test_unknown_and_transport_failures_reported(self, streams):
        out, err = streams
        view = TerminalView(out=out, err=err, color=False)

        view.emit(UnknownMessage(tag="<ht", payload="ml>"))
        view.emit(TransportFailed(target="/get_msg", detail="Connection refused"))

        assert "unrecognized message '<ht'" in err.getvalue()
        assert "Connection refused" in err.getvalue()

    def test_command_started(self, streams):
        out, err = streams
        view = TerminalView(out=out, err=err, color=False)
        view.emit(CommandStarted(target="/update"))
        assert out.getvalue() == "> /update\n"


class TestTerminalButtons:
    def test_buttons_render_in_order(self):
        view = TerminalView(out=io.StringIO(), err=io.StringIO(), color=False)
        view.add_control("update", "Update", "command", _noop)
        view.add_control("publish:main", "Publish main", "branch", _noop)

        assert view.render_controls() == "[1] Update\n[2] Publish main"

    def test_gate_greys_and_restores_buttons(self):
        view = TerminalView(out=io.StringIO(), err=io.StringIO(), color=False)
        gate = ActivationGate()
        update = view.add_control("update", "Update", "command", _noop)
        publish = view.add_control("publish:main", "Publish main", "branch", _noop)
        gate.register(update)
        gate.register(publish)

        gate.set_active(True)
        assert "(busy)" in view.render_controls()
        assert (update.appearance, publish.appearance) == ("grey", "grey")

        gate.set_active(False)
        assert "(busy)" not in view.render_controls()
        assert (update.appearance, publish.appearance) == ("cyan", "green")


class TestTerminalPrompt:
    @pytest.mark.asyncio
    async def test_returns_answer(self, monkeypatch):
        monkeypatch.setattr("builtins.input", lambda text="": "1234")
        assert await TerminalPrompt().ask("Mod ID") == "1234"

    @pytest.mark.asyncio
    async def test_eof_is_cancel(self, monkeypatch):
        def eof(text=""):
            raise EOFError

        monkeypatch.setattr("builtins.input", eof)
        assert await TerminalPrompt().ask("Mod ID") is None
