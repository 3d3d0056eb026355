import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

from config import LaspadUiConfig

ENV_FILE_PATH = Path.home() / ".config" / "laspad-ui" / "env"

ONE_SHOT_COMMANDS = ("update", "need", "ns2", "editor", "publish", "branches", "find-project", "create-project")


def _load_env_file() -> None:
    if not ENV_FILE_PATH.exists():
        return
    with open(ENV_FILE_PATH) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue
            key, _, value = line.partition("=")
            value = value.strip("'\"")
            if key not in os.environ:
                os.environ[key] = value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Drive laspad build/update/publish commands")
    parser.add_argument("--url", help="laspad UI server URL")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    parser.add_argument("--no-color", action="store_true", help="Plain log output")
    parser.add_argument(
        "--no-health-check", action="store_true", help="Skip the startup server checks"
    )

    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("shell", help="Interactive control panel (default)")
    subparsers.add_parser("update", help="Update the project's dependencies")
    subparsers.add_parser("ns2", help="Launch Natural Selection 2")
    subparsers.add_parser("editor", help="Launch the level editor")
    subparsers.add_parser("branches", help="List publishable branches")
    subparsers.add_parser("find-project", help="Select the project directory")
    subparsers.add_parser("create-project", help="Create a laspad.toml in the project directory")

    need_parser = subparsers.add_parser("need", help="Add a dependency")
    need_parser.add_argument("mod_id", nargs="?", help="Mod ID (prompted when omitted)")

    publish_parser = subparsers.add_parser("publish", help="Publish a branch")
    publish_parser.add_argument("branch", help="Branch name from laspad.toml")

    return parser


def configure_logging(verbose: bool, config: LaspadUiConfig) -> None:
    from log_format import ColoredFormatter

    log_level = logging.DEBUG if verbose else logging.INFO
    handler = logging.StreamHandler()
    if config.color:
        handler.setFormatter(ColoredFormatter(datefmt="%H:%M:%S"))
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s", datefmt="%H:%M:%S")
        )
    handlers: list[logging.Handler] = [handler]
    if config.log_file:
        file_handler = logging.FileHandler(config.log_file)
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
        handlers.append(file_handler)
    logging.basicConfig(level=log_level, handlers=handlers, force=True)

    if verbose:
        logging.getLogger("httpcore").setLevel(logging.INFO)
        logging.getLogger("httpx").setLevel(logging.INFO)


def main(argv: list[str] | None = None) -> None:
    _load_env_file()
    args = build_parser().parse_args(argv)

    config = LaspadUiConfig()
    if args.url:
        config.server_url = args.url
    if args.no_color:
        config.color = False

    configure_logging(args.verbose, config)

    if not args.no_health_check:
        from health import has_critical_failures, run_startup_checks

        results = run_startup_checks(config)
        if has_critical_failures(results):
            logging.error("Critical health check failures, aborting startup")
            sys.exit(1)

    try:
        if args.command in ONE_SHOT_COMMANDS:
            exit_code = asyncio.run(_run_command(args, config))
        else:
            exit_code = asyncio.run(_run_shell(config))
    except KeyboardInterrupt:
        logging.warning("Interrupted")
        exit_code = 130
    sys.exit(exit_code)


async def _run_command(args: argparse.Namespace, config: LaspadUiConfig) -> int:
    from factory import create_panel, create_transport, create_view

    view = create_view(config)
    async with create_transport(config) as transport:
        panel = create_panel(config, transport, view)

        if args.command == "update":
            result = await panel.update()
        elif args.command == "need":
            result = await panel.need(args.mod_id)
        elif args.command == "ns2":
            result = await panel.ns2()
        elif args.command == "editor":
            result = await panel.editor()
        elif args.command == "publish":
            result = await panel.publish(args.branch)
        elif args.command == "find-project":
            result = await panel.find_project()
        elif args.command == "create-project":
            result = await panel.create_project()
        elif args.command == "branches":
            result = await panel.bootstrap()
            if result.succeeded:
                for branch in panel.branches:
                    print(branch)
        else:
            print(f"Unknown command: {args.command}", file=sys.stderr)
            return 1

    if result is None:
        print("Nothing sent", file=sys.stderr)
        return 1
    return 0 if result.succeeded else 1


async def _run_shell(config: LaspadUiConfig) -> int:
    from factory import create_panel, create_transport, create_view

    view = create_view(config, interactive=True)
    async with create_transport(config) as transport:
        panel = create_panel(config, transport, view)
        await panel.bootstrap()

        while True:
            print(view.render_controls())
            try:
                choice = (await asyncio.to_thread(input, "> ")).strip().lower()
            except EOFError:
                break
            if choice in ("q", "quit", "exit"):
                break
            if not choice.isdigit() or not 1 <= int(choice) <= len(view.buttons):
                print(f"Pick 1-{len(view.buttons)} or q", file=sys.stderr)
                continue
            button = view.buttons[int(choice) - 1]
            if not button.enabled:
                print("A command is already running", file=sys.stderr)
                continue
            await button.on_activate()
    return 0


if __name__ == "__main__":
    main()
