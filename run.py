"""stagegen CLI entry point.

Provides subcommands for rendering a generated stage to the terminal and for
running the HTTP API server. Accepts configuration via flags and environment
variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv


def _load_version() -> str:
    try:
        with open(os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION"), "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Stage Generator

    Generate a tree-shaped floor of connected rooms and print it, or run the
    HTTP API that serves stages as JSON or text. Configuration can be provided
    via CLI flags or environment variables. If both are present, CLI flags take
    precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          STAGE_ROOMS          Default room count for `render` (default: 100)
          STAGE_STALL_FACTOR   Retry budget per grid cell, or "none" (default: 32)
          HOST                 Bind address for the web server (default: 0.0.0.0)
          PORT                 Port for the web server (default: 5000)

        Examples:
          # Render a 100-room stage
          python run.py

          # Reproducible 40-room stage, one glyph per room
          python run.py render --rooms 40 --seed 7 --minimal

          # Serve the API on port 8080
          python run.py server --port 8080
        """
    )

    parser = argparse.ArgumentParser(
        prog="stagegen",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"stagegen {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    render_parser = subparsers.add_parser(
        "render",
        help="Generate a stage and print it",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    render_parser.add_argument("--rooms", type=int, default=None, help="Room count (default: env STAGE_ROOMS or 100)")
    render_parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible output")
    render_parser.add_argument("--minimal", action="store_true", help="One glyph per room instead of 3x3 boxes")
    render_parser.add_argument("--json", action="store_true", help="Print the stage as JSON")
    render_parser.add_argument("--no-color", dest="no_color", action="store_true", help="Disable colored glyphs")
    render_parser.add_argument(
        "--stall-factor",
        dest="stall_factor",
        type=int,
        default=None,
        help="Consecutive rejected steps allowed per grid cell (default: env STAGE_STALL_FACTOR or 32)",
    )
    render_parser.set_defaults(command="render")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the HTTP API server",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    server_parser.add_argument("--host", default=None, help="Host interface to bind (default: env HOST or 0.0.0.0)")
    server_parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: env PORT or 5000)")
    server_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    server_parser.set_defaults(command="server")

    return parser.parse_args(_with_default_command(list(argv)))


def _with_default_command(argv: list[str]) -> list[str]:
    """Insert `render` after the global options when no subcommand is given."""
    i = 0
    while i < len(argv):
        token = argv[i]
        if token == "--env-file":
            i += 2
            continue
        if token.startswith("--env-file="):
            i += 1
            continue
        if token in ("render", "server", "-h", "--help", "--version"):
            return argv
        break
    return argv[:i] + ["render"] + argv[i:]


def _color_enabled(no_color: bool) -> bool:
    if no_color:
        return False
    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):  # pragma: no cover - environment dependent
        return False


def _glyph_colorizer():
    from stagegen.stage import RoomType

    colors = {RoomType.START: Fore.GREEN + Style.BRIGHT, RoomType.EXIT: Fore.RED + Style.BRIGHT}

    def colorize(room_type, glyph):
        color = colors.get(room_type)
        return f"{color}{glyph}{Style.RESET_ALL}" if color else glyph

    return colorize


def _env_rooms() -> int:
    raw = os.getenv("STAGE_ROOMS", "100").strip()
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"STAGE_ROOMS must be an integer, got {raw!r}") from None


def _run_render(args) -> int:
    from stagegen.logging_utils import log
    from stagegen.stage import StageConfig, StageError, generate_stage, render_minimal, render_stage, stage_to_dict

    try:
        rooms = args.rooms if args.rooms is not None else _env_rooms()
        config = StageConfig.from_env()
        if args.stall_factor is not None:
            config.stall_budget_factor = args.stall_factor
        stage = generate_stage(rooms, seed=args.seed, config=config)
    except (StageError, ValueError) as exc:
        print(f"[ERROR] {exc}")
        return 1
    log.info(event="render", rooms=rooms, seed=args.seed, grid=stage.grid_size)

    if args.json:
        print(json.dumps(stage_to_dict(stage)))
        return 0
    colorize = None
    if _color_enabled(args.no_color):
        _color_init()
        colorize = _glyph_colorizer()
    renderer = render_minimal if args.minimal else render_stage
    print(renderer(stage, colorize))
    return 0


def _run_server(args) -> int:
    host = args.host or os.getenv("HOST", "0.0.0.0")
    port = int(args.port or os.getenv("PORT", "5000"))
    debug = bool(args.debug or os.getenv("FLASK_DEBUG") == "1")

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    from stagegen.logging_utils import log
    from stagegen.server import start_server

    color = _color_enabled(False)

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if color else text

    def value(val) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if color else str(val)

    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if color else "=" * 40
    title = f"{Fore.CYAN}{Style.BRIGHT}Stage Server Bootup{Style.RESET_ALL}" if color else "Stage Server Bootup"
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Debug:'):12} {value('YES' if debug else 'NO')}",
        divider,
        "",
    ]
    print("\n".join(lines))
    log.info(event="listen", host=host, port=port, debug=debug)
    start_server(host=host, port=port, debug=debug)
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    if args.command == "server":
        return _run_server(args)
    return _run_render(args)


def _console_main() -> int:
    return main(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
