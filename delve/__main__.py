"""Entry point: ``python -m delve``.

Supports two modes:
  - ``python -m delve``          → Launch the FastAPI frame/intent server
  - ``python -m delve cli``      → Headless autoplay, prints the final ASCII frame
"""

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)

AUTOPLAY_INTENTS = ("move_up", "move_down", "move_left", "move_right")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Turn-based grid dungeon engine")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI frame/intent server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--seed", type=int, default=42)
    srv.add_argument("--fov", type=str, default="basic", choices=["basic", "shadowcast"])
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless CLI mode ---
    cli = sub.add_parser("cli", help="Autoplay random moves and print the final frame")
    cli.add_argument("--seed", type=int, default=42)
    cli.add_argument("--steps", type=int, default=100)
    cli.add_argument("--fov", type=str, default="basic", choices=["basic", "shadowcast"])
    cli.add_argument("--log-level", type=str, default="WARNING", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _config_from_args(args: argparse.Namespace):
    from delve.config import DungeonConfig
    from delve.core.enums import FovAlgorithm

    return DungeonConfig(
        seed=args.seed,
        fov_algorithm=FovAlgorithm[args.fov.upper()],
        log_level=args.log_level,
    )


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from delve.api.app import create_app

    config = _config_from_args(args)
    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_cli(args: argparse.Namespace) -> None:
    from delve.core.enums import Domain, Intent, TurnResult
    from delve.engine.session import GameSession
    from delve.render.ascii import render_ascii
    from delve.systems.rng import DeterministicRNG
    from delve.utils.logging import setup_logging

    config = _config_from_args(args)
    setup_logging(config.log_level)

    session = GameSession.create(config)
    picker = DeterministicRNG(config.seed).stream(Domain.AUTOPLAY)

    for _ in range(args.steps):
        intent = Intent(AUTOPLAY_INTENTS[picker.randint(0, len(AUTOPLAY_INTENTS) - 1)])
        if session.handle(intent) is TurnResult.EXIT:
            break
        if not session.world.player.alive:
            logger.info("Player died on turn %d", session.turn)
            break

    print(render_ascii(session.game_map, session.world, session.fov))
    for event in session.log.latest(10):
        print(event.message)
    print(
        f"turn={session.turn} entities={len(session.world)} alive={session.world.alive_count()} "
        f"explored={session.game_map.explored_count()}"
    )


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None or args.command == "serve":
        if args.command is None:
            args = parser.parse_args(["serve"])
        _run_server(args)
    elif args.command == "cli":
        _run_cli(args)


if __name__ == "__main__":
    main()
