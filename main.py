"""
Chess Playground — entry point.

Wires together:  config → logging → ability registry → blueprints → engine → command loop
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path

from chessplayground.abilities import AbilityNotRegisteredError, create_default_registry
from chessplayground.board import Board
from chessplayground.cli.commands import handle_command
from chessplayground.cli.display import console, display_board, display_help, display_outcome
from chessplayground.config import Config, load_config
from chessplayground.engine import GameEngine
from chessplayground.layout import LAYOUTS
from chessplayground.pieces import BlueprintError, load_blueprints
from chessplayground.shapes import ShapeDefinitionError


def _configure_logging(config: Config) -> None:
    log_file = config.log_file_path
    log_file.parent.mkdir(parents=True, exist_ok=True)
    console_handler = logging.StreamHandler()
    # Keep the console readable; the file gets everything at the configured level.
    console_handler.setLevel(logging.WARNING)
    logging.basicConfig(
        level=config.logging.level,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        handlers=[
            console_handler,
            logging.handlers.RotatingFileHandler(
                log_file, maxBytes=2 * 1024 * 1024, backupCount=3,  # 2 MB × 3 files
                encoding="utf-8",
            ),
        ],
    )


def _load(config_path: Path) -> Config:
    try:
        return load_config(config_path)
    except FileNotFoundError:
        return Config()
    except ValueError as exc:
        console.print(f"[red]Config error:[/] {exc}")
        sys.exit(1)


def main() -> None:
    config = _load(Path("config.yaml"))
    _configure_logging(config)

    registry = create_default_registry()
    board = Board(config.board.width, config.board.height)
    engine = GameEngine(board, registry)

    try:
        blueprints = load_blueprints(config.blueprint_dir_path)
        layout = LAYOUTS[config.game.layout](config.board.width, config.board.height)
        engine.setup(blueprints, layout)
    except (FileNotFoundError, KeyError, ValueError, BlueprintError, ShapeDefinitionError, AbilityNotRegisteredError) as exc:
        console.print(f"[red]Setup error:[/] {exc}")
        sys.exit(1)

    display_outcome(engine.start_game(config.game.first_team))
    display_board(engine.board, engine.current_team, engine.turn_number)
    display_help()

    while True:
        try:
            line = console.input("[bold]Enter command:[/] ")
        except (EOFError, KeyboardInterrupt):
            break
        if not handle_command(engine, line):
            break
        if engine.is_over:
            break
    console.print("[dim]Exiting.[/]")


if __name__ == "__main__":
    main()
