"""
Configuration loading from config.yaml.

Uses typed dataclasses throughout so the rest of the app gets IDE
completion and type-checker support without touching raw dicts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

import yaml

from chessplayground.layout import LAYOUTS
from chessplayground.pieces import TEAMS, Team

LayoutName = Literal["standard", "empty"]
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class BoardConfig:
    width: int = 8
    height: int = 8


@dataclass
class GameConfig:
    blueprint_dir: str = "./blueprints"
    first_team: Team = "white"
    layout: LayoutName = "standard"


@dataclass
class LoggingConfig:
    level: str = "INFO"
    file: str = "./logs/chessplayground.log"


@dataclass
class Config:
    board: BoardConfig = field(default_factory=BoardConfig)
    game: GameConfig = field(default_factory=GameConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def blueprint_dir_path(self) -> Path:
        return Path(self.game.blueprint_dir)

    @property
    def log_file_path(self) -> Path:
        return Path(self.logging.file)


def load_config(path: str | Path = "config.yaml") -> Config:
    """
    Load and validate config.yaml.

    Raises:
        FileNotFoundError: config.yaml is missing.
        ValueError: required fields are absent or invalid.
    """
    cfg_path = Path(path)
    if not cfg_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {cfg_path.resolve()}\n"
            "Copy config.example.yaml to config.yaml to customise the board."
        )

    with cfg_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    try:
        board_raw = raw.get("board") or {}
        game_raw = raw.get("game") or {}
        logging_raw = raw.get("logging") or {}
        config = Config(
            board=BoardConfig(
                width=int(board_raw.get("width", 8)),
                height=int(board_raw.get("height", 8)),
            ),
            game=GameConfig(
                blueprint_dir=str(game_raw.get("blueprint_dir", "./blueprints")),
                first_team=game_raw.get("first_team", "white"),
                layout=game_raw.get("layout", "standard"),
            ),
            logging=LoggingConfig(
                level=str(logging_raw.get("level", "INFO")).upper(),
                file=str(logging_raw.get("file", "./logs/chessplayground.log")),
            ),
        )
    except (AttributeError, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid config.yaml structure: {exc}") from exc

    _validate(config)
    return config


def _validate(config: Config) -> None:
    if config.board.width < 1 or config.board.height < 1:
        raise ValueError("board.width and board.height must be >= 1")
    if config.game.first_team not in TEAMS:
        raise ValueError(f"game.first_team must be one of {TEAMS}, got '{config.game.first_team}'")
    if not isinstance(config.game.layout, str) or config.game.layout not in LAYOUTS:
        raise ValueError(f"game.layout must be one of {tuple(LAYOUTS)}, got '{config.game.layout}'")
    if config.logging.level not in _LOG_LEVELS:
        raise ValueError(f"logging.level must be one of {_LOG_LEVELS}, got '{config.logging.level}'")
