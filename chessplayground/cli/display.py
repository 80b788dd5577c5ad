"""
Rich-based CLI output.

This is the ONLY place where terminal output happens. It translates Outcome
records and rendered boards into formatted Rich output; the engine never
prints.
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from chessplayground.board import Board
from chessplayground.outcomes import (
    ActionApplied,
    GameOver,
    GameStarted,
    MoveApplied,
    Outcome,
    Rejected,
)
from chessplayground.pieces import Piece, Team
from chessplayground.position import Position
from chessplayground.renderer import HighlightMarker, render_board, render_offsets

console = Console(legacy_windows=False)

COMMAND_HELP = (
    "move <x1> <y1> <x2> <y2> | attack <x1> <y1> <x2> <y2> | "
    "showmove <x> <y> | showattack <x> <y> | legal <x> <y> | pattern <x> <y> | exit"
)


def display_outcome(outcome: Outcome) -> None:
    """Dispatch an Outcome to the appropriate display function."""
    match outcome:
        case GameStarted():
            _game_started(outcome)
        case MoveApplied():
            console.print(
                f"  [green]✓[/] {outcome.piece_name} [dim]({outcome.piece_id})[/] "
                f"{outcome.from_pos} → [bold]{outcome.to_pos}[/]"
            )
        case ActionApplied():
            _action_applied(outcome)
        case Rejected():
            _rejected(outcome)
        case GameOver():
            _game_over(outcome)


def display_board(board: Board, current_team: Team | None, turn_number: int) -> None:
    console.print(Panel(Text(render_board(board)), border_style="dim", expand=False))
    if current_team is not None:
        console.print(f"[dim]Turn {turn_number}:[/] [bold]{current_team}[/] to move")


def display_pattern(board: Board, piece: Piece, targets: list[Position], marker: HighlightMarker) -> None:
    kind = "movement" if marker == "M" else "attack"
    console.print(
        Panel(
            Text(render_board(board, targets, marker, selected=piece.position)),
            title=f"[bold]{piece.name}[/] {kind} pattern",
            subtitle=f"[dim]{marker}=target  X=selected[/]",
            border_style="cyan",
            expand=False,
        )
    )


def display_offsets(piece: Piece) -> None:
    """Show the piece's raw movement and attack offsets, independent of the board."""
    for kind, offsets in (("movement", piece.movement_offsets), ("attack", piece.action_offsets)):
        console.print(
            Panel(
                Text(render_offsets(offsets)),
                title=f"[bold]{piece.name}[/] {kind} offsets",
                subtitle="[dim]X=piece  ■=offset[/]",
                border_style="magenta",
                expand=False,
            )
        )


def display_error(message: str) -> None:
    console.print(f"[red]Error:[/] {message}")


def display_help() -> None:
    console.print(f"[yellow]Commands:[/] {COMMAND_HELP}")


# --------------------------------------------------------------------------- #
# Display functions                                                            #
# --------------------------------------------------------------------------- #

def _game_started(outcome: GameStarted) -> None:
    console.print(
        Panel(
            f"{outcome.piece_count} pieces on the board, "
            f"[bold]{outcome.first_team}[/] moves first\n"
            f"[dim]{outcome.timestamp.strftime('%Y-%m-%d %H:%M:%S')}[/]",
            title="[bold green] Chess Playground [/]",
            border_style="green",
            expand=False,
        )
    )


def _action_applied(outcome: ActionApplied) -> None:
    target = outcome.target_piece_id or "empty square"
    capture_tag = "  [bold red]captured![/]" if outcome.captured else ""
    console.print(
        f"  [green]✓[/] {outcome.piece_id} {outcome.action_name} → "
        f"{outcome.target} [dim]({target})[/]{capture_tag}"
    )


def _rejected(outcome: Rejected) -> None:
    reason = outcome.reason.replace("_", " ")
    console.print(
        f"  [red]✗[/] {outcome.command} to {outcome.target} rejected: "
        f"[yellow]{reason}[/]" + (f" [dim]— {outcome.detail}[/]" if outcome.detail else "")
    )


def _game_over(outcome: GameOver) -> None:
    console.print()
    console.print(
        Panel(
            f"Winner: [bold]{outcome.winning_team}[/]\n"
            f"[dim]{outcome.losing_team} lost their king on turn {outcome.turn_number}[/]",
            title="[bold]Game Over[/]",
            border_style="yellow",
            expand=False,
        )
    )
