"""Texas Hold'em winning probability estimation by Monte-Carlo simulation."""

import logging
from pathlib import Path
from random import Random
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from config.settings import MAX_EVALUATED_CARDS, Config, load_config, save_config
from poker.cards import CardParseError
from poker.cardset import CardSet
from poker.hand_evaluator import category_of, evaluate
from simulation.equity import EquityEstimator, SimulationInputError, current_hand_name, validate_inputs
from simulation.showdown import deal_rounds
from simulation.statistics import StatisticsTracker
from ui.display import render_cards, render_hand_line, render_result, render_round

CARDS_HELP = (
    "Cards are concatenated tokens, e.g. '4CAQ' is the 4 of ♥ and the ace of ♦. "
    "Values are '1' or 'A', '2' to '10', 'J' or '11', 'Q' or '12', 'K' or '13'. "
    "Suits are 'C' or '♥', 'Q' or '♦', 'P' or '♠' and 'F' or '♣', any case."
)

app = typer.Typer(
    name="poker-equity",
    help="Estimate Texas Hold'em winning probabilities by simulating games. " + CARDS_HELP,
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _parse_cards(text: str, what: str) -> CardSet:
    """Parse cards or exit with a readable message."""
    try:
        return CardSet.parse(text)
    except CardParseError as e:
        console.print(f"[red]Error parsing cards: {escape(str(e))} in {what}[/red]")
        raise typer.Exit(1)


def _build_config(
    config_path: Optional[Path],
    players: Optional[int],
    games: Optional[int],
    workers: Optional[int],
    executor: Optional[str],
    chunk_size: Optional[int],
    seed: Optional[int],
) -> Config:
    config = load_config(config_path) if config_path else Config()
    if players is not None:
        config.simulation.players = players
    if games is not None:
        config.simulation.games = games
    if workers is not None:
        config.execution.workers = workers
    if executor is not None:
        config.execution.executor = executor
    if chunk_size is not None:
        config.execution.chunk_size = chunk_size
    if seed is not None:
        config.execution.seed = seed
    return config


@app.command()
def estimate(
    hand: str = typer.Option("", "--hand", "-h", help="Cards in hand, maximum 2"),
    table: str = typer.Option("", "--table", "-t", help="Cards on the table, maximum 5"),
    players: Optional[int] = typer.Option(None, "--players", "-p", help="Players in game, 2-8 (default 4)"),
    games: Optional[int] = typer.Option(None, "--games", "-g", help="Rounds to simulate (default 1,000,000)"),
    show: int = typer.Option(0, "--show", "-s", help="Print this many sample rounds"),
    show_time: bool = typer.Option(False, "--time", help="Display execution time"),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", help="Worker count (default one per CPU)"),
    executor: Optional[str] = typer.Option(None, "--executor", help="Worker pool: process or thread"),
    chunk_size: Optional[int] = typer.Option(None, "--chunk-size", help="Trials per work unit"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed for reproducible runs"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config file"),
    plot: Optional[Path] = typer.Option(None, "--plot", help="Save a convergence plot to this path"),
    progress: bool = typer.Option(False, "--progress", help="Show a progress bar"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Estimate the probability of not losing with the given cards."""
    _setup_logging(verbose)

    try:
        config = _build_config(config_path, players, games, workers, executor, chunk_size, seed)
        config.validate()
    except (FileNotFoundError, ValueError, TypeError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    hand_cards = _parse_cards(hand, "hand")
    board_cards = _parse_cards(table, "table")
    num_players = config.simulation.players
    num_games = config.simulation.games

    try:
        validate_inputs(hand_cards, board_cards, num_players, num_games)
    except SimulationInputError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if show > 0:
        rng = Random(config.execution.seed)
        for result in deal_rounds(hand_cards, board_cards, num_players, show, rng):
            console.print(render_round(result))
            console.print()

    estimator = EquityEstimator(config.execution)
    tracker = StatisticsTracker() if plot else None

    try:
        result = estimator.estimate(
            hand_cards,
            board_cards,
            num_players,
            num_games,
            show_progress=progress,
            tracker=tracker,
        )
    except KeyboardInterrupt:
        console.print("\n[yellow]Simulation interrupted.[/yellow]")
        raise typer.Exit(130)

    current = None if hand_cards.is_empty() else current_hand_name(hand_cards, board_cards)
    console.print(render_hand_line(hand_cards, board_cards, current))
    console.print(render_result(result, show_time=show_time))

    if tracker is not None and plot is not None:
        if tracker.history:
            tracker.plot_convergence(save_path=plot)
            console.print(f"Convergence plot saved to: {plot}")
        else:
            console.print("[yellow]Nothing simulated, no plot written.[/yellow]")


@app.command()
def rank(
    cards: str = typer.Argument(..., help="Cards to evaluate, up to 8"),
) -> None:
    """Name the best hand contained in the given cards."""
    card_set = _parse_cards(cards, "cards")
    if card_set.is_empty() or len(card_set) > MAX_EVALUATED_CARDS:
        console.print(f"[red]Error: expected 1-{MAX_EVALUATED_CARDS} cards, found {len(card_set)}[/red]")
        raise typer.Exit(1)

    hand_rank = evaluate(card_set)
    console.print(f"({render_cards(card_set)}) = [cyan]{category_of(hand_rank)}[/cyan]")


@app.command(name="init-config")
def init_config(
    path: Path = typer.Argument(Path("equity.yaml"), help="Where to write the config"),
) -> None:
    """Write the default configuration as YAML."""
    save_config(Config(), path)
    console.print(f"Config written to: {path}")


def main() -> None:
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
