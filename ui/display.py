"""Display utilities for terminal equity reports."""

from rich.markup import escape
from rich.table import Table
from rich.text import Text

from poker.cards import Suit, card_rank, card_suit, card_to_string
from poker.cardset import CardSet
from simulation.showdown import RoundResult
from simulation.statistics import EquityResult


SUIT_COLORS = {
    Suit.HEARTS: "red",
    Suit.DIAMONDS: "red",
    Suit.CLUBS: "white",
    Suit.SPADES: "white",
}


def render_card(index: int) -> str:
    """Render a single card with color (red for hearts/diamonds)."""
    color = SUIT_COLORS[card_suit(index)]
    return f"[{color}]{card_to_string(index)}[/{color}]"


def render_cards(cards: CardSet) -> str:
    """Render a set in display order, or a dash when empty."""
    if cards.is_empty():
        return "[dim]-[/dim]"
    ordered = sorted(cards, key=lambda index: (card_rank(index), card_suit(index)))
    return ",".join(render_card(index) for index in ordered)


def render_round(result: RoundResult) -> Table:
    """Render one dealt round as a seat table."""
    outcome = "[bold green]WON[/bold green]" if result.hero_won else "[bold red]LOST[/bold red]"
    table = Table(title=f"{outcome} ({render_cards(result.board)})", title_justify="left")
    table.add_column("Seat", style="dim")
    table.add_column("Cards")
    table.add_column("Hand", style="cyan")
    table.add_column("", style="bold yellow")

    for seat_number, seat in enumerate(result.seats):
        label = "You" if seat_number == 0 else f"P{seat_number + 1}"
        table.add_row(
            label,
            render_cards(seat.cards),
            seat.hand_name,
            escape("[W]") if seat.winner else "",
        )
    return table


def render_hand_line(hand: CardSet, board: CardSet, current_hand: str | None) -> Text:
    """Describe the known cards and the hand made so far."""
    if hand.is_empty():
        return Text("No hand, equal winning probability among players.")
    return Text.from_markup(f"({render_cards(hand)}) ({render_cards(board)}) = [cyan]{current_hand}[/cyan]")


def render_result(result: EquityResult, show_time: bool = False) -> Table:
    """Render the equity summary."""
    info = Table(show_header=False, box=None, padding=(0, 1))
    info.add_column("Label", style="dim")
    info.add_column("Value", style="bold")

    info.add_row(
        "Equity",
        f"{result.wins:,}/{result.trials:,} = [green]{result.equity * 100:.2f}%[/green]",
    )
    if result.simulated:
        low, high = result.confidence_interval()
        info.add_row("95% interval", f"{low * 100:.2f}% - {high * 100:.2f}%")
        info.add_row("Ties", f"{result.ties:,} ({result.tie_rate * 100:.2f}%)")
    info.add_row("Players", str(result.players))

    if show_time and result.elapsed is not None:
        info.add_row("Simulated in", f"{result.elapsed:.3f}s")

    return info
