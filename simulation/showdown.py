"""Deal complete sample rounds for inspection."""

from dataclasses import dataclass
from random import Random

from config.settings import MAX_BOARD_CARDS, MAX_HOLE_CARDS
from poker.cardset import CardSet
from poker.hand_evaluator import compare_hands, evaluate, hand_name
from simulation.equity import validate_inputs


@dataclass(frozen=True)
class SeatResult:
    """One player's cards at showdown."""

    cards: CardSet
    hand_rank: int
    winner: bool

    @property
    def hand_name(self) -> str:
        return hand_name(self.hand_rank)


@dataclass(frozen=True)
class RoundResult:
    """A fully dealt round. Seat 0 is the hero."""

    board: CardSet
    seats: tuple[SeatResult, ...]

    @property
    def hero(self) -> SeatResult:
        return self.seats[0]

    @property
    def hero_won(self) -> bool:
        """True when the hero holds the best hand, split pots included."""
        return self.hero.winner


def deal_round(
    hand: CardSet,
    board: CardSet,
    players: int,
    rng: Random | None = None,
) -> RoundResult:
    """Deal one round and mark every seat holding the best hand."""
    validate_inputs(hand, board, players)
    rng = rng or Random()

    deck = ~(hand | board)
    hand = hand | deck.draw(MAX_HOLE_CARDS - len(hand), rng)
    board = board | deck.draw(MAX_BOARD_CARDS - len(board), rng)

    holdings = [hand] + [deck.draw(MAX_HOLE_CARDS, rng) for _ in range(players - 1)]
    ranks = [evaluate(cards | board) for cards in holdings]
    winners = set(compare_hands(ranks))

    seats = tuple(
        SeatResult(cards=cards, hand_rank=rank, winner=i in winners)
        for i, (cards, rank) in enumerate(zip(holdings, ranks))
    )
    return RoundResult(board=board, seats=seats)


def deal_rounds(
    hand: CardSet,
    board: CardSet,
    players: int,
    count: int,
    rng: Random | None = None,
) -> list[RoundResult]:
    rng = rng or Random()
    return [deal_round(hand, board, players, rng) for _ in range(count)]
