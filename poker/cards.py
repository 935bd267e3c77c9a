"""Suit and Rank definitions plus the card notation used on the command line.

Cards are never materialized as objects: a card is the bit index
``suit * 13 + (rank - 2)`` inside a 52-bit integer.

Notation:
    Ranks: '1' or 'A', '2' to '10', 'J' or '11', 'Q' or '12', 'K' or '13'.
    Suits: 'Q' or '♦', 'C' or '♥', 'P' or '♠', 'F' or '♣'.
    Everything is case-insensitive, tokens are concatenated ("4CAQ" is the
    4 of hearts and the ace of diamonds). Commas and whitespace between
    tokens are ignored, so formatted output parses back.
"""

from enum import IntEnum
from typing import Iterator

NUM_CARDS = 52
NUM_RANKS = 13
NUM_SUITS = 4

FULL_MASK = (1 << NUM_CARDS) - 1
RANK_MASK = (1 << NUM_RANKS) - 1


class Suit(IntEnum):
    """Card suits in bit-layout order."""

    DIAMONDS = 0
    HEARTS = 1
    SPADES = 2
    CLUBS = 3

    def __str__(self) -> str:
        return SUIT_SYMBOLS[self.value]


class Rank(IntEnum):
    """Card ranks (2-14, where 14 is Ace)."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self) -> str:
        if self.value <= 10:
            return str(self.value)
        return {11: "J", 12: "Q", 13: "K", 14: "A"}[self.value]


SUIT_SYMBOLS = ("♦", "♥", "♠", "♣")

SUIT_CODES = {
    "♦": Suit.DIAMONDS,
    "Q": Suit.DIAMONDS,
    "♥": Suit.HEARTS,
    "C": Suit.HEARTS,
    "♠": Suit.SPADES,
    "P": Suit.SPADES,
    "♣": Suit.CLUBS,
    "F": Suit.CLUBS,
}

RANK_LETTERS = {
    "J": Rank.JACK,
    "Q": Rank.QUEEN,
    "K": Rank.KING,
    "A": Rank.ACE,
}

SEPARATORS = frozenset(", \t\n")


class CardParseError(ValueError):
    """Base class for malformed card strings."""


class InvalidRankError(CardParseError):
    def __init__(self, char: str) -> None:
        super().__init__(f"found invalid digit '{char}'")
        self.char = char


class InvalidSuitError(CardParseError):
    def __init__(self, char: str) -> None:
        super().__init__(f"found invalid suit '{char}'")
        self.char = char


class RepeatedCardError(CardParseError):
    def __init__(self, index: int) -> None:
        super().__init__(f"card {card_to_string(index)} appears more than once")
        self.index = index


class UnexpectedEndOfInputError(CardParseError):
    def __init__(self) -> None:
        super().__init__("incomplete input for cards")


def card_index(rank: Rank, suit: Suit) -> int:
    """Bit index of a card: suit * 13 + (rank - 2)."""
    return suit * NUM_RANKS + (rank - 2)


def card_rank(index: int) -> Rank:
    return Rank(index % NUM_RANKS + 2)


def card_suit(index: int) -> Suit:
    return Suit(index // NUM_RANKS)


def card_to_string(index: int) -> str:
    """Convert card index to display form, e.g. 8 -> '10♦'."""
    return f"{card_rank(index)}{card_suit(index)}"


def _parse_rank(chars: list[str], pos: int) -> tuple[Rank, int]:
    """Read a rank token starting at pos. Returns (rank, next position)."""
    char = chars[pos].upper()
    if char == "1":
        if pos + 1 >= len(chars):
            raise UnexpectedEndOfInputError()
        # '10'..'13' are ten to king, a bare '1' is the ace
        following = chars[pos + 1]
        if "0" <= following <= "3":
            return Rank(10 + int(following)), pos + 2
        return Rank.ACE, pos + 1
    if "2" <= char <= "9":
        return Rank(int(char)), pos + 1
    if char in RANK_LETTERS:
        return RANK_LETTERS[char], pos + 1
    raise InvalidRankError(char)


def _parse_suit(chars: list[str], pos: int) -> Suit:
    if pos >= len(chars):
        raise UnexpectedEndOfInputError()
    char = chars[pos].upper()
    if char not in SUIT_CODES:
        raise InvalidSuitError(char)
    return SUIT_CODES[char]


def parse_card_bits(text: str) -> int:
    """Parse a card string into a 52-bit mask.

    Args:
        text: Concatenated card tokens, e.g. "10♠J♠" or "4caq"

    Returns:
        Bit mask with one bit per parsed card

    Raises:
        CardParseError: On invalid rank or suit, truncated input or a
            card given twice
    """
    chars = list(text)
    bits = 0
    pos = 0
    while pos < len(chars):
        if chars[pos] in SEPARATORS:
            pos += 1
            continue
        rank, pos = _parse_rank(chars, pos)
        suit = _parse_suit(chars, pos)
        pos += 1

        index = card_index(rank, suit)
        if bits >> index & 1:
            raise RepeatedCardError(index)
        bits |= 1 << index
    return bits


def iter_card_indices(bits: int) -> Iterator[int]:
    """Yield set bit indices from low to high."""
    while bits:
        low = bits & -bits
        yield low.bit_length() - 1
        bits ^= low


def format_card_bits(bits: int) -> str:
    """Format a mask as comma-joined cards, ordered by rank then suit."""
    tokens = []
    for rank_offset in range(NUM_RANKS):
        for suit in Suit:
            index = suit * NUM_RANKS + rank_offset
            if bits >> index & 1:
                tokens.append(card_to_string(index))
    return ",".join(tokens)
