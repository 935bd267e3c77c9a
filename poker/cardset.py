"""Bitset of playing cards."""

from random import Random
from typing import Iterable, Iterator

from poker.cards import (
    FULL_MASK,
    NUM_CARDS,
    format_card_bits,
    iter_card_indices,
    parse_card_bits,
)

_default_rng = Random()


class CardSet:
    """A set of up to 52 cards stored as a bit mask.

    Bit i is set when card i (suit * 13 + rank - 2) is present. Set algebra
    returns new sets; only ``draw`` changes the receiver, which models
    dealing from a shrinking deck.
    """

    __slots__ = ("_bits",)

    def __init__(self, bits: int = 0) -> None:
        if bits < 0 or bits & ~FULL_MASK:
            raise ValueError(f"Card bits outside the 52-card universe: {bits:#x}")
        self._bits = bits

    @classmethod
    def empty(cls) -> "CardSet":
        return cls(0)

    @classmethod
    def full(cls) -> "CardSet":
        return cls(FULL_MASK)

    @classmethod
    def one(cls, index: int) -> "CardSet":
        """Set holding only the card at index."""
        if not 0 <= index < NUM_CARDS:
            raise ValueError(f"Card index out of range: {index}")
        return cls(1 << index)

    @classmethod
    def from_indices(cls, indices: Iterable[int]) -> "CardSet":
        cards = cls()
        for index in indices:
            cards |= cls.one(index)
        return cards

    @classmethod
    def parse(cls, text: str) -> "CardSet":
        """Parse card notation like '10♠J♠' or 'aq4c'."""
        return cls(parse_card_bits(text))

    @property
    def bits(self) -> int:
        return self._bits

    def copy(self) -> "CardSet":
        return CardSet(self._bits)

    def union(self, other: "CardSet") -> "CardSet":
        return CardSet(self._bits | other._bits)

    def intersect(self, other: "CardSet") -> "CardSet":
        return CardSet(self._bits & other._bits)

    def complement(self) -> "CardSet":
        """All cards of the 52-card deck not in this set."""
        return CardSet(~self._bits & FULL_MASK)

    def count(self) -> int:
        return self._bits.bit_count()

    def is_empty(self) -> bool:
        return self._bits == 0

    def draw(self, n: int, rng: Random | None = None) -> "CardSet":
        """Remove up to n random cards from this set and return them.

        Draws saturate: asking for more cards than remain returns all of
        them and leaves this set empty.

        Args:
            n: Number of cards to draw
            rng: Random source, the module default when omitted

        Returns:
            The drawn cards
        """
        randrange = (rng or _default_rng).randrange
        cards = self._bits
        while n > 0 and cards:
            bit = 1 << randrange(NUM_CARDS)
            if cards & bit:
                cards ^= bit
                n -= 1
        drawn = self._bits & ~cards
        self._bits = cards
        return CardSet(drawn)

    __or__ = union
    __and__ = intersect
    __invert__ = complement

    def __sub__(self, other: "CardSet") -> "CardSet":
        return CardSet(self._bits & ~other._bits)

    def __len__(self) -> int:
        return self._bits.bit_count()

    def __iter__(self) -> Iterator[int]:
        return iter_card_indices(self._bits)

    def __contains__(self, index: int) -> bool:
        return 0 <= index < NUM_CARDS and bool(self._bits >> index & 1)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CardSet):
            return NotImplemented
        return self._bits == other._bits

    def __hash__(self) -> int:
        return hash(self._bits)

    def __str__(self) -> str:
        return format_card_bits(self._bits)

    def __repr__(self) -> str:
        return f"CardSet({format_card_bits(self._bits)!r})"

    def __reduce__(self) -> tuple:
        return (CardSet, (self._bits,))
