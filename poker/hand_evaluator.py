"""Hand evaluation for Texas Hold'em poker.

A hand rank is a single integer: the category sits above ``CATEGORY_SHIFT``
and the tiebreak below it, so plain integer comparison orders hands.

Tiebreak layouts (rank offsets 0=2 .. 12=A, masks are 13-bit rank masks):
    Royal / Straight flush:  top rank of the run
    Four of a kind:          (quad + 1) << 13 | kicker rank
    Full house:              (trips + 1) << 13 | pair rank
    Flush:                   mask of the 5 highest flush ranks
    Straight:                top rank of the run (wheel tops at 5)
    Three of a kind:         (trips + 1) << 13 | mask of 2 kickers
    Two pair:                mask of both pairs << 6 | kicker rank
    Pair:                    (pair + 1) << 13 | mask of 3 kickers
    High card:               mask of the 5 highest ranks
"""

from enum import IntEnum

from config.settings import MAX_EVALUATED_CARDS
from poker.cards import NUM_RANKS, RANK_MASK, Rank
from poker.cardset import CardSet

CATEGORY_SHIFT = 20
MAX_TIEBREAK = (1 << CATEGORY_SHIFT) - 1

_ACE = Rank.ACE - 2


class HandCategory(IntEnum):
    """Poker hand categories from lowest to highest."""

    HIGH_CARD = 0
    PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_FLUSH = 9

    def __str__(self) -> str:
        names = {
            0: "High Card",
            1: "Pair",
            2: "Two Pair",
            3: "Three of a Kind",
            4: "Straight",
            5: "Flush",
            6: "Full House",
            7: "Four of a Kind",
            8: "Straight Flush",
            9: "Royal Flush",
        }
        return names[self.value]


def make_hand_rank(category: HandCategory, tiebreak: int = 0) -> int:
    """Pack a category and tiebreak into one comparable integer."""
    if not 0 <= tiebreak <= MAX_TIEBREAK:
        raise ValueError(f"Tiebreak does not fit in {CATEGORY_SHIFT} bits: {tiebreak}")
    return category << CATEGORY_SHIFT | tiebreak


def category_of(hand_rank: int) -> HandCategory:
    return HandCategory(hand_rank >> CATEGORY_SHIFT)


def tiebreak_of(hand_rank: int) -> int:
    return hand_rank & MAX_TIEBREAK


def hand_name(hand_rank: int) -> str:
    return str(category_of(hand_rank))


def msb(bits: int) -> int:
    """Position of the most significant set bit of a rank mask, 0 if empty."""
    assert bits <= RANK_MASK
    return bits.bit_length() - 1 if bits else 0


def keep_top_bits(bits: int, n: int) -> int:
    """Keep only the n most significant set bits of a rank mask."""
    while bits.bit_count() > n:
        bits &= bits - 1
    return bits


def straight_bits(ranks: int) -> int:
    """Mask of the top ranks of every 5-card run in a rank mask.

    The ace is also fed in below the deuce so A-2-3-4-5 survives at the five.
    """
    shifted = (ranks << 1) | (ranks >> _ACE)
    return ranks & shifted & (shifted << 1) & (shifted << 2) & (shifted << 3)


def _rank_bits(bits: int) -> int:
    """Evaluate a raw 52-bit card mask."""
    s1 = bits & RANK_MASK
    s2 = (bits >> NUM_RANKS) & RANK_MASK
    s3 = (bits >> 2 * NUM_RANKS) & RANK_MASK
    s4 = (bits >> 3 * NUM_RANKS) & RANK_MASK

    flush_ranks = max((s1, s2, s3, s4), key=int.bit_count)
    is_flush = flush_ranks.bit_count() >= 5

    if is_flush:
        runs = straight_bits(flush_ranks)
        if runs:
            top = msb(runs)
            if top == _ACE:
                return HandCategory.ROYAL_FLUSH << CATEGORY_SHIFT | top
            return HandCategory.STRAIGHT_FLUSH << CATEGORY_SHIFT | top

    numbers = s1 | s2 | s3 | s4

    quads = s1 & s2 & s3 & s4
    if quads:
        quad = msb(quads)
        kicker = msb(numbers & ~(1 << quad))
        return HandCategory.FOUR_OF_A_KIND << CATEGORY_SHIFT | (quad + 1) << 13 | kicker

    trips = (s1 & s2 & s3) | (s1 & s2 & s4) | (s1 & s3 & s4) | (s2 & s3 & s4)
    top_trips = msb(trips)
    top_trips_bit = trips & (1 << top_trips)
    # a second set of trips counts as the pair of a full house
    pairs = ((s1 & s2) | (s1 & s3) | (s1 & s4) | (s2 & s3) | (s2 & s4) | (s3 & s4)) & ~top_trips_bit

    if top_trips_bit and pairs:
        return HandCategory.FULL_HOUSE << CATEGORY_SHIFT | (top_trips + 1) << 13 | msb(pairs)

    if is_flush:
        return HandCategory.FLUSH << CATEGORY_SHIFT | keep_top_bits(flush_ranks, 5)

    runs = straight_bits(numbers)
    if runs:
        return HandCategory.STRAIGHT << CATEGORY_SHIFT | msb(runs)

    if top_trips_bit:
        kickers = keep_top_bits(numbers & ~top_trips_bit, 2)
        return HandCategory.THREE_OF_A_KIND << CATEGORY_SHIFT | (top_trips + 1) << 13 | kickers

    if pairs.bit_count() >= 2:
        top_pairs = keep_top_bits(pairs, 2)
        kicker = msb(numbers & ~top_pairs)
        return HandCategory.TWO_PAIR << CATEGORY_SHIFT | top_pairs << 6 | kicker

    if pairs:
        kickers = keep_top_bits(numbers & ~pairs, 3)
        return HandCategory.PAIR << CATEGORY_SHIFT | (msb(pairs) + 1) << 13 | kickers

    return HandCategory.HIGH_CARD << CATEGORY_SHIFT | keep_top_bits(numbers, 5)


def evaluate(cards: CardSet) -> int:
    """Rank the best five-card hand contained in up to 8 cards.

    Args:
        cards: Hole cards plus board

    Returns:
        Hand rank; a larger value wins at showdown, equal values split
    """
    assert len(cards) <= MAX_EVALUATED_CARDS, f"Cannot evaluate {len(cards)} cards"
    return _rank_bits(cards.bits)


def compare_hands(hand_ranks: list[int]) -> list[int]:
    """Return indices of the winning hands (several on a split pot)."""
    if not hand_ranks:
        return []

    best = max(hand_ranks)
    return [i for i, rank in enumerate(hand_ranks) if rank == best]
