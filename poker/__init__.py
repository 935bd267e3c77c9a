"""Card sets and hand evaluation for Texas Hold'em."""

from poker.cards import CardParseError, Rank, Suit
from poker.cardset import CardSet
from poker.hand_evaluator import HandCategory, category_of, evaluate, hand_name

__all__ = [
    "CardParseError",
    "CardSet",
    "HandCategory",
    "Rank",
    "Suit",
    "category_of",
    "evaluate",
    "hand_name",
]
