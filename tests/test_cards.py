"""Tests for card notation parsing and formatting (poker/cards.py)."""

from itertools import combinations
from random import Random

import pytest

from poker.cards import (
    InvalidRankError,
    InvalidSuitError,
    Rank,
    RepeatedCardError,
    Suit,
    UnexpectedEndOfInputError,
    card_index,
    card_rank,
    card_suit,
    card_to_string,
)
from poker.cardset import CardSet

SUITS = ["♦", "♥", "♠", "♣"]
RANKS = ["2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K", "A"]


class TestCardEncoding:
    """Test card index layout."""

    @pytest.mark.parametrize(
        "rank,suit,expected_index",
        [
            (Rank.TWO, Suit.DIAMONDS, 0),
            (Rank.ACE, Suit.DIAMONDS, 12),
            (Rank.TWO, Suit.HEARTS, 13),
            (Rank.TEN, Suit.SPADES, 34),
            (Rank.ACE, Suit.CLUBS, 51),
        ],
    )
    def test_card_index(self, rank, suit, expected_index):
        assert card_index(rank, suit) == expected_index
        assert card_rank(expected_index) == rank
        assert card_suit(expected_index) == suit

    def test_card_to_string(self):
        assert card_to_string(0) == "2♦"
        assert card_to_string(8) == "10♦"
        assert card_to_string(51) == "A♣"


class TestParse:
    """Test parsing card strings."""

    @pytest.mark.parametrize("suit_offset,suit", enumerate(SUITS))
    def test_every_symbol_card(self, suit_offset, suit):
        for rank_offset, rank in enumerate(RANKS):
            expected = CardSet.one(suit_offset * 13 + rank_offset)
            assert CardSet.parse(f"{rank}{suit}") == expected

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("AQ", "A♦"),
            ("1Q", "A♦"),
            ("aq", "A♦"),
            ("4C", "4♥"),
            ("10P", "10♠"),
            ("11F", "J♣"),
            ("12f", "Q♣"),
            ("13c", "K♥"),
            ("jp", "J♠"),
            ("K♠", "K♠"),
        ],
    )
    def test_letter_codes(self, text, expected):
        assert CardSet.parse(text) == CardSet.parse(expected)

    def test_parse_multiple(self):
        cards = CardSet.parse("8♠2♣Q♣")
        assert cards == CardSet.parse("8♠") | CardSet.parse("2♣") | CardSet.parse("Q♣")
        assert cards.count() == 3

    def test_two_card_string(self):
        assert CardSet.parse("4CAQ") == CardSet.parse("4♥") | CardSet.parse("A♦")

    def test_bare_one_is_ace(self):
        assert CardSet.parse("1P10P") == CardSet.parse("A♠") | CardSet.parse("10♠")

    def test_empty_string(self):
        assert CardSet.parse("").is_empty()

    def test_separators_ignored(self):
        assert CardSet.parse("A♠, K♠") == CardSet.parse("A♠K♠")

    @pytest.mark.parametrize("text,char", [("X♠", "X"), ("0♠", "0"), ("A♠B♥", "B")])
    def test_invalid_rank(self, text, char):
        with pytest.raises(InvalidRankError) as exc_info:
            CardSet.parse(text)
        assert exc_info.value.char == char

    @pytest.mark.parametrize("text,char", [("AX", "X"), ("10H", "H"), ("2S", "S")])
    def test_invalid_suit(self, text, char):
        with pytest.raises(InvalidSuitError) as exc_info:
            CardSet.parse(text)
        assert exc_info.value.char == char

    @pytest.mark.parametrize("text", ["A", "10", "1", "A♠K"])
    def test_truncated_input(self, text):
        with pytest.raises(UnexpectedEndOfInputError):
            CardSet.parse(text)

    def test_repeated_card(self):
        with pytest.raises(RepeatedCardError) as exc_info:
            CardSet.parse("A♠K♥1P")
        assert exc_info.value.index == card_index(Rank.ACE, Suit.SPADES)

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            CardSet.parse("ZZ")


class TestFormat:
    """Test display formatting."""

    def test_rank_then_suit_order(self):
        cards = CardSet.parse("A♣2♥2♦10♠")
        assert str(cards) == "2♦,2♥,10♠,A♣"

    def test_empty(self):
        assert str(CardSet()) == ""

    def test_repr(self):
        assert repr(CardSet.parse("K♥")) == "CardSet('K♥')"

    def test_round_trip_single_cards(self):
        for index in range(52):
            cards = CardSet.one(index)
            assert CardSet.parse(str(cards)) == cards

    def test_round_trip_random_sets(self):
        rng = Random(11)
        for size in (2, 5, 7, 13, 52):
            cards = CardSet.full().draw(size, rng)
            assert CardSet.parse(str(cards)) == cards

    def test_round_trip_pairs_of_tens(self):
        tens = [CardSet.parse(f"10{suit}") for suit in SUITS]
        for a, b in combinations(tens, 2):
            assert CardSet.parse(str(a | b)) == a | b
