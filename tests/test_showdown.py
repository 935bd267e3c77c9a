"""Tests for sample round dealing (simulation/showdown.py)."""

from random import Random

import pytest

from poker.cardset import CardSet
from poker.hand_evaluator import evaluate
from simulation.equity import OverlappingCardsError
from simulation.showdown import deal_round, deal_rounds
from tests.helpers.card_utils import make_cards


class TestDealRound:
    """Test a single dealt round."""

    def test_every_seat_gets_two_cards(self, rng):
        result = deal_round(make_cards(["A♠"]), CardSet(), 6, rng)

        assert len(result.seats) == 6
        assert all(len(seat.cards) == 2 for seat in result.seats)
        assert len(result.board) == 5

    def test_known_cards_are_kept(self, rng):
        hand = make_cards(["A♠", "K♠"])
        board = make_cards(["2♦", "3♦", "4♦"])
        result = deal_round(hand, board, 4, rng)

        assert result.hero.cards == hand
        assert board & result.board == board

    def test_no_card_dealt_twice(self, rng):
        result = deal_round(CardSet(), CardSet(), 8, rng)

        seen = result.board
        for seat in result.seats:
            assert (seen & seat.cards).is_empty()
            seen = seen | seat.cards
        assert len(seen) == 5 + 16

    def test_winners_hold_the_best_rank(self, rng):
        for _ in range(50):
            result = deal_round(make_cards(["Q♥", "J♥"]), CardSet(), 5, rng)
            best = max(seat.hand_rank for seat in result.seats)
            for seat in result.seats:
                assert seat.winner == (seat.hand_rank == best)
                assert seat.hand_rank == evaluate(seat.cards | result.board)

    def test_board_split_marks_everyone(self, rng):
        board = make_cards(["A♠", "K♠", "Q♠", "J♠", "10♠"])
        result = deal_round(make_cards(["2♥", "3♦"]), board, 4, rng)

        assert result.hero_won
        assert all(seat.winner for seat in result.seats)
        assert result.hero.hand_name == "Royal Flush"

    def test_invalid_inputs(self, rng):
        with pytest.raises(OverlappingCardsError):
            deal_round(make_cards(["A♠"]), make_cards(["A♠"]), 4, rng)


class TestDealRounds:
    """Test repeated rounds."""

    def test_count(self):
        rounds = deal_rounds(make_cards(["A♠", "A♥"]), CardSet(), 3, 4, Random(1))
        assert len(rounds) == 4

    def test_reproducible(self):
        first = deal_rounds(make_cards(["A♠", "A♥"]), CardSet(), 3, 4, Random(1))
        second = deal_rounds(make_cards(["A♠", "A♥"]), CardSet(), 3, 4, Random(1))
        assert [r.board for r in first] == [r.board for r in second]
