"""Monte-Carlo estimation of Texas Hold'em winning probabilities.

Each trial completes the board and deals every opponent two cards from a
private copy of the unknown cards, then compares hand ranks. Trials are
split into fixed-size chunks, each seeded from one master generator, and
the chunks are summed after running on a worker pool.
"""

import logging
import os
import time
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from enum import IntEnum
from random import Random
from typing import Iterator

from tqdm import tqdm

from config.settings import (
    MAX_BOARD_CARDS,
    MAX_HOLE_CARDS,
    MAX_PLAYERS,
    MIN_PLAYERS,
    ExecutionConfig,
)
from poker.cardset import CardSet
from poker.hand_evaluator import evaluate, hand_name
from simulation.statistics import EquityResult, StatisticsTracker, TrialTally

logger = logging.getLogger(__name__)


class SimulationInputError(ValueError):
    """Base class for hand, board and player count problems."""


class InvalidHandError(SimulationInputError):
    def __init__(self, hand: CardSet) -> None:
        super().__init__(f"hand has {len(hand)} cards, maximum is {MAX_HOLE_CARDS}")
        self.hand = hand


class InvalidBoardError(SimulationInputError):
    def __init__(self, board: CardSet) -> None:
        super().__init__(f"table has {len(board)} cards, maximum is {MAX_BOARD_CARDS}")
        self.board = board


class WrongNumberOfPlayersError(SimulationInputError):
    def __init__(self, players: int) -> None:
        super().__init__(f"required {MIN_PLAYERS}-{MAX_PLAYERS} players, found {players}")
        self.players = players


class OverlappingCardsError(SimulationInputError):
    def __init__(self, shared: CardSet) -> None:
        super().__init__(f"table and hand are sharing the following cards: {shared}")
        self.shared = shared


class InvalidTrialCountError(SimulationInputError):
    def __init__(self, trials: int) -> None:
        super().__init__(f"number of games must be positive, got {trials}")
        self.trials = trials


class TrialOutcome(IntEnum):
    """Showdown result for the hero in one trial."""

    LOSS = 0
    TIE = 1
    WIN = 2


def validate_inputs(
    hand: CardSet,
    board: CardSet,
    players: int,
    trials: int | None = None,
) -> None:
    """Check a simulation request before any work starts.

    Raises:
        SimulationInputError: Describing the first problem found
    """
    if not MIN_PLAYERS <= players <= MAX_PLAYERS:
        raise WrongNumberOfPlayersError(players)
    if len(hand) > MAX_HOLE_CARDS:
        raise InvalidHandError(hand)
    if len(board) > MAX_BOARD_CARDS:
        raise InvalidBoardError(board)
    shared = hand & board
    if not shared.is_empty():
        raise OverlappingCardsError(shared)
    if trials is not None and trials <= 0:
        raise InvalidTrialCountError(trials)


def run_trial(
    deck: CardSet,
    hand: CardSet,
    board: CardSet,
    opponents: int,
    rng: Random,
) -> TrialOutcome:
    """Simulate one round from the given position.

    Args:
        deck: Unknown cards; left untouched, the trial deals from a copy
        hand: Hero's known hole cards, missing ones are drawn
        board: Known community cards, missing ones are drawn
        opponents: Number of opponents, each dealt two cards
        rng: Random source for this trial

    Returns:
        LOSS as soon as an opponent beats the hero, TIE if one matched
        the hero's hand, WIN otherwise
    """
    deck = deck.copy()
    board = board | deck.draw(MAX_BOARD_CARDS - len(board), rng)
    mine = evaluate(hand | deck.draw(MAX_HOLE_CARDS - len(hand), rng) | board)

    outcome = TrialOutcome.WIN
    for _ in range(opponents):
        theirs = evaluate(deck.draw(MAX_HOLE_CARDS, rng) | board)
        if theirs > mine:
            return TrialOutcome.LOSS
        if theirs == mine:
            outcome = TrialOutcome.TIE
    return outcome


def simulate(
    hand: CardSet,
    board: CardSet,
    players: int,
    trials: int,
    rng: Random,
) -> TrialTally:
    """Run trials serially and tally the outcomes."""
    deck = ~(hand | board)
    opponents = players - 1
    wins = 0
    ties = 0
    for _ in range(trials):
        outcome = run_trial(deck, hand, board, opponents, rng)
        if outcome != TrialOutcome.LOSS:
            wins += 1
            if outcome == TrialOutcome.TIE:
                ties += 1
    return TrialTally(trials=trials, wins=wins, ties=ties)


@dataclass(frozen=True)
class ChunkTask:
    """A batch of trials with its own seed; picklable for process pools."""

    hand: CardSet
    board: CardSet
    players: int
    trials: int
    seed: int


def run_chunk(task: ChunkTask) -> TrialTally:
    """Worker entry point."""
    return simulate(task.hand, task.board, task.players, task.trials, Random(task.seed))


def plan_chunks(
    hand: CardSet,
    board: CardSet,
    players: int,
    trials: int,
    chunk_size: int,
    seed: int | None = None,
) -> list[ChunkTask]:
    """Split trials into chunks, seeding each from one master generator.

    The plan depends only on the arguments, so a fixed seed reproduces the
    same total whatever the worker count.
    """
    master = Random(seed)
    tasks = []
    for start in range(0, trials, chunk_size):
        tasks.append(
            ChunkTask(
                hand=hand,
                board=board,
                players=players,
                trials=min(chunk_size, trials - start),
                seed=master.getrandbits(64),
            )
        )
    return tasks


def current_hand_name(hand: CardSet, board: CardSet) -> str:
    """Name of the best hand made so far from hand and board."""
    return hand_name(evaluate(hand | board))


class EquityEstimator:
    """Estimate the hero's probability of not losing a round."""

    def __init__(self, config: ExecutionConfig | None = None) -> None:
        self.config = config or ExecutionConfig()

    @property
    def workers(self) -> int:
        return self.config.workers or os.cpu_count() or 1

    def estimate(
        self,
        hand: CardSet,
        board: CardSet,
        players: int,
        trials: int,
        show_progress: bool = False,
        tracker: StatisticsTracker | None = None,
    ) -> EquityResult:
        """Estimate equity from the known cards.

        Args:
            hand: Hero's hole cards (0-2)
            board: Community cards (0-5), disjoint from hand
            players: Players at the table, hero included
            trials: Number of simulated rounds
            show_progress: Show a progress bar over chunks
            tracker: Receives each chunk tally as it completes

        Returns:
            EquityResult; without hole cards every player is symmetric and
            the result is the uniform 1/players without simulating

        Raises:
            SimulationInputError: If the inputs are invalid
        """
        validate_inputs(hand, board, players, trials)
        start = time.perf_counter()

        if hand.is_empty():
            logger.info("No hand, equal winning probability among %d players", players)
            return EquityResult(
                players=players,
                trials=trials,
                wins=trials // players,
                simulated=False,
                elapsed=time.perf_counter() - start,
            )

        tasks = plan_chunks(
            hand, board, players, trials, self.config.chunk_size, self.config.seed
        )
        total = TrialTally()
        for tally in self._run_tasks(tasks, show_progress):
            total += tally
            if tracker is not None:
                tracker.add_chunk(tally)

        elapsed = time.perf_counter() - start
        logger.debug("Simulated %d trials in %.3fs", total.trials, elapsed)

        return EquityResult(
            players=players,
            trials=total.trials,
            wins=total.wins,
            ties=total.ties,
            elapsed=elapsed,
        )

    def _make_executor(self, workers: int) -> Executor:
        if self.config.executor == "thread":
            return ThreadPoolExecutor(max_workers=workers)
        return ProcessPoolExecutor(max_workers=workers)

    def _run_tasks(self, tasks: list[ChunkTask], show_progress: bool) -> Iterator[TrialTally]:
        """Yield chunk tallies in completion order."""
        workers = min(self.workers, len(tasks))
        logger.debug(
            "Running %d chunks on %d %s worker(s)", len(tasks), workers, self.config.executor
        )

        with tqdm(total=len(tasks), desc="Simulating", unit="chunk", disable=not show_progress) as progress:
            if workers <= 1:
                for task in tasks:
                    yield run_chunk(task)
                    progress.update(1)
                return

            with self._make_executor(workers) as executor:
                futures = [executor.submit(run_chunk, task) for task in tasks]
                try:
                    for future in as_completed(futures):
                        yield future.result()
                        progress.update(1)
                except BaseException:
                    for future in futures:
                        future.cancel()
                    raise
