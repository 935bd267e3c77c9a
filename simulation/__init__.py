"""Monte-Carlo equity simulation."""

from simulation.equity import EquityEstimator, SimulationInputError, simulate, validate_inputs
from simulation.showdown import RoundResult, deal_round, deal_rounds
from simulation.statistics import EquityResult, StatisticsTracker, TrialTally

__all__ = [
    "EquityEstimator",
    "EquityResult",
    "RoundResult",
    "SimulationInputError",
    "StatisticsTracker",
    "TrialTally",
    "deal_round",
    "deal_rounds",
    "simulate",
    "validate_inputs",
]
