"""Trial tallies, equity results and convergence tracking."""

import logging
import math
from dataclasses import dataclass, field
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TrialTally:
    """Outcome counts for a batch of trials.

    ``wins`` counts trials where no opponent beat the hero (ties included),
    ``ties`` the subset of those where an opponent matched the hero's hand.
    """

    trials: int = 0
    wins: int = 0
    ties: int = 0

    def __add__(self, other: "TrialTally") -> "TrialTally":
        return TrialTally(
            trials=self.trials + other.trials,
            wins=self.wins + other.wins,
            ties=self.ties + other.ties,
        )


@dataclass
class EquityResult:
    """Result of an equity estimate."""

    players: int
    trials: int
    wins: int
    ties: int = 0
    simulated: bool = True  # False when equity is the uniform 1/players
    elapsed: float | None = None  # Seconds, when timed

    @property
    def equity(self) -> float:
        """Probability of not losing the round."""
        if not self.simulated:
            return 1.0 / self.players
        return self.wins / self.trials if self.trials > 0 else 0.0

    @property
    def outright_wins(self) -> int:
        return self.wins - self.ties

    @property
    def losses(self) -> int:
        return self.trials - self.wins

    @property
    def tie_rate(self) -> float:
        return self.ties / self.trials if self.trials > 0 and self.simulated else 0.0

    @property
    def standard_error(self) -> float:
        """Binomial standard error of the equity estimate."""
        if not self.simulated or self.trials == 0:
            return 0.0
        p = self.equity
        return math.sqrt(p * (1.0 - p) / self.trials)

    def confidence_interval(self, z: float = 1.96) -> tuple[float, float]:
        """Normal-approximation interval around the estimate, clamped to [0, 1]."""
        margin = z * self.standard_error
        return max(0.0, self.equity - margin), min(1.0, self.equity + margin)


@dataclass
class StatisticsTracker:
    """Track how the estimate converges as chunks complete."""

    history: list[TrialTally] = field(default_factory=list)

    def add_chunk(self, tally: TrialTally) -> None:
        """Record a finished chunk."""
        self.history.append(tally)

    @property
    def total(self) -> TrialTally:
        return sum(self.history, TrialTally())

    def running_equity(self) -> tuple[np.ndarray, np.ndarray]:
        """Cumulative trial counts and equity after each recorded chunk."""
        trials = np.cumsum([t.trials for t in self.history], dtype=np.int64)
        wins = np.cumsum([t.wins for t in self.history], dtype=np.int64)
        equity = np.divide(
            wins, trials, out=np.zeros(len(trials), dtype=np.float64), where=trials > 0
        )
        return trials, equity

    def plot_convergence(
        self,
        save_path: str | Path | None = None,
        show: bool = False,
        z: float = 1.96,
    ) -> None:
        """Plot running equity with a confidence band."""
        if not self.history:
            logger.warning("No history to plot")
            return

        trials, equity = self.running_equity()
        margin = z * np.sqrt(equity * (1.0 - equity) / np.maximum(trials, 1))

        fig, ax = plt.subplots(figsize=(10, 5))

        ax.plot(trials, equity, "b-", label="Running equity", linewidth=2)
        ax.fill_between(
            trials,
            np.clip(equity - margin, 0.0, 1.0),
            np.clip(equity + margin, 0.0, 1.0),
            alpha=0.2,
            color="blue",
            label=f"±{z:g} SE",
        )
        ax.axhline(y=equity[-1], color="black", linestyle="--", linewidth=0.8)

        ax.set_xlabel("Trials")
        ax.set_ylabel("Equity (win or tie)")
        ax.set_title("Equity Estimate Convergence")
        ax.legend(loc="upper right")
        ax.grid(True, alpha=0.3)

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches="tight")
        elif show:
            plt.show()

        plt.close(fig)

    def get_summary(self) -> dict:
        """Get summary statistics."""
        if not self.history:
            return {}

        total = self.total
        _, equity = self.running_equity()

        return {
            "chunks": len(self.history),
            "trials": total.trials,
            "wins": total.wins,
            "ties": total.ties,
            "equity": float(equity[-1]),
            "equity_min": float(equity.min()),
            "equity_max": float(equity.max()),
        }
