"""Configuration settings for equity simulation."""

from dataclasses import dataclass, field
from pathlib import Path

import yaml

# Table limits
MAX_HOLE_CARDS = 2
MAX_BOARD_CARDS = 5
MIN_PLAYERS = 2
MAX_PLAYERS = 8
MAX_EVALUATED_CARDS = 8

DEFAULT_PLAYERS = 4
DEFAULT_GAMES = 1_000_000

EXECUTORS = ("process", "thread")


@dataclass
class SimulationConfig:
    """What to simulate."""

    players: int = DEFAULT_PLAYERS
    games: int = DEFAULT_GAMES


@dataclass
class ExecutionConfig:
    """How trials are spread over workers."""

    workers: int | None = None  # None = one per CPU
    executor: str = "process"  # process or thread
    chunk_size: int = 10_000
    seed: int | None = None


@dataclass
class Config:
    """Complete configuration."""

    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    execution: ExecutionConfig = field(default_factory=ExecutionConfig)

    def validate(self) -> None:
        """Raise ValueError on out-of-range settings."""
        if not MIN_PLAYERS <= self.simulation.players <= MAX_PLAYERS:
            raise ValueError(
                f"players must be between {MIN_PLAYERS} and {MAX_PLAYERS}, "
                f"got {self.simulation.players}"
            )
        if self.simulation.games <= 0:
            raise ValueError(f"games must be positive, got {self.simulation.games}")
        if self.execution.workers is not None and self.execution.workers <= 0:
            raise ValueError(f"workers must be positive, got {self.execution.workers}")
        if self.execution.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {self.execution.chunk_size}")
        if self.execution.executor not in EXECUTORS:
            raise ValueError(
                f"executor must be one of {', '.join(EXECUTORS)}, got {self.execution.executor!r}"
            )


def load_config(path: str | Path) -> Config:
    """Load configuration from YAML file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    config = Config()

    if "simulation" in data:
        config.simulation = SimulationConfig(**data["simulation"])
    if "execution" in data:
        config.execution = ExecutionConfig(**data["execution"])

    return config


def save_config(config: Config, path: str | Path) -> None:
    """Save configuration to YAML file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "simulation": {
            "players": config.simulation.players,
            "games": config.simulation.games,
        },
        "execution": {
            "workers": config.execution.workers,
            "executor": config.execution.executor,
            "chunk_size": config.execution.chunk_size,
            "seed": config.execution.seed,
        },
    }

    with open(path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)

