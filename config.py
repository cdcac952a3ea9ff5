"""Configuration management with environment variable support."""

import os
from dataclasses import dataclass, field


def _env_flag(name: str, default: str) -> bool:
    """Read a true/false environment variable."""
    return os.getenv(name, default).lower() == "true"


def _parse_seed() -> int | None:
    """Parse TRAINER_SEED; unset or blank means an unseeded session."""
    seed = os.getenv("TRAINER_SEED", "").strip()
    return int(seed) if seed else None


@dataclass(frozen=True)
class TrainerConfig:
    """Training session configuration."""

    seed: int | None = field(default_factory=_parse_seed)
    dealer_hits_soft_17: bool = field(
        default_factory=lambda: _env_flag("TRAINER_DEALER_HITS_SOFT_17", "true")
    )
    points_per_hand: int = field(
        default_factory=lambda: int(os.getenv("TRAINER_POINTS_PER_HAND", "10"))
    )
    clamp_recommendations: bool = field(
        default_factory=lambda: _env_flag("TRAINER_CLAMP_RECOMMENDATIONS", "false")
    )


# Global configuration instance
config = TrainerConfig()
