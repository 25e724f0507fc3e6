"""Configuration for the Strawberry room engine."""

import os
import random
from dataclasses import dataclass
from pathlib import Path


@dataclass
class Config:
    """Engine configuration."""

    log_level: str = "INFO"
    log_file: Path | None = None
    json_logs: bool = False
    redact_words: bool = True
    # Seed for letter draws and shuffles; None draws from the OS
    seed: int | None = None

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        log_file = os.getenv("STRAWBERRY_LOG_FILE")
        seed = os.getenv("STRAWBERRY_SEED")

        return cls(
            log_level=os.getenv("STRAWBERRY_LOG_LEVEL", cls.log_level),
            log_file=Path(log_file) if log_file else None,
            json_logs=os.getenv("STRAWBERRY_JSON_LOGS", "").lower()
            in ("true", "1", "yes"),
            redact_words=os.getenv("STRAWBERRY_REDACT_WORDS", "true").lower()
            not in ("false", "0", "no"),
            seed=int(seed) if seed else None,
        )

    def make_rng(self) -> random.Random:
        """Build the random source passed to the drawing transitions."""
        return random.Random(self.seed)
