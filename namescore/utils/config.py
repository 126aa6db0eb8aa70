"""Configuration for name scoring."""

from dataclasses import dataclass
import math

from ..core.tokens import CharacterTokenizer, PhoneticTokenizer
from ..core.weighted_edits import WeightedEdits

STRATEGIES = ("forward", "bidirectional")


@dataclass
class ScoringConfig:
    """Configuration for alignment scoring."""

    # Positional weighting: edit i weighs 1 / (i + smoothing)
    smoothing: float = 1.0

    # "forward" scores one direction; "bidirectional" scores both and keeps the lower
    strategy: str = "bidirectional"

    # Uniform cost model used before any training. A non-zero match cost
    # keeps the self-cost normalizer positive.
    match_cost: int = 1
    substitute_cost: int = 3
    indel_cost: int = 4

    # Tokenization
    alphabet: str = "abcdefghijklmnopqrstuvwxyz"
    phonetic: bool = False
    phonetic_max_length: int = 0

    def __post_init__(self):
        """Validate settings."""
        if not math.isfinite(self.smoothing) or self.smoothing <= 0:
            raise ValueError(f"smoothing must be a positive finite number, got {self.smoothing}")
        if self.strategy not in STRATEGIES:
            raise ValueError(f"strategy must be one of {STRATEGIES}, got {self.strategy!r}")
        for name in ("match_cost", "substitute_cost", "indel_cost"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")

    def build_tokenizer(self) -> CharacterTokenizer:
        if self.phonetic:
            return PhoneticTokenizer(max_length=self.phonetic_max_length)
        return CharacterTokenizer(self.alphabet)

    def build_cost_model(self, num_tokens: int) -> WeightedEdits:
        return WeightedEdits.uniform(
            num_tokens,
            match=self.match_cost,
            substitute=self.substitute_cost,
            indel=self.indel_cost,
        )


# Global configuration instance
default_config = ScoringConfig()
