"""
Tests for scoring configuration.
"""

import pytest

from namescore.core.tokens import CharacterTokenizer, PhoneticTokenizer
from namescore.utils.config import ScoringConfig, default_config


class TestScoringConfig:
    """Tests for ScoringConfig."""

    def test_defaults(self):
        """Test the default settings."""
        assert default_config.smoothing == 1.0
        assert default_config.strategy == "bidirectional"
        assert default_config.match_cost > 0

    @pytest.mark.parametrize("smoothing", [0, -0.5, float('inf'), float('nan')])
    def test_invalid_smoothing(self, smoothing):
        """Test that non-positive or non-finite smoothing is refused."""
        with pytest.raises(ValueError):
            ScoringConfig(smoothing=smoothing)

    def test_negative_cost(self):
        """Test that negative uniform costs are refused."""
        with pytest.raises(ValueError):
            ScoringConfig(indel_cost=-1)

    def test_build_tokenizer(self):
        """Test choosing spelling or phonetic tokens."""
        assert type(ScoringConfig().build_tokenizer()) is CharacterTokenizer
        assert isinstance(ScoringConfig(phonetic=True).build_tokenizer(), PhoneticTokenizer)

    def test_build_cost_model(self):
        """Test the uniform model built from the config."""
        config = ScoringConfig(match_cost=1, substitute_cost=5, indel_cost=7)
        model = config.build_cost_model(27)

        assert model.get_cost(3, 3) == 1
        assert model.get_cost(3, 4) == 5
        assert model.get_cost(0, 4) == 7
        assert model.get_cost(4, 0) == 7
