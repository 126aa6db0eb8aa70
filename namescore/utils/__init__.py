"""Shared utilities."""

from .config import ScoringConfig, default_config

__all__ = ["ScoringConfig", "default_config"]
