"""Fastener catalog intelligence package."""

from .config import ClassifierConfig, ExtractionConfig, ScoringConfig, SearchConfig

__all__ = ["ClassifierConfig", "ExtractionConfig", "ScoringConfig", "SearchConfig"]
