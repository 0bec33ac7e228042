"""Configuration models for the catalog intelligence layer."""

from __future__ import annotations

import logging
import sys
from functools import lru_cache

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def setup_logging(level: str = "INFO") -> None:
    """Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


class ExtractionConfig(BaseModel):
    """Configures chunk metadata extraction and confidence weights."""

    max_dimension_entries: int = Field(default=10, ge=1)
    standard_weight: float = Field(default=0.30, ge=0.0, le=1.0)
    thread_weight: float = Field(default=0.20, ge=0.0, le=1.0)
    material_weight: float = Field(default=0.20, ge=0.0, le=1.0)
    price_weight: float = Field(default=0.15, ge=0.0, le=1.0)
    packaging_weight: float = Field(default=0.15, ge=0.0, le=1.0)


class ClassifierConfig(BaseModel):
    """Configures query classification heuristics."""

    standard_residual_chars: int = Field(default=10, ge=0)
    suppliers: list[str] = Field(
        default_factory=lambda: [
            "reyher",
            "wurth",
            "wuerth",
            "würth",
            "bossard",
            "fabory",
            "hilti",
            "fischer",
        ]
    )
    supplier_aliases: dict[str, str] = Field(
        default_factory=lambda: {"wuerth": "wurth", "würth": "wurth"}
    )

    @field_validator("suppliers")
    @classmethod
    def _lowercase_suppliers(cls, value: list[str]) -> list[str]:
        return [supplier.lower() for supplier in value]


class ScoringConfig(BaseModel):
    """Configures the vector/keyword blend used by the reranker.

    ``wrong_standard_penalty`` is accepted for callers that tune it alongside
    the weights; the similar-standard penalty itself is applied by the hybrid
    scorer as a negative standard boost.
    """

    vector_weight: float = Field(default=0.4, ge=0.0, le=1.0)
    keyword_weight: float = Field(default=0.4, ge=0.0, le=1.0)
    exact_match_boost: float = Field(default=0.2, ge=0.0, le=1.0)
    wrong_standard_penalty: float = Field(default=0.15, ge=0.0, le=1.0)
    min_exact_results: int = Field(default=3, ge=1)
    max_inexact_fallback: int = Field(default=5, ge=0)


class SearchConfig(BaseModel):
    """Configures result limits for the search facade."""

    default_limit: int = Field(default=20, ge=1)
    default_threshold: int = Field(default=0, ge=0, le=100)


class Settings(BaseSettings):
    """Process-level settings loaded from ``FASTENER_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FASTENER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(default="INFO", description="Logging level")
    vector_weight: float = Field(default=0.4, ge=0.0, le=1.0)
    keyword_weight: float = Field(default=0.4, ge=0.0, le=1.0)
    exact_match_boost: float = Field(default=0.2, ge=0.0, le=1.0)
    wrong_standard_penalty: float = Field(default=0.15, ge=0.0, le=1.0)
    default_limit: int = Field(default=20, ge=1)

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported log level: {value}")
        return level

    def scoring_config(self) -> ScoringConfig:
        return ScoringConfig(
            vector_weight=self.vector_weight,
            keyword_weight=self.keyword_weight,
            exact_match_boost=self.exact_match_boost,
            wrong_standard_penalty=self.wrong_standard_penalty,
        )

    def search_config(self) -> SearchConfig:
        return SearchConfig(default_limit=self.default_limit)


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
