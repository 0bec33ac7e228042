import pytest
from pydantic import ValidationError

from fastener_catalog.config import ClassifierConfig, ScoringConfig, Settings


def test_scoring_config_defaults() -> None:
    config = ScoringConfig()

    assert (config.vector_weight, config.keyword_weight) == (0.4, 0.4)
    assert config.exact_match_boost == 0.2
    assert config.wrong_standard_penalty == 0.15
    assert (config.min_exact_results, config.max_inexact_fallback) == (3, 5)


def test_invalid_weights_are_rejected() -> None:
    with pytest.raises(ValidationError):
        ScoringConfig(vector_weight=1.5)


def test_supplier_names_are_lowercased() -> None:
    assert ClassifierConfig(suppliers=["ACME", "Bossard"]).suppliers == ["acme", "bossard"]


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FASTENER_VECTOR_WEIGHT", "0.6")
    monkeypatch.setenv("FASTENER_DEFAULT_LIMIT", "5")
    monkeypatch.setenv("FASTENER_LOG_LEVEL", "debug")

    settings = Settings()

    assert settings.log_level == "DEBUG"
    assert settings.scoring_config().vector_weight == 0.6
    assert settings.search_config().default_limit == 5


def test_settings_reject_unknown_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FASTENER_LOG_LEVEL", "verbose")

    with pytest.raises(ValidationError):
        Settings()
