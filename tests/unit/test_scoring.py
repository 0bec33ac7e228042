import pytest

from fastener_catalog.retrieval.classifier import QueryClassifier
from fastener_catalog.retrieval.scoring import HybridScorer
from fastener_catalog.types import Candidate, QueryAnalysis, QueryType


def _candidate(content: str = "", **metadata: str) -> Candidate:
    return Candidate(id="c1", content=content, score=0.5, metadata=metadata)


def test_exact_standard_match_from_metadata() -> None:
    analysis = QueryClassifier().classify("DIN933")

    result = HybridScorer().score(_candidate(standard="DIN 933"), analysis)

    assert result.exact_standard_match
    assert result.boosts.standard_match == 0.5
    assert result.score == 0.5


def test_equivalent_standard_is_boosted_without_exact_flag() -> None:
    analysis = QueryClassifier().classify("DIN 933")

    result = HybridScorer().score(_candidate(standard="ISO 4017"), analysis)

    assert not result.exact_standard_match
    assert result.boosts.standard_match == 0.35


def test_similar_standard_is_penalized_and_clamped() -> None:
    analysis = QueryClassifier().classify("DIN 933")

    result = HybridScorer().score(_candidate("Hexagon bolt DIN 931", standard="DIN 931"), analysis)

    assert result.boosts.standard_match == pytest.approx(-0.10)
    assert result.score == 0.0
    assert not result.exact_standard_match


def test_content_fallback_marks_exact() -> None:
    analysis = QueryClassifier().classify("DIN 933")

    result = HybridScorer().score(_candidate("bolts to din933 in stock"), analysis)

    assert result.exact_standard_match
    assert result.boosts.standard_match == pytest.approx(0.2)


def test_content_fallback_respects_word_boundaries() -> None:
    analysis = QueryClassifier().classify("DIN 93")

    result = HybridScorer().score(_candidate("Hexagon bolt DIN 933"), analysis)

    assert not result.exact_standard_match
    assert result.score == 0.0


def test_thread_prefix_match() -> None:
    analysis = QueryAnalysis(type=QueryType.THREAD_SPEC, extracted_thread="M8")
    scorer = HybridScorer()

    assert scorer.score(_candidate(thread_type="M8X40"), analysis).boosts.thread_match == 0.15
    assert scorer.score(_candidate(thread_type="M8"), analysis).boosts.thread_match == 0.15
    assert scorer.score(_candidate(thread_type="M80"), analysis).boosts.thread_match == 0.0


def test_all_boosts_combine_within_unit_interval() -> None:
    analysis = QueryAnalysis(
        type=QueryType.MIXED,
        extracted_standard="DIN933",
        extracted_standard_display="DIN 933",
        extracted_thread="M8X40",
        extracted_material="A2-70",
        extracted_supplier="reyher",
        requires_exact_match=True,
    )
    candidate = _candidate(
        standard="DIN 933", thread_type="M8X40", material="a2-70", supplier="Reyher GmbH"
    )

    result = HybridScorer().score(candidate, analysis)

    assert result.boosts.material_match == 0.10
    assert result.boosts.supplier_match == 0.10
    assert result.score == pytest.approx(0.85)
    assert 0.0 <= result.score <= 1.0


def test_query_without_standard_scores_zero_on_standard() -> None:
    analysis = QueryClassifier().classify("hex bolt")

    result = HybridScorer().score(_candidate("DIN 933", standard="DIN 933"), analysis)

    assert result.boosts.standard_match == 0.0
    assert not result.exact_standard_match
