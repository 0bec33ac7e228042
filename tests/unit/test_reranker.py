from fastener_catalog.config import ScoringConfig
from fastener_catalog.retrieval.classifier import QueryClassifier
from fastener_catalog.retrieval.reranker import HybridReranker, hybrid_score
from fastener_catalog.types import BoostBreakdown, Candidate, QueryAnalysis, QueryType, ScoredResult


def _result(result_id: str, score: int, exact: bool) -> ScoredResult:
    return ScoredResult(
        id=result_id,
        content="",
        vector_score=0.5,
        keyword_score=0.5 if exact else 0.0,
        hybrid_score=score,
        exact_standard_match=exact,
        boosts=BoostBreakdown(),
    )


def test_exact_standard_match_dominates_vector_similarity() -> None:
    analysis = QueryClassifier().classify("DIN 933")
    candidates = [
        Candidate("din931", "Hexagon bolt DIN 931", 0.95, {"standard": "DIN 931"}),
        Candidate("din933", "Hexagon bolt DIN 933", 0.40, {"standard": "DIN 933"}),
    ]

    ranked = HybridReranker().rerank(candidates, analysis)

    assert [item.id for item in ranked] == ["din933", "din931"]
    assert [item.rank for item in ranked] == [1, 2]
    assert ranked[0].hybrid_score == 46
    assert ranked[1].hybrid_score == 19


def test_general_blend_adds_exact_bonus() -> None:
    analysis = QueryAnalysis(type=QueryType.GENERAL)
    weights = ScoringConfig()

    assert hybrid_score(1.0, 1.0, False, analysis, weights) == 80
    assert hybrid_score(1.0, 1.0, True, analysis, weights) == 100
    assert hybrid_score(0.5, 0.0, False, analysis, weights) == 20


def test_hybrid_score_is_clamped() -> None:
    analysis = QueryAnalysis(type=QueryType.STANDARD_CODE, requires_exact_match=True)
    weights = ScoringConfig(vector_weight=1.0, keyword_weight=1.0, exact_match_boost=1.0)

    assert hybrid_score(1.0, 1.0, True, analysis, weights) == 100
    assert hybrid_score(0.0, 0.0, False, analysis, weights) == 0


def test_equal_scores_keep_input_order() -> None:
    analysis = QueryAnalysis(type=QueryType.GENERAL)
    candidates = [Candidate(f"c{i}", "", 0.5) for i in range(4)]

    ranked = HybridReranker().rerank(candidates, analysis)

    assert [item.id for item in ranked] == ["c0", "c1", "c2", "c3"]


def test_non_exact_queries_sort_by_score_only() -> None:
    analysis = QueryClassifier().classify("M8x40")
    candidates = [
        Candidate("low", "", 0.2, {"thread_type": "M8X40"}),
        Candidate("high", "", 0.9, {"thread_type": "M10X50"}),
    ]

    ranked = HybridReranker().rerank(candidates, analysis)

    assert [item.id for item in ranked] == ["high", "low"]
    assert ranked[1].boosts.thread_match == 0.15


def test_weights_override_config() -> None:
    analysis = QueryAnalysis(type=QueryType.GENERAL)
    candidates = [Candidate("c1", "", 1.0)]

    ranked = HybridReranker().rerank(
        candidates, analysis, weights=ScoringConfig(vector_weight=1.0, keyword_weight=0.0)
    )

    assert ranked[0].hybrid_score == 100


def test_filter_exact_keeps_only_exact_when_enough() -> None:
    analysis = QueryClassifier().classify("DIN 933")
    ranked = [_result(f"e{i}", 60, True) for i in range(3)] + [_result("n0", 50, False)]

    filtered = HybridReranker().filter_exact(ranked, analysis)

    assert [item.id for item in filtered] == ["e0", "e1", "e2"]


def test_filter_exact_falls_back_to_best_inexact() -> None:
    analysis = QueryClassifier().classify("DIN 933")
    ranked = [_result("e0", 60, True)] + [_result(f"n{i}", 50 - i, False) for i in range(7)]

    filtered = HybridReranker().filter_exact(ranked, analysis)

    assert [item.id for item in filtered] == ["e0", "n0", "n1", "n2", "n3", "n4"]


def test_filter_exact_ignores_other_query_types() -> None:
    analysis = QueryClassifier().classify("DIN 933 M8x40 stainless bolt")
    ranked = [_result("n0", 50, False), _result("n1", 40, False)]

    assert HybridReranker().filter_exact(ranked, analysis) == ranked


def test_mixed_query_puts_exact_matches_first() -> None:
    analysis = QueryClassifier().classify("DIN 933 M8x40 A2-70 hex bolt")
    candidates = [
        Candidate(
            "din931",
            "",
            1.0,
            {"standard": "DIN 931", "thread_type": "M8X40", "material": "A2-70"},
        ),
        Candidate("din933", "Hexagon bolt DIN 933", 0.0, {}),
    ]

    ranked = HybridReranker().rerank(candidates, analysis)

    assert analysis.type is QueryType.MIXED
    assert analysis.requires_exact_match
    assert [item.id for item in ranked] == ["din933", "din931"]
    assert [item.hybrid_score for item in ranked] == [12, 26]
    assert [item.exact_standard_match for item in ranked] == [True, False]


def test_exact_required_halves_vector_side_on_a_miss() -> None:
    weights = ScoringConfig()
    strict = QueryAnalysis(type=QueryType.MIXED, requires_exact_match=True)
    loose = QueryAnalysis(type=QueryType.MIXED, requires_exact_match=False)

    assert hybrid_score(1.0, 0.0, False, strict, weights) == 20
    assert hybrid_score(1.0, 0.0, False, loose, weights) == 40
    assert hybrid_score(0.5, 0.5, True, strict, weights) == 50
