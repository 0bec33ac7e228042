"""Hybrid reranking of vector-search candidates."""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from collections.abc import Sequence

from fastener_catalog.config import ScoringConfig
from fastener_catalog.retrieval.scoring import HybridScorer
from fastener_catalog.types import Candidate, QueryAnalysis, QueryType, ScoredResult

logger = logging.getLogger(__name__)


class Reranker(ABC):
    """Reranker interface used after vector retrieval."""

    @abstractmethod
    def rerank(
        self,
        candidates: Sequence[Candidate],
        analysis: QueryAnalysis,
        weights: ScoringConfig | None = None,
    ) -> list[ScoredResult]:
        """Return scored candidates in the final ranking order."""


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def hybrid_score(
    vector_score: float,
    keyword_score: float,
    exact_standard_match: bool,
    analysis: QueryAnalysis,
    weights: ScoringConfig,
) -> int:
    """Blend vector and keyword scores into an integer in [0, 100].

    Standard-code queries lean on the keyword side: an exact standard match
    adds the exact-match boost to the keyword weight, and a miss halves the
    vector contribution.
    """
    vw, kw, boost = weights.vector_weight, weights.keyword_weight, weights.exact_match_boost
    if analysis.type is QueryType.STANDARD_CODE or analysis.requires_exact_match:
        if exact_standard_match:
            blended = (kw + boost) * keyword_score + vw * vector_score
        else:
            blended = vw * vector_score * 0.5 + kw * keyword_score
        score = _round_half_up(100 * blended)
    else:
        score = _round_half_up(100 * (vw * vector_score + kw * keyword_score))
        if exact_standard_match:
            score += _round_half_up(100 * boost)
    return max(0, min(100, score))


class HybridReranker(Reranker):
    """Scores every candidate with ``HybridScorer`` and sorts by hybrid score.

    The sort is stable, so candidates with equal scores keep the order the
    vector index returned them in. When the query requires an exact match,
    exact standard matches come first regardless of score.
    """

    def __init__(
        self,
        scorer: HybridScorer | None = None,
        config: ScoringConfig | None = None,
    ) -> None:
        self.scorer = scorer or HybridScorer()
        self.config = config or ScoringConfig()

    def rerank(
        self,
        candidates: Sequence[Candidate],
        analysis: QueryAnalysis,
        weights: ScoringConfig | None = None,
    ) -> list[ScoredResult]:
        weights = weights or self.config
        scored: list[ScoredResult] = []
        for candidate in candidates:
            keyword = self.scorer.score(candidate, analysis)
            scored.append(
                ScoredResult(
                    id=candidate.id,
                    content=candidate.content,
                    vector_score=candidate.score,
                    keyword_score=keyword.score,
                    hybrid_score=hybrid_score(
                        candidate.score,
                        keyword.score,
                        keyword.exact_standard_match,
                        analysis,
                        weights,
                    ),
                    exact_standard_match=keyword.exact_standard_match,
                    boosts=keyword.boosts,
                    metadata=candidate.metadata,
                )
            )

        if analysis.requires_exact_match:
            ordered = sorted(
                scored, key=lambda item: (not item.exact_standard_match, -item.hybrid_score)
            )
        else:
            ordered = sorted(scored, key=lambda item: -item.hybrid_score)

        logger.debug(
            "Reranked %d candidates (%d exact) for %s query",
            len(ordered),
            sum(1 for item in ordered if item.exact_standard_match),
            analysis.type.value,
        )
        return with_ranks(ordered)

    def filter_exact(
        self, ranked: Sequence[ScoredResult], analysis: QueryAnalysis
    ) -> list[ScoredResult]:
        """Keep exact standard matches for standard-code queries.

        With at least ``min_exact_results`` exact matches only those are
        kept; otherwise the exact matches are followed by up to
        ``max_inexact_fallback`` of the best remaining results.
        """
        if analysis.type is not QueryType.STANDARD_CODE or not analysis.requires_exact_match:
            return list(ranked)

        exact = [item for item in ranked if item.exact_standard_match]
        if len(exact) >= self.config.min_exact_results:
            return exact
        rest = [item for item in ranked if not item.exact_standard_match]
        return exact + rest[: self.config.max_inexact_fallback]


def with_ranks(results: Sequence[ScoredResult]) -> list[ScoredResult]:
    """Copy ``results`` with 1-based ranks in their current order."""
    return [
        ScoredResult(
            id=item.id,
            content=item.content,
            vector_score=item.vector_score,
            keyword_score=item.keyword_score,
            hybrid_score=item.hybrid_score,
            exact_standard_match=item.exact_standard_match,
            boosts=item.boosts,
            metadata=item.metadata,
            rank=index,
        )
        for index, item in enumerate(results, start=1)
    ]
