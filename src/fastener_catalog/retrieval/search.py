"""Search facade: classify, rerank, filter and cut the candidate list."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from fastener_catalog.config import SearchConfig
from fastener_catalog.knowledge.standards import format_standard_for_display
from fastener_catalog.obs.tracing import SearchMetrics, Timer
from fastener_catalog.retrieval.classifier import QueryClassifier
from fastener_catalog.retrieval.reranker import HybridReranker, with_ranks
from fastener_catalog.types import Candidate, QueryAnalysis, ScoredResult

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SearchResponse:
    analysis: QueryAnalysis
    results: list[ScoredResult]
    metrics: SearchMetrics
    suggestions: list[str] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        return {
            "query_type": self.analysis.type.value,
            "confidence": self.analysis.confidence,
            "requires_exact_match": self.analysis.requires_exact_match,
            "results": [
                {
                    "id": item.id,
                    "rank": item.rank,
                    "hybrid_score": item.hybrid_score,
                    "vector_score": item.vector_score,
                    "keyword_score": item.keyword_score,
                    "exact_standard_match": item.exact_standard_match,
                    "boosts": {
                        "standard_match": item.boosts.standard_match,
                        "thread_match": item.boosts.thread_match,
                        "material_match": item.boosts.material_match,
                        "supplier_match": item.boosts.supplier_match,
                    },
                    "content": item.content,
                    "metadata": dict(item.metadata),
                }
                for item in self.results
            ],
            "suggestions": self.suggestions,
            "metrics": {
                "candidate_count": self.metrics.candidate_count,
                "reranked_count": self.metrics.reranked_count,
                "returned_count": self.metrics.returned_count,
                "exact_match_count": self.metrics.exact_match_count,
                "elapsed_ms": self.metrics.elapsed_ms,
            },
        }


class CatalogSearch:
    """Ranks candidates already retrieved by the external vector index."""

    def __init__(
        self,
        classifier: QueryClassifier | None = None,
        reranker: HybridReranker | None = None,
        config: SearchConfig | None = None,
    ) -> None:
        self.classifier = classifier or QueryClassifier()
        self.reranker = reranker or HybridReranker()
        self.config = config or SearchConfig()

    def search(
        self,
        query: str,
        candidates: Sequence[Candidate],
        *,
        limit: int | None = None,
        threshold: int | None = None,
    ) -> SearchResponse:
        limit = limit or self.config.default_limit
        threshold = self.config.default_threshold if threshold is None else threshold

        with Timer() as timer:
            analysis = self.classifier.classify(query)
            ranked = self.reranker.rerank(candidates, analysis)
            filtered = self.reranker.filter_exact(ranked, analysis)
            kept = [item for item in filtered if item.hybrid_score >= threshold]
            results = with_ranks(kept[:limit])

        metrics = SearchMetrics(
            candidate_count=len(candidates),
            reranked_count=len(ranked),
            returned_count=len(results),
            exact_match_count=sum(1 for item in results if item.exact_standard_match),
            elapsed_ms=timer.elapsed_ms,
        )
        logger.debug(
            "Search %r: %d candidates, %d returned in %.2f ms",
            analysis.query,
            metrics.candidate_count,
            metrics.returned_count,
            metrics.elapsed_ms,
        )
        return SearchResponse(
            analysis=analysis,
            results=results,
            metrics=metrics,
            suggestions=[format_standard_for_display(code) for code in analysis.equivalent_standards],
        )
