"""Lexical scoring of vector-search candidates against a classified query."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from fastener_catalog.knowledge.standards import (
    StandardsKnowledgeBase,
    default_knowledge_base,
    format_standard_for_display,
    normalize_standard_code,
)
from fastener_catalog.types import BoostBreakdown, Candidate, KeywordScore, QueryAnalysis

EXACT_STANDARD_BOOST = 0.5
EQUIVALENT_STANDARD_BOOST = 0.35
SIMILAR_STANDARD_PENALTY = -0.10
CONTENT_STANDARD_BOOST = 0.2
THREAD_BOOST = 0.15
MATERIAL_BOOST = 0.10
SUPPLIER_BOOST = 0.10


def _text(metadata: Mapping[str, Any], key: str) -> str | None:
    value = metadata.get(key)
    if value is None or value == "":
        return None
    return str(value)


def _contains(candidate_value: str | None, query_value: str | None) -> bool:
    if not candidate_value or not query_value:
        return False
    return query_value.lower() in candidate_value.lower()


def _content_pattern(display: str) -> re.Pattern[str]:
    prefix, _, number = display.partition(" ")
    return re.compile(rf"\b{re.escape(prefix)}\s*{re.escape(number)}\b", re.IGNORECASE)


class HybridScorer:
    """Keyword score in [0, 1] from metadata agreement with the query.

    Standard agreement is decided against the knowledge-base entry of the
    query standard only: a candidate standard listed as ``equivalent`` earns
    a boost, one listed as ``similar`` is penalised because it looks related
    but is a different part.
    """

    def __init__(self, knowledge_base: StandardsKnowledgeBase | None = None) -> None:
        if knowledge_base is None:
            knowledge_base = default_knowledge_base()
        self.knowledge_base = knowledge_base

    def score(self, candidate: Candidate, analysis: QueryAnalysis) -> KeywordScore:
        metadata = candidate.metadata
        standard_boost, exact = self._standard_boost(candidate, analysis)

        thread_boost = 0.0
        candidate_thread = _text(metadata, "thread_type")
        if analysis.extracted_thread and candidate_thread:
            wanted = analysis.extracted_thread.upper()
            stored = re.sub(r"\s", "", candidate_thread).upper()
            if stored == wanted or stored.startswith(wanted + "X"):
                thread_boost = THREAD_BOOST

        material_boost = 0.0
        if _contains(_text(metadata, "material"), analysis.extracted_material):
            material_boost = MATERIAL_BOOST

        supplier_boost = 0.0
        if _contains(_text(metadata, "supplier"), analysis.extracted_supplier):
            supplier_boost = SUPPLIER_BOOST

        boosts = BoostBreakdown(
            standard_match=standard_boost,
            thread_match=thread_boost,
            material_match=material_boost,
            supplier_match=supplier_boost,
        )
        return KeywordScore(
            score=max(0.0, min(1.0, boosts.total)),
            exact_standard_match=exact,
            boosts=boosts,
        )

    def _standard_boost(self, candidate: Candidate, analysis: QueryAnalysis) -> tuple[float, bool]:
        query_standard = analysis.extracted_standard
        if not query_standard:
            return 0.0, False

        boost = 0.0
        stored = _text(candidate.metadata, "standard")
        if stored:
            candidate_standard = normalize_standard_code(stored)
            if candidate_standard == query_standard:
                return EXACT_STANDARD_BOOST, True
            if self.knowledge_base.is_equivalent(query_standard, candidate_standard):
                return EQUIVALENT_STANDARD_BOOST, False
            if self.knowledge_base.is_similar(query_standard, candidate_standard):
                boost = SIMILAR_STANDARD_PENALTY

        display = analysis.extracted_standard_display or format_standard_for_display(query_standard)
        if _content_pattern(display).search(candidate.content):
            return boost + CONTENT_STANDARD_BOOST, True
        return boost, False
