"""Query classification for catalog search."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from fastener_catalog.config import ClassifierConfig
from fastener_catalog.ingest import patterns
from fastener_catalog.knowledge.standards import StandardsKnowledgeBase, default_knowledge_base
from fastener_catalog.types import QueryAnalysis, QueryType

logger = logging.getLogger(__name__)

_SPANISH_WORDS = re.compile(
    r"\b(?:tornillo|tuerca|arandela|perno|varilla|inoxidable|acero|lat[oó]n|aluminio"
    r"|galvanizado|avellanado|hexagonal)s?\b",
    re.IGNORECASE,
)
_ENGLISH_WORDS = re.compile(
    r"\b(?:bolt|screw|nut|washer|stainless|steel|brass|aluminum|galvanized|countersunk"
    r"|hexagon)s?\b",
    re.IGNORECASE,
)


def detect_language(query: str) -> str:
    """``"es"``, ``"en"`` or ``"mixed"``; English when nothing is recognised."""
    spanish = _SPANISH_WORDS.search(query) is not None
    english = _ENGLISH_WORDS.search(query) is not None
    if spanish and english:
        return "mixed"
    return "es" if spanish else "en"


@dataclass(frozen=True, slots=True)
class _Signals:
    standard: bool
    short_residual: bool
    thread: bool
    material: bool
    product_type: bool
    supplier: bool


@dataclass(frozen=True, slots=True)
class _TypeRule:
    applies: Callable[[_Signals], bool]
    query_type: QueryType
    confidence: float
    requires_exact_match: bool = False


# Evaluated top to bottom; the first rule that applies decides the type.
_TYPE_RULES: tuple[_TypeRule, ...] = (
    _TypeRule(lambda s: s.standard and s.short_residual, QueryType.STANDARD_CODE, 0.95, True),
    _TypeRule(
        lambda s: s.thread and not s.standard and not s.product_type, QueryType.THREAD_SPEC, 0.8
    ),
    _TypeRule(
        lambda s: s.material and not s.standard and not s.thread, QueryType.MATERIAL_SPEC, 0.7
    ),
    _TypeRule(lambda s: s.product_type and not s.standard, QueryType.PRODUCT_TYPE, 0.7),
    _TypeRule(
        lambda s: s.supplier and not (s.standard or s.thread or s.product_type),
        QueryType.SUPPLIER_NAME,
        0.8,
    ),
    _TypeRule(
        lambda s: s.standard and (s.thread or s.material or s.product_type),
        QueryType.MIXED,
        0.85,
        True,
    ),
)

_GENERAL = _TypeRule(lambda s: True, QueryType.GENERAL, 0.5)


class QueryClassifier:
    """Extracts catalog attributes from a user query and decides its type."""

    def __init__(
        self,
        knowledge_base: StandardsKnowledgeBase | None = None,
        config: ClassifierConfig | None = None,
    ) -> None:
        if knowledge_base is None:
            knowledge_base = default_knowledge_base()
        self.knowledge_base = knowledge_base
        self.config = config or ClassifierConfig()

    def classify(self, raw: str) -> QueryAnalysis:
        query = (raw or "").strip()
        standard = patterns.extract_standard(query)
        thread = patterns.extract_thread(query)
        material = patterns.extract_material(query)
        product_type = patterns.extract_product_type(query)
        supplier = self.detect_supplier(query)

        residual = patterns.strip_standards(query).strip()
        signals = _Signals(
            standard=standard is not None,
            short_residual=len(residual) < self.config.standard_residual_chars,
            thread=thread is not None,
            material=material is not None,
            product_type=product_type is not None,
            supplier=supplier is not None,
        )
        rule = next((rule for rule in _TYPE_RULES if rule.applies(signals)), _GENERAL)

        analysis = QueryAnalysis(
            type=rule.query_type,
            query=query,
            extracted_standard=standard.code if standard else None,
            extracted_standard_display=standard.display if standard else None,
            extracted_thread=thread,
            extracted_material=material[0] if material else None,
            extracted_product_type=product_type,
            extracted_supplier=supplier,
            extracted_head_type=patterns.extract_head_type(query),
            extracted_finish=patterns.extract_finish(query),
            equivalent_standards=self.knowledge_base.equivalents(standard.code) if standard else (),
            detected_language=detect_language(query),
            confidence=rule.confidence,
            requires_exact_match=rule.requires_exact_match,
        )
        logger.debug(
            "Classified query %r as %s (confidence=%.2f, exact=%s)",
            query,
            analysis.type.value,
            analysis.confidence,
            analysis.requires_exact_match,
        )
        return analysis

    def detect_supplier(self, query: str) -> str | None:
        lowered = query.lower()
        for supplier in self.config.suppliers:
            if supplier in lowered:
                return self.config.supplier_aliases.get(supplier, supplier)
        return None


def build_search_filters(analysis: QueryAnalysis) -> dict[str, str]:
    """Metadata filter for the external vector index, keyed like chunk records."""
    candidates = {
        "product_type": analysis.extracted_product_type,
        "material": analysis.extracted_material,
        "thread_type": analysis.extracted_thread,
        "standard_code": analysis.extracted_standard,
        "supplier": analysis.extracted_supplier,
        "head_type": analysis.extracted_head_type,
        "finish": analysis.extracted_finish,
    }
    return {
        key: getattr(value, "value", value) for key, value in candidates.items() if value is not None
    }


def search_keywords(analysis: QueryAnalysis) -> list[str]:
    """Deduplicated lexical keywords for the keyword side of hybrid search."""
    keywords: list[str] = []
    if analysis.extracted_standard:
        keywords.append(analysis.extracted_standard)
        keywords.append(analysis.extracted_standard_display or analysis.extracted_standard)
    keywords.extend(analysis.equivalent_standards)
    for value in (
        analysis.extracted_thread,
        analysis.extracted_material,
        analysis.extracted_product_type,
        analysis.extracted_head_type,
        analysis.extracted_finish,
    ):
        if value is not None:
            keywords.append(getattr(value, "value", value))
    return list(dict.fromkeys(keywords))
