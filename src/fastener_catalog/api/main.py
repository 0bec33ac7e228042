"""FastAPI entrypoint for extraction/classification/ranking endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from fastener_catalog.config import get_settings, setup_logging
from fastener_catalog.ingest.extractor import MetadataExtractor
from fastener_catalog.ingest.normalizer import TextNormalizer
from fastener_catalog.ingest.pipeline import ChunkAnnotator
from fastener_catalog.knowledge.standards import default_knowledge_base
from fastener_catalog.retrieval.classifier import (
    QueryClassifier,
    build_search_filters,
    search_keywords,
)
from fastener_catalog.retrieval.compatibility import CompatibilityRanker
from fastener_catalog.retrieval.reranker import HybridReranker
from fastener_catalog.retrieval.scoring import HybridScorer
from fastener_catalog.retrieval.search import CatalogSearch
from fastener_catalog.types import Candidate, RawChunk


class ExtractRequest(BaseModel):
    text: str
    product_type_hint: str | None = None
    chunk_id: str = "chunk-0"
    document_id: str = "adhoc"
    document_name: str = "adhoc"
    page_number: int | None = Field(default=None, ge=1)
    supplier: str | None = None

    def to_chunk(self) -> RawChunk:
        return RawChunk(
            chunk_id=self.chunk_id,
            text=self.text,
            document_id=self.document_id,
            document_name=self.document_name,
            page_number=self.page_number,
            supplier=self.supplier,
            product_type_hint=self.product_type_hint,
        )


class ClassifyRequest(BaseModel):
    query: str = Field(min_length=1)


class CandidatePayload(BaseModel):
    id: str
    content: str = ""
    score: float = Field(ge=0.0, le=1.0)
    metadata: dict[str, Any] = Field(default_factory=dict)

    def to_candidate(self) -> Candidate:
        return Candidate(id=self.id, content=self.content, score=self.score, metadata=self.metadata)


class SearchRequest(BaseModel):
    query: str = Field(min_length=1)
    candidates: list[CandidatePayload] = Field(default_factory=list)
    limit: int | None = Field(default=None, ge=1, le=100)
    threshold: int | None = Field(default=None, ge=0, le=100)


class CompatibilityRequest(BaseModel):
    source: CandidatePayload
    candidates: list[CandidatePayload] = Field(default_factory=list)
    limit: int = Field(default=10, ge=1, le=50)


_settings = get_settings()
setup_logging(_settings.log_level)

app = FastAPI(title="Fastener Catalog Intelligence", version="0.1.0")

_knowledge_base = default_knowledge_base()
_normalizer = TextNormalizer()
_extractor = MetadataExtractor(_knowledge_base)
_annotator = ChunkAnnotator(_normalizer, _extractor)
_classifier = QueryClassifier(_knowledge_base)
_reranker = HybridReranker(HybridScorer(_knowledge_base), _settings.scoring_config())
_search = CatalogSearch(_classifier, _reranker, _settings.search_config())
_compatibility = CompatibilityRanker()


@app.get("/health")
def health() -> dict[str, Any]:
    return {
        "status": "ok",
        "standards_loaded": len(_knowledge_base),
        "log_level": _settings.log_level,
    }


@app.post("/extract")
def extract(request: ExtractRequest) -> dict[str, Any]:
    annotated = _annotator.annotate(request.to_chunk())
    return {"chunk_id": annotated.chunk_id, "text": annotated.text, "metadata": annotated.record}


@app.post("/classify")
def classify(request: ClassifyRequest) -> dict[str, Any]:
    analysis = _classifier.classify(request.query)
    payload = asdict(analysis)
    payload["type"] = analysis.type.value
    for key in ("extracted_product_type", "extracted_head_type", "extracted_finish"):
        value = getattr(analysis, key)
        payload[key] = value.value if value is not None else None
    payload["equivalent_standards"] = list(analysis.equivalent_standards)
    payload["filters"] = build_search_filters(analysis)
    payload["keywords"] = search_keywords(analysis)
    return payload


@app.post("/search")
def search(request: SearchRequest) -> dict[str, Any]:
    response = _search.search(
        request.query,
        [candidate.to_candidate() for candidate in request.candidates],
        limit=request.limit,
        threshold=request.threshold,
    )
    return response.as_dict()


@app.get("/standards/{code}")
def standard_detail(code: str) -> dict[str, Any]:
    try:
        _knowledge_base.get(code)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return _knowledge_base.suggestions(code) or {}


@app.post("/compatibility")
def compatibility(request: CompatibilityRequest) -> dict[str, Any]:
    matches = _compatibility.rank(
        request.source.to_candidate(),
        [candidate.to_candidate() for candidate in request.candidates],
        limit=request.limit,
    )
    return {
        "items": [
            {
                "id": match.id,
                "compatibility_score": match.compatibility_score,
                "semantic_score": match.semantic_score,
                "reasons": list(match.reasons),
                "metadata": dict(match.metadata),
            }
            for match in matches
        ],
        "total": len(matches),
    }
