"""Compatibility ranking of catalog products against a source product."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from fastener_catalog.types import Candidate

SAME_THREAD_BONUS = 20
STAINLESS_BONUS = 15
SAME_MATERIAL_BONUS = 10


@dataclass(frozen=True, slots=True)
class CompatibilityMatch:
    id: str
    content: str
    compatibility_score: int
    semantic_score: int
    reasons: tuple[str, ...]
    metadata: Mapping[str, Any] = field(default_factory=dict)


def _is_stainless(metadata: Mapping[str, Any]) -> bool:
    return metadata.get("material_family") == "stainless"


def compatibility_reasons(source: Mapping[str, Any], target: Mapping[str, Any]) -> list[str]:
    reasons: list[str] = []
    thread = source.get("thread_type")
    if thread and target.get("thread_type") == thread:
        reasons.append(f"Matching thread type: {thread}")

    material = source.get("material")
    if material and target.get("material"):
        if target.get("material") == material:
            reasons.append(f"Same material: {material}")
        elif _is_stainless(source) and _is_stainless(target):
            reasons.append("Compatible stainless steel materials")

    if target.get("standard"):
        reasons.append(f"Standard: {target['standard']}")

    if not reasons:
        reasons.append("Semantically similar product")
    return reasons


class CompatibilityRanker:
    """Ranks vector neighbours of a product by how well they fit together with it."""

    def score(self, source: Candidate, candidate: Candidate) -> int:
        score = candidate.score * 100
        thread = source.metadata.get("thread_type")
        if thread and candidate.metadata.get("thread_type") == thread:
            score += SAME_THREAD_BONUS

        material = source.metadata.get("material")
        if material and candidate.metadata.get("material"):
            if _is_stainless(source.metadata) and _is_stainless(candidate.metadata):
                score += STAINLESS_BONUS
            if candidate.metadata.get("material") == material:
                score += SAME_MATERIAL_BONUS

        return min(math.floor(score + 0.5), 100)

    def rank(
        self, source: Candidate, candidates: Sequence[Candidate], limit: int = 10
    ) -> list[CompatibilityMatch]:
        matches = [
            CompatibilityMatch(
                id=candidate.id,
                content=candidate.content,
                compatibility_score=self.score(source, candidate),
                semantic_score=math.floor(candidate.score * 100 + 0.5),
                reasons=tuple(compatibility_reasons(source.metadata, candidate.metadata)),
                metadata=candidate.metadata,
            )
            for candidate in candidates
            if candidate.id != source.id
        ]
        matches.sort(key=lambda match: -match.compatibility_score)
        return matches[:limit]
