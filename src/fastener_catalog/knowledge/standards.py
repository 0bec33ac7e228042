"""Read-only knowledge base of fastener standards and their relationships."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType

_WHITESPACE = re.compile(r"\s+")
_DISPLAY_SPLIT = re.compile(r"^(DIN|ISO|EN|ANSI)(?=[A-Z]?\d)")


def normalize_standard_code(code: str) -> str:
    """``"din 933"`` -> ``"DIN933"``."""
    return _WHITESPACE.sub("", code or "").upper()


def format_standard_for_display(code: str) -> str:
    """``"DIN933"`` -> ``"DIN 933"``."""
    return _DISPLAY_SPLIT.sub(r"\1 ", normalize_standard_code(code))


@dataclass(frozen=True, slots=True)
class StandardInfo:
    """One standard and the relationships published for it."""

    code: str
    display_code: str
    description: str
    product_type: str
    equivalent: tuple[str, ...] = ()
    similar: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()


class StandardsKnowledgeBase:
    """Immutable lookup table keyed by normalized standard code.

    Relationships are answered from the entry of the code being asked about.
    No reverse edges are inferred, so ``similar`` and ``equivalent`` are only
    symmetric where the table lists both directions. Unknown codes produce
    empty results rather than errors; ``get`` is the one strict lookup.
    """

    def __init__(self, entries: Iterable[StandardInfo]) -> None:
        table: dict[str, StandardInfo] = {}
        for entry in entries:
            code = normalize_standard_code(entry.code)
            if code in table:
                raise ValueError(f"Duplicate standard entry: {code}")
            table[code] = entry
        self._entries = MappingProxyType(table)

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and normalize_standard_code(code) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[StandardInfo]:
        return iter(self._entries.values())

    def find(self, code: str) -> StandardInfo | None:
        return self._entries.get(normalize_standard_code(code))

    def get(self, code: str) -> StandardInfo:
        info = self.find(code)
        if info is None:
            raise KeyError(f"Unknown standard: {code}")
        return info

    def equivalents(self, code: str) -> tuple[str, ...]:
        info = self.find(code)
        if info is None:
            return ()
        return tuple(normalize_standard_code(eq) for eq in info.equivalent)

    def similar(self, code: str) -> tuple[str, ...]:
        info = self.find(code)
        if info is None:
            return ()
        return tuple(normalize_standard_code(sim) for sim in info.similar)

    def related(self, code: str) -> tuple[str, ...]:
        """Equivalent then similar codes, deduplicated in that order."""
        return tuple(dict.fromkeys(self.equivalents(code) + self.similar(code)))

    def is_equivalent(self, query_code: str, candidate_code: str) -> bool:
        """Whether the query's entry lists ``candidate_code`` as equivalent."""
        return normalize_standard_code(candidate_code) in self.equivalents(query_code)

    def is_similar(self, query_code: str, candidate_code: str) -> bool:
        """Whether the query's entry lists ``candidate_code`` as similar."""
        return normalize_standard_code(candidate_code) in self.similar(query_code)

    def are_equivalent(self, code_a: str, code_b: str) -> bool:
        """Interchangeability check in either listed direction."""
        norm_a = normalize_standard_code(code_a)
        norm_b = normalize_standard_code(code_b)
        if norm_a == norm_b:
            return True
        return self.is_equivalent(norm_a, norm_b) or self.is_equivalent(norm_b, norm_a)

    def by_product_type(self, product_type: str) -> list[StandardInfo]:
        return [info for info in self._entries.values() if info.product_type == product_type]

    def search(self, keyword: str) -> list[StandardInfo]:
        """Match a keyword against codes, descriptions and keywords."""
        needle = keyword.strip().lower()
        if not needle:
            return []
        compact = needle.replace(" ", "")
        results: list[StandardInfo] = []
        for info in self._entries.values():
            if compact in info.code.lower() or needle in info.description.lower():
                results.append(info)
            elif any(needle in kw.lower() for kw in info.keywords):
                results.append(info)
        return results

    def suggestions(self, code: str) -> dict[str, object] | None:
        info = self.find(code)
        if info is None:
            return None
        return {
            "code": info.code,
            "display_code": info.display_code,
            "description": info.description,
            "product_type": info.product_type,
            "equivalent": list(self.equivalents(code)),
            "similar": list(self.similar(code)),
        }


@lru_cache(maxsize=1)
def default_knowledge_base() -> StandardsKnowledgeBase:
    """Knowledge base over the built-in standards table, built once."""
    from fastener_catalog.knowledge.catalog import BUILTIN_STANDARDS

    return StandardsKnowledgeBase(BUILTIN_STANDARDS)


def find_equivalent_standards(
    standard: str, knowledge_base: StandardsKnowledgeBase | None = None
) -> tuple[str, ...]:
    """Normalized equivalents of ``standard``; empty for unknown codes."""
    if knowledge_base is None:
        knowledge_base = default_knowledge_base()
    return knowledge_base.equivalents(standard)
