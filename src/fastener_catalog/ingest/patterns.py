"""Ordered pattern tables shared by chunk extraction and query classification.

Each table is an explicit sequence of ``PatternRule`` values evaluated in
order; the first rule whose pattern matches decides the result. Table order
is the tie-break policy when text mentions several candidates (for example
"hex bolt with nut" resolves to ``bolt``).
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from fastener_catalog.types import Finish, HeadType, ProductType, StandardCode

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class PatternRule(Generic[T]):
    pattern: re.Pattern[str]
    value: T

    def search(self, text: str) -> re.Match[str] | None:
        return self.pattern.search(text)


def first_match(rules: Sequence[PatternRule[T]], text: str) -> T | None:
    """Value of the first rule matching ``text``; ``None`` if none does."""
    found = first_rule_match(rules, text)
    return found[0] if found else None


def first_rule_match(
    rules: Sequence[PatternRule[T]], text: str
) -> tuple[T, re.Match[str]] | None:
    for rule in rules:
        match = rule.search(text)
        if match:
            return rule.value, match
    return None


def _rule(pattern: str, value: T, flags: int = re.IGNORECASE) -> PatternRule[T]:
    return PatternRule(re.compile(pattern, flags), value)


# Threads

_THREAD = re.compile(
    r"(?<![A-Za-z0-9])M\s?(\d{1,2}(?:\.\d+)?)(?:\s*[x×]\s*(\d+(?:\.\d+)?))?(?!\d)",
    re.IGNORECASE,
)


def _format_thread(match: re.Match[str]) -> str:
    diameter, length = match.group(1), match.group(2)
    return f"M{diameter}X{length}" if length else f"M{diameter}"


def extract_thread(text: str) -> str | None:
    """First thread designator, e.g. ``"m 8 x 40"`` -> ``"M8X40"``."""
    match = _THREAD.search(text)
    return _format_thread(match) if match else None


def extract_all_threads(text: str) -> list[str]:
    """Distinct thread designators in first-seen order."""
    return list(dict.fromkeys(_format_thread(match) for match in _THREAD.finditer(text)))


# Standards

_STANDARD_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\b(DIN|ISO)\s*(\d+[A-Z]?)\b", re.IGNORECASE),
    # "en" is a common Spanish word, so the EN prefix must be upper case.
    re.compile(r"\b(EN)\s*(\d+[A-Z]?)\b"),
    re.compile(r"\b(ANSI)\s*([A-Z]*\d+[A-Z]*)\b", re.IGNORECASE),
)


def _standard_matches(text: str) -> list[re.Match[str]]:
    matches = [match for pattern in _STANDARD_PATTERNS for match in pattern.finditer(text)]
    return sorted(matches, key=lambda match: match.start())


def extract_standards(text: str) -> list[StandardCode]:
    """Distinct standard references in text order."""
    found: dict[str, StandardCode] = {}
    for match in _standard_matches(text):
        standard = StandardCode(prefix=match.group(1).upper(), number=match.group(2).upper())
        found.setdefault(standard.code, standard)
    return list(found.values())


def extract_standard(text: str) -> StandardCode | None:
    standards = extract_standards(text)
    return standards[0] if standards else None


def strip_standards(text: str) -> str:
    """Remove every standard reference from ``text``."""
    for match in reversed(_standard_matches(text)):
        text = text[: match.start()] + text[match.end() :]
    return text


# Product types

PRODUCT_TYPE_RULES: tuple[PatternRule[ProductType], ...] = (
    _rule(r"\b(?:bolts?|pernos?|tornillos?|hex\s*bolts?|hexagon\s*bolts?)\b", ProductType.BOLT),
    _rule(r"\b(?:nuts?|tuercas?|hex\s*nuts?)\b", ProductType.NUT),
    _rule(r"\b(?:washers?|arandelas?|flat\s*washers?|spring\s*washers?)\b", ProductType.WASHER),
    _rule(r"\b(?:screws?|cap\s*screws?|machine\s*screws?)\b", ProductType.SCREW),
    _rule(r"\b(?:studs?|esp[aá]rragos?|threaded\s*studs?)\b", ProductType.STUD),
    _rule(r"\b(?:anchors?|anclas?|expansion\s*anchors?)\b", ProductType.ANCHOR),
    _rule(r"\b(?:rivets?|remaches?)\b", ProductType.RIVET),
)


def extract_product_type(text: str) -> ProductType | None:
    return first_match(PRODUCT_TYPE_RULES, text)


# Materials. Values name the material family; the matched token itself is
# canonicalized with ``normalize_material_code``.

MATERIAL_RULES: tuple[PatternRule[str], ...] = (
    _rule(r"\b(?:A2(?:-\d{2})?|304|18-8)\b", "stainless"),
    _rule(r"\b(?:A4(?:-\d{2})?|316(?:Ti)?)\b", "stainless"),
    _rule(r"\b4\.8\b", "steel", 0),
    _rule(r"\b8\.8\b", "steel", 0),
    _rule(r"\b10\.9\b", "steel", 0),
    _rule(r"\b12\.9\b", "steel", 0),
    _rule(r"\bbrass\b", "brass"),
    _rule(r"\b(?:zinc|galvanized|verzinkt)\b", "zinc"),
    _rule(r"\b(?:phosphate|phosphatiert)\b", "phosphate"),
    _rule(r"\bstainless\b", "stainless"),
)

_MATERIAL_ALIASES: dict[str, str] = {
    "A2": "A2-70",
    "A270": "A2-70",
    "304": "A2-70",
    "188": "A2-70",
    "A4": "A4-70",
    "A470": "A4-70",
    "316": "A4-70",
    "A480": "A4-80",
    "316TI": "A4-80",
    "48": "4.8",
    "4.8": "4.8",
    "88": "8.8",
    "8.8": "8.8",
    "109": "10.9",
    "10.9": "10.9",
    "129": "12.9",
    "12.9": "12.9",
}

_MATERIAL_SEPARATORS = re.compile(r"[-\s]")


def normalize_material_code(raw: str) -> str:
    """Canonical material code: ``A2``/``304`` -> ``A2-70``, ``88`` -> ``8.8``.

    Unknown inputs are upper-cased and otherwise left alone, which keeps the
    function idempotent.
    """
    key = _MATERIAL_SEPARATORS.sub("", raw.upper())
    return _MATERIAL_ALIASES.get(key, raw.strip().upper())


def extract_material(text: str) -> tuple[str, str] | None:
    """``(canonical code, family)`` of the first material mentioned."""
    found = first_rule_match(MATERIAL_RULES, text)
    if found is None:
        return None
    family, match = found
    return normalize_material_code(match.group(0)), family


# Finishes

FINISH_RULES: tuple[PatternRule[Finish], ...] = (
    _rule(r"\b(?:hot[\s-]*dip(?:ped)?|feuerverzinkt|HDG)\b", Finish.HOT_DIP_GALVANIZED),
    _rule(r"\b(?:zinc[\s-]*plated|verzinkt|galvanized|galvanizado)\b", Finish.ZINC_PLATED),
    _rule(r"\b(?:black\s*oxide|brüniert)\b", Finish.BLACK_OXIDE),
    _rule(r"\b(?:passivated|passiviert)\b", Finish.PASSIVATED),
    _rule(r"\b(?:plain|blank)\b", Finish.PLAIN),
)


def extract_finish(text: str) -> Finish | None:
    return first_match(FINISH_RULES, text)


# Head types, including standards that imply a head shape.

HEAD_TYPE_RULES: tuple[PatternRule[HeadType], ...] = (
    _rule(r"\b(?:hex|hexagon|hexagonal|sechskant|DIN\s*93[13]|ISO\s*401[47])\b", HeadType.HEX),
    _rule(r"\b(?:socket|allen|innensechskant|DIN\s*912|ISO\s*4762)\b", HeadType.SOCKET),
    _rule(r"\b(?:pan\s*head|linsenkopf)\b", HeadType.PAN),
    _rule(
        r"\b(?:countersunk|flat\s*head|senkkopf|avellanado|DIN\s*965|ISO\s*10642)\b",
        HeadType.COUNTERSUNK,
    ),
    _rule(r"\b(?:button\s*head|halbrundkopf|ISO\s*7380)\b", HeadType.BUTTON),
    _rule(r"\b(?:flange|flansch|DIN\s*6921)\b", HeadType.FLANGE),
)


def extract_head_type(text: str) -> HeadType | None:
    return first_match(HEAD_TYPE_RULES, text)
