"""Structured metadata extraction from normalized catalog chunk text."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from fastener_catalog.config import ExtractionConfig
from fastener_catalog.ingest import patterns
from fastener_catalog.ingest.patterns import PatternRule, first_match, normalize_material_code
from fastener_catalog.knowledge.standards import (
    StandardsKnowledgeBase,
    default_knowledge_base,
)
from fastener_catalog.types import ChunkMetadata, Finish, HeadType, ProductType

__all__ = [
    "MetadataExtractor",
    "detect_product_category",
    "extract_all_thread_sizes",
    "extract_keywords",
    "extract_price_range",
    "extract_product_description",
    "normalize_material_code",
    "ParsedProductLine",
    "parse_product_line",
    "parse_thread_dimensions",
]

_DESCRIPTION_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(pattern, re.IGNORECASE | re.MULTILINE)
    for pattern in (
        r"^([A-Z][a-z]+(?:[ \t]+[a-z]+)*[ \t]+(?:bolt|screw|nut|washer|stud)s?)\b",
        r"^(Hexagon[ \t]+\w+[ \t]*(?:bolt|screw|nut)s?)\b",
        r"^(Socket[ \t]+\w+[ \t]*(?:bolt|screw|cap)s?)\b",
        r"^(Flat[ \t]+\w+[ \t]*(?:washer|head)s?)\b",
        r"^(Spring[ \t]+\w+[ \t]*(?:washer|lock)s?)\b",
    )
)

# Trailing noun of a description phrase -> product type.
_DESCRIPTION_NOUNS: dict[str, ProductType] = {
    "bolt": ProductType.BOLT,
    "screw": ProductType.SCREW,
    "cap": ProductType.SCREW,
    "nut": ProductType.NUT,
    "washer": ProductType.WASHER,
    "lock": ProductType.WASHER,
    "stud": ProductType.STUD,
}

# Thousands may be grouped with a dot or a non-breaking space, never a plain
# space, so "S100 270,00" stays two tokens.
_PRICE = r"\d{1,3}(?:[.\u00a0\u202f]\d{3})+[.,]\d{2}|\d+[.,]\d{2}"
_PRICE_TOKEN = re.compile(rf"(?<![\w.,])({_PRICE})(?!\d)(?!\s*mm\b)")
_CURRENCY_BEFORE = re.compile(r"(?:€|\bEUR)\s*$")
_CURRENCY_AFTER = re.compile(r"^\s*(?:€|EUR\b)")
# Structural steel grades (S235 steel, S355JR) are not packaging codes.
_PACKAGING = re.compile(r"\bS\s*(\d+)\b(?!\s*(?i:steel|stahl|acero)\b)")

_MATERIAL_SUFFIX = r"brass|zinc|stainless|A[24](?:-\d{2})?|8\.8|10\.9|12\.9"
_PRODUCT_LINE = re.compile(
    rf"M\s*(\d+(?:\.\d+)?)\s*[x×]\s*(\d+(?:\.\d+)?)\s*S\s*(\d+)"
    rf"(?:\s+({_PRICE})|([.,]\d{{2}}))(?!\d)(?!\s*mm\b)"
    rf"(?:\s*({_MATERIAL_SUFFIX})\b)?",
    re.IGNORECASE,
)

_THREAD_DIMENSIONS = re.compile(r"M(\d+(?:\.\d+)?)(?:X(\d+(?:\.\d+)?))?", re.IGNORECASE)

_HINT_CATEGORIES: dict[str, str] = {
    "bolt": "bolt",
    "nut": "nut",
    "washer": "washer",
    "screw": "screw",
    "stud": "bolt",
    "anchor": "anchor",
    "rivet": "rivet",
}

_CATEGORY_RULES: tuple[PatternRule[str], ...] = tuple(
    PatternRule(re.compile(pattern, re.IGNORECASE), category)
    for pattern, category in (
        (r"hex\w*\s+bolt|bolt|perno", "bolt"),
        (r"threaded\s+rod|varilla", "threaded_rod"),
        (r"screw|tornillo", "screw"),
        (r"\bnuts?\b|tuerca", "nut"),
        (r"washer|arandela", "washer"),
        (r"anchor|ancla", "anchor"),
        (r"rivet|remache", "rivet"),
        (r"\bpins?\b|pasador", "pin"),
    )
)

_KEYWORD_STANDARD = re.compile(r"\b(?:DIN|ISO)\s*\d+\b|\bANSI\s*[A-Z]*\d+\b", re.IGNORECASE)
_KEYWORD_MATERIAL = re.compile(r"\b(?:A2|A4|304|316|8\.8|10\.9|12\.9)\b", re.IGNORECASE)
_KEYWORD_PRODUCT = re.compile(
    r"\b(?:bolt|nut|washer|screw|stud|hex|socket|flange|cap|spring|lock)\b", re.IGNORECASE
)
_WHITESPACE = re.compile(r"\s+")


def extract_product_description(text: str) -> str | None:
    """Section-header phrase such as ``"Hexagon head bolts"``."""
    for pattern in _DESCRIPTION_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(1).strip()
    return None


def extract_all_thread_sizes(text: str) -> list[str]:
    return patterns.extract_all_threads(text)


def parse_thread_dimensions(thread: str) -> tuple[float, float | None] | None:
    """``"M8X40"`` -> ``(8.0, 40.0)``; ``"M10"`` -> ``(10.0, None)``."""
    match = _THREAD_DIMENSIONS.search(thread)
    if match is None:
        return None
    length = float(match.group(2)) if match.group(2) else None
    return float(match.group(1)), length


def _parse_price(token: str) -> float:
    """``"1.270,00"`` -> ``1270.0``; the last separator is the decimal one."""
    whole = re.sub(r"[.,\s]", "", token[:-3])
    return float(f"{whole}.{token[-2:]}")


@dataclass(frozen=True, slots=True)
class ParsedProductLine:
    """One row of a supplier price table, e.g. ``M 8x40 S100 270,00``."""

    thread: str
    length: float
    packaging_code: str
    packaging_qty: int
    price: float
    material: str | None = None


def _split_compact(digits: str) -> tuple[int, int] | None:
    # "100270" + ",00": the quantity and the price's whole part are run
    # together. Candidate splits leave a whole part without a leading zero;
    # box sizes ending in 0 or 5 win, otherwise the shortest quantity.
    splits = [
        (digits[:index], digits[index:])
        for index in range(1, len(digits))
        if digits[index] != "0" or index == len(digits) - 1
    ]
    if not splits:
        return None
    quantity, whole = next((split for split in splits if split[0][-1] in "05"), splits[0])
    return int(quantity), int(whole)


def parse_product_line(line: str) -> ParsedProductLine | None:
    """Parse a price-table row in spaced or compact form.

    ``"M 8 x 40 S 100 270,00"`` and ``"M 8x40S100270,00 brass"`` both give
    thread ``M8X40``, 100 pieces and 270.00.
    """
    match = _PRODUCT_LINE.search(line)
    if match is None:
        return None
    diameter, length, digits, spaced_price, cents, material = match.groups()
    if spaced_price is not None:
        quantity, price = int(digits), _parse_price(spaced_price)
    else:
        split = _split_compact(digits)
        if split is None:
            return None
        quantity, price = split[0], split[1] + int(cents[1:]) / 100
    return ParsedProductLine(
        thread=f"M{diameter}X{length}",
        length=float(length),
        packaging_code=f"S{quantity}",
        packaging_qty=quantity,
        price=price,
        material=normalize_material_code(material) if material else None,
    )


def _product_lines(text: str) -> list[ParsedProductLine]:
    parsed = (parse_product_line(line) for line in text.splitlines())
    return [line for line in parsed if line is not None]


def _is_priced(text: str, line_start: int, start: int, end: int) -> bool:
    if _CURRENCY_BEFORE.search(text[line_start:start]):
        return True
    line_end = text.find("\n", end)
    if _CURRENCY_AFTER.match(text[end : line_end if line_end != -1 else len(text)]):
        return True
    return _PACKAGING.search(text[line_start:start]) is not None


def extract_price_range(text: str) -> tuple[float, float] | None:
    """Lowest and highest price on the page.

    A decimal with two fraction digits counts as a price when it is next to
    a currency marker or follows a packaging code (``S100``) on its line, so bare dimensions like
    ``2.50`` or ``12.50 mm`` are not read as prices. Thousands may be grouped
    (``1.270,00``). Compact price-table rows are read with
    ``parse_product_line``.
    """
    prices: list[float] = []
    for match in _PRICE_TOKEN.finditer(text):
        line_start = text.rfind("\n", 0, match.start()) + 1
        if _is_priced(text, line_start, match.start(), match.end()):
            prices.append(_parse_price(match.group(1)))
    prices.extend(line.price for line in _product_lines(text))
    if not prices:
        return None
    return min(prices), max(prices)


def extract_keywords(text: str) -> list[str]:
    """Deduplicated index keywords: standards, threads, materials, product words."""
    keywords: list[str] = []
    keywords.extend(
        _WHITESPACE.sub("", match.group(0)).upper() for match in _KEYWORD_STANDARD.finditer(text)
    )
    keywords.extend(patterns.extract_all_threads(text))
    keywords.extend(match.group(0).upper() for match in _KEYWORD_MATERIAL.finditer(text))
    keywords.extend(match.group(0).lower() for match in _KEYWORD_PRODUCT.finditer(text))
    return list(dict.fromkeys(keywords))


def detect_product_category(
    text: str,
    product_type_hint: str | None = None,
    knowledge_base: StandardsKnowledgeBase | None = None,
) -> str:
    """Coarse catalog category; ``"other"`` when nothing points anywhere."""
    if product_type_hint:
        category = _HINT_CATEGORIES.get(str(getattr(product_type_hint, "value", product_type_hint)))
        if category:
            return category

    if knowledge_base is None:
        knowledge_base = default_knowledge_base()
    for standard in patterns.extract_standards(text):
        info = knowledge_base.find(standard.code)
        if info is not None:
            return info.product_type

    return first_match(_CATEGORY_RULES, text) or "other"


@dataclass(slots=True)
class _MetadataBuilder:
    product_type: ProductType | None = None
    product_name: str | None = None
    material: str | None = None
    material_family: str | None = None
    thread_type: str | None = None
    thread_diameter: float | None = None
    thread_length: float | None = None
    dimensions: str | None = None
    head_type: HeadType | None = None
    standard: str | None = None
    standard_code: str | None = None
    all_standards: list[str] = field(default_factory=list)
    equivalent_standards: tuple[str, ...] = ()
    finish: Finish | None = None
    price_min: float | None = None
    price_max: float | None = None
    price_info: str | None = None
    packaging_unit: str | None = None
    box_quantity: int | None = None
    unit_price: float | None = None
    category: str = "other"
    keywords: list[str] = field(default_factory=list)
    confidence: float = 0.0

    def build(self) -> ChunkMetadata:
        return ChunkMetadata(
            product_type=self.product_type,
            product_name=self.product_name,
            material=self.material,
            material_family=self.material_family,
            thread_type=self.thread_type,
            thread_diameter=self.thread_diameter,
            thread_length=self.thread_length,
            dimensions=self.dimensions,
            head_type=self.head_type,
            standard=self.standard,
            standard_code=self.standard_code,
            all_standards=tuple(self.all_standards),
            equivalent_standards=self.equivalent_standards,
            finish=self.finish,
            price_min=self.price_min,
            price_max=self.price_max,
            price_info=self.price_info,
            packaging_unit=self.packaging_unit,
            box_quantity=self.box_quantity,
            unit_price=self.unit_price,
            category=self.category,
            keywords=tuple(self.keywords),
            confidence=self.confidence,
        )


class MetadataExtractor:
    """Derives a ``ChunkMetadata`` record from one normalized chunk.

    Every step reads the text independently and leaves its fields unset when
    nothing matches, so the extractor is total over ``str`` input. Conflicts
    inside one attribute are settled by the order of the pattern tables in
    ``fastener_catalog.ingest.patterns``.
    """

    def __init__(
        self,
        knowledge_base: StandardsKnowledgeBase | None = None,
        config: ExtractionConfig | None = None,
    ) -> None:
        if knowledge_base is None:
            knowledge_base = default_knowledge_base()
        self.knowledge_base = knowledge_base
        self.config = config or ExtractionConfig()

    def extract(self, text: str, product_type_hint: str | None = None) -> ChunkMetadata:
        meta = _MetadataBuilder()
        if not text:
            return meta.build()

        meta.product_name = extract_product_description(text)
        meta.product_type = patterns.extract_product_type(text) or self._type_from_description(
            meta.product_name
        )

        self._extract_threads(text, meta)

        material = patterns.extract_material(text)
        if material:
            meta.material, meta.material_family = material

        meta.finish = patterns.extract_finish(text)
        meta.head_type = patterns.extract_head_type(text)

        standards = patterns.extract_standards(text)
        if standards:
            meta.standard = standards[0].display
            meta.standard_code = standards[0].code
            meta.all_standards = [standard.code for standard in standards]
            meta.equivalent_standards = self.knowledge_base.equivalents(standards[0].code)

        self._extract_commercials(text, meta)

        hint = product_type_hint or (meta.product_type.value if meta.product_type else None)
        meta.category = detect_product_category(text, hint, self.knowledge_base)
        meta.keywords = extract_keywords(text)
        meta.confidence = self._confidence(meta)
        return meta.build()

    def _extract_threads(self, text: str, meta: _MetadataBuilder) -> None:
        threads = patterns.extract_all_threads(text)
        if not threads:
            return
        meta.thread_type = threads[0]
        meta.dimensions = ", ".join(threads[: self.config.max_dimension_entries])
        parsed = parse_thread_dimensions(threads[0])
        if parsed:
            meta.thread_diameter, meta.thread_length = parsed

    def _extract_commercials(self, text: str, meta: _MetadataBuilder) -> None:
        price_range = extract_price_range(text)
        if price_range:
            meta.price_min, meta.price_max = price_range
            meta.price_info = f"€{meta.price_min:.2f} - €{meta.price_max:.2f}"

        # Price-table rows first: the compact "40S100270,00" form has no word
        # boundary before the packaging code.
        rows = _product_lines(text)
        packaging = _PACKAGING.search(text)
        quantity = rows[0].packaging_qty if rows else None
        if quantity is None and packaging:
            quantity = int(packaging.group(1))
        if quantity is not None:
            meta.box_quantity = quantity
            meta.packaging_unit = f"{quantity} pcs"
            if meta.price_min is not None and quantity > 0:
                meta.unit_price = meta.price_min / quantity

    def _confidence(self, meta: _MetadataBuilder) -> float:
        signals = (
            (meta.standard is not None, self.config.standard_weight),
            (meta.thread_type is not None, self.config.thread_weight),
            (meta.material is not None, self.config.material_weight),
            (meta.price_info is not None, self.config.price_weight),
            (meta.box_quantity is not None, self.config.packaging_weight),
        )
        score = sum(weight for found, weight in signals if found)
        return max(0.0, min(1.0, score))

    @staticmethod
    def _type_from_description(description: str | None) -> ProductType | None:
        if not description:
            return None
        noun = description.split()[-1].lower().rstrip("s")
        return _DESCRIPTION_NOUNS.get(noun)

