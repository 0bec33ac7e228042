"""Shared domain models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any


class ProductType(str, Enum):
    BOLT = "bolt"
    SCREW = "screw"
    NUT = "nut"
    WASHER = "washer"
    STUD = "stud"
    ANCHOR = "anchor"
    RIVET = "rivet"
    OTHER = "other"


class HeadType(str, Enum):
    HEX = "hex"
    SOCKET = "socket"
    PAN = "pan"
    COUNTERSUNK = "countersunk"
    BUTTON = "button"
    FLANGE = "flange"


class Finish(str, Enum):
    ZINC_PLATED = "zinc-plated"
    HOT_DIP_GALVANIZED = "hot-dip-galvanized"
    BLACK_OXIDE = "black-oxide"
    PASSIVATED = "passivated"
    PLAIN = "plain"


class QueryType(str, Enum):
    """Search strategy a query is routed to."""

    STANDARD_CODE = "standard_code"
    THREAD_SPEC = "thread_spec"
    MATERIAL_SPEC = "material_spec"
    PRODUCT_TYPE = "product_type"
    SUPPLIER_NAME = "supplier_name"
    MIXED = "mixed"
    GENERAL = "general"


@dataclass(frozen=True, slots=True)
class StandardCode:
    """A standard reference found in text, e.g. ``DIN 933``."""

    prefix: str
    number: str

    @property
    def code(self) -> str:
        return f"{self.prefix}{self.number}"

    @property
    def display(self) -> str:
        return f"{self.prefix} {self.number}"


@dataclass(frozen=True, slots=True)
class ChunkMetadata:
    """Structured attributes extracted from one catalog text chunk.

    Every optional attribute is either ``None`` or derived from text present
    in the (normalized) chunk. ``as_record`` gives the flat mapping stored
    beside the chunk embedding and handed back to the reranker at query time.
    """

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
    all_standards: tuple[str, ...] = ()
    equivalent_standards: tuple[str, ...] = ()
    finish: Finish | None = None
    price_min: float | None = None
    price_max: float | None = None
    price_info: str | None = None
    packaging_unit: str | None = None
    box_quantity: int | None = None
    unit_price: float | None = None
    category: str = ProductType.OTHER.value
    keywords: tuple[str, ...] = ()
    confidence: float = 0.0

    def as_record(self) -> dict[str, Any]:
        record: dict[str, Any] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if value is None:
                continue
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, tuple):
                value = list(value)
            record[item.name] = value
        return record


@dataclass(frozen=True, slots=True)
class QueryAnalysis:
    """Classification of one user query; computed once, never persisted."""

    type: QueryType
    query: str = ""
    extracted_standard: str | None = None
    extracted_standard_display: str | None = None
    extracted_thread: str | None = None
    extracted_material: str | None = None
    extracted_product_type: ProductType | None = None
    extracted_supplier: str | None = None
    extracted_head_type: HeadType | None = None
    extracted_finish: Finish | None = None
    equivalent_standards: tuple[str, ...] = ()
    detected_language: str = "en"
    confidence: float = 0.5
    requires_exact_match: bool = False


@dataclass(frozen=True, slots=True)
class Candidate:
    """A nearest-neighbour hit returned by the external vector index."""

    id: str
    content: str
    score: float
    metadata: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class BoostBreakdown:
    standard_match: float = 0.0
    thread_match: float = 0.0
    material_match: float = 0.0
    supplier_match: float = 0.0

    @property
    def total(self) -> float:
        return self.standard_match + self.thread_match + self.material_match + self.supplier_match


@dataclass(frozen=True, slots=True)
class KeywordScore:
    score: float
    exact_standard_match: bool
    boosts: BoostBreakdown


@dataclass(frozen=True, slots=True)
class ScoredResult:
    """A reranked candidate with its scoring breakdown."""

    id: str
    content: str
    vector_score: float
    keyword_score: float
    hybrid_score: int
    exact_standard_match: bool
    boosts: BoostBreakdown
    metadata: Mapping[str, Any] = field(default_factory=dict)
    rank: int = 0


@dataclass(slots=True)
class RawChunk:
    """A chunk of catalog text as produced by the external document splitter."""

    chunk_id: str
    text: str
    document_id: str
    document_name: str
    page_number: int | None = None
    supplier: str | None = None
    product_type_hint: str | None = None


@dataclass(slots=True)
class AnnotatedChunk:
    """A normalized chunk with its extracted metadata and storage record."""

    chunk_id: str
    text: str
    metadata: ChunkMetadata
    record: dict[str, Any]
