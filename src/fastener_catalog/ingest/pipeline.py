"""Chunk annotation pipeline: normalize -> extract -> storage record."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from fastener_catalog.ingest.extractor import MetadataExtractor
from fastener_catalog.ingest.normalizer import TextNormalizer
from fastener_catalog.types import AnnotatedChunk, RawChunk

logger = logging.getLogger(__name__)


class ChunkAnnotator:
    """Coordinates normalization and metadata extraction for split chunks.

    PDF parsing, splitting, embedding and upserting stay with the external
    ingestion job; this class only turns chunk text into the metadata record
    stored beside each embedding.
    """

    def __init__(
        self,
        normalizer: TextNormalizer | None = None,
        extractor: MetadataExtractor | None = None,
    ) -> None:
        self._normalizer = normalizer or TextNormalizer()
        self._extractor = extractor or MetadataExtractor()

    def annotate(self, chunk: RawChunk) -> AnnotatedChunk:
        text = self._normalizer.normalize(chunk.text)
        metadata = self._extractor.extract(text, product_type_hint=chunk.product_type_hint)

        record: dict[str, object] = {
            "document_id": chunk.document_id,
            "document_name": chunk.document_name,
            "page_number": chunk.page_number,
            "supplier": chunk.supplier,
        }
        record = {key: value for key, value in record.items() if value is not None}
        record.update(metadata.as_record())
        return AnnotatedChunk(chunk_id=chunk.chunk_id, text=text, metadata=metadata, record=record)

    def annotate_many(self, chunks: Iterable[RawChunk]) -> list[AnnotatedChunk]:
        """Annotate chunks in order."""

        annotated = [self.annotate(chunk) for chunk in chunks]
        logger.info(
            "Annotated %d chunks (%d with a standard)",
            len(annotated),
            sum(1 for item in annotated if item.metadata.standard is not None),
        )
        return annotated
