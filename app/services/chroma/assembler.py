from __future__ import annotations

import logging
from typing import Optional, Sequence

from app.models.chroma.schemas import Document, Metadata

logger = logging.getLogger(__name__)


def assemble_documents(
    ids: Sequence[str],
    documents: Optional[Sequence[Optional[str]]] = None,
    metadatas: Optional[Sequence[Optional[Metadata]]] = None,
) -> list[Document]:
    """Zip the parallel arrays of one ``get`` response into ``Document`` records.

    Order follows ``ids``.  A slot missing from ``documents`` or
    ``metadatas`` becomes ``None``; a length mismatch is logged but cannot be
    repaired here.
    """
    documents = documents or []
    metadatas = metadatas or []
    if ids and (len(documents) != len(ids) or len(metadatas) != len(ids)):
        logger.warning(
            "Misaligned get response: %d ids, %d documents, %d metadatas",
            len(ids),
            len(documents),
            len(metadatas),
        )

    return [
        Document(
            id=doc_id,
            content=documents[i] if i < len(documents) else None,
            metadata=metadatas[i] if i < len(metadatas) else None,
        )
        for i, doc_id in enumerate(ids)
    ]
