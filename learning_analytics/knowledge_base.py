from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .config import KNOWLEDGE_BASE_PATH
from .errors import PreconditionError
from .models import KnowledgeDocument

logger = logging.getLogger(__name__)

_CACHE: Dict[Path, List[KnowledgeDocument]] = {}
_LOCK = threading.Lock()


def load_knowledge_base(path: Optional[Path] = None) -> List[KnowledgeDocument]:
    """Load (and cache) the knowledge documents stored as a JSON array at ``path``."""
    source = Path(path) if path is not None else KNOWLEDGE_BASE_PATH

    with _LOCK:
        cached = _CACHE.get(source)
    if cached is not None:
        return list(cached)

    documents = _read_documents(source)
    logger.info("Loaded %d knowledge documents from %s", len(documents), source)

    with _LOCK:
        _CACHE[source] = documents
    return list(documents)


def filter_by_subject(
    documents: Iterable[KnowledgeDocument],
    subject: Optional[str],
) -> List[KnowledgeDocument]:
    if not subject:
        return list(documents)
    return [doc for doc in documents if doc.subject == subject]


def clear_cache() -> None:
    with _LOCK:
        _CACHE.clear()


def _read_documents(source: Path) -> List[KnowledgeDocument]:
    if not source.exists():
        raise FileNotFoundError(f"Knowledge base not found at {source}")

    with source.open("r", encoding="utf-8") as handle:
        raw = json.load(handle)
    if not isinstance(raw, list):
        raise PreconditionError(f"Knowledge base at {source} must contain a JSON array.")

    documents: List[KnowledgeDocument] = []
    for index, record in enumerate(raw):
        try:
            documents.append(KnowledgeDocument.from_dict(record))
        except PreconditionError as exc:
            raise PreconditionError(f"Invalid knowledge document #{index} in {source}: {exc}") from exc
    return documents
