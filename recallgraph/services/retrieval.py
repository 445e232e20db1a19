"""
Retrieval ranker: scores memories against a query and returns the top-K.
"""

from typing import List, Optional

from ..models.core import Memory, RecallItem
from ..utils.config import config
from ..utils.logging_config import get_logger
from ..utils.text_vector import similarity
from ..utils.timestamp_utils import short_date

logger = get_logger(__name__)


def memory_document(memory: Memory) -> str:
    """Text a memory is matched on: title, summary and content."""
    return f"{memory.title} {memory.summary} {memory.content or ''}"


def score_memory(query: str, memory: Memory) -> float:
    """Similarity of query (biased with the memory's own tags) to the memory document."""
    biased_query = query + ' ' + ' '.join(memory.tags)
    return similarity(biased_query, memory_document(memory))


def retrieve(query: str, memories: List[Memory], limit: Optional[int] = None) -> List[Memory]:
    """Rank memories by similarity to query.

    Args:
        query: Free-text query
        memories: Candidate memories
        limit: Maximum number of results (default from config)

    Returns:
        The first min(limit, len(memories)) memories by descending score;
        equal scores keep input order
    """
    if limit is None:
        limit = config.retrieval.limit
    if not memories or limit <= 0:
        return []

    scored = [(score_memory(query, memory), memory) for memory in memories]
    scored.sort(key=lambda item: item[0], reverse=True)

    related = [memory for _, memory in scored[:limit]]
    logger.debug(f'Retrieved {len(related)} of {len(memories)} memories')
    return related


def build_recall(memories: List[Memory]) -> List[RecallItem]:
    return [
        RecallItem(id=memory.id,
                   date=short_date(memory.date),
                   title=memory.title,
                   summary=memory.summary,
                   tags=list(memory.tags)) for memory in memories
    ]


def recent_memories(memories: List[Memory], limit: Optional[int] = None) -> List[Memory]:
    """Newest memories first, truncated to limit (default from config)."""
    if limit is None:
        limit = config.store.recent_limit
    ordered = sorted(memories, key=lambda memory: memory.date, reverse=True)
    return ordered[:max(limit, 0)]
