"""
Narrative synthesis: template sentences linking a query to past memories.
"""

from typing import Iterable, List, Optional, Set

from ..models.core import Memory, Narrative
from ..utils.config import config
from ..utils.logging_config import get_logger
from ..utils.text_vector import keywords, similarity
from .retrieval import memory_document, retrieve

logger = get_logger(__name__)

DEFAULT_UNEXPECTED = ('Unexpected link: pair current topic with acoustic metamaterials to attenuate friction—'
                      'noise-aware control can also reduce energy losses.')
NO_KEYWORDS_FALLBACK = 'new insight'
NO_MEMORY_FALLBACK = 'prior work'
NO_BRIDGE_FALLBACK = 'a shared systems lens'


def _unique(values: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result


def thematic_buckets(related: List[Memory]) -> dict:
    """People, Ideas and Events drawn from the retrieved memories."""
    return {
        'People': _unique(person for memory in related for person in memory.people),
        'Ideas': _unique(idea for memory in related for idea in memory.ideas),
        'Events': _unique(event for memory in related for event in memory.events),
    }


def primary_connection(query: str, related: List[Memory]) -> str:
    """Sentence merging the top query keywords with the best matching memory."""
    query_keys = keywords(query, config.retrieval.query_keywords)
    merged = ' + '.join(query_keys[:2]) or NO_KEYWORDS_FALLBACK
    title = related[0].title if related else NO_MEMORY_FALLBACK
    buckets = ', '.join(thematic_buckets(related))
    return f'Merging "{merged}" with {title} suggests a multilayer approach across {buckets}.'


def derive_concepts(query: str, related: List[Memory], limit: Optional[int] = None) -> List[str]:
    """Ordered concept list: query keywords, then tags, ideas and summary keywords."""
    if limit is None:
        limit = config.retrieval.concept_limit
    query_keys = keywords(query, config.retrieval.query_keywords)
    memory_keys = []
    for memory in related:
        memory_keys.extend(memory.tags)
        memory_keys.extend(memory.ideas)
        memory_keys.extend(keywords(memory.summary, config.retrieval.summary_keywords))
    return _unique(query_keys + memory_keys)[:max(limit, 0)]


def bridge_keywords(query: str, summary: str, limit: int = 2) -> List[str]:
    """Leading terms of the query and summary read as one text."""
    return keywords(query + ' ' + summary, 4)[:limit]


def pick_unexpected(query: str, memories: List[Memory], used: Set[str]) -> str:
    """Sentence about the least similar memory that was not already retrieved.

    Falls back to the globally least similar memory when every memory is
    used, and to a fixed sentence when there are no memories.
    """
    if not memories:
        return DEFAULT_UNEXPECTED

    scored = [(similarity(query, memory_document(memory)), memory) for memory in memories]
    scored.sort(key=lambda item: item[0])
    candidate = next((memory for _, memory in scored if memory.id not in used), scored[0][1])

    bridge = ' & '.join(bridge_keywords(query, candidate.summary)) or NO_BRIDGE_FALLBACK
    logger.debug(f'Unexpected candidate {candidate.id} bridged via {bridge!r}')
    return f'Unexpected connection: blend "{candidate.title}" via {bridge} to provoke a novel angle.'


def synthesize(query: str, memories: List[Memory], related: Optional[List[Memory]] = None) -> Narrative:
    """Build both connection sentences for a query.

    Args:
        query: Free-text query
        memories: All memories, searched for the unexpected connection
        related: Already retrieved top-K; computed with retrieve() if omitted

    Returns:
        Narrative with primary and unexpected sentences and derived concepts
    """
    if related is None:
        related = retrieve(query, memories)
    used = {memory.id for memory in related}
    return Narrative(primary_connection=primary_connection(query, related),
                     unexpected_connection=pick_unexpected(query, memories, used),
                     concepts=derive_concepts(query, related))
