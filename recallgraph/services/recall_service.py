"""
Recall Service orchestrating retrieval, narrative and graph synthesis for a query.
"""

from typing import List, Optional

from ..models.core import GraphData, Memory, RespondResult
from ..utils.config import config
from ..utils.logging_config import get_logger
from .graph_builder import build_graph
from .narrative import synthesize
from .retrieval import build_recall, retrieve

logger = get_logger(__name__)

HISTORY_QUERY = 'History Overview'


class RecallService:
    """Answer a query with recalled memories, connection sentences and a graph."""

    def __init__(self, limit: Optional[int] = None):
        """Initialize the recall service.

        Args:
            limit: Number of memories to retrieve per query (default from config)
        """
        self.limit = config.retrieval.limit if limit is None else limit
        logger.info(f'Initialized RecallService with limit {self.limit}')

    def respond(self, query: str, memories: List[Memory]) -> RespondResult:
        """Run the full recall pipeline for one query.

        Args:
            query: Free-text query
            memories: The caller's full memory collection

        Returns:
            RespondResult for the query
        """
        related = retrieve(query, memories, self.limit)
        narrative = synthesize(query, memories, related)

        result = RespondResult(query=query,
                               recall=build_recall(related),
                               primary_connection=narrative.primary_connection,
                               unexpected_connection=narrative.unexpected_connection,
                               graph=build_graph(query, related),
                               concepts=narrative.concepts)

        logger.debug(f'Responded to query with {len(related)} memories and {len(result.graph.nodes)} graph nodes')
        return result

    def history_graph(self, query: str, memories: List[Memory]) -> GraphData:
        """Overview graph for the memory collection, titled by query if given."""
        query = query.strip() or HISTORY_QUERY
        return build_graph(query, retrieve(query, memories, self.limit))


_default_service: Optional[RecallService] = None


def respond(query: str, memories: List[Memory]) -> RespondResult:
    """Respond using a shared default RecallService."""
    global _default_service
    if _default_service is None:
        _default_service = RecallService()
    return _default_service.respond(query, memories)
