"""
RecallGraph package initialization.
"""

# Setup logging configuration on package import
from .utils.logging_config import setup_logging

setup_logging()

from .models.core import GraphData, Memory, NodeKind, NodeRef, RespondResult  # noqa: E402
from .services.graph_builder import build_graph, render_graph  # noqa: E402
from .services.memory_store import MemoryStore, MemoryStoreError  # noqa: E402
from .services.narrative import synthesize  # noqa: E402
from .services.recall_service import RecallService, respond  # noqa: E402
from .services.retrieval import retrieve  # noqa: E402
from .services.selection import SelectionModel  # noqa: E402
from .utils.text_vector import cosine_similarity, keywords, similarity, vectorize  # noqa: E402

__all__ = [
    'GraphData', 'Memory', 'MemoryStore', 'MemoryStoreError', 'NodeKind', 'NodeRef', 'RecallService', 'RespondResult',
    'SelectionModel', 'build_graph', 'cosine_similarity', 'keywords', 'render_graph', 'respond', 'retrieve',
    'similarity', 'synthesize', 'vectorize'
]
