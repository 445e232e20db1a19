"""
Graph synthesis: query, memory and concept nodes with their relationships.
"""

from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ..models.core import GraphData, GraphEdge, GraphNode, Memory, NodeKind, NodeRef
from ..utils.config import config
from ..utils.logging_config import get_logger

if TYPE_CHECKING:
    from .selection import SelectionModel

logger = get_logger(__name__)

ELLIPSIS = '…'

QUERY_WEIGHT = 3
MEMORY_WEIGHT = 2
CONCEPT_WEIGHT = 1


def query_label(query: str, max_length: Optional[int] = None) -> str:
    if max_length is None:
        max_length = config.graph.query_label_max
    if len(query) > max_length:
        return query[:max_length] + ELLIPSIS
    return query


def build_graph(query: str, memories: List[Memory]) -> GraphData:
    """Build the knowledge graph for a query and its retrieved memories.

    Node order is the query, memories in input order, then concepts in
    first-discovery order. Tags, ideas and people share a single concept
    namespace, so equal strings collapse into one node while each edge keeps
    its provenance label. Edges are never deduplicated.

    Args:
        query: Query text, used for the query node label
        memories: Memories to include, typically the top-K retrieval result

    Returns:
        GraphData value
    """
    query_ref = NodeRef.query()
    nodes = [GraphNode(ref=query_ref, label=query_label(query), group=NodeKind.QUERY.value, weight=QUERY_WEIGHT)]
    edges = []
    concepts: Dict[str, None] = {}

    for memory in memories:
        memory_ref = NodeRef.memory(memory.id)
        nodes.append(GraphNode(ref=memory_ref, label=memory.title, group=NodeKind.MEMORY.value, weight=MEMORY_WEIGHT))
        edges.append(GraphEdge(source=query_ref, target=memory_ref, label='related', weight=1))

        for label, values in (('tag', memory.tags), ('idea', memory.ideas), ('person', memory.people)):
            for value in values:
                concepts.setdefault(value, None)
                edges.append(GraphEdge(source=memory_ref, target=NodeRef.concept(value), label=label))

    for concept in concepts:
        nodes.append(
            GraphNode(ref=NodeRef.concept(concept), label=concept, group=NodeKind.CONCEPT.value, weight=CONCEPT_WEIGHT))

    logger.debug(f'Built graph with {len(nodes)} nodes and {len(edges)} edges')
    return GraphData(nodes=nodes, edges=edges)


def is_node_selected(ref: NodeRef, selection: 'SelectionModel') -> bool:
    if ref.kind is NodeKind.MEMORY:
        return selection.is_memory_selected(ref.key)
    if ref.kind is NodeKind.CONCEPT:
        return ref.key in selection.selected_concepts
    return False


def render_graph(graph: GraphData, selection: 'SelectionModel') -> Dict[str, List[Dict[str, Any]]]:
    """Renderer payload with a 'selected' flag per node.

    Selection only styles nodes; the topology is the graph's own.
    """
    payload = graph.to_dict()
    for node, item in zip(graph.nodes, payload['nodes']):
        item['selected'] = is_node_selected(node.ref, selection)
    return payload
