"""
Core data models for the associative memory engine.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

# Sparse term -> weight mapping, L2-normalized when non-empty
Vector = Dict[str, float]

QUERY_NODE_ID = 'q'
CONCEPT_ID_PREFIX = 'c:'


@dataclass
class Memory:
    """A recorded note with free text and tag/idea/person/event annotations.

    List fields keep insertion order; the graph uses it for node ordering.
    """
    id: str
    date: datetime
    title: str
    summary: str
    tags: List[str] = field(default_factory=list)
    ideas: List[str] = field(default_factory=list)
    people: List[str] = field(default_factory=list)
    events: List[str] = field(default_factory=list)
    content: Optional[str] = None


@dataclass
class RecallItem:
    """Display view of a retrieved memory."""
    id: str
    date: str  # formatted short date
    title: str
    summary: str
    tags: List[str]


class NodeKind(Enum):
    """Node group in a knowledge graph."""
    QUERY = 'query'
    MEMORY = 'memory'
    CONCEPT = 'concept'


@dataclass(frozen=True)
class NodeRef:
    """Identity of a graph node: the query, a memory, or a concept."""
    kind: NodeKind
    key: str = ''

    @classmethod
    def query(cls) -> 'NodeRef':
        return cls(NodeKind.QUERY)

    @classmethod
    def memory(cls, memory_id: str) -> 'NodeRef':
        return cls(NodeKind.MEMORY, memory_id)

    @classmethod
    def concept(cls, name: str) -> 'NodeRef':
        return cls(NodeKind.CONCEPT, name)

    @property
    def display_id(self) -> str:
        """Node id as understood by the renderer."""
        if self.kind is NodeKind.QUERY:
            return QUERY_NODE_ID
        if self.kind is NodeKind.CONCEPT:
            return CONCEPT_ID_PREFIX + self.key
        return self.key

    @classmethod
    def from_display_id(cls, node_id: str) -> 'NodeRef':
        """Inverse of display_id; any id that is neither query nor concept is a memory."""
        if node_id == QUERY_NODE_ID:
            return cls.query()
        if node_id.startswith(CONCEPT_ID_PREFIX):
            return cls.concept(node_id[len(CONCEPT_ID_PREFIX):])
        return cls.memory(node_id)


@dataclass
class GraphNode:
    ref: NodeRef
    label: str
    group: str
    weight: int


@dataclass
class GraphEdge:
    source: NodeRef
    target: NodeRef
    label: str
    weight: Optional[int] = None


@dataclass
class GraphData:
    """Node/edge model of a query and its related memories and concepts."""
    nodes: List[GraphNode] = field(default_factory=list)
    edges: List[GraphEdge] = field(default_factory=list)

    def node_ids(self) -> List[str]:
        return [node.ref.display_id for node in self.nodes]

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        """Serialize for a renderer using display ids and from/to edge keys."""
        nodes = [{
            'id': node.ref.display_id,
            'label': node.label,
            'group': node.group,
            'value': node.weight
        } for node in self.nodes]
        edges = []
        for edge in self.edges:
            item = {'from': edge.source.display_id, 'to': edge.target.display_id, 'label': edge.label}
            if edge.weight is not None:
                item['value'] = edge.weight
            edges.append(item)
        return {'nodes': nodes, 'edges': edges}


@dataclass
class Narrative:
    """Template-filled connection sentences for a query."""
    primary_connection: str
    unexpected_connection: str
    concepts: List[str] = field(default_factory=list)


@dataclass
class RespondResult:
    """Everything produced for one query."""
    query: str
    recall: List[RecallItem]
    primary_connection: str  # how old and new ideas combine
    unexpected_connection: str  # surprising link
    graph: GraphData
    concepts: List[str] = field(default_factory=list)
