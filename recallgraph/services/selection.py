"""
Selection model: which memories and which of their tags are selected.

Selecting a memory selects all of its tags and deselecting it clears them.
Tags can also be toggled one by one, or per concept across every memory
that carries it. Selected concepts are always derived from the selected
tags and never stored.
"""

from dataclasses import replace
from typing import Dict, FrozenSet, List, Set

from ..models.core import Memory, NodeKind, NodeRef
from ..utils.logging_config import get_logger

logger = get_logger(__name__)


class SelectionModel:
    """Pure state machine over selected memories and selected tags per memory.

    Invariant: a memory id is a key of the selected-tag map only while its
    tag set is non-empty.
    """

    def __init__(self, memories: List[Memory]):
        self._memories: Dict[str, Memory] = {}
        self._selected_memories: Set[str] = set()
        self._selected_tags: Dict[str, Set[str]] = {}
        self.memories = memories

    @property
    def memories(self) -> List[Memory]:
        return list(self._memories.values())

    @memories.setter
    def memories(self, memories: List[Memory]) -> None:
        """Rebind to a (reloaded) collection, dropping selection for vanished ids."""
        self._memories = {memory.id: memory for memory in memories}
        self._selected_memories &= set(self._memories)
        for memory_id in list(self._selected_tags):
            if memory_id not in self._memories:
                del self._selected_tags[memory_id]

    @property
    def selected_memories(self) -> FrozenSet[str]:
        return frozenset(self._selected_memories)

    @property
    def selected_tags(self) -> Dict[str, FrozenSet[str]]:
        return {memory_id: frozenset(tags) for memory_id, tags in self._selected_tags.items()}

    @property
    def selected_concepts(self) -> FrozenSet[str]:
        """Union of every selected tag, recomputed on each access."""
        return frozenset(tag for tags in self._selected_tags.values() for tag in tags)

    @property
    def selected_memory_count(self) -> int:
        return len(self._selected_memories)

    @property
    def selected_tag_count(self) -> int:
        return sum(len(tags) for tags in self._selected_tags.values())

    def is_memory_selected(self, memory_id: str) -> bool:
        return memory_id in self._selected_memories

    def is_tag_selected(self, memory_id: str, tag: str) -> bool:
        return tag in self._selected_tags.get(memory_id, ())

    def _set_tags(self, memory_id: str, tags: Set[str]) -> None:
        if tags:
            self._selected_tags[memory_id] = tags
        else:
            self._selected_tags.pop(memory_id, None)

    def toggle_memory(self, memory_id: str) -> None:
        """Flip a memory's selection; selecting takes all its tags, deselecting clears them."""
        memory = self._memories.get(memory_id)
        if memory is None:
            logger.debug(f'Ignoring toggle for unknown memory {memory_id}')
            return

        if memory_id in self._selected_memories:
            self._selected_memories.discard(memory_id)
            self._selected_tags.pop(memory_id, None)
        else:
            self._selected_memories.add(memory_id)
            self._set_tags(memory_id, set(memory.tags))

    def toggle_tag(self, memory_id: str, tag: str) -> None:
        """Flip one tag of one memory. Memory selection is left as is."""
        if memory_id not in self._memories:
            logger.debug(f'Ignoring tag toggle for unknown memory {memory_id}')
            return

        tags = set(self._selected_tags.get(memory_id, ()))
        if tag in tags:
            tags.discard(tag)
        else:
            tags.add(tag)
        self._set_tags(memory_id, tags)

    def toggle_concept(self, concept: str) -> None:
        """Select a concept on all carrier memories, or deselect it if every carrier has it."""
        carriers = [memory for memory in self._memories.values() if concept in memory.tags]
        if not carriers:
            return

        all_selected = all(self.is_tag_selected(memory.id, concept) for memory in carriers)
        for memory in carriers:
            tags = set(self._selected_tags.get(memory.id, ()))
            if all_selected:
                tags.discard(concept)
            else:
                tags.add(concept)
            self._set_tags(memory.id, tags)

    def handle_node_click(self, node_id: str) -> None:
        """Map a renderer click on a display node id to the matching toggle."""
        ref = NodeRef.from_display_id(node_id)
        if ref.kind is NodeKind.CONCEPT:
            self.toggle_concept(ref.key)
        elif ref.kind is NodeKind.MEMORY:
            self.toggle_memory(ref.key)

    def select_all(self) -> None:
        self._selected_memories = set(self._memories)
        self._selected_tags = {}
        for memory in self._memories.values():
            self._set_tags(memory.id, set(memory.tags))

    def clear(self) -> None:
        self._selected_memories = set()
        self._selected_tags = {}

    def apply_bulk_tag(self, tag: str) -> List[Memory]:
        """Append tag to every selected memory that lacks it.

        Selection state is unchanged. The model is rebound to the updated
        collection, which is returned for the caller to persist.

        Args:
            tag: Tag to add; surrounding whitespace is stripped, blank is a no-op

        Returns:
            Full memory list with updated copies for changed memories
        """
        tag = tag.strip()
        if not tag:
            return self.memories

        updated = []
        changed = 0
        for memory in self._memories.values():
            if memory.id in self._selected_memories and tag not in memory.tags:
                memory = replace(memory, tags=memory.tags + [tag])
                changed += 1
            updated.append(memory)

        self.memories = updated
        logger.debug(f'Applied tag {tag!r} to {changed} memories')
        return updated
