"""
JSON utilities for converting memories to and from plain dicts.
"""

from typing import Any, Dict, List

from ..models.core import Memory
from .timestamp_utils import from_iso, to_iso

_LIST_FIELDS = ('tags', 'ideas', 'people', 'events')


def memory_to_dict(memory: Memory) -> Dict[str, Any]:
    """Convert a Memory into a JSON-compatible dict.

    Args:
        memory: Memory to convert

    Returns:
        Dict with ISO date string; 'content' omitted when unset
    """
    data = {
        'id': memory.id,
        'date': to_iso(memory.date),
        'title': memory.title,
        'summary': memory.summary,
        'tags': list(memory.tags),
        'people': list(memory.people),
        'ideas': list(memory.ideas),
        'events': list(memory.events),
    }
    if memory.content is not None:
        data['content'] = memory.content
    return data


def memory_from_dict(data: Dict[str, Any]) -> Memory:
    """Build a Memory from a decoded JSON object.

    Args:
        data: Dict as produced by memory_to_dict

    Returns:
        Memory instance

    Raises:
        ValueError: If a required field is missing or has the wrong type
    """
    if not isinstance(data, dict):
        raise ValueError(f'Memory record must be an object, got {type(data).__name__}')

    for key in ('id', 'date', 'title', 'summary'):
        if not isinstance(data.get(key), str):
            raise ValueError(f'Memory record field {key!r} must be a string')

    lists = {}
    for key in _LIST_FIELDS:
        value = data.get(key) or []
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise ValueError(f'Memory record field {key!r} must be a list of strings')
        lists[key] = list(value)

    content = data.get('content')
    if content is not None and not isinstance(content, str):
        raise ValueError("Memory record field 'content' must be a string")

    return Memory(id=data['id'],
                  date=from_iso(data['date']),
                  title=data['title'],
                  summary=data['summary'],
                  content=content,
                  **lists)


def memories_to_list(memories: List[Memory]) -> List[Dict[str, Any]]:
    return [memory_to_dict(memory) for memory in memories]
