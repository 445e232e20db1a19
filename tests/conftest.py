import itertools

import pytest

from recallgraph.models.core import Memory
from recallgraph.services.memory_store import MemoryStore, seed_memories
from recallgraph.utils.timestamp_utils import utc_date


def make_memory(memory_id, title='', summary='', tags=None, ideas=None, people=None, events=None, content=None):
    return Memory(id=memory_id,
                  date=utc_date(2024, 1, 1),
                  title=title,
                  summary=summary,
                  tags=list(tags or []),
                  ideas=list(ideas or []),
                  people=list(people or []),
                  events=list(events or []),
                  content=content)


@pytest.fixture
def seed_corpus():
    return seed_memories()


@pytest.fixture
def two_memories():
    return [make_memory('m1', title='Solar', tags=['solar', 'AI']), make_memory('m2', title='Wind', tags=['wind'])]


@pytest.fixture
def store(tmp_path):
    counter = itertools.count(1)
    return MemoryStore(path=str(tmp_path / 'memories.json'),
                       id_factory=lambda: f'new-{next(counter)}',
                       clock=lambda: utc_date(2025, 5, 1))


@pytest.fixture
def memory_factory():
    return make_memory
