import json

import pytest

from recallgraph.services.memory_store import MemoryStore, MemoryStoreError, seed_memories
from recallgraph.utils.json_utils import memory_from_dict, memory_to_dict
from recallgraph.utils.timestamp_utils import utc_date


def test_missing_file_is_seeded(store):
    memories = store.load()
    assert [memory.id for memory in memories] == ['m1', 'm2', 'm3', 'm4', 'm5', 'm6']
    assert store.load() == memories


def test_missing_file_without_seeding(tmp_path):
    store = MemoryStore(path=str(tmp_path / 'empty.json'), seed_on_empty=False)
    assert store.load() == []


def test_malformed_json_fails_closed(store):
    with open(store.path, 'w', encoding='utf-8') as handle:
        handle.write('{not json')
    assert store.load() == []


def test_invalid_utf8_fails_closed(store):
    with open(store.path, 'wb') as handle:
        handle.write(b'[\xff\xfe garbage')
    assert store.load() == []


def test_add_memory_keeps_unreadable_file(store):
    with open(store.path, 'wb') as handle:
        handle.write(b'[\xff\xfe garbage')

    with pytest.raises(MemoryStoreError):
        store.add_memory('Battery storage', 'Sized a home battery.')

    with open(store.path, 'rb') as handle:
        assert handle.read() == b'[\xff\xfe garbage'


def test_non_list_payload_fails_closed(store):
    with open(store.path, 'w', encoding='utf-8') as handle:
        json.dump({'id': 'm1'}, handle)
    assert store.load() == []


def test_malformed_records_are_skipped(store):
    good = memory_to_dict(seed_memories()[0])
    with open(store.path, 'w', encoding='utf-8') as handle:
        json.dump([good, {'id': 'broken'}, {**good, 'id': 'x', 'tags': 'solar'}], handle)
    assert [memory.id for memory in store.load()] == ['m1']


def test_save_and_load_round_trip(store):
    memories = seed_memories()
    store.save(memories)
    assert store.load() == memories


def test_add_memory_uses_injected_id_and_clock(store):
    memory = store.add_memory('Battery storage', 'Sized a home battery.', tags=['energy'])
    assert memory.id == 'new-1'
    assert memory.date == utc_date(2025, 5, 1)
    assert memory.people == [] and memory.events == []

    loaded = store.load()
    assert loaded[-1] == memory
    assert len(loaded) == 7

    second = store.add_memory('Heat pumps', 'Compared COP figures.')
    assert second.id == 'new-2'


def test_save_failure_raises(tmp_path):
    blocker = tmp_path / 'blocker'
    blocker.write_text('file, not a directory')
    store = MemoryStore(path=str(blocker / 'memories.json'))
    with pytest.raises(MemoryStoreError):
        store.save(seed_memories())


def test_memory_dict_accepts_z_suffix_dates():
    memory = memory_from_dict({
        'id': 'm1',
        'date': '2024-03-14T00:00:00.000Z',
        'title': 'Solar',
        'summary': 'Panels',
        'tags': ['solar']
    })
    assert memory.date == utc_date(2024, 3, 14)
    assert memory.ideas == [] and memory.content is None


def test_memory_dict_rejects_bad_date():
    with pytest.raises(ValueError):
        memory_from_dict({'id': 'm1', 'date': 'yesterday', 'title': 't', 'summary': 's'})
