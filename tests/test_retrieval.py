from recallgraph.services.retrieval import (build_recall, memory_document, recent_memories, retrieve,
                                           score_memory)

SEED_QUERY = 'urban micro-grid AI'


def test_seed_corpus_rank_order(seed_corpus):
    ranked = retrieve(SEED_QUERY, seed_corpus, limit=6)
    assert [memory.id for memory in ranked] == ['m5', 'm3', 'm2', 'm1', 'm6', 'm4']


def test_top_result_overlaps_query_concepts(seed_corpus):
    top = retrieve(SEED_QUERY, seed_corpus, limit=1)[0]
    assert top.id == 'm5'
    assert 'urban' in top.tags


def test_result_length_is_min_of_limit_and_candidates(seed_corpus):
    assert len(retrieve(SEED_QUERY, seed_corpus, limit=3)) == 3
    assert len(retrieve(SEED_QUERY, seed_corpus, limit=50)) == len(seed_corpus)
    assert len(retrieve(SEED_QUERY, seed_corpus)) == 5


def test_result_is_prefix_of_full_ranking(seed_corpus):
    full = retrieve(SEED_QUERY, seed_corpus, limit=len(seed_corpus))
    for limit in range(len(seed_corpus) + 1):
        assert retrieve(SEED_QUERY, seed_corpus, limit=limit) == full[:limit]


def test_empty_candidates_return_nothing():
    assert retrieve('anything', []) == []


def test_zero_limit_returns_nothing(seed_corpus):
    assert retrieve(SEED_QUERY, seed_corpus, limit=0) == []


def test_equal_scores_keep_input_order(memory_factory):
    memories = [memory_factory(f'm{i}', title='unrelated note') for i in range(5)]
    ranked = retrieve('solar energy', memories, limit=5)
    assert [memory.id for memory in ranked] == ['m0', 'm1', 'm2', 'm3', 'm4']


def test_own_tags_bias_the_query(memory_factory):
    tagged = memory_factory('tagged', title='Rooftop turbines', summary='wind study', tags=['wind'])
    untagged = memory_factory('untagged', title='Rooftop turbines', summary='wind study')
    assert score_memory('rooftop', tagged) > score_memory('rooftop', untagged)
    assert [memory.id for memory in retrieve('rooftop', [untagged, tagged])] == ['tagged', 'untagged']


def test_memory_document_handles_missing_content(memory_factory):
    memory = memory_factory('m1', title='Title', summary='Summary')
    assert memory_document(memory) == 'Title Summary '


def test_build_recall_formats_short_dates(seed_corpus):
    items = build_recall(seed_corpus[:1])
    assert items[0].date == '14 Mar 2024'
    assert items[0].tags == ['solar', 'AI', 'energy']
    assert items[0].title == 'AI-optimised solar panels'


def test_recent_memories_newest_first(seed_corpus):
    recent = recent_memories(seed_corpus, limit=3)
    assert [memory.id for memory in recent] == ['m3', 'm2', 'm5']
