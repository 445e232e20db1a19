from recallgraph import respond
from recallgraph.services.narrative import synthesize
from recallgraph.services.recall_service import HISTORY_QUERY, RecallService
from recallgraph.services.retrieval import retrieve


def test_respond_seed_scenario(seed_corpus):
    result = RecallService().respond('urban micro-grid AI', seed_corpus)

    assert [item.id for item in result.recall] == ['m5', 'm3', 'm2', 'm1', 'm6']
    assert result.recall[0].date == '21 Jun 2024'
    assert result.primary_connection.startswith('Merging "urban + micro" with Urban micro-mobility data')
    assert '"Bio-signal wearables"' in result.unexpected_connection
    assert result.graph.node_ids()[:6] == ['q', 'm5', 'm3', 'm2', 'm1', 'm6']
    assert 'm4' not in result.graph.node_ids()
    assert result.concepts[:4] == ['urban', 'micro', 'grid', 'ai']


def test_respond_respects_limit(seed_corpus):
    result = RecallService(limit=2).respond('urban micro-grid AI', seed_corpus)
    assert [item.id for item in result.recall] == ['m5', 'm3']
    # unexpected pick is the least similar memory outside the top two
    assert 'Unexpected connection: blend' in result.unexpected_connection


def test_respond_with_empty_collection():
    result = respond('anything at all', [])
    assert result.recall == []
    assert result.graph.node_ids() == ['q']
    assert result.unexpected_connection.startswith('Unexpected link:')


def test_history_graph_uses_overview_label_for_blank_query(seed_corpus):
    graph = RecallService().history_graph('   ', seed_corpus)
    assert graph.nodes[0].label == HISTORY_QUERY
    assert len([node for node in graph.nodes if node.group == 'memory']) == 5


def test_respond_matches_narrative_synthesis(seed_corpus):
    service = RecallService(limit=3)
    result = service.respond('robots and vision', seed_corpus)
    narrative = synthesize('robots and vision', seed_corpus, retrieve('robots and vision', seed_corpus, 3))

    assert result.primary_connection == narrative.primary_connection
    assert result.unexpected_connection == narrative.unexpected_connection
    assert result.concepts == narrative.concepts
