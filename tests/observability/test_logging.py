
import json
import pytest
from unittest.mock import patch
from src.context import Comparison, RankedItem, RankingScope
from src.observability.logging import log_comparison_requested, log_rank_finalized, log_rank_removed

@pytest.fixture
def scope():
    return RankingScope(collection_name="Downtown", ranking_name="Main Ranking", user_id="u1")

def logged_event(mock_info):
    mock_info.assert_called_once()
    return json.loads(mock_info.call_args[0][0])

def test_rank_finalized_event(scope):
    comparisons = [Comparison(subject_id="h2", subject_rank=2, new_item_is_better=True)]
    rebalanced = [
        RankedItem(id="h1", rank=0),
        RankedItem(id="h2", rank=3),
        RankedItem(id="h3", rank=None),
    ]

    with patch('src.observability.logging.logger.info') as mock_info:
        log_rank_finalized("new", scope, 2, comparisons, rebalanced)

    event = logged_event(mock_info)
    assert event['event'] == "rank_finalized"
    assert event['house_id'] == "new"
    assert event['user_id'] == "u1"
    assert event['collection_name'] == "Downtown"
    assert event['final_rank'] == 2
    assert event['comparisons'] == [
        {'subject_id': "h2", 'subject_rank': 2, 'new_item_is_better': True}
    ]
    assert event['shifted'] == ["h2"]

def test_comparison_requested_without_subject(scope):
    with patch('src.observability.logging.logger.info') as mock_info:
        log_comparison_requested("new", scope, [], None)

    event = logged_event(mock_info)
    assert event['event'] == "comparison_requested"
    assert event['subject_id'] is None
    assert event['comparisons_so_far'] == 0

def test_rank_removed_event(scope):
    with patch('src.observability.logging.logger.info') as mock_info:
        log_rank_removed("h1", scope, 1, 3)

    event = logged_event(mock_info)
    assert event == {
        'event': "rank_removed",
        'house_id': "h1",
        'user_id': "u1",
        'collection_name': "Downtown",
        'ranking_name': "Main Ranking",
        'removed_rank': 1,
        'shifted_count': 3
    }
