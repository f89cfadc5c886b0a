
import pytest
from dataclasses import FrozenInstanceError
from src.context import Comparison, RankedItem, RankingScope

def test_comparison_from_dict():
    comparison = Comparison.from_dict({'subject_id': 7, 'subject_rank': '2', 'new_item_is_better': True})
    assert comparison == Comparison(subject_id="7", subject_rank=2, new_item_is_better=True)

def test_comparison_from_dict_missing_key():
    with pytest.raises(KeyError):
        Comparison.from_dict({'subject_id': 'h1', 'subject_rank': 0})

def test_comparison_is_immutable():
    comparison = Comparison(subject_id="h1", subject_rank=0, new_item_is_better=False)
    with pytest.raises(FrozenInstanceError):
        comparison.subject_rank = 1

def test_scope_is_hashable_key():
    a = RankingScope(collection_name="Downtown", ranking_name="Main Ranking")
    b = RankingScope(collection_name="Downtown", ranking_name="Main Ranking", user_id="default")
    assert {a: 1}[b] == 1

def test_ranked_item_title_defaults_to_empty():
    assert RankedItem(id="h1").title == ""
    assert RankedItem(id="h1", rank=0, payload={'title': 'Maple St'}).title == "Maple St"

@pytest.mark.parametrize("raw, expected", [
    ('false', False),
    ('False', False),
    ('true', True),
    ('TRUE', True),
    (True, True),
    (False, False),
    (0, False),
    (1, True),
])
def test_comparison_from_dict_parses_outcome(raw, expected):
    comparison = Comparison.from_dict({'subject_id': 'h1', 'subject_rank': 0, 'new_item_is_better': raw})
    assert comparison.new_item_is_better is expected
