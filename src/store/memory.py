
import threading
from typing import Any, Dict, List, Optional, Set
from src.context import RankedItem, RankingScope
from src.store.adapter import item_from_row, items_from_rows, rank_updates

class InMemoryRankingStore:
    """
    RankingStore backed by plain dicts.

    House rows live in one table; ranks live in one map per scope, the same
    split as a houses table plus a rankings table keyed by
    (user, collection, ranking). Every commit runs under a single lock so a
    rebalance plan and the new rank become visible together.
    """
    def __init__(self):
        self._houses: Dict[str, Dict[str, Any]] = {}
        self._ranks: Dict[RankingScope, Dict[str, int]] = {}
        self._rankings: Set[RankingScope] = set()
        self._lock = threading.RLock()

    def add_house(
        self,
        house_id: str,
        payload: Dict[str, Any],
        collection_name: str,
        user_id: str = "default"
    ) -> RankedItem:
        row = {
            **payload,
            'id': house_id,
            'collection_name': collection_name,
            'user_id': user_id
        }
        with self._lock:
            self._houses[house_id] = row
        return item_from_row(row)

    def get_house(self, house_id: str) -> Optional[RankedItem]:
        with self._lock:
            row = self._houses.get(house_id)
        if row is None:
            return None
        return item_from_row(row)

    def list_ranked(self, scope: RankingScope) -> List[RankedItem]:
        with self._lock:
            ranks = dict(self._ranks.get(scope, {}))
            rows = [
                {**self._houses[house_id], 'rank': rank}
                for house_id, rank in ranks.items()
                if house_id in self._houses
            ]
        rows.sort(key=lambda row: row['rank'])
        return items_from_rows(rows)

    def list_unranked(self, scope: RankingScope) -> List[RankedItem]:
        with self._lock:
            ranked_ids = set(self._ranks.get(scope, {}))
            rows = [
                row for house_id, row in self._houses.items()
                if house_id not in ranked_ids
                and row.get('collection_name') == scope.collection_name
                and row.get('user_id') == scope.user_id
            ]
        return items_from_rows(rows)

    def get_rank(self, scope: RankingScope, house_id: str) -> Optional[int]:
        with self._lock:
            return self._ranks.get(scope, {}).get(house_id)

    def commit_insertion(
        self,
        scope: RankingScope,
        house_id: str,
        final_rank: int,
        rebalanced: List[RankedItem]
    ) -> None:
        with self._lock:
            ranks = self._ranks.setdefault(scope, {})
            for update in rank_updates(rebalanced):
                ranks[update['id']] = update['rank']
            ranks[house_id] = final_rank
            self._rankings.add(scope)

    def commit_removal(self, scope: RankingScope, house_id: str, rebalanced: List[RankedItem]) -> None:
        with self._lock:
            ranks = self._ranks.setdefault(scope, {})
            ranks.pop(house_id, None)
            for update in rank_updates(rebalanced):
                if update['id'] != house_id:
                    ranks[update['id']] = update['rank']

    def create_ranking(self, scope: RankingScope) -> None:
        # upsert
        with self._lock:
            self._rankings.add(scope)

    def list_rankings(self, collection_name: str, user_id: str = "default") -> List[str]:
        with self._lock:
            names = {
                scope.ranking_name for scope in self._rankings
                if scope.collection_name == collection_name and scope.user_id == user_id
            }
        return sorted(names)

    def list_collections(self, user_id: str = "default") -> List[str]:
        with self._lock:
            names = {
                row['collection_name'] for row in self._houses.values()
                if row.get('user_id') == user_id and row.get('collection_name')
            }
        return sorted(names)

    def ranked_scopes(self, house_id: str) -> List[RankingScope]:
        with self._lock:
            return [scope for scope, ranks in self._ranks.items() if house_id in ranks]

    def delete_house(self, house_id: str) -> None:
        with self._lock:
            self._houses.pop(house_id, None)
            for ranks in self._ranks.values():
                ranks.pop(house_id, None)
