
import uuid
import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional, Sequence
from src.config import RankingConfig
from src.context import Comparison, RankedItem, RankingScope
from src.errors import (
    AlreadyRankedError,
    HouseNotFoundError,
    NotRankedError,
    StaleComparisonError,
)
from src.observability.logging import log_comparison_requested, log_rank_finalized, log_rank_removed
from src.ranking.api import Comparator, get_comparator
from src.ranking.lock import ScopeLocks
from src.ranking.resolver import (
    final_rank,
    insertion_index,
    next_comparison_subject,
    rebalance,
    rebalance_after_removal,
)
from src.store.base import RankingStore

logger = logging.getLogger(__name__)

class RankingService:
    """
    Drives insertion and removal sessions against a RankingStore.

    Comparison gathering is lock-free: callers keep the comparison log and
    pass it back on every call. Anything that writes ranks (finalize,
    insert_with_comparator, remove) runs under the scope lock and re-reads
    the ranked list inside it, so sessions on one scope are serialized.
    """
    def __init__(
        self,
        store: RankingStore,
        config: Optional[RankingConfig] = None,
        locks: Optional[ScopeLocks] = None
    ):
        self.store = store
        self.config = config or RankingConfig()
        self.locks = locks or ScopeLocks(timeout_seconds=self.config.lock_timeout_seconds)

    def scope(
        self,
        collection_name: Optional[str] = None,
        ranking_name: Optional[str] = None,
        user_id: str = "default"
    ) -> RankingScope:
        return RankingScope(
            collection_name=collection_name or self.config.default_collection_name,
            ranking_name=ranking_name or self.config.default_ranking_name,
            user_id=user_id
        )

    def add_house(
        self,
        payload: Dict[str, Any],
        collection_name: Optional[str] = None,
        house_id: Optional[str] = None,
        user_id: str = "default"
    ) -> RankedItem:
        return self.store.add_house(
            house_id or str(uuid.uuid4()),
            payload,
            collection_name or self.config.default_collection_name,
            user_id
        )

    def ranked(self, scope: RankingScope) -> List[RankedItem]:
        return self.store.list_ranked(scope)

    def unranked(self, scope: RankingScope) -> List[RankedItem]:
        return self.store.list_unranked(scope)

    def create_ranking(self, scope: RankingScope) -> None:
        self.store.create_ranking(scope)

    def rankings(self, collection_name: Optional[str] = None, user_id: str = "default") -> List[str]:
        return self.store.list_rankings(collection_name or self.config.default_collection_name, user_id)

    def next_comparison(
        self,
        house_id: str,
        comparisons: Sequence[Comparison],
        scope: RankingScope
    ) -> Optional[RankedItem]:
        """
        Next house to compare the unranked house against, or None when the
        session can be finalized.
        """
        self._require_house(house_id)
        ranked_items = self.store.list_ranked(scope)
        rebased = self._rebase(ranked_items, comparisons, scope)
        subject = next_comparison_subject(ranked_items, rebased)
        log_comparison_requested(house_id, scope, rebased, subject)
        return subject

    def finalize(self, house_id: str, comparisons: Sequence[Comparison], scope: RankingScope) -> int:
        """
        Commit the house at the rank its comparison log resolves to.

        Comparisons are matched to the current list by subject_id, so a log
        gathered while another session changed the scope still commits a
        contiguous ranking.
        """
        self._require_house(house_id)

        with self.locks.hold(scope):
            ranked_items = self._ranked_without(house_id, scope)
            rebased = self._rebase(ranked_items, comparisons, scope)
            rank = final_rank(ranked_items, rebased)
            if not 0 <= rank <= len(ranked_items):
                raise StaleComparisonError(scope)
            rebalanced = rebalance(ranked_items, rank)
            self.store.commit_insertion(scope, house_id, rank, rebalanced)

        log_rank_finalized(house_id, scope, rank, rebased, rebalanced)
        return rank

    def insert_with_comparator(
        self,
        house_id: str,
        scope: RankingScope,
        compare: Optional[Comparator] = None
    ) -> int:
        """
        Rank a house without asking anyone: the position comes from a
        comparator over payload fields (configured batch_comparator by default).
        """
        house = self._require_house(house_id)
        compare = compare or get_comparator(self.config.batch_comparator)

        with self.locks.hold(scope):
            ranked_items = self._ranked_without(house_id, scope)
            rank = insertion_index(ranked_items, house, compare)
            rebalanced = rebalance(ranked_items, rank)
            self.store.commit_insertion(scope, house_id, rank, rebalanced)

        log_rank_finalized(house_id, scope, rank, [], rebalanced)
        return rank

    def remove(self, house_id: str, scope: RankingScope) -> int:
        self._require_house(house_id)

        with self.locks.hold(scope):
            removed_rank = self.store.get_rank(scope, house_id)
            if removed_rank is None:
                raise NotRankedError(house_id, scope)

            remaining = [item for item in self.store.list_ranked(scope) if item.id != house_id]
            rebalanced = rebalance_after_removal(remaining, removed_rank)
            self.store.commit_removal(scope, house_id, rebalanced)

        shifted = sum(1 for item in remaining if item.rank is not None and item.rank > removed_rank)
        log_rank_removed(house_id, scope, removed_rank, shifted)
        return removed_rank

    def delete_house(self, house_id: str) -> List[RankingScope]:
        """Remove the house from every ranking it holds a rank in, then drop it."""
        self._require_house(house_id)

        scopes = self.store.ranked_scopes(house_id)
        for scope in scopes:
            self.remove(house_id, scope)
        self.store.delete_house(house_id)
        return scopes

    def collections(self, user_id: str = "default") -> List[str]:
        return self.store.list_collections(user_id)

    def _require_house(self, house_id: str) -> RankedItem:
        house = self.store.get_house(house_id)
        if house is None:
            raise HouseNotFoundError(house_id)
        return house

    def _rebase(
        self,
        ranked_items: List[RankedItem],
        comparisons: Sequence[Comparison],
        scope: RankingScope
    ) -> List[Comparison]:
        """
        Re-read each comparison's subject_rank from the current list by subject_id.

        Raises StaleComparisonError when a subject has left the ranking.
        """
        current = {item.id: item.rank for item in ranked_items}
        rebased: List[Comparison] = []
        for comparison in comparisons:
            rank = current.get(comparison.subject_id)
            if rank is None:
                raise StaleComparisonError(scope, comparison.subject_id)
            if rank != comparison.subject_rank:
                logger.warning(
                    "Comparison against %s at rank %d does not match current rank %d in %s/%s",
                    comparison.subject_id,
                    comparison.subject_rank,
                    rank,
                    scope.collection_name,
                    scope.ranking_name
                )
                comparison = replace(comparison, subject_rank=rank)
            rebased.append(comparison)
        return rebased

    def _ranked_without(self, house_id: str, scope: RankingScope) -> List[RankedItem]:
        ranked_items = self.store.list_ranked(scope)
        if any(item.id == house_id for item in ranked_items):
            raise AlreadyRankedError(house_id, scope)
        return ranked_items
