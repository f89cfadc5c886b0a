
from typing import Any, Dict, List, Optional, Protocol
from src.context import RankedItem, RankingScope

class RankingStore(Protocol):
    def add_house(
        self,
        house_id: str,
        payload: Dict[str, Any],
        collection_name: str,
        user_id: str = "default"
    ) -> RankedItem:
        ...

    def get_house(self, house_id: str) -> Optional[RankedItem]:
        ...

    def list_ranked(self, scope: RankingScope) -> List[RankedItem]:
        """
        スコープ内でランク付け済みのアイテムをrank昇順 (0 = best) で返す
        """
        ...

    def list_unranked(self, scope: RankingScope) -> List[RankedItem]:
        """
        スコープのコレクションに属し、まだランク付けされていないアイテムを返す
        """
        ...

    def get_rank(self, scope: RankingScope, house_id: str) -> Optional[int]:
        ...

    def commit_insertion(
        self,
        scope: RankingScope,
        house_id: str,
        final_rank: int,
        rebalanced: List[RankedItem]
    ) -> None:
        """
        リバランス結果と新アイテムのrankをアトミックに書き込む
        """
        ...

    def commit_removal(self, scope: RankingScope, house_id: str, rebalanced: List[RankedItem]) -> None:
        """
        アイテムのrankを削除し、リバランス結果をアトミックに書き込む
        """
        ...

    def create_ranking(self, scope: RankingScope) -> None:
        ...

    def list_rankings(self, collection_name: str, user_id: str = "default") -> List[str]:
        ...

    def list_collections(self, user_id: str = "default") -> List[str]:
        ...

    def ranked_scopes(self, house_id: str) -> List[RankingScope]:
        """
        アイテムがrankを持つすべてのスコープを返す
        """
        ...

    def delete_house(self, house_id: str) -> None:
        """
        アイテムの行を削除する。呼び出し側が先に各スコープから除外しておくこと
        """
        ...
