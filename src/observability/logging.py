
import json
import logging
from typing import List, Optional
from src.context import Comparison, RankedItem, RankingScope

logger = logging.getLogger("houserank")
logger.setLevel(logging.INFO)
# Handler設定は実行環境に依存するため、ここでは標準出力への出力のみを想定
handler = logging.StreamHandler()
handler.setFormatter(logging.Formatter('%(message)s'))
logger.addHandler(handler)

def _scope_fields(scope: RankingScope) -> dict:
    return {
        "user_id": scope.user_id,
        "collection_name": scope.collection_name,
        "ranking_name": scope.ranking_name
    }

def log_comparison_requested(
    house_id: str,
    scope: RankingScope,
    comparisons: List[Comparison],
    subject: Optional[RankedItem]
):
    log_data = {
        "event": "comparison_requested",
        "house_id": house_id,
        **_scope_fields(scope),
        "comparisons_so_far": len(comparisons),
        "subject_id": subject.id if subject else None,
        "subject_rank": subject.rank if subject else None
    }

    logger.info(json.dumps(log_data))

def log_rank_finalized(
    house_id: str,
    scope: RankingScope,
    final_rank: int,
    comparisons: List[Comparison],
    rebalanced: List[RankedItem]
):
    """
    挿入結果を構造化ログ(JSON)として出力する。
    """

    log_data = {
        "event": "rank_finalized",
        "house_id": house_id,
        **_scope_fields(scope),
        "final_rank": final_rank,
        "comparisons": [
            {
                "subject_id": c.subject_id,
                "subject_rank": c.subject_rank,
                "new_item_is_better": c.new_item_is_better
            }
            for c in comparisons
        ],
        "shifted": [item.id for item in rebalanced if item.rank is not None and item.rank > final_rank]
    }

    logger.info(json.dumps(log_data))

def log_rank_removed(house_id: str, scope: RankingScope, removed_rank: int, shifted: int):
    log_data = {
        "event": "rank_removed",
        "house_id": house_id,
        **_scope_fields(scope),
        "removed_rank": removed_rank,
        "shifted_count": shifted
    }

    logger.info(json.dumps(log_data))
