
from typing import Any, Dict, Iterable, List
from src.context import RankedItem

def item_from_row(row: Dict[str, Any]) -> RankedItem:
    """
    永続化層の行 (dict) をRankedItemに変換する。
    id と rank 以外のカラムはアルゴリズムにとって不透明なので payload に入れる。
    """
    # 必須フィールドの抽出
    house_id = row.get('id')
    rank = row.get('rank')

    payload = {k: v for k, v in row.items() if k not in ['id', 'rank']}

    return RankedItem(
        id=str(house_id),
        rank=int(rank) if rank is not None else None,
        payload=payload
    )

def items_from_rows(rows: Iterable[Dict[str, Any]]) -> List[RankedItem]:
    return [item_from_row(row) for row in rows]

def rank_updates(items: Iterable[RankedItem]) -> List[Dict[str, Any]]:
    """
    リバランス結果を一括更新用のペイロード [{"id": ..., "rank": ...}] に変換する。
    rankを持たないアイテムは更新対象外。
    """
    return [
        {'id': item.id, 'rank': item.rank}
        for item in items
        if item.rank is not None
    ]
