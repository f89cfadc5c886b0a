
from dataclasses import dataclass, field
from typing import Optional, Dict, Any

def _parse_bool(value: Any) -> bool:
    # "true" (case-insensitive) is True, any other string is False
    if isinstance(value, str):
        return value.lower() == 'true'
    return bool(value)

@dataclass
class RankedItem:
    id: str
    rank: Optional[int] = None  # 0 = best, None = not ranked in this scope
    payload: Dict[str, Any] = field(default_factory=dict)

    @property
    def title(self) -> str:
        return str(self.payload.get('title', ''))

@dataclass(frozen=True)
class Comparison:
    subject_id: str
    subject_rank: int
    new_item_is_better: bool

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Comparison":
        return cls(
            subject_id=str(raw['subject_id']),
            subject_rank=int(raw['subject_rank']),
            new_item_is_better=_parse_bool(raw['new_item_is_better'])
        )

@dataclass(frozen=True)
class RankingScope:
    collection_name: str
    ranking_name: str
    user_id: str = "default"
