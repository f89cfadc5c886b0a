
from typing import Any, Optional
from src.context import RankingScope

class RankingError(Exception):
    """Base class for failures of the ranking service layer."""

class HouseNotFoundError(RankingError):
    def __init__(self, house_id: str):
        super().__init__(f"House not found: {house_id}")
        self.house_id = house_id

class NotRankedError(RankingError):
    def __init__(self, house_id: str, scope: RankingScope):
        super().__init__(f"House {house_id} is not ranked in {scope.collection_name}/{scope.ranking_name}")
        self.house_id = house_id
        self.scope = scope

class AlreadyRankedError(RankingError):
    def __init__(self, house_id: str, scope: RankingScope):
        super().__init__(f"House {house_id} is already ranked in {scope.collection_name}/{scope.ranking_name}")
        self.house_id = house_id
        self.scope = scope

class RankingBusyError(RankingError):
    """Another session holds the scope lock past the configured timeout."""
    def __init__(self, scope: RankingScope, timeout_seconds: float):
        super().__init__(
            f"Ranking {scope.collection_name}/{scope.ranking_name} is busy (waited {timeout_seconds}s)"
        )
        self.scope = scope
        self.timeout_seconds = timeout_seconds

class StaleComparisonError(RankingError):
    """The comparison log no longer fits the ranking; the session must start over."""
    def __init__(self, scope: RankingScope, subject_id: Optional[str] = None):
        message = f"Comparison log is stale for {scope.collection_name}/{scope.ranking_name}"
        if subject_id is not None:
            message += f": {subject_id} is no longer ranked"
        super().__init__(message)
        self.scope = scope
        self.subject_id = subject_id

class ComparatorTypeError(RankingError):
    def __init__(self, key: str, value_a: Any, value_b: Any):
        super().__init__(
            f"Cannot compare '{key}' values {value_a!r} ({type(value_a).__name__}) "
            f"and {value_b!r} ({type(value_b).__name__})"
        )
        self.key = key
