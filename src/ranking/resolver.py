
from dataclasses import replace
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar
from src.context import Comparison, RankedItem

T = TypeVar("T")

def feasible_range(ranked_items: Sequence[RankedItem], comparisons: Sequence[Comparison]) -> Tuple[int, int]:
    """
    Fold the comparison log into the half-open interval [min_rank, max_rank)
    of positions still consistent with it.

    The interval is rebuilt from scratch on every call. Contradictory logs are
    folded mechanically and may produce an empty or inverted interval.
    """
    min_rank = 0
    max_rank = len(ranked_items)

    for comparison in comparisons:
        if comparison.new_item_is_better:
            max_rank = min(max_rank, comparison.subject_rank)
        else:
            min_rank = max(min_rank, comparison.subject_rank + 1)

    return min_rank, max_rank

def next_comparison_subject(
    ranked_items: Sequence[RankedItem],
    comparisons: Sequence[Comparison]
) -> Optional[RankedItem]:
    """
    Binary search step:
    returns the ranked item the new item should be compared against next,
    or None once no further comparison can narrow the position.

    Args:
        ranked_items: Items of one scope in ascending rank order (0 = best)
        comparisons: Outcomes collected so far in this insertion session

    Returns:
        The item at the midpoint of the feasible range, or None.
    """
    if not ranked_items:
        return None

    min_rank, max_rank = feasible_range(ranked_items, comparisons)
    if min_rank >= max_rank:
        return None

    mid_rank = (min_rank + max_rank) // 2

    # Ranks are contiguous, so the item normally sits at index mid_rank
    candidate = ranked_items[mid_rank]
    if candidate.rank == mid_rank:
        return candidate

    for item in ranked_items:
        if item.rank == mid_rank:
            return item
    return None

def final_rank(ranked_items: Sequence[RankedItem], comparisons: Sequence[Comparison]) -> int:
    """Insertion rank for the new item: the lower bound of the feasible range."""
    min_rank, _ = feasible_range(ranked_items, comparisons)
    return min_rank

def rebalance(ranked_items: Sequence[RankedItem], inserted_rank: int) -> List[RankedItem]:
    """
    Shift every item at or after inserted_rank down by one to open a gap.
    Items without a rank pass through untouched. The input is not mutated.
    """
    result: List[RankedItem] = []
    for item in ranked_items:
        if item.rank is not None and item.rank >= inserted_rank:
            result.append(replace(item, rank=item.rank + 1))
        else:
            result.append(item)
    return result

def rebalance_after_removal(ranked_items: Sequence[RankedItem], removed_rank: int) -> List[RankedItem]:
    """Inverse of rebalance: close the gap left by the item at removed_rank."""
    result: List[RankedItem] = []
    for item in ranked_items:
        if item.rank is not None and item.rank > removed_rank:
            result.append(replace(item, rank=item.rank - 1))
        else:
            result.append(item)
    return result

def insertion_index(sorted_items: Sequence[T], new_item: T, compare: Callable[[T, T], int]) -> int:
    """
    Insertion point of new_item in sorted_items under a three-way compare.
    Equal elements keep their place; new_item lands after them.
    """
    left = 0
    right = len(sorted_items)

    while left < right:
        mid = (left + right) // 2
        if compare(new_item, sorted_items[mid]) < 0:
            right = mid
        else:
            left = mid + 1

    return left
