
from typing import Any, Callable
from src.context import RankedItem
from src.errors import ComparatorTypeError

Comparator = Callable[[RankedItem, RankedItem], int]

def _sort_key(value: Any) -> Any:
    if isinstance(value, str):
        return value.casefold()
    return value

def get_comparator(key: str = "title", descending: bool = False) -> Comparator:
    """
    Factory function for three-way comparators over a payload field.

    Args:
        key (str): Payload field to order by, e.g. "title" or "price"
        descending (bool): Larger values rank first when True

    Returns:
        Comparator: negative if the first item ranks before the second,
        zero if tied, positive otherwise. Items missing the field rank last.
        Raises ComparatorTypeError when two values of the field are not orderable.
    """
    def compare(a: RankedItem, b: RankedItem) -> int:
        value_a = a.payload.get(key)
        value_b = b.payload.get(key)

        if value_a is None and value_b is None:
            return 0
        if value_a is None:
            return 1
        if value_b is None:
            return -1

        value_a = _sort_key(value_a)
        value_b = _sort_key(value_b)
        if value_a == value_b:
            return 0

        try:
            result = -1 if value_a < value_b else 1
        except TypeError as e:
            raise ComparatorTypeError(key, value_a, value_b) from e
        return -result if descending else result

    return compare
