"""Pure sequence helpers for simulating a drag before it happens."""

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def array_move(items: Sequence[T], from_index: int, to_index: int) -> list[T]:
    """Return a new list with the element at ``from_index`` moved to ``to_index``.

    The input is never modified. Indices follow list semantics, so the moved
    element ends up at ``to_index`` in the result.
    """
    result = list(items)
    if not result:
        return result
    element = result.pop(from_index)
    result.insert(to_index, element)
    return result
