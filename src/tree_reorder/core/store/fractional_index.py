"""Float order keys that leave room for inserts between neighbours.

A key between two neighbours is their midpoint; before the first sibling it
is half the first key; after the last it is the last key plus the interval.
Repeated halving eventually collapses the gap, at which point the sibling
group is renumbered with ``generate_balanced_keys``.
"""

from tree_reorder.config import ORDER_KEY_INTERVAL, ORDER_KEY_MIN_GAP


def generate_key_between(before: float | None, after: float | None) -> float:
    """Return a key that sorts after ``before`` and before ``after``."""
    if before is None and after is None:
        return ORDER_KEY_INTERVAL
    if before is None:
        return after / 2.0  # type: ignore[operator]
    if after is None:
        return before + ORDER_KEY_INTERVAL
    return (before + after) / 2.0


def should_rebalance(order_key: float) -> bool:
    return abs(order_key) < ORDER_KEY_MIN_GAP


def generate_balanced_keys(count: int) -> list[float]:
    """Evenly spaced keys: interval, 2 * interval, ..."""
    return [i * ORDER_KEY_INTERVAL for i in range(1, count + 1)]
