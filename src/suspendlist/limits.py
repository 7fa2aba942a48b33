"""
Movement limits for list items.

A movement limit says how many steps an item may travel left or right before
it would cross one of its bounds, i.e. the nearest item that a rule requires
to stay on that side of it. Limits are a derived view: they are recomputed
from the current list and rules on every call and never cached, because any
move shifts the positions they describe.

Example: for ``["a", "b", "c"]`` with rules a<b and a<c the limits are::

    a: MovementLimit(left=None, right=0)   # b is right next to it
    b: MovementLimit(left=0, right=None)
    c: MovementLimit(left=1, right=None)   # may hop over b, not over a
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from suspendlist.rules import RuleIndex

__all__ = ["MovementLimit", "compute_limits"]


@dataclass(frozen=True)
class MovementLimit:
    """Steps an item may move each way; ``None`` means unbounded."""

    left: Optional[int] = None
    right: Optional[int] = None

    @property
    def unbounded(self) -> bool:
        return self.left is None and self.right is None

    def allows_left(self, steps: int) -> bool:
        """True if moving ``steps`` to the left crosses no bound."""
        return self.left is None or self.left >= steps

    def allows_right(self, steps: int) -> bool:
        """True if moving ``steps`` to the right crosses no bound."""
        return self.right is None or self.right >= steps

    def to_dict(self) -> dict[str, Optional[int]]:
        return {"left": self.left, "right": self.right}


def compute_limits(sequence: Sequence[Any], rules: RuleIndex) -> list[MovementLimit]:
    """Compute the movement limit of every position in ``sequence``.

    Args:
        sequence: Items in their current order.
        rules: Rules that apply to the items.

    Returns:
        One ``MovementLimit`` per position. The nearest bound on each side
        decides the limit, whatever order the rules were added in.
    """
    keys = [rules.key_of(item) for item in sequence]
    limits: list[MovementLimit] = []

    for i, key in enumerate(keys):
        left_bounds = rules.predecessors(key)
        right_bounds = rules.successors(key)
        left: Optional[int] = None
        right: Optional[int] = None

        if left_bounds:
            for j in range(i - 1, -1, -1):
                if keys[j] in left_bounds:
                    left = i - j - 1
                    break

        if right_bounds:
            for j in range(i + 1, len(keys)):
                if keys[j] in right_bounds:
                    right = j - i - 1
                    break

        limits.append(MovementLimit(left, right))

    return limits
