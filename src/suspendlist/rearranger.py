"""
Cascading rearrangement of a list so that one precedence rule holds.

Given a rule ``before < after`` the rearranger moves the first ``after``
occurrence to the right of the last ``before`` occurrence. If the item being
moved has a successor of its own standing closer than the target, that
successor is moved first, and so on down the chain. Only items actually in
the way are touched.

The cascade is driven by an explicit worklist of list positions rather than
recursion; its depth is bounded only by the list length.

Usage::

    from suspendlist.rearranger import Rearranger
    from suspendlist.rules import RuleIndex

    items = ["a", "b", "c"]
    rules = RuleIndex()
    moves = Rearranger(items, rules).enforce("c", "a")
    # items == ["b", "c", "a"], moves == 1
"""

from __future__ import annotations

import logging
from typing import Any, Hashable, Optional

from suspendlist.errors import ConflictingRulesError
from suspendlist.limits import compute_limits
from suspendlist.rules import RuleIndex

logger = logging.getLogger(__name__)

__all__ = ["Rearranger"]


class Rearranger:
    """
    Moves items of ``sequence`` in place until a given rule holds.

    Args:
        sequence: The list to rearrange. It is mutated directly.
        rules: Rules already in force; moves never break them.
    """

    def __init__(self, sequence: list[Any], rules: RuleIndex) -> None:
        self._sequence = sequence
        self._rules = rules

    def enforce(self, predecessor: Hashable, successor: Hashable) -> int:
        """Rearrange so that every ``predecessor`` precedes every ``successor``.

        Args:
            predecessor: Canonical key that must come first.
            successor: Canonical key that must come after.

        Returns:
            Number of single-item moves performed. Zero when the rule already
            holds or when either key is absent from the list.

        Raises:
            ConflictingRulesError: If the rule cannot hold together with the
                rules already in force.
        """
        moves = 0
        pred_index = self._last_index(predecessor)
        succ_index = self._first_index(successor)

        if pred_index is None or succ_index is None:
            return moves

        # A key can only precede itself when it occurs at most once.
        if predecessor == successor and pred_index != succ_index:
            raise self._conflict(succ_index, pred_index, (predecessor, successor))

        # Several occurrences of either key need one pass per violating pair.
        while pred_index > succ_index:
            logger.debug(
                "Enforcing %r < %r: moving position %d past position %d",
                predecessor,
                successor,
                succ_index,
                pred_index,
            )
            moves += self._resolve([succ_index], pred_index, (predecessor, successor))
            pred_index = self._last_index(predecessor)
            succ_index = self._first_index(successor)

        return moves

    def _resolve(
        self,
        stack: list[int],
        target: int,
        rule: Optional[tuple[Hashable, Hashable]] = None,
    ) -> int:
        """Move every stacked position to the right of ``target``.

        The top of the stack is always handled first. An item whose own
        right bound lies before ``target`` stays put until that bound has
        been moved out of the way.
        """
        moves = 0

        while stack:
            current = stack[-1]
            gap = target - current

            if gap == 0:
                mover = stack[-2] if len(stack) > 1 else current
                raise self._conflict(mover, current, rule)

            limit = compute_limits(self._sequence, self._rules)[current]

            if limit.right is not None and limit.right < gap:
                # Blocked by a successor; move that one out of the way first
                stack.append(current + limit.right + 1)
                continue

            stack.pop()
            item = self._sequence.pop(current)
            self._sequence.insert(target, item)
            moves += 1
            logger.debug("Moved position %d to %d", current, target)
            target -= 1

        return moves

    def _conflict(
        self,
        mover: int,
        blocker: int,
        rule: Optional[tuple[Hashable, Hashable]],
    ) -> ConflictingRulesError:
        item = self._sequence[mover]
        blocking_item = self._sequence[blocker]
        error = ConflictingRulesError(
            item=item,
            blocker=blocking_item,
            item_key=self._rules.key_of(item),
            blocker_key=self._rules.key_of(blocking_item),
            rule=rule,
        )
        logger.warning("%s", error)
        return error

    def _first_index(self, key: Hashable) -> Optional[int]:
        for index, item in enumerate(self._sequence):
            if self._rules.key_of(item) == key:
                return index
        return None

    def _last_index(self, key: Hashable) -> Optional[int]:
        for index in range(len(self._sequence) - 1, -1, -1):
            if self._rules.key_of(self._sequence[index]) == key:
                return index
        return None
