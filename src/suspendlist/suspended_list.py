"""
An ordered list that keeps itself consistent with precedence rules.

``SuspendedList`` owns a plain Python list and a ``RuleIndex``. Adding a rule
or inserting an item immediately rearranges the list so every rule whose
items are present holds again; removing rules or items never moves anything.

By default every mutating call is transactional: the rearrangement runs on a
scratch copy that replaces the live list only when it succeeds, so a call
that raises ``ConflictingRulesError`` leaves the list exactly as it was. With
``transactional=False`` moves are applied in place and a conflict can leave
the list partially rearranged.

Usage::

    from suspendlist import SuspendedList

    layers = SuspendedList()
    for name in ["hud", "sprites", "background"]:
        layers.push_right(name)

    layers.add_rule_before("background", "sprites")
    layers.add_rule_before("sprites", "hud")
    layers.to_list()  # ["background", "sprites", "hud"]
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Callable, Hashable, Iterator, Optional

from suspendlist.config import get_config
from suspendlist.errors import ConflictingRulesError
from suspendlist.keys import KeyEncoder, identity
from suspendlist.logger import OrderingLogger
from suspendlist.otel import emit_conflict, emit_rearranged
from suspendlist.rearranger import Rearranger
from suspendlist.rules import RuleIndex

logger = logging.getLogger(__name__)

__all__ = ["SuspendedList"]


class SuspendedList:
    """
    Ordered collection kept consistent with "x before y" rules.

    Args:
        key: Encoder mapping an item to its canonical key.
        transactional: Roll back the whole call on conflict. ``None`` uses
            the configured default (``SUSPENDLIST_TRANSACTIONAL``).
        name: Name used in structured logs and span events.
        event_logger: Structured event logger; one is created if omitted.
    """

    def __init__(
        self,
        key: KeyEncoder = identity,
        *,
        transactional: Optional[bool] = None,
        name: str = "default",
        event_logger: Optional[OrderingLogger] = None,
    ) -> None:
        config = get_config()
        self._key = key
        self._items: list[Any] = []
        self._rules = RuleIndex(key)
        self._transactional = config.transactional if transactional is None else transactional
        self.name = name
        # Rearrangements awaiting commit; None outside a transactional call
        self._pending: Optional[list[tuple[Hashable, Hashable, int, str]]] = None
        self._events = event_logger or OrderingLogger(
            list_name=name, service_name=config.service_name
        )

    # ========================================
    # Essential access methods
    # ========================================

    @property
    def length(self) -> int:
        return len(self._items)

    @property
    def rules(self) -> RuleIndex:
        """The rule index; mutate it through this list's rule methods."""
        return self._rules

    @property
    def transactional(self) -> bool:
        return self._transactional

    def item(self, index: int) -> Any:
        """Return the item at ``index``, or None when outside ``[0, length)``."""
        if 0 <= index < len(self._items):
            return self._items[index]
        return None

    def to_list(self) -> list[Any]:
        """Return a copy of the items; changing it does not affect this list."""
        return list(self._items)

    def copy(self) -> "SuspendedList":
        """Return an independent copy of the items order and the rules."""
        duplicate = SuspendedList(
            self._key,
            transactional=self._transactional,
            name=self.name,
            event_logger=self._events,
        )
        duplicate._items = list(self._items)
        duplicate._rules = self._rules.clone()
        return duplicate

    # ========================================
    # Rules
    # ========================================

    def add_rule_before(self, x: Any, y: Any) -> None:
        """Require every ``x`` to come before every ``y``.

        The list is rearranged first and the rule recorded afterwards, so the
        rule is not in force while it is being applied and is not recorded
        at all if applying it fails.

        Raises:
            ConflictingRulesError: If the rule contradicts the stored rules
                for the items currently in the list.
        """
        before = self._key(x)
        after = self._key(y)

        with self._mutation(trigger="rule") as working:
            self._enforce(working, before, after, trigger="rule")

        self._rules.add_rule(x, y)
        self._events.log_rule_added(before=before, after=after)

    def add_rule_after(self, x: Any, y: Any) -> None:
        """Require every ``x`` to come after every ``y``."""
        self.add_rule_before(y, x)

    def remove_rule_before(self, x: Any, y: Any) -> None:
        """Drop the rule "x before y"; the list is not rearranged."""
        if self._rules.has_rule(x, y):
            self._rules.remove_rule(x, y)
            self._events.log_rule_removed(before=self._key(x), after=self._key(y))

    def remove_rule_after(self, x: Any, y: Any) -> None:
        """Drop the rule "x after y"; the list is not rearranged."""
        self.remove_rule_before(y, x)

    def remove_rules_for_item(self, item: Any) -> None:
        """Drop every rule that mentions ``item``'s key."""
        if not (self._rules.get_predecessors_of(item) or self._rules.get_successors_of(item)):
            return
        self._rules.remove_rules_for_item(item)
        self._events.log_rules_cleared(key=self._key(item))

    # ========================================
    # Insertion and removal
    # ========================================

    def insert_at(self, item: Any, index: int) -> None:
        """Insert ``item`` at ``index`` and apply the rules that concern it.

        Raises:
            IndexError: If ``index`` is outside ``[0, length]``.
            ConflictingRulesError: If the item cannot be placed without
                breaking a rule.
        """
        if not 0 <= index <= len(self._items):
            raise IndexError(
                f"Insert index {index} out of range for list of length {len(self._items)}"
            )

        with self._mutation(trigger="insert") as working:
            working.insert(index, item)
            self._apply_rules_for_item(working, item)

    def push_left(self, item: Any) -> None:
        """Insert ``item`` at the front and apply the rules that concern it."""
        self.insert_at(item, 0)

    def push_right(self, item: Any) -> None:
        """Append ``item`` and apply the rules that concern it."""
        self.insert_at(item, len(self._items))

    def remove_at(self, index: int) -> Any:
        """Remove and return the item at ``index``.

        Raises:
            IndexError: If ``index`` is outside ``[0, length)``.
        """
        if not 0 <= index < len(self._items):
            raise IndexError(
                f"Remove index {index} out of range for list of length {len(self._items)}"
            )
        return self._items.pop(index)

    def remove_item(self, item: Any) -> bool:
        """Remove the first occurrence equal to ``item``.

        Returns:
            True if an item was removed, False if none matched.
        """
        index = self.index_of(item)
        if index == -1:
            return False
        del self._items[index]
        return True

    def pop_left(self) -> Any:
        """Remove and return the first item, or None when empty."""
        return self._items.pop(0) if self._items else None

    def pop_right(self) -> Any:
        """Remove and return the last item, or None when empty."""
        return self._items.pop() if self._items else None

    # ========================================
    # Lookup
    # ========================================

    def index_of(self, item: Any) -> int:
        """Index of the first occurrence equal to ``item``, or -1."""
        for index, candidate in enumerate(self._items):
            if candidate == item:
                return index
        return -1

    def last_index_of(self, item: Any) -> int:
        """Index of the last occurrence equal to ``item``, or -1."""
        for index in range(len(self._items) - 1, -1, -1):
            if self._items[index] == item:
                return index
        return -1

    def find(self, predicate: Callable[[Any], bool]) -> Any:
        """First item matching ``predicate``, or None."""
        return next((item for item in self._items if predicate(item)), None)

    def find_index(self, predicate: Callable[[Any], bool]) -> int:
        """Index of the first item matching ``predicate``, or -1."""
        for index, item in enumerate(self._items):
            if predicate(item):
                return index
        return -1

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._items))

    def __contains__(self, item: Any) -> bool:
        return item in self._items

    def __repr__(self) -> str:
        return f"SuspendedList({self._items!r})"

    # ========================================
    # Internal helpers
    # ========================================

    @contextmanager
    def _mutation(self, trigger: str) -> Iterator[list[Any]]:
        """Yield the list to mutate; commit it on success when transactional.

        In transactional mode rearrangement events are held back until the
        commit, so a rolled-back call reports only its conflict.
        """
        if not self._transactional:
            try:
                yield self._items
            except ConflictingRulesError as error:
                self._report_conflict(error, trigger)
                raise
            return

        working = list(self._items)
        self._pending = []
        try:
            yield working
        except ConflictingRulesError as error:
            logger.debug("Conflict in %s; list left unchanged", self.name)
            self._report_conflict(error, trigger)
            raise
        else:
            self._items = working
            for before, after, moves, step_trigger in self._pending:
                self._report_rearranged(before, after, moves, step_trigger)
        finally:
            self._pending = None

    def _report_conflict(self, error: ConflictingRulesError, trigger: str) -> None:
        self._events.log_conflict(error, trigger=trigger)
        emit_conflict(self.name, error)

    def _report_rearranged(
        self,
        before: Hashable,
        after: Hashable,
        moves: int,
        trigger: str,
    ) -> None:
        self._events.log_rearranged(before=before, after=after, moves=moves, trigger=trigger)
        emit_rearranged(self.name, before, after, moves)

    def _apply_rules_for_item(self, working: list[Any], item: Any) -> None:
        """Enforce every stored rule that names ``item``'s key."""
        key = self._key(item)
        for successor in tuple(self._rules.successors(key)):
            self._enforce(working, key, successor, trigger="insert")
        for predecessor in tuple(self._rules.predecessors(key)):
            self._enforce(working, predecessor, key, trigger="insert")

    def _enforce(
        self,
        working: list[Any],
        before: Hashable,
        after: Hashable,
        trigger: str,
    ) -> None:
        moves = Rearranger(working, self._rules).enforce(before, after)
        if not moves:
            return
        if self._pending is not None:
            self._pending.append((before, after, moves, trigger))
        else:
            self._report_rearranged(before, after, moves, trigger)
