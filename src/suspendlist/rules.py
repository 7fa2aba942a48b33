"""
Bidirectional index of precedence rules.

A rule ``(x, y)`` reads "every occurrence of x must precede every occurrence
of y". The index keeps two adjacency maps over canonical keys so that both
"what must come after x" and "what must come before y" are O(1) lookups:

- ``_must_follow[x]`` holds the successor keys of ``x``
- ``_must_precede[y]`` holds the predecessor keys of ``y``

Every mutation updates both maps, so ``y in successors(x)`` holds exactly
when ``x in predecessors(y)``. Inner maps are insertion-ordered dicts used as
sets, which keeps enforcement order deterministic.

Usage::

    from suspendlist.rules import RuleIndex

    rules = RuleIndex()
    rules.add_rule("background", "hud")
    assert "hud" in rules.get_successors_of("background")
"""

from __future__ import annotations

from typing import Any, Dict, Hashable, Iterator, KeysView, Tuple

from suspendlist.keys import KeyEncoder, identity

__all__ = ["RuleIndex"]

_EMPTY: Dict[Hashable, None] = {}


class RuleIndex:
    """
    Stores precedence rules as two complementary adjacency maps.

    Rules are stored against keys, not items: a rule outlives the items it
    mentions and applies again as soon as a matching item shows up.

    Args:
        key: Encoder mapping an item to its canonical key.
    """

    def __init__(self, key: KeyEncoder = identity) -> None:
        self._key = key
        self._must_follow: Dict[Hashable, Dict[Hashable, None]] = {}
        self._must_precede: Dict[Hashable, Dict[Hashable, None]] = {}

    def key_of(self, item: Any) -> Hashable:
        """Return the canonical key of ``item``."""
        return self._key(item)

    def clone(self) -> "RuleIndex":
        """Return an independent deep copy sharing only the key encoder."""
        copy = RuleIndex(self._key)
        copy._must_follow = {k: dict(v) for k, v in self._must_follow.items()}
        copy._must_precede = {k: dict(v) for k, v in self._must_precede.items()}
        return copy

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_rule(self, predecessor: Any, successor: Any) -> None:
        """Record that ``predecessor`` must come before ``successor``.

        Adding a rule that already exists has no effect.
        """
        before = self._key(predecessor)
        after = self._key(successor)
        self._must_follow.setdefault(before, {})[after] = None
        self._must_precede.setdefault(after, {})[before] = None

    def remove_rule(self, predecessor: Any, successor: Any) -> None:
        """Remove the rule if present; absent rules are ignored."""
        before = self._key(predecessor)
        after = self._key(successor)
        self._discard(self._must_follow, before, after)
        self._discard(self._must_precede, after, before)

    def remove_rules_for_item(self, item: Any) -> None:
        """Remove every rule naming ``key(item)`` on either side."""
        key = self._key(item)

        for after in self._must_follow.pop(key, _EMPTY):
            self._discard(self._must_precede, after, key)

        for before in self._must_precede.pop(key, _EMPTY):
            self._discard(self._must_follow, before, key)

    @staticmethod
    def _discard(
        side: Dict[Hashable, Dict[Hashable, None]],
        key: Hashable,
        other: Hashable,
    ) -> None:
        bucket = side.get(key)
        if bucket is None:
            return
        bucket.pop(other, None)
        if not bucket:
            del side[key]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def predecessors(self, key: Hashable) -> KeysView[Hashable]:
        """Keys required before ``key``, as a read-only set-like view."""
        return self._must_precede.get(key, _EMPTY).keys()

    def successors(self, key: Hashable) -> KeysView[Hashable]:
        """Keys required after ``key``, as a read-only set-like view."""
        return self._must_follow.get(key, _EMPTY).keys()

    def get_predecessors_of(self, item: Any) -> KeysView[Hashable]:
        """Keys that must precede ``item`` (possibly empty)."""
        return self.predecessors(self._key(item))

    def get_successors_of(self, item: Any) -> KeysView[Hashable]:
        """Keys that must follow ``item`` (possibly empty)."""
        return self.successors(self._key(item))

    def has_rule(self, predecessor: Any, successor: Any) -> bool:
        return self._key(successor) in self.get_successors_of(predecessor)

    def rules(self) -> Iterator[Tuple[Hashable, Hashable]]:
        """Iterate over ``(predecessor_key, successor_key)`` pairs."""
        for before, afters in self._must_follow.items():
            for after in afters:
                yield before, after

    def __len__(self) -> int:
        return sum(len(afters) for afters in self._must_follow.values())

    def __bool__(self) -> bool:
        return bool(self._must_follow)

    def __repr__(self) -> str:
        pairs = ", ".join(f"{b!r} < {a!r}" for b, a in self.rules())
        return f"RuleIndex([{pairs}])"
