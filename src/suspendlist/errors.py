"""Exceptions raised by suspended lists."""

from __future__ import annotations

from typing import Any, Hashable, Optional, Tuple

__all__ = ["SuspendedListError", "ConflictingRulesError"]


class SuspendedListError(Exception):
    """Base class for suspended list errors."""


class ConflictingRulesError(SuspendedListError):
    """
    Raised when enforcing a rule needs two items to share the same slot.

    This means the stored rules, together with the rule being enforced, form
    a cycle over the items currently in the list. Nothing is retried or
    dropped; the caller removes a conflicting rule or item and tries again.

    Attributes:
        item: The item that had to move to the right of ``blocker``.
        blocker: The item ``item`` collided with.
        item_key: Canonical key of ``item``.
        blocker_key: Canonical key of ``blocker``.
        rule: ``(predecessor_key, successor_key)`` being enforced, if known.
    """

    def __init__(
        self,
        item: Any,
        blocker: Any,
        item_key: Hashable,
        blocker_key: Hashable,
        rule: Optional[Tuple[Hashable, Hashable]] = None,
    ) -> None:
        self.item = item
        self.blocker = blocker
        self.item_key = item_key
        self.blocker_key = blocker_key
        self.rule = rule
        super().__init__(
            f"Moving {item_key} after {blocker_key} conflicts with existing rules."
        )

    def to_event(self) -> dict[str, Any]:
        """Serialize to a flat dict for structured logs and span events."""
        event: dict[str, Any] = {
            "item": str(self.item_key),
            "blocker": str(self.blocker_key),
        }
        if self.rule is not None:
            event["rule_before"] = str(self.rule[0])
            event["rule_after"] = str(self.rule[1])
        return event
