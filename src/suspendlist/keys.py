"""
Canonical key encoders.

Every rule and every limit lookup is keyed on ``key(item)`` rather than on the
item itself, so two distinct instances with the same key are interchangeable
for rule matching. Encoders are passed per ``SuspendedList`` / ``RuleIndex``
instance.

Usage::

    from suspendlist import SuspendedList
    from suspendlist.keys import json_key

    layers = SuspendedList(key=json_key)
    layers.push_right({"layer": "hud"})
"""

from __future__ import annotations

import json
from typing import Any, Callable, Hashable

__all__ = ["KeyEncoder", "identity", "json_key"]

KeyEncoder = Callable[[Any], Hashable]


def identity(item: Any) -> Any:
    """Return ``item`` unchanged; the item is its own key."""
    return item


def json_key(item: Any) -> str:
    """Serialize ``item`` to canonical JSON (sorted keys, compact separators).

    Lets unhashable values such as dicts and lists take part in rules.
    """
    return json.dumps(item, sort_keys=True, separators=(",", ":"), default=str)
