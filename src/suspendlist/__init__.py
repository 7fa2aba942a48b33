"""
suspendlist - Ordered lists that keep themselves consistent with precedence rules.

A ``SuspendedList`` holds items together with rules of the form "x must come
before y". Adding a rule or inserting an item repositions as few items as
possible so every rule whose items are present holds again, or raises
``ConflictingRulesError`` when the rules form a cycle over the current items.

Example usage:
    from suspendlist import SuspendedList

    steps = SuspendedList()
    for step in ["test", "compile", "package"]:
        steps.push_right(step)

    steps.add_rule_before("compile", "test")
    steps.add_rule_before("test", "package")
    steps.to_list()  # ["compile", "test", "package"]

Public API::

    from suspendlist import (
        SuspendedList,
        RuleIndex,
        MovementLimit,
        compute_limits,
        Rearranger,
        ConflictingRulesError,
        SuspendedListError,
        identity,
        json_key,
    )
"""

from suspendlist.errors import ConflictingRulesError, SuspendedListError
from suspendlist.keys import KeyEncoder, identity, json_key
from suspendlist.limits import MovementLimit, compute_limits
from suspendlist.rearranger import Rearranger
from suspendlist.rules import RuleIndex
from suspendlist.suspended_list import SuspendedList

__version__ = "0.1.0"
__all__ = [
    # Core
    "SuspendedList",
    "RuleIndex",
    "MovementLimit",
    "compute_limits",
    "Rearranger",
    # Errors
    "SuspendedListError",
    "ConflictingRulesError",
    # Keys
    "KeyEncoder",
    "identity",
    "json_key",
    "__version__",
]
