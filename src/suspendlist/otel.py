"""
OTel span event emission helpers for suspended lists.

Events are added to the current span only when it is recording, so calling
these helpers outside a traced context is a cheap no-op.

Usage::

    from suspendlist.otel import emit_conflict, emit_rearranged

    emit_rearranged("render-layers", "background", "hud", moves=2)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Hashable

from opentelemetry import trace as otel_trace

from suspendlist.errors import ConflictingRulesError

if TYPE_CHECKING:
    from suspendlist.validator import RuleValidationResult

logger = logging.getLogger(__name__)

__all__ = ["emit_rearranged", "emit_conflict", "emit_validation_result"]


def _add_span_event(name: str, attributes: dict[str, str | int | float | bool]) -> None:
    """Add an event to the current OTel span if it is recording."""
    span = otel_trace.get_current_span()
    if span and span.is_recording():
        span.add_event(name=name, attributes=attributes)


def emit_rearranged(
    list_name: str,
    predecessor: Hashable,
    successor: Hashable,
    moves: int,
) -> None:
    """Emit a span event for a rearrangement.

    Event name: ``suspendlist.rearranged``
    """
    _add_span_event(
        "suspendlist.rearranged",
        {
            "suspendlist.list": list_name,
            "suspendlist.rule.before": str(predecessor),
            "suspendlist.rule.after": str(successor),
            "suspendlist.moves": moves,
        },
    )


def emit_conflict(list_name: str, error: ConflictingRulesError) -> None:
    """Emit a span event for a rule conflict.

    Event name: ``suspendlist.conflict``
    """
    attrs: dict[str, str | int | float | bool] = {
        "suspendlist.list": list_name,
        "suspendlist.conflict.item": str(error.item_key),
        "suspendlist.conflict.blocker": str(error.blocker_key),
        "suspendlist.conflict.message": str(error),
    }
    if error.rule is not None:
        attrs["suspendlist.rule.before"] = str(error.rule[0])
        attrs["suspendlist.rule.after"] = str(error.rule[1])

    _add_span_event("suspendlist.conflict", attrs)


def emit_validation_result(result: "RuleValidationResult") -> None:
    """Emit a span event summarising rule validation.

    Event name: ``suspendlist.validation.complete``
    """
    attrs: dict[str, str | int | float | bool] = {
        "validation.passed": result.passed,
        "validation.total_checked": result.total_checked,
        "validation.violations": result.violations,
    }

    if result.passed:
        logger.debug(
            "Rule validation complete: %d/%d satisfied",
            result.total_checked - result.violations,
            result.total_checked,
        )
    else:
        logger.warning(
            "Rule validation FAILED: %d/%d violations",
            result.violations,
            result.total_checked,
        )

    _add_span_event("suspendlist.validation.complete", attrs)
