"""
Rule validator for item sequences.

Checks an ordered sequence against every rule of a ``RuleIndex`` without
moving anything. A rule holds when the last occurrence of its predecessor
key comes before the first occurrence of its successor key. Rules whose keys
are not both present are latent and count as satisfied.

Usage::

    from suspendlist.validator import RuleValidator

    result = RuleValidator(layers.rules).validate(layers.to_list())
    if not result.passed:
        for check in result.results:
            if not check.satisfied:
                print(check.message)
"""

from __future__ import annotations

import logging
from typing import Any, Hashable, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from suspendlist.rules import RuleIndex

logger = logging.getLogger(__name__)

__all__ = ["RuleCheckResult", "RuleValidationResult", "RuleValidator"]


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------


class RuleCheckResult(BaseModel):
    """Result of checking a single rule."""

    model_config = ConfigDict(extra="forbid")

    predecessor: Hashable = Field(..., description="Key that must come first")
    successor: Hashable = Field(..., description="Key that must come after")
    satisfied: bool = Field(..., description="Whether the rule holds")
    latent: bool = Field(
        False, description="True if either key is absent from the sequence"
    )
    predecessor_index: Optional[int] = Field(
        None, description="Last position of the predecessor key (None if absent)"
    )
    successor_index: Optional[int] = Field(
        None, description="First position of the successor key (None if absent)"
    )
    message: str = Field("", description="Human-readable explanation")


class RuleValidationResult(BaseModel):
    """Aggregated result of validating every rule."""

    model_config = ConfigDict(extra="forbid")

    passed: bool = Field(..., description="True if no rule is violated")
    total_checked: int = Field(..., description="Number of rules checked")
    results: list[RuleCheckResult] = Field(
        default_factory=list, description="Per-rule check results"
    )
    violations: int = Field(0, description="Number of violated rules")


# ---------------------------------------------------------------------------
# Validator
# ---------------------------------------------------------------------------


class RuleValidator:
    """Validates item order against stored rules.

    Args:
        rules: The rule index to validate against.
    """

    def __init__(self, rules: RuleIndex) -> None:
        self._rules = rules

    def validate(self, sequence: Sequence[Any]) -> RuleValidationResult:
        """Validate ``sequence`` against every stored rule."""
        first: dict[Hashable, int] = {}
        last: dict[Hashable, int] = {}
        for index, item in enumerate(sequence):
            key = self._rules.key_of(item)
            first.setdefault(key, index)
            last[key] = index

        results = [
            self._check_rule(before, after, last.get(before), first.get(after))
            for before, after in self._rules.rules()
        ]
        violations = sum(1 for r in results if not r.satisfied)

        for r in results:
            if not r.satisfied:
                logger.info("Rule violation: %s", r.message)

        return RuleValidationResult(
            passed=violations == 0,
            total_checked=len(results),
            results=results,
            violations=violations,
        )

    @staticmethod
    def _check_rule(
        before: Hashable,
        after: Hashable,
        before_index: Optional[int],
        after_index: Optional[int],
    ) -> RuleCheckResult:
        if before_index is None or after_index is None:
            missing = before if before_index is None else after
            return RuleCheckResult(
                predecessor=before,
                successor=after,
                satisfied=True,
                latent=True,
                predecessor_index=before_index,
                successor_index=after_index,
                message=f"Rule {before} < {after} is latent: {missing} not in sequence",
            )

        if before_index <= after_index:
            return RuleCheckResult(
                predecessor=before,
                successor=after,
                satisfied=True,
                predecessor_index=before_index,
                successor_index=after_index,
                message=(
                    f"Rule satisfied: {before} (last at {before_index}) "
                    f"< {after} (first at {after_index})"
                ),
            )

        return RuleCheckResult(
            predecessor=before,
            successor=after,
            satisfied=False,
            predecessor_index=before_index,
            successor_index=after_index,
            message=(
                f"Rule violated: {before} (last at {before_index}) should precede "
                f"{after} (first at {after_index})"
            ),
        )
