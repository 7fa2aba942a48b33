"""
Pydantic v2 models for the suspended list rule-set YAML format.

A rule set names the items of a list in their initial order and the
precedence rules that must hold between them. Building a list from a rule
set pushes the items in order, then adds the rules in order.

All models use ``extra="forbid"`` to reject unknown keys at parse time.

Usage::

    from suspendlist.schema import RuleSetSpec
    import yaml

    with open("render-layers.rules.yaml") as fh:
        raw = yaml.safe_load(fh)
    spec = RuleSetSpec.model_validate(raw)
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class OrderingRule(BaseModel):
    """A precedence rule: ``before`` must precede ``after``."""

    model_config = ConfigDict(extra="forbid")

    before: str = Field(..., min_length=1, description="Item that must come first")
    after: str = Field(..., min_length=1, description="Item that must come after")
    description: Optional[str] = Field(
        None, description="Human-readable reason for this rule"
    )


class RuleSetSpec(BaseModel):
    """
    Root model for a rule-set YAML file.

    Declares the initial item order and the rules to apply to it.
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(
        ..., min_length=1, description="Rule-set schema version (e.g. 0.1.0)"
    )
    contract_type: Literal["suspended_list"] = Field(
        ..., description="Must be 'suspended_list'"
    )
    name: str = Field(..., min_length=1, description="Name of the list")
    items: list[str] = Field(
        default_factory=list, description="Items in their initial order"
    )
    rules: list[OrderingRule] = Field(
        default_factory=list, description="Rules, applied in this order"
    )
    description: Optional[str] = Field(
        None, description="Human-readable description of this rule set"
    )
