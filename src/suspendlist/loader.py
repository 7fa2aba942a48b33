"""
YAML rule-set loader with per-path caching.

Loads rule-set YAML files, validates them against the Pydantic schema
models, and caches the result per resolved file path.

Usage::

    from suspendlist.loader import RuleSetLoader, build_suspended_list

    spec = RuleSetLoader().load(Path("render-layers.rules.yaml"))
    layers = build_suspended_list(spec)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import ClassVar, Optional

import yaml

from suspendlist.schema import RuleSetSpec
from suspendlist.suspended_list import SuspendedList

logger = logging.getLogger(__name__)

__all__ = ["RuleSetLoader", "build_suspended_list"]


class RuleSetLoader:
    """Loads and caches rule sets from YAML files."""

    _cache: ClassVar[dict[str, RuleSetSpec]] = {}

    @classmethod
    def clear_cache(cls) -> None:
        """Clear the rule-set cache (useful in tests)."""
        cls._cache.clear()

    def load(self, path: Path) -> RuleSetSpec:
        """Load a rule set from a YAML file.

        Args:
            path: Path to the YAML rule-set file.

        Returns:
            Validated ``RuleSetSpec`` instance.

        Raises:
            FileNotFoundError: If the file does not exist.
            yaml.YAMLError: If the file contains invalid YAML.
            pydantic.ValidationError: If the YAML does not match the schema.
        """
        key = str(path.resolve())
        if key in self._cache:
            logger.debug("Rule-set cache hit: %s", key)
            return self._cache[key]

        if not path.exists():
            raise FileNotFoundError(f"Rule-set file not found: {path}")

        with open(path) as fh:
            raw = yaml.safe_load(fh)

        spec = RuleSetSpec.model_validate(raw)
        self._cache[key] = spec

        logger.debug(
            "Loaded rule set: name=%s, items=%d, rules=%d",
            spec.name,
            len(spec.items),
            len(spec.rules),
        )
        return spec

    def load_from_string(self, yaml_str: str) -> RuleSetSpec:
        """Load a rule set from a YAML string (convenience for testing).

        Args:
            yaml_str: YAML content as a string.

        Returns:
            Validated ``RuleSetSpec`` instance.
        """
        raw = yaml.safe_load(yaml_str)
        return RuleSetSpec.model_validate(raw)


def build_suspended_list(
    spec: RuleSetSpec,
    *,
    transactional: Optional[bool] = None,
) -> SuspendedList:
    """Build a ``SuspendedList`` from a rule set.

    Items are pushed to the right in file order, then rules are added in
    file order, each one rearranging the list as it is added.

    Raises:
        ConflictingRulesError: If a rule contradicts the ones before it.
    """
    result = SuspendedList(name=spec.name, transactional=transactional)
    for item in spec.items:
        result.push_right(item)
    for rule in spec.rules:
        result.add_rule_before(rule.before, rule.after)
    return result
