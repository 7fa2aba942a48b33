"""
suspendlist CLI - Arrange items according to precedence rule sets.

Commands:
    suspendlist arrange   Apply a rule set and print the resulting order
    suspendlist check     Validate the listed order without moving anything
    suspendlist limits    Show how far each item may move
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

import click
import yaml
from pydantic import ValidationError

from suspendlist.config import get_config, get_log_level
from suspendlist.errors import ConflictingRulesError
from suspendlist.limits import compute_limits
from suspendlist.loader import RuleSetLoader, build_suspended_list
from suspendlist.logger import configure_logging
from suspendlist.otel import emit_validation_result
from suspendlist.rules import RuleIndex
from suspendlist.schema import RuleSetSpec
from suspendlist.validator import RuleValidator

__all__ = ["main"]


def _load_rule_set(path: str) -> RuleSetSpec:
    """Resolve and load a rule set, turning load errors into click errors."""
    resolved = get_config().resolve_rule_set_path(path)
    try:
        return RuleSetLoader().load(resolved)
    except FileNotFoundError as e:
        raise click.ClickException(str(e))
    except yaml.YAMLError as e:
        raise click.ClickException(f"Invalid YAML in {resolved}: {e}")
    except ValidationError as e:
        raise click.ClickException(f"Invalid rule set {resolved}: {e}")


def _rules_of(spec: RuleSetSpec) -> RuleIndex:
    rules = RuleIndex()
    for rule in spec.rules:
        rules.add_rule(rule.before, rule.after)
    return rules


@click.group()
@click.version_option(package_name="suspendlist")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default=None,
    help="Logging level (defaults to SUSPENDLIST_LOG_LEVEL)",
)
@click.option(
    "--log-format",
    type=click.Choice(["json", "text"]),
    default=None,
    help="Log output format (defaults to SUSPENDLIST_LOG_FORMAT)",
)
def main(log_level: Optional[str], log_format: Optional[str]) -> None:
    """suspendlist - Keep ordered items consistent with precedence rules."""
    config = get_config()
    configure_logging(log_level or get_log_level(), log_format or config.log_format)


@main.command("arrange")
@click.argument("rule_set", type=click.Path(dir_okay=False))
@click.option(
    "--format", "-f", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option(
    "--transactional/--no-transactional",
    default=None,
    help="Roll back on conflict (defaults to SUSPENDLIST_TRANSACTIONAL)",
)
def arrange(rule_set: str, output_format: str, transactional: Optional[bool]) -> None:
    """Apply a rule set and print the resulting order.

    Example:
        suspendlist arrange render-layers.rules.yaml --format json
    """
    spec = _load_rule_set(rule_set)

    try:
        result = build_suspended_list(spec, transactional=transactional)
    except ConflictingRulesError as e:
        raise click.ClickException(f"Conflicting rules in '{spec.name}': {e}")

    if output_format == "json":
        click.echo(json.dumps({"name": spec.name, "items": result.to_list()}, indent=2))
    else:
        for item in result:
            click.echo(item)


@main.command("check")
@click.argument("rule_set", type=click.Path(dir_okay=False))
@click.option("--fail-on-violation", is_flag=True, help="Exit with error if any rule is violated")
def check(rule_set: str, fail_on_violation: bool) -> None:
    """Validate the listed item order against the rules, without moving anything."""
    spec = _load_rule_set(rule_set)
    result = RuleValidator(_rules_of(spec)).validate(spec.items)
    emit_validation_result(result)

    for r in result.results:
        if r.latent:
            marker = "-"
        elif r.satisfied:
            marker = "✓"
        else:
            marker = "✗"
        click.echo(f"  {marker} {r.message}")

    click.echo(f"\nRules checked: {result.total_checked}")
    click.echo(f"Violations:    {result.violations}")

    if fail_on_violation and not result.passed:
        sys.exit(1)


@main.command("limits")
@click.argument("rule_set", type=click.Path(dir_okay=False))
def limits(rule_set: str) -> None:
    """Show how many steps each listed item may move left and right."""
    spec = _load_rule_set(rule_set)
    movement = compute_limits(spec.items, _rules_of(spec))

    def _fmt(steps: Optional[int]) -> str:
        return "-" if steps is None else str(steps)

    width = max((len(item) for item in spec.items), default=4)
    click.echo(f"{'item'.ljust(width)}  left  right")
    for item, limit in zip(spec.items, movement):
        click.echo(f"{item.ljust(width)}  {_fmt(limit.left).rjust(4)}  {_fmt(limit.right).rjust(5)}")


if __name__ == "__main__":
    main()
