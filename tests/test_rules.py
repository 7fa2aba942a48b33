"""Tests for RuleIndex - the bidirectional precedence rule index."""

import pytest

from suspendlist.keys import json_key
from suspendlist.rules import RuleIndex


@pytest.fixture
def rules():
    return RuleIndex()


def assert_symmetric(rules: RuleIndex, keys):
    for a in keys:
        for b in keys:
            assert (b in rules.successors(a)) == (a in rules.predecessors(b))


class TestClone:
    def test_clone_has_existing_rules(self, rules):
        rules.add_rule("a", "b")
        copy = rules.clone()
        assert "b" in copy.get_successors_of("a")

    def test_clone_does_not_see_later_rules(self, rules):
        rules.add_rule("a", "b")
        copy = rules.clone()
        rules.add_rule("b", "c")
        rules.add_rule("a", "c")
        assert "c" not in copy.get_successors_of("b")
        assert "c" not in copy.get_successors_of("a")

    def test_original_does_not_see_rules_added_to_clone(self, rules):
        rules.add_rule("a", "b")
        copy = rules.clone()
        copy.add_rule("a", "c")
        copy.remove_rule("a", "b")
        assert set(rules.get_successors_of("a")) == {"b"}


class TestAddRule:
    @pytest.fixture(autouse=True)
    def _a_before_b(self, rules):
        rules.add_rule("a", "b")

    def test_right_bound_for_predecessor(self, rules):
        assert "b" in rules.get_successors_of("a")

    def test_left_bound_for_successor(self, rules):
        assert "a" in rules.get_predecessors_of("b")

    def test_accumulates_successors(self, rules):
        rules.add_rule("a", "c")
        assert set(rules.get_successors_of("a")) == {"b", "c"}

    def test_accumulates_predecessors(self, rules):
        rules.add_rule("a", "c")
        assert "a" in rules.get_predecessors_of("b")
        assert "a" in rules.get_predecessors_of("c")

    def test_idempotent(self, rules):
        rules.add_rule("a", "b")
        assert len(rules) == 1
        assert list(rules.rules()) == [("a", "b")]

    def test_has_rule(self, rules):
        assert rules.has_rule("a", "b")
        assert not rules.has_rule("b", "a")


class TestRemoveRule:
    def test_missing_rule_is_noop(self, rules):
        rules.remove_rule("a", "b")
        assert len(rules) == 0

    def test_removes_both_sides(self, rules):
        rules.add_rule("a", "b")
        rules.remove_rule("a", "b")
        assert "a" not in rules.get_predecessors_of("b")
        assert "b" not in rules.get_successors_of("a")
        assert not rules

    def test_keeps_other_rules(self, rules):
        rules.add_rule("a", "b")
        rules.add_rule("a", "c")
        rules.add_rule("b", "c")
        rules.remove_rule("a", "c")
        assert "b" in rules.get_successors_of("a")
        assert "b" in rules.get_predecessors_of("c")
        assert len(rules) == 2


class TestRemoveRulesForItem:
    def test_no_rules_is_noop(self, rules):
        rules.remove_rules_for_item("a")
        assert len(rules) == 0

    def test_removes_successors_of_item(self, rules):
        rules.add_rule("a", "b")
        rules.add_rule("a", "c")
        rules.remove_rules_for_item("a")
        assert len(rules.get_successors_of("a")) == 0

    def test_removes_predecessors_of_item(self, rules):
        rules.add_rule("a", "c")
        rules.add_rule("b", "c")
        rules.remove_rules_for_item("c")
        assert len(rules.get_predecessors_of("c")) == 0

    def test_removes_item_from_other_successors(self, rules):
        rules.add_rule("a", "b")
        rules.add_rule("a", "c")
        rules.remove_rules_for_item("c")
        assert "c" not in rules.get_successors_of("a")
        assert "b" in rules.get_successors_of("a")

    def test_removes_item_from_other_predecessors(self, rules):
        rules.add_rule("a", "c")
        rules.add_rule("b", "c")
        rules.remove_rules_for_item("a")
        assert set(rules.get_predecessors_of("c")) == {"b"}


class TestQueries:
    def test_empty_predecessors(self, rules):
        bounds = rules.get_predecessors_of("a")
        assert len(bounds) == 0
        assert "b" not in bounds

    def test_empty_successors(self, rules):
        assert len(rules.get_successors_of("a")) == 0

    def test_successor_order_follows_insertion(self, rules):
        for after in ["d", "b", "c"]:
            rules.add_rule("a", after)
        assert list(rules.successors("a")) == ["d", "b", "c"]

    def test_symmetry_after_mixed_mutations(self, rules):
        rules.add_rule("a", "b")
        rules.add_rule("b", "c")
        rules.add_rule("a", "c")
        rules.add_rule("c", "d")
        rules.remove_rule("a", "c")
        rules.remove_rules_for_item("b")
        rules.add_rule("d", "a")
        assert_symmetric(rules, "abcd")
        assert sorted(rules.rules()) == [("c", "d"), ("d", "a")]


class TestKeyEncoder:
    def test_rules_match_on_key(self):
        rules = RuleIndex(key=str.lower)
        rules.add_rule("A", "b")
        assert "b" in rules.get_successors_of("a")
        assert "a" in rules.get_predecessors_of("B")

    def test_unhashable_items_with_json_key(self):
        rules = RuleIndex(key=json_key)
        rules.add_rule({"layer": 1}, {"layer": 2})
        assert rules.has_rule({"layer": 1}, {"layer": 2})
        assert json_key({"layer": 2}) in rules.get_successors_of({"layer": 1})
