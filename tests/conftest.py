"""
Pytest configuration and fixtures for suspendlist tests.
"""

from __future__ import annotations

import logging
import os
from typing import Generator

import pytest

from suspendlist import SuspendedList
from suspendlist.config import reset_config
from suspendlist.loader import RuleSetLoader


# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def clean_config(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Drop SUSPENDLIST_* variables and the config singleton around each test."""
    for key in list(os.environ):
        if key.startswith("SUSPENDLIST_"):
            monkeypatch.delenv(key, raising=False)
    reset_config()
    RuleSetLoader.clear_cache()

    yield

    reset_config()
    RuleSetLoader.clear_cache()


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Detach handlers that configure_logging() may have bound to a test stream."""
    yield

    for name in ("suspendlist", "suspendlist.events"):
        target = logging.getLogger(name)
        target.handlers.clear()
        target.addHandler(logging.NullHandler())
    logging.getLogger("suspendlist").setLevel(logging.NOTSET)
    logging.getLogger("suspendlist.events").setLevel(logging.INFO)


# ============================================================================
# List Fixtures
# ============================================================================


@pytest.fixture
def abcde() -> SuspendedList:
    """A suspended list holding a, b, c, d, e in order, with no rules."""
    letters = SuspendedList()
    for item in "abcde":
        letters.push_right(item)
    return letters


@pytest.fixture
def rule_set_yaml() -> str:
    return """\
schema_version: "0.1.0"
contract_type: suspended_list
name: pipeline
items: [test, compile, package]
rules:
  - before: compile
    after: test
  - before: test
    after: package
    description: only package tested code
"""
