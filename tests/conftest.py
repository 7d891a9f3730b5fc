"""Shared fixtures for lookup tree tests."""

from __future__ import annotations

import pytest

from domain_lookup_tree.tree import DomainLookupTree


@pytest.fixture
def scenario_rules() -> list[str]:
    """A mix of absolute and nested wildcard rules under two domains."""
    return [
        "test.com",
        "www.test.com",
        "123.test.com",
        ".google.com",
        ".test.google.com",
        "123.test.google.com",
    ]


@pytest.fixture
def tree() -> DomainLookupTree:
    return DomainLookupTree()


@pytest.fixture
def scenario_tree(scenario_rules) -> DomainLookupTree:
    return DomainLookupTree.from_rules(scenario_rules)
