"""Label decomposition and input classification for domain rules.

Domains are split on "." and reversed so the top-level label comes
first: "www.example.com" becomes ["com", "example", "www"]. The tree
walks labels in that order, sharing the common suffix of every rule
and branching only where domains diverge.

A rule with a single leading dot is a wildcard (suffix) rule:
".example.com" matches "example.com" and every name below it. Splitting
such a rule leaves an empty label at the end of the reversed list. That
artifact is never stored in the tree, so parse_rule() drops it and
reports the wildcard separately.

Anything else that produces an empty label ("a..com", "a.com.",
"..a.com", ".") is malformed and raises InvalidDomainRule before the
tree is touched.
"""
from __future__ import annotations

from typing import TypeAlias

Label: TypeAlias = str

WILDCARD_PREFIX = "."


class InvalidDomainRule(ValueError):
    """Raised when a rule or query cannot be decomposed into labels."""

    def __init__(self, domain: object, reason: str) -> None:
        self.domain = domain
        self.reason = reason
        super().__init__(f"Invalid domain {domain!r}: {reason}")


def split_labels(domain: str) -> list[Label]:
    """Split on "." and reverse, top-level label first.

    No validation happens here. A leading dot shows up as an empty
    last element; callers decide wildcard-ness from the original string.
    """
    labels = domain.split(".")
    labels.reverse()
    return labels


def _check_labels(domain: str, labels: list[Label]) -> None:
    for label in labels:
        if not label:
            raise InvalidDomainRule(domain, "empty label")


def parse_rule(rule: str, minimum_level: int = 0) -> tuple[list[Label], bool]:
    """Validate a rule and return (reversed labels, is_wildcard).

    The empty artifact of the leading dot is removed from the returned
    labels. minimum_level is the fewest real labels the rule may have.
    """
    if not isinstance(rule, str):
        raise InvalidDomainRule(rule, "not a string")
    if not rule:
        raise InvalidDomainRule(rule, "empty rule")
    if rule == WILDCARD_PREFIX:
        raise InvalidDomainRule(rule, "wildcard without a domain")

    is_wildcard = rule.startswith(WILDCARD_PREFIX)
    if is_wildcard and rule.startswith(WILDCARD_PREFIX * 2):
        raise InvalidDomainRule(rule, "more than one leading dot")

    labels = split_labels(rule)
    if is_wildcard:
        labels.pop()
    _check_labels(rule, labels)

    if len(labels) < minimum_level:
        raise InvalidDomainRule(
            rule,
            f"{len(labels)} label(s), minimum level is {minimum_level}",
        )
    return labels, is_wildcard


def parse_query(query: str) -> list[Label]:
    """Validate a lookup query and return its reversed labels."""
    if not isinstance(query, str):
        raise InvalidDomainRule(query, "not a string")
    if not query:
        raise InvalidDomainRule(query, "empty query")
    if query.startswith(WILDCARD_PREFIX):
        raise InvalidDomainRule(query, "queries cannot be wildcards")
    labels = split_labels(query)
    _check_labels(query, labels)
    return labels
