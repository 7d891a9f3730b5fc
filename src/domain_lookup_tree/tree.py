"""DomainLookupTree: label trie for absolute and wildcard domain rules.

Rules come in two kinds:
    "www.example.com"   -- absolute, matches exactly that name
    ".example.com"      -- wildcard, matches example.com and every subdomain

The tree stores one Node per label, keyed by label in its parent's
children dict, with the top-level label at the root. For the rules
"test.com" and ".giggl.app" it looks like this:

    com
    └── test [terminal]
    app
    └── giggl [wildcard]

A lookup for "canary.giggl.app" walks "app" (nothing to record), then
"giggl", which is a wildcard, so ".giggl.app" becomes the best candidate.
"canary" has no child under "giggl", the walk ends, and the candidate is
returned. Had the query been "giggl.app", the walk would have consumed
every label on "giggl" and returned it as an exact match.

Resolution order:
    - an exact match on a rule terminal beats any wildcard ancestor
    - a deeper wildcard beats a shallower one
    - scaffolding nodes (path segments of longer rules) never match

Both insert and lookup cost O(labels in the input), independent of the
number of rules stored.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from domain_lookup_tree.labels import (
    WILDCARD_PREFIX,
    InvalidDomainRule,
    Label,
    parse_query,
    parse_rule,
)

log = logging.getLogger(__name__)


@dataclass(slots=True)
class Node:
    """One label position in the tree.

    wildcard marks the end of a ".domain" rule, terminal the end of an
    absolute rule. A node with neither flag is scaffolding. Flags are
    only ever switched on.
    """
    label: Label
    wildcard: bool = False
    terminal: bool = False
    children: dict[Label, Node] = field(default_factory=dict)

    @property
    def is_rule(self) -> bool:
        return self.wildcard or self.terminal


@dataclass(frozen=True, slots=True)
class Match:
    """Result of a traversal: the matched domain and the node it ended on."""
    domain: str
    node: Node

    @property
    def rule(self) -> str:
        """The matched rule in canonical form (leading dot for wildcards)."""
        if self.node.wildcard:
            return WILDCARD_PREFIX + self.domain
        return self.domain


def _join(labels: list[Label], depth: int) -> str:
    """Rebuild the left-to-right name from the first `depth` reversed labels."""
    return ".".join(reversed(labels[:depth]))


class DomainLookupTree:
    """Incrementally built lookup tree for domain rules.

    Args:
        minimum_level: Fewest labels a rule may have. 0 or 1 accepts
            any rule; 2 rejects bare TLD rules such as "com" or ".com".
            Queries are not affected.
    """

    def __init__(self, minimum_level: int = 0) -> None:
        if minimum_level < 0:
            raise ValueError(f"minimum_level must be >= 0, got {minimum_level}")
        self._root: dict[Label, Node] = {}
        self._minimum_level = minimum_level
        self._rule_count = 0
        self._node_count = 0

    @classmethod
    def from_rules(cls, rules: Iterable[str], minimum_level: int = 0) -> DomainLookupTree:
        """Factory: build a tree and insert every rule."""
        tree = cls(minimum_level=minimum_level)
        tree.update(rules)
        return tree

    @property
    def minimum_level(self) -> int:
        return self._minimum_level

    def insert(self, rule: str) -> bool:
        """Insert a rule. Returns False if it was already present.

        Every label on the path gets a node. Only the node of the last
        real label is flagged: wildcard for ".domain" rules, terminal
        otherwise. The empty label left by the leading dot is never
        stored. Raises InvalidDomainRule on malformed input, before any
        node is created.
        """
        labels, is_wildcard = parse_rule(rule, self._minimum_level)
        head = self._root
        for label in labels[:-1]:
            head = self._child(head, label).children
        node = self._child(head, labels[-1])

        if is_wildcard:
            if node.wildcard:
                return False
            node.wildcard = True
        else:
            if node.terminal:
                return False
            node.terminal = True
        self._rule_count += 1
        return True

    def _child(self, head: dict[Label, Node], label: Label) -> Node:
        node = head.get(label)
        if node is None:
            node = Node(label)
            head[label] = node
            self._node_count += 1
        return node

    def update(self, rules: Iterable[str]) -> int:
        """Insert many rules. Returns how many were new.

        Stops at the first invalid rule; rules before it stay inserted.
        """
        added = 0
        for rule in rules:
            if self.insert(rule):
                added += 1
        log.debug("Inserted %d new rule(s), %d total", added, self._rule_count)
        return added

    def traverse(self, query: str) -> Match | None:
        """Walk the query's labels and return the best Match, or None.

        The walk stops at the first label with no node. Along the way
        every wildcard node replaces the current candidate, so the
        deepest wildcard wins. If all labels are consumed and the last
        node is a rule, that exact match is returned instead of any
        candidate.
        """
        labels = parse_query(query)
        last = len(labels) - 1
        head = self._root
        best_node: Node | None = None
        best_depth = 0

        for i, label in enumerate(labels):
            node = head.get(label)
            if node is None:
                break
            head = node.children
            if i == last and node.is_rule:
                return Match(query, node)
            if node.wildcard:
                best_node = node
                best_depth = i + 1

        if best_node is None:
            return None
        return Match(_join(labels, best_depth), best_node)

    def lookup(self, query: str) -> str | None:
        """Return the matching rule in canonical form, or None."""
        match = self.traverse(query)
        if match is None:
            return None
        return match.rule

    def __contains__(self, query: object) -> bool:
        if not isinstance(query, str):
            return False
        try:
            return self.traverse(query) is not None
        except InvalidDomainRule:
            return False

    def __len__(self) -> int:
        return self._rule_count

    def __iter__(self) -> Iterator[str]:
        return self.rules()

    def rules(self) -> Iterator[str]:
        """Yield every inserted rule in canonical form.

        Iterative DFS; each stack entry carries the name built so far,
        so nodes need no parent links. A path holding both an absolute
        and a wildcard rule yields both. Order is unspecified.
        """
        stack: list[tuple[str, Node]] = [
            (node.label, node) for node in self._root.values()
        ]
        while stack:
            name, node = stack.pop()
            if node.terminal:
                yield name
            if node.wildcard:
                yield WILDCARD_PREFIX + name
            for child in node.children.values():
                stack.append((f"{child.label}.{name}", child))

    def node_count(self) -> int:
        """Label nodes created so far, scaffolding included.

        Rules sharing a suffix share nodes, so node_count() / len()
        shows how much a rule set compresses. Nodes are never removed,
        so the counter kept by insert is exact.
        """
        return self._node_count

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(rules={self._rule_count}, "
            f"nodes={self._node_count}, minimum_level={self._minimum_level})"
        )
