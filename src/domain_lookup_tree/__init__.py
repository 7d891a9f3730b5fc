"""In-memory lookup tree for absolute and wildcard domain rules."""

from domain_lookup_tree.labels import InvalidDomainRule, split_labels
from domain_lookup_tree.tree import DomainLookupTree, Match, Node

__all__ = [
    "DomainLookupTree",
    "InvalidDomainRule",
    "Match",
    "Node",
    "split_labels",
]
