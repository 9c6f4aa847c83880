"""Naming rule catalog."""

from __future__ import annotations

from .loader import load, parse_catalog
from .matchers import ExactToken, Matcher, MatcherKind, Regex, SuffixToken, SynonymGroup
from .rule import Catalog, Rule

__all__ = [
    "Catalog",
    "ExactToken",
    "Matcher",
    "MatcherKind",
    "Regex",
    "Rule",
    "SuffixToken",
    "SynonymGroup",
    "load",
    "parse_catalog",
]
