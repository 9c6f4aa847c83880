"""Matcher variants attached to catalog rules.

Each variant carries a ``tag`` so the evaluator can dispatch on it explicitly.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Dict, Mapping, Optional, Pattern, Tuple, Union


class MatcherKind(str, Enum):
    EXACT = "exact"
    SUFFIX = "suffix"
    SYNONYM = "synonym"
    REGEX = "regex"


@dataclass(frozen=True)
class ExactToken:
    """Flag any word equal to one of ``terms``; values are replacements."""

    tag: ClassVar[MatcherKind] = MatcherKind.EXACT

    terms: Tuple[Tuple[str, str], ...]
    _lookup: Dict[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_lookup", {term.lower(): replacement for term, replacement in self.terms})

    def replacement_for(self, token: str) -> Optional[str]:
        return self._lookup.get(token)

    def __contains__(self, token: str) -> bool:
        return token in self._lookup


@dataclass(frozen=True)
class SuffixToken:
    """Require the trailing word to be one of ``suffixes``.

    Identifiers declared with one of ``exempt_types`` satisfy the rule
    regardless of their name.
    """

    tag: ClassVar[MatcherKind] = MatcherKind.SUFFIX

    suffixes: Tuple[str, ...]
    exempt_types: Tuple[str, ...] = ()

    def accepts_suffix(self, token: str) -> bool:
        return token in self.suffixes

    def exempts_type(self, type_annotation: Optional[str]) -> bool:
        if not type_annotation:
            return False
        declared = type_annotation.strip().lower()
        # "datetime.timedelta" and "Optional[timedelta]" both count
        return any(re.search(rf"\b{re.escape(exempt)}\b", declared) for exempt in self.exempt_types)


@dataclass(frozen=True)
class SynonymGroup:
    """Prefer one term over its alternatives, for each group in order."""

    tag: ClassVar[MatcherKind] = MatcherKind.SYNONYM

    groups: Tuple[Tuple[str, Tuple[str, ...]], ...]

    def preferred_for(self, token: str) -> Optional[str]:
        for preferred, alternatives in self.groups:
            if token in alternatives:
                return preferred
        return None


@dataclass(frozen=True)
class Regex:
    """Search the whole name; with ``negate`` a missing match is the violation."""

    tag: ClassVar[MatcherKind] = MatcherKind.REGEX

    pattern: str
    ignore_case: bool = False
    negate: bool = False
    compiled: Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        flags = re.IGNORECASE if self.ignore_case else 0
        object.__setattr__(self, "compiled", re.compile(self.pattern, flags))


Matcher = Union[ExactToken, SuffixToken, SynonymGroup, Regex]


def exact(terms: Mapping[str, str]) -> ExactToken:
    return ExactToken(terms=tuple((str(k).lower(), str(v)) for k, v in terms.items()))
