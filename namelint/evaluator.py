"""Apply catalog rules to a single identifier."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, NamedTuple, Optional, Set, Tuple

from .catalog import Catalog, ExactToken, MatcherKind, Regex, Rule, SuffixToken, SynonymGroup
from .models import Identifier
from .report import Finding
from .tokens import Splitter, split_words


class Hit(NamedTuple):
    token: Optional[str]
    suggestion: Optional[str]


@dataclass
class _Subject:
    """Per-call view of the identifier being evaluated."""

    identifier: Identifier
    words: Tuple[str, ...]
    claimed: Set[str] = field(default_factory=set)


def evaluate(
    identifier: Identifier,
    catalog: Catalog,
    splitter: Splitter = split_words,
) -> Tuple[Finding, ...]:
    """Return the findings for ``identifier`` in rule declaration order.

    ``splitter`` turns the name into words; it defaults to a splitter that
    understands snake, kebab, camel and Pascal case. Nothing is retained
    between calls, so evaluating the same identifier twice gives equal results.
    """

    subject = _Subject(
        identifier=identifier,
        words=tuple(word.lower() for word in splitter(identifier.name) if word),
    )
    findings: List[Finding] = []
    for rule in catalog.rules_for(identifier.kind):
        for hit in _MATCHERS[rule.matcher.tag](rule.matcher, subject):
            findings.append(_finding(rule, identifier, hit))
    return tuple(findings)


def _finding(rule: Rule, identifier: Identifier, hit: Hit) -> Finding:
    suggestion = hit.suggestion or rule.suggestion
    return Finding(
        identifier=identifier,
        rule=rule,
        message=rule.render(identifier, token=hit.token, suggestion=suggestion),
        token=hit.token,
        suggestion=suggestion,
    )


# ----------------------------------------------------------------------
# Matcher implementations, one per matcher tag
# ----------------------------------------------------------------------
def _match_exact(matcher: ExactToken, subject: _Subject) -> List[Hit]:
    hits = []
    seen: Set[str] = set()
    for word in subject.words:
        if word in matcher and word not in seen:
            seen.add(word)
            hits.append(Hit(word, matcher.replacement_for(word) or None))
    return hits


def _match_suffix(matcher: SuffixToken, subject: _Subject) -> List[Hit]:
    if matcher.exempts_type(subject.identifier.type_annotation):
        return []
    if subject.words and matcher.accepts_suffix(subject.words[-1]):
        return []
    return [Hit(None, append_word(subject.identifier.name, matcher.suffixes[0]))]


def _match_synonym(matcher: SynonymGroup, subject: _Subject) -> List[Hit]:
    # A word flagged by an earlier synonym rule is not reported again.
    hits = []
    for word in subject.words:
        if word in subject.claimed:
            continue
        preferred = matcher.preferred_for(word)
        if preferred is not None:
            subject.claimed.add(word)
            hits.append(Hit(word, preferred))
    return hits


def _match_regex(matcher: Regex, subject: _Subject) -> List[Hit]:
    matched = matcher.compiled.search(subject.identifier.name)
    if matcher.negate:
        return [] if matched else [Hit(None, None)]
    if not matched:
        return []
    return [Hit(matched.group(0) or None, None)]


_MATCHERS: Dict[MatcherKind, Callable[..., List[Hit]]] = {
    MatcherKind.EXACT: _match_exact,
    MatcherKind.SUFFIX: _match_suffix,
    MatcherKind.SYNONYM: _match_synonym,
    MatcherKind.REGEX: _match_regex,
}


def append_word(name: str, word: str) -> str:
    """Append ``word`` to ``name`` using the name's own case convention."""

    if not name:
        return word
    if "-" in name and "_" not in name:
        return f"{name}-{word}"
    if name.isupper():
        return f"{name}_{word.upper()}"
    if "_" not in name and any(char.isupper() for char in name):
        return f"{name}{word.capitalize()}"
    return f"{name}_{word}"
