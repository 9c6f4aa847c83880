"""Rule and catalog value types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, Optional, Tuple

from namelint.errors import ConfigurationError
from namelint.models import Identifier, IdentifierKind
from namelint.severity import Severity

from .matchers import Matcher

MESSAGE_FIELDS = ("name", "kind", "token", "suggestion")


@dataclass(frozen=True)
class Rule:
    """A single naming convention and how to detect deviations from it."""

    id: str
    name: str
    kinds: Tuple[IdentifierKind, ...]
    matcher: Matcher
    severity: Severity = Severity.ADVISORY
    message: str = "{name}: naming convention deviation"
    suggestion: Optional[str] = None
    rationale: str = ""

    def applies_to(self, kind: IdentifierKind) -> bool:
        return kind in self.kinds

    def render(self, identifier: Identifier, token: Optional[str] = None, suggestion: Optional[str] = None) -> str:
        return self.message.format(
            name=identifier.name,
            kind=identifier.kind.value,
            token=token or identifier.name,
            suggestion=suggestion or self.suggestion or "",
        )


@dataclass(frozen=True)
class Catalog:
    """Immutable, ordered collection of rules indexed by identifier kind."""

    rules: Tuple[Rule, ...]
    source: str = "<memory>"
    _by_kind: Dict[IdentifierKind, Tuple[Rule, ...]] = field(init=False, repr=False, compare=False)
    _by_key: Dict[str, Rule] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        by_key: Dict[str, Rule] = {}
        for rule in self.rules:
            for key in (rule.id, rule.name):
                if key in by_key:
                    raise ConfigurationError(f"duplicate rule identifier {key!r} in {self.source}")
                by_key[key] = rule
        by_kind = {kind: tuple(rule for rule in self.rules if rule.applies_to(kind)) for kind in IdentifierKind}
        object.__setattr__(self, "_by_key", by_key)
        object.__setattr__(self, "_by_kind", by_kind)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def rules_for(self, kind: IdentifierKind) -> Tuple[Rule, ...]:
        """Return the rules applying to ``kind`` in declaration order."""

        return self._by_kind.get(kind, ())

    def get(self, key: str) -> Rule:
        try:
            return self._by_key[key]
        except KeyError:
            raise ConfigurationError(f"unknown rule {key!r}") from None

    def without(self, keys: Iterable[str]) -> "Catalog":
        """Return a copy of the catalog with the given rule ids or names removed."""

        dropped = {self.get(key).id for key in keys}
        if not dropped:
            return self
        return Catalog(
            rules=tuple(rule for rule in self.rules if rule.id not in dropped),
            source=self.source,
        )
