"""Build a :class:`Catalog` from YAML rule data."""

from __future__ import annotations

import re
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import structlog
import yaml

from namelint.errors import ConfigurationError
from namelint.models import IdentifierKind
from namelint.severity import Severity
from namelint.utils import read_yaml_file

from .matchers import ExactToken, Matcher, MatcherKind, Regex, SuffixToken, SynonymGroup, exact
from .rule import MESSAGE_FIELDS, Catalog, Rule

logger = structlog.get_logger()

BUNDLED_CATALOG = "rules.yaml"
REQUIRED_KEYS = ("id", "name", "kinds", "matcher")
RULE_ID_PATTERN = re.compile(r"^[A-Z]{2,}[0-9]{3}$")


def load(path: Optional[str | Path] = None) -> Catalog:
    """Load the rule catalog from ``path`` or from the bundled rule data."""

    if path is None:
        source = f"namelint.catalog/{BUNDLED_CATALOG}"
        text = resources.files("namelint.catalog").joinpath(BUNDLED_CATALOG).read_text(encoding="utf-8")
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"{source}: invalid YAML: {exc}") from exc
    else:
        source = str(path)
        try:
            data = read_yaml_file(Path(path))
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigurationError(f"{source}: cannot read rule catalog: {exc}") from exc
        if data is None:
            raise ConfigurationError(f"Rule catalog not found: {source}")

    catalog = parse_catalog(data, source=source)
    logger.debug("catalog_loaded", source=source, rules=len(catalog))
    return catalog


def parse_catalog(data: Any, source: str = "<memory>") -> Catalog:
    """Validate raw catalog data and convert it into rules."""

    if isinstance(data, dict):
        entries = data.get("rules")
    else:
        entries = data
    if not isinstance(entries, list) or not entries:
        raise ConfigurationError(f"{source}: catalog must contain a non-empty list of rules")

    rules: List[Rule] = []
    for index, entry in enumerate(entries):
        try:
            rules.append(_parse_rule(entry))
        except ConfigurationError as exc:
            raise ConfigurationError(f"{source}: rule #{index}: {exc}") from None
    return Catalog(rules=tuple(rules), source=source)


# ----------------------------------------------------------------------
# Rule parsing helpers
# ----------------------------------------------------------------------
def _parse_rule(entry: Any) -> Rule:
    if not isinstance(entry, dict):
        raise ConfigurationError("each rule must be a mapping")
    for key in REQUIRED_KEYS:
        if key not in entry:
            raise ConfigurationError(f"missing key {key!r}")

    rule_id = str(entry["id"])
    if not RULE_ID_PATTERN.match(rule_id):
        raise ConfigurationError(f"rule id {rule_id!r} must look like 'NL101'")

    rule = Rule(
        id=rule_id,
        name=str(entry["name"]),
        kinds=_parse_kinds(entry["kinds"]),
        matcher=_parse_matcher(entry["matcher"]),
        severity=_parse_severity(entry.get("severity", Severity.ADVISORY.value)),
        message=str(entry.get("message") or Rule.message),
        suggestion=_optional_str(entry.get("suggestion")),
        rationale=str(entry.get("rationale") or ""),
    )
    _check_message(rule)
    return rule


def _parse_kinds(raw: Any) -> Tuple[IdentifierKind, ...]:
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list) or not raw:
        raise ConfigurationError("'kinds' must be a non-empty list")
    try:
        return tuple(IdentifierKind.parse(kind) for kind in raw)
    except ValueError as exc:
        raise ConfigurationError(f"unknown identifier kind: {exc}") from None


def _parse_severity(raw: Any) -> Severity:
    try:
        return Severity.parse(raw)
    except ValueError:
        raise ConfigurationError(f"unknown severity {raw!r}") from None


def _parse_matcher(raw: Any) -> Matcher:
    if not isinstance(raw, dict) or "type" not in raw:
        raise ConfigurationError("'matcher' must be a mapping with a 'type'")
    try:
        tag = MatcherKind(str(raw["type"]).lower())
    except ValueError:
        raise ConfigurationError(f"unknown matcher type {raw['type']!r}") from None
    return _MATCHER_PARSERS[tag](raw)


def _parse_exact(raw: Dict[str, Any]) -> ExactToken:
    terms = raw.get("terms")
    if isinstance(terms, list):
        terms = {str(term): "" for term in terms}
    if not isinstance(terms, dict) or not terms:
        raise ConfigurationError("exact matcher needs a non-empty 'terms' mapping")
    return exact({term: "" if replacement is None else replacement for term, replacement in terms.items()})


def _parse_suffix(raw: Dict[str, Any]) -> SuffixToken:
    suffixes = _word_list(raw.get("suffixes"), "suffixes")
    exempt_types = _word_list(raw.get("exempt_types") or [], "exempt_types", allow_empty=True)
    return SuffixToken(suffixes=suffixes, exempt_types=exempt_types)


def _parse_synonym(raw: Dict[str, Any]) -> SynonymGroup:
    groups = raw.get("groups")
    if not isinstance(groups, list) or not groups:
        raise ConfigurationError("synonym matcher needs a non-empty 'groups' list")
    parsed = []
    for group in groups:
        if not isinstance(group, dict) or "prefer" not in group:
            raise ConfigurationError("each synonym group needs 'prefer' and 'over'")
        preferred = str(group["prefer"]).lower()
        alternatives = _word_list(group.get("over"), "over")
        if preferred in alternatives:
            raise ConfigurationError(f"synonym group {preferred!r} lists itself as an alternative")
        parsed.append((preferred, alternatives))
    return SynonymGroup(groups=tuple(parsed))


def _parse_regex(raw: Dict[str, Any]) -> Regex:
    pattern = raw.get("pattern")
    if not isinstance(pattern, str) or not pattern:
        raise ConfigurationError("regex matcher needs a non-empty 'pattern'")
    try:
        return Regex(
            pattern=pattern,
            ignore_case=_flag(raw, "ignore_case"),
            negate=_flag(raw, "negate"),
        )
    except re.error as exc:
        raise ConfigurationError(f"invalid pattern {pattern!r}: {exc}") from None


_MATCHER_PARSERS = {
    MatcherKind.EXACT: _parse_exact,
    MatcherKind.SUFFIX: _parse_suffix,
    MatcherKind.SYNONYM: _parse_synonym,
    MatcherKind.REGEX: _parse_regex,
}


def _word_list(raw: Any, key: str, allow_empty: bool = False) -> Tuple[str, ...]:
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list) or (not raw and not allow_empty):
        raise ConfigurationError(f"'{key}' must be a non-empty list")
    return tuple(str(item).strip().lower() for item in raw)


def _flag(raw: Dict[str, Any], key: str) -> bool:
    value = raw.get(key, False)
    if not isinstance(value, bool):
        raise ConfigurationError(f"'{key}' must be true or false, got {value!r}")
    return value


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _check_message(rule: Rule) -> None:
    sample = {name: name for name in MESSAGE_FIELDS}
    try:
        rule.message.format(**sample)
    except (AttributeError, IndexError, KeyError, TypeError, ValueError) as exc:
        raise ConfigurationError(f"rule {rule.id}: bad message template {rule.message!r}: {exc}") from None
