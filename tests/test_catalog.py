import pytest

from namelint.catalog import MatcherKind, load, parse_catalog
from namelint.errors import ConfigurationError
from namelint.models import IdentifierKind
from namelint.severity import Severity


def _rule(**overrides):
    rule = {
        "id": "XX101",
        "name": "sample-rule",
        "kinds": ["variable"],
        "matcher": {"type": "exact", "terms": {"tmp": "temporary"}},
    }
    rule.update(overrides)
    return rule


def test_bundled_catalog_loads():
    catalog = load()

    assert len(catalog) > 10
    assert catalog.get("NL101").name == "banned-abbreviation"
    assert catalog.get("timestamp-suffix").id == "NL110"
    assert all(rule.severity in (Severity.ADVISORY, Severity.INFO) for rule in catalog)


def test_rules_for_follows_declaration_order():
    catalog = load()

    ids = [rule.id for rule in catalog.rules_for(IdentifierKind.VARIABLE)]

    assert ids == ["NL101", "NL102", "NL103", "NL111", "NL131"]
    assert [rule.id for rule in catalog.rules_for(IdentifierKind.TIMESTAMP)] == ["NL101", "NL110", "NL131"]
    assert [rule.id for rule in catalog.rules_for(IdentifierKind.COMMIT_MESSAGE)] == ["NL160", "NL161"]


def test_every_kind_has_rules():
    catalog = load()

    for kind in IdentifierKind:
        assert catalog.rules_for(kind), kind


def test_bundled_catalog_uses_every_matcher_type():
    tags = {rule.matcher.tag for rule in load()}

    assert tags == set(MatcherKind)


def test_without_drops_rules_by_id_or_name():
    catalog = load()

    trimmed = catalog.without(["NL101", "generic-name"])

    assert len(trimmed) == len(catalog) - 2
    assert "NL101" not in [rule.id for rule in trimmed]
    assert len(catalog) == len(load())


def test_without_unknown_rule_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        load().without(["NL999"])


def test_load_from_path(tmp_path):
    path = tmp_path / "rules.yaml"
    path.write_text(
        """
rules:
  - id: AB123
    name: no-foo
    kinds: [function]
    severity: info
    matcher:
      type: regex
      pattern: foo
""".strip(),
        encoding="utf-8",
    )

    catalog = load(path)

    rule = catalog.get("AB123")
    assert rule.severity is Severity.INFO
    assert rule.kinds == (IdentifierKind.FUNCTION,)
    assert catalog.source == str(path)


def test_load_missing_file(tmp_path):
    with pytest.raises(ConfigurationError):
        load(tmp_path / "missing.yaml")


@pytest.mark.parametrize(
    "rule",
    [
        _rule(matcher={"type": "fuzzy"}),
        _rule(matcher={"type": "regex", "pattern": "(unclosed"}),
        _rule(matcher={"type": "exact", "terms": {}}),
        _rule(matcher={"type": "suffix"}),
        _rule(matcher={"type": "synonym", "groups": [{"prefer": "fetch", "over": ["fetch"]}]}),
        _rule(kinds=["spaceship"]),
        _rule(kinds=[]),
        _rule(severity="fatal"),
        _rule(id="bad"),
        _rule(message="{unknown} placeholder"),
        _rule(message="{name.oops}"),
        _rule(message="{token[0][1]}"),
        _rule(matcher={"type": "regex", "pattern": "x", "ignore_case": "false"}),
        _rule(matcher={"type": "regex", "pattern": "x", "negate": "no"}),
        {"id": "XX102", "name": "no-matcher", "kinds": ["variable"]},
        "not a mapping",
    ],
)
def test_malformed_rules_are_configuration_errors(rule):
    with pytest.raises(ConfigurationError):
        parse_catalog([rule])


def test_duplicate_rule_ids_are_rejected():
    with pytest.raises(ConfigurationError):
        parse_catalog([_rule(), _rule(name="other-name")])


def test_empty_catalog_is_rejected():
    with pytest.raises(ConfigurationError):
        parse_catalog({"rules": []})
