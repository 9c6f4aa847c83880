import pytest

from namelint.errors import InvalidIdentifierError
from namelint.models import Identifier, IdentifierKind
from namelint.scanner import scan


def test_scan_accepts_mappings_and_identifiers():
    existing = Identifier("order_total", IdentifierKind.VARIABLE, "orders.py:4")
    records = [
        {"name": "API_TOKEN", "kind": "env_var", "location": ".env:1"},
        {"name": "timeout", "kind": "duration", "type": "timedelta"},
        existing,
    ]

    identifiers = list(scan(records))

    assert [identifier.kind for identifier in identifiers] == [
        IdentifierKind.ENV_VAR,
        IdentifierKind.DURATION,
        IdentifierKind.VARIABLE,
    ]
    assert identifiers[0].location == ".env:1"
    assert identifiers[1].type_annotation == "timedelta"
    assert identifiers[2] is existing


def test_scan_is_lazy():
    records = iter([{"name": "first", "kind": "variable"}, {"name": "", "kind": "variable"}])

    scanned = scan(records)

    assert next(scanned).name == "first"
    with pytest.raises(InvalidIdentifierError):
        next(scanned)


@pytest.mark.parametrize(
    "record",
    [
        {"name": "", "kind": "variable"},
        {"name": "   ", "kind": "variable"},
        {"name": 42, "kind": "variable"},
        {"name": "ok", "kind": "spaceship"},
        {"name": "ok"},
        "just a string",
    ],
)
def test_scan_rejects_malformed_records(record):
    with pytest.raises(InvalidIdentifierError):
        list(scan([record]))


def test_scan_continues_after_errors_with_handler():
    errors = []
    records = [
        {"name": "", "kind": "variable"},
        {"name": "user_id", "kind": "variable"},
        {"name": "x", "kind": "bogus"},
        {"name": "OrderService", "kind": "class"},
    ]

    identifiers = list(scan(records, on_error=errors.append))

    assert [identifier.name for identifier in identifiers] == ["user_id", "OrderService"]
    assert [error.position for error in errors] == [0, 2]
    assert "unrecognized identifier kind" in str(errors[1])
    assert errors[1].record == {"name": "x", "kind": "bogus"}
