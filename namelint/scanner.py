"""Validate identifier records before they are evaluated."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator, Mapping, Optional

import structlog

from .errors import InvalidIdentifierError
from .models import Identifier, IdentifierKind

logger = structlog.get_logger()

ErrorHandler = Callable[[InvalidIdentifierError], None]


def scan(identifiers: Iterable[Any], on_error: Optional[ErrorHandler] = None) -> Iterator[Identifier]:
    """Yield validated identifiers lazily, in input order.

    Records may be :class:`Identifier` instances or mappings with ``name``,
    ``kind`` and optional ``location`` and ``type`` keys. A record with an
    empty name or an unknown kind raises :class:`InvalidIdentifierError`;
    when ``on_error`` is supplied it receives the error instead and scanning
    carries on with the next record.
    """

    for position, record in enumerate(identifiers):
        try:
            identifier = validate(record, position)
        except InvalidIdentifierError as exc:
            logger.info("identifier_rejected", position=position, reason=exc.reason)
            if on_error is None:
                raise
            on_error(exc)
            continue
        yield identifier


def validate(record: Any, position: Optional[int] = None) -> Identifier:
    """Return ``record`` as a well-formed :class:`Identifier`."""

    if isinstance(record, Identifier):
        name, kind, location, type_annotation = record.name, record.kind, record.location, record.type_annotation
    elif isinstance(record, Mapping):
        name = record.get("name")
        kind = record.get("kind")
        location = record.get("location") or ""
        type_annotation = record.get("type_annotation", record.get("type"))
    else:
        raise InvalidIdentifierError(
            f"expected an identifier or mapping, got {type(record).__name__}", record, position
        )

    if not isinstance(name, str) or not name.strip():
        raise InvalidIdentifierError("identifier name is empty", record, position)
    if kind is None:
        raise InvalidIdentifierError("identifier kind is missing", record, position)
    try:
        parsed_kind = IdentifierKind.parse(kind)
    except ValueError:
        raise InvalidIdentifierError(f"unrecognized identifier kind {kind!r}", record, position) from None

    if isinstance(record, Identifier) and parsed_kind is record.kind:
        return record
    return Identifier(
        name=name,
        kind=parsed_kind,
        location=str(location),
        type_annotation=None if type_annotation is None else str(type_annotation),
    )
