"""Exception types raised by the checker."""

from __future__ import annotations

from typing import Any, Optional


class NamelintError(Exception):
    """Base class for checker errors."""


class ConfigurationError(NamelintError):
    """The rule catalog or project configuration cannot be used."""


class InvalidIdentifierError(NamelintError, ValueError):
    """An identifier record handed to the scanner is malformed."""

    def __init__(self, reason: str, record: Any = None, position: Optional[int] = None) -> None:
        self.reason = reason
        self.record = record
        self.position = position
        prefix = f"identifier #{position}: " if position is not None else ""
        super().__init__(f"{prefix}{reason}")

    def to_dict(self) -> dict:
        return {
            "position": self.position,
            "reason": self.reason,
            "record": _describe(self.record),
        }


def _describe(record: Any) -> Any:
    if record is None or isinstance(record, (str, int, float, bool)):
        return record
    if isinstance(record, dict):
        return {str(key): _describe(value) for key, value in record.items()}
    to_dict = getattr(record, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return repr(record)
