"""Severity definitions for naming findings."""

from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    """Enumerate the supported severity levels for findings.

    Both levels are advisory: the checker never fails a build on its own.
    """

    ADVISORY = "ADVISORY"
    INFO = "INFO"

    @classmethod
    def parse(cls, value: str) -> "Severity":
        return cls(str(value).strip().upper())
