"""Identifier records handed to the checker."""

from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict, Optional


class IdentifierKind(str, Enum):
    """What kind of program entity an identifier names."""

    CLASS = "class"
    FUNCTION = "function"
    VARIABLE = "variable"
    CONSTANT = "constant"
    MODULE = "module"
    COLUMN = "column"
    TABLE = "table"
    ENDPOINT = "endpoint"
    ENV_VAR = "env-var"
    TIMESTAMP = "timestamp"
    DURATION = "duration"
    BRANCH = "branch"
    COMMIT_MESSAGE = "commit-message"

    @classmethod
    def parse(cls, value: object) -> "IdentifierKind":
        """Accept enum members as well as ``env_var``/``ENV-VAR`` spellings."""

        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError(f"identifier kind must be a string, got {type(value).__name__}")
        return cls(value.strip().lower().replace("_", "-"))


@dataclass(frozen=True)
class Identifier:
    """A name, what it names, and where the caller found it."""

    name: str
    kind: IdentifierKind
    location: str = ""
    type_annotation: Optional[str] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        data = asdict(self)
        data["kind"] = self.kind.value
        return data
