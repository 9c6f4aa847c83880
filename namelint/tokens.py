"""Split identifiers into lower-case words."""

from __future__ import annotations

import re
from typing import Callable, Tuple

Splitter = Callable[[str], Tuple[str, ...]]

SEPARATOR_PATTERN = re.compile(r"[^A-Za-z0-9]+")
WORD_PATTERN = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|[0-9]+")


def split_words(name: str) -> Tuple[str, ...]:
    """Return the words of ``name`` across the common case conventions.

    ``usr_cfg`` -> ``("usr", "cfg")``, ``HTTPServerError`` ->
    ``("http", "server", "error")``, ``max-retries`` -> ``("max", "retries")``.
    """

    words = []
    for chunk in SEPARATOR_PATTERN.split(name):
        if chunk:
            words.extend(word.lower() for word in WORD_PATTERN.findall(chunk))
    return tuple(words)
