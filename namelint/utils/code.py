"""Source code helper utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Generator, Iterable

EXCLUDED_DIRS = frozenset({".git", ".venv", "venv", "node_modules", "build", "dist", "__pycache__"})


def iter_code_files(root_paths: Iterable[str], extensions: tuple[str, ...] = (".py",)) -> Generator[Path, None, None]:
    """Yield code files beneath the provided directories in a stable order."""

    for root in root_paths:
        base = Path(root)
        if base.is_file():
            if base.suffix in extensions:
                yield base
            continue
        for path in sorted(base.rglob("*")):
            if any(part in EXCLUDED_DIRS for part in path.relative_to(base).parts):
                continue
            if path.suffix in extensions and path.is_file():
                yield path
