"""Extract identifier records from Python source with the ``ast`` module."""

from __future__ import annotations

import ast
import re
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple

import structlog

from namelint.models import IdentifierKind
from namelint.tokens import split_words
from namelint.utils import iter_code_files, read_text_file

logger = structlog.get_logger()

DURATION_WORDS = frozenset({"timeout", "delay", "interval", "ttl", "duration", "elapsed", "backoff", "period", "latency"})
TIMESTAMP_TYPE = re.compile(r"\bdatetime\b")
DURATION_TYPE = re.compile(r"\btimedelta\b")
SKIPPED_NAMES = frozenset({"_", "self", "cls"})
SKIPPED_MODULES = frozenset({"__init__", "__main__"})

Record = Dict[str, Optional[str]]


def extract_identifiers(root_paths: Iterable[str]) -> Iterator[Record]:
    """Yield identifier records for every Python file under ``root_paths``."""

    for path in iter_code_files(root_paths, extensions=(".py",)):
        try:
            source = read_text_file(path)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("source_unreadable", path=str(path), error=str(exc))
            continue
        yield from extract_from_source(source, str(path))


def extract_from_source(source: str, path: str = "<string>") -> List[Record]:
    """Return the identifiers declared in one module's source text."""

    try:
        tree = ast.parse(source)
    except SyntaxError as exc:
        logger.warning("source_unparseable", path=path, line=exc.lineno, error=exc.msg)
        return []

    records: List[Record] = []
    stem = Path(path).stem
    if path != "<string>" and stem not in SKIPPED_MODULES:
        records.append(_record(stem, IdentifierKind.MODULE, f"{path}:1"))

    visitor = _DeclarationVisitor(path)
    visitor.visit(tree)
    records.extend(visitor.records)
    return records


class _DeclarationVisitor(ast.NodeVisitor):
    """Collect classes, functions, arguments and assignment targets."""

    def __init__(self, path: str) -> None:
        self.path = path
        self.records: List[Record] = []
        self._scopes: List[Tuple[str, str]] = [("module", "")]
        self._seen: Set[Tuple[str, str]] = set()

    # ------------------------------------------------------------------
    # Scopes
    # ------------------------------------------------------------------
    def visit_ClassDef(self, node: ast.ClassDef) -> None:
        self._add(node.name, IdentifierKind.CLASS, node.lineno)
        self._descend(("class", node.name), node)

    def visit_FunctionDef(self, node: ast.FunctionDef) -> None:
        self._function(node)

    def visit_AsyncFunctionDef(self, node: ast.AsyncFunctionDef) -> None:
        self._function(node)

    def _function(self, node: ast.FunctionDef | ast.AsyncFunctionDef) -> None:
        if not _is_dunder(node.name):
            self._add(node.name, IdentifierKind.FUNCTION, node.lineno)
        self._scopes.append(("function", node.name))
        args = node.args
        for arg in args.posonlyargs + args.args + args.kwonlyargs + [args.vararg, args.kwarg]:
            if arg is not None:
                self._variable(arg.arg, arg.lineno, arg.annotation)
        for statement in node.body:
            self.visit(statement)
        self._scopes.pop()

    def _descend(self, scope: Tuple[str, str], node: ast.AST) -> None:
        self._scopes.append(scope)
        self.generic_visit(node)
        self._scopes.pop()

    # ------------------------------------------------------------------
    # Assignments
    # ------------------------------------------------------------------
    def visit_Assign(self, node: ast.Assign) -> None:
        for target in node.targets:
            for name_node in _target_names(target):
                self._variable(name_node.id, name_node.lineno, None)
        self.generic_visit(node)

    def visit_AnnAssign(self, node: ast.AnnAssign) -> None:
        if isinstance(node.target, ast.Name):
            self._variable(node.target.id, node.target.lineno, node.annotation)
        self.generic_visit(node)

    def _variable(self, name: str, lineno: int, annotation: Optional[ast.expr]) -> None:
        if name in SKIPPED_NAMES or _is_dunder(name):
            return
        type_annotation = ast.unparse(annotation) if annotation is not None else None
        self._add(name, self._classify(name, type_annotation), lineno, type_annotation)

    def _classify(self, name: str, type_annotation: Optional[str]) -> IdentifierKind:
        if self._scopes[-1][0] != "function" and name.lstrip("_").isupper():
            return IdentifierKind.CONSTANT
        if type_annotation:
            if DURATION_TYPE.search(type_annotation):
                return IdentifierKind.DURATION
            if TIMESTAMP_TYPE.search(type_annotation):
                return IdentifierKind.TIMESTAMP
        words = split_words(name)
        if words and words[-1] in DURATION_WORDS:
            return IdentifierKind.DURATION
        return IdentifierKind.VARIABLE

    def _add(
        self,
        name: str,
        kind: IdentifierKind,
        lineno: int,
        type_annotation: Optional[str] = None,
    ) -> None:
        scope = "/".join(part for _, part in self._scopes)
        if (scope, name) in self._seen:
            return
        self._seen.add((scope, name))
        self.records.append(_record(name, kind, f"{self.path}:{lineno}", type_annotation))


def _target_names(target: ast.expr) -> Iterator[ast.Name]:
    if isinstance(target, ast.Name):
        yield target
    elif isinstance(target, (ast.Tuple, ast.List)):
        for element in target.elts:
            yield from _target_names(element)
    elif isinstance(target, ast.Starred):
        yield from _target_names(target.value)


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def _record(name: str, kind: IdentifierKind, location: str, type_annotation: Optional[str] = None) -> Record:
    return {"name": name, "kind": kind.value, "location": location, "type": type_annotation}
