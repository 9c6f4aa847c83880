"""End-to-end naming check: scan, evaluate, build the report."""

from __future__ import annotations

from typing import Any, Iterable, List, Sequence, Tuple

import structlog

from .catalog import Catalog
from .errors import InvalidIdentifierError
from .evaluator import evaluate
from .models import Identifier
from .report import Finding, Report, build_results
from .scanner import scan
from .tokens import Splitter, split_words

logger = structlog.get_logger()


def check(
    identifiers: Iterable[Any],
    catalog: Catalog,
    splitter: Splitter = split_words,
    allow: Iterable[str] = (),
) -> Report:
    """Check every identifier against ``catalog`` and return the report.

    Malformed records are recorded on the report instead of aborting the run.
    Names listed in ``allow`` are scanned but never produce findings.
    """

    allowed = frozenset(allow)
    errors: List[InvalidIdentifierError] = []
    results: List[Tuple[Identifier, Sequence[Finding]]] = []

    for identifier in scan(identifiers, on_error=errors.append):
        if identifier.name in allowed:
            results.append((identifier, ()))
            continue
        results.append((identifier, evaluate(identifier, catalog, splitter)))

    report = build_results(results, errors)
    logger.info(
        "check_completed",
        catalog=catalog.source,
        identifiers=len(results),
        findings=report.finding_count,
        invalid=len(errors),
    )
    return report
