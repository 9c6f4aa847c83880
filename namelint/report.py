"""Findings and the report that groups them."""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .catalog import Rule
from .errors import InvalidIdentifierError
from .models import Identifier
from .severity import Severity

SEVERITY_ORDER: Sequence[Severity] = (
    Severity.ADVISORY,
    Severity.INFO,
)
UNKNOWN_LOCATION = "<unknown location>"


@dataclass(frozen=True)
class Finding:
    """One rule that one identifier deviates from."""

    identifier: Identifier
    rule: Rule
    message: str
    token: Optional[str] = None
    suggestion: Optional[str] = None

    @property
    def severity(self) -> Severity:
        return self.rule.severity

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "rule_id": self.rule.id,
            "rule": self.rule.name,
            "severity": self.severity.value,
            "message": self.message,
            "token": self.token,
            "suggestion": self.suggestion,
        }


@dataclass(frozen=True)
class Summary:
    """Aggregate counts for a report."""

    advisory: int = 0
    info: int = 0
    identifiers: int = 0
    invalid: int = 0

    def to_dict(self) -> Dict[str, int]:
        data = asdict(self)
        data["findings"] = self.total
        return data

    def as_rows(self) -> List[Tuple[str, int]]:
        """Return severity/count pairs ordered for reporting."""

        return [(severity.value, getattr(self, severity.value.lower())) for severity in SEVERITY_ORDER]

    @property
    def total(self) -> int:
        return sum(getattr(self, severity.value.lower()) for severity in SEVERITY_ORDER)


@dataclass(frozen=True)
class ReportEntry:
    identifier: Identifier
    findings: Tuple[Finding, ...] = ()

    def to_dict(self) -> Dict[str, object]:
        data: Dict[str, object] = self.identifier.to_dict()
        data.pop("location", None)
        data["findings"] = [finding.to_dict() for finding in self.findings]
        return data


@dataclass(frozen=True)
class ReportGroup:
    location: str
    entries: Tuple[ReportEntry, ...] = ()

    def to_dict(self) -> Dict[str, object]:
        return {
            "location": self.location,
            "identifiers": [entry.to_dict() for entry in self.entries],
        }


@dataclass(frozen=True)
class Report:
    """Findings grouped by source location, in scan order."""

    groups: Tuple[ReportGroup, ...] = ()
    errors: Tuple[InvalidIdentifierError, ...] = ()
    summary: Summary = field(default_factory=Summary)

    @property
    def findings(self) -> Tuple[Finding, ...]:
        return tuple(finding for group in self.groups for entry in group.entries for finding in entry.findings)

    @property
    def finding_count(self) -> int:
        return self.summary.total

    @property
    def clean(self) -> bool:
        return self.summary.total == 0

    def to_dict(self) -> Dict[str, object]:
        return {
            "summary": self.summary.to_dict(),
            "groups": [group.to_dict() for group in self.groups],
            "errors": [error.to_dict() for error in self.errors],
            "clean": self.clean,
        }


def build_results(
    results: Iterable[Tuple[Identifier, Sequence[Finding]]],
    errors: Iterable[InvalidIdentifierError] = (),
) -> Report:
    """Group ``(identifier, findings)`` pairs by location, in scan order.

    Every pair becomes its own entry, so the same identifier scanned at two
    positions is reported twice.
    """

    locations: Dict[str, List[ReportEntry]] = {}
    counts = {severity: 0 for severity in SEVERITY_ORDER}
    scanned = 0
    for identifier, found in results:
        entry = ReportEntry(identifier, tuple(found))
        for finding in entry.findings:
            counts[finding.severity] += 1
        locations.setdefault(identifier.location or UNKNOWN_LOCATION, []).append(entry)
        scanned += 1

    error_list = tuple(errors)
    summary = Summary(
        advisory=counts[Severity.ADVISORY],
        info=counts[Severity.INFO],
        identifiers=scanned,
        invalid=len(error_list),
    )
    groups = tuple(ReportGroup(location=location, entries=tuple(entries)) for location, entries in locations.items())
    return Report(groups=groups, errors=error_list, summary=summary)


def build(
    findings: Iterable[Finding],
    errors: Iterable[InvalidIdentifierError] = (),
    identifiers: Optional[Iterable[Identifier]] = None,
) -> Report:
    """Group ``findings`` by location, keeping identifier and finding order.

    Consecutive findings for the same identifier form one entry. When
    ``identifiers`` is given every scanned identifier gets an entry in that
    order, taking the consecutive findings that refer to it; identifiers
    without findings get an empty entry.
    """

    runs = _runs(findings)
    if identifiers is None:
        return build_results(runs, errors)

    pending = iter(runs)
    current = next(pending, None)
    results: List[Tuple[Identifier, Sequence[Finding]]] = []
    for identifier in identifiers:
        if current is not None and current[0] is identifier:
            results.append(current)
            current = next(pending, None)
        else:
            results.append((identifier, ()))
    if current is not None:
        results.append(current)
        results.extend(pending)
    return build_results(results, errors)


def _runs(findings: Iterable[Finding]) -> List[Tuple[Identifier, List[Finding]]]:
    runs: List[Tuple[Identifier, List[Finding]]] = []
    for finding in findings:
        if runs and runs[-1][0] is finding.identifier:
            runs[-1][1].append(finding)
        else:
            runs.append((finding.identifier, [finding]))
    return runs


def format_text(report: Report, show_clean: bool = False) -> str:
    """Create a human-readable report for console output."""

    lines: List[str] = []
    lines.append("Naming Summary")
    lines.append("=" * 40)
    header = f"{'Severity':<10} | {'Count':>5}"
    lines.append(header)
    lines.append("-" * len(header))
    for severity, count in report.summary.as_rows():
        lines.append(f"{severity:<10} | {count:>5}")
    lines.append("-" * len(header))
    lines.append(f"Identifiers : {report.summary.identifiers}")
    lines.append(f"Findings    : {report.summary.total}")
    lines.append(f"Invalid     : {report.summary.invalid}")

    if report.summary.total or show_clean:
        lines.append("")
        lines.append("Findings")
        lines.append("-" * 40)
        for group in report.groups:
            entries = [entry for entry in group.entries if entry.findings or show_clean]
            if not entries:
                continue
            lines.append(group.location)
            for entry in entries:
                lines.append(f"  {entry.identifier.name} ({entry.identifier.kind.value})")
                for finding in entry.findings:
                    lines.append(
                        f"    [{finding.severity.value}] {finding.rule.id} {finding.rule.name}: {finding.message}"
                    )
                if not entry.findings:
                    lines.append("    ok")

    if report.errors:
        lines.append("")
        lines.append("Invalid Identifiers")
        lines.append("-" * 40)
        for error in report.errors:
            lines.append(f"  {error}")
    return "\n".join(lines)
