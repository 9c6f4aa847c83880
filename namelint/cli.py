"""Command-line entry point for the naming convention checker."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Iterable, List

import structlog
import yaml

from . import __version__
from .catalog import Catalog, load
from .checker import check
from .config import OUTPUT_FORMATS, Settings, load_config
from .errors import ConfigurationError
from .extractors import extract_identifiers
from .report import Report, format_text
from .utils import read_yaml_file

logger = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="namelint",
        description="Advisory checker for identifier naming conventions",
    )
    parser.add_argument(
        "--input",
        "-i",
        dest="input_paths",
        action="append",
        default=[],
        help="JSON or YAML file listing identifiers (name, kind, location) to check (repeatable).",
    )
    parser.add_argument(
        "--source",
        "-s",
        dest="source_dirs",
        action="append",
        default=[],
        help="Directory or file of Python source to extract identifiers from (repeatable).",
    )
    parser.add_argument(
        "--catalog",
        default=None,
        help="Path to an alternative YAML rule catalog.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Project configuration file (defaults to .namelint.yaml when present).",
    )
    parser.add_argument(
        "--disable",
        action="append",
        default=[],
        metavar="RULE",
        help="Rule id or name to switch off (repeatable).",
    )
    parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Report format (defaults to text).",
    )
    parser.add_argument(
        "--out",
        "--output",
        dest="output_path",
        type=str,
        default=None,
        help="Path to write the report to instead of stdout.",
    )
    parser.add_argument(
        "--fail-on-findings",
        action="store_true",
        help="Exit with status 1 when any finding is reported.",
    )
    parser.add_argument(
        "--list-rules",
        action="store_true",
        help="Print the active rule catalog and exit.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log progress to stderr.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def load_catalog(settings: Settings) -> Catalog:
    catalog = load(settings.catalog)
    return catalog.without(settings.disable)


def read_identifiers(paths: Iterable[str]) -> List[Any]:
    """Read identifier records from JSON/YAML files, in file order."""

    records: List[Any] = []
    for raw_path in paths:
        path = Path(raw_path)
        try:
            data = read_yaml_file(path)
        except (OSError, yaml.YAMLError) as exc:
            raise ValueError(f"cannot read identifiers from {path}: {exc}") from exc
        if data is None:
            if not path.exists():
                raise ValueError(f"identifier file not found: {path}")
            continue
        if isinstance(data, dict):
            data = data.get("identifiers")
        if not isinstance(data, list):
            raise ValueError(f"{path}: expected a list of identifiers or a mapping with an 'identifiers' list")
        records.extend(data)
    return records


def run_check(settings: Settings, input_paths: Iterable[str], source_dirs: Iterable[str]) -> Report:
    catalog = load_catalog(settings)
    records = read_identifiers(input_paths)
    records.extend(extract_identifiers(source_dirs))
    return check(records, catalog, allow=settings.allow)


def render(report: Report, report_format: str) -> str:
    if report_format == "json":
        return json.dumps(report.to_dict(), indent=2)
    if report_format == "yaml":
        return yaml.safe_dump(report.to_dict(), sort_keys=False)
    return format_text(report)


def write_output(report: Report, output_path: str | None, report_format: str) -> None:
    payload = render(report, report_format)
    if output_path:
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(payload, encoding="utf-8")
        logger.debug("report_written", path=str(output_file), format=report_format)
        print(format_text(report))
        print(f"\nReport written to {output_path}")
    else:
        print(payload)


def format_rules(catalog: Catalog) -> str:
    lines = [f"{'Id':<6} | {'Name':<24} | {'Severity':<8} | Kinds"]
    lines.append("-" * len(lines[0]))
    for rule in catalog:
        kinds = ", ".join(kind.value for kind in rule.kinds)
        lines.append(f"{rule.id:<6} | {rule.name:<24} | {rule.severity.value:<8} | {kinds}")
    return "\n".join(lines)


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        settings = load_config(args.config).merged(
            catalog=args.catalog,
            disable=args.disable,
            format=args.format,
        )
        if args.list_rules:
            print(format_rules(load_catalog(settings)))
            return 0
        if not args.input_paths and not args.source_dirs:
            parser.error("nothing to check: pass --input and/or --source")
        report = run_check(settings, args.input_paths, args.source_dirs)
    except ConfigurationError as exc:
        print(f"namelint: configuration error: {exc}", file=sys.stderr)
        return 2
    except ValueError as exc:
        parser.error(str(exc))

    write_output(report, args.output_path, settings.format)
    if args.fail_on_findings and not report.clean:
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
