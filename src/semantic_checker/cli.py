from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from semantic_checker.catalog import load_catalog
from semantic_checker.config import ConfigError, load_config
from semantic_checker.errors import CatalogError, DocumentContextError
from semantic_checker.pipeline import fix_document, resolve_catalog, scan_document

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ISSUES = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="semantic-checker",
        description="Rule-based WCAG checks for HTML documents",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", default=None, help="JSON config file")
    common.add_argument("--log-level", default=None, help="Overrides the configured log level")

    scan_parser = subparsers.add_parser("scan", parents=[common], help="Check one HTML document")
    scan_parser.add_argument("path")
    scan_parser.add_argument("--project-root", default=".")
    scan_parser.add_argument("--no-report", action="store_true", help="Do not write the diagnostics file")

    fix_parser = subparsers.add_parser("fix", parents=[common], help="Apply available fixes, then re-check")
    fix_parser.add_argument("path")
    fix_parser.add_argument("--project-root", default=".")
    fix_parser.add_argument("--dry-run", action="store_true")

    subparsers.add_parser("rules", parents=[common], help="List the rule catalog")

    return parser


def _configure_logging(level_name: str) -> None:
    level = logging.getLevelName(level_name.upper())
    logging.basicConfig(
        level=level if isinstance(level, int) else logging.WARNING,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def _print(payload: object) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=True))


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        parser.error(str(exc))
        return EXIT_USAGE

    _configure_logging(args.log_level or config.log_level)

    if args.command == "rules":
        try:
            catalog = load_catalog()
        except CatalogError as exc:
            _print({"status": "FAILED", "error": str(exc)})
            return EXIT_USAGE
        _print([rule.describe() for rule in catalog])
        return EXIT_OK

    try:
        catalog = resolve_catalog(config)
    except (CatalogError, ConfigError) as exc:
        logger.error("Rule catalog unavailable: %s", exc)
        _print({"status": "FAILED", "error": str(exc)})
        return EXIT_USAGE

    project_root = Path(args.project_root).resolve()

    if args.command == "scan":
        try:
            outcome = scan_document(
                args.path,
                config=config,
                catalog=catalog,
                project_root=None if args.no_report else project_root,
            )
        except DocumentContextError as exc:
            _print({"status": "FAILED", "error": str(exc)})
            return EXIT_USAGE
        _print(outcome.to_dict())
        if outcome.status == "FAILED":
            return EXIT_USAGE
        return EXIT_ISSUES if outcome.findings else EXIT_OK

    if args.command == "fix":
        try:
            result = fix_document(
                args.path,
                config=config,
                catalog=catalog,
                project_root=project_root,
                dry_run=args.dry_run,
            )
        except DocumentContextError as exc:
            _print({"status": "FAILED", "error": str(exc)})
            return EXIT_USAGE
        _print(result.to_dict())
        return EXIT_ISSUES if result.error else EXIT_OK

    parser.error(f"Unsupported command: {args.command}")
    return EXIT_USAGE


if __name__ == "__main__":
    raise SystemExit(main())
