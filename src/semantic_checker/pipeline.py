from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from semantic_checker.autofix import DocumentHost, FileDocumentHost, apply_fixes
from semantic_checker.catalog import load_catalog, validate_catalog
from semantic_checker.engine import evaluate
from semantic_checker.errors import AutofixError, CatalogError, ConfigError, ReportWriteError
from semantic_checker.models import AppConfig, FixOutcome, Rule, ScanOutcome, StatusMessage
from semantic_checker.preprocess import preprocess
from semantic_checker.report import build_record, summarize, summary_message, write_report
from semantic_checker.snapshot import DocumentSnapshot

logger = logging.getLogger(__name__)


def resolve_catalog(config: AppConfig, catalog: Iterable[Rule] | None = None) -> tuple[Rule, ...]:
    if catalog is None:
        return load_catalog(config.disabled_rules)
    disabled = set(config.disabled_rules)
    return validate_catalog(rule for rule in catalog if rule.id not in disabled)


def scan_snapshot(
    snapshot: DocumentSnapshot,
    *,
    config: AppConfig | None = None,
    catalog: Iterable[Rule] | None = None,
    project_root: str | Path | None = None,
) -> ScanOutcome:
    """Scan one document. The report is persisted only when ``project_root``
    is given and the configuration allows it."""
    settings = config or AppConfig()
    snapshot.require_html()

    try:
        rules = resolve_catalog(settings, catalog)
    except (CatalogError, ConfigError) as exc:
        logger.error("Rule catalog unavailable: %s", exc)
        return ScanOutcome(
            status="FAILED",
            message=StatusMessage(kind="error", text=f"Rule catalog unavailable: {exc}"),
            error=str(exc),
        )

    evaluation = evaluate(preprocess(snapshot.text), snapshot, rules)
    summary = summarize(evaluation.findings)

    report_path: str | None = None
    report_error: str | None = None
    if project_root is not None and settings.write_report:
        try:
            written = write_report(
                build_record(evaluation.findings, summary),
                project_root,
                settings.report_path,
            )
            report_path = str(written)
        except ReportWriteError as exc:
            logger.warning("%s", exc)
            report_error = str(exc)

    status = "SUCCESS" if not evaluation.degraded and report_error is None else "PARTIAL_SUCCESS"
    return ScanOutcome(
        status=status,
        message=summary_message(summary),
        findings=evaluation.findings,
        summary=summary,
        failed_rules=evaluation.failed_rules,
        report_path=report_path,
        report_error=report_error,
    )


def scan_document(
    path: str | Path,
    *,
    config: AppConfig | None = None,
    catalog: Iterable[Rule] | None = None,
    project_root: str | Path | None = None,
) -> ScanOutcome:
    settings = config or AppConfig()
    snapshot = DocumentSnapshot.from_path(path, html_suffixes=settings.html_suffixes)
    return scan_snapshot(snapshot, config=settings, catalog=catalog, project_root=project_root)


def fix_document(
    path: str | Path,
    *,
    config: AppConfig | None = None,
    catalog: Iterable[Rule] | None = None,
    project_root: str | Path | None = None,
    dry_run: bool = False,
    host: DocumentHost | None = None,
) -> FixOutcome:
    settings = config or AppConfig()
    snapshot = DocumentSnapshot.from_path(path, html_suffixes=settings.html_suffixes)
    snapshot.require_html()

    try:
        rules = resolve_catalog(settings, catalog)
    except (CatalogError, ConfigError) as exc:
        logger.error("Rule catalog unavailable: %s", exc)
        return FixOutcome(applied=False, edits_count=0, findings_before=0, error=str(exc))

    evaluation = evaluate(preprocess(snapshot.text), snapshot, rules)
    findings_before = len(evaluation.findings)

    try:
        batch = apply_fixes(snapshot, evaluation.findings, rules)
    except AutofixError as exc:
        logger.warning("Autofix failed for %s: %s", path, exc)
        return FixOutcome(
            applied=False,
            edits_count=0,
            findings_before=findings_before,
            dry_run=dry_run,
            error=str(exc),
        )

    if dry_run or not batch.edits:
        return FixOutcome(
            applied=False,
            edits_count=len(batch),
            findings_before=findings_before,
            findings_after=None if dry_run else findings_before,
            dry_run=dry_run,
            fixed_rules=batch.rule_ids,
        )

    target = host or FileDocumentHost(path)
    if not target.commit(batch):
        return FixOutcome(
            applied=False,
            edits_count=len(batch),
            findings_before=findings_before,
            error=f"Fixes could not be applied to {path}",
            fixed_rules=batch.rule_ids,
        )

    rescan = scan_document(path, config=settings, catalog=rules, project_root=project_root)
    logger.info("Applied %d edit(s) to %s", len(batch), path)
    return FixOutcome(
        applied=True,
        edits_count=len(batch),
        findings_before=findings_before,
        findings_after=len(rescan.findings),
        fixed_rules=batch.rule_ids,
    )
