from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from semantic_checker.errors import ReportWriteError
from semantic_checker.models import LEVELS, Finding, ReportSummary, StatusMessage, normalize_level

logger = logging.getLogger(__name__)

DEFAULT_REPORT_PATH = "diagnostics/semantic-checker-log.json"
SUCCESS_TEXT = "The HTML is semantically correct."


def summarize(findings: Iterable[Finding], now: datetime | None = None) -> ReportSummary:
    by_level = {level: 0 for level in LEVELS}
    total = 0
    for item in findings:
        by_level[normalize_level(item.level)] += 1
        total += 1

    stamp = (now or datetime.now(timezone.utc)).isoformat()
    return ReportSummary(total=total, by_level=by_level, timestamp=stamp)


def summary_message(summary: ReportSummary) -> StatusMessage:
    if summary.total == 0:
        return StatusMessage(kind="success", text=SUCCESS_TEXT)

    noun = "issue" if summary.total == 1 else "issues"
    parts = [
        f"{summary.by_level[level]} at Level {level}"
        for level in LEVELS
        if summary.by_level.get(level, 0)
    ]
    return StatusMessage(kind="warning", text=f"{summary.total} {noun}: {' | '.join(parts)}")


def build_record(findings: Iterable[Finding], summary: ReportSummary) -> dict:
    return {
        "totalIssues": summary.total,
        "breakdownByLevel": {level: summary.by_level.get(level, 0) for level in LEVELS},
        "timestamp": summary.timestamp,
        "issues": [item.to_dict() for item in findings],
    }


def write_report(
    record: dict,
    project_root: str | Path,
    relative_path: str = DEFAULT_REPORT_PATH,
) -> Path:
    """Write ``record`` under ``project_root``, replacing any previous report."""
    target = Path(project_root) / relative_path
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        _write_json(target, record)
    except OSError as exc:
        raise ReportWriteError(f"Could not write report to {target}: {exc}") from exc
    logger.info("Report written to %s", target)
    return target


def _write_json(path: Path, payload: dict) -> None:
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, ensure_ascii=True)
