from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Any, Callable

LEVELS: tuple[str, ...] = ("A", "AA", "AAA")

Predicate = Callable[[str, str], bool]
FixTransform = Callable[[str], str]


def normalize_level(value: str) -> str:
    level = str(value).strip().upper()
    if level not in LEVELS:
        raise ValueError(f"Unknown conformance level: {value!r}")
    return level


@dataclass(frozen=True)
class Rule:
    id: str
    tag: str
    level: str
    criterion: str
    pattern: re.Pattern[str]
    applies: Predicate
    message: str
    recommendation: str
    fix: FixTransform | None = None
    implemented: bool = True

    @property
    def fixable(self) -> bool:
        return self.fix is not None

    def describe(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "tag": self.tag,
            "level": self.level,
            "criterion": self.criterion,
            "message": self.message,
            "recommendation": self.recommendation,
            "fixable": self.fixable,
            "implemented": self.implemented,
        }


@dataclass(frozen=True)
class Position:
    line: int
    character: int


@dataclass(frozen=True)
class Span:
    start_offset: int
    end_offset: int
    start: Position
    end: Position


@dataclass(frozen=True)
class Finding:
    rule_id: str
    level: str
    message: str
    recommendation: str
    span: Span
    evidence: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "ruleId": self.rule_id,
            "level": self.level,
            "message": self.message,
            "recommendation": self.recommendation,
            "startLine": self.span.start.line,
            "startChar": self.span.start.character,
            "endLine": self.span.end.line,
            "endChar": self.span.end.character,
        }


@dataclass(frozen=True)
class Evaluation:
    findings: tuple[Finding, ...]
    failed_rules: tuple[str, ...] = ()

    @property
    def degraded(self) -> bool:
        return bool(self.failed_rules)


@dataclass(frozen=True)
class ReportSummary:
    total: int
    by_level: dict[str, int]
    timestamp: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class StatusMessage:
    kind: str
    text: str


@dataclass(frozen=True)
class AppConfig:
    report_path: str = "diagnostics/semantic-checker-log.json"
    write_report: bool = True
    html_suffixes: tuple[str, ...] = (".html", ".htm", ".xhtml")
    disabled_rules: tuple[str, ...] = ()
    log_level: str = "WARNING"


@dataclass(frozen=True)
class ScanOutcome:
    status: str
    message: StatusMessage
    findings: tuple[Finding, ...] = ()
    summary: ReportSummary | None = None
    failed_rules: tuple[str, ...] = ()
    report_path: str | None = None
    report_error: str | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "message": {"kind": self.message.kind, "text": self.message.text},
            "summary": self.summary.to_dict() if self.summary else None,
            "failed_rules": list(self.failed_rules),
            "report_path": self.report_path,
            "report_error": self.report_error,
            "error": self.error,
            "findings": [
                {**item.to_dict(), "evidence": item.evidence[:300]} for item in self.findings
            ],
        }


@dataclass(frozen=True)
class FixOutcome:
    applied: bool
    edits_count: int
    findings_before: int
    findings_after: int | None = None
    dry_run: bool = False
    error: str | None = None
    fixed_rules: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
