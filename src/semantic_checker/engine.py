from __future__ import annotations

import logging
from typing import Iterable

from semantic_checker.models import Evaluation, Finding, Rule
from semantic_checker.preprocess import is_filler
from semantic_checker.snapshot import DocumentSnapshot

logger = logging.getLogger(__name__)


def run_rule(rule: Rule, preprocessed_text: str, snapshot: DocumentSnapshot) -> list[Finding]:
    findings: list[Finding] = []
    for match in rule.pattern.finditer(preprocessed_text):
        matched = match.group(0)
        if is_filler(matched):
            continue
        if not rule.applies(matched, preprocessed_text):
            continue
        start, end = match.span()
        findings.append(
            Finding(
                rule_id=rule.id,
                level=rule.level,
                message=rule.message,
                recommendation=rule.recommendation,
                span=snapshot.span(start, end),
                evidence=snapshot.slice(start, end),
            )
        )
    return findings


def evaluate(preprocessed_text: str, snapshot: DocumentSnapshot, catalog: Iterable[Rule]) -> Evaluation:
    """Run every rule over the preprocessed text, in catalog order.

    Offsets are mapped through ``snapshot``; the preprocessed text has the
    same length and line layout as the snapshot text. A rule that raises
    contributes no findings and is listed in ``failed_rules``.
    """
    if len(preprocessed_text) != len(snapshot.text):
        raise ValueError("Preprocessed text must have the same length as the snapshot text")

    findings: list[Finding] = []
    failed: list[str] = []
    for rule in catalog:
        try:
            rule_findings = run_rule(rule, preprocessed_text, snapshot)
        except Exception:
            logger.exception("Rule %s failed; its findings are discarded for this scan", rule.id)
            failed.append(rule.id)
            continue
        findings.extend(rule_findings)

    if failed:
        logger.warning("%d rule(s) failed during the scan: %s", len(failed), ", ".join(failed))
    logger.debug("Evaluated document %s: %d finding(s)", snapshot.path or "<buffer>", len(findings))
    return Evaluation(findings=tuple(findings), failed_rules=tuple(failed))
