import json
import re
from pathlib import Path

from semantic_checker.catalog import load_catalog
from semantic_checker.models import AppConfig, Rule
from semantic_checker.pipeline import fix_document, scan_snapshot
from semantic_checker.snapshot import DocumentSnapshot


def test_empty_catalog_fails_without_findings_or_report(tmp_path: Path):
    outcome = scan_snapshot(DocumentSnapshot("<img>"), catalog=(), project_root=tmp_path)

    assert outcome.status == "FAILED"
    assert outcome.findings == ()
    assert outcome.message.kind == "error"
    assert not (tmp_path / "diagnostics").exists()


def test_unknown_disabled_rule_fails_the_scan(tmp_path: Path):
    config = AppConfig(disabled_rules=("R999",))

    outcome = scan_snapshot(DocumentSnapshot('<img src="a.png">'), config=config, project_root=tmp_path)

    assert outcome.status == "FAILED"
    assert "R999" in (outcome.error or "")
    assert not (tmp_path / "diagnostics").exists()


def test_unknown_disabled_rule_fails_the_fix(tmp_path: Path):
    page = tmp_path / "index.html"
    page.write_text('<img src="a.png">', encoding="utf-8")

    result = fix_document(page, config=AppConfig(disabled_rules=("R999",)), project_root=tmp_path)

    assert result.applied is False
    assert "R999" in (result.error or "")
    assert page.read_text(encoding="utf-8") == '<img src="a.png">'


def test_failing_rule_degrades_to_partial_success(tmp_path: Path):
    def explode(tag: str, document: str) -> bool:
        raise RuntimeError("boom")

    broken = Rule(
        id="R900",
        tag="p",
        level="AA",
        criterion="0.0.0",
        pattern=re.compile(r"<p\b[^>]*>"),
        applies=explode,
        message="broken",
        recommendation="none",
    )

    outcome = scan_snapshot(
        DocumentSnapshot('<p>hi</p><img src="a.png">'),
        catalog=(broken, *load_catalog()),
        project_root=tmp_path,
    )

    assert outcome.status == "PARTIAL_SUCCESS"
    assert outcome.failed_rules == ("R900",)
    assert [item.rule_id for item in outcome.findings] == ["R1"]
    assert outcome.message.kind == "warning"
    assert outcome.message.text == "1 issue: 1 at Level A"

    record = json.loads((tmp_path / "diagnostics" / "semantic-checker-log.json").read_text(encoding="utf-8"))
    assert record["totalIssues"] == 1
