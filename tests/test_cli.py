import json
from pathlib import Path

import pytest

from semantic_checker.cli import main

CLEAN_PAGE = (
    '<html lang="en">\n'
    "<head><title>Accessible page title</title></head>\n"
    "<body><main><h1>Welcome</h1><p>Hello there.</p></main></body>\n"
    "</html>\n"
)


def test_scan_reports_issues_and_writes_log(tmp_path: Path, capsys):
    page = tmp_path / "index.html"
    page.write_text('<img src="a.png">', encoding="utf-8")

    code = main(["scan", str(page), "--project-root", str(tmp_path)])
    output = json.loads(capsys.readouterr().out)

    assert code == 1
    assert output["status"] == "SUCCESS"
    assert output["message"] == {"kind": "warning", "text": "1 issue: 1 at Level A"}
    assert [item["ruleId"] for item in output["findings"]] == ["R1"]

    report = json.loads((tmp_path / "diagnostics" / "semantic-checker-log.json").read_text(encoding="utf-8"))
    assert report["totalIssues"] == 1
    assert report["breakdownByLevel"] == {"A": 1, "AA": 0, "AAA": 0}
    assert report["issues"][0]["startLine"] == 1


def test_scan_clean_page(tmp_path: Path, capsys):
    page = tmp_path / "clean.html"
    page.write_text(CLEAN_PAGE, encoding="utf-8")

    code = main(["scan", str(page), "--project-root", str(tmp_path), "--no-report"])
    output = json.loads(capsys.readouterr().out)

    assert code == 0
    assert output["message"]["text"] == "The HTML is semantically correct."
    assert output["findings"] == []
    assert not (tmp_path / "diagnostics").exists()


def test_scan_rejects_non_html(tmp_path: Path, capsys):
    notes = tmp_path / "notes.txt"
    notes.write_text("<img src='a.png'>", encoding="utf-8")

    code = main(["scan", str(notes), "--project-root", str(tmp_path)])
    output = json.loads(capsys.readouterr().out)

    assert code == 2
    assert output["status"] == "FAILED"
    assert "not an HTML file" in output["error"]
    assert not (tmp_path / "diagnostics").exists()


def test_scan_honours_disabled_rules(tmp_path: Path, capsys):
    page = tmp_path / "index.html"
    page.write_text('<img src="a.png">', encoding="utf-8")
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"disabled_rules": ["R1"], "write_report": False}), encoding="utf-8")

    code = main(["scan", str(page), "--config", str(config)])

    assert code == 0
    assert json.loads(capsys.readouterr().out)["findings"] == []


def test_unknown_disabled_rule_is_a_usage_error(tmp_path: Path, capsys):
    page = tmp_path / "index.html"
    page.write_text("<p>x</p>", encoding="utf-8")
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"disabled_rules": ["R999"]}), encoding="utf-8")

    assert main(["scan", str(page), "--config", str(config)]) == 2


def test_missing_config_exits_with_usage_error(tmp_path: Path):
    with pytest.raises(SystemExit) as excinfo:
        main(["scan", str(tmp_path / "index.html"), "--config", str(tmp_path / "missing.json")])

    assert excinfo.value.code == 2


def test_fix_applies_edits_and_rescans(tmp_path: Path, capsys):
    page = tmp_path / "index.html"
    page.write_text('<img src="a.png">\n', encoding="utf-8")

    code = main(["fix", str(page), "--project-root", str(tmp_path)])
    output = json.loads(capsys.readouterr().out)

    assert code == 0
    assert output["applied"] is True
    assert output["edits_count"] == 1
    assert output["findings_before"] == 1
    assert output["findings_after"] == 0
    assert output["fixed_rules"] == ["R1"]
    assert page.read_text(encoding="utf-8") == '<img alt="" src="a.png">\n'


def test_fix_dry_run_leaves_file_alone(tmp_path: Path, capsys):
    page = tmp_path / "index.html"
    page.write_text('<img src="a.png">', encoding="utf-8")

    code = main(["fix", str(page), "--project-root", str(tmp_path), "--dry-run"])
    output = json.loads(capsys.readouterr().out)

    assert code == 0
    assert output["dry_run"] is True
    assert output["edits_count"] == 1
    assert output["applied"] is False
    assert page.read_text(encoding="utf-8") == '<img src="a.png">'


def test_rules_lists_catalog(capsys):
    assert main(["rules"]) == 0

    listed = json.loads(capsys.readouterr().out)
    assert len(listed) == 93
    assert listed[0]["id"] == "R1"
    assert listed[0]["fixable"] is True
    assert {"id", "tag", "level", "criterion", "message", "recommendation", "fixable", "implemented"} == set(listed[0])
