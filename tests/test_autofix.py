import re
import stat
from pathlib import Path

import pytest

from semantic_checker.autofix import EditBuilder, FileDocumentHost, apply_fixes
from semantic_checker.catalog import load_catalog
from semantic_checker.engine import evaluate
from semantic_checker.errors import AutofixError, EditConflictError, StaleSnapshotError
from semantic_checker.models import Rule
from semantic_checker.preprocess import preprocess
from semantic_checker.snapshot import DocumentSnapshot


def build_batch(text: str, catalog=None):
    rules = catalog if catalog is not None else load_catalog()
    snapshot = DocumentSnapshot(text)
    evaluation = evaluate(preprocess(text), snapshot, rules)
    return snapshot, apply_fixes(snapshot, evaluation.findings, rules)


def test_missing_alt_fix_touches_nothing_else():
    text = '<img src="x.png">\n<p>Body text</p>\n<img src="y.png" width="10">\n'

    snapshot, batch = build_batch(text)
    fixed = batch.apply(snapshot.text)

    assert len(batch) == 2
    assert batch.rule_ids == ("R1",)
    assert fixed.count('alt=""') == 2
    assert fixed.replace(' alt=""', "") == text


def test_fixes_for_language_svg_and_iframe():
    text = '<html lang="">\n<svg><path d="M0 0"/></svg>\n<iframe src="a.html"></iframe>\n</html>'

    snapshot, batch = build_batch(text)
    fixed = batch.apply(snapshot.text)

    assert '<html lang="en">' in fixed
    assert '<svg aria-hidden="true">' in fixed
    assert '<iframe title="Embedded content" src="a.html">' in fixed


def test_autoplay_fix_is_applied_once():
    text = '<audio autoplay src="a.mp3"></audio>'

    snapshot, batch = build_batch(text)

    assert batch.apply(snapshot.text) == '<audio controls autoplay src="a.mp3"></audio>'
    assert len(batch) == 1


def test_identical_spans_compose():
    snapshot = DocumentSnapshot("<img src=a>")
    builder = EditBuilder(snapshot)

    builder.replace(0, 11, "<img alt src=a>", rule_id="R1")
    assert builder.current_text(0, 11) == "<img alt src=a>"
    builder.replace(0, 11, "<img alt title src=a>", rule_id="R46")

    batch = builder.build()
    assert len(batch) == 1
    assert batch.edits[0].rule_ids == ("R1", "R46")
    assert batch.apply(snapshot.text) == "<img alt title src=a>"


def test_partially_overlapping_edits_conflict():
    builder = EditBuilder(DocumentSnapshot("0123456789"))
    builder.replace(0, 5, "abcde")
    builder.replace(5, 8, "xyz")

    with pytest.raises(EditConflictError):
        builder.replace(3, 7, "!!!!")


def test_stale_snapshot_is_refused():
    snapshot, batch = build_batch('<img src="x.png">')

    with pytest.raises(StaleSnapshotError):
        batch.apply('<img src="x.png"> ')


def test_edit_outside_document_is_rejected():
    builder = EditBuilder(DocumentSnapshot("abc"))

    with pytest.raises(AutofixError):
        builder.replace(2, 10, "x")


def test_non_string_fix_result_is_an_error():
    bad = Rule(
        id="R1",
        tag="img",
        level="A",
        criterion="1.1.1",
        pattern=re.compile(r"<img\b[^>]*>"),
        applies=lambda tag, document: True,
        message="m",
        recommendation="r",
        fix=lambda tag: None,
    )

    with pytest.raises(AutofixError):
        build_batch('<img src="x.png">', (bad,))


def test_file_host_commits_atomically(tmp_path: Path):
    page = tmp_path / "index.html"
    page.write_bytes(b'<img src="x.png">\r\n<p>ok</p>\r\n')
    page.chmod(0o644)

    snapshot = DocumentSnapshot.from_path(page)
    rules = load_catalog()
    evaluation = evaluate(preprocess(snapshot.text), snapshot, rules)
    batch = apply_fixes(snapshot, evaluation.findings, rules)

    assert FileDocumentHost(page).commit(batch) is True
    assert page.read_bytes() == b'<img alt="" src="x.png">\r\n<p>ok</p>\r\n'
    assert [item.name for item in tmp_path.iterdir()] == ["index.html"]
    assert stat.S_IMODE(page.stat().st_mode) == 0o644


def test_file_host_refuses_changed_document(tmp_path: Path):
    page = tmp_path / "index.html"
    page.write_text('<img src="x.png">', encoding="utf-8")
    snapshot = DocumentSnapshot.from_path(page)
    rules = load_catalog()
    batch = apply_fixes(snapshot, evaluate(preprocess(snapshot.text), snapshot, rules).findings, rules)

    page.write_text('<img src="x.png"><p>edited</p>', encoding="utf-8")

    assert FileDocumentHost(page).commit(batch) is False
    assert page.read_text(encoding="utf-8") == '<img src="x.png"><p>edited</p>'
