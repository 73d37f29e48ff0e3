import re

from semantic_checker.catalog import load_catalog
from semantic_checker.engine import evaluate
from semantic_checker.models import Rule
from semantic_checker.preprocess import neutralized_regions, preprocess
from semantic_checker.snapshot import DocumentSnapshot

PAGE = (
    "<html>\n"
    "<head><title>Quarterly results for ACME</title></head>\n"
    "<body>\n"
    '<!-- <img src="hidden.png"> -->\n'
    "<main>\n"
    "<h1>Results</h1>\n"
    '<img src="chart.png">\n'
    '<iframe src="map.html"></iframe>\n'
    "</main>\n"
    "<script>document.write('<img src=\"x.png\">');</script>\n"
    "<style>.a { color: #777777; }</style>\n"
    "</body>\n"
    "</html>\n"
)


def scan(text: str, catalog=None):
    snapshot = DocumentSnapshot(text)
    return evaluate(preprocess(text), snapshot, catalog if catalog is not None else load_catalog())


def test_image_without_alt_yields_single_r1_finding():
    evaluation = scan('<img src="a.png">')

    assert [item.rule_id for item in evaluation.findings] == ["R1"]
    finding = evaluation.findings[0]
    assert finding.level == "A"
    assert finding.span.start_offset == 0
    assert finding.span.end_offset == len('<img src="a.png">')
    assert (finding.span.start.line, finding.span.start.character) == (1, 0)
    assert finding.evidence == '<img src="a.png">'


def test_bare_table_reports_structure_and_caption_only():
    evaluation = scan("<table><tr><td>x</td></tr></table>")

    assert [item.rule_id for item in evaluation.findings] == ["R22", "R23"]
    assert not evaluation.failed_rules


def test_commented_out_markup_is_ignored():
    evaluation = scan('<!-- <img src="a.png"> -->')

    assert evaluation.findings == ()


def test_scan_is_deterministic():
    catalog = load_catalog()

    first = scan(PAGE, catalog)
    second = scan(PAGE, catalog)

    assert first == second
    assert [item.to_dict() for item in first.findings] == [item.to_dict() for item in second.findings]


def test_offsets_map_back_to_original_text():
    evaluation = scan(PAGE)
    lines = PAGE.split("\n")

    assert evaluation.findings
    for finding in evaluation.findings:
        start, end = finding.span.start_offset, finding.span.end_offset
        assert PAGE[start:end] == finding.evidence
        line_text = lines[finding.span.start.line - 1]
        assert line_text[finding.span.start.character :].startswith(finding.evidence.split("\n")[0])


def test_findings_skip_neutralized_regions():
    evaluation = scan(PAGE)
    regions = neutralized_regions(PAGE)

    ids = [item.rule_id for item in evaluation.findings]
    assert ids.count("R1") == 1
    assert "R10" in ids
    assert "R67" in ids
    r1 = next(item for item in evaluation.findings if item.rule_id == "R1")
    assert r1.span.start.line == 7
    for finding in evaluation.findings:
        for start, end in regions:
            assert not (start <= finding.span.start_offset and finding.span.end_offset <= end)


def test_findings_follow_catalog_order_then_match_order():
    evaluation = scan('<img src="a.png">\n<iframe src="b.html"></iframe>\n<img src="c.png">')

    assert [item.rule_id for item in evaluation.findings] == ["R1", "R1", "R10"]
    assert [item.span.start.line for item in evaluation.findings] == [1, 3, 2]


def test_failing_rule_is_isolated(caplog):
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
    catalog = (broken, *load_catalog())

    with caplog.at_level("WARNING"):
        evaluation = scan('<p>hi</p><img src="a.png">', catalog)

    assert evaluation.failed_rules == ("R900",)
    assert evaluation.degraded
    assert [item.rule_id for item in evaluation.findings] == ["R1"]
    assert "R900" in caplog.text


def test_empty_document_has_no_findings():
    evaluation = scan("")

    assert evaluation.findings == ()
    assert evaluation.failed_rules == ()
