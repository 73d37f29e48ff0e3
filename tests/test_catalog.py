import re
from dataclasses import replace

import pytest

from semantic_checker.catalog import load_catalog, rule_index, validate_catalog
from semantic_checker.engine import evaluate
from semantic_checker.errors import CatalogError, ConfigError
from semantic_checker.preprocess import preprocess
from semantic_checker.snapshot import DocumentSnapshot


def rule_ids(html: str) -> list[str]:
    evaluation = evaluate(preprocess(html), DocumentSnapshot(html), load_catalog())
    assert not evaluation.failed_rules
    return [item.rule_id for item in evaluation.findings]


def test_catalog_is_complete_and_ordered():
    catalog = load_catalog()
    ids = [rule.id for rule in catalog]

    assert ids == [f"R{number}" for number in range(1, 94)]
    assert all(rule.level in {"A", "AA", "AAA"} for rule in catalog)
    assert {rule.id for rule in catalog if rule.fixable} >= {"R1", "R5", "R10", "R42", "R56", "R67"}


def test_unimplemented_rule_never_fires():
    rules = rule_index(load_catalog())

    assert rules["R72"].implemented is False
    assert "R72" not in rule_ids("<nav><a href='/'>Home</a></nav><header></header><footer></footer>")


def test_disabled_rules_are_removed():
    ids = {rule.id for rule in load_catalog(["r1", "R10"])}

    assert "R1" not in ids
    assert "R10" not in ids
    assert "R2" in ids


def test_unknown_disabled_rule_is_a_config_error():
    with pytest.raises(ConfigError):
        load_catalog(["R999"])


def test_validate_catalog_rejects_bad_entries():
    catalog = load_catalog()

    with pytest.raises(CatalogError):
        validate_catalog([])
    with pytest.raises(CatalogError):
        validate_catalog([catalog[0], catalog[0]])
    with pytest.raises(CatalogError):
        validate_catalog([replace(catalog[0], level="AAAA")])
    with pytest.raises(CatalogError):
        validate_catalog([replace(catalog[0], pattern="<img")])
    with pytest.raises(CatalogError):
        validate_catalog([replace(catalog[0], applies=None)])
    with pytest.raises(CatalogError):
        validate_catalog([replace(catalog[0], fix="alt")])


def test_tag_names_are_bounded():
    assert rule_ids("<abbr>HTML</abbr>") == ["R69"]
    assert rule_ids('<abbr title="HyperText Markup Language">HTML</abbr>') == []


def test_contrast_rules():
    assert "R43" in rule_ids('<p style="color:#777777">Note</p>')
    assert "R43" not in rule_ids('<p style="color:#000000">Note</p>')
    assert "R43" in rule_ids('<span style="color:#ffffff; background-color:#eeeeee">x</span>')
    assert "R49" in rule_ids('<button style="color:#aaaaaa; background-color:#ffffff">Go</button>')
    assert "R49" not in rule_ids('<button style="color:#000000; background-color:#ffffff">Go</button>')


def test_heading_rules():
    assert rule_ids("<h1>Title</h1><h3>Sub</h3>") == ["R65"]
    assert "R62" in rule_ids("<h2></h2>")
    assert "R28" in rule_ids("<body><p>No headings here</p></body>")


def test_focus_and_keyboard_rules():
    assert "R59" in rule_ids('<div tabindex="2">x</div>')
    assert "R59" not in rule_ids('<div tabindex="0">x</div>')
    assert "R53" in rule_ids('<div onclick="go()">Open</div>')
    assert "R53" not in rule_ids('<div onclick="go()" onkeydown="go()">Open</div>')
    assert "R63" in rule_ids('<a href="/" style="outline: none;">Home</a>')


def test_link_rules():
    assert "R60" in rule_ids('<a href="/more">Click here</a>')
    assert "R64" in rule_ids('<a href="/"></a>')
    assert "R8" in rule_ids('<a href="/"><i class="icon"></i></a>')
    assert rule_ids('<a href="/pricing">View pricing details</a>') == []


def test_form_rules():
    assert "R80" in rule_ids('<input name="a" name="b">')
    assert "R80" in rule_ids('<input name="a"></input>')
    assert "R81" in rule_ids('<input type="text">')
    assert "R81" in rule_ids('<div role="checkbox">Agree</div>')
    assert "R81" not in rule_ids('<div role="checkbox" aria-checked="false">Agree</div>')
    assert "R39" in rule_ids('<form autocomplete="off"></form>')
    assert "R77" in rule_ids('<input name="q" placeholder="Search">')


def test_structure_rules():
    assert "R9" in rule_ids('<figure><img src="a.png" alt="Chart"></figure>')
    assert "R26" in rule_ids('<fieldset><input name="a" type="radio"></fieldset>')
    assert "R33" in rule_ids("<ul></ul>")
    assert "R34" in rule_ids("<li>Lonely</li>")
    assert "R85" in rule_ids("<table><caption> </caption><thead></thead><tbody></tbody></table>")


def test_language_rules():
    assert "R67" in rule_ids('<html lang="">')
    assert "R67" not in rule_ids('<html lang="en-GB">')
    assert "R68" in rule_ids('<html lang="en"><p>Un café, por favor.</p></html>')
    assert "R68" not in rule_ids('<html lang="es"><p>Un café, por favor.</p></html>')


def test_svg_and_media_rules():
    assert "R5" in rule_ids('<svg viewBox="0 0 10 10"><path d="M0 0"/></svg>')
    assert "R5" not in rule_ids('<svg aria-hidden="true"><path d="M0 0"/></svg>')
    assert "R42" in rule_ids('<audio autoplay src="a.mp3"></audio>')
    assert "R56" in rule_ids("<marquee>News</marquee>")
    assert "R16" in rule_ids('<video src="a.mp4"></video>')
    assert "R16" not in rule_ids(
        '<video src="a.mp4"><track kind="captions" srclang="en" src="a.vtt"></video>'
    )


def test_attribute_names_inside_quoted_values_are_ignored():
    assert "R1" in rule_ids('<img src="a.png" title="photo alt text">')
    assert "R1" not in rule_ids('<img src="a.png" title="photo" alt="Chart">')
    assert "R10" in rule_ids('<iframe data-note="title=Map" src="m.html"></iframe>')

    fix = rule_index(load_catalog())["R1"].fix
    assert fix('<img src="a.png" title="photo alt text">') == '<img alt="" src="a.png" title="photo alt text">'


def test_quote_source_and_picture_rules():
    assert "R91" in rule_ids("<q>To be or not to be</q>")
    assert "R91" not in rule_ids('<q cite="https://example.com/hamlet">To be</q>')
    assert "R92" in rule_ids('<video><source src="a.mp4" type="video/mp4"></video>')
    assert "R92" not in rule_ids(
        '<video><source src="a.mp4"><track kind="captions" srclang="en" src="a.vtt"></video>'
    )
    assert "R92" not in rule_ids('<picture><source srcset="a.webp"><img src="a.png" alt="A"></picture>')
    assert "R93" in rule_ids('<picture><source srcset="a.webp"><img src="a.png"></picture>')
    assert "R93" not in rule_ids('<picture><img src="a.png" alt="Logo"></picture>')


def test_patterns_are_compiled():
    for rule in load_catalog():
        assert isinstance(rule.pattern, re.Pattern)
