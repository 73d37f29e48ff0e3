"""Text-level helpers shared by rule predicates and autofix transforms.

These operate on a single matched tag (or tag-plus-content span) as raw text.
They are heuristics, not a parser.
"""

from __future__ import annotations

import re
from typing import Callable

_TAG_NAME = re.compile(r"^<\s*([a-zA-Z][\w:-]*)")
_ANY_TAG = re.compile(r"<[^>]+>")
_QUOTED = re.compile(r"\"[^\"]*\"|'[^']*'")
_VALUE = re.compile(r"\"([^\"]*)\"|'([^']*)'|([^\s\"'>]+)")


def tag_pattern(*names: str, suffix: str = r"[^>]*>", flags: int = re.IGNORECASE) -> re.Pattern[str]:
    """Compile ``<name ...>`` for one or more tag names, bounded on the name."""
    alternation = "|".join(names)
    group = f"(?:{alternation})" if len(names) > 1 else alternation
    return re.compile(rf"<{group}\b{suffix}", flags)


def element_pattern(name: str, *, close_optional: bool = False) -> re.Pattern[str]:
    """Compile ``<name ...>...</name>`` (lazy). With ``close_optional`` an
    element without a closing tag still matches as its opening tag alone."""
    body = rf"[^>]*>(?:.*?</{name}\s*>)?" if close_optional else rf"[^>]*>.*?</{name}\s*>"
    return re.compile(rf"<{name}\b{body}", re.IGNORECASE | re.DOTALL)


def element_body(text: str) -> str:
    start = text.find(">")
    if start == -1:
        return ""
    end = text.rfind("</")
    if end <= start:
        return text[start + 1 :]
    return text[start + 1 : end]


def tag_name(tag: str) -> str:
    match = _TAG_NAME.match(tag)
    return match.group(1).lower() if match else ""


def _blank_quoted(match: re.Match[str]) -> str:
    quoted = match.group(0)
    return f"{quoted[0]}{' ' * (len(quoted) - 2)}{quoted[-1]}"


def _mask_values(text: str) -> str:
    """Blank the inside of quoted values, keeping quotes and offsets."""
    return _QUOTED.sub(_blank_quoted, text)


def _attribute_regex(name: str) -> re.Pattern[str]:
    return re.compile(rf"[\s\"'/]{re.escape(name)}(?=\s*=|\s|/?>|$)", re.IGNORECASE)


def _value_regex(name: str) -> re.Pattern[str]:
    return re.compile(rf"[\s\"'/]{re.escape(name)}\s*=\s*", re.IGNORECASE)


def has_attribute(tag: str, name: str) -> bool:
    return _attribute_regex(name).search(_mask_values(opening_tag(tag))) is not None


def _value_match(tag: str, name: str) -> re.Match[str] | None:
    opening = opening_tag(tag)
    found = _value_regex(name).search(_mask_values(opening))
    if found is None:
        return None
    return _VALUE.match(opening, found.end())


def attribute_value(tag: str, name: str) -> str | None:
    match = _value_match(tag, name)
    if match is None:
        return None
    for group in match.groups():
        if group is not None:
            return group
    return ""


def opening_tag(text: str) -> str:
    """The first ``<...>`` of a span, or the text itself if it has none."""
    end = text.find(">")
    return text if end == -1 else text[: end + 1]


def inner_text(text: str) -> str:
    """Visible text of a span with all tags stripped and whitespace collapsed."""
    return " ".join(_ANY_TAG.sub(" ", text).split())


def style_declarations(tag: str) -> dict[str, str]:
    style = attribute_value(tag, "style")
    if not style:
        return {}
    declarations: dict[str, str] = {}
    for chunk in style.split(";"):
        if ":" not in chunk:
            continue
        prop, _, value = chunk.partition(":")
        prop = prop.strip().lower()
        if prop:
            declarations[prop] = value.strip()
    return declarations


def contains_tag(document: str, name: str) -> bool:
    return re.search(rf"<{re.escape(name)}\b", document, re.IGNORECASE) is not None


def insert_attribute(name: str, value: str | None = "") -> Callable[[str], str]:
    """Build a fix that adds ``name="value"`` right after the tag name.

    With ``value=None`` a bare boolean attribute is inserted. Tags that already
    carry the attribute are returned unchanged.
    """
    rendered = name if value is None else f'{name}="{value}"'

    def _fix(tag: str) -> str:
        if has_attribute(tag, name):
            return tag
        match = _TAG_NAME.match(tag)
        if match is None:
            return tag
        return f"{tag[: match.end()]} {rendered}{tag[match.end():]}"

    _fix.__name__ = f"insert_{name.replace('-', '_')}"
    return _fix


def replace_attribute_value(name: str, value: str) -> Callable[[str], str]:
    """Build a fix that sets an existing attribute's value, or inserts it."""
    inserter = insert_attribute(name, value)

    def _fix(tag: str) -> str:
        if not has_attribute(tag, name):
            return inserter(tag)
        match = _value_match(tag, name)
        if match is None:
            return tag
        return f'{tag[: match.start()]}"{value}"{tag[match.end():]}'

    _fix.__name__ = f"set_{name.replace('-', '_')}"
    return _fix
