"""Robust: parsing, name/role/value and status messages (WCAG principle 4)."""

from __future__ import annotations

import re

from semantic_checker.catalog.markup import (
    attribute_value,
    element_body,
    element_pattern,
    has_attribute,
    inner_text,
    opening_tag,
    tag_name,
    tag_pattern,
)
from semantic_checker.models import Rule

_QUOTED = re.compile(r"\"[^\"]*\"|'[^']*'")
_ATTRIBUTE_NAME = re.compile(r"\s([a-zA-Z_:@][\w:.@-]*)")
_NAMED_IMAGE = re.compile(r"<img\b[^>]*\salt\s*=\s*(?:\"[^\"\s][^\"]*\"|'[^'\s][^']*')", re.IGNORECASE)
_STATUS_HOOK = re.compile(r"\b(?:status|alert|notification|toast|flash)\b", re.IGNORECASE)
_UNNAMED_INPUT_TYPES = {"hidden", "submit", "reset", "button", "image"}
_ROLE_STATE = {
    "checkbox": ("aria-checked",),
    "switch": ("aria-checked",),
    "radio": ("aria-checked",),
    "menuitemcheckbox": ("aria-checked",),
    "menuitemradio": ("aria-checked",),
    "slider": ("aria-valuenow",),
    "spinbutton": ("aria-valuenow",),
    "scrollbar": ("aria-valuenow", "aria-controls"),
    "combobox": ("aria-expanded",),
    "tab": ("aria-selected",),
    "option": ("aria-selected",),
}


def _button_without_name(tag: str, _document: str) -> bool:
    body = element_body(tag)
    if any(has_attribute(tag, name) for name in ("aria-label", "aria-labelledby", "title")):
        return False
    return not inner_text(body) and _NAMED_IMAGE.search(body) is None


def attribute_names(tag: str) -> list[str]:
    """Attribute names of an opening tag, in order, lowercased."""
    opening = _QUOTED.sub('""', opening_tag(tag))
    name_end = len(tag_name(opening)) + 1
    return [name.lower() for name in _ATTRIBUTE_NAME.findall(opening[name_end:])]


def _malformed(tag: str, _document: str) -> bool:
    if tag.lower().startswith("</"):
        return True
    names = attribute_names(tag)
    if len(names) != len(set(names)):
        return True
    return "<" in _QUOTED.sub('""', tag)[1:]


def _missing_name_or_state(tag: str, document: str) -> bool:
    role = (attribute_value(tag, "role") or "").strip().lower()
    if role in _ROLE_STATE:
        return not any(has_attribute(tag, state) for state in _ROLE_STATE[role])
    if tag_name(tag) != "input":
        return False
    input_type = (attribute_value(tag, "type") or "text").strip().lower()
    if input_type in _UNNAMED_INPUT_TYPES:
        return False
    if any(has_attribute(tag, name) for name in ("aria-label", "aria-labelledby", "title")):
        return False
    field_id = attribute_value(tag, "id")
    if field_id and re.search(rf"\sfor\s*=\s*[\"']?{re.escape(field_id)}[\"'\s>]", document, re.IGNORECASE):
        return False
    return not has_attribute(tag, "name")


def _status_without_live_region(tag: str, _document: str) -> bool:
    hooks = " ".join(value for value in (attribute_value(tag, "id"), attribute_value(tag, "class")) if value)
    if _STATUS_HOOK.search(hooks.replace("-", " ").replace("_", " ")) is None:
        return False
    if has_attribute(tag, "aria-live"):
        return False
    return (attribute_value(tag, "role") or "").strip().lower() not in {"status", "alert", "log"}


RULES: tuple[Rule, ...] = (
    Rule(
        id="R7",
        tag="button",
        level="A",
        criterion="4.1.2",
        pattern=element_pattern("button"),
        applies=_button_without_name,
        message="Button missing accessible name",
        recommendation="Include visible text or an aria-label to describe the button's purpose.",
    ),
    Rule(
        id="R80",
        tag="html|body|button|form|input|select|textarea",
        level="A",
        criterion="4.1.1",
        pattern=re.compile(
            r"<(?:html|body|button|form|input|select|textarea)\b[^>]*>|</input\s*>", re.IGNORECASE
        ),
        applies=_malformed,
        message="Malformed or improperly structured HTML tag",
        recommendation=(
            "Check for repeated attributes, invalid nesting, or improper tag syntax. Use a validator "
            "to ensure the HTML is well-formed."
        ),
    ),
    Rule(
        id="R81",
        tag="input|div|span|li|a",
        level="A",
        criterion="4.1.2",
        pattern=tag_pattern("input", "div", "span", "li", "a"),
        applies=_missing_name_or_state,
        message="Missing accessible name, role, or value",
        recommendation=(
            "Ensure interactive elements use native semantics or ARIA attributes (aria-label, role, "
            "aria-checked) and provide name/type where appropriate."
        ),
    ),
    Rule(
        id="R82",
        tag="div|output|p|span",
        level="AA",
        criterion="4.1.3",
        pattern=tag_pattern("div", "output", "p", "span"),
        applies=_status_without_live_region,
        message="Missing ARIA status announcement for dynamic updates",
        recommendation=(
            "Use aria-live='polite' or role='status' on containers with dynamic content updates so "
            "assistive technologies can announce changes."
        ),
    ),
)
