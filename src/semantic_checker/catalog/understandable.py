"""Understandable: language, predictable behaviour and input assistance
(WCAG principle 3)."""

from __future__ import annotations

import re

from semantic_checker.catalog.markup import (
    attribute_value,
    contains_tag,
    element_body,
    element_pattern,
    has_attribute,
    inner_text,
    replace_attribute_value,
    tag_name,
    tag_pattern,
)
from semantic_checker.models import Rule

_LANGUAGE_TAG = re.compile(r"^[a-zA-Z]{2,3}(?:-[a-zA-Z0-9]{2,8})*$")
_ACCENTED = re.compile(r"[áéíóúüàèìòùâêîôûäëïöñçßæœ]", re.IGNORECASE)
_HTML_OPEN = re.compile(r"<html\b[^>]*>", re.IGNORECASE)
_CONTEXT_CHANGE = re.compile(r"location|redirect|window\.open|submit\s*\(", re.IGNORECASE)
_SUBMIT_CONTROL = re.compile(
    r"<input\b[^>]*type\s*=\s*[\"']?submit\b[^>]*>"
    r"|<button\b[^>]*type\s*=\s*[\"']?submit\b[^>]*>.*?</button\s*>",
    re.IGNORECASE | re.DOTALL,
)
_ERROR_SUPPORT = re.compile(r"error|invalid|aria-describedby|aria-errormessage", re.IGNORECASE)
_INSTRUCTIONS = re.compile(r"instruction|note|guidance|help|hint|required", re.IGNORECASE)
_SUGGESTIONS = re.compile(r"suggestion|hint|try again|did you mean|for example|e\.g\.", re.IGNORECASE)
_LABELABLE = {"input", "select", "textarea", "button", "meter", "output", "progress"}


def _invalid_document_language(tag: str, _document: str) -> bool:
    lang = (attribute_value(tag, "lang") or "").strip()
    return not lang or lang.lower() == "xx" or _LANGUAGE_TAG.match(lang) is None


def _document_is_english(document: str) -> bool:
    html = _HTML_OPEN.search(document)
    lang = (attribute_value(html.group(0), "lang") or "").strip().lower() if html else ""
    return not lang or lang.startswith("en")


def _foreign_phrase_without_lang(tag: str, document: str) -> bool:
    if has_attribute(tag, "lang"):
        return False
    return _ACCENTED.search(inner_text(element_body(tag))) is not None and _document_is_english(document)


def _focus_changes_context(tag: str, _document: str) -> bool:
    return _CONTEXT_CHANGE.search(attribute_value(tag, "onfocus") or "") is not None


def _input_changes_context(tag: str, _document: str) -> bool:
    return _CONTEXT_CHANGE.search(attribute_value(tag, "onchange") or "") is not None


def _submit_label(control: str) -> str:
    if tag_name(control) == "input":
        return (attribute_value(control, "value") or "submit").strip().lower()
    return inner_text(element_body(control)).lower()


def _inconsistent_submit_label(tag: str, document: str) -> bool:
    labels = [_submit_label(match.group(0)) for match in _SUBMIT_CONTROL.finditer(document)]
    if len(set(labels)) < 2:
        return False
    return _submit_label(tag) != labels[0]


def _required_without_error_support(tag: str, document: str) -> bool:
    if not (has_attribute(tag, "required") or has_attribute(tag, "aria-required")):
        return False
    return _ERROR_SUPPORT.search(document) is None


def _label_for_non_control(tag: str, document: str) -> bool:
    target = attribute_value(tag, "for")
    if not target:
        return False
    owner = re.search(
        rf"<([a-zA-Z][\w:-]*)\b[^>]*\sid\s*=\s*[\"']?{re.escape(target)}[\"'\s>]",
        document,
        re.IGNORECASE,
    )
    return owner is not None and owner.group(1).lower() not in _LABELABLE


def _form_without_instructions(tag: str, _document: str) -> bool:
    body = element_body(tag)
    if not re.search(r"\s(?:required|aria-required|pattern)\b", body, re.IGNORECASE):
        return False
    return _INSTRUCTIONS.search(inner_text(body)) is None


def _placeholder_as_label(tag: str, document: str) -> bool:
    if not has_attribute(tag, "placeholder"):
        return False
    if any(has_attribute(tag, name) for name in ("aria-label", "aria-labelledby", "aria-describedby", "title")):
        return False
    field_id = attribute_value(tag, "id")
    if field_id and re.search(rf"<label\b[^>]*\sfor\s*=\s*[\"']?{re.escape(field_id)}[\"'\s>]", document, re.IGNORECASE):
        return False
    return True


def _legend_not_first(tag: str, _document: str) -> bool:
    body = element_body(tag)
    if not contains_tag(body, "legend"):
        return False
    return re.match(r"\s*<legend\b", body, re.IGNORECASE) is None


def _errors_without_suggestions(tag: str, _document: str) -> bool:
    body = element_body(tag)
    if re.search(r"error", body, re.IGNORECASE) is None:
        return False
    return _SUGGESTIONS.search(body) is None


RULES: tuple[Rule, ...] = (
    Rule(
        id="R67",
        tag="html",
        level="A",
        criterion="3.1.1",
        pattern=tag_pattern("html"),
        applies=_invalid_document_language,
        message="Missing or incorrect lang attribute on <html>",
        recommendation="Add a valid lang attribute to <html> (e.g., lang='en', lang='es').",
        fix=replace_attribute_value("lang", "en"),
    ),
    Rule(
        id="R68",
        tag="span|p",
        level="AA",
        criterion="3.1.2",
        pattern=re.compile(r"<(span|p)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL),
        applies=_foreign_phrase_without_lang,
        message="Foreign language content missing lang attribute",
        recommendation="Use the lang attribute to identify the language of foreign phrases or sections.",
    ),
    Rule(
        id="R69",
        tag="abbr",
        level="AAA",
        criterion="3.1.4",
        pattern=tag_pattern("abbr"),
        applies=lambda tag, _doc: not (attribute_value(tag, "title") or "").strip(),
        message="<abbr> missing title attribute",
        recommendation=(
            "Add a title attribute to <abbr> elements to provide the expanded form of the abbreviation."
        ),
    ),
    Rule(
        id="R70",
        tag="input|a|button|select",
        level="A",
        criterion="3.2.1",
        pattern=tag_pattern("input", "a", "button", "select", suffix=r"[^>]*\sonfocus\s*=[^>]*>"),
        applies=_focus_changes_context,
        message="Element changes context on focus",
        recommendation=(
            "Avoid using onfocus events to trigger context changes like redirections. Require "
            "explicit user action instead."
        ),
    ),
    Rule(
        id="R71",
        tag="select|input|textarea",
        level="A",
        criterion="3.2.2",
        pattern=tag_pattern("select", "input", "textarea", suffix=r"[^>]*\sonchange\s*=[^>]*>"),
        applies=_input_changes_context,
        message="Element changes context automatically on input",
        recommendation=(
            "Require a confirmation action (e.g., clicking a button) before applying input-based "
            "context changes."
        ),
    ),
    Rule(
        id="R72",
        tag="nav|header|footer",
        level="AA",
        criterion="3.2.3",
        pattern=tag_pattern("nav", "header", "footer"),
        # needs more than one document to compare against
        applies=lambda *_: False,
        message="Navigation structure should be consistent",
        recommendation=(
            "Ensure that repeated navigational elements maintain order, labeling, and structure "
            "across all pages."
        ),
        implemented=False,
    ),
    Rule(
        id="R73",
        tag="input|button",
        level="AA",
        criterion="3.2.4",
        pattern=_SUBMIT_CONTROL,
        applies=_inconsistent_submit_label,
        message="Inconsistent labeling for same functionality",
        recommendation=(
            "Ensure consistent visible text and accessible name (aria-label) for elements with the "
            "same function across pages."
        ),
    ),
    Rule(
        id="R74",
        tag="input|select|textarea",
        level="A",
        criterion="3.3.1",
        pattern=tag_pattern("input", "select", "textarea"),
        applies=_required_without_error_support,
        message="Missing or unclear error handling for form field",
        recommendation=(
            "Include specific error messages and associate them with form fields using "
            "aria-describedby or inline hints."
        ),
    ),
    Rule(
        id="R75",
        tag="label",
        level="A",
        criterion="3.3.2",
        pattern=tag_pattern("label"),
        applies=_label_for_non_control,
        message="Label missing field association or clear instruction",
        recommendation=(
            "Use the 'for' attribute or aria-label/aria-labelledby to associate the label with a "
            "field, and include helpful instructions."
        ),
    ),
    Rule(
        id="R76",
        tag="form",
        level="A",
        criterion="3.3.2",
        pattern=element_pattern("form"),
        applies=_form_without_instructions,
        message="Form or field missing user instructions",
        recommendation=(
            "Provide clear guidance at the top of the form or next to relevant fields to help users "
            "understand what to do."
        ),
    ),
    Rule(
        id="R77",
        tag="input|textarea",
        level="A",
        criterion="3.3.2",
        pattern=tag_pattern("input", "textarea"),
        applies=_placeholder_as_label,
        message="Form control lacks descriptive label",
        recommendation=(
            "Use aria-describedby or an associated label to provide clear information about what is "
            "expected from the user."
        ),
    ),
    Rule(
        id="R78",
        tag="fieldset",
        level="A",
        criterion="3.3.2",
        pattern=element_pattern("fieldset"),
        applies=_legend_not_first,
        message="Missing <legend> for related form controls",
        recommendation=(
            "Use a <legend> as the first child of <fieldset> to describe the grouped form controls."
        ),
    ),
    Rule(
        id="R79",
        tag="form",
        level="AA",
        criterion="3.3.3",
        pattern=element_pattern("form"),
        applies=_errors_without_suggestions,
        message="Missing error suggestions or guidance",
        recommendation=(
            "Include contextual suggestions or hints near fields with errors to help users understand "
            "and fix issues."
        ),
    ),
)
