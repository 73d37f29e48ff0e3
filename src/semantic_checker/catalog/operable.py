"""Operable: keyboard access, navigation and input modalities (WCAG principle 2)."""

from __future__ import annotations

import re

from semantic_checker.catalog.markup import (
    attribute_value,
    element_body,
    element_pattern,
    has_attribute,
    inner_text,
    insert_attribute,
    tag_name,
    tag_pattern,
)
from semantic_checker.models import Rule

_VAGUE_LINK_TEXT = {"click here", "here", "read more", "more", "details", "link", "this"}
_UNTITLED = {"untitled", "untitled document", "document", "page", "home page", "new page"}
_ICON_CHILD = re.compile(r"<(?:i|span|svg)\b", re.IGNORECASE)
_NAMED_IMAGE = re.compile(r"<img\b[^>]*\salt\s*=\s*(?:\"[^\"\s][^\"]*\"|'[^'\s][^']*')", re.IGNORECASE)
_SKIP_LINK = re.compile(r"<a\b[^>]*href\s*=\s*[\"']#(?:main|content|skip)[^\"']*[\"']", re.IGNORECASE)
_MAIN_LANDMARK = re.compile(r"<main\b|role\s*=\s*[\"']?main\b", re.IGNORECASE)
_OUTLINE_REMOVED = re.compile(r"outline\s*:\s*(?:none|0(?:px)?)\s*(?:;|$|!)", re.IGNORECASE)
_ALTERNATE_NAVIGATION = re.compile(r"sitemap|type\s*=\s*[\"']?search|role\s*=\s*[\"']?search", re.IGNORECASE)
_HEADING_OPEN = re.compile(r"<h([1-6])\b", re.IGNORECASE)


def _labelled(tag: str) -> bool:
    return any(has_attribute(tag, name) for name in ("aria-label", "aria-labelledby", "title"))


def _icon_only_link(tag: str, _document: str) -> bool:
    body = element_body(tag)
    if _labelled(tag) or inner_text(body) or _NAMED_IMAGE.search(body):
        return False
    return _ICON_CHILD.search(body) is not None


def _empty_link(tag: str, _document: str) -> bool:
    body = element_body(tag)
    if _labelled(tag) or inner_text(body) or _NAMED_IMAGE.search(body):
        return False
    return _ICON_CHILD.search(body) is None


def _iframe_without_title(tag: str, _document: str) -> bool:
    return not (attribute_value(tag, "title") or "").strip()


def _anchor_control_without_href(tag: str, _document: str) -> bool:
    if has_attribute(tag, "href") or has_attribute(tag, "tabindex"):
        return False
    return has_attribute(tag, "onclick") or (attribute_value(tag, "role") or "").lower() == "button"


def _click_without_keyboard(tag: str, _document: str) -> bool:
    if has_attribute(tag, "onkeydown") or has_attribute(tag, "onkeyup") or has_attribute(tag, "onkeypress"):
        return False
    return not (has_attribute(tag, "role") and has_attribute(tag, "tabindex"))


def _focus_trap(tag: str, document: str) -> bool:
    if (attribute_value(tag, "tabindex") or "").strip() != "-1":
        return False
    return re.search(r"onkeydown|onkeyup|escape", document, re.IGNORECASE) is None


def _autoplay_media(tag: str, _document: str) -> bool:
    if tag_name(tag) == "marquee":
        return True
    return has_attribute(tag, "autoplay") and not has_attribute(tag, "controls")


_insert_controls = insert_attribute("controls", None)


def _add_media_controls(tag: str) -> str:
    # marquee has no controls attribute to offer.
    if tag_name(tag) == "marquee":
        return tag
    return _insert_controls(tag)


def _no_bypass_block(_tag: str, document: str) -> bool:
    return _SKIP_LINK.search(document) is None and _MAIN_LANDMARK.search(document) is None


def _poor_title(tag: str, _document: str) -> bool:
    text = inner_text(element_body(tag)).lower()
    return not text or text in _UNTITLED


def _positive_tabindex(tag: str, _document: str) -> bool:
    value = (attribute_value(tag, "tabindex") or "").strip()
    return value.isdigit() and int(value) > 0


def _vague_link(tag: str, _document: str) -> bool:
    if _labelled(tag):
        return False
    return inner_text(element_body(tag)).lower().rstrip(".") in _VAGUE_LINK_TEXT


def _single_navigation_method(_tag: str, document: str) -> bool:
    return _ALTERNATE_NAVIGATION.search(document) is None


def _empty_label_or_heading(tag: str, _document: str) -> bool:
    body = element_body(tag)
    if _labelled(tag) or inner_text(body) or _NAMED_IMAGE.search(body):
        return False
    # a label wrapping a control names it through the control's own attributes
    return not (tag_name(tag) == "label" and re.search(r"<(?:input|select|textarea)\b", body, re.IGNORECASE))


def _focus_outline_removed(tag: str, _document: str) -> bool:
    style = attribute_value(tag, "style") or ""
    return _OUTLINE_REMOVED.search(style) is not None


def _skipped_heading_level(tag: str, document: str) -> bool:
    level = int(tag_name(tag)[1])
    if level == 1:
        return False
    present = {int(match.group(1)) for match in _HEADING_OPEN.finditer(document)}
    return level - 1 not in present


def _label_not_in_name(tag: str, _document: str) -> bool:
    accessible_name = (attribute_value(tag, "aria-label") or "").strip().lower()
    visible = inner_text(element_body(tag)).lower()
    if not accessible_name or not visible:
        return False
    return visible not in accessible_name


RULES: tuple[Rule, ...] = (
    Rule(
        id="R8",
        tag="a",
        level="A",
        criterion="2.4.4",
        pattern=element_pattern("a"),
        applies=_icon_only_link,
        message="Anchor with icon only and no accessible label",
        recommendation="Use aria-label to describe the purpose of the link.",
    ),
    Rule(
        id="R10",
        tag="iframe",
        level="A",
        criterion="2.4.1",
        pattern=tag_pattern("iframe"),
        applies=_iframe_without_title,
        message="Iframe missing title attribute",
        recommendation="Add a title attribute that describes the iframe's purpose.",
        fix=insert_attribute("title", "Embedded content"),
    ),
    Rule(
        id="R52",
        tag="a",
        level="A",
        criterion="2.1.1",
        pattern=tag_pattern("a"),
        applies=_anchor_control_without_href,
        message="Element may not be fully accessible via keyboard",
        recommendation=(
            "Use native HTML elements and attributes like tabindex, onkeydown, and ARIA roles to "
            "ensure keyboard accessibility."
        ),
    ),
    Rule(
        id="R53",
        tag="div|span|li|td|p|section",
        level="A",
        criterion="2.1.1",
        pattern=tag_pattern("div", "span", "li", "td", "p", "section", suffix=r"[^>]*\sonclick\s*=[^>]*>"),
        applies=_click_without_keyboard,
        message="Interactive element lacks keyboard event support or semantic structure",
        recommendation=(
            "Add keyboard handlers (onkeydown, onkeypress) and consider using semantic HTML elements "
            "like <button> or <a> instead of generic <div> or <span>."
        ),
    ),
    Rule(
        id="R54",
        tag="a|button|input",
        level="A",
        criterion="2.1.2",
        pattern=tag_pattern("a", "button", "input"),
        applies=_focus_trap,
        message="Component may trap keyboard focus",
        recommendation=(
            "Ensure users can exit focusable components using keyboard (Tab or Esc). Don't trap "
            "focus unless you provide a clear exit."
        ),
    ),
    Rule(
        id="R55",
        tag="a|button",
        level="A",
        criterion="2.1.4",
        pattern=tag_pattern("a", "button", "input", suffix=r"[^>]*\saccesskey\s*=[^>]*>"),
        applies=lambda tag, _doc: bool((attribute_value(tag, "accesskey") or "").strip()),
        message="Accesskey defined without flexibility",
        recommendation=(
            "Allow users to customize or disable accesskey combinations. Document the used keys to "
            "avoid conflicts."
        ),
    ),
    Rule(
        id="R56",
        tag="video|audio|marquee",
        level="A",
        criterion="2.2.2",
        pattern=tag_pattern("video", "audio", "marquee"),
        applies=_autoplay_media,
        message="Media content autoplaying without user controls",
        recommendation=(
            "Avoid autoplay or include visible controls to let users pause, stop or control playback."
        ),
        fix=_add_media_controls,
    ),
    Rule(
        id="R57",
        tag="body",
        level="A",
        criterion="2.4.1",
        pattern=tag_pattern("body"),
        applies=_no_bypass_block,
        message="Missing skip link or landmark for main content",
        recommendation=(
            "Include a 'Skip to main content' link (<a href='#main'>) and ensure a corresponding "
            "<main> or [role='main'] exists."
        ),
    ),
    Rule(
        id="R58",
        tag="title",
        level="A",
        criterion="2.4.2",
        pattern=element_pattern("title"),
        applies=_poor_title,
        message="Missing or non-descriptive page title",
        recommendation="Ensure the <title> inside <head> is descriptive and meaningful for the page content.",
    ),
    Rule(
        id="R59",
        tag="any",
        level="A",
        criterion="2.4.3",
        pattern=re.compile(r"<[a-zA-Z][\w:-]*\b[^>]*\stabindex\s*=[^>]*>", re.IGNORECASE),
        applies=_positive_tabindex,
        message="Potential focus order issue due to tabindex",
        recommendation=(
            "Use tabindex carefully. Positive values override the natural tab sequence; prefer 0 "
            "or document order."
        ),
    ),
    Rule(
        id="R60",
        tag="a",
        level="A",
        criterion="2.4.4",
        pattern=element_pattern("a"),
        applies=_vague_link,
        message="Link text is vague or meaningless",
        recommendation=(
            "Write meaningful link text that explains the action or destination, e.g., 'View pricing details'."
        ),
    ),
    Rule(
        id="R61",
        tag="nav",
        level="AA",
        criterion="2.4.5",
        pattern=tag_pattern("nav"),
        applies=_single_navigation_method,
        message="Only one navigation method provided",
        recommendation=(
            "Provide multiple navigation options (e.g., a nav bar, search function, or sitemap) to "
            "enhance accessibility."
        ),
    ),
    Rule(
        id="R62",
        tag="label|h1|h2|h3|h4|h5|h6",
        level="AA",
        criterion="2.4.6",
        pattern=re.compile(r"<(label|h[1-6])\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL),
        applies=_empty_label_or_heading,
        message="Form controls or headings not labeled semantically",
        recommendation=(
            "Use <label> with for or aria-label for form fields, and structure content using "
            "meaningful <h1>-<h6> headings."
        ),
    ),
    Rule(
        id="R63",
        tag="button|a|input|select|textarea",
        level="AA",
        criterion="2.4.7",
        pattern=tag_pattern("button", "a", "input", "select", "textarea"),
        applies=_focus_outline_removed,
        message="Interactive element lacks visible focus indicator",
        recommendation=(
            "Ensure interactive elements are styled with visible focus indicators (e.g., :focus with "
            "outline or border)."
        ),
    ),
    Rule(
        id="R64",
        tag="a",
        level="A",
        criterion="2.4.4",
        pattern=element_pattern("a"),
        applies=_empty_link,
        message="Link is empty, icon-only, or lacks descriptive text",
        recommendation="Ensure links have meaningful text or use aria-label/title attributes if icon-only.",
    ),
    Rule(
        id="R65",
        tag="h1|h2|h3|h4|h5|h6",
        level="AAA",
        criterion="2.4.10",
        pattern=tag_pattern(r"h[1-6]"),
        applies=_skipped_heading_level,
        message="Missing semantic heading structure",
        recommendation=(
            "Use semantic HTML headings (<h1>-<h6>) in order, without skipping levels, to convey the "
            "structure of the page."
        ),
    ),
    Rule(
        id="R66",
        tag="button|a|label",
        level="A",
        criterion="2.5.3",
        pattern=re.compile(r"<(button|a|label)\b[^>]*\saria-label\s*=[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL),
        applies=_label_not_in_name,
        message="Label text does not match accessible name",
        recommendation=(
            "Ensure the visible label matches the accessible name (e.g., aria-label or aria-labelledby)."
        ),
    ),
)
