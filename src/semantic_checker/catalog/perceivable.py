"""Perceivable: text alternatives, time-based media, adaptable and
distinguishable content (WCAG principle 1)."""

from __future__ import annotations

import re

from semantic_checker.catalog.markup import (
    attribute_value,
    contains_tag,
    element_body,
    element_pattern,
    has_attribute,
    inner_text,
    insert_attribute,
    style_declarations,
    tag_name,
    tag_pattern,
)
from semantic_checker.contrast import NORMAL_TEXT_MINIMUM, UI_COMPONENT_MINIMUM, meets_contrast
from semantic_checker.models import Rule

_DESCRIPTIONS_TRACK = re.compile(r"<track\b[^>]*kind\s*=\s*[\"']?descriptions", re.IGNORECASE)
_CAPTIONS_TRACK = re.compile(r"<track\b[^>]*kind\s*=\s*[\"']?(?:captions|subtitles)", re.IGNORECASE)
_TRACK_KINDS = {"subtitles", "captions", "descriptions", "chapters", "metadata"}
_AUDIO_SOURCE = re.compile(r"audio/|\.(?:mp3|wav|ogg|oga|m4a|flac)\b", re.IGNORECASE)
_VIDEO_SOURCE = re.compile(r"video/|\.(?:mp4|webm|ogv|mov|m4v)\b", re.IGNORECASE)
_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")
_TEXT_IMAGE_HINT = re.compile(r"text|banner|heading|headline|title|quote|slogan", re.IGNORECASE)
_SHAPE_OR_COLOR_WORD = re.compile(
    r"\b(?:red|blue|green|circle|square|round|arrow|triangle)\b", re.IGNORECASE
)
_PERSONAL_DATA_FIELD = re.compile(
    r"\b(?:name|fname|lname|given|family|email|e-mail|tel|phone|address|street|city|"
    r"postal|zip|country|bday|birthday|username|organization)\b",
    re.IGNORECASE,
)
_SPACING_LOCK = re.compile(
    r"(?:letter-spacing|word-spacing|line-height)\s*:[^;\"']*!important", re.IGNORECASE
)
_PSEUDO_LIST = re.compile(
    r"<(?:p|div)\b[^>]*>\s*(?:[•·▪◦*-]|\d+[.)])\s", re.IGNORECASE
)


def _text_alternative_present(tag: str) -> bool:
    return any(has_attribute(tag, name) for name in ("aria-label", "aria-labelledby", "title"))


def _missing_alt(tag: str, _document: str = "") -> bool:
    return not has_attribute(tag, "alt")


def _object_without_alternative(tag: str, _document: str) -> bool:
    return not _text_alternative_present(tag) and not inner_text(element_body(tag))


def _svg_unlabelled(tag: str, _document: str) -> bool:
    if _text_alternative_present(tag) or has_attribute(tag, "aria-hidden"):
        return False
    return not contains_tag(element_body(tag), "title")


def _canvas_without_fallback(tag: str, _document: str) -> bool:
    return not _text_alternative_present(tag) and not inner_text(element_body(tag))


def _no_transcript(_tag: str, document: str) -> bool:
    return re.search(r"transcript", document, re.IGNORECASE) is None


def _object_media(tag: str, kind: re.Pattern[str]) -> bool:
    source = " ".join(
        value for value in (attribute_value(tag, "type"), attribute_value(tag, "data")) if value
    )
    return bool(kind.search(source))


def _audio_object_without_transcript(tag: str, document: str) -> bool:
    return _object_media(tag, _AUDIO_SOURCE) and _no_transcript(tag, document)


def _video_object_without_description(tag: str, document: str) -> bool:
    if not _object_media(tag, _VIDEO_SOURCE):
        return False
    return _DESCRIPTIONS_TRACK.search(document) is None and not re.search(
        r"description", document, re.IGNORECASE
    )


def _video_without_text_description(tag: str, document: str) -> bool:
    if _DESCRIPTIONS_TRACK.search(tag):
        return False
    return re.search(r"transcript|description", document, re.IGNORECASE) is None


def _video_without_captions(tag: str, _document: str) -> bool:
    return _CAPTIONS_TRACK.search(tag) is None


def _video_without_audio_description(tag: str, _document: str) -> bool:
    return _DESCRIPTIONS_TRACK.search(tag) is None


def _track_kind_invalid(tag: str, _document: str) -> bool:
    kind = (attribute_value(tag, "kind") or "").strip().lower()
    if kind not in _TRACK_KINDS:
        return True
    return kind in {"subtitles", "captions"} and not has_attribute(tag, "srclang")


def _table_without_sections(_tag: str, document: str) -> bool:
    return not contains_tag(document, "thead") or not contains_tag(document, "tbody")


def _table_without_caption(_tag: str, document: str) -> bool:
    return not contains_tag(document, "caption")


def _header_cell_unassociated(tag: str, document: str) -> bool:
    if has_attribute(tag, "scope"):
        return False
    return not has_attribute(tag, "id") or re.search(r"\sheaders\s*=", document, re.IGNORECASE) is None


def _choices_not_grouped(tag: str, _document: str) -> bool:
    choices = re.findall(r"type\s*=\s*[\"']?(?:radio|checkbox)\b", tag, re.IGNORECASE)
    return len(choices) >= 2 and not contains_tag(tag, "fieldset")


def _fieldset_without_legend(tag: str, _document: str) -> bool:
    return not contains_tag(element_body(tag), "legend")


def _label_without_target(tag: str, document: str) -> bool:
    target = attribute_value(tag, "for")
    if not target:
        return True
    return re.search(rf"\sid\s*=\s*[\"']?{re.escape(target)}[\"'\s>]", document) is None


def _no_headings(_tag: str, document: str) -> bool:
    return re.search(r"<h[1-6]\b", document, re.IGNORECASE) is None


def _pseudo_list(_tag: str, _document: str) -> bool:
    return True


def _section_without_heading(tag: str, _document: str) -> bool:
    body = element_body(tag)
    return re.search(r"<h[1-6]\b", body, re.IGNORECASE) is None and not has_attribute(
        tag, "aria-label"
    )


def _list_without_items(tag: str, _document: str) -> bool:
    return not contains_tag(element_body(tag), "li")


def _orphan_list_item(_tag: str, document: str) -> bool:
    return not any(contains_tag(document, name) for name in ("ul", "ol", "menu"))


def _head_after_body(_tag: str, document: str) -> bool:
    head = re.search(r"<thead\b", document, re.IGNORECASE)
    body = re.search(r"<tbody\b", document, re.IGNORECASE)
    return head is not None and body is not None and head.start() > body.start()


def _header_cells_outside_thead(tag: str, _document: str) -> bool:
    return contains_tag(tag, "th") and not contains_tag(tag, "thead")


def _thead_without_tbody(tag: str, _document: str) -> bool:
    return contains_tag(tag, "thead") and not contains_tag(tag, "tbody")


def _shape_or_color_instruction(tag: str, _document: str) -> bool:
    if _text_alternative_present(tag):
        return False
    attributes = tag[len(tag_name(tag)) + 1 :]
    return _SHAPE_OR_COLOR_WORD.search(attributes) is not None


def _autocomplete_off(tag: str, _document: str) -> bool:
    return (attribute_value(tag, "autocomplete") or "").strip().lower() == "off"


def _personal_field_without_autocomplete(tag: str, _document: str) -> bool:
    input_type = (attribute_value(tag, "type") or "").lower()
    if input_type in {"hidden", "submit", "button", "reset", "image", "checkbox", "radio", "file"}:
        return False
    hints = " ".join(
        value
        for value in (
            attribute_value(tag, "name"),
            attribute_value(tag, "id"),
            input_type if input_type in {"email", "tel"} else None,
        )
        if value
    )
    if not _PERSONAL_DATA_FIELD.search(hints.replace("_", " ")):
        return False
    autocomplete = (attribute_value(tag, "autocomplete") or "").strip().lower()
    return autocomplete in {"", "off", "on"}


def _color_only_indicator(tag: str, _document: str) -> bool:
    declarations = style_declarations(tag)
    if "color" not in declarations:
        return False
    if _text_alternative_present(tag):
        return False
    cues = ("text-decoration", "border", "border-bottom", "font-weight", "font-style", "outline")
    return not any(cue in declarations for cue in cues)


def _autoplay_without_controls(tag: str, _document: str) -> bool:
    return has_attribute(tag, "autoplay") and not has_attribute(tag, "controls")


def _low_text_contrast(tag: str, _document: str) -> bool:
    declarations = style_declarations(tag)
    foreground = declarations.get("color", "")
    if not _HEX_COLOR.match(foreground):
        return False
    background = declarations.get("background-color", "#ffffff")
    return not meets_contrast(foreground, background, NORMAL_TEXT_MINIMUM)


def _text_over_image(tag: str, _document: str) -> bool:
    declarations = style_declarations(tag)
    backdrop = declarations.get("background-image", "") + declarations.get("background", "")
    if not re.search(r"url\(|gradient\(", backdrop, re.IGNORECASE):
        return False
    return "background-color" not in declarations and "text-shadow" not in declarations


def _fixed_font_size(tag: str, _document: str) -> bool:
    return re.search(r"^\d+(?:\.\d+)?px$", style_declarations(tag).get("font-size", "")) is not None


def _image_of_text(tag: str, _document: str) -> bool:
    alt = (attribute_value(tag, "alt") or "").strip()
    source = attribute_value(tag, "src") or ""
    if len(alt) < 3 or re.search(r"logo|logotipo", f"{alt} {source}", re.IGNORECASE):
        return False
    return _TEXT_IMAGE_HINT.search(source) is not None


def _svg_renders_text(tag: str, document: str) -> bool:
    if _text_alternative_present(tag) or has_attribute(tag, "aria-hidden"):
        return False
    if re.search(r"class\s*=\s*[\"'][^\"']*(?:visually-hidden|sr-only)", document, re.IGNORECASE):
        return False
    return contains_tag(element_body(tag), "text")


def _fixed_layout_width(tag: str, _document: str) -> bool:
    declarations = style_declarations(tag)
    width = re.match(r"^(\d+)px$", declarations.get("width", "").strip())
    if width is None or int(width.group(1)) <= 320:
        return False
    return declarations.get("max-width", "").strip() not in {"100%", "auto", "fit-content"}


def _low_ui_contrast(tag: str, _document: str) -> bool:
    declarations = style_declarations(tag)
    foreground = declarations.get("color", "")
    background = declarations.get("background-color", "")
    if not (_HEX_COLOR.match(foreground) and _HEX_COLOR.match(background)):
        return False
    return not meets_contrast(foreground, background, UI_COMPONENT_MINIMUM)


def _spacing_locked(tag: str, _document: str) -> bool:
    return _SPACING_LOCK.search(attribute_value(tag, "style") or "") is not None


def _hover_content_not_dismissible(tag: str, document: str) -> bool:
    if not (has_attribute(tag, "onmouseover") or has_attribute(tag, "onfocus")):
        return False
    if has_attribute(tag, "onmouseleave") or has_attribute(tag, "onmouseout") or has_attribute(tag, "onblur"):
        return False
    return "aria-describedby" not in document


def _without_accessible_name(tag: str, _document: str) -> bool:
    return not _text_alternative_present(tag)


def _empty_content(tag: str, _document: str) -> bool:
    return not inner_text(element_body(tag))


def _map_area_without_alt(tag: str, _document: str) -> bool:
    areas = re.findall(r"<area\b[^>]*>", element_body(tag), re.IGNORECASE)
    return any(_missing_alt(area) for area in areas)


def _field_without_any_label(tag: str, document: str) -> bool:
    return not _text_alternative_present(tag) and not contains_tag(document, "label")


def _quote_without_cite(tag: str, _document: str) -> bool:
    return not (attribute_value(tag, "cite") or "").strip()


def _media_source_without_track(tag: str, document: str) -> bool:
    # <picture> sources are images
    if has_attribute(tag, "srcset"):
        return False
    return not contains_tag(document, "track")


def _picture_without_alt(tag: str, _document: str) -> bool:
    images = re.findall(r"<img\b[^>]*>", element_body(tag), re.IGNORECASE)
    return not images or any(_missing_alt(image) for image in images)


RULES: tuple[Rule, ...] = (
    Rule(
        id="R1",
        tag="img",
        level="A",
        criterion="1.1.1",
        pattern=tag_pattern("img"),
        applies=_missing_alt,
        message="Image without alt attribute",
        recommendation=(
            'Add an alt attribute to describe the image content or use alt="" if decorative. '
            "Even inside <picture>, ensure <img> has alt."
        ),
        fix=insert_attribute("alt", ""),
    ),
    Rule(
        id="R2",
        tag='input[type="image"]',
        level="A",
        criterion="1.1.1",
        pattern=re.compile(r"<input\b[^>]*type\s*=\s*[\"']?image\b[^>]*>", re.IGNORECASE),
        applies=_missing_alt,
        message="Image input missing alt attribute",
        recommendation="Add an alt attribute that describes the function of the button.",
        fix=insert_attribute("alt", "Submit"),
    ),
    Rule(
        id="R3",
        tag="area",
        level="A",
        criterion="1.1.1",
        pattern=tag_pattern("area"),
        applies=_missing_alt,
        message="Area element missing alt attribute",
        recommendation="Provide a descriptive alt attribute for each <area> tag in image maps.",
        fix=insert_attribute("alt", "Link"),
    ),
    Rule(
        id="R4",
        tag="object",
        level="A",
        criterion="1.1.1",
        pattern=element_pattern("object", close_optional=True),
        applies=_object_without_alternative,
        message="Object without text alternative",
        recommendation="Include a text description inside or near the <object> tag or use aria-label.",
    ),
    Rule(
        id="R5",
        tag="svg",
        level="A",
        criterion="1.1.1",
        pattern=element_pattern("svg", close_optional=True),
        applies=_svg_unlabelled,
        message="SVG missing aria-label or aria-hidden",
        recommendation=(
            "Add aria-label or <title> for informative SVGs, or aria-hidden='true' for decorative ones."
        ),
        fix=insert_attribute("aria-hidden", "true"),
    ),
    Rule(
        id="R6",
        tag="applet",
        level="A",
        criterion="1.1.1",
        pattern=tag_pattern("applet"),
        applies=_missing_alt,
        message="Applet element requires alt text",
        recommendation="Add alt attribute that describes the content or purpose of the applet.",
    ),
    Rule(
        id="R9",
        tag="figure",
        level="A",
        criterion="1.1.1",
        pattern=element_pattern("figure"),
        applies=lambda tag, _doc: not contains_tag(tag, "figcaption"),
        message="Figure missing figcaption",
        recommendation="Include a <figcaption> to describe the figure content.",
    ),
    Rule(
        id="R11",
        tag="embed",
        level="A",
        criterion="1.1.1",
        pattern=tag_pattern("embed"),
        applies=_without_accessible_name,
        message="Embed missing fallback content",
        recommendation="Provide fallback content or use title/aria-label to describe the embedded content.",
    ),
    Rule(
        id="R12",
        tag="canvas",
        level="A",
        criterion="1.1.1",
        pattern=element_pattern("canvas", close_optional=True),
        applies=_canvas_without_fallback,
        message="Canvas missing fallback content",
        recommendation="Provide descriptive fallback content between <canvas> tags.",
    ),
    Rule(
        id="R13",
        tag="audio",
        level="A",
        criterion="1.2.1",
        pattern=tag_pattern("audio"),
        applies=_no_transcript,
        message="Audio element missing transcript",
        recommendation=(
            "Provide a transcript of the audio content, including dialogues and relevant sounds, "
            "in a <p> or <transcript> tag."
        ),
    ),
    Rule(
        id="R14",
        tag="object",
        level="A",
        criterion="1.2.1",
        pattern=tag_pattern("object"),
        applies=_audio_object_without_transcript,
        message="Object containing only audio missing transcript",
        recommendation=(
            "Include a transcript of the audio content outside the <object> tag to detail the audio content."
        ),
    ),
    Rule(
        id="R15",
        tag="video",
        level="A",
        criterion="1.2.3",
        pattern=element_pattern("video", close_optional=True),
        applies=_video_without_text_description,
        message="Video missing textual description",
        recommendation=(
            "Provide a textual description of the video content in a <p> tag or include a <track> "
            "element with kind='descriptions'."
        ),
    ),
    Rule(
        id="R16",
        tag="video",
        level="A",
        criterion="1.2.2",
        pattern=element_pattern("video", close_optional=True),
        applies=_video_without_captions,
        message="Video missing subtitles",
        recommendation=(
            "Add a <track> element with kind='subtitles' to provide synchronized subtitles for the video."
        ),
    ),
    Rule(
        id="R17",
        tag="track",
        level="A",
        criterion="1.2.2",
        pattern=tag_pattern("track"),
        applies=_track_kind_invalid,
        message="Track element missing a valid kind",
        recommendation=(
            "Ensure the <track> element includes kind='subtitles' and other necessary attributes "
            "like src, srclang, and label."
        ),
    ),
    Rule(
        id="R18",
        tag="video",
        level="AA",
        criterion="1.2.5",
        pattern=element_pattern("video", close_optional=True),
        applies=_video_without_audio_description,
        message="Video missing audio description",
        recommendation=(
            "Add a <track> element with kind='descriptions' to provide an audio description for "
            "visually impaired users."
        ),
    ),
    Rule(
        id="R19",
        tag="object",
        level="AA",
        criterion="1.2.5",
        pattern=tag_pattern("object"),
        applies=_video_object_without_description,
        message="Object missing audio description",
        recommendation=(
            "Ensure the embedded multimedia in the <object> tag includes synchronized audio "
            "descriptions or provide a textual description nearby."
        ),
    ),
    Rule(
        id="R20",
        tag="video",
        level="AAA",
        criterion="1.2.7",
        pattern=element_pattern("video", close_optional=True),
        applies=_video_without_audio_description,
        message="Video missing synchronized audio description",
        recommendation=(
            "Include a <track> element with kind='descriptions' to provide synchronized audio "
            "descriptions for the video."
        ),
    ),
    Rule(
        id="R21",
        tag="object",
        level="AAA",
        criterion="1.2.7",
        pattern=tag_pattern("object"),
        applies=_video_object_without_description,
        message="Object missing synchronized audio description",
        recommendation=(
            "Ensure the multimedia embedded in the <object> tag includes synchronized audio "
            "descriptions or provide a detailed textual description nearby."
        ),
    ),
    Rule(
        id="R22",
        tag="table",
        level="A",
        criterion="1.3.1",
        pattern=tag_pattern("table"),
        applies=_table_without_sections,
        message="Table missing semantic structure",
        recommendation=(
            "Use <thead>, <tbody>, and <tfoot> to group rows and provide a clear structure for the table."
        ),
    ),
    Rule(
        id="R23",
        tag="table",
        level="A",
        criterion="1.3.1",
        pattern=tag_pattern("table"),
        applies=_table_without_caption,
        message="Table missing caption",
        recommendation="Add a <caption> as the first child of the <table> to describe its purpose.",
    ),
    Rule(
        id="R24",
        tag="th",
        level="A",
        criterion="1.3.1",
        pattern=tag_pattern("th"),
        applies=_header_cell_unassociated,
        message="Table header missing association",
        recommendation=(
            "Use the id attribute in <th> and the headers attribute in <td> to associate data cells "
            "with their headers."
        ),
    ),
    Rule(
        id="R25",
        tag="form",
        level="A",
        criterion="1.3.1",
        pattern=element_pattern("form"),
        applies=_choices_not_grouped,
        message="Form controls not grouped",
        recommendation=(
            "Use <fieldset> to group related form controls and include a <legend> to describe the group."
        ),
    ),
    Rule(
        id="R26",
        tag="fieldset",
        level="A",
        criterion="1.3.1",
        pattern=element_pattern("fieldset", close_optional=True),
        applies=_fieldset_without_legend,
        message="Fieldset missing legend",
        recommendation="Add a <legend> inside the <fieldset> to describe the group of form controls.",
    ),
    Rule(
        id="R27",
        tag="label",
        level="A",
        criterion="1.3.1",
        pattern=re.compile(r"<label\b[^>]*>(?:(?!</label).)*</label\s*>|<label\b[^>]*>", re.IGNORECASE | re.DOTALL),
        applies=lambda tag, doc: not re.search(r"<(?:input|select|textarea)\b", tag, re.IGNORECASE)
        and _label_without_target(tag, doc),
        message="Form field missing label",
        recommendation=(
            "Ensure each form field has a <label> associated with it using the for attribute and a "
            "matching id on the input."
        ),
    ),
    Rule(
        id="R28",
        tag="body",
        level="A",
        criterion="1.3.1",
        pattern=tag_pattern("body"),
        applies=_no_headings,
        message="Content missing heading structure",
        recommendation="Use <h1> to <h6> to organize content hierarchically and improve navigation.",
    ),
    Rule(
        id="R29",
        tag="p|div",
        level="A",
        criterion="1.3.1",
        pattern=_PSEUDO_LIST,
        applies=_pseudo_list,
        message="List missing semantic structure",
        recommendation="Use <ul> or <ol> for lists and include <li> for each list item.",
    ),
    Rule(
        id="R30",
        tag="section",
        level="A",
        criterion="1.3.1",
        pattern=element_pattern("section"),
        applies=_section_without_heading,
        message="Section missing heading",
        recommendation=(
            "Include a heading (<h1> to <h6>) inside each <section> element to describe its content."
        ),
    ),
    Rule(
        id="R31",
        tag="article",
        level="A",
        criterion="1.3.1",
        pattern=element_pattern("article"),
        applies=_section_without_heading,
        message="Article missing heading",
        recommendation=(
            "Include a heading (<h1> to <h6>) inside each <article> to provide a descriptive title."
        ),
    ),
    Rule(
        id="R32",
        tag="ol",
        level="A",
        criterion="1.3.1",
        pattern=element_pattern("ol"),
        applies=_list_without_items,
        message="Ordered list missing structure",
        recommendation="Use <li> elements inside <ol> to define each item in the ordered list.",
    ),
    Rule(
        id="R33",
        tag="ul",
        level="A",
        criterion="1.3.1",
        pattern=element_pattern("ul"),
        applies=_list_without_items,
        message="Unordered list missing structure",
        recommendation="Use <li> elements inside <ul> to define each item in the unordered list.",
    ),
    Rule(
        id="R34",
        tag="li",
        level="A",
        criterion="1.3.1",
        pattern=tag_pattern("li"),
        applies=_orphan_list_item,
        message="List item outside of a list",
        recommendation="Ensure <li> elements are properly nested inside <ul>, <ol>, or <dl> elements.",
    ),
    Rule(
        id="R35",
        tag="table",
        level="A",
        criterion="1.3.2",
        pattern=tag_pattern("table"),
        applies=_head_after_body,
        message="Table with illogical row/column order",
        recommendation=(
            "Ensure the table follows a logical visual order using <thead>, <tbody>, and <tfoot>."
        ),
    ),
    Rule(
        id="R36",
        tag="thead",
        level="A",
        criterion="1.3.1",
        pattern=element_pattern("table"),
        applies=_header_cells_outside_thead,
        message="Table head is missing or misused",
        recommendation="Include a <thead> section at the top of your table to group header rows.",
    ),
    Rule(
        id="R37",
        tag="tbody",
        level="A",
        criterion="1.3.1",
        pattern=element_pattern("table"),
        applies=_thead_without_tbody,
        message="Table body missing or unordered",
        recommendation="Use <tbody> to group the main content rows and ensure logical row ordering.",
    ),
    Rule(
        id="R38",
        tag="p, span, strong, em",
        level="A",
        criterion="1.3.3",
        pattern=tag_pattern("p", "span", "strong", "em"),
        applies=_shape_or_color_instruction,
        message="Instruction depends only on color or shape",
        recommendation=(
            "Do not rely solely on color or shape for instructions. Add visible text or use "
            "aria-label/title to describe the purpose."
        ),
    ),
    Rule(
        id="R39",
        tag="input, select, textarea, form",
        level="AA",
        criterion="1.3.5",
        pattern=tag_pattern("input", "select", "textarea", "form"),
        applies=_autocomplete_off,
        message="Form element missing or misusing autocomplete attribute",
        recommendation=(
            "Use meaningful autocomplete values (e.g., 'name', 'email', 'tel') instead of omitting "
            "the attribute or setting it to 'off', to improve form usability and accessibility."
        ),
    ),
    Rule(
        id="R40",
        tag="input, select, textarea",
        level="AA",
        criterion="1.3.5",
        pattern=tag_pattern("input", "select", "textarea"),
        applies=_personal_field_without_autocomplete,
        message="Form field missing semantic autocomplete attribute",
        recommendation=(
            "Use autocomplete attributes like 'bday', 'name', 'address-line1', etc., to help "
            "assistive technologies and browsers identify the field's purpose semantically."
        ),
    ),
    Rule(
        id="R41",
        tag="inline-styled elements",
        level="A",
        criterion="1.4.1",
        pattern=re.compile(r"<\w+\b[^>]*style\s*=\s*[\"'][^\"'>]*\bcolor\s*:[^>]*>", re.IGNORECASE),
        applies=_color_only_indicator,
        message="Color used as the only visual indicator",
        recommendation=(
            "Avoid relying only on color to convey information. Use additional indicators such as "
            "text, underline, icons, or labels to ensure accessibility. See WCAG techniques G14 and G205."
        ),
    ),
    Rule(
        id="R42",
        tag="audio",
        level="A",
        criterion="1.4.2",
        pattern=tag_pattern("audio"),
        applies=_autoplay_without_controls,
        message="Autoplaying audio without controls",
        recommendation=(
            "Add 'controls' attribute to <audio> or provide visible custom controls for play/pause and volume."
        ),
        fix=insert_attribute("controls", None),
    ),
    Rule(
        id="R43",
        tag="text elements",
        level="AA",
        criterion="1.4.3",
        pattern=tag_pattern("a", "p", "span", "li", "label", "td", r"h[1-6]"),
        applies=_low_text_contrast,
        message="Low text contrast",
        recommendation=(
            "Ensure text has a contrast ratio of at least 4.5:1 against its background. Use tools like "
            "Contrast Checker or adjust foreground and background colors appropriately. See WCAG G18."
        ),
    ),
    Rule(
        id="R44",
        tag="text over image",
        level="AA",
        criterion="1.4.3",
        pattern=tag_pattern("a", "p", "span", "div", "section", r"h[1-6]"),
        applies=_text_over_image,
        message="Text over image or gradient lacks contrast support",
        recommendation=(
            "Use a solid background color or text shadow to ensure text remains legible over images "
            "or gradients. See WCAG G145."
        ),
    ),
    Rule(
        id="R45",
        tag="text containers",
        level="AA",
        criterion="1.4.4",
        pattern=tag_pattern("html", "body", "div", "span", "p", "a", r"h[1-6]"),
        applies=_fixed_font_size,
        message="Fixed text size using 'px' prevents proper text resizing",
        recommendation=(
            "Use relative units like em, rem, or % instead of px for font size to support text "
            "resizing. This ensures compliance with WCAG techniques G142 and C28."
        ),
    ),
    Rule(
        id="R46",
        tag="img",
        level="AA",
        criterion="1.4.5",
        pattern=tag_pattern("img"),
        applies=_image_of_text,
        message="Image of text used instead of HTML text",
        recommendation=(
            "Avoid using images to convey textual information. Use HTML text styled with CSS unless "
            "the image is a logo or required for specific presentation. Ensure alt text conveys the "
            "same message if an image must be used."
        ),
    ),
    Rule(
        id="R47",
        tag="svg",
        level="AAA",
        criterion="1.4.9",
        pattern=element_pattern("svg"),
        applies=_svg_renders_text,
        message="Text rendered with image elements instead of HTML",
        recommendation=(
            "Avoid using images, canvas, SVG, or object to render text unless necessary. Use real HTML "
            "text and style it with CSS. If unavoidable, provide accessible alternatives like "
            "aria-label or visually hidden content."
        ),
    ),
    Rule(
        id="R48",
        tag="body|div|main|section",
        level="AA",
        criterion="1.4.10",
        pattern=tag_pattern("body", "div", "main", "section"),
        applies=_fixed_layout_width,
        message="Layout does not adapt to viewport size",
        recommendation=(
            "Avoid fixed width using px or vw. Use relative units (%, em, rem) and max-width to ensure "
            "responsive layouts."
        ),
    ),
    Rule(
        id="R49",
        tag="button|input|select",
        level="AA",
        criterion="1.4.11",
        pattern=tag_pattern("button", "input", "select"),
        applies=_low_ui_contrast,
        message="Non-text UI element might have insufficient contrast",
        recommendation=(
            "Ensure UI elements have at least a 3:1 contrast ratio between foreground and background "
            "colors. Use visual indicators like borders or highlights for focus and active states."
        ),
    ),
    Rule(
        id="R50",
        tag="p|span|li|h[1-6]",
        level="AA",
        criterion="1.4.12",
        pattern=tag_pattern("p", "span", "li", r"h[1-6]"),
        applies=_spacing_locked,
        message="Text element may not support spacing adjustments",
        recommendation=(
            "Use CSS properties like letter-spacing, line-height, and word-spacing to ensure text "
            "remains readable when users adjust spacing."
        ),
    ),
    Rule(
        id="R51",
        tag="button|a|input|label",
        level="AA",
        criterion="1.4.13",
        pattern=tag_pattern("button", "a", "input", "label"),
        applies=_hover_content_not_dismissible,
        message="Content triggered by hover or focus may not be dismissible",
        recommendation=(
            "Ensure that content triggered on hover or focus can be dismissed without moving the "
            "pointer or losing focus. Use proper event handling or aria-describedby patterns."
        ),
    ),
    Rule(
        id="R83",
        tag="progress",
        level="A",
        criterion="1.1.1",
        pattern=tag_pattern("progress"),
        applies=_without_accessible_name,
        message="Progress element missing accessible name",
        recommendation="Add aria-label or aria-labelledby so the progress indicator is announced.",
    ),
    Rule(
        id="R84",
        tag="meter",
        level="A",
        criterion="1.1.1",
        pattern=tag_pattern("meter"),
        applies=_without_accessible_name,
        message="Meter element missing accessible name",
        recommendation="Add aria-label or aria-labelledby so the meter value has context.",
    ),
    Rule(
        id="R85",
        tag="caption",
        level="A",
        criterion="1.3.1",
        pattern=element_pattern("caption"),
        applies=_empty_content,
        message="Table caption is empty",
        recommendation="Write a caption that describes the purpose of the table.",
    ),
    Rule(
        id="R86",
        tag="legend",
        level="A",
        criterion="1.3.1",
        pattern=element_pattern("legend"),
        applies=_empty_content,
        message="Legend has no text",
        recommendation="Give the <legend> text that names the group of form controls.",
    ),
    Rule(
        id="R87",
        tag="figcaption",
        level="A",
        criterion="1.1.1",
        pattern=element_pattern("figcaption"),
        applies=_empty_content,
        message="Figcaption has no description",
        recommendation="Describe the figure content inside <figcaption>.",
    ),
    Rule(
        id="R88",
        tag="map",
        level="A",
        criterion="1.1.1",
        pattern=element_pattern("map"),
        applies=_map_area_without_alt,
        message="Image map has areas without alt text",
        recommendation="Give every <area> in the <map> an alt attribute describing its link target.",
    ),
    Rule(
        id="R89",
        tag="select",
        level="A",
        criterion="1.3.1",
        pattern=tag_pattern("select"),
        applies=_field_without_any_label,
        message="Select without label",
        recommendation="Associate a <label> with the <select> or give it an aria-label.",
    ),
    Rule(
        id="R90",
        tag="textarea",
        level="A",
        criterion="1.3.1",
        pattern=tag_pattern("textarea"),
        applies=_field_without_any_label,
        message="Textarea without label",
        recommendation="Associate a <label> with the <textarea> or give it an aria-label.",
    ),
    Rule(
        id="R91",
        tag="q",
        level="A",
        criterion="1.3.1",
        pattern=tag_pattern("q"),
        applies=_quote_without_cite,
        message="Quotation missing cite attribute",
        recommendation="Add a cite attribute pointing to the source of the quotation.",
    ),
    Rule(
        id="R92",
        tag="source",
        level="A",
        criterion="1.2.2",
        pattern=tag_pattern("source"),
        applies=_media_source_without_track,
        message="Media source without any caption track",
        recommendation="Add a <track kind=\"captions\"> to the media element that uses this source.",
    ),
    Rule(
        id="R93",
        tag="picture",
        level="A",
        criterion="1.1.1",
        pattern=element_pattern("picture"),
        applies=_picture_without_alt,
        message="Picture without an img that has alt text",
        recommendation="Give the <img> inside <picture> an alt attribute describing the image.",
    ),
)
