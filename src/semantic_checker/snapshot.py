from __future__ import annotations

import hashlib
from bisect import bisect_right
from dataclasses import dataclass, field
from pathlib import Path

from semantic_checker.errors import DocumentContextError
from semantic_checker.models import Position, Span

HTML_LANGUAGE_ID = "html"


def content_digest(text: str) -> str:
    return f"sha256:{hashlib.sha256(text.encode('utf-8')).hexdigest()}"


def _line_starts(text: str) -> tuple[int, ...]:
    starts = [0]
    index = text.find("\n")
    while index != -1:
        starts.append(index + 1)
        index = text.find("\n", index + 1)
    return tuple(starts)


@dataclass(frozen=True)
class DocumentSnapshot:
    """Immutable capture of one document's text for a single scan.

    Offsets are character offsets into ``text``. Lines are 1-based and
    columns 0-based, matching the persisted report.
    """

    text: str
    language_id: str = HTML_LANGUAGE_ID
    path: str | None = None
    line_starts: tuple[int, ...] = field(init=False, repr=False, compare=False)
    digest: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "line_starts", _line_starts(self.text))
        object.__setattr__(self, "digest", content_digest(self.text))

    @classmethod
    def from_path(
        cls,
        path: str | Path,
        *,
        html_suffixes: tuple[str, ...] = (".html", ".htm", ".xhtml"),
    ) -> DocumentSnapshot:
        document_path = Path(path)
        if not document_path.is_file():
            raise DocumentContextError(f"No document to check: {document_path}")

        language_id = (
            HTML_LANGUAGE_ID
            if document_path.suffix.lower() in {item.lower() for item in html_suffixes}
            else document_path.suffix.lower().lstrip(".") or "plaintext"
        )
        try:
            with document_path.open("r", encoding="utf-8", newline="") as handle:
                text = handle.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentContextError(f"Could not read document {document_path}: {exc}") from exc
        return cls(text=text, language_id=language_id, path=str(document_path))

    @property
    def is_html(self) -> bool:
        return self.language_id.lower() == HTML_LANGUAGE_ID

    def require_html(self) -> None:
        if not self.is_html:
            label = self.path or "<buffer>"
            raise DocumentContextError(f"This is not an HTML file: {label}")

    def offset_to_position(self, offset: int) -> Position:
        if offset < 0 or offset > len(self.text):
            raise IndexError(f"Offset {offset} outside document of length {len(self.text)}")
        line_index = bisect_right(self.line_starts, offset) - 1
        return Position(line=line_index + 1, character=offset - self.line_starts[line_index])

    def span(self, start: int, end: int) -> Span:
        return Span(
            start_offset=start,
            end_offset=end,
            start=self.offset_to_position(start),
            end=self.offset_to_position(end),
        )

    def slice(self, start: int, end: int) -> str:
        return self.text[start:end]
