from __future__ import annotations

import logging
import os
import shutil
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from semantic_checker.catalog import rule_index
from semantic_checker.errors import AutofixError, EditConflictError, StaleSnapshotError
from semantic_checker.models import Finding, Rule
from semantic_checker.snapshot import DocumentSnapshot, content_digest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextEdit:
    start: int
    end: int
    new_text: str
    rule_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class EditBatch:
    """Replacements against one snapshot, sorted by start offset."""

    digest: str
    edits: tuple[TextEdit, ...]

    def __len__(self) -> int:
        return len(self.edits)

    @property
    def rule_ids(self) -> tuple[str, ...]:
        seen: dict[str, None] = {}
        for edit in self.edits:
            for rule_id in edit.rule_ids:
                seen.setdefault(rule_id, None)
        return tuple(seen)

    def apply(self, text: str) -> str:
        if content_digest(text) != self.digest:
            raise StaleSnapshotError("Document changed since the edits were computed")
        result = text
        for edit in reversed(self.edits):
            result = f"{result[: edit.start]}{edit.new_text}{result[edit.end :]}"
        return result


class EditBuilder:
    """Collects replacements in the coordinates of a single pristine snapshot."""

    def __init__(self, snapshot: DocumentSnapshot) -> None:
        self._snapshot = snapshot
        self._edits: dict[tuple[int, int], TextEdit] = {}

    def current_text(self, start: int, end: int) -> str:
        pending = self._edits.get((start, end))
        if pending is not None:
            return pending.new_text
        return self._snapshot.slice(start, end)

    def replace(self, start: int, end: int, new_text: str, rule_id: str = "") -> None:
        if not 0 <= start <= end <= len(self._snapshot.text):
            raise AutofixError(f"Edit range {start}:{end} is outside the document")

        key = (start, end)
        if key not in self._edits:
            for other_start, other_end in self._edits:
                if start < other_end and other_start < end:
                    raise EditConflictError(
                        f"Edit {start}:{end} overlaps pending edit {other_start}:{other_end}"
                    )
            previous_ids: tuple[str, ...] = ()
        else:
            previous_ids = self._edits[key].rule_ids

        rule_ids = previous_ids + ((rule_id,) if rule_id and rule_id not in previous_ids else ())
        self._edits[key] = TextEdit(start=start, end=end, new_text=new_text, rule_ids=rule_ids)

    def build(self) -> EditBatch:
        edits = tuple(self._edits[key] for key in sorted(self._edits))
        return EditBatch(digest=self._snapshot.digest, edits=edits)


def apply_fixes(snapshot: DocumentSnapshot, findings: Iterable[Finding], catalog: Iterable[Rule]) -> EditBatch:
    rules = rule_index(catalog)
    builder = EditBuilder(snapshot)
    for finding in findings:
        rule = rules.get(finding.rule_id)
        if rule is None or rule.fix is None:
            continue

        start, end = finding.span.start_offset, finding.span.end_offset
        original = builder.current_text(start, end)
        replacement = rule.fix(original)
        if not isinstance(replacement, str):
            raise AutofixError(
                f"Fix for {rule.id} returned {type(replacement).__name__}, expected str"
            )
        if replacement == original:
            continue
        builder.replace(start, end, replacement, rule_id=rule.id)

    batch = builder.build()
    logger.debug("Built %d edit(s) for %s", len(batch), snapshot.path or "<buffer>")
    return batch


class DocumentHost(ABC):
    @abstractmethod
    def commit(self, batch: EditBatch) -> bool:
        raise NotImplementedError


class FileDocumentHost(DocumentHost):
    """Applies a batch to a file on disk, all at once or not at all."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def commit(self, batch: EditBatch) -> bool:
        try:
            with self.path.open("r", encoding="utf-8", newline="") as handle:
                current = handle.read()
            updated = batch.apply(current)
        except (OSError, UnicodeDecodeError, AutofixError) as exc:
            logger.warning("Could not apply fixes to %s: %s", self.path, exc)
            return False

        if updated == current:
            return True

        descriptor, temp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
        )
        try:
            with os.fdopen(descriptor, "w", encoding="utf-8", newline="") as stream:
                stream.write(updated)
            shutil.copymode(self.path, temp_name)
            os.replace(temp_name, self.path)
        except OSError as exc:
            logger.warning("Could not write fixes to %s: %s", self.path, exc)
            Path(temp_name).unlink(missing_ok=True)
            return False
        return True
