from __future__ import annotations


class SemanticCheckerError(Exception):
    pass


class DocumentContextError(SemanticCheckerError):
    """The active document is missing or is not HTML."""


class CatalogError(SemanticCheckerError, ValueError):
    pass


class ConfigError(SemanticCheckerError, ValueError):
    pass


class ReportWriteError(SemanticCheckerError):
    pass


class AutofixError(SemanticCheckerError):
    pass


class EditConflictError(AutofixError):
    pass


class StaleSnapshotError(AutofixError):
    """An edit batch was applied to text other than the snapshot it was built from."""
