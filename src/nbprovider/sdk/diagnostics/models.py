"""Structured diagnostics reported by configuration resolution and client bootstrap.

Diagnostics accumulate: every check runs and each violation is appended to a
`Diagnostics` collection, so a user sees all problems in one pass. Errors block
startup, warnings are informational.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from enum import Enum
from typing import Any

from nbprovider.sdk.models import SdkBaseModel


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class DiagnosticKind(str, Enum):
    """Classification of a diagnostic, independent of its wording."""

    MISSING_REQUIRED_VALUE = "missing_required_value"
    UNKNOWN_AT_RESOLUTION_TIME = "unknown_at_resolution_time"
    INVALID_VALUE = "invalid_value"
    MALFORMED_URL = "malformed_url"
    TRANSPORT_CONSTRUCTION_FAILURE = "transport_construction_failure"
    NORMALIZATION_WARNING = "normalization_warning"
    INSECURE_TRANSPORT = "insecure_transport"


class Diagnostic(SdkBaseModel):
    """A single problem tied to a configuration attribute.

    Attributes:
        field: Attribute path the diagnostic refers to (e.g. "server_url")
        severity: Whether the diagnostic blocks startup
        kind: Machine readable classification
        summary: One-line description
        detail: Longer explanation including how to fix it
    """

    field: str
    severity: Severity
    kind: DiagnosticKind
    summary: str
    detail: str

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR


class Diagnostics:
    """Ordered, append-only collection of diagnostics."""

    def __init__(self, items: Iterable[Diagnostic] | None = None) -> None:
        self._items: list[Diagnostic] = list(items or [])

    def append(self, diagnostic: Diagnostic) -> None:
        self._items.append(diagnostic)

    def extend(self, diagnostics: Iterable[Diagnostic]) -> None:
        self._items.extend(diagnostics)

    def add_error(self, field: str, kind: DiagnosticKind, summary: str, detail: str) -> None:
        self.append(
            Diagnostic(
                field=field, severity=Severity.ERROR, kind=kind, summary=summary, detail=detail
            )
        )

    def add_warning(self, field: str, kind: DiagnosticKind, summary: str, detail: str) -> None:
        self.append(
            Diagnostic(
                field=field, severity=Severity.WARNING, kind=kind, summary=summary, detail=detail
            )
        )

    def has_error(self) -> bool:
        return any(d.is_error for d in self._items)

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self._items if d.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self._items if d.severity is Severity.WARNING]

    def fields(self, severity: Severity | None = None) -> set[str]:
        """Return the attribute paths that have diagnostics, optionally filtered by severity."""
        return {d.field for d in self._items if severity is None or d.severity is severity}

    def for_field(self, field: str) -> list[Diagnostic]:
        return [d for d in self._items if d.field == field]

    def to_list(self) -> list[dict[str, Any]]:
        return [d.model_dump(mode="json") for d in self._items]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return (
            f"Diagnostics(errors={len(self.errors)}, warnings={len(self.warnings)})"
        )
