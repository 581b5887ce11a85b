"""Tests for the diagnostics collection."""

import pytest
from pydantic import ValidationError

from nbprovider.sdk.diagnostics import Diagnostic, DiagnosticKind, Diagnostics, Severity


def make_diagnostics() -> Diagnostics:
    diagnostics = Diagnostics()
    diagnostics.add_warning(
        "strip_trailing_slashes_from_url",
        DiagnosticKind.NORMALIZATION_WARNING,
        "Stripped trailing slashes",
        "details",
    )
    diagnostics.add_error(
        "api_token", DiagnosticKind.MISSING_REQUIRED_VALUE, "Missing NetBox API Token", "details"
    )
    return diagnostics


def test_empty_collection() -> None:
    diagnostics = Diagnostics()

    assert not diagnostics
    assert len(diagnostics) == 0
    assert not diagnostics.has_error()


def test_warnings_alone_are_not_errors() -> None:
    diagnostics = Diagnostics()
    diagnostics.add_warning("x", DiagnosticKind.NORMALIZATION_WARNING, "summary", "detail")

    assert diagnostics
    assert not diagnostics.has_error()
    assert diagnostics.errors == []


def test_errors_and_warnings_are_partitioned_in_order() -> None:
    diagnostics = make_diagnostics()

    assert diagnostics.has_error()
    assert [d.field for d in diagnostics] == ["strip_trailing_slashes_from_url", "api_token"]
    assert [d.field for d in diagnostics.errors] == ["api_token"]
    assert [d.field for d in diagnostics.warnings] == ["strip_trailing_slashes_from_url"]
    assert diagnostics.fields(Severity.ERROR) == {"api_token"}
    assert diagnostics.fields() == {"api_token", "strip_trailing_slashes_from_url"}


def test_extend_keeps_existing_items() -> None:
    combined = Diagnostics()
    combined.add_error("server_url", DiagnosticKind.MALFORMED_URL, "Invalid", "detail")

    combined.extend(make_diagnostics())

    assert len(combined) == 3
    assert combined.fields(Severity.ERROR) == {"server_url", "api_token"}


def test_to_list_is_json_ready() -> None:
    [warning, error] = make_diagnostics().to_list()

    assert warning["severity"] == "warning"
    assert error == {
        "field": "api_token",
        "severity": "error",
        "kind": "missing_required_value",
        "summary": "Missing NetBox API Token",
        "detail": "details",
    }


def test_diagnostic_is_immutable() -> None:
    diagnostic = Diagnostic(
        field="server_url",
        severity=Severity.ERROR,
        kind=DiagnosticKind.MALFORMED_URL,
        summary="Invalid",
        detail="detail",
    )

    assert diagnostic.is_error
    with pytest.raises(ValidationError):
        diagnostic.summary = "changed"  # type: ignore[misc]
