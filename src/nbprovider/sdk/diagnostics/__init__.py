"""Accumulating diagnostics shared by the resolver, the bootstrapper and the provider."""

from .models import Diagnostic, DiagnosticKind, Diagnostics, Severity

__all__ = ["Diagnostic", "DiagnosticKind", "Diagnostics", "Severity"]
