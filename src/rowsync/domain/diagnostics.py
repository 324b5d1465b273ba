"""Structured diagnostics emitted while reconciling responses.

Malformed directives are reported as errors and data-shape problems as warnings.
Neither interrupts reconciliation; both are routed through an injected sink.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Final, Protocol, runtime_checkable

DIAGNOSTIC_TAG: Final[str] = "[rowsync]"


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    severity: Severity
    message: str
    context: Mapping[str, object] = field(default_factory=dict[str, object])

    def render(self) -> str:
        if not self.context:
            return f"{DIAGNOSTIC_TAG} {self.message}"
        details = ", ".join(f"{key}={value!r}" for key, value in self.context.items())
        return f"{DIAGNOSTIC_TAG} {self.message} ({details})"


@runtime_checkable
class DiagnosticSink(Protocol):
    """Receiver for reconciliation diagnostics."""

    def emit(self, diagnostic: Diagnostic) -> None: ...


class LoggingDiagnosticSink:
    """Forward diagnostics to the standard logging system."""

    _LEVELS: Final[Mapping[Severity, int]] = {
        Severity.ERROR: logging.ERROR,
        Severity.WARNING: logging.WARNING,
    }

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger("rowsync.diagnostics")

    def emit(self, diagnostic: Diagnostic) -> None:
        self.logger.log(self._LEVELS[diagnostic.severity], diagnostic.render())


@dataclass(slots=True)
class CollectingDiagnosticSink:
    """Keep diagnostics in memory, optionally forwarding them to another sink."""

    diagnostics: list[Diagnostic] = field(default_factory=list["Diagnostic"])
    forward_to: DiagnosticSink | None = None

    def emit(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
        if self.forward_to is not None:
            self.forward_to.emit(diagnostic)

    @property
    def errors(self) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if d.severity is Severity.ERROR)

    @property
    def warnings(self) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if d.severity is Severity.WARNING)

    def clear(self) -> None:
        self.diagnostics.clear()
