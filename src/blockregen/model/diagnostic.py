"""Diagnostic model: structured messages produced while loading presets."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum


class Severity(Enum):
    """Severity level for a diagnostic message."""

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


@dataclass(frozen=True)
class LoadDiagnostic:
    """A single finding about one preset.

    Attributes:
        preset: Name of the preset being loaded.
        severity: ERROR when the preset (or its event) was dropped,
            WARNING when a field fell back to its default or was skipped.
        message: Human-readable description of the problem.
        path: Config path of the offending field, if applicable.
    """

    preset: str
    severity: Severity
    message: str
    path: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    def __str__(self) -> str:
        location = f" [preset={self.preset}"
        if self.path:
            location += f", path={self.path}"
        location += "]"
        return f"{self.severity.value}{location}: {self.message}"


class DiagnosticLog:
    """Collects load diagnostics and mirrors each one to a logger."""

    _LEVELS = {
        Severity.ERROR: logging.ERROR,
        Severity.WARNING: logging.WARNING,
        Severity.INFO: logging.INFO,
    }

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._log = logger or logging.getLogger("blockregen")
        self._items: list[LoadDiagnostic] = []

    def add(self, diagnostic: LoadDiagnostic, exc_info: BaseException | None = None) -> None:
        self._items.append(diagnostic)
        self._log.log(self._LEVELS[diagnostic.severity], "%s", diagnostic, exc_info=exc_info)

    def error(
        self, preset: str, message: str, path: str | None = None, exc: BaseException | None = None
    ) -> None:
        self.add(LoadDiagnostic(preset, Severity.ERROR, message, path), exc_info=exc)

    def warning(self, preset: str, message: str, path: str | None = None) -> None:
        self.add(LoadDiagnostic(preset, Severity.WARNING, message, path))

    def info(self, preset: str, message: str, path: str | None = None) -> None:
        self.add(LoadDiagnostic(preset, Severity.INFO, message, path))

    @property
    def items(self) -> list[LoadDiagnostic]:
        return list(self._items)

    @property
    def errors(self) -> list[LoadDiagnostic]:
        return [d for d in self._items if d.is_error]

    @property
    def warnings(self) -> list[LoadDiagnostic]:
        return [d for d in self._items if d.is_warning]

    def for_preset(self, preset: str) -> list[LoadDiagnostic]:
        return [d for d in self._items if d.preset == preset]

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)
