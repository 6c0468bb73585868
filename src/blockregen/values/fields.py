"""Per-preset field reading with the fallback policy applied in one place."""

from __future__ import annotations

from blockregen.config.section import ConfigSection
from blockregen.model.diagnostic import DiagnosticLog
from blockregen.values.number import NumberValue
from blockregen.values.parser import load_number


def join_path(*parts: str) -> str:
    return ".".join(p for p in parts if p)


class FieldReader:
    """Reads number fields for one preset.

    Lenient mode logs a malformed value and falls back to the default
    (``if_not_full``). Strict mode only defaults a missing value
    (``if_empty``), so a malformed one raises its ``ParseError``.
    """

    def __init__(self, preset: str, diagnostics: DiagnosticLog, strict: bool = False) -> None:
        self.preset = preset
        self.diagnostics = diagnostics
        self.strict = strict

    def number(
        self, section: ConfigSection, key: str, default: NumberValue, base: str = ""
    ) -> NumberValue:
        result = load_number(section, key)
        if self.strict:
            result = result.if_empty(default)
        else:
            if result.is_invalid:
                self.diagnostics.warning(
                    self.preset,
                    f"{result.error}; using default {default}",
                    path=join_path(base, key),
                )
            result = result.if_not_full(default)

        values: list[NumberValue] = []
        result.apply(values.append)
        return values[0]

    def warning(self, message: str, path: str | None = None) -> None:
        self.diagnostics.warning(self.preset, message, path=path)
