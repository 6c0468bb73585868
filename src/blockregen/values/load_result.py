"""LoadResult: outcome of reading one optional config field.

A field is either absent, present and parsed, or present but invalid.
Callers pick which of the two failure states a default should cover::

    try_load(section, "regen-delay", parse_number_value) \\
        .if_not_full(Fixed(3)) \\
        .apply(setter)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, TypeVar

from blockregen.config.section import ConfigSection
from blockregen.errors import ParseError

__all__ = ["LoadResult", "LoadState", "try_load"]

T = TypeVar("T")


class LoadState(Enum):
    ABSENT = "absent"
    OK = "ok"
    INVALID = "invalid"


@dataclass(frozen=True)
class LoadResult(Generic[T]):
    state: LoadState
    value: T | None = None
    error: ParseError | None = None

    @classmethod
    def absent(cls) -> LoadResult[T]:
        return cls(LoadState.ABSENT)

    @classmethod
    def ok(cls, value: T) -> LoadResult[T]:
        return cls(LoadState.OK, value=value)

    @classmethod
    def invalid(cls, error: ParseError | str) -> LoadResult[T]:
        if isinstance(error, str):
            error = ParseError(error)
        return cls(LoadState.INVALID, error=error)

    @property
    def is_absent(self) -> bool:
        return self.state is LoadState.ABSENT

    @property
    def is_ok(self) -> bool:
        return self.state is LoadState.OK

    @property
    def is_invalid(self) -> bool:
        return self.state is LoadState.INVALID

    def if_empty(self, default: T) -> LoadResult[T]:
        """Substitute *default* for an absent value. Invalid stays invalid."""
        if self.is_absent:
            return LoadResult.ok(default)
        return self

    def if_not_full(self, default: T) -> LoadResult[T]:
        """Substitute *default* for an absent or an invalid value."""
        if self.is_ok:
            return self
        return LoadResult.ok(default)

    def map(self, func: Callable[[T], Any]) -> LoadResult[Any]:
        if not self.is_ok:
            return self  # type: ignore[return-value]
        return LoadResult.ok(func(self.value))  # type: ignore[arg-type]

    def or_else(self, default: T) -> T:
        return self.value if self.is_ok else default  # type: ignore[return-value]

    def apply(self, sink: Callable[[T], Any]) -> None:
        """Hand a resolved value to *sink*.

        Absent values are ignored. An invalid value that was not defaulted
        raises its :class:`ParseError`.
        """
        if self.is_ok:
            sink(self.value)  # type: ignore[arg-type]
        elif self.is_invalid:
            assert self.error is not None
            raise self.error


def try_load(
    section: ConfigSection, path: str, loader: Callable[[Any], LoadResult[T] | T]
) -> LoadResult[T]:
    """Run *loader* on the node at *path*.

    The loader may return a :class:`LoadResult` or a plain value; a
    :class:`ParseError` or :class:`ValueError` it raises becomes an
    invalid result carrying the field path.
    """
    if not section.is_set(path):
        return LoadResult.absent()
    node = section.get(path)
    try:
        result = loader(node)
    except ParseError as exc:
        return LoadResult.invalid(ParseError(f"Invalid value for '{path}': {exc}", path=path))
    except ValueError as exc:
        return LoadResult.invalid(ParseError(f"Invalid value for '{path}': {exc}", path=path))
    if isinstance(result, LoadResult):
        if result.is_invalid and result.error is not None and result.error.path is None:
            return LoadResult.invalid(
                ParseError(f"Invalid value for '{path}': {result.error}", path=path)
            )
        return result
    return LoadResult.ok(result)
