"""Comparator classes used for method-name and argument matching."""

from __future__ import annotations

import re
import typing as t


class Comparator:
    """Callable returning ``True`` when a value matches.

    Subclasses are recognised by the matchers as constraints; any other value
    handed to :meth:`ExpectationBuilder.with_parameters` is compared with
    :class:`IsEqual`.
    """

    def __call__(self, value: t.Any) -> bool:  # noqa: ANN401 - any argument
        """Return ``True`` if *value* satisfies the comparison."""
        raise NotImplementedError


class Anything(Comparator):
    """Match any value."""

    def __call__(self, value: t.Any) -> bool:  # noqa: ANN401
        """Return ``True`` for any input."""
        return True

    def __repr__(self) -> str:
        """Return a debug representation."""
        return "Anything()"


class IsEqual(Comparator):
    """Match values equal to ``expected``."""

    def __init__(self, expected: object) -> None:
        self.expected = expected

    def __call__(self, value: t.Any) -> bool:  # noqa: ANN401
        """Return ``True`` when *value* equals ``expected``."""
        return bool(value == self.expected)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"IsEqual({self.expected!r})"


class Regex(Comparator):
    """Match if *value* matches ``pattern``."""

    def __init__(self, pattern: str, flags: int = 0) -> None:
        self._pattern = re.compile(pattern, flags)

    def __call__(self, value: t.Any) -> bool:  # noqa: ANN401
        """Return ``True`` if *value* is a string the regex matches."""
        if not isinstance(value, str):
            return False
        return bool(self._pattern.search(value))

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"Regex({self._pattern.pattern!r})"


class Predicate(Comparator):
    """Use a custom ``func`` to determine a match."""

    def __init__(self, func: t.Callable[[t.Any], object]) -> None:
        self.func = func

    def __call__(self, value: t.Any) -> bool:  # noqa: ANN401
        """Return ``True`` if ``func(value)`` is truthy."""
        return bool(self.func(value))

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"Predicate({self.func!r})"


def as_comparator(value: object) -> Comparator:
    """Return *value* unchanged if it is a comparator, else wrap it in IsEqual."""
    if isinstance(value, Comparator):
        return value
    return IsEqual(value)


__all__ = [
    "Anything",
    "Comparator",
    "IsEqual",
    "Predicate",
    "Regex",
    "as_comparator",
]
