"""Method-name and parameter matchers installed by the expectation builder."""

from __future__ import annotations

import typing as t

from .comparators import Comparator, as_comparator

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .invocation import Invocation


class MethodName:
    """Match the name of the invoked method.

    Literal names compare case-insensitively; comparators receive the
    invocation's method name unchanged.
    """

    def __init__(self, constraint: str | Comparator) -> None:
        self.constraint = constraint

    def matches(self, invocation: Invocation) -> bool:
        """Return ``True`` if *invocation* targets the configured method."""
        if isinstance(self.constraint, str):
            return invocation.method_name.lower() == self.constraint.lower()
        return bool(self.constraint(invocation.method_name))

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"MethodName({self.constraint!r})"


class ParametersMatcher:
    """Base class for the parameter matchers."""

    def matches(self, invocation: Invocation, *, call_index: int = 0) -> bool:
        """Return ``True`` if the arguments of *invocation* are acceptable."""
        raise NotImplementedError


class AnyParameters(ParametersMatcher):
    """Accept any arguments."""

    def matches(self, invocation: Invocation, *, call_index: int = 0) -> bool:
        """Return ``True`` for every invocation."""
        del invocation, call_index
        return True

    def __repr__(self) -> str:
        """Return a debug representation."""
        return "AnyParameters()"


def _args_satisfy(
    comparators: t.Sequence[Comparator], args: t.Sequence[t.Any]
) -> bool:
    if len(args) < len(comparators):
        return False
    return all(
        comparator(arg) for comparator, arg in zip(comparators, args, strict=False)
    )


class Parameters(ParametersMatcher):
    """Check each positional argument against a comparator.

    Plain values are compared with :class:`~method_mox.comparators.IsEqual`.
    Arguments beyond the configured ones are not inspected.
    """

    def __init__(self, args: t.Iterable[object]) -> None:
        self.comparators = tuple(as_comparator(arg) for arg in args)

    def matches(self, invocation: Invocation, *, call_index: int = 0) -> bool:
        """Return ``True`` when every comparator accepts its argument."""
        del call_index
        return _args_satisfy(self.comparators, invocation.args)

    def __repr__(self) -> str:
        """Return a debug representation."""
        inner = ", ".join(repr(comparator) for comparator in self.comparators)
        return f"Parameters({inner})"


class ConsecutiveParameters(ParametersMatcher):
    """Check the Nth call against the Nth argument set."""

    def __init__(self, arg_sets: t.Iterable[t.Iterable[object]]) -> None:
        self.comparator_sets = tuple(
            tuple(as_comparator(arg) for arg in arg_set) for arg_set in arg_sets
        )

    def matches(self, invocation: Invocation, *, call_index: int = 0) -> bool:
        """Return ``True`` if *invocation* satisfies the set for *call_index*."""
        if call_index >= len(self.comparator_sets):
            return True
        return _args_satisfy(self.comparator_sets[call_index], invocation.args)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"ConsecutiveParameters({len(self.comparator_sets)} argument sets)"


__all__ = [
    "AnyParameters",
    "ConsecutiveParameters",
    "MethodName",
    "Parameters",
    "ParametersMatcher",
]
