"""Stub behaviours returned by matched invocations."""

from __future__ import annotations

import abc
import dataclasses as dc
import typing as t

from .errors import MethodMoxError

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .invocation import Invocation


class Stub(abc.ABC):
    """Produce the outcome of a matched invocation."""

    __slots__ = ()

    @abc.abstractmethod
    def invoke(self, invocation: Invocation) -> t.Any:  # noqa: ANN401
        """Return the value for *invocation* or raise."""


@dc.dataclass(slots=True)
class Reference:
    """Mutable cell whose current value a :class:`ReturnReference` returns."""

    value: t.Any = None


@dc.dataclass(slots=True, frozen=True)
class ReturnValue(Stub):
    """Return a fixed value."""

    value: t.Any

    def invoke(self, invocation: Invocation) -> t.Any:  # noqa: ANN401
        """Return ``value``."""
        del invocation
        return self.value


@dc.dataclass(slots=True, frozen=True)
class ReturnReference(Stub):
    """Return whatever ``reference`` holds at call time."""

    reference: Reference

    def invoke(self, invocation: Invocation) -> t.Any:  # noqa: ANN401
        """Return the current value of the reference."""
        del invocation
        return self.reference.value


@dc.dataclass(slots=True)
class ConsecutiveCalls(Stub):
    """Return ``values`` one per call, then ``None``.

    A value that is itself a stub is invoked instead of being returned, so a
    sequence can mix plain values with, say, a :class:`RaiseException`.
    """

    values: tuple[t.Any, ...]
    _position: int = dc.field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        self.values = tuple(self.values)

    def invoke(self, invocation: Invocation) -> t.Any:  # noqa: ANN401
        """Return the next value in the sequence."""
        if self._position >= len(self.values):
            return None
        value = self.values[self._position]
        self._position += 1
        if isinstance(value, Stub):
            return value.invoke(invocation)
        return value


@dc.dataclass(slots=True, frozen=True)
class ReturnValueMap(Stub):
    """Look up the return value by argument list.

    Each row holds the expected arguments followed by the value to return.
    """

    value_map: tuple[tuple[t.Any, ...], ...]

    def __init__(self, value_map: t.Iterable[t.Sequence[t.Any]]) -> None:
        rows = tuple(tuple(row) for row in value_map)
        if any(not row for row in rows):
            msg = "value map rows must contain at least a return value"
            raise ValueError(msg)
        object.__setattr__(self, "value_map", rows)

    def invoke(self, invocation: Invocation) -> t.Any:  # noqa: ANN401
        """Return the value of the first row matching the arguments."""
        for *params, value in self.value_map:
            if tuple(params) == invocation.args:
                return value
        return None


@dc.dataclass(slots=True, frozen=True)
class ReturnArgument(Stub):
    """Return the positional argument at ``index``."""

    index: int

    def invoke(self, invocation: Invocation) -> t.Any:  # noqa: ANN401
        """Return the argument, or ``None`` when it was not passed."""
        if not 0 <= self.index < len(invocation.args):
            return None
        return invocation.args[self.index]


@dc.dataclass(slots=True, frozen=True)
class ReturnCallback(Stub):
    """Delegate to ``callback`` with the invocation's arguments."""

    callback: t.Callable[..., t.Any]

    def __post_init__(self) -> None:
        if not callable(self.callback):
            msg = f"callback must be callable, got {type(self.callback).__name__}"
            raise TypeError(msg)

    def invoke(self, invocation: Invocation) -> t.Any:  # noqa: ANN401
        """Return ``callback(*invocation.args)``."""
        return self.callback(*invocation.args)


@dc.dataclass(slots=True, frozen=True)
class ReturnSelf(Stub):
    """Return the double the method was called on."""

    def invoke(self, invocation: Invocation) -> t.Any:  # noqa: ANN401
        """Return the receiving object."""
        if invocation.obj is None:
            msg = (
                "The current object can only be returned when mocking an "
                "instance, not a class."
            )
            raise MethodMoxError(msg)
        return invocation.obj


@dc.dataclass(slots=True, frozen=True)
class RaiseException(Stub):
    """Raise ``exception`` when invoked."""

    exception: BaseException | type[BaseException]

    def __post_init__(self) -> None:
        exc = self.exception
        if isinstance(exc, BaseException):
            return
        if isinstance(exc, type) and issubclass(exc, BaseException):
            return
        msg = f"exception must be an exception, got {type(exc).__name__}"
        raise TypeError(msg)

    def invoke(self, invocation: Invocation) -> t.NoReturn:
        """Raise the configured exception."""
        del invocation
        raise self.exception


__all__ = [
    "ConsecutiveCalls",
    "RaiseException",
    "Reference",
    "ReturnArgument",
    "ReturnCallback",
    "ReturnReference",
    "ReturnSelf",
    "ReturnValue",
    "ReturnValueMap",
    "Stub",
]
