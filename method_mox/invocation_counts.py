"""Invocation-count matchers deciding how often an expectation may fire."""

from __future__ import annotations

import typing as t

from .errors import ExpectationFailedError

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .invocation import Invocation


class InvocationMatcher:
    """Base class counting the invocations routed to an expectation."""

    def __init__(self) -> None:
        self.invocations: list[Invocation] = []

    @property
    def invocation_count(self) -> int:
        """Return how many invocations have been recorded."""
        return len(self.invocations)

    def matches(self, invocation: Invocation) -> bool:
        """Return ``True`` if *invocation* may be handled by this matcher."""
        del invocation
        return True

    def invoked(self, invocation: Invocation) -> None:
        """Record *invocation*."""
        self.invocations.append(invocation)

    def verify(self) -> None:
        """Raise :class:`ExpectationFailedError` if the count is unsatisfied."""

    def describe(self) -> str:
        """Return a short description for failure messages."""
        raise NotImplementedError

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"{type(self).__name__}({self.describe()})"


class AnyInvokedCount(InvocationMatcher):
    """Accept any number of invocations, including none."""

    def describe(self) -> str:
        """Describe the constraint."""
        return "invoked zero or more times"


class InvokedCount(InvocationMatcher):
    """Require exactly ``expected`` invocations."""

    def __init__(self, expected: int) -> None:
        if expected < 0:
            msg = "expected invocation count must be >= 0"
            raise ValueError(msg)
        super().__init__()
        self.expected = expected

    def invoked(self, invocation: Invocation) -> None:
        """Record *invocation*, failing fast once the count is exceeded."""
        super().invoked(invocation)
        if self.invocation_count > self.expected:
            msg = (
                f"{invocation!r} was not expected to be called more than "
                f"{self._times(self.expected)}."
            )
            raise ExpectationFailedError(msg)

    def verify(self) -> None:
        """Fail unless exactly ``expected`` invocations were recorded."""
        if self.invocation_count != self.expected:
            msg = (
                f"Expected to be {self.describe()}, "
                f"actually called {self._times(self.invocation_count)}."
            )
            raise ExpectationFailedError(msg)

    def describe(self) -> str:
        """Describe the constraint."""
        return f"invoked {self._times(self.expected)}"

    @staticmethod
    def _times(count: int) -> str:
        return "1 time" if count == 1 else f"{count} times"


class InvokedAtLeastCount(InvocationMatcher):
    """Require at least ``minimum`` invocations."""

    def __init__(self, minimum: int) -> None:
        if minimum < 1:
            msg = "minimum invocation count must be >= 1"
            raise ValueError(msg)
        super().__init__()
        self.minimum = minimum

    def verify(self) -> None:
        """Fail when fewer than ``minimum`` invocations were recorded."""
        if self.invocation_count < self.minimum:
            msg = (
                f"Expected to be {self.describe()}, "
                f"actually called {self.invocation_count} time(s)."
            )
            raise ExpectationFailedError(msg)

    def describe(self) -> str:
        """Describe the constraint."""
        return f"invoked at least {self.minimum} time(s)"


class InvokedAtMostCount(InvocationMatcher):
    """Allow at most ``maximum`` invocations."""

    def __init__(self, maximum: int) -> None:
        if maximum < 1:
            msg = "maximum invocation count must be >= 1"
            raise ValueError(msg)
        super().__init__()
        self.maximum = maximum

    def invoked(self, invocation: Invocation) -> None:
        """Record *invocation*, failing fast once ``maximum`` is exceeded."""
        super().invoked(invocation)
        if self.invocation_count > self.maximum:
            msg = f"{invocation!r} was expected to be {self.describe()}."
            raise ExpectationFailedError(msg)

    def describe(self) -> str:
        """Describe the constraint."""
        return f"invoked at most {self.maximum} time(s)"


def any_times() -> AnyInvokedCount:
    """Return a matcher accepting any number of calls."""
    return AnyInvokedCount()


def never() -> InvokedCount:
    """Return a matcher forbidding any call."""
    return InvokedCount(0)


def once() -> InvokedCount:
    """Return a matcher requiring exactly one call."""
    return InvokedCount(1)


def exactly(count: int) -> InvokedCount:
    """Return a matcher requiring exactly *count* calls."""
    return InvokedCount(count)


def at_least_once() -> InvokedAtLeastCount:
    """Return a matcher requiring one call or more."""
    return InvokedAtLeastCount(1)


def at_least(count: int) -> InvokedAtLeastCount:
    """Return a matcher requiring *count* calls or more."""
    return InvokedAtLeastCount(count)


def at_most(count: int) -> InvokedAtMostCount:
    """Return a matcher allowing up to *count* calls."""
    return InvokedAtMostCount(count)


__all__ = [
    "AnyInvokedCount",
    "InvocationMatcher",
    "InvokedAtLeastCount",
    "InvokedAtMostCount",
    "InvokedCount",
    "any_times",
    "at_least",
    "at_least_once",
    "at_most",
    "exactly",
    "never",
    "once",
]
