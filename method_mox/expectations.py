"""The record accumulating one expected method call."""

from __future__ import annotations

import typing as t

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from collections.abc import Hashable

    from .invocation import Invocation
    from .invocation_counts import InvocationMatcher
    from .matchers import MethodName, ParametersMatcher
    from .stubs import Stub


class Expectation:
    """Configuration for one expected invocation on a test double.

    Only ``invocation_matcher`` is set at construction; the remaining fields
    are filled in by :class:`~method_mox.builder.ExpectationBuilder`.
    """

    def __init__(self, invocation_matcher: InvocationMatcher) -> None:
        self.invocation_matcher = invocation_matcher
        self.method_name_matcher: MethodName | None = None
        self.parameters_matcher: ParametersMatcher | None = None
        self.stub: Stub | None = None
        self.after_identifier: Hashable | None = None
        self.identifier: Hashable | None = None

    def has_method_name_matcher(self) -> bool:
        """Return ``True`` once a method-name matcher is installed."""
        return self.method_name_matcher is not None

    def has_parameters_matcher(self) -> bool:
        """Return ``True`` once a parameters matcher is installed."""
        return self.parameters_matcher is not None

    def set_method_name_matcher(self, matcher: MethodName) -> None:
        self.method_name_matcher = matcher

    def set_parameters_matcher(self, matcher: ParametersMatcher) -> None:
        self.parameters_matcher = matcher

    def set_stub(self, stub: Stub) -> None:
        self.stub = stub

    def set_after_identifier(self, identifier: Hashable) -> None:
        self.after_identifier = identifier

    def matches(self, invocation: Invocation) -> bool:
        """Return ``True`` if *invocation* satisfies every installed matcher."""
        if self.method_name_matcher is not None and not (
            self.method_name_matcher.matches(invocation)
        ):
            return False
        if self.parameters_matcher is not None and not (
            self.parameters_matcher.matches(
                invocation, call_index=self.invocation_matcher.invocation_count
            )
        ):
            return False
        return self.invocation_matcher.matches(invocation)

    def invoke(self, invocation: Invocation) -> t.Any:  # noqa: ANN401
        """Record *invocation* and return the stubbed outcome."""
        self.invocation_matcher.invoked(invocation)
        if self.stub is None:
            return None
        return self.stub.invoke(invocation)

    def verify(self) -> None:
        """Check the invocation count constraint."""
        self.invocation_matcher.verify()

    def __repr__(self) -> str:
        """Return a debug representation."""
        parts = [repr(self.invocation_matcher)]
        if self.method_name_matcher is not None:
            parts.append(repr(self.method_name_matcher))
        if self.parameters_matcher is not None:
            parts.append(repr(self.parameters_matcher))
        if self.stub is not None:
            parts.append(repr(self.stub))
        if self.after_identifier is not None:
            parts.append(f"after={self.after_identifier!r}")
        return f"Expectation({', '.join(parts)})"


__all__ = ["Expectation"]
