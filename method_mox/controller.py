"""MethodMox controller tying registries, allow-lists and builders together."""

from __future__ import annotations

import logging
import typing as t

from .builder import ExpectationBuilder
from .configurable import ConfigurableMethods
from .errors import ExpectationFailedError
from .invocation_counts import any_times
from .registry import ExpectationRegistry, IdentifierPolicy

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from collections.abc import Hashable

    from .invocation_counts import InvocationMatcher

logger = logging.getLogger(__name__)

Target = t.Union[type, ConfigurableMethods, t.Iterable[str]]  # noqa: UP007


def configurable_methods_for(target: Target) -> ConfigurableMethods:
    """Return the configurable method allow-list for *target*.

    *target* may be a class, an existing :class:`ConfigurableMethods`, or an
    iterable of method names.
    """
    if isinstance(target, ConfigurableMethods):
        return target
    if isinstance(target, type):
        return ConfigurableMethods.from_type(target)
    if isinstance(target, str):
        msg = "target must be a class or an iterable of method names, not a str"
        raise TypeError(msg)
    return ConfigurableMethods(target)


class MethodMox:
    """Entry point for configuring expectations in a test.

    Each controller owns one :class:`ExpectationRegistry`; every builder
    returned by :meth:`expects` registers into it.
    """

    def __init__(
        self,
        *,
        identifier_policy: IdentifierPolicy | str = IdentifierPolicy.REPLACE,
        registry: ExpectationRegistry | None = None,
    ) -> None:
        """Create a new controller.

        Parameters
        ----------
        identifier_policy:
            How the registry treats an identifier registered twice. Ignored
            when *registry* is supplied.
        registry:
            Optional registry to share between controllers. A fresh one is
            created when omitted.
        """
        self.registry = (
            registry
            if registry is not None
            else ExpectationRegistry(identifier_policy=identifier_policy)
        )

    def expects(
        self,
        target: Target,
        invocation_matcher: InvocationMatcher | None = None,
    ) -> ExpectationBuilder:
        """Start configuring an expectation on a double of *target*."""
        matcher = invocation_matcher if invocation_matcher is not None else any_times()
        return ExpectationBuilder(
            self.registry, matcher, configurable_methods_for(target)
        )

    def lookup(self, identifier: Hashable) -> ExpectationBuilder:
        """Return the builder registered under *identifier*."""
        return self.registry.lookup(identifier)

    def verify(self) -> None:
        """Check the invocation counts of every registered expectation.

        All expectations are checked; failures are reported together.
        """
        failures: list[str] = []
        for index, expectation in enumerate(self.registry, start=1):
            try:
                expectation.verify()
            except ExpectationFailedError as err:
                failures.append(f"{index}. {expectation!r}: {err}")
        if failures:
            logger.debug("%d expectation(s) failed verification", len(failures))
            msg = "Unfulfilled expectations:\n" + "\n".join(failures)
            raise ExpectationFailedError(msg)


__all__ = ["MethodMox", "Target", "configurable_methods_for"]
