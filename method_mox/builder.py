"""Fluent builder configuring expectations on a test double."""

from __future__ import annotations

import logging
import typing as t

from .errors import ConfigurationError, ConfigurationErrorReason
from .expectations import Expectation
from .matchers import AnyParameters, ConsecutiveParameters, MethodName, Parameters
from .stubs import (
    ConsecutiveCalls,
    RaiseException,
    ReturnArgument,
    ReturnCallback,
    ReturnReference,
    ReturnSelf,
    ReturnValue,
    ReturnValueMap,
)

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from collections.abc import Hashable

    from .comparators import Comparator
    from .invocation_counts import InvocationMatcher
    from .matchers import ParametersMatcher
    from .registry import ExpectationRegistry
    from .stubs import Reference, Stub

logger = logging.getLogger(__name__)


class ExpectationBuilder:
    """Build one expectation through chained calls.

    The expectation is registered as soon as the builder exists, so an
    expectation that is never configured further still counts::

        builder.for_method("fetch").with_parameters("key").will_return(42)

    A method-name matcher must be installed before a parameters matcher, and
    each may be installed only once. Stubs, :meth:`after` and
    :meth:`identify` can be applied at any point and overwrite earlier calls.
    """

    def __init__(
        self,
        registry: ExpectationRegistry,
        invocation_matcher: InvocationMatcher,
        configurable_methods: t.Container[str],
    ) -> None:
        self._registry = registry
        self._expectation = Expectation(invocation_matcher)
        self._configurable_methods = configurable_methods
        self._registry.register(self._expectation)

    @property
    def expectation(self) -> Expectation:
        """Return the expectation being configured."""
        return self._expectation

    # ------------------------------------------------------------------
    # Identification and ordering
    # ------------------------------------------------------------------
    def identify(self, identifier: Hashable) -> ExpectationBuilder:
        """Register this builder under *identifier* for :meth:`after` chains."""
        self._registry.register_identifier(identifier, self)
        self._expectation.identifier = identifier
        return self

    def after(self, identifier: Hashable) -> ExpectationBuilder:
        """Only match once the expectation named *identifier* has matched."""
        self._expectation.set_after_identifier(identifier)
        return self

    # ------------------------------------------------------------------
    # Stubbed behaviour
    # ------------------------------------------------------------------
    def attach_stub(self, stub: Stub) -> ExpectationBuilder:
        """Install *stub*, replacing any previously attached one."""
        self._expectation.set_stub(stub)
        logger.debug("Attached %r to %r", stub, self._expectation)
        return self

    will = attach_stub

    def will_return(self, value: object, *next_values: object) -> ExpectationBuilder:
        """Return *value*, or each given value on consecutive calls."""
        if not next_values:
            return self.attach_stub(ReturnValue(value))
        return self.attach_stub(ConsecutiveCalls((value, *next_values)))

    def will_return_reference(self, reference: Reference) -> ExpectationBuilder:
        """Return the value *reference* holds when the call happens."""
        return self.attach_stub(ReturnReference(reference))

    def will_return_map(
        self, value_map: t.Iterable[t.Sequence[object]]
    ) -> ExpectationBuilder:
        """Return the value from the row whose arguments match the call."""
        return self.attach_stub(ReturnValueMap(value_map))

    def will_return_argument(self, index: int) -> ExpectationBuilder:
        """Return the positional argument at *index*."""
        return self.attach_stub(ReturnArgument(index))

    def will_return_callback(
        self, callback: t.Callable[..., object]
    ) -> ExpectationBuilder:
        """Return whatever *callback* returns for the call's arguments."""
        return self.attach_stub(ReturnCallback(callback))

    def will_return_self(self) -> ExpectationBuilder:
        """Return the double the method was invoked on."""
        return self.attach_stub(ReturnSelf())

    def will_return_on_consecutive_calls(self, *values: object) -> ExpectationBuilder:
        """Return *values* one per call."""
        return self.attach_stub(ConsecutiveCalls(values))

    def will_throw_exception(
        self, exception: BaseException | type[BaseException]
    ) -> ExpectationBuilder:
        """Raise *exception* when the call happens."""
        return self.attach_stub(RaiseException(exception))

    will_raise = will_throw_exception

    # ------------------------------------------------------------------
    # Matchers
    # ------------------------------------------------------------------
    def with_parameters(self, *args: object) -> ExpectationBuilder:
        """Require positional arguments equal to, or accepted by, *args*."""
        return self._install_parameters_matcher(Parameters(args))

    def with_consecutive_parameters(
        self, *arg_sets: t.Sequence[object]
    ) -> ExpectationBuilder:
        """Check the Nth call against the Nth entry of *arg_sets*."""
        return self._install_parameters_matcher(ConsecutiveParameters(arg_sets))

    def with_any_parameters(self) -> ExpectationBuilder:
        """Accept any arguments."""
        return self._install_parameters_matcher(AnyParameters())

    def for_method(self, constraint: str | Comparator) -> ExpectationBuilder:
        """Restrict the expectation to methods matching *constraint*.

        A literal name must belong to the configurable methods of the double,
        compared case-insensitively. Comparators are accepted as they are.
        """
        if self._expectation.has_method_name_matcher():
            msg = "Method name matcher is already defined, cannot redefine"
            raise ConfigurationError(
                ConfigurationErrorReason.METHOD_MATCHER_ALREADY_SET, msg
            )

        if (
            isinstance(constraint, str)
            and constraint.lower() not in self._configurable_methods
        ):
            msg = (
                f'Trying to configure method "{constraint}" which cannot be '
                "configured because it does not exist, has not been specified, "
                "is final, or is static"
            )
            raise ConfigurationError(
                ConfigurationErrorReason.METHOD_NOT_CONFIGURABLE, msg
            )

        self._expectation.set_method_name_matcher(MethodName(constraint))
        return self

    def _install_parameters_matcher(
        self, matcher: ParametersMatcher
    ) -> ExpectationBuilder:
        self._ensure_parameters_definable()
        self._expectation.set_parameters_matcher(matcher)
        logger.debug("Installed %r on %r", matcher, self._expectation)
        return self

    def _ensure_parameters_definable(self) -> None:
        """Raise unless a parameters matcher may be installed now."""
        if not self._expectation.has_method_name_matcher():
            msg = (
                "Method name matcher is not defined, cannot define parameter "
                "matcher without one"
            )
            raise ConfigurationError(ConfigurationErrorReason.NO_METHOD_MATCHER, msg)

        if self._expectation.has_parameters_matcher():
            msg = "Parameter matcher is already defined, cannot redefine"
            raise ConfigurationError(
                ConfigurationErrorReason.PARAMETER_MATCHER_ALREADY_SET, msg
            )


__all__ = ["ExpectationBuilder"]
