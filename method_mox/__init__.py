"""Fluent mock-expectation builder for Python test suites.

Expectations are configured by chaining calls on an
:class:`~method_mox.builder.ExpectationBuilder`::

    mox = MethodMox()
    mox.expects(Repository, once()).for_method("fetch").with_parameters(
        "key"
    ).will_return(42)
"""

from __future__ import annotations

from .builder import ExpectationBuilder
from .comparators import Anything, Comparator, IsEqual, Predicate, Regex
from .configurable import ConfigurableMethods
from .controller import MethodMox
from .errors import (
    ConfigurationError,
    ConfigurationErrorReason,
    ExpectationFailedError,
    MethodMoxError,
    VerificationError,
)
from .expectations import Expectation
from .invocation import Invocation
from .invocation_counts import (
    any_times,
    at_least,
    at_least_once,
    at_most,
    exactly,
    never,
    once,
)
from .registry import ExpectationRegistry, IdentifierPolicy
from .stubs import Reference

__all__ = [
    "Anything",
    "Comparator",
    "ConfigurableMethods",
    "ConfigurationError",
    "ConfigurationErrorReason",
    "Expectation",
    "ExpectationBuilder",
    "ExpectationFailedError",
    "ExpectationRegistry",
    "IdentifierPolicy",
    "Invocation",
    "IsEqual",
    "MethodMox",
    "MethodMoxError",
    "Predicate",
    "Reference",
    "Regex",
    "VerificationError",
    "any_times",
    "at_least",
    "at_least_once",
    "at_most",
    "exactly",
    "never",
    "once",
]
