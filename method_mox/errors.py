"""Exception hierarchy for method_mox."""

from __future__ import annotations

import enum


class MethodMoxError(Exception):
    """Base class for all method_mox errors."""


class ConfigurationErrorReason(enum.StrEnum):
    """Why an expectation could not be configured."""

    NO_METHOD_MATCHER = "no method matcher"
    METHOD_MATCHER_ALREADY_SET = "method matcher already set"
    PARAMETER_MATCHER_ALREADY_SET = "parameter matcher already set"
    METHOD_NOT_CONFIGURABLE = "method not configurable"
    IDENTIFIER_ALREADY_REGISTERED = "identifier already registered"
    UNKNOWN_IDENTIFIER = "unknown identifier"


class ConfigurationError(MethodMoxError):
    """Raised when an expectation is configured in an illegal order.

    These are mistakes in test setup rather than assertion failures, so the
    error is raised at the offending call and never collected.
    """

    def __init__(self, reason: ConfigurationErrorReason, message: str) -> None:
        super().__init__(message)
        self.reason = reason


class VerificationError(MethodMoxError):
    """Raised when recorded invocations violate an expectation."""


class ExpectationFailedError(VerificationError):
    """Raised when an invocation count constraint is not satisfied."""


__all__ = [
    "ConfigurationError",
    "ConfigurationErrorReason",
    "ExpectationFailedError",
    "MethodMoxError",
    "VerificationError",
]
