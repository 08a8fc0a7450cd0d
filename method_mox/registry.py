"""Registry owning the expectations configured on a double."""

from __future__ import annotations

import enum
import logging
import typing as t

from .errors import ConfigurationError, ConfigurationErrorReason

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from collections.abc import Hashable

    from .builder import ExpectationBuilder
    from .expectations import Expectation

logger = logging.getLogger(__name__)


class IdentifierPolicy(enum.StrEnum):
    """What happens when an identifier is registered twice."""

    REPLACE = "replace"
    REJECT = "reject"


class ExpectationRegistry:
    """Append-only collection of expectations plus an identifier table."""

    def __init__(
        self, *, identifier_policy: IdentifierPolicy | str = IdentifierPolicy.REPLACE
    ) -> None:
        self.identifier_policy = IdentifierPolicy(identifier_policy)
        self._expectations: list[Expectation] = []
        self._identifiers: dict[Hashable, ExpectationBuilder] = {}

    @property
    def expectations(self) -> tuple[Expectation, ...]:
        """Return the registered expectations in registration order."""
        return tuple(self._expectations)

    def register(self, expectation: Expectation) -> None:
        """Take ownership of *expectation*."""
        self._expectations.append(expectation)
        logger.debug(
            "Registered expectation #%d: %r", len(self._expectations), expectation
        )

    def register_identifier(
        self, identifier: Hashable, builder: ExpectationBuilder
    ) -> None:
        """Make *builder* retrievable under *identifier*.

        Under :attr:`IdentifierPolicy.REPLACE` the latest registration wins;
        under :attr:`IdentifierPolicy.REJECT` a duplicate raises
        :class:`ConfigurationError`.
        """
        previous = self._identifiers.get(identifier)
        if previous is not None and previous is not builder:
            if self.identifier_policy is IdentifierPolicy.REJECT:
                msg = f"Expectation with id <{identifier}> is already registered."
                raise ConfigurationError(
                    ConfigurationErrorReason.IDENTIFIER_ALREADY_REGISTERED, msg
                )
            logger.debug("Replacing expectation registered under %r", identifier)
        self._identifiers[identifier] = builder

    def lookup(self, identifier: Hashable) -> ExpectationBuilder:
        """Return the builder registered under *identifier*."""
        try:
            return self._identifiers[identifier]
        except KeyError:
            msg = f"No expectation is registered with id <{identifier}>."
            raise ConfigurationError(
                ConfigurationErrorReason.UNKNOWN_IDENTIFIER, msg
            ) from None

    def __contains__(self, identifier: object) -> bool:
        """Return ``True`` if *identifier* has been registered."""
        return identifier in self._identifiers

    def __iter__(self) -> t.Iterator[Expectation]:
        return iter(self._expectations)

    def __len__(self) -> int:
        return len(self._expectations)


__all__ = ["ExpectationRegistry", "IdentifierPolicy"]
