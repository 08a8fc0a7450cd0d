"""Pytest plugin providing the ``method_mox`` fixture."""

from __future__ import annotations

import logging
import typing as t

import pytest

from .controller import MethodMox
from .registry import IdentifierPolicy

logger = logging.getLogger(__name__)

_POLICY_CHOICES = tuple(policy.value for policy in IdentifierPolicy)


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line and ini options for the plugin."""
    group = parser.getgroup("method_mox")
    group.addoption(
        "--method-mox-identifier-policy",
        action="store",
        dest="method_mox_identifier_policy",
        choices=_POLICY_CHOICES,
        default=None,
        help=(
            "How the method_mox registry treats an identifier registered twice. "
            "Overrides the pytest.ini setting."
        ),
    )
    group.addoption(
        "--method-mox-verify",
        action="store_true",
        dest="method_mox_verify",
        default=None,
        help="Verify invocation counts when the method_mox fixture is torn down.",
    )
    parser.addini(
        "method_mox_identifier_policy",
        "Identifier collision policy for method_mox registries (replace|reject).",
        default=IdentifierPolicy.REPLACE.value,
    )
    parser.addini(
        "method_mox_verify",
        "Verify invocation counts when the method_mox fixture is torn down.",
        type="bool",
        default=False,
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register plugin-specific markers."""
    config.addinivalue_line(
        "markers",
        (
            "method_mox(identifier_policy: str = 'replace', verify: bool = False): "
            "override method_mox settings for a single test."
        ),
    )


def _marker_value(request: pytest.FixtureRequest, key: str) -> object | None:
    """Return the ``method_mox`` marker's *key* argument if present."""
    marker = request.node.get_closest_marker("method_mox")
    if marker is None or key not in marker.kwargs:
        return None
    return marker.kwargs[key]


def _identifier_policy(request: pytest.FixtureRequest) -> IdentifierPolicy:
    """Resolve the identifier policy for the current test."""
    # Priority order: marker > CLI option > INI setting
    value = _marker_value(request, "identifier_policy")
    if value is None:
        value = request.config.getoption("method_mox_identifier_policy")
    if value is None:
        value = request.config.getini("method_mox_identifier_policy")
    try:
        return IdentifierPolicy(str(value).strip().lower())
    except ValueError:
        msg = (
            f"invalid method_mox identifier policy {value!r}; "
            f"expected one of {', '.join(_POLICY_CHOICES)}"
        )
        raise pytest.UsageError(msg) from None


def _verify_enabled(request: pytest.FixtureRequest) -> bool:
    """Return whether teardown should verify invocation counts."""
    marker_value = _marker_value(request, "verify")
    if marker_value is not None:
        if not isinstance(marker_value, bool):
            msg = (
                "method_mox marker 'verify' must be a bool, "
                f"got {type(marker_value).__name__}"
            )
            raise pytest.UsageError(msg)
        return marker_value
    cli_value = request.config.getoption("method_mox_verify")
    if cli_value is not None:
        return bool(cli_value)
    return bool(request.config.getini("method_mox_verify"))


@pytest.fixture
def method_mox(request: pytest.FixtureRequest) -> t.Generator[MethodMox, None, None]:
    """Provide a :class:`MethodMox` configured from pytest options."""
    policy = _identifier_policy(request)
    verify = _verify_enabled(request)
    mox = MethodMox(identifier_policy=policy)
    logger.debug(
        "Created method_mox controller for %s (policy=%s, verify=%s)",
        request.node.nodeid,
        policy,
        verify,
    )
    yield mox
    if not verify:
        return
    try:
        mox.verify()
    except Exception:
        logger.exception("Error during method_mox verification")
        raise
