"""Unit tests for :mod:`method_mox.builder`."""

from __future__ import annotations

import pytest

from method_mox.builder import ExpectationBuilder
from method_mox.comparators import Regex
from method_mox.configurable import ConfigurableMethods
from method_mox.errors import ConfigurationError, ConfigurationErrorReason
from method_mox.invocation import Invocation
from method_mox.invocation_counts import any_times, once
from method_mox.matchers import (
    AnyParameters,
    ConsecutiveParameters,
    MethodName,
    Parameters,
)
from method_mox.registry import ExpectationRegistry
from method_mox.stubs import (
    ConsecutiveCalls,
    RaiseException,
    Reference,
    ReturnArgument,
    ReturnCallback,
    ReturnReference,
    ReturnSelf,
    ReturnValue,
    ReturnValueMap,
)


@pytest.fixture
def registry() -> ExpectationRegistry:
    """Return an empty registry."""
    return ExpectationRegistry()


@pytest.fixture
def builder(registry: ExpectationRegistry) -> ExpectationBuilder:
    """Return a fresh builder for a double exposing ``doSomething``."""
    return ExpectationBuilder(
        registry, any_times(), ConfigurableMethods(["doSomething", "foo"])
    )


def _reason(excinfo: pytest.ExceptionInfo[ConfigurationError]) -> str:
    return excinfo.value.reason


def test_construction_registers_expectation(registry: ExpectationRegistry) -> None:
    """The expectation is visible in the registry before any configuration."""
    builder = ExpectationBuilder(registry, once(), ConfigurableMethods())
    assert registry.expectations == (builder.expectation,)


def test_each_builder_registers_once(registry: ExpectationRegistry) -> None:
    """Two builders produce two registered expectations, in order."""
    methods = ConfigurableMethods(["foo"])
    first = ExpectationBuilder(registry, any_times(), methods)
    second = ExpectationBuilder(registry, any_times(), methods)
    first.for_method("foo").will_return(1)
    assert list(registry) == [first.expectation, second.expectation]


def test_invocation_matcher_is_wrapped(registry: ExpectationRegistry) -> None:
    """The invocation matcher handed in is kept on the expectation."""
    matcher = once()
    builder = ExpectationBuilder(registry, matcher, ConfigurableMethods())
    assert builder.expectation.invocation_matcher is matcher


def test_chaining_returns_same_builder(builder: ExpectationBuilder) -> None:
    """Every configuration call returns the builder itself."""
    result = (
        builder.for_method("foo")
        .with_parameters(1, 2)
        .will_return(3)
        .after("first")
        .identify("second")
    )
    assert result is builder


def test_parameters_before_method_fails(builder: ExpectationBuilder) -> None:
    """with_any_parameters() requires a method-name matcher."""
    with pytest.raises(ConfigurationError) as excinfo:
        builder.with_any_parameters()
    assert _reason(excinfo) == ConfigurationErrorReason.NO_METHOD_MATCHER
    assert "Method name matcher is not defined" in str(excinfo.value)


@pytest.mark.parametrize(
    "configure",
    [
        lambda b: b.with_parameters(1),
        lambda b: b.with_consecutive_parameters([1], [2]),
        lambda b: b.with_any_parameters(),
    ],
    ids=["exact", "consecutive", "any"],
)
def test_every_parameters_call_needs_method(
    builder: ExpectationBuilder, configure: object
) -> None:
    """All parameters operations share the same precondition."""
    with pytest.raises(ConfigurationError) as excinfo:
        configure(builder)  # type: ignore[operator]
    assert _reason(excinfo) == ConfigurationErrorReason.NO_METHOD_MATCHER
    assert builder.expectation.parameters_matcher is None


@pytest.mark.parametrize(
    ("first", "second"),
    [
        ("foo", "foo"),
        ("foo", Regex("^f")),
        (Regex("^f"), "foo"),
        (Regex("^f"), Regex("^d")),
    ],
)
def test_method_matcher_cannot_be_redefined(
    builder: ExpectationBuilder, first: object, second: object
) -> None:
    """A second for_method() fails whatever the constraint types."""
    builder.for_method(first)  # type: ignore[arg-type]
    with pytest.raises(ConfigurationError) as excinfo:
        builder.for_method(second)  # type: ignore[arg-type]
    assert _reason(excinfo) == ConfigurationErrorReason.METHOD_MATCHER_ALREADY_SET
    assert builder.expectation.method_name_matcher.constraint is first


def test_parameters_matcher_cannot_be_redefined(builder: ExpectationBuilder) -> None:
    """A second parameters call fails and keeps the first matcher."""
    builder.for_method("foo").with_parameters(1, 2)
    installed = builder.expectation.parameters_matcher
    with pytest.raises(ConfigurationError) as excinfo:
        builder.with_parameters(3, 4)
    assert _reason(excinfo) == ConfigurationErrorReason.PARAMETER_MATCHER_ALREADY_SET
    assert builder.expectation.parameters_matcher is installed


def test_any_parameters_after_exact_fails(builder: ExpectationBuilder) -> None:
    """Mixing parameters operations still counts as a redefinition."""
    builder.for_method("foo").with_any_parameters()
    with pytest.raises(ConfigurationError) as excinfo:
        builder.with_consecutive_parameters([1])
    assert _reason(excinfo) == ConfigurationErrorReason.PARAMETER_MATCHER_ALREADY_SET


def test_literal_method_name_is_case_insensitive(registry: ExpectationRegistry) -> None:
    """Literal names are lower-cased before the membership check."""
    builder = ExpectationBuilder(
        registry, any_times(), ConfigurableMethods(["dosomething"])
    )
    builder.for_method("DoSomething")
    matcher = builder.expectation.method_name_matcher
    assert isinstance(matcher, MethodName)
    assert matcher.constraint == "DoSomething"


def test_unknown_method_name_is_rejected(registry: ExpectationRegistry) -> None:
    """A literal name outside the configurable set fails."""
    builder = ExpectationBuilder(
        registry, any_times(), ConfigurableMethods(["dosomething"])
    )
    with pytest.raises(ConfigurationError) as excinfo:
        builder.for_method("other")
    assert _reason(excinfo) == ConfigurationErrorReason.METHOD_NOT_CONFIGURABLE
    assert 'Trying to configure method "other"' in str(excinfo.value)
    assert not builder.expectation.has_method_name_matcher()


def test_plain_container_is_accepted(registry: ExpectationRegistry) -> None:
    """Any container of lower-cased names serves as the configurable set."""
    builder = ExpectationBuilder(registry, any_times(), frozenset({"dosomething"}))
    builder.for_method("DOSOMETHING")
    assert builder.expectation.has_method_name_matcher()


def test_comparator_skips_membership_check(registry: ExpectationRegistry) -> None:
    """Comparators are installed even when nothing in the set matches."""
    builder = ExpectationBuilder(registry, any_times(), ConfigurableMethods())
    constraint = Regex("^nothing")
    builder.for_method(constraint)
    assert builder.expectation.method_name_matcher.constraint is constraint


def test_parameter_operations_install_matchers(registry: ExpectationRegistry) -> None:
    """Each parameters operation installs its matcher type."""
    methods = ConfigurableMethods(["foo"])
    exact = ExpectationBuilder(registry, any_times(), methods).for_method("foo")
    consecutive = ExpectationBuilder(registry, any_times(), methods).for_method("foo")
    anything = ExpectationBuilder(registry, any_times(), methods).for_method("foo")

    exact.with_parameters(1, 2)
    consecutive.with_consecutive_parameters([1], [2])
    anything.with_any_parameters()

    assert isinstance(exact.expectation.parameters_matcher, Parameters)
    assert isinstance(
        consecutive.expectation.parameters_matcher, ConsecutiveParameters
    )
    assert isinstance(anything.expectation.parameters_matcher, AnyParameters)


def test_will_return_single_value(builder: ExpectationBuilder) -> None:
    """A single value installs a plain return stub."""
    builder.will_return(1)
    assert builder.expectation.stub == ReturnValue(1)


def test_will_return_many_values(builder: ExpectationBuilder) -> None:
    """Extra values install a consecutive-calls stub."""
    builder.will_return(1, 2, 3)
    stub = builder.expectation.stub
    assert isinstance(stub, ConsecutiveCalls)
    call = Invocation("foo")
    assert [stub.invoke(call) for _ in range(4)] == [1, 2, 3, None]


def test_will_return_none_is_single_value(builder: ExpectationBuilder) -> None:
    """``None`` is a legitimate single return value."""
    builder.will_return(None)
    assert builder.expectation.stub == ReturnValue(None)


def test_stub_helpers_install_expected_variants(builder: ExpectationBuilder) -> None:
    """Each will_* helper installs its stub, replacing the previous one."""
    ref = Reference(1)

    def callback(*args: object) -> int:
        return len(args)

    error = ValueError("boom")
    cases = [
        (lambda: builder.will_return_reference(ref), ReturnReference(ref)),
        (lambda: builder.will_return_map([[1, "a"]]), ReturnValueMap([[1, "a"]])),
        (lambda: builder.will_return_argument(0), ReturnArgument(0)),
        (lambda: builder.will_return_callback(callback), ReturnCallback(callback)),
        (lambda: builder.will_return_self(), ReturnSelf()),
        (lambda: builder.will_throw_exception(error), RaiseException(error)),
    ]
    for configure, expected in cases:
        assert configure() is builder
        assert builder.expectation.stub == expected


def test_will_return_on_consecutive_calls(builder: ExpectationBuilder) -> None:
    """Values are returned one per call."""
    builder.will_return_on_consecutive_calls("a", "b")
    stub = builder.expectation.stub
    assert isinstance(stub, ConsecutiveCalls)
    assert stub.values == ("a", "b")


def test_aliases_match_long_names(builder: ExpectationBuilder) -> None:
    """will() and will_raise() behave like attach_stub()/will_throw_exception()."""
    builder.will(ReturnValue(5))
    assert builder.expectation.stub == ReturnValue(5)
    builder.will_raise(KeyError)
    assert builder.expectation.stub == RaiseException(KeyError)


def test_stubs_allowed_in_any_state(builder: ExpectationBuilder) -> None:
    """Stubs can be attached before and after the matchers."""
    builder.will_return(1)
    builder.for_method("foo")
    builder.will_return(2)
    builder.with_any_parameters()
    builder.attach_stub(ReturnValue(3))
    assert builder.expectation.stub == ReturnValue(3)


def test_after_is_repeatable(builder: ExpectationBuilder) -> None:
    """after() may be called in any state; the last call wins."""
    builder.after("a")
    builder.for_method("foo").with_any_parameters()
    builder.after("b")
    assert builder.expectation.after_identifier == "b"


def test_identify_registers_builder(
    builder: ExpectationBuilder, registry: ExpectationRegistry
) -> None:
    """identify() makes the builder retrievable from the registry."""
    builder.identify("A")
    assert registry.lookup("A") is builder
    assert builder.expectation.identifier == "A"


def test_identify_same_id_on_two_builders(registry: ExpectationRegistry) -> None:
    """Duplicate identifiers are accepted; the registry decides visibility."""
    methods = ConfigurableMethods(["foo"])
    first = ExpectationBuilder(registry, any_times(), methods).identify("A")
    second = ExpectationBuilder(registry, any_times(), methods).identify("A")
    assert first.expectation.identifier == "A"
    assert registry.lookup("A") is second


def test_configured_expectation_matches_and_invokes(
    builder: ExpectationBuilder,
) -> None:
    """A fully configured expectation evaluates invocations end to end."""
    builder.for_method("DoSomething").with_parameters(1, Regex("^x")).will_return(7)
    exp = builder.expectation
    good = Invocation("dosomething", (1, "xyz"))
    assert exp.matches(good)
    assert not exp.matches(Invocation("dosomething", (2, "xyz")))
    assert not exp.matches(Invocation("foo", (1, "xyz")))
    assert exp.invoke(good) == 7
    assert exp.invocation_matcher.invocation_count == 1
