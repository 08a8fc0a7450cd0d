"""Representation of a single intercepted method call."""

from __future__ import annotations

import dataclasses as dc
import typing as t


@dc.dataclass(slots=True, frozen=True)
class Invocation:
    """A call made on a test double.

    ``obj`` is the receiving double, or ``None`` when the call was made on a
    class rather than an instance.
    """

    method_name: str
    args: tuple[t.Any, ...] = ()
    obj: object | None = None

    def __repr__(self) -> str:
        """Return a call-like representation for failure messages."""
        args_repr = ", ".join(repr(arg) for arg in self.args)
        return f"{self.method_name}({args_repr})"
