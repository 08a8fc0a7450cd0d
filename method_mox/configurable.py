"""Allow-list of method names that may be configured on a double."""

from __future__ import annotations

import inspect
import typing as t


def _is_configurable(attr: object) -> bool:
    """Return ``True`` when a class attribute is an interceptable method."""
    if isinstance(attr, staticmethod | classmethod | property):
        return False
    if not inspect.isfunction(attr):
        return False
    return not getattr(attr, "__final__", False)


class ConfigurableMethods:
    """Case-insensitive, read-only set of mockable method names.

    Names are stored lower-cased, so membership tests should use lower-cased
    candidates; :meth:`__contains__` lower-cases for convenience as well.
    """

    __slots__ = ("_names",)

    def __init__(self, names: t.Iterable[str] = ()) -> None:
        self._names = frozenset(name.lower() for name in names)

    @classmethod
    def from_type(cls, target: type) -> ConfigurableMethods:
        """Collect the public, overridable methods of *target*.

        Static methods, class methods, properties, private names and methods
        decorated with :func:`typing.final` are excluded. The first definition
        found along the MRO wins, so a subclass can re-open a method its base
        declared final only by overriding it without the decorator.
        """
        seen: set[str] = set()
        names: list[str] = []
        for klass in target.__mro__:
            if klass is object:
                continue
            for name, attr in vars(klass).items():
                if name.startswith("_") or name in seen:
                    continue
                seen.add(name)
                if _is_configurable(attr):
                    names.append(name)
        return cls(names)

    @property
    def names(self) -> frozenset[str]:
        """Return the lower-cased method names."""
        return self._names

    def __contains__(self, name: object) -> bool:
        """Return ``True`` if *name* is configurable, ignoring case."""
        return isinstance(name, str) and name.lower() in self._names

    def __iter__(self) -> t.Iterator[str]:
        """Iterate over the names in sorted order."""
        return iter(sorted(self._names))

    def __len__(self) -> int:
        """Return the number of configurable methods."""
        return len(self._names)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"ConfigurableMethods({sorted(self._names)!r})"


__all__ = ["ConfigurableMethods"]
