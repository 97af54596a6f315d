"""
Field mappings consumed by templates.

A Context is an ordered mapping from field name to a field value. A value is
either a Literal string or a Deferred computation that produces a string the
first time it is needed. Contexts are never changed in place: every update
returns a new Context that shares the unchanged field values.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Callable, Union


class Literal:
    """A field value that is already a string."""

    __slots__ = ("value",)

    def __init__(self, value: str):
        self.value = value

    def resolve(self) -> str:
        return self.value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Literal) and other.value == self.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __repr__(self) -> str:
        return f"Literal({self.value!r})"


class Fallback(Literal):
    """A literal written in place of a field the source did not have."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Fallback({self.value!r})"


class Deferred:
    """A field value computed on first access.

    The computation runs at most once; later calls return the cached string.
    If the computation raises, nothing is cached and the error propagates.
    """

    __slots__ = ("_compute", "_value", "_resolved")

    def __init__(self, compute: Callable[[], str]):
        self._compute = compute
        self._value: str | None = None
        self._resolved = False

    @property
    def resolved(self) -> bool:
        return self._resolved

    def resolve(self) -> str:
        if not self._resolved:
            self._value = self._compute()
            self._resolved = True
        return self._value  # type: ignore[return-value]

    def __repr__(self) -> str:
        state = repr(self._value) if self._resolved else "pending"
        return f"Deferred({state})"


FieldValue = Union[Literal, Deferred]
FieldInput = Union[str, Literal, Deferred]


def as_field(value: FieldInput) -> FieldValue:
    """Wrap plain strings as Literal values, pass field values through."""
    if isinstance(value, (Literal, Deferred)):
        return value
    if isinstance(value, str):
        return Literal(value)
    raise TypeError(f"Unsupported field value: {value!r}")


class Context(Mapping[str, str]):
    """Ordered mapping of field names to Literal or Deferred values.

    Reading a field (``context["title"]``) resolves it to a string.
    Membership tests and ``field()`` never force a deferred value.
    """

    __slots__ = ("_fields",)

    def __init__(
        self,
        fields: Mapping[str, FieldInput] | Iterable[tuple[str, FieldInput]] = (),
    ):
        if isinstance(fields, Context):
            items: Iterable[tuple[str, FieldInput]] = fields.fields()
        elif isinstance(fields, Mapping):
            items = fields.items()
        else:
            items = fields
        self._fields: dict[str, FieldValue] = {}
        for name, value in items:
            if not name:
                raise ValueError("Context field names must be non-empty")
            self._fields[name] = as_field(value)

    def __getitem__(self, name: str) -> str:
        return self._fields[name].resolve()

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __repr__(self) -> str:
        return f"Context({self._fields!r})"

    def field(self, name: str) -> FieldValue:
        """Return the raw field value without resolving it."""
        return self._fields[name]

    def fields(self) -> list[tuple[str, FieldValue]]:
        return list(self._fields.items())

    def with_field(self, name: str, value: FieldInput) -> Context:
        return self.merge([(name, value)])

    def without(self, name: str) -> Context:
        return Context([(key, value) for key, value in self._fields.items() if key != name])

    def merge(
        self,
        other: Mapping[str, FieldInput] | Iterable[tuple[str, FieldInput]],
    ) -> Context:
        """Return a new Context with ``other`` written over this one.

        Later writes win. A field that already exists keeps its position.
        """
        merged = Context()
        merged._fields = dict(self._fields)
        merged._fields.update(Context(other)._fields)
        return merged

    def resolve(self) -> dict[str, str]:
        """Force every field and return a plain dictionary."""
        return {name: value.resolve() for name, value in self._fields.items()}
