"""
Reusable Context transformations.

A ContextManipulation is a plain function from Context to Context. They
compose left to right: ``compose(f, g)`` runs ``f`` and hands its result to
``g``, so ``g`` sees every field ``f`` wrote. None of the manipulations here
raise for a missing field; they either leave the Context unchanged or write a
documented fallback.
"""

from __future__ import annotations

from datetime import datetime, timezone
from functools import reduce
from pathlib import PurePosixPath
from typing import Callable, Iterable

from .context import Context, Deferred, Fallback, Literal

ContextManipulation = Callable[[Context], Context]


def identity(context: Context) -> Context:
    return context


def compose(*manipulations: ContextManipulation) -> ContextManipulation:
    """Compose manipulations so that the first one runs first."""
    return chain(manipulations)


def chain(manipulations: Iterable[ContextManipulation]) -> ContextManipulation:
    """Fold an ordered sequence of manipulations into one.

    An empty sequence yields :func:`identity`.
    """
    steps = [m for m in manipulations if m is not identity]
    if not steps:
        return identity
    if len(steps) == 1:
        return steps[0]

    def chained(context: Context) -> Context:
        return reduce(lambda acc, step: step(acc), steps, context)

    return chained


def render_value(
    source: str, destination: str, fn: Callable[[str], str]
) -> ContextManipulation:
    """Write ``fn(context[source])`` to ``destination``.

    Deferred sources stay deferred. A missing source leaves the Context as is.
    """

    def manipulation(context: Context) -> Context:
        if source not in context:
            return context
        value = context.field(source)
        if isinstance(value, Literal):
            return context.with_field(destination, Literal(fn(value.value)))
        return context.with_field(destination, Deferred(lambda: fn(value.resolve())))

    return manipulation


def change_value(key: str, fn: Callable[[str], str]) -> ContextManipulation:
    return render_value(key, key, fn)


def copy_value(source: str, destination: str) -> ContextManipulation:
    return render_value(source, destination, str)


def change_url(fn: Callable[[str], str]) -> ContextManipulation:
    return change_value("url", fn)


def change_extension(extension: str) -> ContextManipulation:
    """Replace the extension of the ``url`` field, e.g. ``.html`` to ``.xml``."""
    suffix = extension if extension.startswith(".") else f".{extension}"

    def _swap(url: str) -> str:
        path = PurePosixPath(url)
        if not path.name:
            return url
        return str(path.with_suffix(suffix))

    return change_url(_swap)


def parse_date(value: str) -> datetime | None:
    """Parse a date value into an aware UTC datetime.

    Accepts ISO 8601 dates and date-times (``Z`` suffix allowed) and values
    that start with ``YYYY-MM-DD``, such as ``2020-02-02-first-post``.
    Returns None when nothing usable is found.
    """
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        try:
            parsed = datetime.strptime(text[:10], "%Y-%m-%d")
        except ValueError:
            return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def render_date(
    key: str,
    date_format: str,
    default_value: str,
    source: str | None = None,
) -> ContextManipulation:
    """Format the date held in ``source`` (defaults to ``key``) into ``key``.

    Args:
        key: Field that receives the formatted date
        date_format: strftime format string
        default_value: Written when the source field is absent (as a Fallback)
            or unparseable
        source: Field holding the raw date

    Returns:
        A ContextManipulation
    """
    source_key = source or key

    def _format(raw: str) -> str:
        parsed = parse_date(raw)
        if parsed is None:
            return default_value
        return parsed.strftime(date_format)

    formatter = render_value(source_key, key, _format)

    def manipulation(context: Context) -> Context:
        if source_key not in context:
            return context.with_field(key, Fallback(default_value))
        return formatter(context)

    return manipulation
