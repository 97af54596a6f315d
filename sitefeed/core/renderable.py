"""
Things that can produce a Context.

- Page: a leaf backed by a source document with an optional YAML header
- CustomPage: a synthetic page built from an ordered list of fields
- DerivedRenderable: another renderable followed by an Action

Renderables never mutate each other; aggregates only read their members.
A document body is markup and is not escaped again by HTML templates.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from functools import partial
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, Any, Callable, Iterable, Union

import yaml
from markupsafe import Markup

from .action import Action
from .context import Context, Deferred, FieldInput, FieldValue, Literal

if TYPE_CHECKING:
    from ..site import Site

AdditionalValue = Union[str, Literal, Deferred, Callable[["Site"], str]]

_HEADER_DELIMITER = "---"


class Renderable(ABC):
    """Anything that can yield a Context when asked.

    Attributes:
        url: Output location relative to the site root, if the item has one
    """

    url: str | None = None

    @abstractmethod
    def produce_context(self, site: Site) -> Context:
        """Return this item's Context, reading sources if needed."""
        raise NotImplementedError

    def then(self, action: Action) -> Renderable:
        return DerivedRenderable(self, action)

    def __rshift__(self, action: Action) -> Renderable:
        return self.then(action)


class Page(Renderable):
    """A content item read from a text file.

    The file may start with a YAML header between two ``---`` lines. Every
    header key becomes a field; the rest of the file is the ``body``.
    """

    def __init__(self, path: Path, url: str | None = None):
        self.path = Path(path)
        self.url = url or PurePosixPath(self.path.as_posix()).with_suffix(".html").as_posix()

    def produce_context(self, site: Site) -> Context:
        with self.path.open("r", encoding="utf-8") as handle:
            text = handle.read()
        metadata, body = split_header(text)
        fields: list[tuple[str, FieldInput]] = [
            ("path", self.path.as_posix()),
            ("url", self.url),
        ]
        fields.extend((str(key), _stringify(value)) for key, value in metadata.items())
        fields.append(("body", Markup(body)))
        return Context(fields)

    def __repr__(self) -> str:
        return f"Page({self.path.as_posix()!r})"


class CustomPage(Renderable):
    """A synthetic page: ``url`` followed by the given fields, in order.

    Field values may be strings, Literal/Deferred values, or callables taking
    the Site. Callables are bound lazily and only run when the field is read.
    """

    def __init__(self, url: str, fields: Iterable[tuple[str, AdditionalValue]] = ()):
        self.url = url
        self.fields = list(fields)

    def produce_context(self, site: Site) -> Context:
        bound: list[tuple[str, FieldInput]] = [("url", self.url)]
        bound.extend((name, _bind(value, site)) for name, value in self.fields)
        return Context(bound)

    def __repr__(self) -> str:
        return f"CustomPage({self.url!r})"


class DerivedRenderable(Renderable):
    """A renderable whose Context is run through an Action."""

    def __init__(self, source: Renderable, action: Action):
        self.source = source
        self.action = action
        self.url = source.url

    def produce_context(self, site: Site) -> Context:
        return self.action.run(site, self.source.produce_context(site))

    def __repr__(self) -> str:
        return f"DerivedRenderable({self.source!r} >> {self.action.name})"


class _Combined(Renderable):
    def __init__(self, first: Renderable, second: Renderable, url: str | None = None):
        self.first = first
        self.second = second
        self._url_override = url
        self.url = url or first.url

    def produce_context(self, site: Site) -> Context:
        first = self.first.produce_context(site)
        second = self.second.produce_context(site)
        body = Markup(first.get("body", "")) + Markup(second.get("body", ""))
        combined = second.merge(first).with_field("body", body)
        if self._url_override is not None:
            combined = combined.with_field("url", self._url_override)
        return combined


def create_page(path: str | Path, url: str | None = None) -> Page:
    return Page(Path(path), url=url)


def create_custom_page(url: str, fields: Iterable[tuple[str, AdditionalValue]] = ()) -> CustomPage:
    return CustomPage(url, fields)


def combine(first: Renderable, second: Renderable) -> Renderable:
    """Merge two renderables. Fields of ``first`` win; bodies are concatenated."""
    return _Combined(first, second)


def combine_with_url(url: str, first: Renderable, second: Renderable) -> Renderable:
    """Like :func:`combine`, but the result lives at ``url``."""
    return _Combined(first, second, url)


def split_header(text: str) -> tuple[dict[str, Any], str]:
    """Split a document into its YAML header and body.

    Documents without a leading ``---`` line have an empty header.
    """
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != _HEADER_DELIMITER:
        return {}, text
    for index in range(1, len(lines)):
        if lines[index].strip() == _HEADER_DELIMITER:
            header = yaml.safe_load("".join(lines[1:index])) or {}
            if not isinstance(header, dict):
                return {}, text
            return header, "".join(lines[index + 1 :]).lstrip("\n")
    return {}, text


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(_stringify(item) for item in value)
    return str(value)


def _bind(value: AdditionalValue, site: Site) -> FieldValue:
    if isinstance(value, (Literal, Deferred)):
        return value
    if isinstance(value, str):
        return Literal(value)
    if callable(value):
        return Deferred(partial(value, site))
    raise TypeError(f"Unsupported field value: {value!r}")
