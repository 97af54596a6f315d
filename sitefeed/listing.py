"""
Listings: one synthetic page built from many renderables.

The listing's ``body`` is the concatenation of its members, each rendered
with an item template. Collection-level fields (title, description, ...) are
added after ``url`` and ``body`` and win on name collisions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Sequence

from .core.manipulation import ContextManipulation, identity
from .core.renderable import AdditionalValue, CustomPage, Renderable
from .render import TemplateRef, render_and_concat_with

if TYPE_CHECKING:
    from .site import Site


def create_listing_with(
    manipulation: ContextManipulation,
    url: str,
    templates: TemplateRef,
    renderables: Sequence[Renderable],
    additional: Iterable[tuple[str, AdditionalValue]] = (),
) -> Renderable:
    """Create a listing page.

    Args:
        manipulation: Applied to every member Context before its item template
        url: URL of the listing
        templates: Item template, or candidate templates where the first found wins
        renderables: Members, rendered in the given order
        additional: Extra fields; later entries override earlier ones

    Returns:
        A Renderable whose ``body`` is the rendered members
    """
    members = list(renderables)

    def body(site: Site) -> str:
        return render_and_concat_with(site, manipulation, templates, members)

    return CustomPage(url, [("body", body), *additional])


def create_listing(
    url: str,
    templates: TemplateRef,
    renderables: Sequence[Renderable],
    additional: Iterable[tuple[str, AdditionalValue]] = (),
) -> Renderable:
    return create_listing_with(identity, url, templates, renderables, additional)
