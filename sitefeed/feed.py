"""
RSS and Atom feeds.

The render functions assume the renderables are ordered so that the most
recent entry comes first; that entry supplies the feed's own timestamp.
Every item should have at least these fields for the feed to validate:

- ``title``: title of the item
- ``description``: description shown in the feed
- ``url``: URL of the item, usually set by the page itself

An empty item list still renders, but the resulting feed will not validate.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

from .core.action import create_manipulation_action
from .core.context import Fallback
from .core.manipulation import ContextManipulation, compose, identity, render_date
from .core.renderable import AdditionalValue, Renderable
from .listing import create_listing_with
from .logging_utils import log_event
from .render import render_action, render_chain

if TYPE_CHECKING:
    from .site import Site

RSS_TEMPLATE = "rss.xml"
RSS_ITEM_TEMPLATE = "rss-item.xml"
ATOM_TEMPLATE = "atom.xml"
ATOM_ITEM_TEMPLATE = "atom-item.xml"

RSS_DATE_FORMAT = "%a, %d %b %Y %H:%M:%S UT"
ATOM_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
NO_DATE = "No date found."
# TODO: confirm with the site owners whether "foo" can become a real sentinel.
MISSING_TIMESTAMP = "foo"


@dataclass(frozen=True)
class FeedConfiguration:
    """Configuration of a single feed.

    Attributes:
        feed_url: URL of the feed relative to the site root, e.g. ``rss.xml``
        feed_title: Title of the feed
        feed_description: Description of the feed
        feed_author_name: Name of the feed author
    """

    feed_url: str
    feed_title: str
    feed_description: str
    feed_author_name: str


render_rss_date = render_date("timestamp", RSS_DATE_FORMAT, NO_DATE)
render_atom_date = render_date("timestamp", ATOM_DATE_FORMAT, NO_DATE)


def create_feed_with(
    manipulation: ContextManipulation,
    configuration: FeedConfiguration,
    renderables: Sequence[Renderable],
    template: str,
    item_template: str,
) -> Renderable:
    """Build the feed renderable: a listing of the items followed by the feed template."""
    additional: list[tuple[str, AdditionalValue]] = [
        ("title", configuration.feed_title),
        ("description", configuration.feed_description),
        ("authorName", configuration.feed_author_name),
    ]

    # The first item is the most recent one.
    if renderables:
        latest = renderables[0]
        latest_action = create_manipulation_action(manipulation)

        def updated(site: Site) -> str:
            context = latest_action.run(site, latest.produce_context(site))
            # A date fallback means the item had no timestamp of its own.
            if "timestamp" not in context or isinstance(context.field("timestamp"), Fallback):
                return MISSING_TIMESTAMP
            return context["timestamp"]

        additional.append(("timestamp", updated))

    listing = create_listing_with(
        manipulation, configuration.feed_url, [item_template], renderables, additional
    )
    return listing >> render_action(template)


def render_feed_with(
    site: Site,
    manipulation: ContextManipulation,
    configuration: FeedConfiguration,
    renderables: Sequence[Renderable],
    template: str,
    item_template: str,
) -> Path:
    """Render any feed and write it to ``configuration.feed_url``."""
    template = site.templates.resolve(template)
    item_template = site.templates.resolve(item_template)
    items = list(renderables)
    if not items:
        site.logger.warning(
            "Feed %s has no items; the output will not validate", configuration.feed_url
        )
    feed = create_feed_with(manipulation, configuration, items, template, item_template)
    path = render_chain(site, [], feed)
    log_event(
        site.logger,
        "feed_rendered",
        url=configuration.feed_url,
        template=template,
        items=len(items),
    )
    return path


def render_rss(
    site: Site, configuration: FeedConfiguration, renderables: Sequence[Renderable]
) -> Path:
    """Render an RSS feed with a number of items."""
    return render_rss_with(site, identity, configuration, renderables)


def render_rss_with(
    site: Site,
    manipulation: ContextManipulation,
    configuration: FeedConfiguration,
    renderables: Sequence[Renderable],
) -> Path:
    """Render an RSS feed, applying ``manipulation`` to every item.

    ``manipulation`` runs before the RSS date formatting. The renderables
    should be sorted so the most recent one is first.
    """
    return render_feed_with(
        site,
        compose(manipulation, render_rss_date),
        configuration,
        renderables,
        RSS_TEMPLATE,
        RSS_ITEM_TEMPLATE,
    )


def render_atom(
    site: Site, configuration: FeedConfiguration, renderables: Sequence[Renderable]
) -> Path:
    return render_atom_with(site, identity, configuration, renderables)


def render_atom_with(
    site: Site,
    manipulation: ContextManipulation,
    configuration: FeedConfiguration,
    renderables: Sequence[Renderable],
) -> Path:
    """A version of :func:`render_atom` that applies ``manipulation`` to every item."""
    return render_feed_with(
        site,
        compose(manipulation, render_atom_date),
        configuration,
        renderables,
        ATOM_TEMPLATE,
        ATOM_ITEM_TEMPLATE,
    )
