"""
sitefeed - render site content into templated text and RSS/Atom feeds.

Content items are Renderables that produce a Context (an ordered mapping of
fields). ContextManipulations transform Contexts, listings aggregate many
items into one page, and the render pipeline applies Jinja2 templates and
writes the result.

Example:
    >>> from sitefeed import FeedConfiguration, Site, create_page, render_rss
    >>> from sitefeed.config import load_config
    >>> site = Site.from_config(load_config("site.yaml"))
    >>> config = FeedConfiguration("rss.xml", "Blog", "Posts", "A. Writer")
    >>> render_rss(site, config, [create_page("posts/second.md"), create_page("posts/first.md")])
"""

__all__ = [
    "__version__",
    "Context",
    "Deferred",
    "Literal",
    "Renderable",
    "create_page",
    "create_custom_page",
    "create_listing",
    "create_listing_with",
    "FeedConfiguration",
    "render_rss",
    "render_rss_with",
    "render_atom",
    "render_atom_with",
    "render",
    "render_chain",
    "Site",
    "OutputPathError",
    "TemplateRenderError",
    "TemplateResolutionError",
]
__version__ = "0.1.0"

from .core.context import Context, Deferred, Literal
from .core.renderable import Renderable, create_custom_page, create_page
from .errors import OutputPathError, TemplateRenderError, TemplateResolutionError
from .feed import FeedConfiguration, render_atom, render_atom_with, render_rss, render_rss_with
from .listing import create_listing, create_listing_with
from .render import render, render_chain
from .site import Site
