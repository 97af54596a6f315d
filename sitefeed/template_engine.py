"""
Template application using Jinja2.

Templates are looked up on a search path: the configured template
directories first, then the templates shipped with this package (the feed
templates live there). Undefined fields are errors unless the template uses
a fallback such as ``{{ timestamp | default("") }}``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateNotFound,
    TemplateSyntaxError,
    TemplatesNotFound,
    UndefinedError,
    select_autoescape,
)

from markupsafe import Markup

from .core.context import Context
from .errors import TemplateRenderError, TemplateResolutionError

PACKAGE_TEMPLATE_DIR = Path(__file__).parent / "templates"

logger = logging.getLogger(__name__)


class TemplateEngine:
    """Resolves template names and applies them to Contexts.

    Attributes:
        search_path: Directories searched in order for template files
        env: The underlying Jinja2 environment
    """

    def __init__(
        self,
        template_dirs: Sequence[str | Path] = (),
        absolute_url: str = "",
        include_package_templates: bool = True,
    ):
        dirs = [str(Path(d)) for d in template_dirs]
        if include_package_templates:
            dirs.append(str(PACKAGE_TEMPLATE_DIR))
        self.search_path = dirs
        self.env = Environment(
            loader=FileSystemLoader(dirs),
            autoescape=select_autoescape(["html"]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )
        self.absolute = absolute_url.rstrip("/")
        self.env.globals["absolute"] = self.absolute
        self.env.globals["absolute_url"] = self.absolute_url

    def absolute_url(self, url: str) -> str:
        """Join the site's absolute URL and a site-relative ``url``."""
        return self.absolute + "/" + url.lstrip("/")

    def resolve(self, name: str) -> str:
        """Return ``name`` if a template with that name exists on the search path."""
        self._load(name)
        return name

    def apply(self, template: str | Sequence[str], context: Context) -> str:
        """Render ``template`` with the fields of ``context``.

        ``template`` may be a list of candidate names; the first one found
        is used. The result is returned as ``Markup`` so that feeding it into
        another template does not escape it again.

        Raises:
            TemplateResolutionError: No candidate template exists
            TemplateRenderError: The template is invalid or uses an absent field
        """
        loaded = self._load(template)
        try:
            text = loaded.render(context.resolve())
        except UndefinedError as exc:
            raise TemplateRenderError(loaded.name or str(template), str(exc)) from exc
        logger.debug("template_applied", extra={"template": loaded.name})
        return Markup(text)

    def _load(self, template: str | Sequence[str]):
        try:
            if isinstance(template, str):
                return self.env.get_template(template)
            return self.env.select_template(list(template))
        except (TemplateNotFound, TemplatesNotFound) as exc:
            raise TemplateResolutionError(template, self.search_path) from exc
        except TemplateSyntaxError as exc:
            name = exc.name or (template if isinstance(template, str) else ", ".join(template))
            raise TemplateRenderError(name, f"line {exc.lineno}: {exc.message}") from exc
