"""Exceptions raised by the rendering pipeline.

Missing optional fields are never errors: manipulations substitute their
documented fallback values instead. Only template problems abort a render.
"""

from __future__ import annotations

from typing import Sequence


class SiteFeedError(Exception):
    """Base class for all sitefeed errors."""


class TemplateResolutionError(SiteFeedError):
    """Raised when a named template cannot be located.

    Attributes:
        template: The template name (or candidate names) that failed to resolve
        search_path: Directories that were searched
    """

    def __init__(self, template: str | Sequence[str], search_path: Sequence[str] = ()):
        self.template = template
        self.search_path = list(search_path)
        names = template if isinstance(template, str) else ", ".join(template)
        message = f"Template not found: {names}"
        if self.search_path:
            message += f" (searched: {', '.join(self.search_path)})"
        super().__init__(message)


class TemplateRenderError(SiteFeedError):
    """Raised when a template fails to parse or references an absent field.

    Attributes:
        template: Name of the template being applied
        message: Error description from the template engine
    """

    def __init__(self, template: str, message: str):
        self.template = template
        self.message = message
        super().__init__(f"Failed to render template {template}: {message}")


class OutputPathError(SiteFeedError):
    """Raised when an output URL would resolve outside the destination directory.

    Attributes:
        url: The rejected URL
        destination: The destination directory
    """

    def __init__(self, url: str, destination: str):
        self.url = url
        self.destination = destination
        super().__init__(f"Output URL {url} escapes destination {destination}")
