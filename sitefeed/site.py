"""
Build context shared by every render call.

A Site bundles what the pipeline needs from the outside world: the template
engine, the output writer and a logger. It is passed explicitly to every
Renderable and Action.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .config import AppConfig
from .logging_utils import setup_logging
from .output import OutputWriter
from .template_engine import TemplateEngine


@dataclass
class Site:
    """Collaborators for one build.

    Attributes:
        templates: Template engine used to apply templates to Contexts
        writer: Output writer for finished documents
        logger: Logger for build events
    """

    templates: TemplateEngine
    writer: OutputWriter
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("sitefeed"))

    @classmethod
    def from_config(cls, cfg: AppConfig, logger: logging.Logger | None = None) -> Site:
        """Build a Site from configuration, setting up logging unless given a logger."""
        destination = Path(cfg.site.destination)
        if logger is None:
            logger = setup_logging(cfg.logging, destination)
        return cls(
            templates=TemplateEngine(cfg.site.template_dirs, absolute_url=cfg.site.absolute_url),
            writer=OutputWriter(destination),
            logger=logger,
        )
