"""
Configuration management using YAML files and dataclasses.

Configuration sections:
- SiteConfig: destination directory, template directories, absolute URL
- LoggingConfig: logging behavior
- feed: the FeedConfiguration used by the CLI
- AppConfig: root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import yaml

from .feed import FeedConfiguration


@dataclass
class SiteConfig:
    """Configuration for the site being built.

    Attributes:
        destination: Directory where rendered files are written
        template_dirs: Directories searched for templates before the built-in ones
        absolute_url: Absolute URL of the site root, used to build feed links
    """

    destination: str = "_site"
    template_dirs: list[str] = field(default_factory=lambda: ["templates"])
    absolute_url: str = ""


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file, written inside the destination directory
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "sitefeed.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    site: SiteConfig = field(default_factory=SiteConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    feed: FeedConfiguration = field(default_factory=lambda: FeedConfiguration("rss.xml", "", "", ""))


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update({k: v for k, v in value.items() if k in data[key]})
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "site": {
            "destination": cfg.site.destination,
            "template_dirs": list(cfg.site.template_dirs),
            "absolute_url": cfg.site.absolute_url,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
        },
        "feed": {
            "url": cfg.feed.feed_url,
            "title": cfg.feed.feed_title,
            "description": cfg.feed.feed_description,
            "author_name": cfg.feed.feed_author_name,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    feed = data["feed"]
    return AppConfig(
        site=SiteConfig(**data["site"]),
        logging=LoggingConfig(**data["logging"]),
        feed=FeedConfiguration(
            feed_url=str(feed["url"]),
            feed_title=str(feed["title"]),
            feed_description=str(feed["description"]),
            feed_author_name=str(feed["author_name"]),
        ),
    )
