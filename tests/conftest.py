from __future__ import annotations

import logging
from pathlib import Path

import pytest

from sitefeed.output import OutputWriter
from sitefeed.site import Site
from sitefeed.template_engine import TemplateEngine


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    path = tmp_path / "templates"
    path.mkdir()
    return path


@pytest.fixture
def site(tmp_path: Path, template_dir: Path) -> Site:
    return Site(
        templates=TemplateEngine([template_dir], absolute_url="https://example.com/"),
        writer=OutputWriter(tmp_path / "_site"),
        logger=logging.getLogger("sitefeed.tests"),
    )


@pytest.fixture
def write_template(template_dir: Path):
    def _write(name: str, text: str) -> Path:
        path = template_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
