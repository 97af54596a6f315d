"""
Render pipeline: applying templates to renderables and writing the result.

``render`` turns one renderable into text. ``render_chain`` runs a
renderable through a sequence of extra steps and hands the final ``body``
to the output writer. A failure in any step propagates before anything is
written, so a chain either writes one complete document or nothing.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Sequence, Union

from markupsafe import Markup

from .core.action import Action, chain_actions
from .core.context import Context
from .core.manipulation import ContextManipulation, identity
from .core.renderable import Renderable
from .logging_utils import log_event

if TYPE_CHECKING:
    from .site import Site

TemplateRef = Union[str, Sequence[str]]
Step = Union[str, Action]


def render(site: Site, template: TemplateRef, renderable: Renderable) -> str:
    """Apply ``template`` to the Context of ``renderable`` and return the text."""
    return site.templates.apply(template, renderable.produce_context(site))


def render_action(template: TemplateRef) -> Action:
    """Action that replaces ``body`` with the text of ``template`` applied to the Context."""

    def apply_template(site: Site, context: Context) -> Context:
        return context.with_field("body", site.templates.apply(template, context))

    name = template if isinstance(template, str) else "|".join(template)
    return Action(apply_template, name=f"render({name})")


def render_and_concat_with(
    site: Site,
    manipulation: ContextManipulation,
    templates: TemplateRef,
    renderables: Sequence[Renderable],
) -> str:
    """Render every renderable with the first matching template and join the results.

    ``manipulation`` runs on each Context before its template. The input order
    is kept and no separator is added between fragments.
    """
    fragments = []
    for renderable in renderables:
        context = manipulation(renderable.produce_context(site))
        fragments.append(site.templates.apply(templates, context))
    return Markup("").join(fragments)


def render_and_concat(
    site: Site, templates: TemplateRef, renderables: Sequence[Renderable]
) -> str:
    return render_and_concat_with(site, identity, templates, renderables)


def render_chain(site: Site, steps: Sequence[Step], renderable: Renderable) -> Path:
    return render_chain_with(site, identity, steps, renderable)


def render_chain_with(
    site: Site,
    manipulation: ContextManipulation,
    steps: Sequence[Step],
    renderable: Renderable,
) -> Path:
    """Run ``renderable`` through ``steps`` and write the final body.

    Args:
        site: Build context
        manipulation: Applied to the renderable's Context before any step
        steps: Template names or Actions, run strictly in order; each sees the
            Context produced by the previous one
        renderable: Source of the initial Context and of the output URL

    Returns:
        Path of the written file
    """
    pipeline = chain_actions(
        step if isinstance(step, Action) else render_action(step) for step in steps
    )
    context = pipeline.run(site, manipulation(renderable.produce_context(site)))

    url = renderable.url or context.get("url")
    if not url:
        raise ValueError(f"No output URL for {renderable!r}")
    body = context.get("body", "")
    path = site.writer.write(url, body)
    log_event(site.logger, "output_written", url=url, path=str(path), chars=len(body))
    return path
