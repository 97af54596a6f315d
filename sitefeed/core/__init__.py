"""
Core rendering building blocks.

This package contains the pieces that do not know about feeds: Contexts,
ContextManipulations, Actions and Renderables.
"""

from .action import Action, chain_actions, create_action, create_manipulation_action
from .context import Context, Deferred, Fallback, FieldValue, Literal
from .manipulation import (
    ContextManipulation,
    chain,
    change_extension,
    change_url,
    change_value,
    compose,
    copy_value,
    identity,
    parse_date,
    render_date,
    render_value,
)
from .renderable import (
    CustomPage,
    DerivedRenderable,
    Page,
    Renderable,
    combine,
    combine_with_url,
    create_custom_page,
    create_page,
)

__all__ = [
    "Action",
    "chain_actions",
    "create_action",
    "create_manipulation_action",
    "Context",
    "Deferred",
    "Fallback",
    "FieldValue",
    "Literal",
    "ContextManipulation",
    "chain",
    "change_extension",
    "change_url",
    "change_value",
    "compose",
    "copy_value",
    "identity",
    "parse_date",
    "render_date",
    "render_value",
    "CustomPage",
    "DerivedRenderable",
    "Page",
    "Renderable",
    "combine",
    "combine_with_url",
    "create_custom_page",
    "create_page",
]
