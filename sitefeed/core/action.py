"""
Composable render steps.

An Action wraps a function ``(site, value) -> value``. Actions run strictly
in sequence: ``first >> second`` feeds the output of ``first`` into
``second``. The Site argument gives steps access to the template engine and
the rest of the build without global state.
"""

from __future__ import annotations

from functools import reduce
from typing import TYPE_CHECKING, Any, Callable, Iterable

from .context import Context
from .manipulation import ContextManipulation

if TYPE_CHECKING:
    from ..site import Site


class Action:
    """A deferred, possibly I/O-performing step in a render pipeline."""

    def __init__(self, run: Callable[[Site, Any], Any], name: str | None = None):
        self._run = run
        self.name = name or getattr(run, "__name__", "action")

    def run(self, site: Site, value: Any = None) -> Any:
        return self._run(site, value)

    def then(self, other: Action) -> Action:
        def sequenced(site: Site, value: Any) -> Any:
            return other.run(site, self.run(site, value))

        return Action(sequenced, name=f"{self.name} >> {other.name}")

    def __rshift__(self, other: Action) -> Action:
        return self.then(other)

    def __repr__(self) -> str:
        return f"Action({self.name})"


def create_action(fn: Callable[[Any], Any], name: str | None = None) -> Action:
    """Lift a one-argument function that does not need the Site."""
    return Action(lambda _site, value: fn(value), name=name or getattr(fn, "__name__", None))


def create_manipulation_action(manipulation: ContextManipulation) -> Action:
    def manipulate(_site: Site, context: Context) -> Context:
        return manipulation(context)

    return Action(manipulate, name=getattr(manipulation, "__name__", "manipulation"))


IDENTITY_ACTION = Action(lambda _site, value: value, name="identity")


def chain_actions(actions: Iterable[Action]) -> Action:
    """Sequence actions in order. An empty iterable gives the identity action."""
    return reduce(lambda acc, action: acc.then(action), actions, IDENTITY_ACTION)
