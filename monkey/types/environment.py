"""Runtime environment for Monkey.

The Environment stores bindings of names to evaluated values and supports
nested scopes via an `outer` link. Function values share (never copy) the
environment they were defined in, and each call runs in a fresh frame whose
`outer` is that captured environment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from monkey.types.objects import MonkeyObject


class Environment:
    """Hierarchical mapping from names to Monkey values."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[str, MonkeyObject] = {}
        self.outer: Environment | None = outer

    def enclosed(self) -> Environment:
        """Return a new child frame whose outer scope is this environment."""
        return Environment(self)

    def define(self, name: str, value: MonkeyObject) -> MonkeyObject:
        """Bind `name` in this frame (shadowing any outer binding) and return `value`."""
        self.vars[name] = value
        return value

    def find(self, name: str) -> Optional[Environment]:
        """Find the nearest environment in the chain that binds `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.vars:
                return env
            env = env.outer
        return None

    def get(self, name: str, default: Optional[MonkeyObject] = None) -> Optional[MonkeyObject]:
        env = self.find(name)
        if env is None:
            return default
        return env.vars[name]

    def __contains__(self, name: str) -> bool:
        return self.find(name) is not None

    def depth(self) -> int:
        """Number of frames in the chain, this one included."""
        n, env = 0, self
        while env is not None:
            n, env = n + 1, env.outer
        return n

    def __repr__(self) -> str:
        names = ", ".join(self.vars)
        return f"Environment([{names}], depth={self.depth()})"
