"""Per-dispatch mutable state shared across a delegation chain."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

__all__ = [
    'InvocationContext',
]


@dataclass
class InvocationContext:
    """State of one dispatch pass.

    The same instance travels from a handler to each of its ancestors, so a
    suppression flag set by an action anywhere in the chain is seen by every
    handler that runs after it.

    Attributes:
        handled: Set once any action (``on``, ``otherwise`` or ``always``) ran.
        skip_following: Stop evaluating the remaining ``on`` entries.
        skip_always: Do not run ``always`` actions.
        skip_defaults: Do not delegate to the parent handler.
    """

    handled: bool = False
    skip_following: bool = False
    skip_always: bool = False
    skip_defaults: bool = False
    _slots: dict[str, Any] = field(default_factory=dict, repr=False)

    # -- Auxiliary slots --

    def get(self, key: str, default: Any = None) -> Any:
        return self._slots.get(key, default)

    def put(self, key: str, value: Any) -> Any:
        """Store ``value`` under ``key``, returning the previous value (or None)."""
        previous = self._slots.get(key)
        self._slots[key] = value
        return previous

    def remove(self, key: str) -> Any:
        return self._slots.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._slots

    def clear(self) -> None:
        """Reset every flag and drop the auxiliary slots."""
        self._slots.clear()
        self.handled = False
        self.skip_following = False
        self.skip_always = False
        self.skip_defaults = False
