"""Entries of the ordered action table."""

from __future__ import annotations

from dataclasses import dataclass

from errorhandler.types import Action, Matcher

__all__ = [
    'ActionEntry',
    'TypeMatcher',
]


@dataclass(frozen=True, slots=True)
class TypeMatcher:
    """Match errors that are instances of ``error_type`` (subclasses included)."""

    error_type: type[BaseException]

    def __call__(self, error: Exception) -> bool:
        return isinstance(error, self.error_type)


@dataclass(frozen=True, slots=True)
class ActionEntry:
    """A (matcher, action) pair. Duplicates are allowed and both fire."""

    matcher: Matcher
    action: Action
