"""Shared type aliases for the error handler."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from errorhandler.handler import ErrorHandler

type Matcher = Callable[[Exception], bool]
type Action = Callable[[Exception, ErrorHandler], None]

# Builds a matcher for one error code value ("timeout", 404, an enum member...)
type MatcherFactory[T] = Callable[[T], Matcher]
