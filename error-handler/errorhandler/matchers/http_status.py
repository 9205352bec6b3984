"""Matcher factories for ``httpx.HTTPStatusError``.

Bind them to plain integers or ``Range`` values to refer to HTTP failures by
status instead of inspecting the response in every action::

    handler = (
        create_isolated()
        .bind_class(int, status_code_factory())
        .bind_class(Range, status_range_factory())
        .on(404, lambda exc, h: show_not_found())
        .on(Range.of(500, 599), lambda exc, h: show_server_error())
    )

    try:
        client.get(url).raise_for_status()
    except httpx.HTTPStatusError as exc:
        handler.handle(exc)
"""

from __future__ import annotations

import httpx

from errorhandler.matchers.range import Range
from errorhandler.types import Matcher, MatcherFactory

__all__ = [
    'status_code_factory',
    'status_range_factory',
]


def status_code_factory() -> MatcherFactory[int]:
    """Factory matching responses whose status equals the error code."""

    def build(status_code: int) -> Matcher:
        def matches(error: Exception) -> bool:
            return isinstance(error, httpx.HTTPStatusError) and error.response.status_code == status_code

        return matches

    return build


def status_range_factory() -> MatcherFactory[Range]:
    """Factory matching responses whose status lies in the error code range."""

    def build(status_range: Range) -> Matcher:
        def matches(error: Exception) -> bool:
            return isinstance(error, httpx.HTTPStatusError) and error.response.status_code in status_range

        return matches

    return build
