"""Exceptions raised by the error handler itself."""

from __future__ import annotations

from typing import Any

__all__ = [
    'UnknownErrorCodeError',
]


class UnknownErrorCodeError(LookupError):
    """No matcher factory is bound to an error code passed to ``on()``.

    Raised at registration time. The offending code is kept on ``error_code``.
    """

    def __init__(self, error_code: Any) -> None:
        self.error_code = error_code
        super().__init__(f'No matcher factory bound for error code {error_code!r}')
