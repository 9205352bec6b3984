"""Handler configuration schema."""

from __future__ import annotations

import pydantic

__all__ = [
    'DEFAULT_HANDLER_NAME',
    'ErrorHandlerConfig',
    'StrictModel',
]

DEFAULT_HANDLER_NAME = 'default'


class StrictModel(pydantic.BaseModel):
    """Base model with strict validation.

    Config:
    - extra='forbid': Reject unknown fields (fail-fast)
    - strict=True: No implicit type coercion
    - frozen=True: Immutable after creation
    """

    model_config = pydantic.ConfigDict(
        extra='forbid',
        strict=True,
        frozen=True,
    )


class ErrorHandlerConfig(StrictModel):
    """Per-handler settings.

    Attributes:
        name: Prefix for log messages (``[name] ...``).
        log_unhandled: Log a warning when a top-level dispatch finds no action
            anywhere in the delegation chain.
    """

    name: str = 'errorhandler'
    log_unhandled: bool = False
