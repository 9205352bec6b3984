"""Inclusive range of HTTP status codes, usable as an error code."""

from __future__ import annotations

from typing import Self

import pydantic

from errorhandler.config import StrictModel

__all__ = [
    'Range',
]


class Range(StrictModel):
    """Closed interval ``[lower_bound, upper_bound]``.

    Frozen, so two ranges with the same bounds are equal and hash alike,
    which is what error code bindings need.
    """

    lower_bound: int
    upper_bound: int

    @pydantic.model_validator(mode='after')
    def _check_bounds(self) -> Self:
        if self.lower_bound > self.upper_bound:
            raise ValueError(f'lower_bound {self.lower_bound} is greater than upper_bound {self.upper_bound}')
        return self

    @classmethod
    def of(cls, lower_bound: int, upper_bound: int) -> Range:
        return cls(lower_bound=lower_bound, upper_bound=upper_bound)

    def __contains__(self, status_code: object) -> bool:
        return isinstance(status_code, int) and self.lower_bound <= status_code <= self.upper_bound
