"""Ready-made matcher factories for common error sources."""

from __future__ import annotations

from errorhandler.matchers.http_status import status_code_factory, status_range_factory
from errorhandler.matchers.range import Range

__all__ = [
    'Range',
    'status_code_factory',
    'status_range_factory',
]
