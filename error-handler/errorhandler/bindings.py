"""Error code bindings: from an opaque code to a real matcher.

An error code is shorthand chosen by the caller (``'timeout'``, ``404``,
``DBError.READ_ONLY``). Binding associates it with a matcher factory, either
for one literal value or for every value of a type::

    handler.bind('timeout', lambda code: lambda exc: isinstance(exc, TimeoutError))
    handler.bind_class(int, lambda code: lambda exc: getattr(exc, 'status', None) == code)

Lookup order is exact value first, then the value's runtime type. Walking up
to parent handlers is the handler's job, see ``ErrorHandler.matcher_factory_for``.
"""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from typing import Any, Literal

from errorhandler.types import MatcherFactory

__all__ = [
    'BindingRegistry',
    'ErrorCodeIdentifier',
]


@dataclass(frozen=True, slots=True)
class ErrorCodeIdentifier:
    """Registry key: a literal code value or a code type.

    Value keys also carry the value's type so that codes which compare equal
    across types (``1 == True``) stay distinct. A value key and a type key for
    the same type never compare equal.

    When using custom objects as error codes, implement ``__eq__`` and
    ``__hash__`` (or use a frozen dataclass / frozen pydantic model).
    """

    kind: Literal['value', 'type']
    code_type: type
    value: Hashable = None

    @classmethod
    def of_value(cls, error_code: Hashable) -> ErrorCodeIdentifier:
        return cls('value', type(error_code), error_code)

    @classmethod
    def of_type(cls, code_type: type) -> ErrorCodeIdentifier:
        return cls('type', code_type)


class BindingRegistry:
    """Mapping from error code identifiers to matcher factories.

    Re-binding a key silently replaces the previous factory.
    """

    def __init__(self) -> None:
        self._factories: dict[ErrorCodeIdentifier, MatcherFactory[Any]] = {}

    def bind(self, error_code: Hashable, factory: MatcherFactory[Any]) -> bool:
        """Bind ``factory`` to one literal code. Returns True if a binding was replaced."""
        return self._put(ErrorCodeIdentifier.of_value(error_code), factory)

    def bind_class(self, code_type: type, factory: MatcherFactory[Any]) -> bool:
        """Bind ``factory`` to every code of ``code_type``. Returns True if a binding was replaced."""
        return self._put(ErrorCodeIdentifier.of_type(code_type), factory)

    def lookup(self, error_code: Hashable) -> MatcherFactory[Any] | None:
        """Find the factory for ``error_code`` in this registry only.

        The exact value wins over its type. The type lookup uses the exact
        runtime type (``type(error_code)``), not its base classes.
        """
        factory = self._factories.get(ErrorCodeIdentifier.of_value(error_code))
        if factory is not None:
            return factory
        return self._factories.get(ErrorCodeIdentifier.of_type(type(error_code)))

    def clear(self) -> None:
        self._factories.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._factories

    def __len__(self) -> int:
        return len(self._factories)

    def _put(self, key: ErrorCodeIdentifier, factory: MatcherFactory[Any]) -> bool:
        replaced = key in self._factories
        self._factories[key] = factory
        return replaced
