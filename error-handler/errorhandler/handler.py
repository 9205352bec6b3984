"""Declarative error handling with ordered, type- and code-based dispatch.

An ErrorHandler runs every action whose matcher accepts a caught error, in
registration order, then its ``otherwise`` actions (only if nothing matched so
far), then its ``always`` actions, then delegates to its parent handler.

Handlers come in two flavours:

    Isolated -- ``create_isolated()``:
        No parent. Handles everything by itself.

    Delegating -- ``create()``:
        Parent is the process-wide default handler (``default_error_handler()``).
        Default actions run after the ones registered on the child.

Patterns:

    Matching by exception type, by predicate and by error code::

        default_error_handler().bind_class(
            int, lambda code: lambda exc: isinstance(exc, HTTPError) and exc.status == code
        )

        handler = (
            create()
            .on(ValueError, lambda exc, h: show_invalid_input(exc))
            .on(lambda exc: 'quota' in str(exc), lambda exc, h: show_quota_warning())
            .on(404, lambda exc, h: show_not_found())
            .otherwise(lambda exc, h: show_generic_error(exc))
            .always(lambda exc, h: report(exc))
        )
        handler.handle(error)

    Decorator registration::

        @handler.on(ConnectionError)
        def offline(exc: Exception, handler: ErrorHandler) -> None:
            handler.skip_defaults()
            show_offline_screen()

    Scoped execution -- ``run()``, ``with handler:`` or ``@handler``::

        handler.run(lambda: sync_account())

        with handler:
            sync_account()

Actions steer the rest of the current dispatch pass through the handler they
receive: ``skip_following()``, ``skip_always()`` and ``skip_defaults()``. The
flags live on an InvocationContext that is shared with every ancestor in the
delegation chain and is private to the calling thread.

Registration is not thread-safe. Configure a handler fully, then dispatch
through it from as many threads as needed.
"""

from __future__ import annotations

import asyncio
import functools
import logging
import threading
from collections.abc import Callable, Hashable
from types import TracebackType
from typing import Any, Self, TypeVar, cast, overload

from errorhandler.actions import ActionEntry, TypeMatcher
from errorhandler.bindings import BindingRegistry
from errorhandler.config import DEFAULT_HANDLER_NAME, ErrorHandlerConfig
from errorhandler.context import InvocationContext
from errorhandler.exceptions import UnknownErrorCodeError
from errorhandler.types import Action, Matcher, MatcherFactory

__all__ = [
    'ErrorHandler',
    'create',
    'create_isolated',
    'default_error_handler',
]

logger = logging.getLogger(__name__)

_F = TypeVar('_F', bound=Callable[..., object])
_T = TypeVar('_T')
_ActionT = TypeVar('_ActionT', bound=Callable[..., None])


class ErrorHandler:
    """Run the actions whose matchers accept an error.

    Args:
        parent: Handler to delegate to after this one. Fixed for the
            lifetime of the handler.
        config: Logging settings. Defaults to ``ErrorHandlerConfig()``.
    """

    def __init__(
        self,
        parent: ErrorHandler | None = None,
        *,
        config: ErrorHandlerConfig | None = None,
    ) -> None:
        self._parent = parent
        self._config = config or ErrorHandlerConfig()
        self._actions: list[ActionEntry] = []
        self._otherwise_actions: list[Action] = []
        self._always_actions: list[Action] = []
        self._bindings = BindingRegistry()
        self._local = threading.local()

    @property
    def parent(self) -> ErrorHandler | None:
        return self._parent

    @property
    def config(self) -> ErrorHandlerConfig:
        return self._config

    @property
    def context(self) -> InvocationContext:
        """Context of the current dispatch pass on this thread.

        Outside a pass, the context the next top-level dispatch will start from.
        """
        context: InvocationContext | None = getattr(self._local, 'context', None)
        if context is None:
            context = self._local.context = InvocationContext()
        return context

    # -- Registration --

    @overload
    def on(self, condition: Matcher | type[BaseException] | Hashable, action: Action) -> Self: ...

    @overload
    def on(
        self, condition: Matcher | type[BaseException] | Hashable, action: None = None
    ) -> Callable[[_ActionT], _ActionT]: ...

    def on(
        self,
        condition: Matcher | type[BaseException] | Hashable,
        action: Action | None = None,
    ) -> Self | Callable[[_ActionT], _ActionT]:
        """Register ``action`` for errors accepted by ``condition``.

        ``condition`` is one of:

        - an exception class: matches instances, subclasses included;
        - a matcher, any non-class callable taking the error and returning bool;
        - an error code: resolved through ``bind``/``bind_class`` bindings on
          this handler or its ancestors.

        Without ``action``, returns a decorator that registers the decorated
        function and returns it unchanged.

        Raises:
            UnknownErrorCodeError: ``condition`` is an error code with no
                binding. Nothing is registered.
        """
        matcher = self._matcher_for(condition)
        if action is None:

            def register(func: _ActionT) -> _ActionT:
                self._actions.append(ActionEntry(matcher, cast(Action, func)))
                return func

            return register

        self._actions.append(ActionEntry(matcher, action))
        return self

    def otherwise(self, action: Action) -> Self:
        """Register ``action`` to run when no ``on`` action ran."""
        self._otherwise_actions.append(action)
        return self

    def always(self, action: Action) -> Self:
        """Register ``action`` to run on every error, unless skipped."""
        self._always_actions.append(action)
        return self

    def bind[T: Hashable](self, error_code: T, factory: MatcherFactory[T]) -> Self:
        """Bind one error code value to a matcher factory.

        Example::

            handler.bind('timeout', lambda code: lambda exc: isinstance(exc, TimeoutError))
            handler.on('timeout', lambda exc, h: show_offline_screen())
        """
        if self._bindings.bind(error_code, factory):
            logger.debug(f'[{self._config.name}] Rebound error code {error_code!r}')
        return self

    def bind_class[T](self, code_type: type[T], factory: MatcherFactory[T]) -> Self:
        """Bind every error code of ``code_type`` to a matcher factory.

        Example::

            handler.bind_class(int, lambda code: lambda exc: getattr(exc, 'status', None) == code)
            handler.on(404, lambda exc, h: show_not_found())
        """
        if self._bindings.bind_class(code_type, factory):
            logger.debug(f'[{self._config.name}] Rebound error code type {code_type.__name__}')
        return self

    def matcher_factory_for[T: Hashable](self, error_code: T) -> MatcherFactory[T] | None:
        """Resolve the factory for ``error_code``.

        Per handler, an exact value binding wins over a type binding. Handlers
        are searched from this one up through its ancestors; the first hit wins.
        """
        handler: ErrorHandler | None = self
        while handler is not None:
            factory = handler._bindings.lookup(error_code)
            if factory is not None:
                return factory
            handler = handler._parent
        return None

    def clear(self) -> None:
        """Drop all actions and bindings and reset this thread's context. The parent is untouched."""
        self._actions.clear()
        self._otherwise_actions.clear()
        self._always_actions.clear()
        self._bindings.clear()
        self.context.clear()

    # -- Dispatch control --

    def skip_following(self) -> Self:
        """Skip the remaining ``on`` actions of the current pass."""
        self.context.skip_following = True
        return self

    def skip_always(self) -> Self:
        """Skip the ``always`` actions of the current pass."""
        self.context.skip_always = True
        return self

    def skip_defaults(self) -> Self:
        """Do not delegate the current pass to parent handlers."""
        self.context.skip_defaults = True
        return self

    # -- Dispatch --

    def handle(self, error: Exception, context: InvocationContext | None = None) -> bool:
        """Run every action that applies to ``error``.

        Without ``context``, the pass starts from this thread's context (with
        any flags armed beforehand) and the context is reset afterwards. A
        re-entrant call from inside one of this handler's actions gets a fresh
        context instead. Pass ``context`` explicitly to share state across calls.

        Exceptions raised by matchers or actions propagate and abort the pass.

        Returns:
            Whether any action ran, anywhere in the delegation chain.
        """
        top_level = context is None
        if context is None:
            context = InvocationContext() if self._dispatching else self.context
        try:
            self._dispatch(error, context)
            handled = context.handled
        finally:
            if top_level:
                context.clear()

        if top_level and not handled and self._config.log_unhandled:
            logger.warning(f'[{self._config.name}] Unhandled {type(error).__name__}: {error}', exc_info=error)
        return handled

    def run(self, block: Callable[[], _T]) -> _T | None:
        """Call ``block``, dispatching any ``Exception`` it raises.

        The error is not re-raised. Returns the block's result, or None if it raised.
        """
        try:
            return block()
        except Exception as exc:
            self._handle_caught(exc)
            return None

    @property
    def _dispatching(self) -> bool:
        return getattr(self._local, 'depth', 0) > 0

    def _dispatch(self, error: Exception, context: InvocationContext) -> None:
        local = self._local
        previous = getattr(local, 'context', None)
        local.context = context
        local.depth = getattr(local, 'depth', 0) + 1
        try:
            for entry in self._actions:
                if context.skip_following:
                    break
                if entry.matcher(error):
                    entry.action(error, self)
                    context.handled = True

            if not context.handled:
                for action in self._otherwise_actions:
                    action(error, self)
                    context.handled = True

            if not context.skip_always:
                for action in self._always_actions:
                    action(error, self)
                    context.handled = True

            if not context.skip_defaults and self._parent is not None:
                self._parent._dispatch(error, context)
        finally:
            local.depth -= 1
            local.context = previous

    def _handle_caught(self, exc: Exception) -> None:
        logger.debug(f'[{self._config.name}] Caught {type(exc).__name__}, dispatching')
        self.handle(exc)

    def _matcher_for(self, condition: Matcher | type[BaseException] | Hashable) -> Matcher:
        if isinstance(condition, type):
            if issubclass(condition, BaseException):
                return TypeMatcher(condition)
        elif callable(condition):
            return cast(Matcher, condition)

        factory = self.matcher_factory_for(condition)
        if factory is None:
            raise UnknownErrorCodeError(condition)
        return factory(condition)

    # -- Decorator protocol --

    def __call__(self, func: _F) -> _F:
        """Decorate a function so exceptions it raises are dispatched here.

        Auto-detects sync vs async. The wrapper returns None when the function raised.
        """
        if asyncio.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                async with self:
                    return await func(*args, **kwargs)

            return cast(_F, async_wrapper)

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with self:
                return func(*args, **kwargs)

        return cast(_F, sync_wrapper)

    # -- Sync context manager --

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool:
        if not isinstance(exc_value, Exception):
            return False  # No exception, or system exception -- pass through
        self._handle_caught(exc_value)
        return True

    # -- Async context manager --

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool:
        return self.__exit__(exc_type, exc_value, exc_tb)


_default_instance: ErrorHandler | None = None
_default_lock = threading.Lock()


def default_error_handler() -> ErrorHandler:
    """The process-wide handler that ``create()`` handlers delegate to.

    Created on first access and never torn down. Tests sharing it should
    ``clear()`` it between cases.
    """
    global _default_instance
    if _default_instance is None:
        with _default_lock:
            if _default_instance is None:
                _default_instance = ErrorHandler(config=ErrorHandlerConfig(name=DEFAULT_HANDLER_NAME))
    return _default_instance


def create(*, config: ErrorHandlerConfig | None = None) -> ErrorHandler:
    """Create a handler that delegates to the default one."""
    return ErrorHandler(default_error_handler(), config=config)


def create_isolated(*, config: ErrorHandlerConfig | None = None) -> ErrorHandler:
    """Create a handler with no parent."""
    return ErrorHandler(config=config)
