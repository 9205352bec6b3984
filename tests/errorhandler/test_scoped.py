"""Tests for scoped execution: run(), context managers and the decorator."""

from __future__ import annotations

import asyncio

import pytest
from errorhandler import ErrorHandler, create_isolated

from tests.errorhandler.fake_errors import DBError, DBErrorException, FooError, db_error_factory, record


@pytest.fixture
def calls() -> list[str]:
    return []


@pytest.fixture
def handler(calls: list[str]) -> ErrorHandler:
    def action1(error: Exception, handler: ErrorHandler) -> None:
        calls.append('action1')
        handler.skip_always()

    return (
        create_isolated()
        .bind_class(DBError, db_error_factory)
        .on(DBError.READ_ONLY, action1)
        .always(record(calls, 'always1'))
    )


def _fail(message: str) -> None:
    raise DBErrorException(message)


class TestRun:
    """Verify run() dispatches and swallows errors raised by the block."""

    def test_dispatches_raised_error(self, handler: ErrorHandler, calls: list[str]) -> None:
        assert handler.run(lambda: _fail('read-only')) is None
        assert calls == ['action1']

    def test_unmatched_error_is_swallowed(self, handler: ErrorHandler, calls: list[str]) -> None:
        handler.run(lambda: _fail('read'))
        assert calls == ['always1']

    def test_no_error_no_dispatch(self, handler: ErrorHandler, calls: list[str]) -> None:
        assert handler.run(lambda: 42) == 42
        assert calls == []

    @pytest.mark.parametrize('exception', [KeyboardInterrupt, SystemExit])
    def test_system_exception_passes_through(
        self, handler: ErrorHandler, calls: list[str], exception: type[BaseException]
    ) -> None:
        def block() -> None:
            raise exception

        with pytest.raises(exception):
            handler.run(block)
        assert calls == []


class TestContextManager:
    """Verify ``with handler:`` behaves like run()."""

    def test_dispatches_and_suppresses(self, handler: ErrorHandler, calls: list[str]) -> None:
        with handler:
            _fail('read-only')
        assert calls == ['action1']

    def test_no_exception(self, handler: ErrorHandler, calls: list[str]) -> None:
        with handler:
            result = 1 + 1
        assert result == 2
        assert calls == []

    def test_system_exception_passes_through(self, handler: ErrorHandler, calls: list[str]) -> None:
        with pytest.raises(KeyboardInterrupt), handler:
            raise KeyboardInterrupt
        assert calls == []


class TestAsyncContextManager:
    """Verify async context manager behaves identically to sync."""

    async def test_dispatches_and_suppresses(self, handler: ErrorHandler, calls: list[str]) -> None:
        async with handler:
            _fail('read-only')
        assert calls == ['action1']

    async def test_cancelled_error_passes_through(self, handler: ErrorHandler, calls: list[str]) -> None:
        with pytest.raises(asyncio.CancelledError):
            async with handler:
                raise asyncio.CancelledError
        assert calls == []


class TestDecorator:
    """Verify decorator mode for sync and async functions."""

    def test_sync_dispatches(self, handler: ErrorHandler, calls: list[str]) -> None:
        @handler
        def sync_account() -> str:
            _fail('read-only')
            return 'synced'

        assert sync_account() is None
        assert calls == ['action1']

    def test_sync_returns_value(self, handler: ErrorHandler) -> None:
        @handler
        def add(a: int, b: int) -> int:
            return a + b

        assert add(2, 3) == 5

    def test_preserves_metadata(self, handler: ErrorHandler) -> None:
        @handler
        def my_func() -> None:
            """My docstring."""

        assert my_func.__name__ == 'my_func'
        assert my_func.__doc__ == 'My docstring.'

    async def test_async_dispatches(self, handler: ErrorHandler, calls: list[str]) -> None:
        @handler
        async def fetch() -> None:
            await asyncio.sleep(0)
            raise FooError('unmatched')

        assert asyncio.iscoroutinefunction(fetch)
        assert await fetch() is None
        assert calls == ['always1']

    async def test_async_returns_value(self, handler: ErrorHandler) -> None:
        @handler
        async def add(a: int, b: int) -> int:
            return a + b

        assert await add(1, 2) == 3
