"""Tests for ErrorHandlerConfig and handler logging."""

from __future__ import annotations

import logging

import pydantic
import pytest
from errorhandler import ErrorHandlerConfig, create_isolated

from tests.errorhandler.fake_errors import FooError

LOGGER_NAME = 'errorhandler.handler'


class TestErrorHandlerConfig:
    def test_defaults(self) -> None:
        config = ErrorHandlerConfig()
        assert config.name == 'errorhandler'
        assert config.log_unhandled is False

    def test_rejects_unknown_fields(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            ErrorHandlerConfig(verbose=True)  # type: ignore[call-arg]

    def test_strict_types(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            ErrorHandlerConfig(log_unhandled='yes')  # type: ignore[arg-type]


class TestLogging:
    def test_unhandled_logged_when_enabled(self, caplog: pytest.LogCaptureFixture) -> None:
        handler = create_isolated(config=ErrorHandlerConfig(name='checkout', log_unhandled=True))
        with caplog.at_level(logging.WARNING, logger=LOGGER_NAME):
            handler.handle(FooError('lost'))
        assert [r.getMessage() for r in caplog.records] == ['[checkout] Unhandled FooError: lost']

    def test_handled_not_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        handler = create_isolated(config=ErrorHandlerConfig(log_unhandled=True)).on(FooError, lambda e, h: None)
        with caplog.at_level(logging.WARNING, logger=LOGGER_NAME):
            handler.handle(FooError('found'))
        assert caplog.records == []

    def test_unhandled_silent_by_default(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
            create_isolated().handle(FooError('lost'))
        assert caplog.records == []

    def test_rebinding_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        handler = create_isolated(config=ErrorHandlerConfig(name='http'))
        with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
            handler.bind(404, lambda code: lambda e: False)
            handler.bind(404, lambda code: lambda e: True)
        assert [r.getMessage() for r in caplog.records] == ['[http] Rebound error code 404']

    def test_caught_error_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        def block() -> None:
            raise FooError('x')

        with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
            create_isolated(config=ErrorHandlerConfig(name='sync')).run(block)
        assert [r.getMessage() for r in caplog.records] == ['[sync] Caught FooError, dispatching']
