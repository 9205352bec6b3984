"""Declarative error handling: ordered matcher/action dispatch with delegation."""

from __future__ import annotations

from errorhandler.actions import ActionEntry, TypeMatcher
from errorhandler.bindings import BindingRegistry, ErrorCodeIdentifier
from errorhandler.config import ErrorHandlerConfig
from errorhandler.context import InvocationContext
from errorhandler.exceptions import UnknownErrorCodeError
from errorhandler.handler import ErrorHandler, create, create_isolated, default_error_handler
from errorhandler.types import Action, Matcher, MatcherFactory

__all__ = [
    'Action',
    'ActionEntry',
    'BindingRegistry',
    'ErrorCodeIdentifier',
    'ErrorHandler',
    'ErrorHandlerConfig',
    'InvocationContext',
    'Matcher',
    'MatcherFactory',
    'TypeMatcher',
    'UnknownErrorCodeError',
    'create',
    'create_isolated',
    'default_error_handler',
]
