"""Core domain types and logic."""

from .config import Config, ConfigError, load_config
from .errors import ErrorCode
from .promise import (
    AlreadyResolvedError,
    Chainable,
    Finishable,
    Promise,
    PromiseError,
    PromiseState,
    Settlement,
    defer_promise,
)
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # config
    "Config",
    "ConfigError",
    "load_config",
    # errors
    "ErrorCode",
    # promise
    "AlreadyResolvedError",
    "Chainable",
    "Finishable",
    "Promise",
    "PromiseError",
    "PromiseState",
    "Settlement",
    "defer_promise",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]
