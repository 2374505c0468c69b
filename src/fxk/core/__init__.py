# Copyright (c) Goodcatch.
# Licensed under the MIT license.

"""
Core infrastructure components for the FXK SDK.

This module contains configuration, the HTTP client, the token cache and
token manager, result types and error handling.
"""

from .cache import MemoryTokenCache, TokenCache
from .config import FxkConfig
from .errors import (
    AuthenticationError,
    FxkError,
    HttpError,
    ServiceError,
    TransportError,
    ValidationError,
)
from .http import HttpClient
from .results import FxkResult, ResponseModel
from .token import CorpToken, TokenManager

__all__ = [
    "MemoryTokenCache",
    "TokenCache",
    "FxkConfig",
    "AuthenticationError",
    "FxkError",
    "HttpError",
    "ServiceError",
    "TransportError",
    "ValidationError",
    "HttpClient",
    "FxkResult",
    "ResponseModel",
    "CorpToken",
    "TokenManager",
]
