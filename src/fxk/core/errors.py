# Copyright (c) Goodcatch.
# Licensed under the MIT license.

"""
Structured exceptions for the FXK SDK.

Operations return their failures as data (see :mod:`fxk.core.results`). These
exceptions are raised only when a caller opts in through
:meth:`~fxk.core.results.ResponseModel.raise_for_error`, through
:meth:`~fxk.core.token.TokenManager.require_token`, or while loading
configuration.
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Dict, List, Optional


class FxkError(Exception):
    """Base structured error for the FXK SDK."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.subcode = subcode
        self.status_code = status_code
        self.details = details or {}
        self.source = source or "client"
        self.timestamp = _dt.datetime.now(_dt.timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "subcode": self.subcode,
            "status_code": self.status_code,
            "details": self.details,
            "source": self.source,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(code={self.code!r}, subcode={self.subcode!r}, message={self.message!r})"


class ValidationError(FxkError):
    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="validation_error", subcode=subcode, details=details, source="client")


class HttpError(FxkError):
    """Non-200 HTTP response from the platform."""

    def __init__(
        self,
        message: str,
        status_code: int,
        subcode: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message,
            code="http_error",
            subcode=subcode,
            status_code=status_code,
            details=details,
            source="server",
        )


class TransportError(FxkError):
    """The request did not produce a usable JSON response.

    ``diagnostics`` carries the serialized request (and response, when one was
    received) exactly as recorded on the failed result.
    """

    def __init__(
        self,
        message: str,
        *,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        diagnostics: Optional[List[str]] = None,
    ) -> None:
        self.diagnostics = list(diagnostics or [])
        super().__init__(
            message,
            code="transport_error",
            subcode=subcode,
            status_code=status_code,
            details={"diagnostics": self.diagnostics},
            source="client",
        )


class ServiceError(FxkError):
    """HTTP 200 response carrying a nonzero ``errorCode``."""

    def __init__(
        self,
        message: str,
        *,
        error_code: int,
        error_description: Optional[str] = None,
        subcode: Optional[str] = None,
    ) -> None:
        self.error_code = error_code
        self.error_description = error_description
        super().__init__(
            message,
            code="service_error",
            subcode=subcode,
            status_code=200,
            details={"error_code": error_code, "error_description": error_description},
            source="server",
        )


class AuthenticationError(FxkError):
    """The corp access token could not be obtained."""

    def __init__(
        self,
        message: str,
        *,
        subcode: Optional[str] = None,
        error_code: Optional[int] = None,
        diagnostics: Optional[List[str]] = None,
    ) -> None:
        self.error_code = error_code
        d: Dict[str, Any] = {}
        if error_code is not None:
            d["error_code"] = error_code
        if diagnostics:
            d["diagnostics"] = list(diagnostics)
        super().__init__(message, code="authentication_error", subcode=subcode, details=d, source="server")


__all__ = [
    "FxkError",
    "ValidationError",
    "HttpError",
    "TransportError",
    "ServiceError",
    "AuthenticationError",
]
