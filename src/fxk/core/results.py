# Copyright (c) Goodcatch.
# Licensed under the MIT license.

"""
Result types for FXK SDK operations.

Every operation returns its outcome as data instead of raising:

- :class:`ResponseModel`: the raw parsed response of one API call, or the
  diagnostics of a failed call.
- :class:`FxkResult`: the public shape of list operations, with the named
  collection extracted into ``data``.

Exactly one of two states holds for a result. Either ``exception`` is
populated (transport failure: connection error, timeout, non-200 status or a
body that is not a JSON object) and ``error_code`` is ``None``, or
``exception`` is ``None`` and ``error_code`` carries the server's verdict.

Callers that prefer exceptions use :meth:`~_ErrorFields.raise_for_error`::

    users = client.get_users(5, True).raise_for_error().data
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TypeVar

from ._error_codes import SERVICE_BUSINESS_ERROR, http_subcode
from .errors import HttpError, ServiceError, TransportError

ERROR_CODE = "errorCode"
ERROR_MESSAGE = "errorMessage"
ERROR_DESCRIPTION = "errorDescription"

_R = TypeVar("_R", bound="_ErrorFields")


@dataclass(frozen=True)
class _ErrorFields:
    error_code: Optional[int] = None
    error_message: Optional[str] = None
    error_description: Optional[str] = None
    exception: Optional[List[str]] = None
    status_code: Optional[int] = None
    subcode: Optional[str] = None

    @property
    def is_transport_failure(self) -> bool:
        """True when the call never produced a usable JSON response."""
        return self.exception is not None

    @property
    def ok(self) -> bool:
        """True when the server answered with ``errorCode == 0``."""
        return self.exception is None and self.error_code == 0

    def raise_for_error(self: _R) -> _R:
        """
        Return ``self`` on success, raise otherwise.

        :raises HttpError: If the server answered with a non-200 status.
        :raises TransportError: On connection failures, timeouts or unparseable bodies.
        :raises ServiceError: If the server answered 200 with a nonzero ``errorCode``.
        """
        if self.exception is not None:
            message = self.exception[0] if self.exception else "Request failed"
            if self.status_code is not None and self.status_code != 200:
                raise HttpError(
                    f"HTTP {self.status_code} from FXK",
                    status_code=self.status_code,
                    subcode=http_subcode(self.status_code),
                    details={"diagnostics": list(self.exception)},
                )
            raise TransportError(
                message,
                subcode=self.subcode,
                status_code=self.status_code,
                diagnostics=self.exception,
            )
        if self.error_code != 0:
            raise ServiceError(
                self.error_message or f"FXK error {self.error_code}",
                error_code=self.error_code if self.error_code is not None else -1,
                error_description=self.error_description,
                subcode=SERVICE_BUSINESS_ERROR,
            )
        return self


@dataclass(frozen=True)
class ResponseModel(_ErrorFields):
    """
    Raw outcome of a single API call.

    :param payload: Every field of the parsed JSON object, including the error
        fields. Empty on transport failure.
    :type payload: dict

    Example::

        model = client.get_user("FSUID_1")
        if model.ok:
            print(model.payload["name"])
    """

    payload: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.payload.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.payload[key]

    def __contains__(self, key: object) -> bool:
        return key in self.payload

    @classmethod
    def from_payload(cls, payload: Dict[str, Any], status_code: Optional[int] = 200) -> "ResponseModel":
        """Build a model from a parsed JSON object."""
        return cls(
            error_code=_as_int(payload.get(ERROR_CODE)),
            error_message=payload.get(ERROR_MESSAGE),
            error_description=payload.get(ERROR_DESCRIPTION),
            status_code=status_code,
            payload=dict(payload),
        )

    @classmethod
    def failure(
        cls,
        diagnostics: List[str],
        *,
        status_code: Optional[int] = None,
        subcode: Optional[str] = None,
    ) -> "ResponseModel":
        """Build a model describing a transport failure."""
        return cls(exception=list(diagnostics), status_code=status_code, subcode=subcode)


@dataclass(frozen=True)
class FxkResult(_ErrorFields):
    """
    Public result of a list operation.

    :param data: Records extracted from the response's collection field. Never
        ``None``; empty when the field is absent, on business errors and on
        transport failures. Check :attr:`ok` to tell these apart from "no rows".
    :type data: list[dict]

    Example::

        result = client.get_departments()
        if result.ok:
            for dep in result:
                print(dep["name"])
        elif result.is_transport_failure:
            print(result.exception)
        else:
            print(result.error_code, result.error_message)
    """

    data: List[Dict[str, Any]] = field(default_factory=list)

    def __iter__(self):
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def __getitem__(self, index: int) -> Dict[str, Any]:
        return self.data[index]

    def __bool__(self) -> bool:
        # A result object is always truthy; emptiness is checked through len() or data.
        return True


def _as_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


__all__ = ["ResponseModel", "FxkResult", "ERROR_CODE", "ERROR_MESSAGE", "ERROR_DESCRIPTION"]
