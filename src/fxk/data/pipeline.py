# Copyright (c) Goodcatch.
# Licensed under the MIT license.

"""
Request/response pipeline for the FXK open platform API.

Every API method is a ``POST`` of a JSON object to ``<url><method>``. The
pipeline builds that body from a :class:`~fxk.models.request.RequestBuilder`
and explicit params, sends it, and maps the outcome to a
:class:`~fxk.core.results.ResponseModel`. Transport failures never escape
:meth:`RequestPipeline.execute`; they are recorded as diagnostic strings on
the returned model.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping, Optional

import requests

from ..core._error_codes import (
    TRANSPORT_CONNECTION,
    TRANSPORT_INVALID_JSON,
    TRANSPORT_TIMEOUT,
    TRANSPORT_UNEXPECTED_STATUS,
)
from ..core.config import FxkConfig
from ..core.http import HttpClient
from ..core.results import FxkResult, ResponseModel
from ..models.request import BoundRequestBuilder, RequestBuilder

logger = logging.getLogger(__name__)

CONTENT_TYPE = "application/json;charset=utf-8"

_SECRET_KEYS = frozenset({"appSecret", "permanentCode", "corpAccessToken"})
_MASK = "***"
_BODY_EXCERPT_LIMIT = 2000


def mask_secrets(body: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``body`` with credential values masked."""
    return {k: (_MASK if k in _SECRET_KEYS and v else v) for k, v in body.items()}


def transform(model: ResponseModel, collection_field: str) -> FxkResult:
    """
    Convert a raw model to the public result shape.

    Copies the error fields and forwards ``exception``. ``data`` becomes the
    list stored under ``collection_field``, or an empty list when the field is
    missing or not a list.
    """
    collection = model.payload.get(collection_field)
    return FxkResult(
        error_code=model.error_code,
        error_message=model.error_message,
        error_description=model.error_description,
        exception=list(model.exception) if model.exception is not None else None,
        status_code=model.status_code,
        subcode=model.subcode,
        data=list(collection) if isinstance(collection, list) else [],
    )


class RequestPipeline:
    """
    Builds, sends and decodes FXK API requests.

    Two ways to attach criteria to a request:

    - Pass an explicit builder (preferred)::

        request = RequestBuilder().criteria("departmentId", 5)
        model = pipeline.execute("user/list", params, request=request)

    - Open a scope with :meth:`query` and chain on it::

        model = pipeline.query().criteria("departmentId", 5).execute("user/list", params)

    Either way the criteria are cleared once :meth:`execute` returns. An open
    scope is discarded by every execute, including one given an explicit builder.

    :param config: Connection settings; ``url`` and ``timeout`` are used here.
    :type config: ~fxk.core.config.FxkConfig
    :param http: HTTP client. Defaults to one using ``config.timeout``.
    :type http: ~fxk.core.http.HttpClient or None
    """

    def __init__(self, config: FxkConfig, http: Optional[HttpClient] = None) -> None:
        self._config = config
        self._http = http or HttpClient(timeout=config.timeout)
        self._scope: Optional[BoundRequestBuilder] = None

    @property
    def http(self) -> HttpClient:
        return self._http

    # ----------------------------- criteria scope -----------------------------
    def query(self) -> BoundRequestBuilder:
        """Start a new criteria scope, replacing any scope not yet executed."""
        self._scope = BoundRequestBuilder(_pipeline=self)
        return self._scope

    def criteria(self, key: str, value: Any) -> "RequestPipeline":
        """Add a criterion to the open scope. Does nothing when no scope was started."""
        if self._scope is not None:
            self._scope.criteria(key, value)
        return self

    @property
    def pending_criteria(self) -> Dict[str, Any]:
        """Criteria of the open scope (empty when none)."""
        return self._scope.values if self._scope is not None else {}

    # ----------------------------- execution ---------------------------------
    def execute(
        self,
        method: str,
        params: Optional[Mapping[str, Any]] = None,
        *,
        request: Optional[RequestBuilder] = None,
    ) -> ResponseModel:
        """
        POST one request and decode the response.

        :param method: API method path relative to the base URL, e.g. ``"user/list"``.
        :type method: str
        :param params: Explicit parameters; they never override a criterion of the same name.
        :type params: dict or None
        :param request: Builder holding the criteria. Defaults to the scope opened by :meth:`query`.
        :type request: ~fxk.models.request.RequestBuilder or None
        :return: Parsed response, or a model whose ``exception`` lists the diagnostics.
        :rtype: ~fxk.core.results.ResponseModel
        """
        builder = request if request is not None else self._scope
        try:
            body = builder.build(params) if builder is not None else dict(params or {})
            return self._send(self._config.endpoint(method), body)
        finally:
            if builder is not None:
                builder.clear()
            if self._scope is not None:
                self._scope.clear()
                self._scope = None

    def execute_and_transform(
        self,
        method: str,
        collection_field: str,
        params: Optional[Mapping[str, Any]] = None,
        *,
        request: Optional[RequestBuilder] = None,
    ) -> FxkResult:
        """:meth:`execute` followed by :func:`transform`."""
        return transform(self.execute(method, params, request=request), collection_field)

    def _send(self, url: str, body: Dict[str, Any]) -> ResponseModel:
        headers = {"Content-Type": CONTENT_TYPE}
        logger.debug("POST %s %s", url, mask_secrets(body))
        try:
            r = self._http.request(
                "post",
                url,
                headers=headers,
                data=json.dumps(body, ensure_ascii=False).encode("utf-8"),
            )
        except requests.exceptions.Timeout as exc:
            return self._failure(url, headers, body, exc, subcode=TRANSPORT_TIMEOUT)
        except requests.exceptions.RequestException as exc:
            return self._failure(url, headers, body, exc, subcode=TRANSPORT_CONNECTION)

        if r.status_code != 200:
            return self._failure(
                url,
                headers,
                body,
                f"Unexpected HTTP status {r.status_code}",
                response=r,
                subcode=TRANSPORT_UNEXPECTED_STATUS,
            )
        try:
            payload = r.json()
        except ValueError as exc:
            return self._failure(url, headers, body, exc, response=r, subcode=TRANSPORT_INVALID_JSON)
        if not isinstance(payload, dict):
            return self._failure(
                url,
                headers,
                body,
                f"Expected a JSON object, got {type(payload).__name__}",
                response=r,
                subcode=TRANSPORT_INVALID_JSON,
            )
        return ResponseModel.from_payload(payload, status_code=r.status_code)

    def _failure(
        self,
        url: str,
        headers: Mapping[str, str],
        body: Mapping[str, Any],
        error: Any,
        *,
        response: Optional[requests.Response] = None,
        subcode: Optional[str] = None,
    ) -> ResponseModel:
        reason = f"{type(error).__name__}: {error}" if isinstance(error, BaseException) else str(error)
        diagnostics: List[str] = [reason, _serialize_request(url, headers, body)]
        status_code = None
        if response is not None:
            status_code = response.status_code
            diagnostics.append(_serialize_response(response))
        logger.warning("FXK request to %s failed: %s", url, reason)
        return ResponseModel.failure(diagnostics, status_code=status_code, subcode=subcode)


def _serialize_request(url: str, headers: Mapping[str, str], body: Mapping[str, Any]) -> str:
    return json.dumps(
        {"method": "POST", "url": url, "headers": dict(headers), "body": mask_secrets(body)},
        ensure_ascii=False,
        default=str,
    )


def _serialize_response(response: requests.Response) -> str:
    text = getattr(response, "text", "") or ""
    return json.dumps(
        {
            "status": response.status_code,
            "headers": dict(getattr(response, "headers", None) or {}),
            "body": text[:_BODY_EXCERPT_LIMIT],
        },
        ensure_ascii=False,
        default=str,
    )


__all__ = ["RequestPipeline", "transform", "mask_secrets", "CONTENT_TYPE"]
