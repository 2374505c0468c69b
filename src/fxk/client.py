# Copyright (c) Goodcatch.
# Licensed under the MIT license.

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Union

import requests

from .core.cache import TokenCache
from .core.config import FxkConfig
from .core.http import HttpClient
from .core.results import FxkResult, ResponseModel
from .core.token import TokenManager
from .data.pipeline import RequestPipeline
from .operations.departments import DepartmentOperations
from .operations.users import UserOperations


class FxkClient:
    """
    Client for the FXK (fxiaoke) open platform API.

    Handles the corp access token transparently: each operation obtains a
    live token from :attr:`tokens`, merges it into the request, and returns
    the outcome as data. Failures never raise; inspect ``ok``,
    ``error_code`` and ``exception`` on the result, or call
    ``raise_for_error()``.

    **Context Manager Support (Recommended)**::

        with FxkClient(config) as client:
            deps = client.get_departments()

    Operations are available flat (``get_departments``, ``get_users``,
    ``get_user``, ``get_dep_user_by_mobile``) and grouped under the
    ``client.departments`` and ``client.users`` namespaces.

    :param config: Connection settings, or a mapping accepted by
        :meth:`~fxk.core.config.FxkConfig.from_dict`.
    :type config: ~fxk.core.config.FxkConfig or dict
    :param token_cache: Cache store for the corp access token. Pass a shared
        store to reuse one token across clients. Defaults to a private
        in-memory store.
    :type token_cache: ~fxk.core.cache.TokenCache or None
    :param token_manager: Pre-built token manager to share between clients.
        Takes precedence over ``token_cache``.
    :type token_manager: ~fxk.core.token.TokenManager or None
    :param session: Optional requests session for connection pooling. A
        session passed here is not closed by :meth:`close`.
    :type session: requests.Session or None

    Example::

        from fxk import FxkClient, FxkConfig

        config = FxkConfig(
            app_id="FSAID_xxx",
            app_secret="secret",
            permanent_code="code",
            url="https://open.fxiaoke.com/cgi/",
            timeout=10,
        )
        with FxkClient(config) as client:
            result = client.get_users(department_id=0, fetch_child=True)
            if result.ok:
                print(len(result.data), "users")
    """

    def __init__(
        self,
        config: Union[FxkConfig, Mapping[str, Any]],
        *,
        token_cache: Optional[TokenCache] = None,
        token_manager: Optional[TokenManager] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._config = config if isinstance(config, FxkConfig) else FxkConfig.from_dict(config)
        self._http = HttpClient(timeout=self._config.timeout, session=session)
        self._owns_session = False
        self._pipeline = RequestPipeline(self._config, self._http)
        self.tokens = token_manager or TokenManager(
            self._pipeline,
            self._config.app_id,
            self._config.app_secret,
            self._config.permanent_code,
            cache=token_cache,
        )

        self.departments = DepartmentOperations(self)
        self.users = UserOperations(self)

    @property
    def config(self) -> FxkConfig:
        return self._config

    @property
    def pipeline(self) -> RequestPipeline:
        return self._pipeline

    def __enter__(self) -> "FxkClient":
        """Open a pooled HTTP session unless one was supplied."""
        if self._http.session is None:
            self._http.session = requests.Session()
            self._owns_session = True
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP session opened by the context manager. Safe to call multiple times."""
        if self._owns_session:
            self._http.close()
            self._owns_session = False

    def set_http_session(self, session: requests.Session) -> "FxkClient":
        """
        Replace the HTTP session used for all requests.

        The caller keeps ownership of ``session``; a session previously opened
        by the context manager is closed.

        :return: The client, for chaining.
        :rtype: FxkClient
        """
        if self._owns_session:
            self._http.close()
            self._owns_session = False
        self._http.session = session
        return self

    def _token_params(self) -> Dict[str, Any]:
        # Without a token the call still goes out; the server reports the auth error.
        token = self.tokens.get_valid_token()
        return token.as_params() if token is not None else {}

    # ---------------- Public operations ----------------
    def get_departments(self) -> FxkResult:
        """
        List all departments (``department/list``).

        :return: Result with the ``departments`` collection in ``data``.
        :rtype: ~fxk.core.results.FxkResult
        """
        return self.departments.list()

    def get_users(self, department_id: int, fetch_child: bool = False) -> FxkResult:
        """
        List the users of a department (``user/list``).

        :param department_id: Department ID.
        :type department_id: int
        :param fetch_child: Include users of descendant departments.
        :type fetch_child: bool
        :return: Result with the ``userList`` collection in ``data``.
        :rtype: ~fxk.core.results.FxkResult
        """
        return self.users.list(department_id, fetch_child)

    def get_user(self, open_user_id: str) -> ResponseModel:
        """
        Fetch a single user (``user/get``).

        :param open_user_id: The user's ``openUserId``.
        :type open_user_id: str
        :return: The raw, untransformed response.
        :rtype: ~fxk.core.results.ResponseModel
        """
        return self.users.get(open_user_id)

    def get_dep_user_by_mobile(self, department_id: int, mobile: str) -> Optional[Dict[str, Any]]:
        """
        Find a department user by exact mobile number.

        Filtering happens client-side over :meth:`get_users`; the platform
        offers no server-side mobile lookup.

        :return: The first matching user record, or ``None``.
        :rtype: dict or None
        """
        return self.users.find_by_mobile(department_id, mobile)
