# Copyright (c) Goodcatch.
# Licensed under the MIT license.

"""
HTTP client with timeout handling and optional session support.

This module provides :class:`HttpClient`, a thin wrapper around the requests
library. Each request is attempted exactly once; failures propagate to the
caller (the request pipeline), which records them on the result.
"""

from __future__ import annotations

from typing import Any, Optional

import requests


class HttpClient:
    """
    HTTP client applying a default timeout and optional connection pooling.

    :param timeout: Default connect/read timeout in seconds.
    :type timeout: float or None
    :param session: Optional requests.Session. When provided, all requests use
        it for connection reuse.
    :type session: requests.Session or None
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.default_timeout: Optional[float] = timeout
        self._session = session

    @property
    def session(self) -> Optional[requests.Session]:
        return self._session

    @session.setter
    def session(self, session: Optional[requests.Session]) -> None:
        self._session = session

    def request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """
        Execute a single HTTP request.

        :param method: HTTP method (GET, POST, ...).
        :type method: str
        :param url: Target URL.
        :type url: str
        :param kwargs: Additional arguments passed to ``requests.request()`` or
            ``session.request()``, including headers, data, etc.
        :return: HTTP response object.
        :rtype: requests.Response
        :raises requests.exceptions.RequestException: On connection, timeout or other transport errors.
        """
        if "timeout" not in kwargs and self.default_timeout is not None:
            kwargs["timeout"] = self.default_timeout
        if self._session is not None:
            return self._session.request(method, url, **kwargs)
        return requests.request(method, url, **kwargs)

    def close(self) -> None:
        """
        Close the session, if any. Safe to call multiple times.
        """
        if self._session is not None:
            self._session.close()
            self._session = None
