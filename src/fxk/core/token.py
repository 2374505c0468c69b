# Copyright (c) Goodcatch.
# Licensed under the MIT license.

"""
Corp access token lifecycle: acquire, cache, expire, refresh.

The token is fetched from ``corpAccessToken/get/V2`` and persisted in a
:class:`~fxk.core.cache.TokenCache` under :data:`CACHE_KEY` for the lifetime
the server declares. A token is live while that cache entry is present and
its own ``expires_at`` has not passed.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

from ._error_codes import AUTH_TOKEN_REJECTED, AUTH_TOKEN_UNAVAILABLE
from ..models.request import RequestBuilder
from .cache import MemoryTokenCache, TokenCache
from .errors import AuthenticationError

if TYPE_CHECKING:
    from ..data.pipeline import RequestPipeline

logger = logging.getLogger(__name__)

TOKEN_METHOD = "corpAccessToken/get/V2"
CACHE_KEY = "fxk.corp_access_token"


@dataclass(frozen=True)
class CorpToken:
    """
    Corp access token issued by the platform.

    :param corp_id: Corporate tenant ID.
    :type corp_id: str
    :param corp_access_token: Opaque bearer credential.
    :type corp_access_token: str
    :param expires_in: Lifetime in seconds declared by the server.
    :type expires_in: int
    :param expires_at: Absolute expiry as a :func:`time.time` timestamp.
    :type expires_at: float
    """

    corp_id: str
    corp_access_token: str
    expires_in: int
    expires_at: float

    def is_expired(self, now: Optional[float] = None) -> bool:
        return (time.time() if now is None else now) >= self.expires_at

    def as_params(self) -> Dict[str, str]:
        """Request parameters that authenticate a business call."""
        return {"corpId": self.corp_id, "corpAccessToken": self.corp_access_token}

    def __repr__(self) -> str:
        return f"CorpToken(corp_id={self.corp_id!r}, expires_in={self.expires_in!r}, expires_at={self.expires_at!r})"


class TokenManager:
    """
    Owns the corp access token for one application.

    :meth:`get_valid_token` returns the token held in the cache store while the
    entry is present and unexpired, and fetches a new one otherwise. A refresh lock makes concurrent
    callers of one manager share a single fetch. Several managers (or
    processes) sharing a cache store may still each fetch once; the platform
    accepts this.

    A failed fetch caches nothing. :meth:`get_valid_token` then returns
    ``None`` and records the reason in :attr:`last_error`;
    :meth:`require_token` raises it instead.

    :param pipeline: Pipeline used to reach the token endpoint.
    :type pipeline: ~fxk.data.pipeline.RequestPipeline
    :param app_id: Application ID.
    :param app_secret: Application secret.
    :param permanent_code: Permanent authorization code of the tenant.
    :param cache: Cache store. Defaults to a private :class:`~fxk.core.cache.MemoryTokenCache`.
    :type cache: ~fxk.core.cache.TokenCache or None
    :param clock: Wall-clock source used for ``expires_at``. Defaults to :func:`time.time`.
    """

    def __init__(
        self,
        pipeline: "RequestPipeline",
        app_id: str,
        app_secret: str,
        permanent_code: str,
        cache: Optional[TokenCache] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self._pipeline = pipeline
        self._app_id = app_id
        self._app_secret = app_secret
        self._permanent_code = permanent_code
        self._cache: TokenCache = cache if cache is not None else MemoryTokenCache()
        self._clock = clock or time.time
        self._token: Optional[CorpToken] = None
        self._lock = threading.Lock()
        self.last_error: Optional[AuthenticationError] = None

    @property
    def cache(self) -> TokenCache:
        return self._cache

    def get_valid_token(self) -> Optional[CorpToken]:
        """
        Return a live token, fetching one if needed.

        :return: The token, or ``None`` when the fetch failed.
        :rtype: CorpToken or None
        """
        token = self._live_token()
        if token is not None:
            return token
        with self._lock:
            token = self._live_token()
            if token is not None:
                return token
            try:
                return self._fetch()
            except AuthenticationError as exc:
                self.last_error = exc
                logger.warning("Corp access token unavailable: %s", exc.message)
                return None

    def require_token(self) -> CorpToken:
        """
        Like :meth:`get_valid_token` but raise when no token can be obtained.

        :raises AuthenticationError: With the server's ``errorCode`` when it rejected the
            credentials, or with transport diagnostics when it could not be reached.
        """
        token = self.get_valid_token()
        if token is None:
            raise self.last_error or AuthenticationError(
                "Corp access token unavailable", subcode=AUTH_TOKEN_UNAVAILABLE
            )
        return token

    def invalidate(self) -> None:
        """Forget the token locally and in the cache store."""
        with self._lock:
            self._token = None
            self._cache.forget(CACHE_KEY)

    def _live_token(self) -> Optional[CorpToken]:
        if not self._cache.has(CACHE_KEY):
            if self._token is not None:
                logger.debug("Corp access token evicted from cache; refreshing.")
            self._token = None
            return None
        # The store may hold a token fetched by another manager sharing it.
        shared = self._cache.get(CACHE_KEY)
        if isinstance(shared, CorpToken) and shared != self._token:
            self._token = shared
        if self._token is not None and self._token.is_expired(self._clock()):
            self._token = None
        return self._token

    def _fetch(self) -> CorpToken:
        model = self._pipeline.execute(
            TOKEN_METHOD,
            {
                "appId": self._app_id,
                "appSecret": self._app_secret,
                "permanentCode": self._permanent_code,
            },
            request=RequestBuilder(),
        )
        if model.is_transport_failure:
            raise AuthenticationError(
                "Corp access token request failed",
                subcode=AUTH_TOKEN_UNAVAILABLE,
                diagnostics=model.exception,
            )
        if model.error_code != 0:
            raise AuthenticationError(
                model.error_message or f"Corp access token rejected (errorCode={model.error_code})",
                subcode=AUTH_TOKEN_REJECTED,
                error_code=model.error_code,
            )

        expires_in = _seconds(model.get("expiresIn"))
        token = CorpToken(
            corp_id=model.get("corpId") or "",
            corp_access_token=model.get("corpAccessToken") or "",
            expires_in=expires_in,
            expires_at=self._clock() + expires_in,
        )
        self._token = token
        self._cache.put(CACHE_KEY, token, expires_in)
        self.last_error = None
        logger.debug("Fetched corp access token for corp %s (expires in %ss).", token.corp_id, expires_in)
        return token


def _seconds(value: Any) -> int:
    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        return 0


__all__ = ["TokenManager", "CorpToken", "TOKEN_METHOD", "CACHE_KEY"]
