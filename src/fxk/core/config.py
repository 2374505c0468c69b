# Copyright (c) Goodcatch.
# Licensed under the MIT license.

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping

from .errors import ValidationError
from ._error_codes import VALIDATION_CONFIG_MISSING, VALIDATION_CONFIG_INVALID

DEFAULT_URL = "https://open.fxiaoke.com/cgi/"
DEFAULT_TIMEOUT = 10.0

# camelCase keys used by the platform's own documentation
_ALIASES = {
    "appId": "app_id",
    "appSecret": "app_secret",
    "permanentCode": "permanent_code",
}


@dataclass(frozen=True)
class FxkConfig:
    """
    Connection settings for an FXK open platform application.

    :param app_id: Application ID issued by the platform.
    :type app_id: str
    :param app_secret: Application secret.
    :type app_secret: str
    :param permanent_code: Permanent authorization code of the corporate tenant.
    :type permanent_code: str
    :param url: Base API URL, for example ``"https://open.fxiaoke.com/cgi/"``.
        Method paths such as ``"department/list"`` are appended verbatim.
    :type url: str
    :param timeout: Connect/read timeout in seconds applied to every request.
    :type timeout: float
    """

    app_id: str
    app_secret: str
    permanent_code: str
    url: str
    timeout: float

    def endpoint(self, method: str) -> str:
        """Return the absolute URL for an API method path."""
        return f"{self.url}{method}"

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "FxkConfig":
        """
        Build a configuration from a mapping.

        Accepts the dataclass field names as well as the platform's camelCase
        keys (``appId``, ``appSecret``, ``permanentCode``).

        :raises ValidationError: If a required key is missing.
        """
        normalized = {_ALIASES.get(k, k): v for k, v in values.items()}
        missing = [name for name in ("app_id", "app_secret", "permanent_code", "url", "timeout") if name not in normalized]
        if missing:
            raise ValidationError(
                f"Missing configuration keys: {', '.join(missing)}",
                subcode=VALIDATION_CONFIG_MISSING,
                details={"missing": missing},
            )
        return cls(
            app_id=normalized["app_id"],
            app_secret=normalized["app_secret"],
            permanent_code=normalized["permanent_code"],
            url=normalized["url"],
            timeout=normalized["timeout"],
        )

    @classmethod
    def from_env(cls) -> "FxkConfig":
        """
        Create a configuration from ``FXK_*`` environment variables.

        ``FXK_APP_ID``, ``FXK_APP_SECRET`` and ``FXK_PERMANENT_CODE`` are required.
        ``FXK_URL`` defaults to the public endpoint and ``FXK_TIMEOUT`` to 10 seconds.

        :raises ValidationError: If a required variable is unset or the timeout is not numeric.
        """
        env = {
            "app_id": os.getenv("FXK_APP_ID"),
            "app_secret": os.getenv("FXK_APP_SECRET"),
            "permanent_code": os.getenv("FXK_PERMANENT_CODE"),
        }
        missing = [f"FXK_{k.upper()}" for k, v in env.items() if not v]
        if missing:
            raise ValidationError(
                f"Missing environment variables: {', '.join(missing)}",
                subcode=VALIDATION_CONFIG_MISSING,
                details={"missing": missing},
            )
        raw_timeout = os.getenv("FXK_TIMEOUT")
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
        except ValueError as exc:
            raise ValidationError(
                f"FXK_TIMEOUT must be a number, got {raw_timeout!r}",
                subcode=VALIDATION_CONFIG_INVALID,
            ) from exc
        return cls(url=os.getenv("FXK_URL") or DEFAULT_URL, timeout=timeout, **env)
