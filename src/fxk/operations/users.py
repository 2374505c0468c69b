# Copyright (c) Goodcatch.
# Licensed under the MIT license.

"""User operations namespace."""

from __future__ import annotations

from typing import Any, Dict, Optional, TYPE_CHECKING

import pandas as pd

from ..core.results import FxkResult, ResponseModel
from ..models.request import RequestBuilder
from ..utils._pandas import records_to_dataframe

if TYPE_CHECKING:
    from ..client import FxkClient

USER_LIST = "user/list"
USER_GET = "user/get"
USER_LIST_FIELD = "userList"


class UserOperations:
    """
    User queries. Accessed via ``client.users``.

    Example::

        result = client.users.list(department_id=5, fetch_child=True)
        for user in result.data:
            print(user["openUserId"], user["name"])

        user = client.users.find_by_mobile(0, "13800000000")
    """

    def __init__(self, client: "FxkClient") -> None:
        self._client = client

    def list(self, department_id: int, fetch_child: bool = False) -> FxkResult:
        """
        List the users of a department.

        :param department_id: Department ID; ``0`` is the tenant's root department.
        :type department_id: int
        :param fetch_child: Include users of descendant departments.
        :type fetch_child: bool
        :return: Result whose ``data`` holds the ``userList`` collection.
        :rtype: ~fxk.core.results.FxkResult
        """
        params = self._client._token_params()
        request = RequestBuilder().criteria("fetchChild", fetch_child).criteria("departmentId", department_id)
        return self._client._pipeline.execute_and_transform(USER_LIST, USER_LIST_FIELD, params, request=request)

    def get(self, open_user_id: str) -> ResponseModel:
        """
        Fetch one user by open user ID.

        :param open_user_id: The user's ``openUserId``.
        :type open_user_id: str
        :return: The raw response; user fields are read from ``payload``.
        :rtype: ~fxk.core.results.ResponseModel
        """
        params = self._client._token_params()
        params["openUserId"] = open_user_id
        return self._client._pipeline.execute(USER_GET, params, request=RequestBuilder())

    def find_by_mobile(self, department_id: int, mobile: str, fetch_child: bool = False) -> Optional[Dict[str, Any]]:
        """
        Return the first user of a department whose ``mobile`` equals ``mobile``.

        The platform has no mobile filter; this lists the department with
        :meth:`list` and scans the records locally.

        :return: The matching user record, or ``None`` when there is no match
            or the list call failed.
        :rtype: dict or None
        """
        result = self.list(department_id, fetch_child)
        for user in result.data:
            if isinstance(user, dict) and user.get("mobile") == mobile:
                return user
        return None

    def list_dataframe(self, department_id: int, fetch_child: bool = False) -> pd.DataFrame:
        """
        :meth:`list` as a DataFrame, one row per user.

        An unsuccessful call yields an empty frame.
        """
        return records_to_dataframe(self.list(department_id, fetch_child).data)
