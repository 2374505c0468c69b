# Copyright (c) Goodcatch.
# Licensed under the MIT license.

"""Department operations namespace."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pandas as pd

from ..core.results import FxkResult
from ..models.request import RequestBuilder
from ..utils._pandas import records_to_dataframe

if TYPE_CHECKING:
    from ..client import FxkClient

DEPARTMENT_LIST = "department/list"
DEPARTMENTS_FIELD = "departments"


class DepartmentOperations:
    """
    Department queries. Accessed via ``client.departments``.

    Example::

        result = client.departments.list()
        for dep in result.data:
            print(dep["id"], dep["name"])
    """

    def __init__(self, client: "FxkClient") -> None:
        self._client = client

    def list(self) -> FxkResult:
        """
        List every department of the corporate tenant.

        :return: Result whose ``data`` holds the ``departments`` collection.
        :rtype: ~fxk.core.results.FxkResult
        """
        return self._client._pipeline.execute_and_transform(
            DEPARTMENT_LIST,
            DEPARTMENTS_FIELD,
            self._client._token_params(),
            request=RequestBuilder(),
        )

    def list_dataframe(self) -> pd.DataFrame:
        """
        :meth:`list` as a DataFrame, one row per department.

        Errors are not raised; an unsuccessful call yields an empty frame.
        Use :meth:`list` when the error fields matter.
        """
        return records_to_dataframe(self.list().data)
