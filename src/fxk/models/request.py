# Copyright (c) Goodcatch.
# Licensed under the MIT license.

"""
Request builder for FXK API calls.

A :class:`RequestBuilder` collects criteria for exactly one request. It is an
explicit value passed to the pipeline, so nothing accumulates on the client
between unrelated calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.results import ResponseModel
    from ..data.pipeline import RequestPipeline


def merge_params(criteria: Mapping[str, Any], params: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Merge criteria with explicit params into one request body.

    Criteria come first; params are layered in but never override a key that
    criteria already set.

    Example::

        merge_params({"departmentId": 5}, {"departmentId": 9, "corpId": "c"})
        # {"departmentId": 5, "corpId": "c"}
    """
    body: Dict[str, Any] = dict(criteria)
    for key, value in (params or {}).items():
        body.setdefault(key, value)
    return body


@dataclass
class RequestBuilder:
    """
    Ordered criteria for a single request.

    Example::

        request = RequestBuilder().criteria("fetchChild", True).criteria("departmentId", 5)
        body = request.build({"corpAccessToken": "...", "corpId": "..."})
    """

    _criteria: Dict[str, Any] = field(default_factory=dict)

    def criteria(self, key: str, value: Any) -> "RequestBuilder":
        """
        Add one criterion. A later call with the same key replaces the value
        but keeps the original position.

        :return: Self for method chaining.
        :rtype: RequestBuilder
        """
        self._criteria[key] = value
        return self

    def criteria_from(self, values: Mapping[str, Any]) -> "RequestBuilder":
        """Add every item of ``values`` as a criterion."""
        for key, value in values.items():
            self.criteria(key, value)
        return self

    @property
    def values(self) -> Dict[str, Any]:
        """A copy of the accumulated criteria."""
        return dict(self._criteria)

    def is_empty(self) -> bool:
        return not self._criteria

    def clear(self) -> None:
        self._criteria.clear()

    def build(self, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Return the JSON body for this request, see :func:`merge_params`."""
        return merge_params(self._criteria, params)


@dataclass
class BoundRequestBuilder(RequestBuilder):
    """
    :class:`RequestBuilder` bound to a pipeline, created by
    :meth:`~fxk.data.pipeline.RequestPipeline.query`.

    Example::

        model = (pipeline.query()
                 .criteria("fetchChild", True)
                 .criteria("departmentId", 5)
                 .execute("user/list", token.as_params()))
    """

    _pipeline: Optional["RequestPipeline"] = field(default=None, compare=False, repr=False)

    def execute(self, method: str, params: Optional[Mapping[str, Any]] = None) -> "ResponseModel":
        """
        Send the request through the bound pipeline. The criteria are cleared
        afterwards, whether the call succeeded or not.
        """
        if self._pipeline is None:
            raise RuntimeError("BoundRequestBuilder is not bound to a pipeline.")
        return self._pipeline.execute(method, params, request=self)


__all__ = ["RequestBuilder", "BoundRequestBuilder", "merge_params"]
