# Copyright (c) Goodcatch.
# Licensed under the MIT license.

"""
Data models for the FXK SDK.

- :class:`~fxk.models.request.RequestBuilder`: criteria for a single request.

Import models directly from their module files.
"""

__all__ = []
