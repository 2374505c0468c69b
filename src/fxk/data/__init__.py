# Copyright (c) Goodcatch.
# Licensed under the MIT license.

"""
Data access layer for the FXK SDK.

This module contains the request/response pipeline that talks to the API.
"""

from .pipeline import RequestPipeline, transform

__all__ = ["RequestPipeline", "transform"]
