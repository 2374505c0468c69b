# Copyright (c) Goodcatch.
# Licensed under the MIT license.

"""
Utilities for the FXK SDK.

This module contains the pandas helpers used by the DataFrame operations.
"""

__all__ = []
