# Copyright (c) Goodcatch.
# Licensed under the MIT license.

"""
Operation namespace classes for the FXK SDK.

- DepartmentOperations: department listing (``client.departments``)
- UserOperations: user listing and lookup (``client.users``)
"""

__all__ = []
