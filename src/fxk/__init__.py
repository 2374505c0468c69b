# Copyright (c) Goodcatch.
# Licensed under the MIT license.

"""
Python SDK for the FXK (fxiaoke) open platform API.

Quick start::

    from fxk import FxkClient, FxkConfig

    with FxkClient(FxkConfig.from_env()) as client:
        for dep in client.get_departments().data:
            print(dep["name"])
"""

import logging

from .client import FxkClient
from .core.config import FxkConfig
from .core.results import FxkResult, ResponseModel

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = ["FxkClient", "FxkConfig", "FxkResult", "ResponseModel", "__version__"]
