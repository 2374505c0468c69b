# Copyright (c) Goodcatch.
# Licensed under the MIT license.

"""
Quickstart: list departments and users of an FXK tenant.

Set ``FXK_APP_ID``, ``FXK_APP_SECRET`` and ``FXK_PERMANENT_CODE`` (and
optionally ``FXK_URL`` / ``FXK_TIMEOUT``) before running.
"""

import logging
import sys

from fxk import FxkClient, FxkConfig
from fxk.core.errors import FxkError


def main() -> int:
    logging.basicConfig(level=logging.INFO)
    try:
        config = FxkConfig.from_env()
    except FxkError as ex:
        print(f"Configuration error: {ex.message}")
        return 1

    with FxkClient(config) as client:
        deps = client.get_departments()
        if deps.is_transport_failure:
            print("Request failed:")
            for line in deps.exception:
                print("  ", line)
            return 1
        if not deps.ok:
            print(f"FXK error {deps.error_code}: {deps.error_message}")
            if client.tokens.last_error is not None:
                print("Token error:", client.tokens.last_error.to_dict())
            return 1

        for dep in deps.data:
            print(f"[{dep.get('id')}] {dep.get('name')}")

        mobile = sys.argv[1] if len(sys.argv) > 1 else None
        if mobile:
            user = client.get_dep_user_by_mobile(0, mobile)
            print(user if user is not None else f"No user with mobile {mobile}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
