# Copyright (c) Goodcatch.
# Licensed under the MIT license.

# Transport subcodes
TRANSPORT_CONNECTION = "transport_connection"
TRANSPORT_TIMEOUT = "transport_timeout"
TRANSPORT_INVALID_JSON = "transport_invalid_json"
TRANSPORT_UNEXPECTED_STATUS = "transport_unexpected_status"

# Validation subcodes
VALIDATION_CONFIG_MISSING = "validation_config_missing"
VALIDATION_CONFIG_INVALID = "validation_config_invalid"

# Authentication subcodes
AUTH_TOKEN_REJECTED = "auth_token_rejected"
AUTH_TOKEN_UNAVAILABLE = "auth_token_unavailable"

# Service subcodes
SERVICE_BUSINESS_ERROR = "service_business_error"


def http_subcode(status: int) -> str:
    """Return the ``http_<status>`` subcode for a response status."""
    return f"http_{status}"
