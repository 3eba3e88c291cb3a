"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming.

Categories:
- Validation errors (VALIDATION_*)
- Resource errors (*_NOT_FOUND)
- Conflict errors (*_ALREADY_EXISTS, *_CONFLICT)
- Authorization errors (PERMISSION_*, USER_NOT_AUTHENTICATED)
- Store errors (*_STORE_ERROR, CACHE_UNAVAILABLE)
- Audit trail errors (AUDIT_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable)."""

    # Validation errors
    VALIDATION_FAILED = "validation_failed"
    INVALID_DISPLAY_NAME = "invalid_display_name"

    # Resource errors
    RESOURCE_NOT_FOUND = "resource_not_found"
    ROLE_NOT_FOUND = "role_not_found"
    POLICY_NOT_FOUND = "policy_not_found"

    # Conflict errors
    RESOURCE_CONFLICT = "resource_conflict"
    ROLE_ALREADY_EXISTS = "role_already_exists"
    POLICY_ALREADY_EXISTS = "policy_already_exists"

    # Authorization errors
    PERMISSION_DENIED = "permission_denied"
    USER_NOT_AUTHENTICATED = "user_not_authenticated"

    # Backing store errors
    POLICY_STORE_ERROR = "policy_store_error"
    CACHE_UNAVAILABLE = "cache_unavailable"

    # Audit trail errors
    AUDIT_RECORD_FAILED = "audit_record_failed"
    AUDIT_QUERY_FAILED = "audit_query_failed"
