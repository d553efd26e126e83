from .checker import PermissionChecker
from .errors import GatelockError, PermissionDenied, UnparsableScope
from .scope import (
    WILDCARD,
    Action,
    PermissionScope,
    parse_permission_scope,
    require_scope,
)

__all__ = [
    "Action",
    "GatelockError",
    "PermissionChecker",
    "PermissionDenied",
    "PermissionScope",
    "UnparsableScope",
    "WILDCARD",
    "parse_permission_scope",
    "require_scope",
]
