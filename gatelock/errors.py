"""
gatelock.errors
~~~~~~~~~~~~~~~
Exceptions for callers that prefer raising over the ``None``/``False``
results of the core API.
"""

from __future__ import annotations


class GatelockError(Exception):
    pass


class UnparsableScope(GatelockError, ValueError):
    def __init__(self, scope: str):
        self.scope = scope
        super().__init__(f"Unparsable scope: {scope!r}")


class PermissionDenied(GatelockError):
    def __init__(self, scope: str):
        self.scope = scope
        super().__init__(f"Permission denied: {scope!r}")
