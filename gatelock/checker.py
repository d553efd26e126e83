"""
gatelock.checker
~~~~~~~~~~~~~~~~
Existential match of a requested scope against a fixed set of granted
scopes.  Unknown or malformed grants are dropped at construction; a
malformed request is always denied.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional, Tuple

from .errors import PermissionDenied
from .scope import WILDCARD, PermissionScope, parse_permission_scope

log = logging.getLogger("gatelock")


class PermissionChecker:
    def __init__(
        self,
        granted_scopes: Iterable[str],
        valid_subjects: Iterable[str] | None = None,
        valid_resources: Iterable[str] | None = None,
    ) -> None:
        self._valid_subjects = frozenset(valid_subjects or ())
        self._valid_resources = frozenset(valid_resources or ())
        parsed = (self._parse(s) for s in granted_scopes)
        self._granted: Tuple[PermissionScope, ...] = tuple(
            s for s in parsed if s is not None
        )

    def __repr__(self) -> str:
        return f"<PermissionChecker granted={len(self._granted)}>"

    @property
    def granted_scopes(self) -> Tuple[PermissionScope, ...]:
        return self._granted

    # ------------------------------------------------------------------ #
    # public
    # ------------------------------------------------------------------ #

    def can(
        self, requested_scope: str, context: Optional[Mapping[str, Any]] = None
    ) -> bool:
        """Return True if *requested_scope* is covered by a granted scope.

        *context* is accepted for forward compatibility and ignored.
        """
        return self._match(requested_scope) is not None

    def require(
        self, requested_scope: str, context: Optional[Mapping[str, Any]] = None
    ) -> PermissionScope:
        """Return the parsed request, or raise :class:`PermissionDenied`."""
        requested = self._match(requested_scope)
        if requested is None:
            raise PermissionDenied(requested_scope)
        return requested

    # ------------------------------------------------------------------ #
    # private
    # ------------------------------------------------------------------ #

    def _parse(self, scope_string: str) -> Optional[PermissionScope]:
        return parse_permission_scope(
            scope_string, self._valid_subjects, self._valid_resources
        )

    def _match(self, requested_scope: str) -> Optional[PermissionScope]:
        """Parsed request if some grant covers it, else None."""
        requested = self._parse(requested_scope)
        if requested is None:
            log.debug("unparsable request denied: %r", requested_scope)
            return None
        if any(_covers(granted, requested) for granted in self._granted):
            return requested
        return None


def _covers(granted: PermissionScope, requested: PermissionScope) -> bool:
    if granted.subject != requested.subject:
        return False
    if granted.resource_type not in (WILDCARD, requested.resource_type):
        return False
    if not set(requested.actions) <= set(granted.actions):
        return False
    return _params_match(granted.parameters, requested.parameters)


def _params_match(
    granted: Optional[Mapping[str, str]], requested: Optional[Mapping[str, str]]
) -> bool:
    if granted is None:
        # an unconstrained grant does not cover a constrained request
        return requested is None
    if requested is None:
        return False
    return all(requested.get(key) == value for key, value in granted.items())
