"""
gatelock.scope
~~~~~~~~~~~~~~
Scope-string grammar:

    <subject>/<resource-or-*>.<actions>[?key=value&key=value]

e.g.  user/orders.r?userId=123   admin/users.crud   service/*.cs

There is no escaping: a value holding ``&``, ``=`` or ``?`` is truncated at
that character.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple

from .errors import UnparsableScope

WILDCARD = "*"

# first two separators only; the action segment runs up to the next "?"
_SEPARATORS = re.compile(r"[/.?]")


class Action(str, Enum):
    CREATE = "c"
    READ = "r"
    UPDATE = "u"
    DELETE = "d"
    SUBSCRIBE = "s"  # execute / subscribe


_ACTION_CODES = {a.value: a for a in Action}


@dataclass(frozen=True, slots=True)
class PermissionScope:
    subject: str
    resource_type: str
    actions: Tuple[Action, ...]
    parameters: Optional[Mapping[str, str]] = field(default=None, hash=False)

    @property
    def is_wildcard(self) -> bool:
        return self.resource_type == WILDCARD

    def allows(self, action: Action | str) -> bool:
        """True if *action* (member or one-letter code) is in this scope."""
        return _ACTION_CODES.get(action) in self.actions

    def __str__(self) -> str:
        out = f"{self.subject}/{self.resource_type}." + "".join(
            a.value for a in self.actions
        )
        if self.parameters is not None:
            out += "?" + "&".join(f"{k}={v}" for k, v in self.parameters.items())
        return out


def parse_permission_scope(
    scope_string: str,
    valid_subjects: Iterable[str] | None = None,
    valid_resources: Iterable[str] | None = None,
) -> PermissionScope | None:
    """Parse *scope_string*; return ``None`` if it is not a valid scope.

    Empty allow-lists impose no constraint.  The wildcard resource passes any
    resource allow-list.
    """
    tokens = _SEPARATORS.split(scope_string, maxsplit=2)
    if len(tokens) < 3:
        return None

    subject, resource_type, rest = tokens
    raw_actions = rest.split("?", 1)[0]
    if not subject or not resource_type or not raw_actions:
        return None

    subjects = frozenset(valid_subjects or ())
    if subjects and subject not in subjects:
        return None

    resources = frozenset(valid_resources or ())
    if resources and resource_type != WILDCARD and resource_type not in resources:
        return None

    try:
        actions = tuple(_ACTION_CODES[ch] for ch in raw_actions)
    except KeyError:
        return None

    parameters = None
    if "?" in scope_string:
        parameters = MappingProxyType(_parse_params(scope_string.split("?")[1]))

    return PermissionScope(subject, resource_type, actions, parameters)


def require_scope(
    scope_string: str,
    valid_subjects: Iterable[str] | None = None,
    valid_resources: Iterable[str] | None = None,
) -> PermissionScope:
    """Like :func:`parse_permission_scope` but raise :class:`UnparsableScope`."""
    scope = parse_permission_scope(scope_string, valid_subjects, valid_resources)
    if scope is None:
        raise UnparsableScope(scope_string)
    return scope


def _parse_params(raw: str) -> dict[str, str]:
    params: dict[str, str] = {}
    for pair in raw.split("&"):
        pieces = pair.split("=")
        key = pieces[0]
        value = pieces[1] if len(pieces) > 1 else ""
        if key and value:
            params[key] = value
    return params
