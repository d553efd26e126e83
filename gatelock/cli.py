"""
gatelock.cli
~~~~~~~~~~~~
Check scope strings against the grants configured in the environment:

    $ GATELOCK_GRANTS="user/orders.r" gatelock user/orders.r admin/users.c
    ALLOW user/orders.r
    DENY admin/users.c
"""

from __future__ import annotations

import sys
from typing import Optional, Sequence

from .config import build_checker, load_config
from .logger import DecisionLogger


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print("usage: gatelock SCOPE [SCOPE ...]", file=sys.stderr)
        return 2

    config = load_config()
    checker = build_checker(config)
    audit = DecisionLogger(config.log_path) if config.audit_enabled else None

    all_allowed = True
    try:
        for scope in args:
            allowed = checker.can(scope)
            all_allowed = all_allowed and allowed
            print(f"{'ALLOW' if allowed else 'DENY'} {scope}")
            if audit:
                audit.decision(scope, allowed)
    finally:
        if audit:
            audit.close()
    return 0 if all_allowed else 1
