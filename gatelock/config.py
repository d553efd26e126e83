from dataclasses import dataclass
import os
from typing import Tuple

from dotenv import find_dotenv, load_dotenv

from .checker import PermissionChecker


def _split_list(raw: str) -> Tuple[str, ...]:
    """'a, b,,c' -> ('a', 'b', 'c')"""
    return tuple(filter(None, (p.strip() for p in raw.split(","))))


@dataclass
class Config:
    subjects: Tuple[str, ...] = ()
    resources: Tuple[str, ...] = ()
    grants: Tuple[str, ...] = ()
    log_path: str = "gatelock.log"
    audit_enabled: bool = False


def load_config():
    load_dotenv(find_dotenv(usecwd=True), override=True)
    return Config(
        subjects=_split_list(os.getenv("GATELOCK_SUBJECTS", "")),
        resources=_split_list(os.getenv("GATELOCK_RESOURCES", "")),
        grants=_split_list(os.getenv("GATELOCK_GRANTS", "")),
        log_path=os.getenv("GATELOCK_LOG_PATH", "gatelock.log"),
        audit_enabled=os.getenv("GATELOCK_AUDIT_ENABLED", "false").lower() == "true",
    )


def build_checker(config: Config) -> PermissionChecker:
    return PermissionChecker(config.grants, config.subjects, config.resources)
