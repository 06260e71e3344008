from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Optional

from ..models.config import RESERVED_ACCOUNTS, TargetMode
from ..utils.normalize import clean_accounts, normalize_account
from ..utils.ownership import OwnershipResolver
from ..utils.registry import AccountRegistry

logger = logging.getLogger(__name__)


class ArgumentError(ValueError):
    pass


class ResolveError(RuntimeError):
    def __init__(self, reason: str, message: str) -> None:
        super().__init__(message)
        self.reason = reason


def resolve_single(argument: Optional[str]) -> list[str]:
    if not argument:
        raise ArgumentError("No username provided.")
    if argument.startswith("-"):
        raise ArgumentError(f"Unknown option '{argument}'.")
    return [argument]


def resolve_list(argument: Optional[str]) -> list[str]:
    if not argument:
        raise ArgumentError("-U option requires a comma-separated list of usernames as an argument.")
    return clean_accounts(argument.split(","))


def resolve_file(argument: Optional[str]) -> list[str]:
    if not argument:
        raise ArgumentError("-F option requires a file path as an argument.")
    path = Path(argument)
    if not path.is_file():
        raise ResolveError("file_not_found", f"File not found or is not a regular file: '{argument}'")
    if not os.access(path, os.R_OK):
        raise ResolveError("file_unreadable", f"File is not readable: '{argument}'")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ResolveError("file_unreadable", f"File is not readable: '{argument}'") from exc
    return clean_accounts(text.splitlines())


def resolve_owner(argument: Optional[str], resolver: OwnershipResolver) -> list[str]:
    if not argument:
        raise ArgumentError("-d option requires a domain name as an argument.")
    owner = resolver.owner_of(argument)
    if not owner:
        raise ResolveError("no_owner", f"Could not find a cPanel user for domain '{argument}'.")
    return [normalize_account(owner)]


def resolve_all(registry: AccountRegistry, reserved: Iterable[str] = RESERVED_ACCOUNTS) -> list[str]:
    skip = set(reserved)
    return [name for name in registry.accounts() if name not in skip]


def resolve(
    mode: TargetMode,
    argument: Optional[str],
    resolver: OwnershipResolver,
    registry: AccountRegistry,
    reserved: Iterable[str] = RESERVED_ACCOUNTS,
) -> list[str]:
    """Turn a request mode and its argument into the ordered target accounts."""
    if mode == TargetMode.single:
        targets = resolve_single(argument)
    elif mode == TargetMode.account_list:
        targets = resolve_list(argument)
    elif mode == TargetMode.account_file:
        targets = resolve_file(argument)
    elif mode == TargetMode.domain_owner:
        targets = resolve_owner(argument, resolver)
    elif mode == TargetMode.all_accounts:
        targets = resolve_all(registry, reserved)
    else:
        raise ArgumentError(f"unsupported mode {mode!r}")
    logger.info("targets resolved", extra={"mode": mode.value, "count": len(targets)})
    return targets
