from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel

RESERVED_ACCOUNTS = ("system", "nobody", "cpanel")


class TargetMode(str, Enum):
    single = "single"
    domain_owner = "domain-owner"
    account_list = "account-list"
    account_file = "account-file"
    all_accounts = "all"


class LogLevel(str, Enum):
    debug = "DEBUG"
    info = "INFO"
    warning = "WARNING"
    error = "ERROR"


class RunConfig(BaseModel):
    mode: TargetMode
    argument: Optional[str] = None
    uapi_command: str = "uapi"
    whoowns_command: str = "/scripts/whoowns"
    users_dir: str = "/var/cpanel/users"
    reserved_accounts: tuple[str, ...] = RESERVED_ACCOUNTS
    log_level: LogLevel = LogLevel.warning

    @property
    def interruptible(self) -> bool:
        return self.mode == TargetMode.all_accounts
