from __future__ import annotations

import json
from typing import Any, Protocol, runtime_checkable

from .command import CommandError, run_command


class InventoryError(RuntimeError):
    pass


@runtime_checkable
class InventoryProvider(Protocol):
    def list_domains(self, account: str) -> dict[str, Any]:
        """Return the raw structured inventory for one account."""
        ...


class UapiInventoryProvider:
    def __init__(self, command: str = "uapi") -> None:
        self.command = command

    def argv(self, account: str) -> list[str]:
        return [self.command, f"--user={account}", "DomainInfo", "list_domains", "--output=json"]

    def list_domains(self, account: str) -> dict[str, Any]:
        try:
            output = run_command(self.argv(account))
        except CommandError as exc:
            raise InventoryError(str(exc)) from exc
        try:
            data = json.loads(output)
        except json.JSONDecodeError as exc:
            raise InventoryError(f"malformed inventory output for {account}: {exc}") from exc
        if not isinstance(data, dict):
            raise InventoryError(f"unexpected inventory payload for {account}")
        return data
