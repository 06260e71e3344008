from __future__ import annotations

from pathlib import Path
from typing import Iterator, Protocol


class AccountRegistry(Protocol):
    def accounts(self) -> Iterator[str]:
        ...


class DirectoryAccountRegistry:
    """Accounts are the regular files directly under the users directory."""

    def __init__(self, users_dir: str = "/var/cpanel/users") -> None:
        self.users_dir = Path(users_dir)

    def accounts(self) -> Iterator[str]:
        if not self.users_dir.is_dir():
            return
        for path in sorted(self.users_dir.iterdir()):
            if path.is_file():
                yield path.name
