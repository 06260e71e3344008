from __future__ import annotations

import logging
from typing import Optional, Protocol

from .command import CommandError, run_command

logger = logging.getLogger(__name__)

NO_OWNER = "nobody"


class OwnershipResolver(Protocol):
    def owner_of(self, domain: str) -> Optional[str]:
        ...


class WhoownsResolver:
    def __init__(self, command: str = "/scripts/whoowns") -> None:
        self.command = command

    def owner_of(self, domain: str) -> Optional[str]:
        try:
            output = run_command([self.command, domain])
        except CommandError as exc:
            logger.info("ownership lookup failed", extra={"domain": domain, "error": str(exc)})
            return None
        owner = output.strip()
        if not owner or owner == NO_OWNER:
            return None
        return owner
