from __future__ import annotations

from dataclasses import dataclass

from ..models.config import RunConfig
from ..utils.inventory import InventoryProvider, UapiInventoryProvider
from ..utils.ownership import OwnershipResolver, WhoownsResolver
from ..utils.registry import AccountRegistry, DirectoryAccountRegistry


@dataclass
class RunContext:
    config: RunConfig
    inventory: InventoryProvider
    ownership: OwnershipResolver
    registry: AccountRegistry

    @classmethod
    def from_config(cls, config: RunConfig) -> "RunContext":
        return cls(
            config=config,
            inventory=UapiInventoryProvider(config.uapi_command),
            ownership=WhoownsResolver(config.whoowns_command),
            registry=DirectoryAccountRegistry(config.users_dir),
        )
