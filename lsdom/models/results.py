from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict

NOT_AVAILABLE = "N/A"


class DomainRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    account: str
    parked_domains: str = NOT_AVAILABLE
    addon_domains: str = NOT_AVAILABLE
    sub_domains: str = NOT_AVAILABLE


class FetchFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    account: str
    reason: str


FetchResult = Union[DomainRecord, FetchFailure]
