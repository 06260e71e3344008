from __future__ import annotations

import logging
from typing import Any

from ..models.results import DomainRecord, FetchFailure, FetchResult
from ..utils.inventory import InventoryError, InventoryProvider
from ..utils.normalize import join_domains, sub_domain_names

logger = logging.getLogger(__name__)


def _as_list(value: Any) -> list:
    if isinstance(value, list):
        return value
    return []


def _validate(payload: Any) -> tuple[dict | None, str | None]:
    result = payload.get("result") if isinstance(payload, dict) else None
    if not isinstance(result, dict):
        return None, "missing result"
    if result.get("status") != 1:
        return None, "status is not success"
    data = result.get("data")
    if not isinstance(data, dict):
        return None, "missing data"
    if not data.get("main_domain"):
        return None, "missing main domain"
    return data, None


def build_record(account: str, data: dict) -> DomainRecord:
    parked = [str(d) for d in _as_list(data.get("parked_domains")) if d]
    addon = [str(d) for d in _as_list(data.get("addon_domains")) if d]
    subs = sub_domain_names(_as_list(data.get("sub_domains")))
    return DomainRecord(
        account=account,
        parked_domains=join_domains(parked),
        addon_domains=join_domains(addon),
        sub_domains=join_domains(subs),
    )


def fetch(account: str, provider: InventoryProvider) -> FetchResult:
    """Query one account's inventory and normalize it into a DomainRecord.

    Every problem (query failure, bad payload, unsuccessful status or no
    primary domain) yields a FetchFailure instead of an exception.
    """
    try:
        payload = provider.list_domains(account)
    except InventoryError as exc:
        logger.debug("inventory query failed", extra={"account": account, "error": str(exc)})
        return FetchFailure(account=account, reason=str(exc))

    data, error = _validate(payload)
    if error:
        logger.debug("inventory rejected", extra={"account": account, "error": error})
        return FetchFailure(account=account, reason=error)
    return build_record(account, data)
