from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable

from ..models.results import DomainRecord, FetchFailure
from ..modules import targets as target_resolver
from ..modules.fetch import fetch
from ..pipeline.context import RunContext
from ..reporting.table import build_header, build_row
from ..utils.inventory import InventoryProvider

logger = logging.getLogger(__name__)

Emitter = Callable[[str], None]


@dataclass
class ReportState:
    header_emitted: bool = False
    skipped: list[str] = field(default_factory=list)

    @property
    def has_data(self) -> bool:
        return self.header_emitted


def _render(record: DomainRecord, state: ReportState, emit: Emitter) -> None:
    if not state.header_emitted:
        emit(build_header())
        state.header_emitted = True
    emit(build_row(record))


def aggregate(
    targets: Iterable[str],
    provider: InventoryProvider,
    emit: Emitter,
    state: ReportState | None = None,
) -> list[DomainRecord]:
    """Fetch each target in order and render every record as soon as it arrives.

    Failed accounts are recorded on the state and otherwise skipped.
    """
    state = state if state is not None else ReportState()
    records: list[DomainRecord] = []
    for account in targets:
        result = fetch(account, provider)
        if isinstance(result, FetchFailure):
            state.skipped.append(result.account)
            continue
        _render(result, state, emit)
        records.append(result)
    if state.skipped:
        logger.info("accounts skipped", extra={"count": len(state.skipped), "accounts": state.skipped})
    return records


def run_report(context: RunContext, emit: Emitter, state: ReportState | None = None) -> ReportState:
    state = state if state is not None else ReportState()
    config = context.config
    targets = target_resolver.resolve(
        config.mode,
        config.argument,
        context.ownership,
        context.registry,
        config.reserved_accounts,
    )
    aggregate(targets, context.inventory, emit, state)
    return state
