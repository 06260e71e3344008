from __future__ import annotations

from ..models.results import DomainRecord

ACCOUNT_WIDTH = 25
PARKED_WIDTH = 40
ADDON_WIDTH = 40
SUB_WIDTH = 45
WIDTHS = (ACCOUNT_WIDTH, PARKED_WIDTH, ADDON_WIDTH, SUB_WIDTH)

HEADER_LABELS = ("Username", "Parked Domains", "Addon Domains", "Sub-Domains")


def _format_line(values: tuple[str, ...]) -> str:
    # values wider than their column overflow rather than being truncated
    cells = [f"{value:<{width}}" for value, width in zip(values, WIDTHS)]
    return "| " + " | ".join(cells) + " |"


def build_separator() -> str:
    return "|-" + "-|-".join("-" * width for width in WIDTHS) + "-|"


def build_header() -> str:
    return _format_line(HEADER_LABELS) + "\n" + build_separator()


def build_row(record: DomainRecord) -> str:
    return _format_line(
        (record.account, record.parked_domains, record.addon_domains, record.sub_domains)
    )
