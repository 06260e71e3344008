from __future__ import annotations

from typing import Iterable

from ..models.results import NOT_AVAILABLE


def normalize_account(name: str) -> str:
    return name.strip()


def clean_accounts(names: Iterable[str]) -> list[str]:
    out = []
    for raw in names:
        value = normalize_account(raw)
        if value:
            out.append(value)
    return out


def join_domains(names: Iterable[str]) -> str:
    joined = ",".join(str(n) for n in names if n)
    return joined or NOT_AVAILABLE


def sub_domain_names(entries: Iterable[object]) -> list[str]:
    names: list[str] = []
    for entry in entries:
        if isinstance(entry, dict) and entry.get("domain"):
            names.append(str(entry["domain"]))
    return names
