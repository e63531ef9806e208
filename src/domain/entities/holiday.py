"""
Domain entity for a public holiday as reported by a holiday provider.
Zero external dependencies — pure Python dataclass only.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class HolidayRecord:
    date: str
    name: str
    local_name: str
    is_global: bool
    types: tuple[str, ...] = ()
