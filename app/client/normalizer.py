# app/client/normalizer.py
"""
Interprets the lookup endpoint's three response shapes (array, single record,
message object) and derives what the results panel shows.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional

NO_RESULTS = "No certificates found."

CertificateData = Dict[str, Any]


def is_api_message(value: Any) -> bool:
    return isinstance(value, Mapping) and isinstance(value.get("message"), str)


def is_certificate(value: Any) -> bool:
    return isinstance(value, Mapping)


@dataclass(frozen=True)
class ResultState:
    certificates: List[CertificateData] = field(default_factory=list)
    info_message: Optional[str] = None
    loading: bool = False
    has_searched: bool = False

    def searched(self) -> "ResultState":
        return replace(self, has_searched=True)

    @property
    def count(self) -> int:
        return len(self.certificates)

    @property
    def subtitle(self) -> str:
        if self.loading:
            return "Hang tight while we reach the compliance vault..."
        if self.info_message:
            return self.info_message
        if self.count == 0 and self.has_searched:
            return "No matches yet - try refining your search."
        if self.count > 1:
            return f"{self.count} certificates matched your query."
        if self.count == 1:
            return "One certificate matches your query."
        return "Pull recent certificates or search across holders, numbers, and more."

    @property
    def count_label(self) -> str:
        if self.loading:
            return "Searching registry..."
        if self.count > 1:
            return f"{self.count} results"
        if self.count == 1:
            return "1 result"
        if self.has_searched:
            return "0 results"
        return "Awaiting search"

    @property
    def show_empty_state(self) -> bool:
        return not self.loading and self.count == 0 and self.has_searched


def normalize_response(data: Any) -> ResultState:
    if isinstance(data, list):
        records = [dict(item) for item in data if is_certificate(item)]
        return ResultState(certificates=records, info_message=None if records else NO_RESULTS)

    if is_api_message(data):
        return ResultState(info_message=data["message"])

    if is_certificate(data):
        return ResultState(certificates=[dict(data)])

    return ResultState(info_message=NO_RESULTS)
