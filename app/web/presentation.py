# app/web/presentation.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Union
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit


@dataclass(frozen=True)
class StatusTheme:
    label: str
    background: str
    foreground: str
    border: str

    @property
    def css_vars(self) -> str:
        return (
            f"--status-bg: {self.background}; "
            f"--status-fg: {self.foreground}; "
            f"--status-border: {self.border};"
        )


STATUS_THEMES: Dict[str, StatusTheme] = {
    "Valid": StatusTheme("Valid", "#ecfdf3", "#027a48", "rgba(2, 122, 72, 0.2)"),
    "Expired": StatusTheme("Expired", "#fff7ed", "#9a3412", "rgba(250, 146, 70, 0.35)"),
    "Revoked": StatusTheme("Revoked", "#fef2f2", "#b91c1c", "rgba(248, 113, 113, 0.4)"),
}


def resolve_status_theme(status: Optional[str]) -> StatusTheme:
    if not status:
        return STATUS_THEMES["Valid"]
    return STATUS_THEMES.get(
        status,
        StatusTheme(status, "#eef2ff", "#1e3a8a", "rgba(59, 130, 246, 0.35)"),
    )


def format_date(value: Union[str, date, datetime, None]) -> Optional[str]:
    """``"2024-03-05T10:00:00Z"`` -> ``"5 Mar 2024"``; None when missing or unparsable."""
    if not value:
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    return f"{value.day} {value.strftime('%b')} {value.year}"


def embed_url(link: Optional[str]) -> Optional[str]:
    if not link:
        return None
    parts = urlsplit(link)
    if not parts.scheme or not parts.netloc:
        return None
    query = parse_qsl(parts.query, keep_blank_values=True)
    if not any(k == "embed" for k, _ in query):
        query.append(("embed", "true"))
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(query), parts.fragment))


def card_details(certificate: Mapping[str, Any]) -> List[Dict[str, str]]:
    details = [
        {"label": "Holder", "value": certificate.get("certificateHolder") or "Unknown holder"},
        {"label": "Address", "value": certificate.get("address") or "No address on record"},
        {"label": "Origin", "value": certificate.get("countryOfOrigin") or "Origin unavailable"},
        {"label": "Compliance body", "value": certificate.get("complianceBody") or "Not specified"},
    ]
    issued_on = format_date(certificate.get("dateOfIssue"))
    if issued_on:
        details.append({"label": "Issued", "value": issued_on})
    return details


def card_key(certificate: Mapping[str, Any], index: int) -> str:
    return str(certificate.get("id") or certificate.get("certificateNumber") or f"certificate-{index}")
