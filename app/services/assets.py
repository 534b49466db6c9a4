# app/services/assets.py
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = (
    "Canva only allows downloads from within their interface. Opening the design in a new tab."
)


class AssetUnavailable(Exception):
    def __init__(self, url: str, reason: str):
        super().__init__(f"Failed to fetch certificate: {reason}")
        self.url = url
        self.reason = reason


@dataclass(frozen=True)
class DesignAsset:
    filename: str
    content: bytes
    media_type: str


def extension_for(content_type: str) -> str:
    content_type = (content_type or "").lower()
    if "pdf" in content_type:
        return "pdf"
    if "png" in content_type:
        return "png"
    if "jpeg" in content_type:
        return "jpg"
    return "bin"


def asset_filename(certificate_number: Optional[str], content_type: str) -> str:
    return f"{certificate_number or 'certificate'}.{extension_for(content_type)}"


def content_disposition(filename: str) -> str:
    """Attachment header with an ASCII fallback name plus the RFC 5987 UTF-8 name."""
    fallback = re.sub(r'[^\x20-\x7e]|["\\]', "_", filename)
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


def fetch_design_asset(
    url: str,
    certificate_number: Optional[str],
    http: httpx.Client,
) -> DesignAsset:
    """Download the externally hosted design; raises AssetUnavailable on any failure."""
    try:
        resp = http.get(url, follow_redirects=True)
    except httpx.HTTPError as exc:
        logger.warning("Direct download of %s failed: %s", url, exc)
        raise AssetUnavailable(url, str(exc)) from exc

    if not resp.is_success:
        logger.warning("Direct download of %s failed with HTTP %s", url, resp.status_code)
        raise AssetUnavailable(url, resp.reason_phrase or str(resp.status_code))

    media_type = resp.headers.get("content-type", "")
    return DesignAsset(
        filename=asset_filename(certificate_number, media_type),
        content=resp.content,
        media_type=media_type or "application/octet-stream",
    )
