# app/client/registry.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import httpx

from app.client.normalizer import ResultState, normalize_response
from app.services.assets import FALLBACK_MESSAGE, AssetUnavailable, DesignAsset, fetch_design_asset

logger = logging.getLogger(__name__)

API_PATH = "/api/v1/certificates"

EMPTY_SEARCH_MESSAGE = "Enter a holder name, certificate number, or location."
FETCH_FAILED_MESSAGE = "Unable to reach the certificate service right now."
SEARCH_FAILED_MESSAGE = "Unable to search certificates right now."


@dataclass(frozen=True)
class DownloadResult:
    asset: Optional[DesignAsset] = None
    fallback_url: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.asset is not None


class RegistryClient:
    """Talks to the lookup endpoint and turns every outcome into a ResultState.

    Nothing raises to the caller: transport and decoding failures become an
    informational message.
    """

    def __init__(self, base_url: str, http: Optional[httpx.Client] = None, timeout: float = 15.0):
        self.base_url = base_url.rstrip("/")
        self._http = http or httpx.Client(timeout=timeout)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "RegistryClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _get(self, params: Dict[str, str], failure_message: str) -> ResultState:
        try:
            resp = self._http.get(f"{self.base_url}{API_PATH}", params=params)
            data: Any = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Certificate request failed (%s): %s", params or "all", exc)
            return ResultState(info_message=failure_message, has_searched=True)
        return normalize_response(data).searched()

    # ---------------------------- queries ----------------------------

    def fetch_all(self) -> ResultState:
        return self._get({}, FETCH_FAILED_MESSAGE)

    def search(self, term: str) -> ResultState:
        term = (term or "").strip()
        if not term:
            return ResultState(info_message=EMPTY_SEARCH_MESSAGE, has_searched=False)
        return self._get({"search": term}, SEARCH_FAILED_MESSAGE)

    def lookup(self, *, id: Optional[str] = None, certificate_number: Optional[str] = None) -> ResultState:
        params: Dict[str, str] = {}
        if id and id.strip():
            params["id"] = id.strip()
        if certificate_number and certificate_number.strip():
            params["certificateNumber"] = certificate_number.strip()
        if not params:
            return ResultState(info_message=EMPTY_SEARCH_MESSAGE, has_searched=False)
        return self._get(params, SEARCH_FAILED_MESSAGE)

    # ---------------------------- download ----------------------------

    def download(self, certificate: Mapping[str, Any]) -> DownloadResult:
        link = certificate.get("certificateCanvaLink")
        if not link:
            return DownloadResult(error="No preview available")
        try:
            asset = fetch_design_asset(link, certificate.get("certificateNumber"), self._http)
        except AssetUnavailable:
            logger.info("Direct download failed, falling back to the original link %s", link)
            return DownloadResult(fallback_url=link, error=FALLBACK_MESSAGE)
        return DownloadResult(asset=asset)
