# app/web/routes.py
from __future__ import annotations

import logging
import os
from typing import Dict, Generator, Optional
from urllib.parse import quote, urlencode

import httpx
from fastapi import APIRouter, Depends, HTTPException, Path, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.client.normalizer import ResultState, normalize_response
from app.client.registry import EMPTY_SEARCH_MESSAGE
from app.core.config import settings
from app.services.assets import AssetUnavailable, content_disposition, fetch_design_asset
from app.services.lookup import lookup_certificates
from app.services.search import LookupParams
from app.web import presentation

logger = logging.getLogger(__name__)

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")
templates = Jinja2Templates(directory=TEMPLATES_DIR)
templates.env.globals.update(
    status_theme=presentation.resolve_status_theme,
    card_details=presentation.card_details,
    card_key=presentation.card_key,
    embed_url=presentation.embed_url,
)
templates.env.filters["path_quote"] = lambda v: quote(str(v), safe="")

router = APIRouter()


def get_http_client() -> Generator[httpx.Client, None, None]:
    with httpx.Client(timeout=settings.ASSET_TIMEOUT_SECONDS) as client:
        yield client


def _find_by_number(db: Session, certificate_number: str) -> Optional[dict]:
    result = lookup_certificates(db, LookupParams.from_raw(certificate_number=certificate_number))
    state = normalize_response(result.payload)
    return state.certificates[0] if state.certificates else None


# ----------------------------- registry page -----------------------------

@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def registry_page(
    request: Request,
    search: Optional[str] = Query(None),
    fetch_all: bool = Query(False, alias="all"),
    preview: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    query: Dict[str, str] = {}
    state = ResultState()

    if search is not None:
        term = search.strip()
        if not term:
            # rejected before the store is queried
            state = ResultState(info_message=EMPTY_SEARCH_MESSAGE, has_searched=False)
        else:
            query["search"] = term
            result = lookup_certificates(db, LookupParams.from_raw(search=term))
            state = normalize_response(result.payload).searched()
    elif fetch_all:
        query["all"] = "1"
        result = lookup_certificates(db, LookupParams())
        state = normalize_response(result.payload).searched()

    active = _find_by_number(db, preview) if preview and preview.strip() else None

    base_qs = urlencode(query)
    return templates.TemplateResponse(
        request,
        "registry.html",
        {
            "state": state,
            "search_term": search or "",
            "active": active,
            "close_url": f"/?{base_qs}" if base_qs else "/",
            "preview_base": f"/?{base_qs}&preview=" if base_qs else "/?preview=",
        },
    )


# ------------------------------- download --------------------------------

@router.get("/certificates/{certificate_number}/download", include_in_schema=False)
def download_certificate(
    certificate_number: str = Path(..., min_length=1),
    db: Session = Depends(get_db),
    http: httpx.Client = Depends(get_http_client),
):
    certificate = _find_by_number(db, certificate_number)
    if not certificate:
        raise HTTPException(status_code=404, detail=f"Certificate {certificate_number} not found")

    link = certificate.get("certificateCanvaLink")
    if not link:
        raise HTTPException(status_code=404, detail="No preview available")

    try:
        asset = fetch_design_asset(link, certificate.get("certificateNumber"), http)
    except AssetUnavailable:
        logger.info("Direct download failed, opening original link for %s", certificate_number)
        return RedirectResponse(link, status_code=307)

    return Response(
        content=asset.content,
        media_type=asset.media_type,
        headers={"Content-Disposition": content_disposition(asset.filename)},
    )
