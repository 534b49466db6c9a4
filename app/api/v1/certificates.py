# app/api/v1/certificates.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.services.lookup import lookup_certificates
from app.services.search import LookupParams

router = APIRouter()


@router.get("", summary="Look up certificates by identifier or free text")
def list_certificates(
    id: Optional[str] = Query(None, description="Certificate number or internal id; returns a single record"),
    certificate_number: Optional[str] = Query(None, alias="certificateNumber", description="Exact certificate number"),
    holder: Optional[str] = Query(None, description="Loose match on the holder name"),
    search: Optional[str] = Query(None, description="Loose match on holder, number, compliance body, country or address"),
    db: Session = Depends(get_db),
):
    params = LookupParams.from_raw(id=id, certificate_number=certificate_number, holder=holder, search=search)
    result = lookup_certificates(db, params)
    return JSONResponse(status_code=result.status_code, content=result.payload)
