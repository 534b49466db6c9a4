# app/services/lookup.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from fastapi.encoders import jsonable_encoder
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.certificate import Certificate
from app.schemas.certificate import Certificate as CertificateOut, Message
from app.services.search import LookupParams, build_filter, build_ordering

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LookupResult:
    status_code: int
    payload: Any  # dict (single record / message) or list of records


def _to_out(c: Certificate) -> dict:
    return CertificateOut.model_validate(c).model_dump(mode="json", by_alias=True)


def _message(status_code: int, message: str, error: str | None = None) -> LookupResult:
    return LookupResult(status_code, jsonable_encoder(Message(message=message, error=error), exclude_none=True))


def lookup_certificates(db: Session, params: LookupParams) -> LookupResult:
    """Run a registry lookup and map it to the wire shapes.

    - identifier lookup with no match -> 404 message
    - no match otherwise              -> 200 []
    - ``id`` lookup                   -> 200 single record
    - anything else                   -> 200 list of records
    - store failure                   -> 500 message with the error text
    """
    stmt = select(Certificate).order_by(*build_ordering(params))
    criteria = build_filter(params)
    if criteria:
        stmt = stmt.where(*criteria)
    try:
        rows = db.execute(stmt).scalars().all()
    except SQLAlchemyError as exc:
        logger.exception("Error fetching certificates from the store")
        return _message(500, "Error fetching data", str(exc))

    ident = params.lookup_identifier
    if not rows:
        if ident:
            return _message(404, f"Certificate {ident} not found")
        return LookupResult(200, [])

    if params.id:
        return LookupResult(200, _to_out(rows[0]))
    return LookupResult(200, [_to_out(c) for c in rows])
