# app/services/search.py
"""
Query builder for the certificate registry.

Free text becomes a "loose" regex: whitespace separated tokens, each escaped
for literal matching, joined with ``.*`` so they must appear in order with
anything in between. The same pattern is OR-ed across the searchable columns
unless an exact identifier was given, which narrows the query instead.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import case, or_
from sqlalchemy.sql.elements import ColumnElement

from app.models.certificate import Certificate

# the subset every backend (python re, PostgreSQL ARE, MySQL ICU) agrees on
_REGEX_SPECIALS = re.compile(r"[.*+?^${}()|\[\]\\]")

# inline case-insensitive flag, understood by all of the above
CASE_INSENSITIVE = "(?i)"

SEARCH_COLUMNS = (
    Certificate.certificate_holder,
    Certificate.certificate_number,
    Certificate.compliance_body,
    Certificate.country_of_origin,
    Certificate.address,
)


def escape_regex(value: str) -> str:
    return _REGEX_SPECIALS.sub(lambda m: "\\" + m.group(0), value)


def tokenize(raw: str) -> List[str]:
    return raw.split()


def build_loose_regex(raw: str) -> str:
    tokens = tokenize(raw or "")
    if not tokens:
        raise ValueError("search text must contain at least one token")
    return CASE_INSENSITIVE + ".*".join(escape_regex(t) for t in tokens)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class LookupParams:
    id: Optional[str] = None
    certificate_number: Optional[str] = None
    holder: Optional[str] = None
    search: Optional[str] = None

    @classmethod
    def from_raw(
        cls,
        id: Optional[str] = None,
        certificate_number: Optional[str] = None,
        holder: Optional[str] = None,
        search: Optional[str] = None,
    ) -> "LookupParams":
        return cls(
            id=_clean(id),
            certificate_number=_clean(certificate_number),
            holder=_clean(holder),
            search=_clean(search),
        )

    @property
    def lookup_identifier(self) -> Optional[str]:
        return self.id or self.certificate_number

    @property
    def search_term(self) -> Optional[str]:
        return self.search or self.holder


def _identifier_criterion(ident: str) -> ColumnElement[bool]:
    if ident.isascii() and ident.isdigit() and len(ident) <= 18:
        return or_(Certificate.certificate_number == ident, Certificate.id == int(ident))
    return Certificate.certificate_number == ident


def build_filter(params: LookupParams) -> List[ColumnElement[bool]]:
    """Translate lookup parameters into WHERE criteria (AND-ed by the caller).

    Precedence:
      - ``certificate_number`` is an exact match and replaces ``id``;
      - ``id`` matches the certificate number or, when numeric, the primary key;
      - ``holder`` narrows on the holder column;
      - the search term (``search``, else ``holder``) is OR-ed across
        ``SEARCH_COLUMNS`` only when no identifier was given.
    """
    criteria: List[ColumnElement[bool]] = []

    if params.certificate_number:
        criteria.append(Certificate.certificate_number == params.certificate_number)
    elif params.id:
        criteria.append(_identifier_criterion(params.id))

    if params.holder:
        criteria.append(Certificate.certificate_holder.regexp_match(build_loose_regex(params.holder)))

    term = params.search_term
    if term and not params.lookup_identifier:
        pattern = build_loose_regex(term)
        criteria.append(or_(*(col.regexp_match(pattern) for col in SEARCH_COLUMNS)))

    return criteria


def build_ordering(params: LookupParams) -> List[ColumnElement]:
    """Row order for a lookup; an exact certificate-number hit on ``id`` comes before a primary-key hit."""
    if params.id and not params.certificate_number:
        return [case((Certificate.certificate_number == params.id, 0), else_=1), Certificate.id]
    return [Certificate.id]
