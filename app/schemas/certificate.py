# app/schemas/certificate.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.models.certificate import CertificateStatus


class Certificate(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True, alias_generator=to_camel)

    id: int
    certificate_number: str
    certificate_holder: str
    address: Optional[str] = None
    date_of_issue: Optional[datetime] = None
    status: CertificateStatus
    compliance_body: Optional[str] = None
    country_of_origin: Optional[str] = None
    certificate_canva_link: str


class Message(BaseModel):
    message: str
    error: Optional[str] = None
