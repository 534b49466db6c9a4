# app/models/certificate.py
from enum import Enum
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base_class import Base


class CertificateStatus(str, Enum):
    valid = "Valid"
    expired = "Expired"
    revoked = "Revoked"


DEFAULT_COMPLIANCE_BODY = "Dilify"


class Certificate(Base):
    """A compliance certificate. Rows are loaded by external data entry; the app only reads them."""

    __tablename__ = "certificates"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    certificate_number: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    certificate_holder: Mapped[str] = mapped_column(String(255))
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    date_of_issue: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    status: Mapped[CertificateStatus] = mapped_column(
        SAEnum(
            CertificateStatus,
            name="certificate_status",
            native_enum=False,
            length=16,
            values_callable=lambda e: [m.value for m in e],
        ),
        default=CertificateStatus.valid,
    )
    compliance_body: Mapped[str] = mapped_column(String(160), default=DEFAULT_COMPLIANCE_BODY)
    country_of_origin: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    certificate_canva_link: Mapped[str] = mapped_column(String(512))
