import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_MIGRATE"] = "false"

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_db
from app.db.base import Base
from app.main import app
from app.models.certificate import Certificate, CertificateStatus

SEED = [
    dict(
        certificate_number="DIL-2024-0001",
        certificate_holder="First Example Farms Cooperative",
        address="12 Coffee Lane, Huila",
        date_of_issue=datetime(2024, 3, 5, tzinfo=timezone.utc),
        status=CertificateStatus.valid,
        compliance_body="Dilify",
        country_of_origin="Colombia",
        certificate_canva_link="https://www.canva.com/design/DAF0001/view",
    ),
    dict(
        certificate_number="DIL-2024-0002",
        certificate_holder="Second Example Estates Ltd",
        address="Plot 7, Kumasi Road",
        date_of_issue=datetime(2024, 6, 21, tzinfo=timezone.utc),
        status=CertificateStatus.expired,
        compliance_body="Rainforest Alliance",
        country_of_origin="Ghana",
        certificate_canva_link="https://www.canva.com/design/DAF0002/view",
    ),
    dict(
        certificate_number="EUDR-2023-0107",
        certificate_holder="Third Harvest Traders",
        address="Av. Paulista 1000, Sao Paulo",
        date_of_issue=datetime(2023, 11, 30, tzinfo=timezone.utc),
        status=CertificateStatus.revoked,
        compliance_body="Dilify",
        country_of_origin="Brazil",
        certificate_canva_link="https://www.canva.com/design/DAF0107/view?utm_source=share",
    ),
    dict(
        certificate_number="X.Y-9",
        certificate_holder="A+B (Holdings) [Trust]",
        address=None,
        date_of_issue=datetime(2025, 1, 2, tzinfo=timezone.utc),
        status=CertificateStatus.valid,
        compliance_body="Dilify",
        country_of_origin=None,
        certificate_canva_link="https://assets.example.org/certs/xy9.pdf",
    ),
]


def _make_engine():
    return create_engine("sqlite://", poolclass=StaticPool, connect_args={"check_same_thread": False})


@pytest.fixture
def engine():
    eng = _make_engine()
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def db(engine):
    Session = sessionmaker(bind=engine, autoflush=False)
    with Session() as session:
        yield session


@pytest.fixture
def certificates(db):
    rows = [Certificate(**data) for data in SEED]
    db.add_all(rows)
    db.commit()
    return rows


def _override_db(engine):
    Session = sessionmaker(bind=engine, autoflush=False)

    def _get_db():
        session = Session()
        try:
            yield session
        finally:
            session.close()

    return _get_db


@pytest.fixture
def client(engine):
    app.dependency_overrides[get_db] = _override_db(engine)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def broken_client():
    """Client whose store has no tables, so every query fails."""
    eng = _make_engine()
    app.dependency_overrides[get_db] = _override_db(eng)
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
    app.dependency_overrides.clear()
    eng.dispose()
