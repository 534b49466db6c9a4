# app/api/v1/router.py
from fastapi import APIRouter

from app.api.v1 import certificates

api_router = APIRouter()

api_router.include_router(certificates.router, prefix="/certificates", tags=["certificates"])
