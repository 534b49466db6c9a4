# app/db/base.py
from app.db.base_class import Base  # noqa: F401

# register every model on the metadata (alembic + create_all)
import app.models.certificate  # noqa: F401

__all__ = ["Base"]
