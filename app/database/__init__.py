"""
Declarative base shared by every table of the energy tracker.

Alembic's env.py imports ``Base.metadata`` after loading app.database.schemas.
"""
from sqlalchemy.orm import declarative_base

Base = declarative_base()

__all__ = ["Base"]
