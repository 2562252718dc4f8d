"""SQLAlchemy Declarative Base — shared base class for the read-only invoice models.

Invariants:
    - All models inherit from Base
    - Base.metadata describes existing tables; the application never creates them
      (tests do, against SQLite)

Design Decisions:
    - Separate file for Base: avoids circular imports between models (ADR: SQLAlchemy best practice)
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all Consulta ORM models."""
    pass
