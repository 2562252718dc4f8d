"""Invoice ORM — header and coverage tables of the accounting system.

Invariants:
    - Column names match the existing schema exactly (IDComprobante, Emision, ...)
    - Read-only: nothing in this application inserts, updates or deletes rows
    - factcoberturas joins factcabecera on IDComprobante

Design Decisions:
    - Python attributes in snake_case, DB names passed explicitly to mapped_column
    - Composite key on factcoberturas (IDComprobante, IDObSoc): one coverage per insurer per invoice
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import Date, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from facturas_os.db.base import Base


class FactCabecera(Base):
    """Invoice header."""
    __tablename__ = "factcabecera"

    id_comprobante: Mapped[int] = mapped_column(
        "IDComprobante", Integer, primary_key=True,
    )
    sucursal: Mapped[int | None] = mapped_column("Sucursal", Integer)
    emision: Mapped[date] = mapped_column("Emision", Date, nullable=False)
    tipo: Mapped[str | None] = mapped_column("Tipo", String(4))
    letra: Mapped[str | None] = mapped_column("Letra", String(1))
    punto_vta: Mapped[int | None] = mapped_column("PuntoVta", Integer)
    numero: Mapped[int | None] = mapped_column("Numero", Integer)
    total_cobertura: Mapped[Decimal | None] = mapped_column(
        "TotalCobertura", Numeric(14, 2),
    )
    total_comprobante: Mapped[Decimal | None] = mapped_column(
        "TotalComprobante", Numeric(14, 2),
    )


class FactCobertura(Base):
    """Coverage line: which insurer (obra social) covers an invoice."""
    __tablename__ = "factcoberturas"

    id_comprobante: Mapped[int] = mapped_column(
        "IDComprobante", Integer,
        ForeignKey("factcabecera.IDComprobante"), primary_key=True,
    )
    id_obra_social: Mapped[str] = mapped_column(
        "IDObSoc", String(10), primary_key=True,
    )
