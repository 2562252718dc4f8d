"""Invoice Queries — the single parameterized read behind /consulta and /consulta/csv.

Invariants:
    - Only rows whose coverage IDObSoc equals obra_social_id are returned
    - Emision filtered as half-open range [month.start, month.end)
    - Rows come back as plain dicts keyed by the database column names
    - Driver/SQL failures surface as DatabaseError, never as SQLAlchemy exceptions

Design Decisions:
    - SQLAlchemy Core select with labeled columns over raw SQL text: bound parameters,
      dialect-neutral date comparison, same query runs on MySQL and SQLite tests
    - Ordered by Emision, IDComprobante so JSON and CSV outputs are stable across calls
"""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from facturas_os.core.errors import DatabaseError, ErrorContext
from facturas_os.core.months import MonthRange
from facturas_os.models.invoice import FactCabecera, FactCobertura

logger = logging.getLogger(__name__)


def build_invoices_query(month: MonthRange, obra_social_id: str):
    """SELECT header + coverage columns for one insurer and one month."""
    return (
        select(
            FactCabecera.id_comprobante.label("IDComprobante"),
            FactCabecera.sucursal.label("Sucursal"),
            FactCabecera.emision.label("Emision"),
            FactCabecera.tipo.label("Tipo"),
            FactCabecera.letra.label("Letra"),
            FactCabecera.punto_vta.label("PuntoVta"),
            FactCabecera.numero.label("Numero"),
            FactCabecera.total_cobertura.label("TotalCobertura"),
            FactCabecera.total_comprobante.label("TotalComprobante"),
            FactCobertura.id_obra_social.label("IDObSoc"),
        )
        .join(
            FactCobertura,
            FactCabecera.id_comprobante == FactCobertura.id_comprobante,
        )
        .where(
            FactCobertura.id_obra_social == obra_social_id,
            FactCabecera.emision >= month.start,
            FactCabecera.emision < month.end,
        )
        .order_by(FactCabecera.emision, FactCabecera.id_comprobante)
    )


async def fetch_invoices(
    db: AsyncSession, month: MonthRange, obra_social_id: str,
) -> list[dict[str, Any]]:
    """Run the month query. Raises DatabaseError on any driver/SQL failure."""
    try:
        result = await db.execute(build_invoices_query(month, obra_social_id))
        rows = [dict(row) for row in result.mappings().all()]
    except SQLAlchemyError as e:
        logger.error(
            f"Invoice query failed for {month.month}: {e}",
            extra={"mes": month.month},
        )
        raise DatabaseError(
            "Invoice query failed", "query", ErrorContext(month=month.month),
        ) from e

    logger.info(
        f"Fetched {len(rows)} invoices for {month.month}",
        extra={"mes": month.month, "row_count": len(rows)},
    )
    return rows
