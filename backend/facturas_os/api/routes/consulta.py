"""Consulta Routes — monthly invoice listing as JSON and as CSV download.

Invariants:
    - 'mes' validated before any database access (400 on failure)
    - Both routes run the same query (infrastructure/invoice_queries.py)
    - /consulta returns rows as the driver produced them, [] for an empty month;
      /consulta/csv returns 404 for an empty month
    - Database failures become a generic 500 with the route's public_error message

Design Decisions:
    - Thin routes: parsing and CSV rendering live in core/, the query in infrastructure/
    - No response_model: column values pass through untouched (zero-padded
      PuntoVta/Numero stay strings), only Decimal is turned into a JSON number
    - CSV built fully in memory: one month of one insurer is small
"""

import logging
from decimal import Decimal

from fastapi import APIRouter, Depends, Query
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from facturas_os.api.error_handlers import public_error
from facturas_os.config import Settings, get_settings
from facturas_os.core.csv_export import export_filename, render_csv
from facturas_os.core.errors import NoDataError
from facturas_os.core.months import parse_month
from facturas_os.infrastructure.database import get_db
from facturas_os.infrastructure.invoice_queries import fetch_invoices

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/consulta", tags=["consulta"])

QUERY_ERROR_MESSAGE = "Error en la consulta"
CSV_ERROR_MESSAGE = "Error al generar CSV"


@router.get("", dependencies=[Depends(public_error(QUERY_ERROR_MESSAGE))])
async def list_invoices(
    mes: str | None = Query(default=None, description="Month as YYYY-MM"),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Invoices of the configured obra social issued during 'mes'."""
    month = parse_month(mes)
    rows = await fetch_invoices(db, month, settings.obra_social_id)
    return JSONResponse(
        content=jsonable_encoder(rows, custom_encoder={Decimal: float}),
    )


@router.get("/csv", dependencies=[Depends(public_error(CSV_ERROR_MESSAGE))])
async def export_invoices_csv(
    mes: str | None = Query(default=None, description="Month as YYYY-MM"),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Same rows as GET /consulta, as a ';'-separated CSV attachment."""
    month = parse_month(mes)
    rows = await fetch_invoices(db, month, settings.obra_social_id)
    if not rows:
        raise NoDataError(month.month)

    filename = export_filename(settings.export_filename_prefix, month.month)
    logger.info(
        f"CSV export {filename} with {len(rows)} rows",
        extra={"mes": month.month, "row_count": len(rows)},
    )
    return Response(
        content=render_csv(rows).encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
