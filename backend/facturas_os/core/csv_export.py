"""CSV Export — maps invoice rows to the spreadsheet-friendly Spanish CSV layout.

Invariants:
    - Column order and labels are fixed (CSV_COLUMNS); every row has every column
    - Totals use ',' as decimal separator with exactly two decimals (half-up)
    - Output starts with the UTF-8 BOM and uses ';' as delimiter
    - Pure functions: no IO, no settings lookup

Design Decisions:
    - BOM + ';' + decimal comma: what Excel in es-AR locale opens without an import wizard
    - stdlib csv writer handles quoting of labels or values containing ';' or quotes
"""

import csv
import io
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, Mapping

UTF8_BOM = "\ufeff"
CSV_DELIMITER = ";"

CSV_COLUMNS: tuple[tuple[str, str], ...] = (
    ("IDComprobante", "ID Comprobante"),
    ("Sucursal", "Sucursal"),
    ("Emision", "Fecha Emisión"),
    ("Tipo", "Tipo"),
    ("Letra", "Letra"),
    ("PuntoVta", "Punto de Venta"),
    ("Numero", "Número"),
    ("TotalCobertura", "Total Cobertura"),
    ("TotalComprobante", "Total Comprobante"),
    ("IDObSoc", "Obra Social"),
)

DECIMAL_FIELDS = frozenset({"TotalCobertura", "TotalComprobante"})

_TWO_PLACES = Decimal("0.01")


def format_decimal_comma(value: Any) -> str:
    """1234.5 → '1234,50'. None → ''."""
    if value is None or value == "":
        return ""
    amount = Decimal(str(value)).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)
    return f"{amount:.2f}".replace(".", ",")


def format_issue_date(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def _format_cell(field_name: str, value: Any) -> str:
    if field_name in DECIMAL_FIELDS:
        return format_decimal_comma(value)
    if field_name == "Emision":
        return format_issue_date(value)
    return "" if value is None else str(value)


def to_csv_row(row: Mapping[str, Any]) -> dict[str, str]:
    """Map one query row (database column names) to labeled, formatted cells."""
    return {
        label: _format_cell(field_name, row.get(field_name))
        for field_name, label in CSV_COLUMNS
    }


def render_csv(rows: Iterable[Mapping[str, Any]]) -> str:
    """Serialize rows to BOM-prefixed, ';'-delimited CSV text with a header row."""
    buffer = io.StringIO()
    writer = csv.DictWriter(
        buffer,
        fieldnames=[label for _, label in CSV_COLUMNS],
        delimiter=CSV_DELIMITER,
        lineterminator="\r\n",
    )
    writer.writeheader()
    for row in rows:
        writer.writerow(to_csv_row(row))
    return UTF8_BOM + buffer.getvalue()


def export_filename(prefix: str, month: str) -> str:
    """Attachment name, e.g. Facturas_OS_Nueva_Villa_2024-03.csv."""
    return f"{prefix}_{month}.csv"
