"""Root conftest — shared test configuration and database fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database with both invoice tables
    - seed_invoices inserts rows for obra social 2099 and rows that must be filtered out

Design Decisions:
    - SQLite in-memory: fast, no external dependency; the query is dialect-neutral
"""

import os
from datetime import date
from decimal import Decimal

# Ensure tests never reach a real MySQL server
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)

from facturas_os.db.base import Base  # noqa: E402
from facturas_os.models.invoice import FactCabecera, FactCobertura  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


def _invoice(id_comprobante, emision, obra_social, total_cobertura, total):
    return [
        FactCabecera(
            id_comprobante=id_comprobante,
            sucursal=1,
            emision=emision,
            tipo="FC",
            letra="B",
            punto_vta=3,
            numero=1000 + id_comprobante,
            total_cobertura=total_cobertura,
            total_comprobante=total,
        ),
        FactCobertura(
            id_comprobante=id_comprobante, id_obra_social=obra_social,
        ),
    ]


@pytest.fixture
async def seed_invoices(test_db):
    """Two March 2024 invoices for obra social 2099, plus rows that must be filtered out."""
    rows = [
        *_invoice(1, date(2024, 3, 1), "2099", Decimal("1234.50"), Decimal("1500.00")),
        *_invoice(2, date(2024, 3, 31), "2099", Decimal("80.25"), Decimal("100.00")),
        # Other obra social, same month
        *_invoice(3, date(2024, 3, 15), "1001", Decimal("10.00"), Decimal("20.00")),
        # Same obra social, adjacent months
        *_invoice(4, date(2024, 2, 29), "2099", Decimal("5.00"), Decimal("5.00")),
        *_invoice(5, date(2024, 4, 1), "2099", Decimal("7.00"), Decimal("7.00")),
    ]
    test_db.add_all(rows)
    await test_db.commit()
    return rows
