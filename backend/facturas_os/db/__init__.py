"""Database Metadata — declarative Base for the invoice tables.

Invariants:
    - Single async engine per process (initialized via infrastructure.database.init_db)

Design Decisions:
    - aiomysql driver for MySQL (ADR: native async, the accounting system runs MySQL)
"""
