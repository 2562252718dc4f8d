"""Infrastructure — database pool, invoice queries, logging setup.

Invariants:
    - Only this package talks to the database driver
"""
