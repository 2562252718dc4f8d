"""Consulta Facturas OS — monthly invoice lookup and CSV export for one obra social.

Invariants:
    - Package root contains no executable code beyond the version constant
"""

__version__ = "1.0.0"
