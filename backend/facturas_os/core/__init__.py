"""Core Layer — month parsing, CSV formatting and the error hierarchy.

Invariants:
    - No module in core/ imports from api/, infrastructure/, or db/
    - All functions are pure and deterministic
"""
