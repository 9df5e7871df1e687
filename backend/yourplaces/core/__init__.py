"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Ownership, error classification and integrity rules live here

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
