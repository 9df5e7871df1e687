"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary; the core receives well-typed values
    - Response schemas never expose User.password

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
