"""Services Layer — stores, the place coordinator, and account flows.

Invariants:
    - Stores are bound to one AsyncSession and never commit
    - Only PlaceCoordinator writes across users and places

Design Decisions:
    - Coordinator/accounts own their units of work; routes only call them
"""
