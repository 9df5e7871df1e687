"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - The coordinator depends on GeocodingResolver, never on a concrete provider

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async in Protocol: implementations do network IO
"""

from typing import Protocol

from yourplaces.core.domain_types import Coordinates


class GeocodingResolver(Protocol):
    """Contract for address → coordinates lookup — implemented by shell.

    resolve() raises UnprocessableAddressError on any failure.
    """
    async def resolve(self, address: str) -> Coordinates: ...
