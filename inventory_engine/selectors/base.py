"""
Module: inventory_engine.selectors.base
Responsibility: Abstract base class for read-only query selectors.  Selectors
    form the read side of the engine: catalog pages, ledger history and
    reports.
Architecture position: Engine > Selectors.  May import from db/, models/ and
    domain/dtos.  MUST NOT import from services/ or outer layers.

Invariants enforced:
    - Read-only access: selectors MUST NOT call session.add(), delete(),
      commit(), or flush().
    - DTO return convention: selectors return frozen dataclasses, never ORM
      instances.
    - Session ownership: the caller owns the session and its transaction.
"""

from abc import ABC

from sqlalchemy.orm import Session


class BaseSelector(ABC):
    """Holds the caller's session for subclass queries."""

    def __init__(self, session: Session):
        self.session = session
