from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class NegotiationError(Exception):
    """Structured error for hero negotiation flows.

    Every failure in the engine is local and recoverable. The API layer maps
    these to HTTP 4xx while keeping a stable machine-readable code for the UI.
    """

    code: str
    message: str
    details: Optional[Any] = None

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.code}: {self.message}"

    def to_payload(self) -> dict:
        return {"code": str(self.code), "message": str(self.message), "details": self.details}


# Error codes (stable API surface)
INVALID_OFFER = "INVALID_OFFER"
ALREADY_UNDER_CONTRACT = "ALREADY_UNDER_CONTRACT"
HERO_NOT_FOUND = "HERO_NOT_FOUND"
HERO_LOCKED = "HERO_LOCKED"
DUPLICATE_HERO = "DUPLICATE_HERO"
NEGOTIATION_NOT_STARTED = "NEGOTIATION_NOT_STARTED"
NEGOTIATION_ALREADY_STARTED = "NEGOTIATION_ALREADY_STARTED"
NEGOTIATION_CLOSED = "NEGOTIATION_CLOSED"


class InvalidOffer(NegotiationError):
    def __init__(self, message: str, details: Optional[Any] = None) -> None:
        super().__init__(INVALID_OFFER, message, details)


class AlreadyUnderContract(NegotiationError):
    def __init__(self, message: str, details: Optional[Any] = None) -> None:
        super().__init__(ALREADY_UNDER_CONTRACT, message, details)
