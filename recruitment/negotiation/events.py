from __future__ import annotations

"""Outbound negotiation events.

The service never calls subscribers directly. It appends flat event payloads
to a queue that the turn controller drains after each call.

Payloads are kept flat and rule-friendly:
- top-level `type`, `hero_id`, `turn` are always present
- everything else is event-specific
"""

from typing import Any, Dict, List, Literal, Optional

NegotiationEventType = Literal[
    "NEGOTIATION_STARTED",
    "TENSION_CHANGED",
    "OFFER_REJECTED",
    "HERO_WALKED_AWAY",
    "CONTRACT_SIGNED",
    "CONTRACT_EXPIRED",
    "HERO_RELEASED",
]


def build_event(
    event_type: NegotiationEventType,
    *,
    hero_id: str,
    turn: Optional[int] = None,
    **fields: Any,
) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "type": str(event_type),
        "hero_id": str(hero_id),
        "turn": int(turn) if turn is not None else None,
    }
    out.update(fields)
    return out


class EventQueue:
    def __init__(self) -> None:
        self._items: List[Dict[str, Any]] = []

    def push(self, event: Dict[str, Any]) -> None:
        self._items.append(dict(event))

    def drain(self) -> List[Dict[str, Any]]:
        items, self._items = self._items, []
        return items

    def __len__(self) -> int:
        return len(self._items)
