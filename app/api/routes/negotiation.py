from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, HTTPException, Request

from app.schemas.negotiation import (
    AcceptOfferRequest,
    OfferPreviewRequest,
    RegisterHeroRequest,
    StartNegotiationRequest,
    SubmitOfferRequest,
    TurnRequest,
)
from recruitment.calendar import display, is_annual_refresh
from recruitment.negotiation import (
    HERO_NOT_FOUND,
    INVALID_OFFER,
    ContractOffer,
    HeroNegotiationProfile,
    NegotiationError,
    NegotiationService,
)

router = APIRouter(prefix="/api/negotiation")
logger = logging.getLogger(__name__)


def _service(request: Request) -> NegotiationService:
    return request.app.state.negotiation_service


def _http_error(exc: NegotiationError) -> HTTPException:
    if exc.code == HERO_NOT_FOUND:
        status = 404
    elif exc.code == INVALID_OFFER:
        status = 400
    else:
        status = 409
    return HTTPException(status_code=status, detail=exc.to_payload())


@router.post("/heroes")
async def api_register_hero(req: RegisterHeroRequest, request: Request):
    """Add a hero to the recruitment pool."""
    svc = _service(request)
    try:
        payload: Dict[str, Any] = req.model_dump()
        profile = HeroNegotiationProfile.from_payload(payload)
        svc.register_hero(profile)
        return svc.hero_view(profile.hero_id)
    except NegotiationError as e:
        raise _http_error(e)
    except (TypeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/heroes/{hero_id}")
async def api_get_hero(hero_id: str, request: Request):
    try:
        return _service(request).hero_view(hero_id)
    except NegotiationError as e:
        raise _http_error(e)


@router.post("/start")
async def api_start_negotiation(req: StartNegotiationRequest, request: Request):
    """Open a negotiation; tension is seeded from trust."""
    svc = _service(request)
    try:
        profile = svc.start_negotiation(req.hero_id, req.current_turn)
    except NegotiationError as e:
        raise _http_error(e)
    return {"ok": True, "hero": profile.to_payload(), "turn_label": display(req.current_turn)}


@router.post("/preview")
async def api_preview_offer(req: OfferPreviewRequest, request: Request):
    """Live preview for the offer sliders; does not change tension."""
    try:
        offer = ContractOffer.from_payload(req.offer)
        return _service(request).preview_offer(req.hero_id, offer)
    except NegotiationError as e:
        raise _http_error(e)


@router.post("/offer")
async def api_submit_offer(req: SubmitOfferRequest, request: Request):
    """Submit an offer; the hero may ACCEPT / REJECT / WALK."""
    svc = _service(request)
    try:
        offer = ContractOffer.from_payload(req.offer)
        decision = svc.submit_offer(req.hero_id, offer, req.current_turn)
        return {"ok": True, "hero_id": req.hero_id, "decision": decision.to_payload()}
    except NegotiationError as e:
        raise _http_error(e)


@router.post("/accept")
async def api_accept_offer(req: AcceptOfferRequest, request: Request):
    """Finalize the agreed offer and move the hero to the roster."""
    svc = _service(request)
    try:
        contract = svc.accept_offer(req.hero_id, req.current_turn)
        return {"ok": True, "hero_id": req.hero_id, "contract": contract.to_payload()}
    except NegotiationError as e:
        raise _http_error(e)


@router.post("/refresh")
async def api_annual_refresh(req: TurnRequest, request: Request):
    """Run the annual lockout refresh. Only acts on the first turn of a year."""
    svc = _service(request)
    if not is_annual_refresh(req.current_turn):
        return {"ok": True, "skipped": True, "released": [], "turn_label": display(req.current_turn)}
    released = svc.annual_refresh(req.current_turn)
    return {"ok": True, "skipped": False, "released": released, "turn_label": display(req.current_turn)}


@router.post("/advance-turn")
async def api_advance_turn(req: TurnRequest, request: Request):
    svc = _service(request)
    expired = svc.advance_turn(req.current_turn)
    return {"ok": True, "expired": expired}


@router.get("/events")
async def api_drain_events(request: Request):
    """Return and clear queued negotiation events."""
    events = _service(request).drain_events()
    return {"count": len(events), "events": events}
