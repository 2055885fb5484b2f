from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class TraitPayload(BaseModel):
    name: str
    description: str = ""
    stat_modifiers: Dict[str, int] = Field(default_factory=dict)
    salary_modifier: float = 0.0
    loot_cut_modifier: float = 0.0


class RegisterHeroRequest(BaseModel):
    hero_id: str
    name: Optional[str] = None
    stats: Dict[str, float] = Field(default_factory=dict)  # prowess / charisma / vitality (+ focus / cunning)
    greed: int = 50
    lifecycle_stage: str = "ROOKIE"  # ROOKIE | PRIME | VETERAN | RETIRED
    trust_level: int = 50
    traits: List[TraitPayload] = Field(default_factory=list)


class StartNegotiationRequest(BaseModel):
    hero_id: str
    current_turn: int = Field(..., ge=1)  # turns are 1-based


class OfferPreviewRequest(BaseModel):
    hero_id: str
    offer: Dict[str, Any]  # see recruitment.negotiation.types.ContractOffer.from_payload


class SubmitOfferRequest(BaseModel):
    hero_id: str
    current_turn: int = Field(..., ge=1)
    offer: Dict[str, Any]


class AcceptOfferRequest(BaseModel):
    hero_id: str
    current_turn: Optional[int] = Field(None, ge=1)


class TurnRequest(BaseModel):
    current_turn: int = Field(..., ge=1)
