from __future__ import annotations

"""Orchestration layer for hero negotiations.

One NegotiationService is constructed by the game-loop owner and handed to
whoever needs it; there is no module-level instance.

Key responsibilities:
- Own the hero registry (recruitment pool + roster)
- Run one negotiation round end to end (value -> tension -> verdict)
- Apply walk-away, lockout expiry and contract finalization transitions
- Queue outbound events for the turn controller to drain
"""

import logging
from typing import Any, Dict, List, Optional

from .config import DEFAULT_NEGOTIATION_CONFIG, NegotiationConfig
from .errors import (
    HERO_LOCKED,
    NEGOTIATION_CLOSED,
    NEGOTIATION_NOT_STARTED,
    NegotiationError,
)
from .events import EventQueue, build_event
from .finalize import finalize, tick_contract
from .lockout import can_re_recruit, mark_walked_away, release_expired, reset_walk_away
from .preference import describe, preference
from .store import HeroRegistry
from .tension import TensionBreakdown, advance_tension, apply_offer, explain_delta, initialize_negotiation
from .traits import effective_salary, stat_modifier_totals
from .types import (
    ContractOffer,
    HeroContract,
    HeroNegotiationProfile,
    NegotiationDecision,
    Reason,
)
from .valuation import explain_expected_value, ideal_offer

logger = logging.getLogger(__name__)


class NegotiationService:
    def __init__(
        self,
        cfg: NegotiationConfig = DEFAULT_NEGOTIATION_CONFIG,
        registry: Optional[HeroRegistry] = None,
    ) -> None:
        self.cfg = cfg
        self.registry = registry if registry is not None else HeroRegistry()
        self.events = EventQueue()
        # Offers the hero agreed to, waiting for accept_offer.
        self._agreed: Dict[str, ContractOffer] = {}

    # -------------------------------------------------------------------------
    # Registry
    # -------------------------------------------------------------------------

    def register_hero(self, profile: HeroNegotiationProfile) -> HeroNegotiationProfile:
        stored = self.registry.add(profile, location="POOL")
        logger.info("hero %s (%s) entered the recruitment pool", profile.hero_id, profile.name)
        return stored

    def get_hero(self, hero_id: str) -> HeroNegotiationProfile:
        return self.registry.get(hero_id)

    def hero_view(self, hero_id: str) -> Dict[str, Any]:
        """Hero payload plus derived negotiation numbers for the UI."""
        p = self.registry.get(hero_id)
        value = explain_expected_value(p, cfg=self.cfg)
        pref = preference(p, cfg=self.cfg)
        ideal = ideal_offer(p, cfg=self.cfg)
        out = p.to_payload()
        out.update(
            {
                "location": self.registry.location(hero_id),
                "expected_value": int(value.total),
                "value_breakdown": value.to_payload(),
                "payment_preference": str(pref),
                "payment_preference_label": describe(pref),
                "ideal_offer": ideal.to_payload(),
                "stat_modifiers": stat_modifier_totals(p.traits),
                "effective_salary": effective_salary(ideal.salary_per_turn, p.traits),
            }
        )
        return out

    # -------------------------------------------------------------------------
    # Negotiation rounds
    # -------------------------------------------------------------------------

    def start_negotiation(self, hero_id: str, current_turn: int) -> HeroNegotiationProfile:
        p = self.registry.get(hero_id)

        if self.registry.location(hero_id) == "ROSTER" or p.state.phase == "ACCEPTED":
            raise NegotiationError(
                NEGOTIATION_CLOSED,
                "Hero already agreed to terms",
                {"hero_id": p.hero_id, "phase": p.state.phase},
            )

        if p.state.has_walked_away:
            if not can_re_recruit(p, current_turn, cfg=self.cfg):
                logger.warning("hero %s is locked from recruitment (turn %d)", p.hero_id, int(current_turn))
                raise NegotiationError(
                    HERO_LOCKED,
                    "Hero refuses to negotiate until the lockout ends",
                    {
                        "hero_id": p.hero_id,
                        "walk_away_turn": int(p.state.walk_away_turn),
                        "available_turn": int(p.state.walk_away_turn) + int(self.cfg.re_recruitment_lockout_turns),
                    },
                )
            p = reset_walk_away(p)

        p = initialize_negotiation(p, cfg=self.cfg)
        self.registry.put(p)
        self.events.push(
            build_event("NEGOTIATION_STARTED", hero_id=p.hero_id, turn=current_turn, tension=int(p.tension))
        )
        return p

    def preview_offer(self, hero_id: str, offer: ContractOffer) -> Dict[str, Any]:
        """Evaluate an offer without changing any state (live UI preview)."""
        p = self.registry.get(hero_id)
        breakdown = explain_delta(p, offer, cfg=self.cfg)
        projected, would_walk = advance_tension(p.tension, breakdown.delta, cfg=self.cfg)
        return {
            "hero_id": p.hero_id,
            "offer": offer.to_payload(),
            "breakdown": breakdown.to_payload(),
            "difference": int(breakdown.offer_value) - int(breakdown.expected_value),
            "current_tension": int(p.tension),
            "projected_tension": int(projected),
            "would_walk": bool(would_walk),
            "payment_preference_label": describe(breakdown.preference),
        }

    def submit_offer(self, hero_id: str, offer: ContractOffer, current_turn: int) -> NegotiationDecision:
        p = self.registry.get(hero_id)
        phase = p.state.phase
        if phase == "UNINITIALIZED":
            raise NegotiationError(NEGOTIATION_NOT_STARTED, "Negotiation has not started", {"hero_id": p.hero_id})
        if phase != "NEGOTIATING":
            raise NegotiationError(
                NEGOTIATION_CLOSED,
                "Negotiation is closed",
                {"hero_id": p.hero_id, "phase": phase},
            )

        breakdown = explain_delta(p, offer, cfg=self.cfg)
        outcome = apply_offer(p, offer, cfg=self.cfg)

        meta = breakdown.to_payload()
        meta["previous_tension"] = int(p.tension)
        meta["offer"] = offer.to_payload()

        self.events.push(
            build_event(
                "TENSION_CHANGED",
                hero_id=p.hero_id,
                turn=current_turn,
                tension=int(outcome.new_tension),
                delta=int(outcome.delta),
            )
        )

        if outcome.walked_away:
            updated = mark_walked_away(outcome.profile, current_turn)
            self.registry.put(updated)
            self._agreed.pop(p.hero_id, None)
            self.events.push(build_event("HERO_WALKED_AWAY", hero_id=p.hero_id, turn=current_turn))
            return NegotiationDecision(
                verdict="WALK",
                tension=int(outcome.new_tension),
                tension_delta=int(outcome.delta),
                walked_away=True,
                reasons=[
                    Reason(
                        "TENSION_LIMIT_REACHED",
                        "Hero walked away from negotiations.",
                        {"tension": int(outcome.new_tension), "threshold": float(self.cfg.walk_away_threshold)},
                    )
                ],
                meta=meta,
            )

        gaps = self._gap_reasons(breakdown)
        limit = self.cfg.accept_max_delta
        if limit is None or outcome.delta <= int(limit):
            updated = outcome.profile.with_state(phase="ACCEPTED")
            self.registry.put(updated)
            self._agreed[p.hero_id] = offer
            logger.info("%s accepted the offer (voff=%d, vexp=%d)", p.name, breakdown.offer_value, breakdown.expected_value)
            return NegotiationDecision(
                verdict="ACCEPT",
                tension=int(outcome.new_tension),
                tension_delta=int(outcome.delta),
                reasons=[
                    Reason(
                        "OFFER_ACCEPTED",
                        "Hero agreed to the offer.",
                        {"offer_value": int(breakdown.offer_value), "expected_value": int(breakdown.expected_value)},
                    )
                ]
                + gaps,
                meta=meta,
            )

        self.registry.put(outcome.profile)
        self.events.push(
            build_event("OFFER_REJECTED", hero_id=p.hero_id, turn=current_turn, reasons=[r.code for r in gaps])
        )
        return NegotiationDecision(
            verdict="REJECT",
            tension=int(outcome.new_tension),
            tension_delta=int(outcome.delta),
            reasons=gaps,
            meta=meta,
        )

    @staticmethod
    def _gap_reasons(breakdown: TensionBreakdown) -> List[Reason]:
        reasons: List[Reason] = []
        if breakdown.offer_value < breakdown.expected_value:
            reasons.append(
                Reason(
                    "OFFER_BELOW_EXPECTATION",
                    "Offer is below what the hero expects.",
                    {"offer_value": int(breakdown.offer_value), "expected_value": int(breakdown.expected_value)},
                )
            )
        if breakdown.preference_violated:
            reasons.append(
                Reason(
                    "PAYMENT_PREFERENCE_VIOLATED",
                    describe(breakdown.preference),
                    {"preference": str(breakdown.preference), "penalty": float(breakdown.penalty)},
                )
            )
        return reasons

    def accept_offer(self, hero_id: str, current_turn: Optional[int] = None) -> HeroContract:
        """Finalize the agreed offer and move the hero to the roster."""
        p = self.registry.get(hero_id)
        offer = self._agreed.get(p.hero_id)
        if p.state.phase != "ACCEPTED" or offer is None:
            raise NegotiationError(
                NEGOTIATION_NOT_STARTED,
                "No accepted offer to finalize",
                {"hero_id": p.hero_id, "phase": p.state.phase},
            )

        contract = finalize(p.contract, offer, cfg=self.cfg)
        self.registry.put(p.with_contract(contract))
        self.registry.move(p.hero_id, "ROSTER")
        del self._agreed[p.hero_id]

        self.events.push(
            build_event(
                "CONTRACT_SIGNED",
                hero_id=p.hero_id,
                turn=current_turn,
                signing_bonus=int(contract.signing_bonus),
                contract=contract.to_payload(),
            )
        )
        return contract

    # -------------------------------------------------------------------------
    # Turn / season hooks
    # -------------------------------------------------------------------------

    def annual_refresh(self, current_turn: int) -> List[str]:
        """Release walked-away heroes whose lockout expired."""
        refreshed, released = release_expired(self.registry.pool(), current_turn, cfg=self.cfg)
        for p in refreshed:
            if p.hero_id in released:
                self.registry.put(p)
                self.events.push(build_event("HERO_RELEASED", hero_id=p.hero_id, turn=current_turn))
        if released:
            logger.info("annual refresh on turn %d released %d hero(es)", int(current_turn), len(released))
        return released

    def advance_turn(self, current_turn: int) -> List[str]:
        """Tick every roster contract; expired heroes return to the pool."""
        expired: List[str] = []
        for p in self.registry.roster():
            contract, ended = tick_contract(p.contract)
            updated = p.with_contract(contract)
            if ended:
                updated = updated.with_state(phase="UNINITIALIZED", tension=0)
                self.registry.put(updated)
                self.registry.move(p.hero_id, "POOL")
                expired.append(p.hero_id)
                self.events.push(build_event("CONTRACT_EXPIRED", hero_id=p.hero_id, turn=current_turn))
            else:
                self.registry.put(updated)
        return expired

    def drain_events(self) -> List[Dict[str, Any]]:
        return self.events.drain()
