from __future__ import annotations

"""Tension mechanics.

Tension is a 0..100 dissatisfaction meter seeded from trust when a
negotiation starts. Every offer moves it by a delta derived from the value gap
between the hero's expectation (Vexp) and the offer (Voff):

    base      = (Vexp - Voff) / Vexp * 100        (0 when Vexp == 0, >= -100)
    mitigated = base * (1 - length_mitigation)
    traited   = mitigated * trait tension multiplier
    delta     = floor(traited + preference penalty)

A surplus offer yields a negative delta (relief). Reaching the walk-away
threshold ends the negotiation.

`apply_offer` is the only function that changes tension. It never mutates the
profile it is given; it returns the successor profile inside TensionOutcome.
"""

import logging
from dataclasses import dataclass
from typing import Tuple

from .config import DEFAULT_NEGOTIATION_CONFIG, NegotiationConfig
from .errors import NEGOTIATION_ALREADY_STARTED, NEGOTIATION_NOT_STARTED, NegotiationError
from .preference import is_violated
from .traits import resolve
from .types import ContractOffer, HeroNegotiationProfile, PaymentPreference
from .utils import clamp, floor_int, safe_float
from .valuation import expected_value, offer_value

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TensionBreakdown:
    expected_value: int
    offer_value: int
    base_delta: float
    length_mitigation: float
    tension_multiplier: float
    trait_tension: float
    preference: PaymentPreference
    preference_violated: bool
    penalty: float
    delta: int

    def to_payload(self) -> dict:
        return {
            "expected_value": int(self.expected_value),
            "offer_value": int(self.offer_value),
            "base_delta": float(self.base_delta),
            "length_mitigation": float(self.length_mitigation),
            "tension_multiplier": float(self.tension_multiplier),
            "trait_tension": float(self.trait_tension),
            "preference": str(self.preference),
            "preference_violated": bool(self.preference_violated),
            "penalty": float(self.penalty),
            "delta": int(self.delta),
        }


@dataclass(frozen=True, slots=True)
class TensionOutcome:
    new_tension: int
    walked_away: bool
    delta: int
    profile: HeroNegotiationProfile


# -----------------------------------------------------------------------------
# Starting tension
# -----------------------------------------------------------------------------


def starting_tension(trust_level: float, *, cfg: NegotiationConfig = DEFAULT_NEGOTIATION_CONFIG) -> int:
    """Seed tension from trust.

    - trust >= 75: 0
    - trust <= 25: 25
    - otherwise linear between the two thresholds, floored
    """
    trust = clamp(trust_level, 0.0, 100.0)
    hi = float(cfg.zero_tension_trust_threshold)
    lo = float(cfg.max_tension_trust_threshold)
    top = float(cfg.max_starting_tension)

    if trust >= hi:
        return 0
    if trust <= lo or hi <= lo:
        return floor_int(top)
    tension = top * (hi - trust) / (hi - lo)
    return floor_int(clamp(tension, 0.0, top))


def initialize_negotiation(
    profile: HeroNegotiationProfile,
    *,
    cfg: NegotiationConfig = DEFAULT_NEGOTIATION_CONFIG,
) -> HeroNegotiationProfile:
    """UNINITIALIZED -> NEGOTIATING with tension seeded from trust (once per cycle)."""
    if profile.state.phase != "UNINITIALIZED":
        raise NegotiationError(
            NEGOTIATION_ALREADY_STARTED,
            "Negotiation already started for this cycle",
            {"hero_id": profile.hero_id, "phase": profile.state.phase},
        )
    seeded = starting_tension(profile.trust_level, cfg=cfg)
    logger.info("%s negotiation started with %d%% tension (trust %d%%)", profile.name, seeded, profile.trust_level)
    return profile.with_state(phase="NEGOTIATING", tension=int(seeded))


# -----------------------------------------------------------------------------
# Tension delta
# -----------------------------------------------------------------------------


def length_mitigation(contract_length_years: int, *, cfg: NegotiationConfig = DEFAULT_NEGOTIATION_CONFIG) -> float:
    """Discount on tension for longer commitments: (years - 1) * 10%, capped at 50%."""
    years = safe_float(contract_length_years, 1.0)
    reduction = (years - 1.0) * float(cfg.tension_reduction_per_year)
    return clamp(reduction, 0.0, float(cfg.max_length_mitigation))


def explain_delta(
    profile: HeroNegotiationProfile,
    offer: ContractOffer,
    *,
    cfg: NegotiationConfig = DEFAULT_NEGOTIATION_CONFIG,
) -> TensionBreakdown:
    vexp = expected_value(profile, cfg=cfg)
    voff = offer_value(offer, cfg=cfg)

    if vexp <= 0:
        base = 0.0
    else:
        base = (float(vexp) - float(voff)) / float(vexp) * 100.0
        base = max(base, float(cfg.min_base_delta))

    mitigation = length_mitigation(offer.contract_length_years, cfg=cfg)
    mods = resolve(profile.traits, cfg=cfg)
    trait_tension = base * (1.0 - mitigation) * float(mods.tension_multiplier)

    violated = is_violated(mods.preference, offer, cfg=cfg)
    pen = float(cfg.preference_violation_penalty) if violated else 0.0

    delta = floor_int(trait_tension + pen)

    out = TensionBreakdown(
        expected_value=int(vexp),
        offer_value=int(voff),
        base_delta=float(base),
        length_mitigation=float(mitigation),
        tension_multiplier=float(mods.tension_multiplier),
        trait_tension=float(trait_tension),
        preference=mods.preference,
        preference_violated=bool(violated),
        penalty=float(pen),
        delta=int(delta),
    )
    logger.debug(
        "%s tension delta: vexp=%d voff=%d base=%.1f mitigation=%.2f trait=%.2f penalty=%.0f delta=%+d",
        profile.name,
        vexp,
        voff,
        base,
        mitigation,
        mods.tension_multiplier,
        pen,
        delta,
    )
    return out


def tension_delta(
    profile: HeroNegotiationProfile,
    offer: ContractOffer,
    *,
    cfg: NegotiationConfig = DEFAULT_NEGOTIATION_CONFIG,
) -> int:
    return explain_delta(profile, offer, cfg=cfg).delta


# -----------------------------------------------------------------------------
# Applying an offer
# -----------------------------------------------------------------------------


def advance_tension(current: int, delta: int, *, cfg: NegotiationConfig = DEFAULT_NEGOTIATION_CONFIG) -> Tuple[int, bool]:
    """Return (new_tension, walked_away) for a raw delta."""
    raw = int(current) + int(delta)
    walked_away = raw >= float(cfg.walk_away_threshold)
    new_tension = int(clamp(raw, 0.0, float(cfg.max_tension)))
    return new_tension, bool(walked_away)


def apply_offer(
    profile: HeroNegotiationProfile,
    offer: ContractOffer,
    *,
    cfg: NegotiationConfig = DEFAULT_NEGOTIATION_CONFIG,
) -> TensionOutcome:
    if profile.state.phase != "NEGOTIATING":
        raise NegotiationError(
            NEGOTIATION_NOT_STARTED,
            "Hero is not negotiating",
            {"hero_id": profile.hero_id, "phase": profile.state.phase},
        )

    delta = tension_delta(profile, offer, cfg=cfg)
    new_tension, walked_away = advance_tension(profile.tension, delta, cfg=cfg)
    updated = profile.with_state(tension=new_tension)

    logger.info("%s tension: %d%% (delta %+d)", profile.name, new_tension, delta)
    if walked_away:
        logger.warning("%s walks away! tension reached %d%%", profile.name, new_tension)

    return TensionOutcome(new_tension=new_tension, walked_away=walked_away, delta=int(delta), profile=updated)
