from __future__ import annotations

"""Payment-structure preference checks.

A hero that prefers a signing bonus wants at least 30% of the offer upfront;
a hero that prefers salary tolerates at most 20% upfront. Breaking the
preference adds a flat tension penalty on top of the value gap.
"""

from typing import Dict, Optional

from .config import DEFAULT_NEGOTIATION_CONFIG, NegotiationConfig
from .traits import payment_preference
from .types import ContractOffer, HeroNegotiationProfile, PaymentPreference
from .valuation import offer_value


_LABELS: Dict[str, str] = {
    "PREFERS_SIGNING_BONUS": "Prefers Signing Bonus (>=30%)",
    "PREFERS_SALARY": "Prefers Steady Salary (<=20%)",
    "NEUTRAL": "Neutral Payment Preference",
}


def preference(profile: HeroNegotiationProfile, *, cfg: NegotiationConfig = DEFAULT_NEGOTIATION_CONFIG) -> PaymentPreference:
    return payment_preference(profile.traits, cfg=cfg)


def signing_ratio(offer: ContractOffer, *, cfg: NegotiationConfig = DEFAULT_NEGOTIATION_CONFIG) -> Optional[float]:
    """Share of the offer paid upfront; None for a zero-value offer."""
    total = offer_value(offer, cfg=cfg)
    if total <= 0:
        return None
    return float(offer.signing_bonus) / float(total)


def is_violated(
    pref: PaymentPreference,
    offer: ContractOffer,
    *,
    cfg: NegotiationConfig = DEFAULT_NEGOTIATION_CONFIG,
) -> bool:
    ratio = signing_ratio(offer, cfg=cfg)
    if pref == "PREFERS_SIGNING_BONUS":
        # Nothing offered at all cannot satisfy an upfront demand.
        if ratio is None:
            return True
        return ratio < float(cfg.signing_preference_min_ratio)
    if pref == "PREFERS_SALARY":
        if ratio is None:
            return False
        return ratio > float(cfg.salary_preference_max_ratio)
    return False


def penalty(
    profile: HeroNegotiationProfile,
    offer: ContractOffer,
    *,
    cfg: NegotiationConfig = DEFAULT_NEGOTIATION_CONFIG,
) -> float:
    if is_violated(preference(profile, cfg=cfg), offer, cfg=cfg):
        return float(cfg.preference_violation_penalty)
    return 0.0


def describe(pref: PaymentPreference) -> str:
    return _LABELS.get(str(pref), _LABELS["NEUTRAL"])
