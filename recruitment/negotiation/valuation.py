from __future__ import annotations

"""Hero expected value (Vexp) and offer value (Voff).

Vexp = floor(((sum(stats) * 2) * lifecycle + greed premium) * trait modifier)
Voff = signing bonus + salary * turns_per_year * years

Offer valuation uses the three-variable model (signing, salary, length).
Loot cut is not part of an offer.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .config import DEFAULT_NEGOTIATION_CONFIG, NegotiationConfig
from .traits import resolve
from .types import MAX_CONTRACT_YEARS, MIN_CONTRACT_YEARS, ContractOffer, HeroNegotiationProfile, PaymentPreference
from .utils import clamp, clamp_int, floor_int, safe_float

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ValueBreakdown:
    core: float
    base: float
    lifecycle_multiplier: float
    lifecycle_adjusted: float
    greed_premium: float
    pre_trait_total: float
    trait_modifier: float
    total: int

    def to_payload(self) -> dict:
        return {
            "core": float(self.core),
            "base": float(self.base),
            "lifecycle_multiplier": float(self.lifecycle_multiplier),
            "lifecycle_adjusted": float(self.lifecycle_adjusted),
            "greed_premium": float(self.greed_premium),
            "pre_trait_total": float(self.pre_trait_total),
            "trait_modifier": float(self.trait_modifier),
            "total": int(self.total),
        }


def lifecycle_multiplier(stage: str, *, cfg: NegotiationConfig = DEFAULT_NEGOTIATION_CONFIG) -> float:
    table = cfg.lifecycle_multipliers or {}
    key = str(stage or "").upper()
    if key not in table:
        logger.warning("unknown lifecycle stage %r; using multiplier %.2f", stage, cfg.unknown_stage_multiplier)
        return float(cfg.unknown_stage_multiplier)
    return float(table[key])


def core_stat_sum(profile: HeroNegotiationProfile, *, cfg: NegotiationConfig = DEFAULT_NEGOTIATION_CONFIG) -> float:
    stats = profile.stats or {}
    return float(sum(safe_float(stats.get(k), 0.0) for k in cfg.stat_keys))


def explain_expected_value(
    profile: HeroNegotiationProfile,
    *,
    cfg: NegotiationConfig = DEFAULT_NEGOTIATION_CONFIG,
) -> ValueBreakdown:
    core = core_stat_sum(profile, cfg=cfg)
    base = core * float(cfg.base_stat_weight)
    mult = lifecycle_multiplier(profile.lifecycle_stage, cfg=cfg)
    lifecycle_adjusted = base * mult
    greed = clamp(profile.greed, 0.0, 100.0)
    greed_premium = lifecycle_adjusted * (greed / 100.0)
    pre_trait_total = lifecycle_adjusted + greed_premium
    trait_mod = resolve(profile.traits, cfg=cfg).vexp_multiplier

    total = max(0, floor_int(pre_trait_total * trait_mod))

    out = ValueBreakdown(
        core=core,
        base=base,
        lifecycle_multiplier=mult,
        lifecycle_adjusted=lifecycle_adjusted,
        greed_premium=greed_premium,
        pre_trait_total=pre_trait_total,
        trait_modifier=trait_mod,
        total=int(total),
    )
    logger.debug(
        "%s Vexp: base=%.1f lifecycle=%.1f greed_premium=%.1f trait=%.2f total=%d",
        profile.name,
        base,
        lifecycle_adjusted,
        greed_premium,
        trait_mod,
        out.total,
    )
    return out


def expected_value(profile: HeroNegotiationProfile, *, cfg: NegotiationConfig = DEFAULT_NEGOTIATION_CONFIG) -> int:
    return explain_expected_value(profile, cfg=cfg).total


def offer_value(offer: ContractOffer, *, cfg: NegotiationConfig = DEFAULT_NEGOTIATION_CONFIG) -> int:
    return int(offer.signing_bonus) + int(offer.salary_per_turn) * int(cfg.turns_per_year) * int(
        offer.contract_length_years
    )


def ideal_offer(
    profile: HeroNegotiationProfile,
    desired_length_years: Optional[int] = None,
    *,
    cfg: NegotiationConfig = DEFAULT_NEGOTIATION_CONFIG,
) -> ContractOffer:
    """Anchor offer where Voff == Vexp, shaped to the hero's payment preference."""
    years = desired_length_years if desired_length_years is not None else cfg.default_ideal_years
    years = clamp_int(years, MIN_CONTRACT_YEARS, MAX_CONTRACT_YEARS)

    vexp = expected_value(profile, cfg=cfg)
    preference: PaymentPreference = resolve(profile.traits, cfg=cfg).preference
    share = clamp((cfg.ideal_signing_shares or {}).get(preference, 0.25), 0.0, 1.0)

    signing = floor_int(vexp * share)
    turns = int(years) * int(cfg.turns_per_year)
    remaining = vexp - signing
    salary = remaining // turns
    # Rounding remainder goes upfront so the offer never undershoots Vexp.
    signing += remaining - salary * turns

    offer = ContractOffer(signing_bonus=signing, salary_per_turn=salary, contract_length_years=years)
    logger.debug(
        "%s ideal offer: signing=%d salary=%d/turn length=%d (pref=%s, vexp=%d)",
        profile.name,
        offer.signing_bonus,
        offer.salary_per_turn,
        offer.contract_length_years,
        preference,
        vexp,
    )
    return offer
