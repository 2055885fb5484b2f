from __future__ import annotations

"""Trait effect resolution.

Traits influence negotiations through three channels:
- VEXP: multiplies the hero's expected contract value
- TENSION: multiplies how fast tension builds from a poor offer
- PAYMENT_PREFERENCE: biases the hero toward upfront or recurring pay

Effects are normally attached to a trait when it is authored (`tag_trait`).
Untagged traits fall back to a keyword scan of their display name against the
configured keyword table. Both paths go through `keyword_effects`, so a tagged
trait and an untagged trait with the same name resolve identically.

Resolution rules
----------------
- Keywords match as case-insensitive substrings, in table order.
- Every match contributes, so "Greedy Ambitious" gets both multipliers.
- A keyword seen only inside a longer matched keyword is ignored:
  "Impatient" matches "impatient" but not "patient".
- Multipliers compose multiplicatively across keywords and traits.
- The payment preference is the first matched category; NEUTRAL if none.
"""

import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Sequence, Tuple

from .config import DEFAULT_NEGOTIATION_CONFIG, KeywordRule, NegotiationConfig
from .types import PaymentPreference, Trait, TraitEffect

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TraitModifiers:
    vexp_multiplier: float = 1.0
    tension_multiplier: float = 1.0
    preference: PaymentPreference = "NEUTRAL"
    matched: Tuple[str, ...] = ()

    def to_payload(self) -> dict:
        return {
            "vexp_multiplier": float(self.vexp_multiplier),
            "tension_multiplier": float(self.tension_multiplier),
            "preference": str(self.preference),
            "matched": list(self.matched),
        }


def _spans(text: str, kw: str) -> List[Tuple[int, int]]:
    out: List[Tuple[int, int]] = []
    start = text.find(kw)
    while start != -1:
        out.append((start, start + len(kw)))
        start = text.find(kw, start + 1)
    return out


def keyword_effects(name: str, table: Sequence[KeywordRule]) -> Tuple[TraitEffect, ...]:
    """Scan a trait name against the keyword table."""
    lowered = str(name or "").lower()
    if not lowered:
        return ()

    hits: List[Tuple[KeywordRule, str, List[Tuple[int, int]]]] = []
    for rule in table:
        kw = str(rule.keyword or "").lower()
        spans = _spans(lowered, kw) if kw else []
        if spans:
            hits.append((rule, kw, spans))

    # A keyword found only inside a longer matched keyword ("patient" in
    # "impatient") does not count.
    longer = [(s, e) for _, _, spans in hits for s, e in spans]
    out: List[TraitEffect] = []
    for rule, kw, spans in hits:
        if all(any(s0 <= s and e <= e0 and e0 - s0 > e - s for s0, e0 in longer) for s, e in spans):
            continue
        if float(rule.vexp_multiplier) != 1.0:
            out.append(TraitEffect("VEXP", float(rule.vexp_multiplier), source=kw))
        if float(rule.tension_multiplier) != 1.0:
            out.append(TraitEffect("TENSION", float(rule.tension_multiplier), source=kw))
        if rule.preference is not None:
            out.append(TraitEffect("PAYMENT_PREFERENCE", 1.0, preference=rule.preference, source=kw))
    return tuple(out)


def tag_trait(trait: Trait, *, cfg: NegotiationConfig = DEFAULT_NEGOTIATION_CONFIG) -> Trait:
    """Attach keyword-derived effects to a trait at authoring time."""
    return replace(trait, effects=keyword_effects(trait.name, cfg.keyword_table))


def effects_for(trait: Trait, *, cfg: NegotiationConfig = DEFAULT_NEGOTIATION_CONFIG) -> Tuple[TraitEffect, ...]:
    if trait.effects is not None:
        return tuple(trait.effects)
    return keyword_effects(trait.name, cfg.keyword_table)


def resolve(traits: Iterable[Trait], *, cfg: NegotiationConfig = DEFAULT_NEGOTIATION_CONFIG) -> TraitModifiers:
    vexp = 1.0
    tension = 1.0
    preference: PaymentPreference | None = None
    matched: List[str] = []

    for trait in traits or ():
        if trait is None:
            continue
        for effect in effects_for(trait, cfg=cfg):
            if effect.source and effect.source not in matched:
                matched.append(effect.source)
            if effect.kind == "VEXP":
                vexp *= float(effect.multiplier)
            elif effect.kind == "TENSION":
                tension *= float(effect.multiplier)
            elif effect.kind == "PAYMENT_PREFERENCE":
                if preference is None and effect.preference is not None:
                    preference = effect.preference

    mods = TraitModifiers(
        vexp_multiplier=float(vexp),
        tension_multiplier=float(tension),
        preference=preference or "NEUTRAL",
        matched=tuple(matched),
    )
    logger.debug(
        "trait modifiers: vexp=%.3f tension=%.3f preference=%s matched=%s",
        mods.vexp_multiplier,
        mods.tension_multiplier,
        mods.preference,
        ",".join(mods.matched) or "-",
    )
    return mods


def vexp_modifier(traits: Iterable[Trait], *, cfg: NegotiationConfig = DEFAULT_NEGOTIATION_CONFIG) -> float:
    return resolve(traits, cfg=cfg).vexp_multiplier


def tension_modifier(traits: Iterable[Trait], *, cfg: NegotiationConfig = DEFAULT_NEGOTIATION_CONFIG) -> float:
    return resolve(traits, cfg=cfg).tension_multiplier


def payment_preference(
    traits: Iterable[Trait], *, cfg: NegotiationConfig = DEFAULT_NEGOTIATION_CONFIG
) -> PaymentPreference:
    return resolve(traits, cfg=cfg).preference


# -----------------------------------------------------------------------------
# Flat / contract modifiers carried by trait definitions
# -----------------------------------------------------------------------------


def stat_modifier_totals(traits: Iterable[Trait]) -> Dict[str, int]:
    """Sum flat stat modifiers across traits (display only; Vexp uses base stats)."""
    out: Dict[str, int] = {}
    for trait in traits or ():
        for key, value in (trait.stat_modifiers or {}).items():
            out[str(key)] = int(out.get(str(key), 0)) + int(value)
    return out


def effective_salary(base_salary: float, traits: Iterable[Trait]) -> float:
    """Apply every trait's salary modifier in sequence (-0.1 => 10% cheaper)."""
    salary = float(base_salary)
    for trait in traits or ():
        salary *= 1.0 + float(trait.salary_modifier)
    return float(salary)
