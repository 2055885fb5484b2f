from __future__ import annotations

"""Public data types for hero negotiations.

The dataclasses are frozen: engine components never mutate a hero in place.
Every state transition returns a new value (see tension.py / lockout.py), so
the turn controller can audit and replay transitions.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Literal, Mapping, Optional, Tuple

from .errors import InvalidOffer
from .utils import clamp_int, is_finite_number, json_dumps, safe_float, safe_int


LifecycleStage = Literal["ROOKIE", "PRIME", "VETERAN", "RETIRED"]
PaymentPreference = Literal["PREFERS_SIGNING_BONUS", "PREFERS_SALARY", "NEUTRAL"]
EffectKind = Literal["VEXP", "TENSION", "PAYMENT_PREFERENCE"]

NegotiationPhase = Literal["UNINITIALIZED", "NEGOTIATING", "ACCEPTED", "WALKED_AWAY"]
NegotiationVerdict = Literal["ACCEPT", "REJECT", "WALK"]

LIFECYCLE_STAGES: Tuple[str, ...] = ("ROOKIE", "PRIME", "VETERAN", "RETIRED")

# Contract length bounds. Offers clamp into this range and so does ideal_offer.
MIN_CONTRACT_YEARS = 1
MAX_CONTRACT_YEARS = 5


def normalize_stage(value: Any) -> str:
    s = str(value or "").strip().upper()
    if s not in LIFECYCLE_STAGES:
        raise ValueError(f"unknown lifecycle stage: {value!r}")
    return s


@dataclass(frozen=True, slots=True)
class Reason:
    code: str
    message: str
    evidence: Dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "code": str(self.code),
            "message": str(self.message),
            "evidence": dict(self.evidence or {}),
        }


# -----------------------------------------------------------------------------
# Traits
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TraitEffect:
    """A single negotiation effect attached to a trait."""

    kind: EffectKind
    multiplier: float = 1.0
    preference: Optional[PaymentPreference] = None
    source: str = ""


@dataclass(frozen=True, slots=True)
class Trait:
    """Immutable trait definition.

    `effects` is None for traits that were never tagged; the resolver then
    derives them from the keyword table. An empty tuple means "tagged, no
    negotiation effect".
    """

    name: str
    description: str = ""
    stat_modifiers: Dict[str, int] = field(default_factory=dict)
    salary_modifier: float = 0.0
    loot_cut_modifier: float = 0.0
    effects: Optional[Tuple[TraitEffect, ...]] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any] | str) -> "Trait":
        if isinstance(payload, str):
            return cls(name=payload)
        if not isinstance(payload, Mapping):
            raise TypeError("trait payload must be a mapping or a name")
        raw_mods = payload.get("stat_modifiers") if isinstance(payload.get("stat_modifiers"), Mapping) else {}
        return cls(
            name=str(payload.get("name") or ""),
            description=str(payload.get("description") or ""),
            stat_modifiers={str(k): safe_int(v, 0) for k, v in raw_mods.items()},
            salary_modifier=safe_float(payload.get("salary_modifier"), 0.0),
            loot_cut_modifier=safe_float(payload.get("loot_cut_modifier"), 0.0),
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "name": str(self.name),
            "description": str(self.description),
            "stat_modifiers": dict(self.stat_modifiers or {}),
            "salary_modifier": float(self.salary_modifier),
            "loot_cut_modifier": float(self.loot_cut_modifier),
        }


# -----------------------------------------------------------------------------
# Offers and contracts
# -----------------------------------------------------------------------------


def _require_gold(name: str, value: Any) -> int:
    if not is_finite_number(value):
        raise InvalidOffer(f"offer.{name} must be a finite number", {"field": name, "value": repr(value)})
    v = float(value)
    if v < 0:
        raise InvalidOffer(f"offer.{name} must be >= 0", {"field": name, "value": v})
    if v != int(v):
        raise InvalidOffer(f"offer.{name} must be whole gold", {"field": name, "value": v})
    return int(v)


@dataclass(frozen=True, slots=True)
class ContractOffer:
    """A concrete offer: one-time signing bonus + salary per turn for N years.

    Money fields are validated on construction (InvalidOffer). The contract
    length is clamped into [1, 5] instead of failing.
    """

    signing_bonus: int
    salary_per_turn: int
    contract_length_years: int = 2

    def __post_init__(self) -> None:
        object.__setattr__(self, "signing_bonus", _require_gold("signing_bonus", self.signing_bonus))
        object.__setattr__(self, "salary_per_turn", _require_gold("salary_per_turn", self.salary_per_turn))
        if not is_finite_number(self.contract_length_years):
            raise InvalidOffer(
                "offer.contract_length_years must be a number",
                {"field": "contract_length_years", "value": repr(self.contract_length_years)},
            )
        years = clamp_int(int(float(self.contract_length_years)), MIN_CONTRACT_YEARS, MAX_CONTRACT_YEARS)
        object.__setattr__(self, "contract_length_years", years)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "ContractOffer":
        if not isinstance(payload, Mapping):
            raise InvalidOffer("offer payload must be a mapping", {"type": type(payload).__name__})

        # Accept a few key aliases from older UI builds.
        signing = payload.get("signing_bonus")
        if signing is None:
            signing = payload.get("signingBonus", 0)
        salary = payload.get("salary_per_turn")
        if salary is None:
            salary = payload.get("salary", payload.get("salaryPerTurn", 0))
        years = payload.get("contract_length_years")
        if years is None:
            years = payload.get("years", payload.get("contractLengthYears", 2))

        return cls(signing_bonus=signing, salary_per_turn=salary, contract_length_years=years)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "signing_bonus": int(self.signing_bonus),
            "salary_per_turn": int(self.salary_per_turn),
            "contract_length_years": int(self.contract_length_years),
        }


@dataclass(frozen=True, slots=True)
class HeroContract:
    """Persistent contract fields of a hero (empty when unsigned)."""

    signing_bonus: int = 0
    salary_per_turn: int = 0
    contract_length_years: int = 0
    turns_remaining: int = 0

    @property
    def is_active(self) -> bool:
        return int(self.turns_remaining) > 0

    def to_payload(self) -> Dict[str, Any]:
        return {
            "signing_bonus": int(self.signing_bonus),
            "salary_per_turn": int(self.salary_per_turn),
            "contract_length_years": int(self.contract_length_years),
            "turns_remaining": int(self.turns_remaining),
        }


# -----------------------------------------------------------------------------
# Hero negotiation state
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class NegotiationState:
    """Per-hero negotiation state machine value."""

    phase: NegotiationPhase = "UNINITIALIZED"
    tension: int = 0
    has_walked_away: bool = False
    walk_away_turn: int = -1
    is_locked: bool = False

    def to_payload(self) -> Dict[str, Any]:
        return {
            "phase": str(self.phase),
            "tension": int(self.tension),
            "has_walked_away": bool(self.has_walked_away),
            "walk_away_turn": int(self.walk_away_turn),
            "is_locked": bool(self.is_locked),
        }


@dataclass(frozen=True, slots=True)
class HeroNegotiationProfile:
    """The negotiable subset of a hero."""

    hero_id: str
    name: str
    stats: Dict[str, float] = field(default_factory=dict)
    greed: int = 50
    lifecycle_stage: LifecycleStage = "ROOKIE"
    trust_level: int = 50
    traits: Tuple[Trait, ...] = ()
    state: NegotiationState = field(default_factory=NegotiationState)
    contract: HeroContract = field(default_factory=HeroContract)

    @property
    def tension(self) -> int:
        return int(self.state.tension)

    def with_state(self, **changes: Any) -> "HeroNegotiationProfile":
        return replace(self, state=replace(self.state, **changes))

    def with_contract(self, contract: HeroContract) -> "HeroNegotiationProfile":
        return replace(self, contract=contract)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "HeroNegotiationProfile":
        if not isinstance(payload, Mapping):
            raise TypeError("hero payload must be a mapping")
        hero_id = str(payload.get("hero_id") or "").strip()
        if not hero_id:
            raise ValueError("hero.hero_id is required")

        raw_stats = payload.get("stats") if isinstance(payload.get("stats"), Mapping) else {}
        stats = {str(k): safe_float(v, 0.0) for k, v in raw_stats.items()}

        raw_traits = payload.get("traits") if isinstance(payload.get("traits"), list) else []
        traits: List[Trait] = []
        for t in raw_traits:
            if isinstance(t, (str, Mapping)):
                traits.append(Trait.from_payload(t))

        return cls(
            hero_id=hero_id,
            name=str(payload.get("name") or hero_id),
            stats=stats,
            greed=clamp_int(payload.get("greed", 50), 0, 100),
            lifecycle_stage=normalize_stage(payload.get("lifecycle_stage") or "ROOKIE"),
            trust_level=clamp_int(payload.get("trust_level", 50), 0, 100),
            traits=tuple(traits),
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "hero_id": str(self.hero_id),
            "name": str(self.name),
            "stats": {str(k): float(v) for k, v in (self.stats or {}).items()},
            "greed": int(self.greed),
            "lifecycle_stage": str(self.lifecycle_stage),
            "trust_level": int(self.trust_level),
            "traits": [t.to_payload() for t in self.traits],
            "state": self.state.to_payload(),
            "contract": self.contract.to_payload(),
        }


# -----------------------------------------------------------------------------
# Decisions
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class NegotiationDecision:
    verdict: NegotiationVerdict
    tension: int
    tension_delta: int
    walked_away: bool = False
    reasons: List[Reason] = field(default_factory=list)
    meta: Dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> Dict[str, Any]:
        payload = {
            "verdict": str(self.verdict),
            "tension": int(self.tension),
            "tension_delta": int(self.tension_delta),
            "walked_away": bool(self.walked_away),
            "reasons": [r.to_payload() for r in (self.reasons or [])],
            "meta": dict(self.meta or {}),
        }
        try:
            json_dumps(payload)
        except Exception:
            # Always hand JSON-serializable payloads to the API layer.
            payload["meta"] = {"note": "meta_not_serializable"}
        return payload
