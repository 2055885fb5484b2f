from __future__ import annotations

"""Tunable configuration for hero contract negotiations.

All numbers here are intended to be tuned via playtests.

Design goals
-----------
- A fair offer (Voff == Vexp) never builds tension.
- Low-trust heroes start the table already irritated, but never past a quarter
  of the meter.
- Longer commitments soften a lowball, up to a hard cap.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from .types import PaymentPreference


@dataclass(frozen=True, slots=True)
class KeywordRule:
    """One row of the trait keyword table.

    `keyword` is matched as a case-insensitive substring of a trait's display
    name. A preference of None means the keyword carries no payment category.
    """

    keyword: str
    vexp_multiplier: float = 1.0
    tension_multiplier: float = 1.0
    preference: Optional[PaymentPreference] = None


# Row order matters: the first matched keyword with a category decides the
# payment preference. Keywords nested in a longer match ("patient" in
# "impatient") are skipped by the scan.
DEFAULT_KEYWORD_TABLE: Tuple[KeywordRule, ...] = (
    KeywordRule("greedy", vexp_multiplier=1.3, preference="PREFERS_SIGNING_BONUS"),
    KeywordRule("impulsive", vexp_multiplier=1.3, preference="PREFERS_SIGNING_BONUS"),
    KeywordRule("ambitious", vexp_multiplier=1.2),
    KeywordRule("frugal", vexp_multiplier=0.7),
    KeywordRule("humble", vexp_multiplier=0.7),
    KeywordRule("loyal", vexp_multiplier=0.85),
    KeywordRule("hotheaded", tension_multiplier=1.5),
    KeywordRule("impatient", tension_multiplier=1.5, preference="PREFERS_SIGNING_BONUS"),
    KeywordRule("stubborn", tension_multiplier=1.3),
    KeywordRule("patient", tension_multiplier=0.7, preference="PREFERS_SALARY"),
    KeywordRule("calm", tension_multiplier=0.7, preference="PREFERS_SALARY"),
    KeywordRule("cautious", tension_multiplier=0.7, preference="PREFERS_SALARY"),
    KeywordRule("steady", tension_multiplier=0.7, preference="PREFERS_SALARY"),
    KeywordRule("flexible", tension_multiplier=0.8),
)

THREE_STAT_KEYS: Tuple[str, ...] = ("prowess", "charisma", "vitality")
FIVE_STAT_KEYS: Tuple[str, ...] = ("prowess", "charisma", "vitality", "focus", "cunning")


def _default_lifecycle_multipliers() -> Dict[str, float]:
    return {"ROOKIE": 0.8, "PRIME": 1.2, "VETERAN": 1.5, "RETIRED": 0.0}


def _default_signing_shares() -> Dict[str, float]:
    return {"PREFERS_SIGNING_BONUS": 0.40, "PREFERS_SALARY": 0.15, "NEUTRAL": 0.25}


@dataclass(frozen=True, slots=True)
class NegotiationConfig:
    # ---------------------------------------------------------------------
    # Calendar
    # ---------------------------------------------------------------------
    turns_per_year: int = 4

    # ---------------------------------------------------------------------

    # ---------------------------------------------------------------------
    # Expected value (Vexp)
    # ---------------------------------------------------------------------
    # Which hero stats feed the core sum. Missing stats count as 0.
    stat_keys: Tuple[str, ...] = THREE_STAT_KEYS
    base_stat_weight: float = 2.0
    lifecycle_multipliers: Dict[str, float] = field(default_factory=_default_lifecycle_multipliers)
    # Used when a stage is not in the table.
    unknown_stage_multiplier: float = 1.0

    # ---------------------------------------------------------------------
    # Ideal offer split
    # ---------------------------------------------------------------------
    ideal_signing_shares: Dict[str, float] = field(default_factory=_default_signing_shares)
    default_ideal_years: int = 2

    # ---------------------------------------------------------------------
    # Starting tension from trust
    # ---------------------------------------------------------------------
    zero_tension_trust_threshold: float = 75.0
    max_tension_trust_threshold: float = 25.0
    max_starting_tension: float = 25.0

    # ---------------------------------------------------------------------
    # Tension delta
    # ---------------------------------------------------------------------
    tension_reduction_per_year: float = 0.10
    max_length_mitigation: float = 0.50
    # A surplus offer relieves tension, but never by more than this.
    min_base_delta: float = -100.0

    # ---------------------------------------------------------------------
    # Payment preference
    # ---------------------------------------------------------------------
    signing_preference_min_ratio: float = 0.30
    salary_preference_max_ratio: float = 0.20
    preference_violation_penalty: float = 10.0

    # ---------------------------------------------------------------------
    # Walk-away / lockout
    # ---------------------------------------------------------------------
    walk_away_threshold: float = 100.0
    max_tension: float = 100.0
    re_recruitment_lockout_turns: int = 4

    # ---------------------------------------------------------------------
    # Acceptance
    # ---------------------------------------------------------------------
    # None: the hero signs any offer that does not make them walk away.
    # An int makes acceptance stricter: the offer may add at most this much tension.
    accept_max_delta: Optional[int] = None

    # ---------------------------------------------------------------------
    # Trait keyword table
    # ---------------------------------------------------------------------
    keyword_table: Tuple[KeywordRule, ...] = DEFAULT_KEYWORD_TABLE


DEFAULT_NEGOTIATION_CONFIG = NegotiationConfig()
