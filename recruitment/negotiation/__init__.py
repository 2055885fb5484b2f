from __future__ import annotations

"""Hero recruitment negotiation subsystem.

This package provides:
- Expected value (Vexp) and offer value (Voff) valuation
- Trait effect resolution (value, tension and payment preference channels)
- A tension meter with walk-away and a one-year re-recruitment lockout
- Contract finalization and per-turn contract ticking
- NegotiationService, the orchestration object the turn controller owns

The engine is designed to be:
- Deterministic (integer results, floored at fixed points)
- Explainable (every number comes with a breakdown)
- Immutable (state transitions return new profiles)
"""

from .config import (
    DEFAULT_KEYWORD_TABLE,
    DEFAULT_NEGOTIATION_CONFIG,
    FIVE_STAT_KEYS,
    THREE_STAT_KEYS,
    KeywordRule,
    NegotiationConfig,
)
from .errors import (
    ALREADY_UNDER_CONTRACT,
    DUPLICATE_HERO,
    HERO_LOCKED,
    HERO_NOT_FOUND,
    INVALID_OFFER,
    NEGOTIATION_ALREADY_STARTED,
    NEGOTIATION_CLOSED,
    NEGOTIATION_NOT_STARTED,
    AlreadyUnderContract,
    InvalidOffer,
    NegotiationError,
)
from .types import (
    ContractOffer,
    HeroContract,
    HeroNegotiationProfile,
    LifecycleStage,
    NegotiationDecision,
    NegotiationPhase,
    NegotiationState,
    NegotiationVerdict,
    PaymentPreference,
    Reason,
    Trait,
    TraitEffect,
)
from .traits import (
    TraitModifiers,
    effective_salary,
    effects_for,
    payment_preference,
    resolve,
    stat_modifier_totals,
    tag_trait,
    tension_modifier,
    vexp_modifier,
)
from .valuation import (
    ValueBreakdown,
    expected_value,
    explain_expected_value,
    ideal_offer,
    lifecycle_multiplier,
    offer_value,
)
from .preference import describe, is_violated, penalty, preference, signing_ratio
from .tension import (
    TensionBreakdown,
    TensionOutcome,
    apply_offer,
    explain_delta,
    initialize_negotiation,
    length_mitigation,
    starting_tension,
    tension_delta,
)
from .lockout import can_re_recruit, mark_walked_away, release_expired, reset_walk_away
from .finalize import finalize, tick_contract
from .events import EventQueue, NegotiationEventType, build_event
from .store import HeroLocation, HeroRegistry
from .service import NegotiationService
