from __future__ import annotations

"""Walk-away bookkeeping and the re-recruitment lockout.

A hero that walks away stays out of the recruitment pool for a fixed number
of turns (one year by default). Resetting is the annual refresh's job; the
engine never resets a hero on its own.
"""

import logging
from typing import Iterable, List, Optional, Tuple

from .config import DEFAULT_NEGOTIATION_CONFIG, NegotiationConfig
from .types import HeroNegotiationProfile

logger = logging.getLogger(__name__)


def mark_walked_away(profile: HeroNegotiationProfile, current_turn: int) -> HeroNegotiationProfile:
    logger.warning("%s walked away on turn %d", profile.name, int(current_turn))
    return profile.with_state(
        phase="WALKED_AWAY",
        has_walked_away=True,
        walk_away_turn=int(current_turn),
        is_locked=True,
    )


def can_re_recruit(
    profile: HeroNegotiationProfile,
    current_turn: int,
    lockout_turns: Optional[int] = None,
    *,
    cfg: NegotiationConfig = DEFAULT_NEGOTIATION_CONFIG,
) -> bool:
    if not profile.state.has_walked_away:
        return True
    lockout = int(cfg.re_recruitment_lockout_turns if lockout_turns is None else lockout_turns)
    return int(current_turn) - int(profile.state.walk_away_turn) >= lockout


def reset_walk_away(profile: HeroNegotiationProfile) -> HeroNegotiationProfile:
    logger.info("%s walk-away status reset", profile.name)
    return profile.with_state(
        phase="UNINITIALIZED",
        tension=0,
        has_walked_away=False,
        walk_away_turn=-1,
        is_locked=False,
    )


def release_expired(
    profiles: Iterable[HeroNegotiationProfile],
    current_turn: int,
    *,
    cfg: NegotiationConfig = DEFAULT_NEGOTIATION_CONFIG,
) -> Tuple[List[HeroNegotiationProfile], List[str]]:
    """Reset every walked-away hero whose lockout has run out.

    Returns (profiles, released_hero_ids); profiles keep their input order.
    """
    out: List[HeroNegotiationProfile] = []
    released: List[str] = []
    for p in profiles:
        if p.state.has_walked_away and can_re_recruit(p, current_turn, cfg=cfg):
            out.append(reset_walk_away(p))
            released.append(str(p.hero_id))
        else:
            out.append(p)
    return out, released
