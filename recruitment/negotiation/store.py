from __future__ import annotations

"""In-memory hero registry (recruitment pool + active roster).

The registry is owned by one NegotiationService instance. Profiles are
immutable, so an update replaces the stored value as a whole.
"""

from typing import Dict, List, Literal

from .errors import DUPLICATE_HERO, HERO_NOT_FOUND, NegotiationError
from .types import HeroNegotiationProfile

HeroLocation = Literal["POOL", "ROSTER"]


class HeroRegistry:
    def __init__(self) -> None:
        self._profiles: Dict[str, HeroNegotiationProfile] = {}
        self._locations: Dict[str, HeroLocation] = {}

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def __contains__(self, hero_id: object) -> bool:
        return str(hero_id) in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)

    def get(self, hero_id: str) -> HeroNegotiationProfile:
        hid = str(hero_id)
        if hid not in self._profiles:
            raise NegotiationError(HERO_NOT_FOUND, "Hero not found", {"hero_id": hid})
        return self._profiles[hid]

    def location(self, hero_id: str) -> HeroLocation:
        self.get(hero_id)
        return self._locations[str(hero_id)]

    def pool(self) -> List[HeroNegotiationProfile]:
        return [p for hid, p in self._profiles.items() if self._locations[hid] == "POOL"]

    def roster(self) -> List[HeroNegotiationProfile]:
        return [p for hid, p in self._profiles.items() if self._locations[hid] == "ROSTER"]

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def add(self, profile: HeroNegotiationProfile, *, location: HeroLocation = "POOL") -> HeroNegotiationProfile:
        hid = str(profile.hero_id)
        if hid in self._profiles:
            raise NegotiationError(DUPLICATE_HERO, "Hero already registered", {"hero_id": hid})
        self._profiles[hid] = profile
        self._locations[hid] = location
        return profile

    def put(self, profile: HeroNegotiationProfile) -> HeroNegotiationProfile:
        self.get(profile.hero_id)
        self._profiles[str(profile.hero_id)] = profile
        return profile

    def move(self, hero_id: str, location: HeroLocation) -> None:
        self.get(hero_id)
        self._locations[str(hero_id)] = location
