from recruitment.negotiation import HeroNegotiationProfile, Trait


def make_hero(
    hero_id: str = "h1",
    *,
    name: str = "Aldric",
    stats=None,
    greed: int = 50,
    stage: str = "PRIME",
    trust: int = 75,
    traits=(),
) -> HeroNegotiationProfile:
    return HeroNegotiationProfile(
        hero_id=hero_id,
        name=name,
        stats=dict(stats) if stats is not None else {"prowess": 50, "charisma": 25, "vitality": 25},
        greed=greed,
        lifecycle_stage=stage,
        trust_level=trust,
        traits=tuple(Trait(t) if isinstance(t, str) else t for t in traits),
    )
