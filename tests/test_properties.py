import unittest

from hypothesis import given, settings
from hypothesis import strategies as st

from recruitment.negotiation import ContractOffer, expected_value, ideal_offer, offer_value, tension_delta
from tests.helpers import make_hero

STATS = st.fixed_dictionaries(
    {
        "prowess": st.integers(min_value=0, max_value=100),
        "charisma": st.integers(min_value=0, max_value=100),
        "vitality": st.integers(min_value=0, max_value=100),
    }
)
STAGES = st.sampled_from(["ROOKIE", "PRIME", "VETERAN", "RETIRED"])
TRAIT_NAMES = st.lists(
    st.sampled_from(["Greedy", "Calm", "Impatient", "Frugal", "Ambitious", "Stubborn", "Loyal", "Brave"]),
    max_size=3,
)


class IdealOfferPropertyTests(unittest.TestCase):
    @settings(max_examples=80, deadline=None)
    @given(
        stats=STATS,
        greed=st.integers(min_value=0, max_value=100),
        stage=STAGES,
        traits=TRAIT_NAMES,
        years=st.integers(min_value=1, max_value=5),
    )
    def test_ideal_offer_meets_expected_value(self, *, stats, greed, stage, traits, years) -> None:
        hero = make_hero(stats=stats, greed=greed, stage=stage, traits=traits)

        offer = ideal_offer(hero, years)

        self.assertEqual(years, offer.contract_length_years)
        self.assertGreaterEqual(offer_value(offer), expected_value(hero))


class TensionDeltaPropertyTests(unittest.TestCase):
    @settings(max_examples=80, deadline=None)
    @given(
        stats=STATS,
        greed=st.integers(min_value=0, max_value=100),
        stage=STAGES,
        signing=st.integers(min_value=0, max_value=500),
        salaries=st.tuples(st.integers(min_value=0, max_value=200), st.integers(min_value=0, max_value=200)),
        years=st.integers(min_value=1, max_value=5),
    )
    def test_more_salary_never_adds_tension(self, *, stats, greed, stage, signing, salaries, years) -> None:
        hero = make_hero(stats=stats, greed=greed, stage=stage)
        low, high = sorted(salaries)

        self.assertGreaterEqual(
            tension_delta(hero, ContractOffer(signing, low, years)),
            tension_delta(hero, ContractOffer(signing, high, years)),
        )

    @settings(max_examples=60, deadline=None)
    @given(
        stats=STATS,
        stage=STAGES,
        salary=st.integers(min_value=0, max_value=200),
        bonuses=st.tuples(st.integers(min_value=0, max_value=800), st.integers(min_value=0, max_value=800)),
    )
    def test_more_signing_bonus_never_adds_tension(self, *, stats, stage, salary, bonuses) -> None:
        hero = make_hero(stats=stats, stage=stage)
        low, high = sorted(bonuses)

        self.assertGreaterEqual(
            tension_delta(hero, ContractOffer(low, salary, 2)),
            tension_delta(hero, ContractOffer(high, salary, 2)),
        )


if __name__ == "__main__":
    unittest.main()
