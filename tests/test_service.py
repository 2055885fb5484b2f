import unittest
from dataclasses import replace

from recruitment.negotiation import (
    DEFAULT_NEGOTIATION_CONFIG,
    DUPLICATE_HERO,
    HERO_LOCKED,
    HERO_NOT_FOUND,
    NEGOTIATION_ALREADY_STARTED,
    NEGOTIATION_CLOSED,
    NEGOTIATION_NOT_STARTED,
    ContractOffer,
    NegotiationError,
    NegotiationService,
    Trait,
    ideal_offer,
)
from tests.helpers import make_hero

FAIR = ContractOffer(40, 40, 2)  # Voff 360 == Vexp
LOWBALL = ContractOffer(0, 20, 1)  # Voff 80, delta 77
NOTHING = ContractOffer(0, 0, 1)  # Voff 0, delta 100
STRICT = replace(DEFAULT_NEGOTIATION_CONFIG, accept_max_delta=0)


class NegotiationServiceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.svc = NegotiationService()
        self.svc.register_hero(make_hero())

    def _codes(self, events):
        return [e["type"] for e in events]

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def test_duplicate_registration_is_refused(self) -> None:
        with self.assertRaises(NegotiationError) as ctx:
            self.svc.register_hero(make_hero())
        self.assertEqual(DUPLICATE_HERO, ctx.exception.code)

    def test_unknown_hero(self) -> None:
        with self.assertRaises(NegotiationError) as ctx:
            self.svc.get_hero("nobody")
        self.assertEqual(HERO_NOT_FOUND, ctx.exception.code)

    def test_hero_view_includes_derived_numbers(self) -> None:
        view = self.svc.hero_view("h1")

        self.assertEqual("POOL", view["location"])
        self.assertEqual(360, view["expected_value"])
        self.assertEqual("NEUTRAL", view["payment_preference"])
        self.assertEqual({"signing_bonus": 96, "salary_per_turn": 33, "contract_length_years": 2}, view["ideal_offer"])
        self.assertEqual({}, view["stat_modifiers"])
        self.assertEqual(33.0, view["effective_salary"])

    def test_hero_view_applies_trait_modifiers(self) -> None:
        thrifty = Trait("Thrifty", stat_modifiers={"prowess": 5, "vitality": -2}, salary_modifier=-0.5)
        sharp = Trait("Sharp", stat_modifiers={"prowess": 3})
        self.svc.register_hero(make_hero("h2", traits=[thrifty, sharp]))

        view = self.svc.hero_view("h2")

        self.assertEqual({"prowess": 8, "vitality": -2}, view["stat_modifiers"])
        self.assertEqual(16.5, view["effective_salary"])
        self.assertEqual(360, view["expected_value"])

    # ------------------------------------------------------------------
    # Rounds
    # ------------------------------------------------------------------

    def test_offer_before_start_is_refused(self) -> None:
        with self.assertRaises(NegotiationError) as ctx:
            self.svc.submit_offer("h1", FAIR, 1)
        self.assertEqual(NEGOTIATION_NOT_STARTED, ctx.exception.code)

    def test_start_twice_is_refused(self) -> None:
        self.svc.start_negotiation("h1", 1)

        with self.assertRaises(NegotiationError) as ctx:
            self.svc.start_negotiation("h1", 1)
        self.assertEqual(NEGOTIATION_ALREADY_STARTED, ctx.exception.code)

    def test_start_seeds_tension_from_trust(self) -> None:
        self.svc.register_hero(make_hero("wary", trust=50))

        profile = self.svc.start_negotiation("wary", 1)

        self.assertEqual(12, profile.tension)
        self.assertEqual([{"type": "NEGOTIATION_STARTED", "hero_id": "wary", "turn": 1, "tension": 12}], self.svc.drain_events())

    def test_fair_offer_is_accepted_and_signed(self) -> None:
        self.svc.start_negotiation("h1", 1)

        decision = self.svc.submit_offer("h1", FAIR, 1)
        self.assertEqual("ACCEPT", decision.verdict)
        self.assertEqual(0, decision.tension_delta)
        self.assertEqual("ACCEPTED", self.svc.get_hero("h1").state.phase)

        contract = self.svc.accept_offer("h1", 1)
        self.assertEqual(8, contract.turns_remaining)
        self.assertEqual("ROSTER", self.svc.registry.location("h1"))

        events = self.svc.drain_events()
        self.assertEqual(["NEGOTIATION_STARTED", "TENSION_CHANGED", "CONTRACT_SIGNED"], self._codes(events))
        self.assertEqual(40, events[-1]["signing_bonus"])
        self.assertEqual(0, len(self.svc.events))

    def test_ideal_offer_is_accepted(self) -> None:
        hero = make_hero("greedy", traits=["Greedy"])
        self.svc.register_hero(hero)
        self.svc.start_negotiation("greedy", 1)

        decision = self.svc.submit_offer("greedy", ideal_offer(hero, 3), 1)

        self.assertEqual("ACCEPT", decision.verdict)

    def test_accept_without_agreement_is_refused(self) -> None:
        self.svc.start_negotiation("h1", 1)

        with self.assertRaises(NegotiationError) as ctx:
            self.svc.accept_offer("h1")
        self.assertEqual(NEGOTIATION_NOT_STARTED, ctx.exception.code)

    def test_lowball_below_the_walk_limit_is_accepted(self) -> None:
        self.svc.start_negotiation("h1", 1)

        decision = self.svc.submit_offer("h1", LOWBALL, 1)

        self.assertEqual("ACCEPT", decision.verdict)
        self.assertEqual(77, decision.tension)
        self.assertEqual(["OFFER_ACCEPTED", "OFFER_BELOW_EXPECTATION"], [r.code for r in decision.reasons])
        self.assertEqual("ACCEPTED", self.svc.get_hero("h1").state.phase)

    def test_slightly_short_offer_is_accepted(self) -> None:
        self.svc.start_negotiation("h1", 1)

        decision = self.svc.submit_offer("h1", ContractOffer(40, 39, 2), 1)

        self.assertEqual("ACCEPT", decision.verdict)
        self.assertEqual(2, decision.tension)
        self.assertEqual(39, self.svc.accept_offer("h1", 1).salary_per_turn)

    def test_strict_config_rejects_lowball_with_reasons(self) -> None:
        svc = NegotiationService(STRICT)
        svc.register_hero(make_hero())
        svc.start_negotiation("h1", 1)

        decision = svc.submit_offer("h1", LOWBALL, 1)

        self.assertEqual("REJECT", decision.verdict)
        self.assertEqual(77, decision.tension)
        self.assertEqual(["OFFER_BELOW_EXPECTATION"], [r.code for r in decision.reasons])
        self.assertEqual("NEGOTIATING", svc.get_hero("h1").state.phase)
        self.assertEqual(77, svc.get_hero("h1").tension)

    def test_strict_config_rejects_preference_violation_alone(self) -> None:
        svc = NegotiationService(STRICT)
        svc.register_hero(make_hero("greedy", traits=["Greedy"]))
        svc.start_negotiation("greedy", 1)

        decision = svc.submit_offer("greedy", ContractOffer(0, 117, 1), 1)

        self.assertEqual("REJECT", decision.verdict)
        self.assertEqual(10, decision.tension_delta)
        self.assertEqual(["PAYMENT_PREFERENCE_VIOLATED"], [r.code for r in decision.reasons])

    def test_preference_violation_is_reported_on_acceptance(self) -> None:
        self.svc.register_hero(make_hero("greedy", traits=["Greedy"]))
        self.svc.start_negotiation("greedy", 1)

        decision = self.svc.submit_offer("greedy", ContractOffer(0, 117, 1), 1)

        self.assertEqual("ACCEPT", decision.verdict)
        self.assertEqual(["OFFER_ACCEPTED", "PAYMENT_PREFERENCE_VIOLATED"], [r.code for r in decision.reasons])

    def test_preview_does_not_change_state(self) -> None:
        self.svc.start_negotiation("h1", 1)

        preview = self.svc.preview_offer("h1", LOWBALL)

        self.assertEqual(77, preview["projected_tension"])
        self.assertEqual(-280, preview["difference"])
        self.assertFalse(preview["would_walk"])
        self.assertEqual(0, self.svc.get_hero("h1").tension)

    # ------------------------------------------------------------------
    # Walk-away and lockout
    # ------------------------------------------------------------------

    def _walk_away(self, turn: int) -> None:
        self.svc.start_negotiation("h1", turn)
        decision = self.svc.submit_offer("h1", NOTHING, turn)
        self.assertEqual("WALK", decision.verdict)
        self.assertTrue(decision.walked_away)
        self.assertEqual(100, decision.tension)

    def test_walk_away_locks_the_hero(self) -> None:
        self._walk_away(10)

        hero = self.svc.get_hero("h1")
        self.assertEqual("WALKED_AWAY", hero.state.phase)
        self.assertEqual(10, hero.state.walk_away_turn)
        self.assertIn("HERO_WALKED_AWAY", self._codes(self.svc.drain_events()))

        with self.assertRaises(NegotiationError) as ctx:
            self.svc.submit_offer("h1", FAIR, 10)
        self.assertEqual(NEGOTIATION_CLOSED, ctx.exception.code)

        with self.assertRaises(NegotiationError) as ctx:
            self.svc.start_negotiation("h1", 13)
        self.assertEqual(HERO_LOCKED, ctx.exception.code)

    def test_annual_refresh_releases_expired_lockouts(self) -> None:
        self._walk_away(10)
        self.svc.drain_events()

        self.assertEqual([], self.svc.annual_refresh(13))
        self.assertEqual(["h1"], self.svc.annual_refresh(14))
        self.assertEqual(["HERO_RELEASED"], self._codes(self.svc.drain_events()))

        hero = self.svc.get_hero("h1")
        self.assertEqual("UNINITIALIZED", hero.state.phase)
        self.assertEqual(0, hero.tension)
        self.assertEqual(0, self.svc.start_negotiation("h1", 14).tension)

    def test_expired_lockout_can_restart_without_refresh(self) -> None:
        self._walk_away(10)

        profile = self.svc.start_negotiation("h1", 14)

        self.assertEqual("NEGOTIATING", profile.state.phase)
        self.assertFalse(profile.state.has_walked_away)

    # ------------------------------------------------------------------
    # Contract lifetime
    # ------------------------------------------------------------------

    def test_contract_expiry_returns_hero_to_pool(self) -> None:
        self.svc.start_negotiation("h1", 1)
        self.svc.submit_offer("h1", ContractOffer(40, 80, 1), 1)
        self.svc.accept_offer("h1", 1)
        self.svc.drain_events()

        for turn in (2, 3, 4):
            self.assertEqual([], self.svc.advance_turn(turn))
        self.assertEqual(1, self.svc.get_hero("h1").contract.turns_remaining)

        self.assertEqual(["h1"], self.svc.advance_turn(5))
        self.assertEqual("POOL", self.svc.registry.location("h1"))
        self.assertEqual("UNINITIALIZED", self.svc.get_hero("h1").state.phase)
        self.assertEqual(["CONTRACT_EXPIRED"], self._codes(self.svc.drain_events()))

    def test_signed_hero_cannot_be_negotiated_again(self) -> None:
        self.svc.start_negotiation("h1", 1)
        self.svc.submit_offer("h1", FAIR, 1)
        self.svc.accept_offer("h1", 1)

        with self.assertRaises(NegotiationError) as ctx:
            self.svc.start_negotiation("h1", 2)
        self.assertEqual(NEGOTIATION_CLOSED, ctx.exception.code)


if __name__ == "__main__":
    unittest.main()
