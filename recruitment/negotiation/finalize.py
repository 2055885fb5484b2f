from __future__ import annotations

import logging
from dataclasses import replace
from typing import Tuple

from .config import DEFAULT_NEGOTIATION_CONFIG, NegotiationConfig
from .errors import AlreadyUnderContract
from .types import ContractOffer, HeroContract

logger = logging.getLogger(__name__)


def finalize(
    contract: HeroContract,
    offer: ContractOffer,
    *,
    cfg: NegotiationConfig = DEFAULT_NEGOTIATION_CONFIG,
) -> HeroContract:
    """Commit an accepted offer into contract fields.

    The signing bonus is recorded for reference only; paying it is the economy
    collaborator's job. Raises AlreadyUnderContract (and changes nothing) when
    the hero still has turns left on a contract.
    """
    if contract.is_active:
        raise AlreadyUnderContract(
            "Hero is already under contract",
            {"turns_remaining": int(contract.turns_remaining)},
        )

    signed = HeroContract(
        signing_bonus=int(offer.signing_bonus),
        salary_per_turn=int(offer.salary_per_turn),
        contract_length_years=int(offer.contract_length_years),
        turns_remaining=int(offer.contract_length_years) * int(cfg.turns_per_year),
    )
    logger.info(
        "contract finalized: salary=%d/turn length=%d years (%d turns)",
        signed.salary_per_turn,
        signed.contract_length_years,
        signed.turns_remaining,
    )
    return signed


def tick_contract(contract: HeroContract) -> Tuple[HeroContract, bool]:
    """Advance one turn. Returns (contract, expired_this_turn)."""
    if not contract.is_active:
        return contract, False
    remaining = int(contract.turns_remaining) - 1
    return replace(contract, turns_remaining=remaining), remaining <= 0
