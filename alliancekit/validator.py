"""Alliance validators, delegations and delegation token arithmetic."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from alliancekit.asset import AllianceAsset, convert_new_share_to_dec_token, convert_new_token_to_shares
from alliancekit.coins import Coin, DecCoin, DecCoins
from alliancekit.dec import Dec
from alliancekit.params import RewardHistories

# Added before truncation so values such as 9.999999 round to 10.
_ROUNDING_EPSILON = Dec.with_prec(1, 6)


@dataclass
class AllianceValidatorInfo:
    """Alliance bookkeeping kept for one validator."""

    global_reward_history: RewardHistories = field(default_factory=RewardHistories)
    total_delegator_shares: DecCoins = field(default_factory=DecCoins)
    validator_shares: DecCoins = field(default_factory=DecCoins)


@dataclass
class AllianceValidator(AllianceValidatorInfo):
    """A validator identified by its operator address, with its alliance bookkeeping."""

    operator_address: str = ""

    def add_shares(self, delegation_shares: Iterable[DecCoin], validator_shares: Iterable[DecCoin]) -> None:
        self.total_delegator_shares = self.total_delegator_shares.add(*delegation_shares)
        self.validator_shares = self.validator_shares.add(*validator_shares)

    def reduce_shares(self, delegation_shares: Iterable[DecCoin], validator_shares: Iterable[DecCoin]) -> None:
        """Subtract shares, tolerating overshoots of less than one from rounding."""
        self.total_delegator_shares = subtract_dec_coins_with_rounding(
            self.total_delegator_shares, delegation_shares
        )
        self.validator_shares = subtract_dec_coins_with_rounding(self.validator_shares, validator_shares)

    def validator_shares_with_denom(self, denom: str) -> Dec:
        for coin in self.validator_shares:
            if coin.denom == denom:
                return coin.amount
        return Dec.zero()

    def total_delegation_shares_with_denom(self, denom: str) -> Dec:
        return self.total_delegator_shares.amount_of(denom)

    def total_tokens_with_asset(self, asset: AllianceAsset) -> Dec:
        """Tokens of ``asset`` backing this validator's shares."""
        shares = self.validator_shares_with_denom(asset.denom)
        return convert_new_share_to_dec_token(
            Dec.from_int(asset.total_tokens), asset.total_validator_shares, shares
        )


def subtract_dec_coins_with_rounding(d1s: Iterable[DecCoin], d2s: Iterable[DecCoin]) -> DecCoins:
    """Return ``d1s - d2s``; an amount exceeded by less than one is taken to zero.

    Raises ValueError when an amount would go negative by one or more.
    """
    original = d1s if isinstance(d1s, DecCoins) else DecCoins(d1s)
    result = original
    for d2 in d2s:
        a1 = original.amount_of(d2.denom)
        a2 = d2.amount
        if a2 > a1 and a2 - a1 < Dec.one():
            result = result.sub([DecCoin(d2.denom, a1)])
        else:
            result = result.sub([d2])
    return result


def get_validator_shares(asset: AllianceAsset, token: int) -> Dec:
    """Validator shares minted for ``token`` units of ``asset``."""
    return convert_new_token_to_shares(
        Dec.from_int(asset.total_tokens), asset.total_validator_shares, token
    )


@dataclass
class Delegation:
    """A delegator's shares of one asset with one validator."""

    delegator_address: str
    validator_address: str
    denom: str
    shares: Dec = field(default_factory=Dec.zero)
    reward_history: RewardHistories = field(default_factory=RewardHistories)
    last_reward_claim_height: int = 0


def new_delegation(
    delegator_address: str,
    validator_address: str,
    denom: str,
    shares: Dec,
    reward_history: Iterable,
    block_height: int,
) -> Delegation:
    """Create a delegation whose last claim is at ``block_height``."""
    return Delegation(
        delegator_address=delegator_address,
        validator_address=validator_address,
        denom=denom,
        shares=shares,
        reward_history=RewardHistories(reward_history),
        last_reward_claim_height=block_height,
    )


def get_delegation_tokens_with_shares(
    delegator_shares: Dec, validator: AllianceValidator, asset: AllianceAsset
) -> Coin:
    """Tokens of ``asset`` that ``delegator_shares`` with ``validator`` are worth."""
    val_tokens = validator.total_tokens_with_asset(asset)
    total_delegation_shares = validator.total_delegation_shares_with_denom(asset.denom)
    tokens = convert_new_share_to_dec_token(val_tokens, total_delegation_shares, delegator_shares)
    return Coin(asset.denom, (tokens + _ROUNDING_EPSILON).truncate_int())


def get_delegation_tokens(
    delegation: Delegation, validator: AllianceValidator, asset: AllianceAsset
) -> Coin:
    """Tokens of ``asset`` that ``delegation`` is worth."""
    return get_delegation_tokens_with_shares(delegation.shares, validator, asset)


def get_delegation_shares_from_tokens(
    validator: AllianceValidator, asset: AllianceAsset, token: int
) -> Dec:
    """Delegation shares minted for ``token`` units delegated to ``validator``."""
    val_tokens = validator.total_tokens_with_asset(asset)
    total_delegation_shares = validator.total_delegation_shares_with_denom(asset.denom)
    if total_delegation_shares.truncate_int() == 0:
        return Dec.from_int(token)
    return convert_new_token_to_shares(val_tokens, total_delegation_shares, token)