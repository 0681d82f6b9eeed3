"""Reward index bookkeeping and delegation reward calculation."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Union

from alliancekit.asset import AllianceAsset, RewardWeightChangeSnapshot
from alliancekit.coins import Coin, Coins
from alliancekit.dec import Dec
from alliancekit.params import RewardHistories, RewardHistory
from alliancekit.validator import AllianceValidator, Delegation, get_delegation_tokens


def _copy_histories(histories: Iterable[RewardHistory]) -> RewardHistories:
    return RewardHistories(RewardHistory(h.denom, h.index) for h in histories)


def accumulate_rewards(
    latest_histories: Iterable[RewardHistory],
    reward_histories: Iterable[RewardHistory],
    asset: AllianceAsset,
    reward_weight: Dec,
    delegation: Delegation,
    validator: AllianceValidator,
) -> tuple[Coins, RewardHistories]:
    """Compare the latest reward indices with a delegation's and return what it can claim.

    Returns the claimable coins and the delegation's histories advanced to the
    latest indices. The histories passed in are left untouched.
    """
    histories = _copy_histories(reward_histories)
    delegation_tokens = Dec.from_int(get_delegation_tokens(delegation, validator, asset).amount)
    claim_weight = delegation_tokens.mul(reward_weight)
    rewards = Coins()
    for latest in latest_histories:
        current = histories.get_index_by_denom(latest.denom)
        found = current is not None
        if current is None:
            current = RewardHistory(latest.denom, Dec.zero())
        if current.index >= latest.index:
            continue
        claimable = (latest.index - current.index).mul(claim_weight)
        current.index = latest.index
        rewards = rewards.add(Coin(latest.denom, claimable.truncate_int()))
        if not found:
            histories.append(current)
    return rewards, histories


def calculate_delegation_rewards(
    delegation: Delegation,
    validator: AllianceValidator,
    asset: AllianceAsset,
    snapshots: Iterable[RewardWeightChangeSnapshot],
) -> tuple[Coins, RewardHistories]:
    """Return the rewards a delegation can claim and its new reward indices.

    ``snapshots`` are the reward weight change snapshots taken since the
    delegation's last claim, oldest first; each period is claimed at the
    weight that was in force during it.
    """
    total = Coins()
    histories = _copy_histories(delegation.reward_history)
    for snapshot in snapshots:
        rewards, histories = accumulate_rewards(
            snapshot.reward_histories,
            histories,
            asset,
            snapshot.prev_reward_weight,
            delegation,
            validator,
        )
        total = total.add(*rewards)
    rewards, _ = accumulate_rewards(
        validator.global_reward_history,
        histories,
        asset,
        asset.reward_weight,
        delegation,
        validator,
    )
    total = total.add(*rewards)
    return total, _copy_histories(validator.global_reward_history)


def total_asset_weight(
    validator: AllianceValidator,
    assets: Union[Mapping[str, AllianceAsset], Iterable[AllianceAsset]],
    block_time: datetime,
) -> Dec:
    """Sum of reward weight times tokens for every started asset delegated to ``validator``.

    ``assets`` is a mapping of denom to asset or an iterable of assets;
    denominations without a known asset are ignored.
    """
    by_denom = assets if isinstance(assets, Mapping) else {a.denom: a for a in assets}
    total = Dec.zero()
    for share in validator.total_delegator_shares:
        asset = by_denom.get(share.denom)
        if asset is None or not asset.rewards_started(block_time):
            continue
        total = total + asset.reward_weight.mul(validator.total_tokens_with_asset(asset))
    return total


def add_rewards_to_history(
    validator: AllianceValidator, coins: Iterable[Coin], total_weight: Dec
) -> bool:
    """Raise the validator's reward indices by ``coins`` spread over ``total_weight``.

    Returns False, changing nothing, when the validator has no delegations or
    the weight is zero, since such rewards belong to no one.
    """
    if len(validator.total_delegator_shares) == 0:
        return False
    if total_weight.is_zero():
        return False
    histories = _copy_histories(validator.global_reward_history)
    for coin in coins:
        increment = Dec.from_int(coin.amount).quo(total_weight)
        existing = histories.get_index_by_denom(coin.denom)
        if existing is None:
            histories.append(RewardHistory(coin.denom, increment))
        else:
            existing.index = existing.index + increment
    validator.global_reward_history = histories
    return True