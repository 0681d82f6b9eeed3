"""Alliance assets and share/token conversions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from alliancekit.dec import Dec
from alliancekit.params import ZERO_TIME, RewardHistories


@dataclass
class RewardWeightRange:
    """Inclusive bounds for an asset's reward weight."""

    min: Dec = field(default_factory=Dec.zero)
    max: Dec = field(default_factory=Dec.zero)


@dataclass
class AllianceAsset:
    """An asset whitelisted for alliance staking."""

    denom: str
    reward_weight: Dec = field(default_factory=Dec.zero)
    take_rate: Dec = field(default_factory=Dec.zero)
    total_tokens: int = 0
    total_validator_shares: Dec = field(default_factory=Dec.zero)
    reward_start_time: datetime = ZERO_TIME
    reward_change_rate: Dec = field(default_factory=Dec.zero)
    reward_change_interval: timedelta = timedelta(0)
    last_reward_change_time: datetime = ZERO_TIME
    reward_weight_range: RewardWeightRange = field(default_factory=RewardWeightRange)
    is_initialized: bool = False

    def has_positive_decay(self) -> bool:
        """True when the reward weight changes periodically by a positive rate."""
        return self.reward_change_interval > timedelta(0) and self.reward_change_rate.is_positive()

    def rewards_started(self, block_time: datetime) -> bool:
        """True once ``block_time`` has reached the reward start time."""
        return block_time >= self.reward_start_time


@dataclass
class RewardWeightChangeSnapshot:
    """Reward state captured just before a reward weight change."""

    prev_reward_weight: Dec
    reward_histories: RewardHistories = field(default_factory=RewardHistories)


def new_alliance_asset(
    denom: str,
    reward_weight: Dec,
    min_reward_weight: Dec,
    max_reward_weight: Dec,
    take_rate: Dec,
    reward_start_time: datetime,
) -> AllianceAsset:
    """Create an asset with no tokens, a change rate of one and no change interval."""
    return AllianceAsset(
        denom=denom,
        reward_weight=reward_weight,
        reward_weight_range=RewardWeightRange(min=min_reward_weight, max=max_reward_weight),
        take_rate=take_rate,
        total_tokens=0,
        total_validator_shares=Dec.zero(),
        reward_start_time=reward_start_time,
        reward_change_rate=Dec.one(),
        reward_change_interval=timedelta(0),
        last_reward_change_time=reward_start_time,
        is_initialized=False,
    )


def convert_new_token_to_shares(total_tokens: Dec, total_shares: Dec, new_tokens: int) -> Dec:
    """Return the shares minted for ``new_tokens`` at the current share price."""
    if total_shares.is_zero():
        return Dec.from_int(new_tokens)
    return total_shares.quo(total_tokens).mul_int(new_tokens)


def convert_new_share_to_dec_token(total_tokens: Dec, total_shares: Dec, shares: Dec) -> Dec:
    """Return the tokens that ``shares`` are worth."""
    if total_shares.is_zero():
        return total_tokens
    return shares.quo(total_shares).mul(total_tokens)


def new_reward_weight_change_snapshot(asset: AllianceAsset, validator: Any) -> RewardWeightChangeSnapshot:
    """Snapshot the asset's current weight and the validator's reward history."""
    return RewardWeightChangeSnapshot(
        prev_reward_weight=asset.reward_weight,
        reward_histories=RewardHistories(validator.global_reward_history),
    )