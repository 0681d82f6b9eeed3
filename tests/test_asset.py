from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

from alliancekit.asset import (
    AllianceAsset,
    RewardWeightRange,
    convert_new_share_to_dec_token,
    convert_new_token_to_shares,
    new_alliance_asset,
    new_reward_weight_change_snapshot,
)
from alliancekit.dec import Dec
from alliancekit.params import RewardHistories, RewardHistory

START = datetime(2023, 1, 1, tzinfo=timezone.utc)


def _asset():
    return new_alliance_asset(
        "stake", Dec.one(), Dec.zero(), Dec.from_int(2), Dec.zero(), START
    )


def test_new_alliance_asset_defaults():
    asset = _asset()
    assert asset.denom == "stake"
    assert asset.reward_weight == Dec.one()
    assert asset.reward_weight_range == RewardWeightRange(min=Dec.zero(), max=Dec.from_int(2))
    assert asset.total_tokens == 0
    assert asset.total_validator_shares == Dec.zero()
    assert asset.reward_change_rate == Dec.one()
    assert asset.reward_change_interval == timedelta(0)
    assert asset.last_reward_change_time == START
    assert asset.is_initialized is False


def test_rewards_started_boundaries():
    asset = _asset()
    assert asset.rewards_started(START)
    assert asset.rewards_started(START + timedelta(seconds=1))
    assert not asset.rewards_started(START - timedelta(microseconds=1))


def test_has_positive_decay():
    asset = _asset()
    assert not asset.has_positive_decay()
    asset.reward_change_interval = timedelta(hours=24)
    assert asset.has_positive_decay()
    asset.reward_change_rate = Dec.zero()
    assert not asset.has_positive_decay()


def test_token_to_shares_with_no_shares_is_one_to_one():
    shares = convert_new_token_to_shares(Dec.zero(), Dec.zero(), 1000)
    assert shares == Dec.from_int(1000)


def test_share_to_token_with_no_shares_returns_total():
    total = Dec.from_int(77)
    assert convert_new_share_to_dec_token(total, Dec.zero(), Dec.from_int(5)) == total


def test_token_share_round_trip():
    total_tokens = Dec.from_int(100)
    total_shares = Dec.from_int(200)
    shares = convert_new_token_to_shares(total_tokens, total_shares, 10)
    back = convert_new_share_to_dec_token(total_tokens, total_shares, shares)
    assert back == Dec.from_int(10)


def test_all_shares_worth_all_tokens():
    total_tokens = Dec.from_str("123.5")
    total_shares = Dec.from_int(400)
    assert convert_new_share_to_dec_token(total_tokens, total_shares, total_shares) == total_tokens


def test_snapshot_captures_weight_and_history():
    asset = AllianceAsset(denom="stake", reward_weight=Dec.from_str("0.5"))
    history = RewardHistories([RewardHistory("reward", Dec.one())])
    validator = SimpleNamespace(global_reward_history=history)
    snapshot = new_reward_weight_change_snapshot(asset, validator)
    assert snapshot.prev_reward_weight == Dec.from_str("0.5")
    assert list(snapshot.reward_histories) == list(history)