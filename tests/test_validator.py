import pytest

from alliancekit.asset import AllianceAsset
from alliancekit.coins import Coin, DecCoin, DecCoins
from alliancekit.dec import Dec
from alliancekit.params import RewardHistories, RewardHistory
from alliancekit.validator import (
    AllianceValidator,
    get_delegation_shares_from_tokens,
    get_delegation_tokens,
    get_delegation_tokens_with_shares,
    get_validator_shares,
    new_delegation,
    subtract_dec_coins_with_rounding,
)


def _dc(denom, text):
    return DecCoin(denom, Dec.from_str(text))


def _base():
    return DecCoins(
        [_dc("aaa", "1000.00"), _dc("bbb", "1000.00"), _dc("ccc", "1000.00")]
    )


def _expected():
    return DecCoins([_dc("aaa", "600.00"), _dc("bbb", "0"), _dc("ccc", "1000.00")])


def test_subtract_dec_coins_with_rounding():
    b = DecCoins([_dc("aaa", "400.00"), _dc("bbb", "1000.00")])
    assert subtract_dec_coins_with_rounding(_base(), b) == _expected()


def test_subtract_dec_coins_with_rounding_with_small_errors():
    b = DecCoins([_dc("aaa", "400.00"), _dc("bbb", "1000.90")])
    assert subtract_dec_coins_with_rounding(_base(), b) == _expected()


def test_subtract_dec_coins_with_rounding_with_big_errors():
    b = DecCoins([_dc("aaa", "400.00"), _dc("bbb", "1010.10")])
    with pytest.raises(ValueError):
        subtract_dec_coins_with_rounding(_base(), b)


def test_add_then_reduce_shares_round_trip():
    val = AllianceValidator(operator_address="valoper")
    shares = [_dc("aaa", "10")]
    val.add_shares(shares, shares)
    assert val.total_delegation_shares_with_denom("aaa") == Dec.from_int(10)
    assert val.validator_shares_with_denom("aaa") == Dec.from_int(10)
    val.reduce_shares(shares, shares)
    assert len(val.total_delegator_shares) == 0
    assert len(val.validator_shares) == 0


def test_validator_shares_with_missing_denom_is_zero():
    val = AllianceValidator(operator_address="valoper")
    assert val.validator_shares_with_denom("zzz") == Dec.zero()


def _setup():
    asset = AllianceAsset(
        denom="alliance", total_tokens=1000, total_validator_shares=Dec.from_int(1000)
    )
    val = AllianceValidator(
        operator_address="valoper",
        total_delegator_shares=DecCoins([DecCoin("alliance", Dec.from_int(1000))]),
        validator_shares=DecCoins([DecCoin("alliance", Dec.from_int(1000))]),
    )
    return asset, val


def test_total_tokens_with_asset_all_shares():
    asset, val = _setup()
    assert val.total_tokens_with_asset(asset) == Dec.from_int(1000)


def test_delegation_tokens_for_all_shares():
    asset, val = _setup()
    delegation = new_delegation("del", "valoper", "alliance", Dec.from_int(1000), [], 3)
    assert get_delegation_tokens(delegation, val, asset) == Coin("alliance", 1000)
    assert delegation.last_reward_claim_height == 3


def test_delegation_tokens_with_shares_matches_delegation():
    asset, val = _setup()
    shares = Dec.from_int(250)
    delegation = new_delegation("del", "valoper", "alliance", shares, [], 1)
    assert get_delegation_tokens_with_shares(shares, val, asset) == get_delegation_tokens(
        delegation, val, asset
    )


def test_shares_from_tokens_round_trip():
    asset, val = _setup()
    shares = get_delegation_shares_from_tokens(val, asset, 300)
    assert get_delegation_tokens_with_shares(shares, val, asset) == Coin("alliance", 300)


def test_shares_from_tokens_without_delegations_is_one_to_one():
    asset = AllianceAsset(denom="alliance")
    val = AllianceValidator(operator_address="valoper")
    assert get_delegation_shares_from_tokens(val, asset, 1000000) == Dec.from_int(1000000)


def test_validator_shares_for_empty_asset():
    asset = AllianceAsset(denom="alliance")
    assert get_validator_shares(asset, 500) == Dec.from_int(500)


def test_new_delegation_keeps_reward_history():
    history = [RewardHistory("reward", Dec.one())]
    delegation = new_delegation("del", "val", "alliance", Dec.one(), history, 9)
    assert isinstance(delegation.reward_history, RewardHistories)
    assert delegation.reward_history.get_index_by_denom("reward").index == Dec.one()