import pytest

from alliancekit.coins import Coin
from alliancekit.errors import InvalidArgumentError
from alliancekit.msg import (
    MsgClaimDelegationRewards,
    MsgDelegate,
    MsgRedelegate,
    MsgUndelegate,
)

AMOUNT = Coin("Alliance", 1000000000000000000)


def test_marshal_json_msg_delegate():
    msg = MsgDelegate("delegator", "validator", AMOUNT)
    text = msg.to_json()
    assert text == (
        '{"delegator_address":"delegator","validator_address":"validator",'
        '"amount":{"denom":"Alliance","amount":"1000000000000000000"}}'
    )
    assert MsgDelegate.from_json(text) == msg


def test_sign_bytes_delegate():
    msg = MsgDelegate("delegator", "validator", AMOUNT)
    assert msg.sign_bytes() == (
        b'{"type":"alliance/MsgDelegate","value":{"amount":{"amount":"1000000000000000000",'
        b'"denom":"Alliance"},"delegator_address":"delegator","validator_address":"validator"}}'
    )


def test_sign_bytes_undelegate():
    msg = MsgUndelegate("delegator", "validator", AMOUNT)
    assert msg.sign_bytes() == (
        b'{"type":"alliance/MsgUndelegate","value":{"amount":{"amount":"1000000000000000000",'
        b'"denom":"Alliance"},"delegator_address":"delegator","validator_address":"validator"}}'
    )


def test_sign_bytes_redelegate():
    msg = MsgRedelegate("delegator", "validator", "validator1", AMOUNT)
    assert msg.sign_bytes() == (
        b'{"type":"alliance/MsgRedelegate","value":{"amount":{"amount":"1000000000000000000",'
        b'"denom":"Alliance"},"delegator_address":"delegator",'
        b'"validator_dst_address":"validator1","validator_src_address":"validator"}}'
    )


def test_sign_bytes_claim_rewards():
    msg = MsgClaimDelegationRewards("delegator", "validator", "Alliance")
    assert msg.sign_bytes() == (
        b'{"type":"alliance/MsgClaimDelegationRewards","value":{"delegator_address":"delegator",'
        b'"denom":"Alliance","validator_address":"validator"}}'
    )


def test_amino_json_wraps_type():
    msg = MsgUndelegate("delegator", "validator", AMOUNT)
    wrapped = msg.amino_json()
    assert wrapped["type"] == "alliance/MsgUndelegate"
    assert wrapped["value"]["amount"] == {"denom": "Alliance", "amount": "1000000000000000000"}


@pytest.mark.parametrize(
    "msg",
    [
        MsgDelegate("delegator", "validator", AMOUNT),
        MsgRedelegate("delegator", "validator", "validator1", AMOUNT),
        MsgUndelegate("delegator", "validator", AMOUNT),
        MsgClaimDelegationRewards("delegator", "validator", "Alliance"),
    ],
)
def test_json_round_trip(msg):
    assert type(msg).from_json(msg.to_json()) == msg


def test_empty_strings_are_omitted():
    msg = MsgClaimDelegationRewards("", "validator", "Alliance")
    assert msg.to_json() == '{"validator_address":"validator","denom":"Alliance"}'
    assert MsgClaimDelegationRewards.from_json(msg.to_json()) == msg


def test_from_json_rejects_non_object():
    with pytest.raises(ValueError):
        MsgDelegate.from_json("[1, 2]")


def test_from_json_rejects_missing_amount():
    with pytest.raises(ValueError):
        MsgDelegate.from_json('{"delegator_address":"a","validator_address":"b"}')


@pytest.mark.parametrize(
    "msg, message",
    [
        (MsgDelegate("a", "b", Coin("Alliance", 0)), "Alliance delegation amount must be more than zero"),
        (
            MsgRedelegate("a", "b", "c", Coin("Alliance", 0)),
            "Alliance redelegation amount must be more than zero",
        ),
        (MsgUndelegate("a", "b", Coin("Alliance", 0)), "Alliance undelegate amount must be more than zero"),
        (MsgClaimDelegationRewards("a", "b", ""), "Alliance denom must have a value"),
    ],
)
def test_validate_basic_rejects(msg, message):
    with pytest.raises(InvalidArgumentError) as info:
        msg.validate_basic()
    assert str(info.value) == message


def test_validate_basic_accepts_positive_amount():
    msg = MsgDelegate("a", "b", Coin("Alliance", 1))
    msg.validate_basic()
    assert msg.msg_type == "msg_delegate"


def test_message_types():
    undelegate = MsgUndelegate("a", "b", AMOUNT)
    redelegate = MsgRedelegate("a", "b", "c", AMOUNT)
    claim = MsgClaimDelegationRewards("a", "b", "Alliance")
    assert undelegate.msg_type == "msg_undelegate"
    assert redelegate.msg_type == "msg_redelegate"
    assert claim.msg_type == "claim_delegation_rewards"
    assert redelegate.amino_json()["type"] == "alliance/MsgRedelegate"
    assert claim.amino_json()["type"] == "alliance/MsgClaimDelegationRewards"