"""Transaction messages for delegating alliance assets, with amino JSON encoding."""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from typing import Any, ClassVar, Union

from alliancekit.coins import Coin
from alliancekit.errors import InvalidArgumentError

MSG_DELEGATE_TYPE = "msg_delegate"
MSG_UNDELEGATE_TYPE = "msg_undelegate"
MSG_REDELEGATE_TYPE = "msg_redelegate"
MSG_CLAIM_DELEGATION_REWARDS_TYPE = "claim_delegation_rewards"


def _encode(value: Any, sort_keys: bool) -> str:
    """Compact JSON with the HTML-safe escapes of the chain's encoder."""
    text = json.dumps(value, separators=(",", ":"), sort_keys=sort_keys, ensure_ascii=False)
    for char, escape in (
        ("<", "\\u003c"),
        (">", "\\u003e"),
        ("&", "\\u0026"),
        ("\u2028", "\\u2028"),
        ("\u2029", "\\u2029"),
    ):
        text = text.replace(char, escape)
    return text


def _json_fields(msg: Any) -> dict:
    out: dict = {}
    for spec in fields(msg):
        value = getattr(msg, spec.name)
        if isinstance(value, Coin):
            out[spec.name] = {"denom": value.denom, "amount": str(value.amount)}
        elif value:
            out[spec.name] = value
    return out


def _to_json(msg: Any) -> str:
    return _encode(_json_fields(msg), sort_keys=False)


def _from_json(cls: Any, data: Union[str, bytes], coin_fields: frozenset) -> Any:
    decoded = json.loads(data)
    if not isinstance(decoded, dict):
        raise ValueError("message JSON must be an object")
    kwargs = {}
    for spec in fields(cls):
        raw = decoded.get(spec.name)
        if spec.name in coin_fields:
            if not isinstance(raw, dict):
                raise ValueError(f"missing coin field {spec.name!r}")
            kwargs[spec.name] = Coin(raw.get("denom", ""), int(raw.get("amount", "0")))
        else:
            raw = "" if raw is None else raw
            if not isinstance(raw, str):
                raise ValueError(f"field {spec.name!r} must be a string")
            kwargs[spec.name] = raw
    return cls(**kwargs)


def _amino_json(msg: Any, amino_name: str) -> dict:
    return {"type": amino_name, "value": _json_fields(msg)}


def _sign_bytes(msg: Any, amino_name: str) -> bytes:
    return _encode(_amino_json(msg, amino_name), sort_keys=True).encode("utf-8")


def _require_positive(amount: Coin, what: str) -> None:
    if amount.amount <= 0:
        raise InvalidArgumentError(f"Alliance {what} amount must be more than zero")


_AMOUNT_FIELDS = frozenset({"amount"})


@dataclass
class MsgDelegate:
    """Delegate an alliance asset to a validator."""

    amino_name: ClassVar[str] = "alliance/MsgDelegate"
    msg_type: ClassVar[str] = MSG_DELEGATE_TYPE

    delegator_address: str
    validator_address: str
    amount: Coin

    def validate_basic(self) -> None:
        _require_positive(self.amount, "delegation")

    def to_json(self) -> str:
        """The message as JSON, fields in declaration order."""
        return _to_json(self)

    @classmethod
    def from_json(cls, data: Union[str, bytes]) -> "MsgDelegate":
        """Decode JSON written by :meth:`to_json`; raise ValueError if malformed."""
        return _from_json(cls, data, _AMOUNT_FIELDS)

    def amino_json(self) -> dict:
        """The message wrapped with its registered amino type name."""
        return _amino_json(self, self.amino_name)

    def sign_bytes(self) -> bytes:
        """Canonical bytes to sign: the amino JSON with keys sorted."""
        return _sign_bytes(self, self.amino_name)


@dataclass
class MsgRedelegate:
    """Move an alliance delegation from one validator to another."""

    amino_name: ClassVar[str] = "alliance/MsgRedelegate"
    msg_type: ClassVar[str] = MSG_REDELEGATE_TYPE

    delegator_address: str
    validator_src_address: str
    validator_dst_address: str
    amount: Coin

    def validate_basic(self) -> None:
        _require_positive(self.amount, "redelegation")

    def to_json(self) -> str:
        """The message as JSON, fields in declaration order."""
        return _to_json(self)

    @classmethod
    def from_json(cls, data: Union[str, bytes]) -> "MsgRedelegate":
        """Decode JSON written by :meth:`to_json`; raise ValueError if malformed."""
        return _from_json(cls, data, _AMOUNT_FIELDS)

    def amino_json(self) -> dict:
        """The message wrapped with its registered amino type name."""
        return _amino_json(self, self.amino_name)

    def sign_bytes(self) -> bytes:
        """Canonical bytes to sign: the amino JSON with keys sorted."""
        return _sign_bytes(self, self.amino_name)


@dataclass
class MsgUndelegate:
    """Withdraw an alliance delegation from a validator."""

    amino_name: ClassVar[str] = "alliance/MsgUndelegate"
    msg_type: ClassVar[str] = MSG_UNDELEGATE_TYPE

    delegator_address: str
    validator_address: str
    amount: Coin

    def validate_basic(self) -> None:
        _require_positive(self.amount, "undelegate")

    def to_json(self) -> str:
        """The message as JSON, fields in declaration order."""
        return _to_json(self)

    @classmethod
    def from_json(cls, data: Union[str, bytes]) -> "MsgUndelegate":
        """Decode JSON written by :meth:`to_json`; raise ValueError if malformed."""
        return _from_json(cls, data, _AMOUNT_FIELDS)

    def amino_json(self) -> dict:
        """The message wrapped with its registered amino type name."""
        return _amino_json(self, self.amino_name)

    def sign_bytes(self) -> bytes:
        """Canonical bytes to sign: the amino JSON with keys sorted."""
        return _sign_bytes(self, self.amino_name)


@dataclass
class MsgClaimDelegationRewards:
    """Claim the rewards accrued by a delegation of one denomination."""

    amino_name: ClassVar[str] = "alliance/MsgClaimDelegationRewards"
    msg_type: ClassVar[str] = MSG_CLAIM_DELEGATION_REWARDS_TYPE

    delegator_address: str
    validator_address: str
    denom: str

    def validate_basic(self) -> None:
        if self.denom == "":
            raise InvalidArgumentError("Alliance denom must have a value")

    def to_json(self) -> str:
        """The message as JSON, fields in declaration order."""
        return _to_json(self)

    @classmethod
    def from_json(cls, data: Union[str, bytes]) -> "MsgClaimDelegationRewards":
        """Decode JSON written by :meth:`to_json`; raise ValueError if malformed."""
        return _from_json(cls, data, frozenset())

    def amino_json(self) -> dict:
        """The message wrapped with its registered amino type name."""
        return _amino_json(self, self.amino_name)

    def sign_bytes(self) -> bytes:
        """Canonical bytes to sign: the amino JSON with keys sorted."""
        return _sign_bytes(self, self.amino_name)