"""Governance proposals that create, update and delete alliances."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import ClassVar, Iterable, Optional

from alliancekit.asset import RewardWeightRange
from alliancekit.coins import validate_denom
from alliancekit.dec import Dec
from alliancekit.errors import InvalidArgumentError
from alliancekit.keys import ROUTER_KEY

PROPOSAL_TYPE_CREATE_ALLIANCE = "msg_create_alliance_proposal"
PROPOSAL_TYPE_UPDATE_ALLIANCE = "msg_update_alliance_proposal"
PROPOSAL_TYPE_DELETE_ALLIANCE = "msg_delete_alliance_proposal"

_TEXT_ESCAPES = {
    ord("\n"): "\\n",
    ord("\r"): "\\r",
    ord("\t"): "\\t",
    ord('"'): '\\"',
    ord("\\"): "\\\\",
}


def _text_string(value: str) -> str:
    """Quote a string the way the compact protobuf text format does."""
    parts = []
    for byte in value.encode("utf-8"):
        if byte in _TEXT_ESCAPES:
            parts.append(_TEXT_ESCAPES[byte])
        elif byte < 0x20 or byte >= 0x7F:
            parts.append(f"\\{byte:03o}")
        else:
            parts.append(chr(byte))
    return '"' + "".join(parts) + '"'


def _dec_raw(value: Optional[Dec]) -> str:
    """The decimal as its integer count of 10**-18 units."""
    if value is None:
        return "0"
    return str(int(str(value).replace(".", "")))


def _duration_text(value: timedelta) -> str:
    total_ns = ((value.days * 86400 + value.seconds) * 1_000_000 + value.microseconds) * 1000
    sign = -1 if total_ns < 0 else 1
    seconds, nanos = divmod(abs(total_ns), 10**9)
    inner = ""
    if seconds:
        inner += f"seconds:{sign * seconds} "
    if nanos:
        inner += f"nanos:{sign * nanos} "
    return inner


def _render(items: Iterable[tuple[str, object]]) -> str:
    out = []
    for name, value in items:
        if isinstance(value, str):
            if value:
                out.append(f"{name}:{_text_string(value)} ")
        elif isinstance(value, timedelta):
            out.append(f"{name}:<{_duration_text(value)}> ")
        elif isinstance(value, RewardWeightRange):
            inner = f'min:"{_dec_raw(value.min)}" max:"{_dec_raw(value.max)}" '
            out.append(f"{name}:<{inner}> ")
        else:
            out.append(f'{name}:"{_dec_raw(value)}" ')
    return "".join(out)


def _check_denom(denom: str) -> None:
    if denom == "":
        raise InvalidArgumentError("Alliance denom must have a value")


def _check_common(
    reward_weight: Optional[Dec],
    take_rate: Optional[Dec],
    reward_change_rate: Optional[Dec],
    reward_change_interval: timedelta,
    weight_range: Optional[RewardWeightRange] = None,
) -> None:
    zero = Dec.zero()
    if reward_weight is None or reward_weight < zero:
        raise InvalidArgumentError("Alliance rewardWeight must be zero or a positive number")

    if weight_range is not None:
        low, high = weight_range.min, weight_range.max
        if low is None or low < zero or high is None or high < zero:
            raise InvalidArgumentError(
                "Alliance rewardWeight min and max must be zero or a positive number"
            )
        if low > high:
            raise InvalidArgumentError(
                "Alliance rewardWeight min must be less or equal to rewardWeight max"
            )
        if reward_weight < low or reward_weight > high:
            raise InvalidArgumentError("Alliance rewardWeight must be bounded in RewardWeightRange")

    if take_rate is None or take_rate.is_negative() or take_rate >= Dec.one():
        raise InvalidArgumentError(
            "Alliance takeRate must be more or equals to 0 but strictly less than 1"
        )

    if reward_change_rate is None or reward_change_rate.is_zero() or reward_change_rate.is_negative():
        raise InvalidArgumentError("Alliance rewardChangeRate must be strictly a positive number")

    if reward_change_interval < timedelta(0):
        raise InvalidArgumentError(
            "Alliance rewardChangeInterval must be strictly a positive number"
        )


@dataclass
class MsgCreateAllianceProposal:
    """Proposal to whitelist a new alliance asset."""

    amino_name: ClassVar[str] = "alliance/MsgCreateAllianceProposal"

    title: str = ""
    description: str = ""
    denom: str = ""
    reward_weight: Optional[Dec] = None
    reward_weight_range: RewardWeightRange = field(default_factory=RewardWeightRange)
    take_rate: Optional[Dec] = None
    reward_change_rate: Optional[Dec] = None
    reward_change_interval: timedelta = timedelta(0)

    def proposal_route(self) -> str:
        return ROUTER_KEY

    def proposal_type(self) -> str:
        return PROPOSAL_TYPE_CREATE_ALLIANCE

    def validate_basic(self) -> None:
        """Raise InvalidArgumentError when the proposal is malformed."""
        _check_denom(self.denom)
        try:
            validate_denom(self.denom)
        except ValueError as exc:
            raise InvalidArgumentError(str(exc)) from exc
        _check_common(
            self.reward_weight,
            self.take_rate,
            self.reward_change_rate,
            self.reward_change_interval,
            self.reward_weight_range,
        )

    def __str__(self) -> str:
        return _render(
            (
                ("title", self.title),
                ("description", self.description),
                ("denom", self.denom),
                ("reward_weight", self.reward_weight),
                ("take_rate", self.take_rate),
                ("reward_change_rate", self.reward_change_rate),
                ("reward_change_interval", self.reward_change_interval),
                ("reward_weight_range", self.reward_weight_range),
            )
        )


@dataclass
class MsgUpdateAllianceProposal:
    """Proposal to change the parameters of an existing alliance asset."""

    amino_name: ClassVar[str] = "alliance/MsgUpdateAllianceProposal"

    title: str = ""
    description: str = ""
    denom: str = ""
    reward_weight: Optional[Dec] = None
    take_rate: Optional[Dec] = None
    reward_change_rate: Optional[Dec] = None
    reward_change_interval: timedelta = timedelta(0)

    def proposal_route(self) -> str:
        return ROUTER_KEY

    def proposal_type(self) -> str:
        return PROPOSAL_TYPE_UPDATE_ALLIANCE

    def validate_basic(self) -> None:
        """Raise InvalidArgumentError when the proposal is malformed."""
        _check_denom(self.denom)
        _check_common(
            self.reward_weight,
            self.take_rate,
            self.reward_change_rate,
            self.reward_change_interval,
        )

    def __str__(self) -> str:
        return _render(
            (
                ("title", self.title),
                ("description", self.description),
                ("denom", self.denom),
                ("reward_weight", self.reward_weight),
                ("take_rate", self.take_rate),
                ("reward_change_rate", self.reward_change_rate),
                ("reward_change_interval", self.reward_change_interval),
            )
        )


@dataclass
class MsgDeleteAllianceProposal:
    """Proposal to remove an alliance asset."""

    amino_name: ClassVar[str] = "alliance/MsgDeleteAllianceProposal"

    title: str = ""
    description: str = ""
    denom: str = ""

    def proposal_route(self) -> str:
        return ROUTER_KEY

    def proposal_type(self) -> str:
        return PROPOSAL_TYPE_DELETE_ALLIANCE

    def validate_basic(self) -> None:
        """Raise InvalidArgumentError when the denom is missing."""
        _check_denom(self.denom)

    def __str__(self) -> str:
        return _render(
            (
                ("title", self.title),
                ("description", self.description),
                ("denom", self.denom),
            )
        )