"""Module parameters and per-denomination reward histories."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from alliancekit.dec import Dec
from alliancekit.errors import InvalidArgumentError

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

DEFAULT_REWARD_DELAY_TIME = timedelta(days=7)
DEFAULT_TAKE_RATE_CLAIM_INTERVAL = timedelta(minutes=5)


def validate_positive_duration(value: Any) -> None:
    """Raise unless ``value`` is a duration that is not negative."""
    if not isinstance(value, timedelta):
        raise TypeError(f"invalid parameter type: {type(value).__name__}")
    if value < timedelta(0):
        raise InvalidArgumentError(f"duration must be positive: {value}")


def validate_time(value: Any) -> None:
    """Raise unless ``value`` is a point in time."""
    if not isinstance(value, datetime):
        raise TypeError(f"invalid parameter type: {type(value).__name__}")


@dataclass
class Params:
    """Parameters of the alliance module."""

    reward_delay_time: timedelta = DEFAULT_REWARD_DELAY_TIME
    take_rate_claim_interval: timedelta = DEFAULT_TAKE_RATE_CLAIM_INTERVAL
    last_take_rate_claim_time: datetime = ZERO_TIME

    def validate(self) -> None:
        """Check every parameter, raising on the first invalid one."""
        validate_positive_duration(self.reward_delay_time)
        validate_positive_duration(self.take_rate_claim_interval)
        validate_time(self.last_take_rate_claim_time)


def default_params() -> Params:
    """Return the default parameter set."""
    return Params()


@dataclass
class RewardHistory:
    """Accumulated reward index for one reward denomination."""

    denom: str
    index: Dec = field(default_factory=Dec.zero)


class RewardHistories(list):
    """A list of reward histories, at most one per denomination."""

    def get_index_by_denom(self, denom: str) -> Optional[RewardHistory]:
        """Return the history held for ``denom`` (the stored object), or None."""
        return next((history for history in self if history.denom == denom), None)