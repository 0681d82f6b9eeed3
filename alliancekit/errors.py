"""Errors raised by the alliance module."""

from __future__ import annotations

from typing import Optional


class AllianceError(Exception):
    """Base class for alliance errors; carries a codespace and code."""

    codespace: str = "alliance"
    code: Optional[int] = None
    description: str = "alliance error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = self.description if message is None else message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class InvalidArgumentError(AllianceError, ValueError):
    """A request argument failed validation."""

    description = "invalid argument"


class InvalidGenesisStateError(AllianceError, ValueError):
    code = 0
    description = "invalid genesis state"


class EmptyValidatorAddrError(AllianceError, ValueError):
    code = 10
    description = "empty validator address"


class ValidatorNotFoundError(AllianceError, LookupError):
    code = 11
    description = "validator not found"


class ZeroDelegationsError(AllianceError):
    code = 20
    description = "there are no delegations yet"


class InsufficientTokensError(AllianceError):
    code = 21
    description = "insufficient tokens"


class UnknownAssetError(AllianceError, LookupError):
    code = 30
    description = "alliance asset is not whitelisted"


class RewardWeightOutOfBoundError(AllianceError, ValueError):
    code = 40
    description = "alliance asset must be between reward_weight_range"