"""Integer and decimal coins and sorted coin collections."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any, ClassVar

from alliancekit.dec import Dec

_DENOM_RE = re.compile(r"[a-zA-Z][a-zA-Z0-9/:._-]{2,127}")


def validate_denom(denom: str) -> None:
    """Raise ValueError unless ``denom`` is a valid coin denomination."""
    if not isinstance(denom, str) or _DENOM_RE.fullmatch(denom) is None:
        raise ValueError(f"invalid denom: {denom!r}")


@dataclass(frozen=True)
class Coin:
    """A non-negative integer amount of one denomination."""

    denom: str
    amount: int

    def __post_init__(self) -> None:
        validate_denom(self.denom)
        if not isinstance(self.amount, int) or isinstance(self.amount, bool):
            raise TypeError("coin amount must be an int")
        if self.amount < 0:
            raise ValueError(f"negative coin amount: {self.amount}")

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"


@dataclass(frozen=True)
class DecCoin:
    """A non-negative decimal amount of one denomination."""

    denom: str
    amount: Dec

    def __post_init__(self) -> None:
        validate_denom(self.denom)
        if isinstance(self.amount, int) and not isinstance(self.amount, bool):
            object.__setattr__(self, "amount", Dec.from_int(self.amount))
        if not isinstance(self.amount, Dec):
            raise TypeError("coin amount must be a Dec")
        if self.amount.is_negative():
            raise ValueError(f"negative coin amount: {self.amount}")

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"


class _CoinSet(Sequence):
    """Coins sorted by denomination, with zero amounts removed."""

    _coin_type: ClassVar[type]
    _zero: ClassVar[Any]

    __slots__ = ("_items",)

    def __init__(self, coins: Iterable = ()) -> None:
        by_denom: dict[str, Any] = {}
        for coin in coins:
            if not isinstance(coin, self._coin_type):
                raise TypeError(f"expected {self._coin_type.__name__}, got {coin!r}")
            if coin.denom in by_denom:
                raise ValueError(f"duplicate denomination {coin.denom}")
            by_denom[coin.denom] = coin
        self._items = tuple(
            sorted(
                (coin for coin in by_denom.values() if coin.amount != self._zero),
                key=lambda coin: coin.denom,
            )
        )

    def _totals(self) -> dict[str, Any]:
        return {coin.denom: coin.amount for coin in self._items}

    @classmethod
    def _from_totals(cls, totals: dict[str, Any]):
        return cls(cls._coin_type(denom, amount) for denom, amount in totals.items())

    def _merged(self, coins: Iterable) -> dict[str, Any]:
        totals = self._totals()
        for coin in coins:
            if not isinstance(coin, self._coin_type):
                raise TypeError(f"expected {self._coin_type.__name__}, got {coin!r}")
            totals[coin.denom] = totals.get(coin.denom, self._zero) + coin.amount
        return totals

    def __getitem__(self, index):
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._items))

    def __str__(self) -> str:
        return ",".join(str(coin) for coin in self._items)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._items)!r})"


class Coins(_CoinSet):
    """A sorted set of integer coins."""

    _coin_type = Coin
    _zero = 0
    __slots__ = ()

    def add(self, *args: Coin) -> Coins:
        """Return the sum of these coins and ``args``."""
        return self._from_totals(self._merged(args))

    def is_zero(self) -> bool:
        """True when there are no coins or every amount is zero."""
        return all(coin.amount == 0 for coin in self)


class DecCoins(_CoinSet):
    """A sorted set of decimal coins."""

    _coin_type = DecCoin
    _zero = Dec.zero()
    __slots__ = ()

    def add(self, *args: DecCoin) -> DecCoins:
        """Return the sum of these coins and ``args``."""
        return self._from_totals(self._merged(args))

    def sub(self, other: Iterable[DecCoin]) -> DecCoins:
        """Return these coins minus ``other``; raise if any amount goes negative."""
        totals = self._totals()
        for coin in other:
            totals[coin.denom] = totals.get(coin.denom, self._zero) - coin.amount
        if any(amount.is_negative() for amount in totals.values()):
            raise ValueError("negative coin amount")
        return self._from_totals(totals)

    def amount_of(self, denom: str) -> Dec:
        """Return the amount held of ``denom``, or zero."""
        validate_denom(denom)
        for coin in self:
            if coin.denom == denom:
                return coin.amount
        return Dec.zero()