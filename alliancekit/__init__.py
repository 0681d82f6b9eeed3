"""Alliance staking primitives: decimals, coins, store keys, proposals, messages and rewards."""

__version__ = "0.1.0"

__all__ = [
    "asset",
    "coins",
    "dec",
    "errors",
    "gov",
    "keys",
    "msg",
    "params",
    "rewards",
    "validator",
]