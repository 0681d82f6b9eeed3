# alliancekit

Building blocks for alliance staking. Assets earn staking rewards in
proportion to their weight, validators and delegators hold shares of those
assets, and those shares earn rewards. The package uses only the standard
library.

## Modules

- `alliancekit.dec`: `Dec` is a signed fixed-point decimal with 18 fractional
  digits.
  - Build one with `Dec.from_int`, `Dec.from_str`, `Dec.with_prec`,
    `Dec.zero` and `Dec.one`.
  - `mul` and `quo` (also `*` and `/`) round their result half to even.
  - `mul_int` is exact. `truncate_int` rounds toward zero.
  - `+`, `-` and comparisons are supported.
- `alliancekit.coins`: `Coin` and `DecCoin` hold a non-negative amount of one
  denomination. `Coins` and `DecCoins` are sorted collections that drop zero
  amounts.
  - `Coins` has `add` and `is_zero`.
  - `DecCoins` has `add`, `sub` and `amount_of`. `sub` raises `ValueError` if
    any amount would go negative.
  - `validate_denom` raises `ValueError` for a malformed denomination.
- `alliancekit.errors`: the exception hierarchy, with `AllianceError` as its
  base class.
  - `InvalidArgumentError`
  - `InvalidGenesisStateError`
  - `EmptyValidatorAddrError`
  - `ValidatorNotFoundError`
  - `ZeroDelegationsError`
  - `InsufficientTokensError`
  - `UnknownAssetError`
  - `RewardWeightOutOfBoundError`
- `alliancekit.keys`: store key prefixes, plus functions that build and parse
  keys for these records:
  - assets
  - delegations
  - redelegations and their index
  - undelegation queues and the unbonding index
  - validator info
  - reward weight change snapshots
  - reward weight decay queues

  Times are encoded by `format_time_bytes` and decoded by `parse_time_bytes`.
- `alliancekit.params`: `Params`, `default_params`, `validate_positive_duration`,
  `validate_time`, `RewardHistory` and `RewardHistories`. The defaults are a
  reward delay of 7 days and a take-rate claim interval of 5 minutes.
- `alliancekit.asset`: `AllianceAsset` with `has_positive_decay` and
  `rewards_started`.
  - `RewardWeightRange` and `RewardWeightChangeSnapshot`.
  - `new_alliance_asset` and `new_reward_weight_change_snapshot`.
  - `convert_new_token_to_shares` and `convert_new_share_to_dec_token`.
- `alliancekit.validator`: `AllianceValidatorInfo`, `AllianceValidator` and
  `Delegation`.
  - `AllianceValidator` has `add_shares`, `reduce_shares`,
    `validator_shares_with_denom`, `total_delegation_shares_with_denom` and
    `total_tokens_with_asset`.
  - `subtract_dec_coins_with_rounding` treats an overshoot of less than one as
    taking the amount to zero.
  - The helpers `new_delegation`, `get_validator_shares`,
    `get_delegation_tokens`, `get_delegation_tokens_with_shares` and
    `get_delegation_shares_from_tokens` convert between shares and tokens.
- `alliancekit.gov`: `MsgCreateAllianceProposal`, `MsgUpdateAllianceProposal`
  and `MsgDeleteAllianceProposal`.
  - Each has `proposal_route`, `proposal_type` and `validate_basic`.
  - `validate_basic` raises `InvalidArgumentError`.
  - `str()` gives a compact text rendering of the proposal.
- `alliancekit.msg`: `MsgDelegate`, `MsgRedelegate`, `MsgUndelegate` and
  `MsgClaimDelegationRewards`.
  - Each has `validate_basic`, `to_json`, `from_json`, `amino_json` and
    `sign_bytes`.
  - `sign_bytes` is the amino JSON with its keys sorted.
- `alliancekit.rewards`: reward accounting.
  - `accumulate_rewards` and `calculate_delegation_rewards` work out what a
    delegation can claim. The caller passes in the reward weight change
    snapshots that apply.
  - `total_asset_weight` sums reward weight times tokens for a validator's
    started assets.
  - `add_rewards_to_history` raises a validator's reward indices.

## Example

```python
from datetime import datetime, timezone

from alliancekit.asset import new_alliance_asset
from alliancekit.dec import Dec

asset = new_alliance_asset(
    "ibc/denom1",
    Dec.from_int(1),
    Dec.zero(),
    Dec.from_int(5),
    Dec.zero(),
    datetime(2023, 1, 1, tzinfo=timezone.utc),
)
print(asset.rewards_started(datetime(2023, 6, 1, tzinfo=timezone.utc)))  # True
```

Invalid messages and proposals raise exceptions from `alliancekit.errors`.

## What it does not do

This is a library of data types and calculations. It does not provide:

- a key-value store that keeps assets, delegations or snapshots;
- account balances or transfers of coins between accounts and pools;
- validator management or slashing;
- query or transaction services;
- a command-line tool.

The store keys in `alliancekit.keys` describe a layout, but nothing here reads
or writes a store. The reward functions work on the objects you pass in and
return new values.

## Tests

```
pip install -e ".[test]"
pytest
```