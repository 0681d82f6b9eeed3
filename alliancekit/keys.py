"""Store key layout for the alliance module: builders and parsers."""

from __future__ import annotations

import re
from datetime import datetime, timezone

MODULE_NAME = "alliance"
REWARDS_POOL_NAME = "alliance_rewards"
STORE_KEY = MODULE_NAME
QUERIER_ROUTE = MODULE_NAME
ROUTER_KEY = MODULE_NAME
MEM_STORE_KEY = "mem_signletimemodule"

MODULE_ACC_KEY = b"\x01"

ASSET_KEY = b"\x11"
VALIDATOR_INFO_KEY = b"\x12"
ASSET_REBALANCE_QUEUE_KEY = b"\x13"
REWARD_WEIGHT_CHANGE_SNAPSHOT_KEY = b"\x14"
REWARD_WEIGHT_DECAY_QUEUE_KEY = b"\x15"

DELEGATION_KEY = b"\x21"
REDELEGATION_KEY = b"\x22"
REDELEGATION_QUEUE_KEY = b"\x23"
UNDELEGATION_QUEUE_KEY = b"\x24"

REDELEGATION_BY_VALIDATOR_INDEX_KEY = b"\x31"
UNDELEGATION_BY_VALIDATOR_INDEX_KEY = b"\x32"

MAX_ADDR_LEN = 255

_TIME_RE = re.compile(rb"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})\.(\d{9})")
_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def format_time_bytes(moment: datetime) -> bytes:
    """Encode a time as sortable UTC bytes with nanosecond digits."""
    t = _as_utc(moment)
    text = (
        f"{t.year:04d}-{t.month:02d}-{t.day:02d}T"
        f"{t.hour:02d}:{t.minute:02d}:{t.second:02d}.{t.microsecond * 1000:09d}"
    )
    return text.encode("ascii")


def parse_time_bytes(data: bytes) -> datetime:
    """Decode bytes written by :func:`format_time_bytes`; raise ValueError if malformed."""
    match = _TIME_RE.fullmatch(bytes(data))
    if match is None:
        raise ValueError(f"invalid time bytes: {bytes(data)!r}")
    year, month, day, hour, minute, second, nanos = (int(group) for group in match.groups())
    return datetime(
        year, month, day, hour, minute, second, nanos // 1000, tzinfo=timezone.utc
    )


def must_length_prefix(data: bytes) -> bytes:
    """Prefix ``data`` with its one-byte length; empty input stays empty."""
    data = bytes(data)
    if not data:
        return b""
    if len(data) > MAX_ADDR_LEN:
        raise ValueError(f"address length should be max {MAX_ADDR_LEN} bytes, got {len(data)}")
    return bytes([len(data)]) + data


def create_denom_address_prefix(denom: str) -> bytes:
    """Return the denom bytes followed by a null terminator."""
    return denom.encode("utf-8") + b"\x00"


def _uint64_to_big_endian(value: int) -> bytes:
    if not 0 <= value < 2**64:
        raise ValueError(f"height out of uint64 range: {value}")
    return value.to_bytes(8, "big")


def _big_endian_to_uint64(data: bytes) -> int:
    if not data:
        return 0
    if len(data) < 8:
        raise ValueError("not enough bytes for a uint64")
    return int.from_bytes(data[:8], "big")


class _KeyReader:
    """Walks a store key, reading length-prefixed segments."""

    def __init__(self, key: bytes, prefix: bytes) -> None:
        self._key = bytes(key)
        self._offset = len(prefix)

    def take(self, length: int) -> bytes:
        end = self._offset + length
        if end > len(self._key):
            raise ValueError("key is too short")
        segment = self._key[self._offset:end]
        self._offset = end
        return segment

    def prefixed(self) -> bytes:
        length = self.take(1)[0]
        return self.take(length)

    def rest(self) -> bytes:
        return self._key[self._offset:]


def get_asset_key(denom: str) -> bytes:
    return ASSET_KEY + must_length_prefix(denom.encode("utf-8"))


def get_delegation_key(del_addr: bytes, val_addr: bytes, denom: str) -> bytes:
    """Key of a delegation: delegator|validator|denom."""
    return get_delegations_key_for_all_denoms(del_addr, val_addr) + must_length_prefix(
        create_denom_address_prefix(denom)
    )


def get_delegations_key_for_all_denoms(del_addr: bytes, val_addr: bytes) -> bytes:
    return get_delegations_key(del_addr) + must_length_prefix(val_addr)


def get_delegations_key(del_addr: bytes) -> bytes:
    return DELEGATION_KEY + must_length_prefix(del_addr)


def get_redelegations_key_by_delegator(del_addr: bytes) -> bytes:
    return REDELEGATION_KEY + must_length_prefix(del_addr)


def get_redelegations_key_by_delegator_and_denom(del_addr: bytes, denom: str) -> bytes:
    return get_redelegations_key_by_delegator(del_addr) + must_length_prefix(
        create_denom_address_prefix(denom)
    )


def get_redelegations_key(del_addr: bytes, denom: str, dst_val_addr: bytes) -> bytes:
    return get_redelegations_key_by_delegator_and_denom(del_addr, denom) + must_length_prefix(
        dst_val_addr
    )


def get_redelegation_key(
    del_addr: bytes, denom: str, dst_val_addr: bytes, completion: datetime
) -> bytes:
    return get_redelegations_key(del_addr, denom, dst_val_addr) + format_time_bytes(completion)


def get_redelegation_queue_key(completion: datetime) -> bytes:
    return REDELEGATION_QUEUE_KEY + format_time_bytes(completion)


def get_redelegation_index_key(
    src_val: bytes,
    completion: datetime,
    denom: str,
    dst_val: bytes,
    del_addr: bytes,
) -> bytes:
    return b"".join(
        (
            get_redelegations_index_ordered_by_validator_key(src_val),
            must_length_prefix(format_time_bytes(completion)),
            must_length_prefix(create_denom_address_prefix(denom)),
            must_length_prefix(dst_val),
            must_length_prefix(del_addr),
        )
    )


def get_redelegations_index_ordered_by_validator_key(src_val: bytes) -> bytes:
    return REDELEGATION_BY_VALIDATOR_INDEX_KEY + must_length_prefix(src_val)


def parse_redelegation_index_for_redelegation_key(key: bytes) -> tuple[bytes, datetime]:
    """Turn a redelegation index key into the redelegation key and its completion time."""
    reader = _KeyReader(key, REDELEGATION_BY_VALIDATOR_INDEX_KEY)
    reader.prefixed()
    time_bytes = reader.prefixed()
    denom_bytes = reader.prefixed()
    dst_val_bytes = reader.prefixed()
    del_addr_bytes = reader.prefixed()
    new_key = b"".join(
        (
            REDELEGATION_KEY,
            must_length_prefix(del_addr_bytes),
            must_length_prefix(denom_bytes),
            must_length_prefix(dst_val_bytes),
            time_bytes,
        )
    )
    return new_key, parse_time_bytes(time_bytes)


def get_unbonding_index_key(
    val_addr: bytes, completion: datetime, denom: str, del_addr: bytes
) -> bytes:
    return b"".join(
        (
            get_undelegations_index_ordered_by_validator_key(val_addr),
            must_length_prefix(format_time_bytes(completion)),
            must_length_prefix(create_denom_address_prefix(denom)),
            must_length_prefix(del_addr),
        )
    )


def get_undelegations_index_ordered_by_validator_key(val_addr: bytes) -> bytes:
    return UNDELEGATION_BY_VALIDATOR_INDEX_KEY + must_length_prefix(val_addr)


def parse_unbonding_index_key_to_undelegation_key(key: bytes) -> tuple[bytes, datetime]:
    """Turn an unbonding index key into the undelegation queue key and its completion time."""
    reader = _KeyReader(key, UNDELEGATION_BY_VALIDATOR_INDEX_KEY)
    reader.prefixed()
    time_bytes = reader.prefixed()
    reader.prefixed()
    del_addr_bytes = reader.prefixed()
    new_key = (
        UNDELEGATION_QUEUE_KEY
        + must_length_prefix(time_bytes)
        + must_length_prefix(del_addr_bytes)
    )
    return new_key, parse_time_bytes(time_bytes)


def parse_redelegation_queue_key(key: bytes) -> datetime:
    return parse_time_bytes(bytes(key)[len(REDELEGATION_QUEUE_KEY):])


def parse_redelegation_key_for_completion_time(key: bytes) -> datetime:
    """Read the completion time of a key delegator|denom|destination|timestamp."""
    reader = _KeyReader(key, REDELEGATION_KEY)
    for _ in range(3):
        reader.prefixed()
    return parse_time_bytes(reader.rest())


def parse_undelegation_queue_key_for_completion_time(key: bytes) -> datetime:
    reader = _KeyReader(key, UNDELEGATION_QUEUE_KEY)
    return parse_time_bytes(reader.prefixed())


def get_undelegation_queue_key_by_time(completion: datetime) -> bytes:
    return UNDELEGATION_QUEUE_KEY + must_length_prefix(format_time_bytes(completion))


def get_undelegation_queue_key(completion: datetime, del_addr: bytes) -> bytes:
    return get_undelegation_queue_key_by_time(completion) + must_length_prefix(del_addr)


def get_alliance_validator_info_key(val_addr: bytes) -> bytes:
    return VALIDATOR_INFO_KEY + must_length_prefix(val_addr)


def parse_alliance_validator_key(key: bytes) -> bytes:
    return bytes(key)[2:]


def get_reward_weight_change_snapshot_key(denom: str, val_addr: bytes, height: int) -> bytes:
    return b"".join(
        (
            REWARD_WEIGHT_CHANGE_SNAPSHOT_KEY,
            must_length_prefix(create_denom_address_prefix(denom)),
            must_length_prefix(val_addr),
            _uint64_to_big_endian(height),
        )
    )


def parse_reward_weight_change_snapshot_key(key: bytes) -> tuple[str, bytes, int]:
    """Return the denom, validator address and height held in a snapshot key."""
    reader = _KeyReader(key, REWARD_WEIGHT_CHANGE_SNAPSHOT_KEY)
    denom = reader.prefixed()[:-1].decode("utf-8")
    val_addr = reader.prefixed()
    height = _big_endian_to_uint64(reader.rest())
    return denom, val_addr, height


def get_reward_weight_decay_queue_by_timestamp_key(trigger_time: datetime) -> bytes:
    return REWARD_WEIGHT_DECAY_QUEUE_KEY + must_length_prefix(format_time_bytes(trigger_time))


def get_reward_weight_decay_queue_key(trigger_time: datetime, denom: str) -> bytes:
    return get_reward_weight_decay_queue_by_timestamp_key(trigger_time) + must_length_prefix(
        create_denom_address_prefix(denom)
    )


def parse_reward_weight_decay_queue_key_for_denom(key: bytes) -> tuple[datetime, str]:
    """Return the trigger time and denom; an unreadable time gives the zero time."""
    reader = _KeyReader(key, REWARD_WEIGHT_DECAY_QUEUE_KEY)
    try:
        trigger_time = parse_time_bytes(reader.prefixed())
    except ValueError:
        trigger_time = _ZERO_TIME
    denom = reader.prefixed()[:-1].decode("utf-8")
    return trigger_time, denom