import pytest

from alliancekit.dec import Dec


def test_from_str_equals_from_int():
    assert Dec.from_str("1000.00") == Dec.from_int(1000)


def test_subtraction_with_source_values():
    result = Dec.from_str("1000.00") - Dec.from_str("400.00")
    assert result == Dec.from_str("600.00")


def test_add_then_sub_is_identity():
    a = Dec.from_str("0.14159265359")
    b = Dec.from_str("1000.90")
    assert a + b - b == a


@pytest.mark.parametrize(
    "text", ["0.14159265359", "0.00005", "0.5", "-1000.90", "1000000000000000000"]
)
def test_string_round_trip(text):
    value = Dec.from_str(text)
    assert Dec.from_str(str(value)) == value


def test_str_of_one_has_full_precision():
    assert str(Dec.one()) == "1.000000000000000000"


def test_with_prec_scales_to_one():
    assert Dec.with_prec(1, 6).mul_int(10**6) == Dec.one()


def test_epsilon_rounds_up_to_whole_number():
    value = Dec.from_str("9.999999") + Dec.with_prec(1, 6)
    assert value.truncate_int() == 10


def test_truncate_rounds_toward_zero():
    assert Dec.from_str("-1.5").truncate_int() == -1


def test_truncate_int_round_trip():
    assert Dec.from_int(1000_000).truncate_int() == 1000_000


def test_mul_is_commutative():
    a = Dec.from_str("0.14159265359")
    b = Dec.from_str("1000.90")
    assert a.mul(b) == b.mul(a)
    assert a * b == a.mul(b)


def test_mul_by_one_is_identity():
    a = Dec.from_str("0.00005")
    assert a.mul(Dec.one()) == a


def test_mul_rounds_half_to_even():
    half = Dec.from_str("0.5")
    assert Dec.with_prec(5, 18).mul(half) == Dec.with_prec(3, 18).mul(half)


def test_mul_int_matches_mul():
    a = Dec.from_str("0.14159265359")
    assert a.mul_int(7) == a.mul(Dec.from_int(7))


def test_quo_then_mul_int_restores_value():
    value = Dec.from_int(1000_000)
    assert value.quo(Dec.from_int(4)).mul_int(4) == value
    assert value / Dec.from_int(4) == value.quo(Dec.from_int(4))


def test_quo_of_third_is_close_to_one():
    third = Dec.one().quo(Dec.from_int(3))
    gap = Dec.one() - third.mul_int(3)
    assert gap.is_positive()
    assert gap < Dec.with_prec(1, 17)


def test_quo_by_zero_raises():
    with pytest.raises(ZeroDivisionError):
        Dec.one().quo(Dec.zero())


@pytest.mark.parametrize(
    "value, zero, positive, negative",
    [
        (Dec.zero(), True, False, False),
        (Dec.one(), False, True, False),
        (-Dec.one(), False, False, True),
    ],
)
def test_predicates(value, zero, positive, negative):
    assert value.is_zero() is zero
    assert value.is_positive() is positive
    assert value.is_negative() is negative


@pytest.mark.parametrize(
    "text", ["", "-", "1.", ".5", "1.2.3", "abc", "1.0000000000000000001", "--1"]
)
def test_invalid_strings_raise(text):
    with pytest.raises(ValueError):
        Dec.from_str(text)


def test_with_prec_too_large_raises():
    with pytest.raises(ValueError):
        Dec.with_prec(1, 19)


def test_ordering():
    values = [Dec.from_str("1000.90"), Dec.from_str("-0.5"), Dec.zero()]
    assert sorted(values) == [Dec.from_str("-0.5"), Dec.zero(), Dec.from_str("1000.90")]
    assert Dec.one() >= Dec.one()


def test_hash_consistent_with_equality():
    assert hash(Dec.from_str("1000.00")) == hash(Dec.from_int(1000))