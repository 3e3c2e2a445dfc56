"""
Tests for the amount arithmetic engine (currencies_kernel/domain/amount.py).

Unchecked operators raise on overflow, underflow and division by zero;
checked operators return None. Mixing currencies or safety modes raises.
"""

import copy
import pickle

import pytest

from currencies_kernel import (
    U8,
    U64,
    U128,
    U256,
    Amount,
    Checked,
    CheckedAmount,
    Unchecked,
    UncheckedAmount,
    amount_type,
)
from currencies_kernel.domain.currency import AUD, DOT, ETH, EUR, USD
from currencies_kernel.exceptions import (
    CurrencyMismatchError,
    DivisionByZeroError,
    IntegerOverflowError,
    IntegerUnderflowError,
    InvalidCurrencyError,
    SafetyModeMismatchError,
)


class TestSpecialisation:
    """Amount[currency, safety] produces one cached class per pair."""

    def test_subscript_is_cached(self):
        assert Amount[USD] is Amount[USD]
        assert Amount[USD] is amount_type(USD)
        assert Amount["usd"] is Amount[USD]
        assert Amount[USD, Unchecked] is Amount[USD]

    def test_checked_class_is_distinct(self):
        assert Amount[USD, Checked] is not Amount[USD]
        assert issubclass(Amount[USD, Checked], CheckedAmount)
        assert issubclass(Amount[USD], UncheckedAmount)

    def test_variant_subscripts(self):
        assert UncheckedAmount[USD] is Amount[USD]
        assert CheckedAmount[USD] is Amount[USD, Checked]
        with pytest.raises(TypeError):
            CheckedAmount[USD, Unchecked]

    def test_class_attributes(self):
        cls = Amount[ETH, Checked]
        assert cls.currency is ETH
        assert cls.safety is Checked
        assert cls.backing is U256
        assert cls.__name__ == "Amount[ETH, Checked]"
        assert Amount[USD].__name__ == "Amount[USD]"

    def test_unknown_code(self):
        with pytest.raises(InvalidCurrencyError):
            Amount["NOPE"]

    def test_bad_safety(self):
        with pytest.raises(TypeError):
            amount_type(USD, int)

    def test_cannot_respecialise(self):
        with pytest.raises(TypeError):
            Amount[USD][EUR]

    def test_unspecialised_cannot_build(self):
        with pytest.raises(TypeError):
            Amount.from_raw(1)
        with pytest.raises(TypeError):
            UncheckedAmount.zero()

    def test_direct_construction_rejected(self):
        with pytest.raises(TypeError):
            Amount[USD](100)

    def test_safety_markers_not_instantiable(self):
        with pytest.raises(TypeError):
            Checked()
        with pytest.raises(TypeError):
            Unchecked()


class TestConstruction:
    """from_raw, zero, one and value semantics."""

    def test_from_raw_int(self, usd):
        amount = usd.from_raw(1000_00)
        assert amount.raw == 100000
        assert isinstance(amount.raw, U64)

    def test_from_raw_widens(self, eth):
        amount = eth.from_raw(U64(5))
        assert isinstance(amount.raw, U256)

    def test_from_raw_overflow(self, usd):
        with pytest.raises(IntegerOverflowError):
            usd.from_raw(2**64)

    def test_from_raw_wider_backing_rejected(self, usd):
        with pytest.raises(TypeError):
            usd.from_raw(U256(1))

    def test_zero_and_one(self, usd):
        assert usd.zero().raw == 0
        assert usd.zero().is_zero
        assert usd.one().raw == 1
        assert not usd.one().is_zero

    def test_immutable(self, usd):
        amount = usd.from_raw(5)
        with pytest.raises(AttributeError):
            amount._raw = U64(6)

    def test_equality(self, usd):
        a = usd.from_raw(1000_00)
        b = usd.from_raw(200_00)
        c = usd.from_raw(50)
        assert a != b
        assert a == a
        assert b != c
        assert a == usd.from_raw(1000_00)

    def test_not_equal_to_plain_numbers(self, usd):
        assert usd.from_raw(5) != 5
        assert usd.from_raw(5) != U64(5)

    def test_hash(self, usd):
        assert hash(usd.from_raw(5)) == hash(usd.from_raw(5))
        assert len({usd.from_raw(5), usd.from_raw(5), usd.from_raw(6)}) == 2

    def test_amounts_are_always_truthy(self, usd):
        assert usd.zero()

    def test_pickle(self, eth):
        amount = eth.from_raw(500000000_000000000000000001)
        restored = pickle.loads(pickle.dumps(amount))
        assert restored == amount
        assert type(restored) is eth

    def test_copy_returns_same_value(self, usd):
        amount = usd.from_raw(5)
        assert copy.copy(amount) is amount
        assert copy.deepcopy(amount) is amount

    def test_safety_conversion(self, usd, usd_checked):
        amount = usd.from_raw(42)
        checked = amount.as_checked()
        assert type(checked) is usd_checked
        assert checked.raw == 42
        assert checked.as_unchecked() == amount


class TestUncheckedArithmetic:
    """Operators on UncheckedAmount."""

    def test_basic_ops(self, usd):
        a = usd.from_raw(100_00)
        b = usd.from_raw(50_00)
        assert a + b == usd.from_raw(150_00)
        assert a - b == usd.from_raw(50_00)
        assert a / b == 2
        assert a * b == usd.from_raw(5000_00)

    def test_fixed_point_multiply(self, usd):
        apple = usd.from_raw(3_24)
        orange = usd.from_raw(7_97)
        assert apple * orange == usd.from_raw(25_82)
        assert str(apple * orange) == "$25.82"

    def test_division_returns_backing_ratio(self, usd):
        ratio = usd.from_raw(10000) / usd.from_raw(5000)
        assert ratio == 2
        assert isinstance(ratio, U64)
        assert usd.from_raw(10000) // usd.from_raw(3000) == 3

    def test_remainder_is_amount(self, usd):
        remainder = usd.from_raw(10000) % usd.from_raw(3000)
        assert remainder == usd.from_raw(1000)

    @pytest.mark.parametrize("scalar", [3, U8(3), U64(3), U128(3), U256(3)])
    def test_scalar_multiply_any_width(self, usd, scalar):
        a = usd.from_raw(100_00)
        assert a * scalar == usd.from_raw(300_00)
        assert scalar * a == usd.from_raw(300_00)

    def test_scalar_does_not_fit_backing(self, usd):
        with pytest.raises(IntegerOverflowError):
            usd.from_raw(1) * U256(2**64)

    def test_negative_scalar(self, usd):
        with pytest.raises(IntegerUnderflowError):
            usd.from_raw(1) * -2

    def test_unsupported_operands(self, usd):
        with pytest.raises(TypeError):
            usd.from_raw(1) + 1
        with pytest.raises(TypeError):
            usd.from_raw(1) * 1.5
        with pytest.raises(TypeError):
            usd.from_raw(1) * True

    def test_compound_assignment_rebinds(self, usd):
        a = usd.from_raw(100_00)
        c = a
        c += usd.from_raw(50_00)
        assert c == usd.from_raw(150_00)
        assert a == usd.from_raw(100_00)
        c -= usd.from_raw(25_00)
        assert c == usd.from_raw(125_00)
        c *= usd.from_raw(2_00)
        assert c == usd.from_raw(250_00)

    def test_overflow_raises(self, usd):
        with pytest.raises(IntegerOverflowError):
            usd.from_raw(2**64 - 1) + usd.one()

    def test_underflow_raises(self, usd):
        with pytest.raises(IntegerUnderflowError):
            usd.zero() - usd.one()

    def test_product_overflow_raises(self, usd):
        with pytest.raises(IntegerOverflowError):
            usd.from_raw(2**40) * usd.from_raw(2**40)

    def test_division_by_zero_raises(self, usd):
        with pytest.raises(DivisionByZeroError):
            usd.from_raw(1) / usd.zero()
        with pytest.raises(DivisionByZeroError):
            usd.from_raw(1) % usd.zero()

    def test_ordering_near_max(self, usd):
        a = usd.from_raw(2**64 - 1)
        b = usd.from_raw(50_00)
        assert a - usd.from_raw(1) < a
        assert a - usd.from_raw(1) > b
        assert b <= b
        assert a >= b

    def test_add_then_sub_identity(self, usd):
        a = usd.from_raw(123_45)
        b = usd.from_raw(67_89)
        assert (a + b) - b == a

    def test_sum_with_start(self, usd):
        items = [usd.from_raw(1_00), usd.from_raw(2_50), usd.from_raw(25)]
        assert sum(items, usd.zero()) == usd.from_raw(3_75)

    def test_dot_running_total(self, dot):
        total = dot.from_raw(5762244984_10000000004)
        total -= dot.from_raw(1000_0000000000)
        total *= dot.from_raw(2_0000000000)
        assert str(total) == "115244897682.0000000008 DOT"

    def test_apple_times_three(self, usd):
        assert str(usd.from_raw(3_24) * 3) == "$9.72"


class TestCheckedArithmetic:
    """Operators on CheckedAmount return None instead of raising."""

    def test_basic_ops(self, usd_checked):
        a = usd_checked.from_raw(33_26)
        b = usd_checked.from_raw(245_23)
        assert (a - b) is None
        assert (a + b) == usd_checked.from_raw(278_49)
        assert (a / b) == 0
        assert (b / a) == 7
        assert (a / usd_checked.zero()) is None

    def test_checked_division_by_zero_absent(self, usd_checked):
        assert usd_checked.from_raw(1).checked_div(usd_checked.from_raw(0)) is None
        assert usd_checked.from_raw(1).checked_rem(usd_checked.from_raw(0)) is None
        assert (usd_checked.from_raw(1) % usd_checked.zero()) is None

    def test_wide_overflow(self):
        cls = Amount[ETH, Checked]
        top = cls.from_raw(U256.MAX_VALUE)
        assert (top + cls.from_raw(1)) is None
        assert (top - cls.from_raw(1)) is not None

    def test_fixed_point_multiply(self, usd_checked):
        product = usd_checked.from_raw(3_24) * usd_checked.from_raw(7_97)
        assert product == usd_checked.from_raw(25_82)

    def test_multiply_overflow(self, usd_checked):
        big = usd_checked.from_raw(2**40)
        assert (big * big) is None
        assert big.checked_mul(big) is None

    def test_scale(self, usd_checked):
        a = usd_checked.from_raw(3_24)
        assert a * 3 == usd_checked.from_raw(9_72)
        assert 3 * a == usd_checked.from_raw(9_72)
        assert a.checked_scale(U8(3)) == usd_checked.from_raw(9_72)

    def test_scale_out_of_range(self, usd_checked):
        a = usd_checked.from_raw(2)
        assert a * (2**64) is None
        assert a * -1 is None
        assert a.checked_scale(U256(2**64)) is None
        assert usd_checked.from_raw(2**63) * 2 is None

    def test_named_methods(self, usd_checked):
        a = usd_checked.from_raw(6_29)
        b = usd_checked.from_raw(24_99)
        assert a.checked_add(b) == usd_checked.from_raw(31_28)
        assert a.checked_sub(b) is None
        assert b.checked_sub(a) == usd_checked.from_raw(18_70)
        assert b.checked_rem(a) == usd_checked.from_raw(24_99 % 6_29)

    def test_named_methods_reject_non_amounts(self, usd_checked):
        with pytest.raises(TypeError):
            usd_checked.one().checked_add(1)

    def test_outing_cost(self, usd_checked):
        outing = usd_checked.from_raw(6_29) + usd_checked.from_raw(24_99)
        assert outing is not None
        assert str(outing) == "$31.28"

    @pytest.mark.parametrize("op", ["+=", "-=", "*=", "/=", "//=", "%="])
    def test_no_compound_assignment(self, usd_checked, op):
        namespace = {"a": usd_checked.from_raw(1), "b": usd_checked.from_raw(1)}
        with pytest.raises(TypeError, match="compound assignment"):
            exec(f"a {op} b", namespace)


class TestMismatches:
    """Cross-currency and cross-mode operations raise."""

    @pytest.mark.parametrize(
        "operation",
        [
            lambda a, b: a + b,
            lambda a, b: a - b,
            lambda a, b: a * b,
            lambda a, b: a / b,
            lambda a, b: a % b,
            lambda a, b: a < b,
            lambda a, b: a == b,
        ],
    )
    def test_currency_mismatch(self, operation):
        usd = Amount[USD].from_raw(100)
        eth = Amount[ETH].from_raw(100)
        with pytest.raises(CurrencyMismatchError) as exc_info:
            operation(usd, eth)
        assert exc_info.value.currency1 == "USD"
        assert exc_info.value.currency2 == "ETH"

    def test_same_symbol_different_currency(self):
        with pytest.raises(CurrencyMismatchError):
            Amount[USD].from_raw(1) + Amount[AUD].from_raw(1)

    def test_safety_mismatch(self, usd, usd_checked):
        with pytest.raises(SafetyModeMismatchError) as exc_info:
            usd.from_raw(1) + usd_checked.from_raw(1)
        assert exc_info.value.safety1 == "Unchecked"
        assert exc_info.value.safety2 == "Checked"

    def test_checked_mismatch(self, usd_checked):
        with pytest.raises(CurrencyMismatchError):
            usd_checked.from_raw(1) + Amount[EUR, Checked].from_raw(1)
        with pytest.raises(CurrencyMismatchError):
            usd_checked.from_raw(1).checked_div(Amount[EUR, Checked].from_raw(1))


class TestText:
    """__str__, __repr__, __format__ and parse."""

    def test_str(self, usd):
        assert str(usd.from_raw(124_27)) == "$124.27"

    def test_repr(self, usd, usd_checked):
        assert repr(usd.from_raw(100)) == "Amount[USD]('$1.00')"
        assert repr(usd_checked.from_raw(100)) == "Amount[USD, Checked]('$1.00')"

    def test_format_spec(self, usd):
        assert f"{usd.from_raw(100):>8}" == "   $1.00"
        assert f"{usd.from_raw(100)}" == "$1.00"

    def test_parse_classmethod(self, usd):
        assert usd.parse("$1,000.00") == usd.from_raw(1_000_00)
