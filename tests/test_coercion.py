from decimal import Decimal, ROUND_CEILING, ROUND_FLOOR

import pytest

from coercion import DataIntegrityError, ExactDecimal, from_storage, to_storage


@pytest.mark.parametrize("value, scale, expected", [
    (199999.99, 2, "199999.99"),
    (125.5, 2, "125.50"),
    (40.123456, 8, "40.12345600"),
    (-8.987654, 8, "-8.98765400"),
    (0.1, 2, "0.10"),
    (150000, 2, "150000.00"),
    ("80.5", 2, "80.50"),
    (Decimal("1.005"), 2, "1.01"),
])
def test_to_storage_exact_text(value, scale, expected):
    assert to_storage(value, scale) == expected


def test_to_storage_rounds_half_up():
    assert to_storage(2.345, 2) == "2.35"
    assert to_storage(-2.345, 2) == "-2.35"


def test_to_storage_rounding_mode():
    assert to_storage(100.001, 2, rounding=ROUND_CEILING) == "100.01"
    assert to_storage(100.009, 2, rounding=ROUND_FLOOR) == "100.00"
    assert to_storage(100.00, 2, rounding=ROUND_CEILING) == "100.00"


def test_to_storage_rejects_values_too_large_for_column():
    assert to_storage(9999999999.99, 2, precision=12) == "9999999999.99"
    with pytest.raises(ValueError):
        to_storage(10000000000, 2, precision=12)


@pytest.mark.parametrize("value", [float("nan"), float("inf"), "abc", "NaN"])
def test_to_storage_rejects_non_numbers(value):
    with pytest.raises(ValueError):
        to_storage(value, 2)


@pytest.mark.parametrize("raw, expected", [
    ("199999.99", 199999.99),
    ("40.12345600", 40.123456),
    (Decimal("-8.98765400"), -8.987654),
    (125.5, 125.5),
    (" 80.50 ", 80.5),
])
def test_from_storage_parses_numbers(raw, expected):
    result = from_storage(raw)
    assert result == expected
    assert isinstance(result, float)


def test_from_storage_passes_none_through():
    assert from_storage(None) is None


@pytest.mark.parametrize("raw", ["", "12,50", "not-a-price", "Infinity"])
def test_from_storage_malformed_value_is_integrity_error(raw):
    with pytest.raises(DataIntegrityError):
        from_storage(raw)


def test_exact_decimal_type_binds_quantized_decimal():
    column_type = ExactDecimal(12, 2)

    assert column_type.process_bind_param(199999.994, None) == Decimal("199999.99")
    assert column_type.process_bind_param(None, None) is None
    assert column_type.process_result_value(Decimal("150000.00"), None) == 150000.0


def test_exact_decimal_type_enforces_precision():
    with pytest.raises(ValueError):
        ExactDecimal(8, 2).process_bind_param(1000000, None)
