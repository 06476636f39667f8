import math
import pytest
from decimal import Decimal

from indieevent.errors import InvalidRequest
from indieevent.payments.fees import (
    FeeSplit,
    HOST_REVENUE_RATE,
    PLATFORM_FEE_RATE,
    compute_split,
    to_minor_units,
)


def test_rates_are_complementary():
    assert PLATFORM_FEE_RATE + HOST_REVENUE_RATE == Decimal("1")


def test_split_ten_dollars():
    assert compute_split(10.00) == FeeSplit(platform_fee=0.70, host_revenue=9.30)


def test_split_one_cent():
    split = compute_split(0.01)
    assert split.platform_fee == 0.00
    assert split.host_revenue == 0.01


def test_split_zero_price():
    assert compute_split(0) == FeeSplit(0.0, 0.0)


def test_split_rounds_half_up():
    # 0.5 * 0.07 = 0.035 -> 0.04 ; 0.5 * 0.93 = 0.465 -> 0.47
    assert compute_split(0.5) == FeeSplit(0.04, 0.47)


@pytest.mark.parametrize("price", [0, 0.01, 0.5, 1, 9.99, 10, 25, 33.33, 49.95, 1234.56])
def test_split_sum_within_one_cent(price):
    split = compute_split(price)
    assert abs((split.platform_fee + split.host_revenue) - price) <= 0.01 + 1e-9


@pytest.mark.parametrize("price", [-1, -0.01, math.nan, math.inf, "25", None, True, [25]])
def test_split_rejects_invalid_price(price):
    with pytest.raises(InvalidRequest) as exc:
        compute_split(price)
    assert exc.value.message == "Invalid price"
    assert exc.value.status_code == 400


def test_to_minor_units():
    assert to_minor_units(25) == 2500
    assert to_minor_units(12.5) == 1250
    assert to_minor_units(7.3) == 730
    # 1.005 en float vaut 1.00499999...; la conversion passe par la valeur décimale
    assert to_minor_units(1.005) == 101


@pytest.mark.parametrize("price", [10**400, 1_000_000, 999999.999])
def test_split_rejects_prices_beyond_provider_cap(price):
    with pytest.raises(InvalidRequest) as exc:
        compute_split(price)
    assert exc.value.message == "Invalid price"


def test_max_price_is_accepted():
    assert to_minor_units(999999.99) == 99999999
