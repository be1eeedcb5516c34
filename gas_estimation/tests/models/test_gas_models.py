import math

import pytest
from pydantic import ValidationError

from gas_estimation.models.gas_models import (
    EstimatedGasPrice,
    GasPrice1559,
    GasPriceKind,
    GasPriceResponse,
)


def eip1559(base: float, max_fee: float, priority: float, legacy: float = 0) -> EstimatedGasPrice:
    return EstimatedGasPrice(
        legacy=legacy,
        eip1559=GasPrice1559(
            base_fee_per_gas=base,
            max_fee_per_gas=max_fee,
            max_priority_fee_per_gas=priority,
        ),
    )


def test_kind(legacy_price, eip1559_price):
    assert legacy_price.kind is GasPriceKind.LEGACY
    assert eip1559_price.kind is GasPriceKind.EIP1559


def test_effective_price_legacy(legacy_price):
    assert legacy_price.effective_price() == 10


def test_effective_price_eip1559():
    assert eip1559(base=20, max_fee=100, priority=2).effective_price() == 22
    assert eip1559(base=20, max_fee=21, priority=2).effective_price() == 21


def test_effective_price_ignores_legacy_for_eip1559():
    assert eip1559(base=20, max_fee=100, priority=2, legacy=500).effective_price() == 22


def test_effective_price_unordered_comparison_keeps_max_fee():
    price = eip1559(base=math.nan, max_fee=50, priority=2)
    assert price.effective_price() == 50


def test_cap(legacy_price, eip1559_price):
    assert legacy_price.cap() == 10
    assert eip1559_price.cap() == 100


def test_scale_up_identity(legacy_price, eip1559_price):
    assert legacy_price.scale_up(1.0) == legacy_price
    assert eip1559_price.scale_up(1.0) == eip1559_price


def test_scale_up():
    assert EstimatedGasPrice(legacy=10).scale_up(2.0).legacy == 20
    scaled = eip1559(base=5, max_fee=50, priority=2, legacy=30).scale_up(2.0)
    assert scaled.legacy == 60
    assert scaled.eip1559 == GasPrice1559(
        base_fee_per_gas=5, max_fee_per_gas=100, max_priority_fee_per_gas=4
    )


@pytest.mark.parametrize('factor', [0, -1.5, math.nan])
def test_scale_up_rejects_non_positive_factor(legacy_price, factor):
    with pytest.raises(ValueError, match='Scale factor must be positive'):
        legacy_price.scale_up(factor)


def test_round_up():
    price = eip1559(base=10.2, max_fee=20.1, priority=1.5, legacy=9.01).round_up()
    assert price.legacy == 10
    assert price.eip1559.max_fee_per_gas == 21
    # base fee and priority fee are left as is
    assert price.eip1559.base_fee_per_gas == 10.2
    assert price.eip1559.max_priority_fee_per_gas == 1.5


def test_round_up_idempotent():
    price = eip1559(base=10.2, max_fee=20.1, priority=1.5, legacy=9.01)
    assert price.round_up().round_up() == price.round_up()
    assert EstimatedGasPrice(legacy=7).round_up() == EstimatedGasPrice(legacy=7)


def test_round_up_keeps_infinity():
    assert EstimatedGasPrice(legacy=math.inf).round_up().legacy == math.inf


def test_limit_cap_legacy():
    assert EstimatedGasPrice(legacy=10).limit_cap(5).legacy == 5
    assert EstimatedGasPrice(legacy=10).limit_cap(50).legacy == 10


def test_limit_cap_restores_priority_fee_invariant():
    price = eip1559(base=20, max_fee=100, priority=30).limit_cap(25)
    assert price.eip1559.max_fee_per_gas == 25
    assert price.eip1559.max_priority_fee_per_gas == 25
    assert price.eip1559.base_fee_per_gas == 20


def test_limit_cap_fixes_misbehaving_oracle_value():
    price = eip1559(base=20, max_fee=10, priority=15).limit_cap(100)
    assert price.eip1559.max_fee_per_gas == 10
    assert price.eip1559.max_priority_fee_per_gas == 10


def test_limit_cap_nan_max_fee_takes_cap():
    price = eip1559(base=20, max_fee=math.nan, priority=5).limit_cap(30)
    assert price.eip1559.max_fee_per_gas == 30
    assert price.eip1559.max_priority_fee_per_gas == 5


@pytest.mark.parametrize(
    'base, max_fee, priority',
    [(20, 100, 2), (20, 100, 150), (0, 0, 0), (1.5, 7.25, 7.5), (30, 31, 1)],
)
@pytest.mark.parametrize('cap', [0, 1, 10.5, 31, 1000])
def test_limit_cap_bounds(base, max_fee, priority, cap):
    capped = eip1559(base, max_fee, priority).limit_cap(cap).eip1559
    assert capped.max_fee_per_gas <= cap
    assert capped.max_priority_fee_per_gas <= capped.max_fee_per_gas


def test_invariant_holds_after_transformations():
    price = eip1559(base=20.5, max_fee=40.3, priority=3.7, legacy=41)
    for transform in (
        lambda p: p.scale_up(1.125),
        lambda p: p.round_up(),
        lambda p: p.limit_cap(45.5),
        lambda p: p.scale_up(3),
        lambda p: p.limit_cap(60),
        lambda p: p.round_up(),
        lambda p: p.limit_cap(12),
    ):
        price = transform(price)
        assert price.eip1559.max_priority_fee_per_gas <= price.eip1559.max_fee_per_gas


def test_transformations_return_new_values(eip1559_price):
    eip1559_price.scale_up(2)
    eip1559_price.limit_cap(1)
    assert eip1559_price.eip1559.max_fee_per_gas == 100


def test_prices_are_immutable(eip1559_price):
    with pytest.raises(ValidationError):
        eip1559_price.legacy = 1
    with pytest.raises(ValidationError):
        eip1559_price.eip1559.max_fee_per_gas = 1


def test_gas_price_response_from_estimate(eip1559_price):
    response = GasPriceResponse.from_estimate(eip1559_price, 'b', ['a', 'b'])
    assert response.source == 'b'
    assert response.configured_sources == ['a', 'b']
    assert response.effective_price == 22
    assert response.cap == 100
    assert response.eip1559 == eip1559_price.eip1559
