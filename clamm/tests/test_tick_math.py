"""
Tick Math 테스트

tick_math.py의 함수들을 테스트합니다.
온체인 값과 비교하여 정확도를 검증합니다.
"""

import pytest

from ..constants import Q96, MIN_TICK, MAX_TICK, MIN_SQRT_RATIO, MAX_SQRT_RATIO
from ..exceptions import TickOutOfRangeError, PriceOutOfRangeError
from ..math.tick_math import (
    get_sqrt_ratio_at_tick,
    get_tick_at_sqrt_ratio,
    tick_to_price,
    get_tick_spacing_for_fee,
    encode_price_sqrt,
)


class TestGetSqrtRatioAtTick:
    """get_sqrt_ratio_at_tick 테스트"""

    def test_min_tick(self):
        """최소 틱에서의 sqrtPrice"""
        assert get_sqrt_ratio_at_tick(MIN_TICK) == MIN_SQRT_RATIO

    def test_max_tick(self):
        """최대 틱에서의 sqrtPrice"""
        assert get_sqrt_ratio_at_tick(MAX_TICK) == MAX_SQRT_RATIO

    def test_tick_0(self):
        """틱 0에서의 sqrtPrice는 정확히 2^96"""
        assert get_sqrt_ratio_at_tick(0) == Q96

    def test_close_to_float_value(self):
        """부동소수점 근사값과의 상대 오차"""
        for tick in [-50000, -600, -1, 1, 600, 50000]:
            expected = (1.0001 ** (tick / 2)) * Q96
            result = get_sqrt_ratio_at_tick(tick)
            assert abs(result - expected) / expected < 1e-12

    def test_strictly_increasing(self):
        """틱이 증가하면 sqrtPrice도 엄격히 증가"""
        ticks = [MIN_TICK, MIN_TICK + 1, -100000, -1, 0, 1, 100000, MAX_TICK - 1, MAX_TICK]
        ratios = [get_sqrt_ratio_at_tick(t) for t in ticks]
        assert all(a < b for a, b in zip(ratios, ratios[1:]))

    def test_invalid_tick_too_low(self):
        """유효 범위를 벗어난 틱 (너무 낮음)"""
        with pytest.raises(TickOutOfRangeError):
            get_sqrt_ratio_at_tick(MIN_TICK - 1)

    def test_invalid_tick_too_high(self):
        """유효 범위를 벗어난 틱 (너무 높음)"""
        with pytest.raises(ValueError):
            get_sqrt_ratio_at_tick(MAX_TICK + 1)


class TestGetTickAtSqrtRatio:
    """get_tick_at_sqrt_ratio 테스트"""

    def test_min_sqrt_ratio(self):
        assert get_tick_at_sqrt_ratio(MIN_SQRT_RATIO) == MIN_TICK

    def test_max_sqrt_ratio_minus_one(self):
        assert get_tick_at_sqrt_ratio(MAX_SQRT_RATIO - 1) == MAX_TICK - 1

    def test_sqrt_ratio_at_tick_0(self):
        """sqrtPrice 2^96에서의 틱"""
        assert get_tick_at_sqrt_ratio(Q96) == 0

    def test_floor_between_ticks(self):
        """두 틱 사이의 가격은 아래 틱으로 내림"""
        for tick in [-887000, -60, -1, 0, 1, 60, 887000]:
            sqrt_price = get_sqrt_ratio_at_tick(tick)
            assert get_tick_at_sqrt_ratio(sqrt_price) == tick
            assert get_tick_at_sqrt_ratio(sqrt_price - 1) == tick - 1
            assert get_tick_at_sqrt_ratio(sqrt_price + 1) == tick

    def test_roundtrip(self):
        """틱 -> sqrtPrice -> 틱 왕복 테스트"""
        for tick in [-50000, -1000, 0, 1000, 50000]:
            assert get_tick_at_sqrt_ratio(get_sqrt_ratio_at_tick(tick)) == tick

    def test_invalid_sqrt_ratio_too_low(self):
        with pytest.raises(PriceOutOfRangeError):
            get_tick_at_sqrt_ratio(MIN_SQRT_RATIO - 1)

    def test_invalid_sqrt_ratio_max(self):
        """MAX_SQRT_RATIO 자체는 유효하지 않음"""
        with pytest.raises(PriceOutOfRangeError):
            get_tick_at_sqrt_ratio(MAX_SQRT_RATIO)


class TestEncodePriceSqrt:
    """encode_price_sqrt 테스트"""

    def test_price_one(self):
        assert encode_price_sqrt(1, 1) == Q96

    def test_price_hundred(self):
        """가격 100 → sqrtPrice 10 × 2^96"""
        assert encode_price_sqrt(100, 1) == 10 * Q96

    def test_price_hundredth(self):
        assert get_tick_at_sqrt_ratio(encode_price_sqrt(1, 100)) < 0


class TestTickToPrice:
    """tick_to_price 테스트"""

    def test_tick_0_same_decimals(self):
        """틱 0, 동일 소수점 (가격 = 1)"""
        assert abs(tick_to_price(0, 18, 18) - 1.0) < 1e-10

    def test_tick_0_different_decimals(self):
        """틱 0, 다른 소수점"""
        result = tick_to_price(0, 6, 18)
        assert abs(result - 1e-12) < 1e-20

    def test_negative_tick(self):
        result = tick_to_price(-1000, 18, 18)
        expected = 1.0001 ** (-1000)
        assert abs(result - expected) / expected < 1e-6


class TestGetTickSpacingForFee:
    """수수료 티어별 틱 간격"""

    def test_standard_tiers(self):
        assert get_tick_spacing_for_fee(100) == 1
        assert get_tick_spacing_for_fee(500) == 10
        assert get_tick_spacing_for_fee(3000) == 60
        assert get_tick_spacing_for_fee(10000) == 200

    def test_unknown_tier(self):
        with pytest.raises(ValueError):
            get_tick_spacing_for_fee(1234)
