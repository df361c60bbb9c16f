"""
Tick Ledger 테스트
"""

import pytest

from ..constants import UINT128_MAX
from ..core.tick import TickTable, tick_spacing_to_max_liquidity_per_tick
from ..exceptions import LiquidityUnderflowError, TickLiquidityOverflowError


class TestMaxLiquidityPerTick:
    """틱 간격별 틱당 최대 유동성"""

    def test_standard_spacings(self):
        assert tick_spacing_to_max_liquidity_per_tick(1) == 191757530477355301479181766273477
        assert tick_spacing_to_max_liquidity_per_tick(10) == 1917569901783203986719870431555990
        assert tick_spacing_to_max_liquidity_per_tick(60) == 11505743598341114571880798222544994
        assert tick_spacing_to_max_liquidity_per_tick(200) == 38350317471085141830651933667504588

    def test_entire_range(self):
        """간격이 전체 범위면 틱이 3개"""
        assert tick_spacing_to_max_liquidity_per_tick(887272) == UINT128_MAX // 3


class TestUpdate:
    """TickTable.update 테스트"""

    def test_flips_from_zero_to_nonzero(self):
        ticks = TickTable()
        assert ticks.update(0, 0, 1, 0, 0, False, 3) is True

    def test_does_not_flip_from_nonzero_to_greater(self):
        ticks = TickTable()
        ticks.update(0, 0, 1, 0, 0, False, 3)
        assert ticks.update(0, 0, 1, 0, 0, False, 3) is False

    def test_flips_from_nonzero_to_zero(self):
        ticks = TickTable()
        ticks.update(0, 0, 1, 0, 0, False, 3)
        assert ticks.update(0, 0, -1, 0, 0, False, 3) is True

    def test_liquidity_gross_exceeds_max(self):
        ticks = TickTable()
        ticks.update(0, 0, 2, 0, 0, False, 3)
        ticks.update(0, 0, 1, 0, 0, True, 3)
        with pytest.raises(TickLiquidityOverflowError):
            ticks.update(0, 0, 1, 0, 0, False, 3)

    def test_net_for_lower_and_upper(self):
        """하한은 더하고 상한은 뺌"""
        ticks = TickTable()
        ticks.update(0, 0, 2, 0, 0, False, 10)
        ticks.update(0, 0, 1, 0, 0, True, 10)
        ticks.update(0, 0, 3, 0, 0, True, 10)
        ticks.update(0, 0, 1, 0, 0, False, 10)

        info = ticks.get(0)
        assert info.liquidity_gross == 2 + 1 + 3 + 1
        assert info.liquidity_net == 2 - 1 - 3 + 1

    def test_underflow(self):
        ticks = TickTable()
        ticks.update(0, 0, 1, 0, 0, False, 10)
        with pytest.raises(LiquidityUnderflowError):
            ticks.update(0, 0, -2, 0, 0, False, 10)

    def test_outside_at_or_below_current(self):
        """현재 틱 이하에서 초기화하면 outside = global"""
        ticks = TickTable()
        ticks.update(1, 1, 1, 1, 2, False, 10)
        info = ticks.get(1)
        assert info.fee_growth_outside_0_x128 == 1
        assert info.fee_growth_outside_1_x128 == 2
        assert info.initialized

    def test_outside_above_current(self):
        """현재 틱 위에서 초기화하면 outside = 0"""
        ticks = TickTable()
        ticks.update(2, 1, 1, 1, 2, False, 10)
        info = ticks.get(2)
        assert info.fee_growth_outside_0_x128 == 0
        assert info.fee_growth_outside_1_x128 == 0

    def test_outside_not_reset_on_existing(self):
        ticks = TickTable()
        ticks.update(1, 1, 1, 1, 2, False, 10)
        ticks.update(1, 1, 1, 6, 7, False, 10)
        assert ticks.get(1).fee_growth_outside_0_x128 == 1


class TestFeeGrowthInside:
    """get_fee_growth_inside 테스트"""

    def test_uninitialized_ticks_in_range(self):
        ticks = TickTable()
        assert ticks.get_fee_growth_inside(-2, 2, 0, 15, 15) == (15, 15)

    def test_uninitialized_ticks_above(self):
        ticks = TickTable()
        assert ticks.get_fee_growth_inside(-2, 2, 4, 15, 15) == (0, 0)

    def test_uninitialized_ticks_below(self):
        ticks = TickTable()
        assert ticks.get_fee_growth_inside(-2, 2, -4, 15, 15) == (0, 0)

    def test_double_cross_restores_outside(self):
        ticks = TickTable()
        ticks.update(2, 0, 1, 0, 0, True, 10)
        ticks.cross(2, 2, 3)
        ticks.cross(2, 2, 3)
        # 두 번 크로싱하면 원래 값(0)으로 복귀
        assert ticks.get_fee_growth_inside(-2, 2, 0, 15, 15) == (15, 15)

    def test_subtracts_both_outsides(self):
        ticks = TickTable()
        ticks.update(-2, 0, 1, 3, 5, False, 10)
        ticks.update(2, 0, 1, 3, 5, True, 10)
        ticks.get(2).fee_growth_outside_0_x128 = 4
        ticks.get(2).fee_growth_outside_1_x128 = 1
        # lower outside 3/5는 i_c >= i_l 이므로 below, upper outside 4/1은 above
        inside0, inside1 = ticks.get_fee_growth_inside(-2, 2, 0, 15, 15)
        assert inside0 == 15 - 3 - 4
        assert inside1 == 15 - 5 - 1


class TestCrossAndClear:
    """cross / clear 테스트"""

    def test_cross_flips_outside(self):
        ticks = TickTable()
        ticks.update(2, 0, 5, 1, 3, False, 10)
        net = ticks.cross(2, 7, 9)

        info = ticks.get(2)
        assert net == 5
        assert info.fee_growth_outside_0_x128 == 7
        assert info.fee_growth_outside_1_x128 == 9

    def test_cross_wraps(self):
        ticks = TickTable()
        ticks.update(0, 0, 5, 10, 10, False, 10)
        ticks.cross(0, 3, 3)
        assert ticks.get(0).fee_growth_outside_0_x128 == 2 ** 256 - 7

    def test_clear_removes_record(self):
        ticks = TickTable()
        ticks.update(2, 0, 5, 1, 3, False, 10)
        ticks.clear(2)

        assert 2 not in ticks
        info = ticks.get(2)
        assert info.liquidity_gross == 0
        assert not info.initialized
