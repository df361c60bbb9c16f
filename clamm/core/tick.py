"""
Tick Ledger - 틱별 유동성 및 fee growth 기록

유동성 경계가 되는 틱마다 총/순 유동성과 fee growth outside 스냅샷을 보관합니다.

References:
- Uniswap V3 Core: contracts/libraries/Tick.sol
- 백서 Section 6.3: Tick-Indexed State
"""

import logging
from typing import Tuple

from ..constants import MIN_TICK, MAX_TICK, UINT128_MAX, INT128_MIN, INT128_MAX
from ..exceptions import TickLiquidityOverflowError, LiquidityOverflowError
from ..math.fee_math import fee_growth_inside, calculate_fee_growth_delta
from ..math.liquidity_math import add_delta
from .ledger import Ledger
from .types import TickInfo

logger = logging.getLogger(__name__)


def tick_spacing_to_max_liquidity_per_tick(tick_spacing: int) -> int:
    """틱 간격에서 틱당 최대 유동성 계산

    모든 사용 가능한 틱이 최대 유동성을 가져도 전체 유동성이
    uint128을 넘지 않도록 제한합니다.

    Args:
        tick_spacing: 틱 간격

    Returns:
        틱당 최대 liquidity_gross
    """
    # 0 방향 절삭
    min_tick = -(-MIN_TICK // tick_spacing) * tick_spacing
    max_tick = (MAX_TICK // tick_spacing) * tick_spacing
    num_ticks = (max_tick - min_tick) // tick_spacing + 1
    return UINT128_MAX // num_ticks


class TickTable(Ledger[int, TickInfo]):
    """틱 인덱스 → TickInfo"""

    def get(self, tick: int) -> TickInfo:
        """틱 조회. 기록이 없으면 빈 TickInfo 반환 (저장하지 않음)"""
        return self.peek(tick) or TickInfo()

    def get_fee_growth_inside(
        self,
        tick_lower: int,
        tick_upper: int,
        tick_current: int,
        fee_growth_global_0_x128: int,
        fee_growth_global_1_x128: int
    ) -> Tuple[int, int]:
        """[tick_lower, tick_upper) 범위 내 fee growth (f_r,0, f_r,1)"""
        lower = self.get(tick_lower)
        upper = self.get(tick_upper)

        inside0 = fee_growth_inside(
            tick_lower, tick_upper, tick_current,
            fee_growth_global_0_x128,
            lower.fee_growth_outside_0_x128,
            upper.fee_growth_outside_0_x128,
        )
        inside1 = fee_growth_inside(
            tick_lower, tick_upper, tick_current,
            fee_growth_global_1_x128,
            lower.fee_growth_outside_1_x128,
            upper.fee_growth_outside_1_x128,
        )
        return inside0, inside1

    def update(
        self,
        tick: int,
        tick_current: int,
        liquidity_delta: int,
        fee_growth_global_0_x128: int,
        fee_growth_global_1_x128: int,
        upper: bool,
        max_liquidity: int
    ) -> bool:
        """틱의 유동성 갱신

        Args:
            tick: 갱신할 틱
            tick_current: 현재 풀 틱
            liquidity_delta: 유동성 변화량 (추가 양수, 제거 음수)
            fee_growth_global_0_x128: 현재 f_g,0
            fee_growth_global_1_x128: 현재 f_g,1
            upper: 포지션의 상한 틱이면 True
            max_liquidity: 틱당 최대 liquidity_gross

        Returns:
            초기화 상태가 바뀌었으면 True (비트맵 갱신 필요)

        Raises:
            LiquidityUnderflowError: liquidity_gross보다 많이 제거
            TickLiquidityOverflowError: max_liquidity 초과
        """
        info = self._entry(tick, TickInfo)

        liquidity_gross_before = info.liquidity_gross
        liquidity_gross_after = add_delta(liquidity_gross_before, liquidity_delta)

        if liquidity_gross_after > max_liquidity:
            raise TickLiquidityOverflowError(
                f"틱 {tick}의 유동성이 최대값을 초과합니다: {liquidity_gross_after} > {max_liquidity}"
            )

        flipped = (liquidity_gross_after == 0) != (liquidity_gross_before == 0)

        if liquidity_gross_before == 0:
            # 초기화 이전의 모든 성장은 틱 아래에서 발생했다고 가정
            if tick <= tick_current:
                info.fee_growth_outside_0_x128 = fee_growth_global_0_x128
                info.fee_growth_outside_1_x128 = fee_growth_global_1_x128
            info.initialized = True

        info.liquidity_gross = liquidity_gross_after

        # 하한 틱은 위로 크로싱할 때 유동성 추가, 상한 틱은 제거
        liquidity_net = info.liquidity_net - liquidity_delta if upper else info.liquidity_net + liquidity_delta
        if not INT128_MIN <= liquidity_net <= INT128_MAX:
            raise LiquidityOverflowError(f"틱 {tick}의 liquidity_net이 int128 범위를 초과합니다")
        info.liquidity_net = liquidity_net

        return flipped

    def clear(self, tick: int) -> None:
        """liquidity_gross가 0이 된 틱 기록 삭제"""
        self._delete(tick)

    def cross(
        self,
        tick: int,
        fee_growth_global_0_x128: int,
        fee_growth_global_1_x128: int
    ) -> int:
        """가격이 틱을 지날 때 outside 스냅샷을 반대편으로 뒤집음

        f_o = f_g - f_o

        Returns:
            liquidity_net (왼쪽에서 오른쪽으로 크로싱할 때의 유동성 변화량)
        """
        info = self._entry(tick, TickInfo)
        info.fee_growth_outside_0_x128 = calculate_fee_growth_delta(
            fee_growth_global_0_x128, info.fee_growth_outside_0_x128
        )
        info.fee_growth_outside_1_x128 = calculate_fee_growth_delta(
            fee_growth_global_1_x128, info.fee_growth_outside_1_x128
        )

        logger.debug(
            "Tick crossed",
            extra={
                "event": "tick.cross",
                "tick": tick,
                "liquidity_net": info.liquidity_net,
            }
        )
        return info.liquidity_net
