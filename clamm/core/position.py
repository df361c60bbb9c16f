"""
Position Ledger - 포지션별 유동성 및 미수령 수수료

(owner, tick_lower, tick_upper)마다 하나의 PositionInfo를 보관합니다.

References:
- Uniswap V3 Core: contracts/libraries/Position.sol
- 백서 Section 6.4: Position-Indexed State
"""

import hashlib

from ..exceptions import NoPositionLiquidityError
from ..math.fee_math import calculate_uncollected_fees
from ..math.liquidity_math import add_delta
from .ledger import Ledger
from .types import PositionInfo


def position_key(owner: str, tick_lower: int, tick_upper: int) -> str:
    """(owner, tick_lower, tick_upper)에서 결정적 포지션 키 생성"""
    return hashlib.sha3_256(f"{owner}:{tick_lower}:{tick_upper}".encode()).hexdigest()


def update(
    info: PositionInfo,
    liquidity_delta: int,
    fee_growth_inside_0_x128: int,
    fee_growth_inside_1_x128: int
) -> None:
    """누적 수수료를 적립하고 유동성을 갱신

    수수료는 델타 적용 이전의 유동성으로 계산합니다:
        tokens_owed += (f_r(t_1) - f_r(t_0)) × l / 2^128  (내림)

    Args:
        info: 갱신할 포지션
        liquidity_delta: 유동성 변화량
        fee_growth_inside_0_x128: 현재 범위 내 fee growth token0
        fee_growth_inside_1_x128: 현재 범위 내 fee growth token1

    Raises:
        NoPositionLiquidityError: 유동성 0인 포지션에 대한 poke
        LiquidityUnderflowError: 보유량보다 많은 유동성 제거
    """
    if liquidity_delta == 0:
        if info.liquidity == 0:
            raise NoPositionLiquidityError("유동성이 없는 포지션은 갱신할 수 없습니다")
        liquidity_next = info.liquidity
    else:
        liquidity_next = add_delta(info.liquidity, liquidity_delta)

    tokens_owed_0 = calculate_uncollected_fees(
        info.liquidity, fee_growth_inside_0_x128, info.fee_growth_inside_0_last_x128
    )
    tokens_owed_1 = calculate_uncollected_fees(
        info.liquidity, fee_growth_inside_1_x128, info.fee_growth_inside_1_last_x128
    )

    info.liquidity = liquidity_next
    info.fee_growth_inside_0_last_x128 = fee_growth_inside_0_x128
    info.fee_growth_inside_1_last_x128 = fee_growth_inside_1_x128
    info.tokens_owed_0 += tokens_owed_0
    info.tokens_owed_1 += tokens_owed_1


class PositionTable(Ledger[str, PositionInfo]):
    """포지션 키 → PositionInfo"""

    def get(self, owner: str, tick_lower: int, tick_upper: int) -> PositionInfo:
        """포지션 조회. 처음 접근하면 빈 포지션을 생성"""
        return self._entry(
            position_key(owner, tick_lower, tick_upper),
            lambda: PositionInfo(owner=owner, tick_lower=tick_lower, tick_upper=tick_upper),
        )

    def find(self, owner: str, tick_lower: int, tick_upper: int) -> PositionInfo:
        """포지션 조회 (생성하지 않음). 없으면 빈 PositionInfo 반환"""
        info = self.peek(position_key(owner, tick_lower, tick_upper))
        if info is None:
            return PositionInfo(owner=owner, tick_lower=tick_lower, tick_upper=tick_upper)
        return info

    def owned_by(self, owner: str):
        """owner의 모든 포지션"""
        return [info for _, info in self.items() if info.owner == owner]
