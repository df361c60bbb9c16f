"""
풀 엔진 데이터 타입 정의

풀 상태, 틱, 포지션 레코드를 Python dataclass로 정의.
모든 숫자 필드는 온체인 정밀도를 위해 int 타입 사용.
"""

from dataclasses import dataclass
from typing import NamedTuple


@dataclass
class PoolState:
    """Global State (Section 6.2, Table 1)

    - sqrt_price_x96: 현재 √가격 (Q64.96 인코딩)
    - tick: 현재 틱 인덱스 (i_c), 항상 get_tick_at_sqrt_ratio(sqrt_price_x96)
    - liquidity: 현재 가격에서 활성화된 총 유동성 (L)
    - fee_growth_global_0_x128: token0 단위유동성당 누적수수료 (f_g,0)
    - fee_growth_global_1_x128: token1 단위유동성당 누적수수료 (f_g,1)
    """
    sqrt_price_x96: int = 0
    tick: int = 0
    fee_protocol: int = 0  # 하위 4비트 token0, 상위 4비트 token1
    unlocked: bool = True  # 작업 진행 중에만 False
    liquidity: int = 0
    fee_growth_global_0_x128: int = 0
    fee_growth_global_1_x128: int = 0
    protocol_fees_0: int = 0
    protocol_fees_1: int = 0


@dataclass
class TickInfo:
    """Tick-Indexed State (Section 6.3, Table 2)

    - liquidity_gross: 해당 틱을 경계로 하는 총 유동성
    - liquidity_net: 틱을 위로 크로싱할 때 유동성 변화량 (ΔL)
    - fee_growth_outside_0_x128: 틱 외부 누적수수료 token0 (f_o,0)
    - fee_growth_outside_1_x128: 틱 외부 누적수수료 token1 (f_o,1)
    """
    liquidity_gross: int = 0
    liquidity_net: int = 0
    fee_growth_outside_0_x128: int = 0
    fee_growth_outside_1_x128: int = 0
    initialized: bool = False


@dataclass
class PositionInfo:
    """Position-Indexed State (Section 6.4, Table 3)

    - liquidity: 포지션의 유동성 (l)
    - fee_growth_inside_0_last_x128: 마지막 업데이트 시점의 범위 내 수수료 token0 (f_r,0(t_0))
    - fee_growth_inside_1_last_x128: 마지막 업데이트 시점의 범위 내 수수료 token1 (f_r,1(t_0))
    - tokens_owed_0: 미수령 token0
    - tokens_owed_1: 미수령 token1
    """
    owner: str
    tick_lower: int  # i_l
    tick_upper: int  # i_u
    liquidity: int = 0  # l
    fee_growth_inside_0_last_x128: int = 0  # f_r,0(t_0)
    fee_growth_inside_1_last_x128: int = 0  # f_r,1(t_0)
    tokens_owed_0: int = 0
    tokens_owed_1: int = 0


class SwapResult(NamedTuple):
    """스왑 결과

    amount0/amount1은 트레이더 기준 부호:
    음수는 풀에 지불한 양, 양수는 풀에서 받은 양.
    """
    amount0: int
    amount1: int
    sqrt_price_x96: int  # 스왑 후 sqrtPriceX96
    liquidity: int  # 스왑 후 활성 유동성
    tick: int  # 스왑 후 틱
