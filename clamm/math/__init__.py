"""
Math layer for the pool engine

온체인 수준 정밀도의 순수 함수들:
- full_math: 전체 정밀도 mul/div
- tick_math: Tick ↔ sqrtPrice 변환
- sqrt_price_math: sqrtPriceX96 및 토큰 변화량 계산
- liquidity_math: 유동성 델타 및 유동성 ↔ 토큰 수량
- swap_math: 단일 스왑 스텝 계산
- fee_math: 백서 기반 fee growth 계산
"""

from .full_math import mul_div, mul_div_rounding_up, div_rounding_up
from .tick_math import (
    get_tick_at_sqrt_ratio,
    get_sqrt_ratio_at_tick,
    tick_to_price,
    get_tick_spacing_for_fee,
    encode_price_sqrt,
)
from .sqrt_price_math import (
    sqrt_price_x96_to_price,
    get_next_sqrt_price_from_input,
    get_next_sqrt_price_from_output,
    get_amount0_delta,
    get_amount1_delta,
    get_amount0_delta_signed,
    get_amount1_delta_signed,
)
from .liquidity_math import (
    add_delta,
    get_liquidity_for_amounts,
    get_amounts_for_liquidity,
)
from .swap_math import SwapStep, compute_swap_step
from .fee_math import (
    fee_growth_inside,
    calculate_uncollected_fees,
    calculate_fee_growth_delta,
    fee_growth_for_step,
)
