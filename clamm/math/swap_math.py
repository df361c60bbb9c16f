"""
Swap Math - 단일 스왑 스텝 계산

현재 가격, 목표 가격, 활성 유동성, 남은 수량이 주어졌을 때
한 스텝에서 소비되는 입력량, 생성되는 출력량, 수수료를 계산합니다.

References:
- Uniswap V3 Core: contracts/libraries/SwapMath.sol
- 백서 Section 6.2.3: Swapping Within a Single Tick

부호 규약:
    amount_remaining >= 0  → exact input (남은 입력량)
    amount_remaining < 0   → exact output (남은 출력량의 음수)
"""

from typing import NamedTuple

from ..constants import FEE_DENOMINATOR
from .full_math import mul_div, mul_div_rounding_up
from .sqrt_price_math import (
    get_amount0_delta,
    get_amount1_delta,
    get_next_sqrt_price_from_input,
    get_next_sqrt_price_from_output,
)


class SwapStep(NamedTuple):
    """스왑 스텝 결과"""
    sqrt_price_next_x96: int  # 스텝 종료 후 sqrtPriceX96
    amount_in: int  # 소비된 입력량 (수수료 제외)
    amount_out: int  # 생성된 출력량
    fee_amount: int  # 입력 토큰으로 징수된 수수료


def compute_swap_step(
    sqrt_ratio_current_x96: int,
    sqrt_ratio_target_x96: int,
    liquidity: int,
    amount_remaining: int,
    fee_pips: int
) -> SwapStep:
    """한 스텝의 스왑 결과 계산

    방향은 목표 가격이 현재 가격보다 작은지(zero_for_one)로 결정됩니다.
    스텝이 목표 가격에 도달하지 못하면 가격은 남은 수량을 모두 소비한
    지점에서 멈추고, 도달하면 목표 가격으로 고정됩니다.

    Args:
        sqrt_ratio_current_x96: 현재 sqrtPriceX96
        sqrt_ratio_target_x96: 넘어갈 수 없는 목표 sqrtPriceX96
        liquidity: 활성 유동성
        amount_remaining: 남은 수량 (양수 exact input, 음수 exact output)
        fee_pips: 수수료율 (1e6 분모, 예: 3000 = 0.30%)

    Returns:
        SwapStep
    """
    zero_for_one = sqrt_ratio_current_x96 >= sqrt_ratio_target_x96
    exact_in = amount_remaining >= 0

    amount_in = 0
    amount_out = 0

    if exact_in:
        amount_remaining_less_fee = mul_div(
            amount_remaining, FEE_DENOMINATOR - fee_pips, FEE_DENOMINATOR
        )
        if zero_for_one:
            amount_in = get_amount0_delta(sqrt_ratio_target_x96, sqrt_ratio_current_x96, liquidity, True)
        else:
            amount_in = get_amount1_delta(sqrt_ratio_current_x96, sqrt_ratio_target_x96, liquidity, True)

        if amount_remaining_less_fee >= amount_in:
            sqrt_ratio_next_x96 = sqrt_ratio_target_x96
        else:
            sqrt_ratio_next_x96 = get_next_sqrt_price_from_input(
                sqrt_ratio_current_x96, liquidity, amount_remaining_less_fee, zero_for_one
            )
    else:
        if zero_for_one:
            amount_out = get_amount1_delta(sqrt_ratio_target_x96, sqrt_ratio_current_x96, liquidity, False)
        else:
            amount_out = get_amount0_delta(sqrt_ratio_current_x96, sqrt_ratio_target_x96, liquidity, False)

        if -amount_remaining >= amount_out:
            sqrt_ratio_next_x96 = sqrt_ratio_target_x96
        else:
            sqrt_ratio_next_x96 = get_next_sqrt_price_from_output(
                sqrt_ratio_current_x96, liquidity, -amount_remaining, zero_for_one
            )

    reached_target = sqrt_ratio_target_x96 == sqrt_ratio_next_x96

    # 실제 입력/출력량 재계산 (목표 도달 시 위에서 계산한 값 재사용)
    if zero_for_one:
        if not (reached_target and exact_in):
            amount_in = get_amount0_delta(sqrt_ratio_next_x96, sqrt_ratio_current_x96, liquidity, True)
        if not (reached_target and not exact_in):
            amount_out = get_amount1_delta(sqrt_ratio_next_x96, sqrt_ratio_current_x96, liquidity, False)
    else:
        if not (reached_target and exact_in):
            amount_in = get_amount1_delta(sqrt_ratio_current_x96, sqrt_ratio_next_x96, liquidity, True)
        if not (reached_target and not exact_in):
            amount_out = get_amount0_delta(sqrt_ratio_current_x96, sqrt_ratio_next_x96, liquidity, False)

    # exact output에서 요청량보다 많이 내주지 않음
    if not exact_in and amount_out > -amount_remaining:
        amount_out = -amount_remaining

    if exact_in and sqrt_ratio_next_x96 != sqrt_ratio_target_x96:
        # 목표 가격 미도달: 남은 입력량 전부를 소비, 나머지는 수수료
        fee_amount = amount_remaining - amount_in
    else:
        fee_amount = mul_div_rounding_up(amount_in, fee_pips, FEE_DENOMINATOR - fee_pips)

    return SwapStep(sqrt_ratio_next_x96, amount_in, amount_out, fee_amount)
