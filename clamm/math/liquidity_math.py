"""
Liquidity Math - 유동성 계산

유동성 델타 적용과 토큰 수량 ↔ 유동성 변환.

References:
- Uniswap V3 Core: contracts/libraries/LiquidityMath.sol
- Uniswap V3 Periphery: contracts/libraries/LiquidityAmounts.sol

핵심 공식:
    L = Δy / (√P_upper - √P_lower)  # token1 기준
    L = Δx / (1/√P_lower - 1/√P_upper)  # token0 기준
"""

from typing import Tuple

from ..constants import Q96, UINT128_MAX
from ..exceptions import LiquidityOverflowError, LiquidityUnderflowError
from .full_math import mul_div
from .sqrt_price_math import get_amount0_delta, get_amount1_delta


def add_delta(x: int, y: int) -> int:
    """부호 있는 유동성 델타를 부호 없는 유동성에 적용

    Args:
        x: 현재 유동성 (uint128)
        y: 유동성 변화량 (int128)

    Returns:
        x + y

    Raises:
        LiquidityUnderflowError: 결과가 음수인 경우 (LS)
        LiquidityOverflowError: 결과가 uint128 범위를 초과하는 경우 (LA)
    """
    z = x + y
    if z < 0:
        raise LiquidityUnderflowError(f"유동성 부족: {x} + ({y}) < 0")
    if z > UINT128_MAX:
        raise LiquidityOverflowError(f"유동성이 uint128 범위를 초과합니다: {z}")
    return z


def get_liquidity_for_amount0(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    amount0: int
) -> int:
    """amount0에서 유동성 계산

    공식: L = Δx * √P_a * √P_b / (√P_b - √P_a)
    """
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96
    if sqrt_ratio_b_x96 <= sqrt_ratio_a_x96:
        return 0

    intermediate = mul_div(sqrt_ratio_a_x96, sqrt_ratio_b_x96, Q96)
    return mul_div(amount0, intermediate, sqrt_ratio_b_x96 - sqrt_ratio_a_x96)


def get_liquidity_for_amount1(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    amount1: int
) -> int:
    """amount1에서 유동성 계산

    공식: L = Δy / (√P_b - √P_a)
    """
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96
    if sqrt_ratio_b_x96 <= sqrt_ratio_a_x96:
        return 0

    return mul_div(amount1, Q96, sqrt_ratio_b_x96 - sqrt_ratio_a_x96)


def get_liquidity_for_amounts(
    sqrt_ratio_x96: int,
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    amount0: int,
    amount1: int
) -> int:
    """토큰 수량에서 민트 가능한 최대 유동성 계산

    Args:
        sqrt_ratio_x96: 현재 sqrtPriceX96
        sqrt_ratio_a_x96: 하한 sqrtPriceX96
        sqrt_ratio_b_x96: 상한 sqrtPriceX96
        amount0: token0 수량
        amount1: token1 수량

    Returns:
        유동성 (두 제약 조건 중 작은 값)
    """
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96

    if sqrt_ratio_x96 <= sqrt_ratio_a_x96:
        # 가격이 범위 아래: token0만 사용
        return get_liquidity_for_amount0(sqrt_ratio_a_x96, sqrt_ratio_b_x96, amount0)
    elif sqrt_ratio_x96 < sqrt_ratio_b_x96:
        # 가격이 범위 내: 양쪽 토큰 사용, 작은 값 반환
        liquidity0 = get_liquidity_for_amount0(sqrt_ratio_x96, sqrt_ratio_b_x96, amount0)
        liquidity1 = get_liquidity_for_amount1(sqrt_ratio_a_x96, sqrt_ratio_x96, amount1)
        return min(liquidity0, liquidity1)
    else:
        # 가격이 범위 위: token1만 사용
        return get_liquidity_for_amount1(sqrt_ratio_a_x96, sqrt_ratio_b_x96, amount1)


def get_amounts_for_liquidity(
    sqrt_ratio_x96: int,
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    liquidity: int
) -> Tuple[int, int]:
    """유동성에서 포지션이 보유한 토큰 수량 계산 (내림)"""
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96

    if sqrt_ratio_x96 <= sqrt_ratio_a_x96:
        return get_amount0_delta(sqrt_ratio_a_x96, sqrt_ratio_b_x96, liquidity, False), 0
    elif sqrt_ratio_x96 < sqrt_ratio_b_x96:
        amount0 = get_amount0_delta(sqrt_ratio_x96, sqrt_ratio_b_x96, liquidity, False)
        amount1 = get_amount1_delta(sqrt_ratio_a_x96, sqrt_ratio_x96, liquidity, False)
        return amount0, amount1
    else:
        return 0, get_amount1_delta(sqrt_ratio_a_x96, sqrt_ratio_b_x96, liquidity, False)
