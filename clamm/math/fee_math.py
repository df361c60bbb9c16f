"""
Fee Math - 백서 기반 수수료 계산

백서 Section 6.3, 6.4의 공식을 정확하게 구현.
fee growth 값은 Q128.128 고정소수점이며, 차이 계산은 uint256 랩어라운드를 따릅니다.

References:
- 백서 Section 6.3: Tick-Indexed State (feeGrowthOutside)
- 백서 Section 6.4.1: Position-Indexed State (uncollected fees)

핵심 공식:
    f_a(i) = f_g - f_o(i)  if i_c >= i else f_o(i)     # 틱 i 위 수수료
    f_b(i) = f_o(i)        if i_c >= i else f_g - f_o(i) # 틱 i 아래 수수료
    f_r = f_g - f_b(i_l) - f_a(i_u)                     # 범위 내 수수료
    f_u = l × (f_r(t_1) - f_r(t_0))                     # 미수령 수수료
"""

from ..constants import Q128

_MOD_256 = 2 ** 256


def fee_growth_above(
    tick_idx: int,
    current_tick: int,
    fee_growth_global: int,
    fee_growth_outside: int
) -> int:
    """틱 위에서 발생한 수수료 성장률 (f_a)

    f_a(i) = f_g - f_o(i)  if i_c >= i
    f_a(i) = f_o(i)        if i_c < i
    """
    if current_tick >= tick_idx:
        return (fee_growth_global - fee_growth_outside) % _MOD_256
    return fee_growth_outside


def fee_growth_below(
    tick_idx: int,
    current_tick: int,
    fee_growth_global: int,
    fee_growth_outside: int
) -> int:
    """틱 아래에서 발생한 수수료 성장률 (f_b)

    f_b(i) = f_o(i)        if i_c >= i
    f_b(i) = f_g - f_o(i)  if i_c < i
    """
    if current_tick >= tick_idx:
        return fee_growth_outside
    return (fee_growth_global - fee_growth_outside) % _MOD_256


def fee_growth_inside(
    tick_lower: int,
    tick_upper: int,
    current_tick: int,
    fee_growth_global: int,
    fee_growth_outside_lower: int,
    fee_growth_outside_upper: int
) -> int:
    """범위 내 fee growth 계산 (f_r)

    f_r = f_g - f_b(i_l) - f_a(i_u)

    틱 초기화 규약(초기화 이전 성장은 모두 틱 아래에서 발생했다고 가정) 때문에
    중간값이 음수가 될 수 있으므로 uint256 랩어라운드로 계산합니다.
    포지션은 두 시점의 차이만 사용하므로 결과는 정확합니다.
    """
    f_b = fee_growth_below(tick_lower, current_tick, fee_growth_global, fee_growth_outside_lower)
    f_a = fee_growth_above(tick_upper, current_tick, fee_growth_global, fee_growth_outside_upper)
    return (fee_growth_global - f_b - f_a) % _MOD_256


def calculate_fee_growth_delta(
    fee_growth_current: int,
    fee_growth_previous: int
) -> int:
    """두 시점 간 fee growth 변화량 (uint256 랩어라운드)"""
    return (fee_growth_current - fee_growth_previous) % _MOD_256


def calculate_uncollected_fees(
    liquidity: int,
    fee_growth_inside_current: int,
    fee_growth_inside_last: int
) -> int:
    """미수령 수수료 계산 (f_u), 토큰 최소 단위로 내림

    f_u = l × (f_r(t_1) - f_r(t_0)) / 2^128

    Args:
        liquidity: 포지션 유동성 (l)
        fee_growth_inside_current: 현재 범위 내 fee growth (f_r(t_1))
        fee_growth_inside_last: 마지막 업데이트 시 fee growth (f_r(t_0))

    Returns:
        미수령 수수료 (토큰 최소 단위)
    """
    delta = calculate_fee_growth_delta(fee_growth_inside_current, fee_growth_inside_last)
    return (delta * liquidity) // Q128


def fee_growth_for_step(fee_amount: int, liquidity: int) -> int:
    """한 스왑 스텝의 수수료를 단위 유동성당 Q128 fee growth로 변환 (내림)"""
    if liquidity == 0:
        return 0
    return (fee_amount * Q128) // liquidity
