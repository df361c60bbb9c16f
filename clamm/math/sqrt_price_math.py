"""
Sqrt Price Math - sqrtPriceX96 관련 계산

가격은 sqrtPriceX96 형식으로 저장됩니다.
sqrtPriceX96 = sqrt(price) * 2^96

모든 반올림은 트레이더에게 불리한 방향(풀에 유리한 방향)으로 수행합니다:
- 풀이 받는 양은 올림, 풀이 내주는 양은 내림
- token0 기준 다음 가격은 올림, token1 기준 다음 가격은 내림

References:
- Uniswap V3 Core: contracts/libraries/SqrtPriceMath.sol
"""

from ..constants import Q96, RESOLUTION, UINT160_MAX, UINT256_MAX
from .full_math import mul_div, mul_div_rounding_up, div_rounding_up


def sqrt_price_x96_to_price(
    sqrt_price_x96: int,
    decimal0: int = 18,
    decimal1: int = 18
) -> float:
    """sqrtPriceX96을 human-readable 가격으로 변환

    가격 = (sqrtPriceX96 / 2^96)^2 / 10^(decimal1 - decimal0)

    Args:
        sqrt_price_x96: sqrtPriceX96 값
        decimal0: token0 소수점 자릿수
        decimal1: token1 소수점 자릿수

    Returns:
        가격 (token1/token0 기준, human-readable)
    """
    sqrt_price = sqrt_price_x96 / Q96
    return sqrt_price ** 2 / 10 ** (decimal1 - decimal0)


def get_next_sqrt_price_from_amount0_rounding_up(
    sqrt_price_x96: int,
    liquidity: int,
    amount: int,
    add: bool
) -> int:
    """amount0 변화에 따른 다음 sqrtPriceX96 계산 (올림)

    공식: √P' = L * √P / (L ± Δx * √P)

    Args:
        sqrt_price_x96: 현재 sqrtPriceX96
        liquidity: 유동성
        amount: amount0 변화량
        add: True면 풀에 추가, False면 풀에서 제거

    Returns:
        새로운 sqrtPriceX96
    """
    if amount == 0:
        return sqrt_price_x96

    numerator1 = liquidity << RESOLUTION
    product = amount * sqrt_price_x96

    if add:
        denominator = numerator1 + product
        if product <= UINT256_MAX and denominator <= UINT256_MAX:
            return mul_div_rounding_up(numerator1, sqrt_price_x96, denominator)

        # 중간값이 uint256을 넘으면 정밀도가 낮은 공식 사용
        return div_rounding_up(numerator1, (numerator1 // sqrt_price_x96) + amount)

    if product > UINT256_MAX or numerator1 <= product:
        raise ValueError("token0 출력량이 가용 유동성을 초과합니다")
    denominator = numerator1 - product
    result = mul_div_rounding_up(numerator1, sqrt_price_x96, denominator)
    if result > UINT160_MAX:
        raise OverflowError("sqrtPriceX96이 uint160 범위를 초과합니다")
    return result


def get_next_sqrt_price_from_amount1_rounding_down(
    sqrt_price_x96: int,
    liquidity: int,
    amount: int,
    add: bool
) -> int:
    """amount1 변화에 따른 다음 sqrtPriceX96 계산 (내림)

    공식: √P' = √P ± Δy / L
    """
    if add:
        quotient = (amount << RESOLUTION) // liquidity
        result = sqrt_price_x96 + quotient
        if result > UINT160_MAX:
            raise OverflowError("sqrtPriceX96이 uint160 범위를 초과합니다")
        return result

    quotient = div_rounding_up(amount << RESOLUTION, liquidity)
    if sqrt_price_x96 <= quotient:
        raise ValueError("token1 출력량이 가용 유동성을 초과합니다")
    return sqrt_price_x96 - quotient


def get_next_sqrt_price_from_input(
    sqrt_price_x96: int,
    liquidity: int,
    amount_in: int,
    zero_for_one: bool
) -> int:
    """입력량으로부터 다음 sqrtPriceX96 계산

    목표 가격을 지나치지 않도록 반올림합니다.
    """
    if sqrt_price_x96 <= 0:
        raise ValueError("sqrtPriceX96은 양수여야 합니다")
    if liquidity <= 0:
        raise ValueError("유동성은 양수여야 합니다")

    if zero_for_one:
        return get_next_sqrt_price_from_amount0_rounding_up(sqrt_price_x96, liquidity, amount_in, True)
    return get_next_sqrt_price_from_amount1_rounding_down(sqrt_price_x96, liquidity, amount_in, True)


def get_next_sqrt_price_from_output(
    sqrt_price_x96: int,
    liquidity: int,
    amount_out: int,
    zero_for_one: bool
) -> int:
    """출력량으로부터 다음 sqrtPriceX96 계산

    목표 가격을 지나도록 반올림합니다.
    """
    if sqrt_price_x96 <= 0:
        raise ValueError("sqrtPriceX96은 양수여야 합니다")
    if liquidity <= 0:
        raise ValueError("유동성은 양수여야 합니다")

    if zero_for_one:
        return get_next_sqrt_price_from_amount1_rounding_down(sqrt_price_x96, liquidity, amount_out, False)
    return get_next_sqrt_price_from_amount0_rounding_up(sqrt_price_x96, liquidity, amount_out, False)


def get_amount0_delta(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    liquidity: int,
    round_up: bool = True
) -> int:
    """두 가격 사이의 amount0 변화량

    공식: Δx = L * (√P_b - √P_a) / (√P_a * √P_b)

    Args:
        sqrt_ratio_a_x96: sqrtPriceX96 A
        sqrt_ratio_b_x96: sqrtPriceX96 B
        liquidity: 유동성 (부호 없음)
        round_up: True면 올림, False면 내림

    Returns:
        amount0 (token0 수량, 최소 단위)
    """
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96
    if sqrt_ratio_a_x96 <= 0:
        raise ValueError("sqrtPriceX96은 양수여야 합니다")

    numerator1 = liquidity << RESOLUTION
    numerator2 = sqrt_ratio_b_x96 - sqrt_ratio_a_x96

    if round_up:
        return div_rounding_up(
            mul_div_rounding_up(numerator1, numerator2, sqrt_ratio_b_x96),
            sqrt_ratio_a_x96
        )
    return mul_div(numerator1, numerator2, sqrt_ratio_b_x96) // sqrt_ratio_a_x96


def get_amount1_delta(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    liquidity: int,
    round_up: bool = True
) -> int:
    """두 가격 사이의 amount1 변화량

    공식: Δy = L * (√P_b - √P_a)
    """
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96

    if round_up:
        return mul_div_rounding_up(liquidity, sqrt_ratio_b_x96 - sqrt_ratio_a_x96, Q96)
    return mul_div(liquidity, sqrt_ratio_b_x96 - sqrt_ratio_a_x96, Q96)


def get_amount0_delta_signed(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int, liquidity: int) -> int:
    """부호 있는 유동성 변화에 대한 amount0

    유동성 추가(양수)는 올림, 제거(음수)는 내림 후 음수로 반환.
    """
    if liquidity < 0:
        return -get_amount0_delta(sqrt_ratio_a_x96, sqrt_ratio_b_x96, -liquidity, False)
    return get_amount0_delta(sqrt_ratio_a_x96, sqrt_ratio_b_x96, liquidity, True)


def get_amount1_delta_signed(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int, liquidity: int) -> int:
    """부호 있는 유동성 변화에 대한 amount1"""
    if liquidity < 0:
        return -get_amount1_delta(sqrt_ratio_a_x96, sqrt_ratio_b_x96, -liquidity, False)
    return get_amount1_delta(sqrt_ratio_a_x96, sqrt_ratio_b_x96, liquidity, True)
