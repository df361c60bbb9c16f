"""
Full Math - 전체 정밀도 곱셈/나눗셈

Python 정수는 오버플로우가 없으므로 (a * b) 중간값을 그대로 사용합니다.
결과는 512비트 중간 정밀도를 사용하는 온체인 mulDiv와 동일합니다.

References:
- Uniswap V3 Core: contracts/libraries/FullMath.sol
"""

from ..constants import UINT256_MAX


def mul_div(a: int, b: int, denominator: int) -> int:
    """(a * b) / denominator 내림

    Raises:
        ZeroDivisionError: denominator가 0인 경우
        OverflowError: 결과가 uint256 범위를 초과하는 경우
    """
    if denominator == 0:
        raise ZeroDivisionError("mul_div: denominator가 0입니다")
    result = (a * b) // denominator
    if result > UINT256_MAX:
        raise OverflowError("mul_div: 결과가 uint256 범위를 초과합니다")
    return result


def mul_div_rounding_up(a: int, b: int, denominator: int) -> int:
    """(a * b) / denominator 올림"""
    result = mul_div(a, b, denominator)
    if (a * b) % denominator > 0:
        if result >= UINT256_MAX:
            raise OverflowError("mul_div_rounding_up: 결과가 uint256 범위를 초과합니다")
        result += 1
    return result


def div_rounding_up(numerator: int, denominator: int) -> int:
    """numerator / denominator 올림"""
    result = numerator // denominator
    if numerator % denominator > 0:
        result += 1
    return result
