"""
CLAMM 상수 정의

온체인 수준 정밀도를 위한 상수들:
- Q96: sqrt price 인코딩에 사용 (2^96)
- Q128: fee growth 인코딩에 사용 (2^128)
- FEE_TIERS: 지원되는 수수료 티어
- TICK_SPACINGS: 각 수수료 티어별 틱 간격
"""

from typing import Dict

# Fixed-point 인코딩 상수
RESOLUTION: int = 96
Q96: int = 2 ** 96
Q128: int = 2 ** 128

# 수수료 분모 (hundredths of a bip)
# 3000 / 1_000_000 = 0.30%
FEE_DENOMINATOR: int = 1_000_000

# 수수료 티어
FEE_TIERS: Dict[int, str] = {
    100: "0.01%",
    500: "0.05%",
    3000: "0.30%",
    10000: "1.00%",
}

# 각 수수료 티어별 틱 간격
TICK_SPACINGS: Dict[int, int] = {
    100: 1,
    500: 10,
    3000: 60,
    10000: 200,
}

# 틱 범위 상수
MIN_TICK: int = -887272
MAX_TICK: int = 887272

# get_sqrt_ratio_at_tick(MIN_TICK), get_sqrt_ratio_at_tick(MAX_TICK)
MIN_SQRT_RATIO: int = 4295128739
MAX_SQRT_RATIO: int = 1461446703485210103287273052203988822378723970342

# 비트맵 워드 크기
WORD_SIZE: int = 256

# 정수 타입 경계
UINT256_MAX: int = 2 ** 256 - 1
UINT160_MAX: int = 2 ** 160 - 1
UINT128_MAX: int = 2 ** 128 - 1
INT128_MIN: int = -(2 ** 127)
INT128_MAX: int = 2 ** 127 - 1
