"""
Concentrated Liquidity AMM Engine

온체인 수준 정밀도의 집중화 유동성 풀 상태 전이 엔진.
틱 원장, 초기화된 틱 비트맵, 포지션 원장, 고정소수점 가격 수학과
스왑 루프를 하나의 Pool로 묶어 제공합니다.
"""

__version__ = "0.1.0"
__author__ = "Zekiya"

from .constants import Q96, Q128, FEE_TIERS, TICK_SPACINGS, MIN_TICK, MAX_TICK, MIN_SQRT_RATIO, MAX_SQRT_RATIO
from .pool import Pool
from .token import AssetAccount, Token, TokenAccount
from .core.types import PoolState, TickInfo, PositionInfo, SwapResult
