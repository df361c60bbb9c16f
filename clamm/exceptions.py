"""
CLAMM 예외 정의

모든 전제조건 위반은 ValueError 계열로 동기적으로 발생합니다.
상태 변경 작업 중 예외가 발생하면 풀은 진입 시점 상태로 복원됩니다.
"""


class PoolError(ValueError):
    """풀 엔진 예외의 기본 클래스"""


class PoolLockedError(PoolError):
    """다른 상태 변경 작업이 진행 중일 때 호출"""


class AlreadyInitializedError(PoolError):
    """이미 초기화된 풀을 다시 초기화"""


class NotInitializedError(PoolError):
    """초기화되지 않은 풀에 대한 작업"""


class InvalidTickRangeError(PoolError):
    """tick_lower >= tick_upper"""


class TickOutOfRangeError(PoolError):
    """틱이 [MIN_TICK, MAX_TICK] 범위를 벗어남"""


class PriceOutOfRangeError(PoolError):
    """sqrtPriceX96이 [MIN_SQRT_RATIO, MAX_SQRT_RATIO) 범위를 벗어남"""


class TickSpacingError(PoolError):
    """틱이 tick_spacing의 배수가 아님"""


class ZeroAmountError(PoolError):
    """수량이 0인 mint/swap"""


class NegativeAmountError(PoolError):
    """burn/collect 수량이 음수"""


class InvalidPriceLimitError(PoolError):
    """스왑 가격 한도가 잘못된 방향이거나 범위를 벗어남"""


class TickLiquidityOverflowError(PoolError):
    """틱의 총 유동성이 max_liquidity_per_tick 초과"""


class LiquidityUnderflowError(PoolError):
    """보유량보다 많은 유동성 제거"""


class LiquidityOverflowError(PoolError):
    """유동성이 uint128 범위를 초과"""


class NoPositionLiquidityError(PoolError):
    """유동성이 0인 포지션에 대한 poke"""


class InvalidFeeProtocolError(PoolError):
    """프로토콜 수수료 값이 0 또는 4~10이 아님"""


class TransferFailedError(PoolError):
    """자산 계정이 전송을 거부"""


class InsufficientBalanceError(PoolError):
    """자산 계정 잔액 부족"""
