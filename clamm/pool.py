"""
Concentrated Liquidity Pool Engine

단일 토큰 쌍, 단일 수수료 티어의 집중화 유동성 풀.
틱 원장, 비트맵, 포지션 원장을 조합하여 다음 작업을 제공합니다:
- initialize: 시작 가격 설정
- mint / burn: 가격 범위에 유동성 추가/제거
- collect: 미수령 토큰 인출
- swap: 초기화된 틱 사이를 건너뛰며 스왑 실행

모든 상태 변경 작업은 잠금 안에서 실행되며, 예외가 발생하면
풀 상태와 모든 원장(그리고 저널을 지원하는 자산 계정)이 작업 전 상태로 복원됩니다.
토큰 전송은 상태 갱신이 모두 끝난 뒤 마지막에 요청합니다.

References:
- Uniswap V3 Core: contracts/UniswapV3Pool.sol
- 백서 Section 6: Implementing Concentrated Liquidity
"""

import dataclasses
import hashlib
import logging
from contextlib import contextmanager
from itertools import accumulate
from typing import List, Optional, Tuple

import pandas as pd

from .config import settings, Settings
from .constants import MIN_TICK, MAX_TICK, MIN_SQRT_RATIO, MAX_SQRT_RATIO
from .core.position import PositionTable, update as update_position
from .core.tick import TickTable, tick_spacing_to_max_liquidity_per_tick
from .core.tick_bitmap import TickBitmap
from .core.types import PoolState, PositionInfo, SwapResult, TickInfo
from .exceptions import (
    AlreadyInitializedError,
    InvalidFeeProtocolError,
    InvalidPriceLimitError,
    InvalidTickRangeError,
    NegativeAmountError,
    NotInitializedError,
    PoolLockedError,
    TickOutOfRangeError,
    TickSpacingError,
    TransferFailedError,
    ZeroAmountError,
)
from .math.fee_math import fee_growth_for_step
from .math.liquidity_math import add_delta, get_amounts_for_liquidity, get_liquidity_for_amounts
from .math.sqrt_price_math import (
    get_amount0_delta_signed,
    get_amount1_delta_signed,
    sqrt_price_x96_to_price,
)
from .math.swap_math import compute_swap_step
from .math.tick_math import (
    get_sqrt_ratio_at_tick,
    get_tick_at_sqrt_ratio,
    get_tick_spacing_for_fee,
    tick_to_price,
)
from .token import AssetAccount, Token

logger = logging.getLogger(__name__)


class Pool:
    """집중화 유동성 풀 엔진

    사용법:
        pool = Pool.create(Token("WETH"), Token("USDC"), fee=3000)
        pool.initialize(encode_price_sqrt(1, 1))
        amount0, amount1 = pool.mint("alice", -60, 60, 10**18)
        result = pool.swap("bob", True, 10**15, MIN_SQRT_RATIO + 1)
    """

    def __init__(
        self,
        token0: AssetAccount,
        token1: AssetAccount,
        fee: int,
        tick_spacing: int,
        address: str
    ):
        """
        Args:
            token0: 풀 주소에 바인딩된 token0 자산 계정
            token1: 풀 주소에 바인딩된 token1 자산 계정
            fee: 수수료 (1e6 분모, 예: 3000 = 0.30%)
            tick_spacing: 틱 간격
            address: 풀 주소 (자산 계정의 보유자)
        """
        if tick_spacing <= 0:
            raise ValueError(f"틱 간격은 양수여야 합니다: {tick_spacing}")
        if not 0 <= fee < 1_000_000:
            raise ValueError(f"수수료는 0 이상 1e6 미만이어야 합니다: {fee}")

        self.token0 = token0
        self.token1 = token1
        self.fee = fee
        self.tick_spacing = tick_spacing
        self.address = address
        self.max_liquidity_per_tick = tick_spacing_to_max_liquidity_per_tick(tick_spacing)

        self.state = PoolState()
        self.ticks = TickTable()
        self.tick_bitmap = TickBitmap()
        self.positions = PositionTable()

    @classmethod
    def create(
        cls,
        token0: Token,
        token1: Token,
        fee: int = 3000,
        tick_spacing: Optional[int] = None,
        address: Optional[str] = None
    ) -> "Pool":
        """인메모리 Token 두 개로 풀 생성 (계정 바인딩 및 주소 파생)"""
        if tick_spacing is None:
            tick_spacing = get_tick_spacing_for_fee(fee)
        if not address:
            addr_hash = hashlib.sha3_256(
                f"clamm:{token0.symbol}:{token1.symbol}:{fee}:{tick_spacing}".encode()
            ).digest()
            address = f"0x{addr_hash[-20:].hex()}"
        return cls(token0.account(address), token1.account(address), fee, tick_spacing, address)

    @classmethod
    def from_settings(
        cls,
        token0: Token,
        token1: Token,
        address: Optional[str] = None,
        config: Settings = settings
    ) -> "Pool":
        """환경 설정(CLAMM_FEE_TIER, CLAMM_TICK_SPACING)으로 풀 생성"""
        return cls.create(token0, token1, config.FEE_TIER, config.get_tick_spacing(), address)

    # ==================== Lock ====================

    @contextmanager
    def _lock(self, operation: str, discard: bool = False, initialized: bool = True):
        """상태 변경 작업 가드

        진행 중인 작업이 있으면 즉시 실패합니다. 어떤 예외(BaseException 포함)로
        빠져나가거나 discard=True이면 진입 시점 상태로 복원하고 잠금을 해제합니다.
        """
        if initialized and self.state.sqrt_price_x96 == 0:
            raise NotInitializedError("풀이 초기화되지 않았습니다")
        if not self.state.unlocked:
            raise PoolLockedError(f"풀이 잠겨 있습니다 ({operation})")

        snapshot = dataclasses.replace(self.state)
        journaled = self._journaled()
        for ledger in journaled:
            ledger.checkpoint()
        self.state.unlocked = False

        try:
            yield
        except BaseException as e:
            self._restore(journaled, snapshot)
            logger.warning(
                "Operation rolled back: %s - %s",
                type(e).__name__,
                str(e),
                extra={"event": "pool.rollback", "pool": self.address[:10], "operation": operation},
            )
            raise

        if discard:
            self._restore(journaled, snapshot)
        else:
            for ledger in journaled:
                ledger.commit()
            self.state.unlocked = True

    def _restore(self, journaled: list, snapshot: PoolState) -> None:
        for ledger in reversed(journaled):
            ledger.rollback()
        self.state = snapshot

    def _journaled(self) -> list:
        journaled = [self.ticks, self.tick_bitmap, self.positions]
        for account in (self.token0, self.token1):
            if hasattr(account, "checkpoint"):
                journaled.append(account)
        return journaled

    # ==================== Initialize ====================

    def initialize(self, sqrt_price_x96: int) -> int:
        """시작 가격 설정 (한 번만 가능)

        Args:
            sqrt_price_x96: 시작 sqrtPriceX96

        Returns:
            시작 틱

        Raises:
            AlreadyInitializedError: 이미 초기화된 경우
            PriceOutOfRangeError: 가격이 유효 범위를 벗어난 경우
        """
        if self.state.sqrt_price_x96 != 0:
            raise AlreadyInitializedError("풀이 이미 초기화되었습니다")

        with self._lock("initialize", initialized=False):
            tick = get_tick_at_sqrt_ratio(sqrt_price_x96)
            self.state.sqrt_price_x96 = sqrt_price_x96
            self.state.tick = tick

        logger.info(
            "Pool initialized",
            extra={
                "event": "pool.initialize",
                "pool": self.address[:10],
                "sqrt_price_x96": sqrt_price_x96,
                "tick": tick,
            }
        )
        return tick

    # ==================== Position Management ====================

    def _check_ticks(self, tick_lower: int, tick_upper: int) -> None:
        if tick_lower >= tick_upper:
            raise InvalidTickRangeError(
                f"tick_lower는 tick_upper보다 작아야 합니다: {tick_lower} >= {tick_upper}"
            )
        if tick_lower < MIN_TICK:
            raise TickOutOfRangeError(f"tick_lower가 범위를 벗어났습니다: {tick_lower}")
        if tick_upper > MAX_TICK:
            raise TickOutOfRangeError(f"tick_upper가 범위를 벗어났습니다: {tick_upper}")
        if tick_lower % self.tick_spacing or tick_upper % self.tick_spacing:
            raise TickSpacingError(
                f"틱 범위 [{tick_lower}, {tick_upper}]가 틱 간격 {self.tick_spacing}에 맞지 않습니다"
            )

    def _update_position(
        self,
        owner: str,
        tick_lower: int,
        tick_upper: int,
        liquidity_delta: int
    ) -> PositionInfo:
        """틱, 비트맵, 포지션 원장 갱신"""
        state = self.state
        position = self.positions.get(owner, tick_lower, tick_upper)

        flipped_lower = False
        flipped_upper = False
        if liquidity_delta != 0:
            flipped_lower = self.ticks.update(
                tick_lower, state.tick, liquidity_delta,
                state.fee_growth_global_0_x128, state.fee_growth_global_1_x128,
                False, self.max_liquidity_per_tick,
            )
            flipped_upper = self.ticks.update(
                tick_upper, state.tick, liquidity_delta,
                state.fee_growth_global_0_x128, state.fee_growth_global_1_x128,
                True, self.max_liquidity_per_tick,
            )
            if flipped_lower:
                self.tick_bitmap.flip_tick(tick_lower, self.tick_spacing)
            if flipped_upper:
                self.tick_bitmap.flip_tick(tick_upper, self.tick_spacing)

        fee_growth_inside_0, fee_growth_inside_1 = self.ticks.get_fee_growth_inside(
            tick_lower, tick_upper, state.tick,
            state.fee_growth_global_0_x128, state.fee_growth_global_1_x128,
        )
        update_position(position, liquidity_delta, fee_growth_inside_0, fee_growth_inside_1)

        # 제거로 비활성화된 틱은 기록 삭제
        if liquidity_delta < 0:
            if flipped_lower:
                self.ticks.clear(tick_lower)
            if flipped_upper:
                self.ticks.clear(tick_upper)

        return position

    def _modify_position(
        self,
        owner: str,
        tick_lower: int,
        tick_upper: int,
        liquidity_delta: int
    ) -> Tuple[PositionInfo, int, int]:
        """포지션 유동성 변경 공통 루틴

        Returns:
            (position, amount0, amount1): 양수는 풀이 받을 양, 음수는 풀이 내줄 양
        """
        self._check_ticks(tick_lower, tick_upper)

        position = self._update_position(owner, tick_lower, tick_upper, liquidity_delta)

        amount0 = 0
        amount1 = 0
        if liquidity_delta != 0:
            state = self.state
            sqrt_lower = get_sqrt_ratio_at_tick(tick_lower)
            sqrt_upper = get_sqrt_ratio_at_tick(tick_upper)

            if state.tick < tick_lower:
                # 가격이 범위 아래: token0만 필요
                amount0 = get_amount0_delta_signed(sqrt_lower, sqrt_upper, liquidity_delta)
            elif state.tick < tick_upper:
                # 가격이 범위 내: 양쪽 토큰, 활성 유동성 갱신
                amount0 = get_amount0_delta_signed(state.sqrt_price_x96, sqrt_upper, liquidity_delta)
                amount1 = get_amount1_delta_signed(sqrt_lower, state.sqrt_price_x96, liquidity_delta)
                state.liquidity = add_delta(state.liquidity, liquidity_delta)
            else:
                # 가격이 범위 위: token1만 필요
                amount1 = get_amount1_delta_signed(sqrt_lower, sqrt_upper, liquidity_delta)

        return position, amount0, amount1

    def mint(
        self,
        recipient: str,
        tick_lower: int,
        tick_upper: int,
        amount: int,
        sender: Optional[str] = None
    ) -> Tuple[int, int]:
        """recipient의 포지션에 유동성 추가

        Args:
            recipient: 포지션 소유자
            tick_lower: 하한 틱
            tick_upper: 상한 틱
            amount: 추가할 유동성
            sender: 토큰을 지불하는 주소 (기본값 recipient)

        Returns:
            (amount0, amount1) 풀에 지불한 토큰 수량
        """
        if amount <= 0:
            raise ZeroAmountError(f"유동성은 양수여야 합니다: {amount}")

        with self._lock("mint"):
            _, amount0, amount1 = self._modify_position(recipient, tick_lower, tick_upper, amount)

            payer = sender or recipient
            self._receive(self.token0, payer, amount0)
            self._receive(self.token1, payer, amount1)

        logger.info(
            "Position minted",
            extra={
                "event": "pool.mint",
                "pool": self.address[:10],
                "owner": recipient,
                "range": f"[{tick_lower}, {tick_upper}]",
                "liquidity": amount,
                "amount0": amount0,
                "amount1": amount1,
            }
        )
        return amount0, amount1

    def burn(
        self,
        tick_lower: int,
        tick_upper: int,
        amount: int,
        sender: str
    ) -> Tuple[int, int]:
        """sender 포지션에서 유동성 제거

        돌려받을 토큰은 즉시 전송하지 않고 tokens_owed에 적립하며
        collect로 인출합니다. amount=0이면 수수료만 갱신(poke)합니다.

        Returns:
            (amount0, amount1) 포지션에 적립된 토큰 수량
        """
        if amount < 0:
            raise NegativeAmountError(f"제거할 유동성은 음수일 수 없습니다: {amount}")

        with self._lock("burn"):
            position, amount0, amount1 = self._modify_position(sender, tick_lower, tick_upper, -amount)
            amount0 = -amount0
            amount1 = -amount1

            if amount0 > 0 or amount1 > 0:
                position.tokens_owed_0 += amount0
                position.tokens_owed_1 += amount1

        logger.info(
            "Position burned",
            extra={
                "event": "pool.burn",
                "pool": self.address[:10],
                "owner": sender,
                "range": f"[{tick_lower}, {tick_upper}]",
                "liquidity": amount,
                "amount0": amount0,
                "amount1": amount1,
            }
        )
        return amount0, amount1

    def collect(
        self,
        recipient: str,
        tick_lower: int,
        tick_upper: int,
        amount0_requested: int,
        amount1_requested: int,
        sender: str
    ) -> Tuple[int, int]:
        """sender 포지션의 미수령 토큰을 recipient에게 인출

        각 토큰마다 min(요청량, 미수령량)을 지급합니다.

        Returns:
            (amount0, amount1) 지급한 토큰 수량
        """
        if amount0_requested < 0 or amount1_requested < 0:
            raise NegativeAmountError("요청량은 음수일 수 없습니다")

        with self._lock("collect"):
            position = self.positions.get(sender, tick_lower, tick_upper)

            amount0 = min(amount0_requested, position.tokens_owed_0)
            amount1 = min(amount1_requested, position.tokens_owed_1)

            position.tokens_owed_0 -= amount0
            position.tokens_owed_1 -= amount1

            self._pay(self.token0, recipient, amount0)
            self._pay(self.token1, recipient, amount1)

        logger.info(
            "Fees collected",
            extra={
                "event": "pool.collect",
                "pool": self.address[:10],
                "owner": sender,
                "recipient": recipient,
                "range": f"[{tick_lower}, {tick_upper}]",
                "amount0": amount0,
                "amount1": amount1,
            }
        )
        return amount0, amount1

    # ==================== Swap ====================

    def swap(
        self,
        recipient: str,
        zero_for_one: bool,
        amount_specified: int,
        sqrt_price_limit_x96: int,
        sender: Optional[str] = None
    ) -> SwapResult:
        """스왑 실행

        Args:
            recipient: 출력 토큰을 받을 주소
            zero_for_one: True면 token0 → token1 (가격 하락)
            amount_specified: 양수면 exact input, 음수면 exact output
            sqrt_price_limit_x96: 넘어갈 수 없는 가격 한도
            sender: 입력 토큰을 지불하는 주소 (기본값 recipient)

        Returns:
            SwapResult (트레이더 기준 부호: 음수 지불, 양수 수령)
        """
        with self._lock("swap"):
            result = self._swap(zero_for_one, amount_specified, sqrt_price_limit_x96)

            payer = sender or recipient
            if zero_for_one:
                self._receive(self.token0, payer, -result.amount0)
                self._pay(self.token1, recipient, result.amount1)
            else:
                self._receive(self.token1, payer, -result.amount1)
                self._pay(self.token0, recipient, result.amount0)

        logger.info(
            "Swap executed",
            extra={
                "event": "pool.swap",
                "pool": self.address[:10],
                "recipient": recipient,
                "zero_for_one": zero_for_one,
                "amount0": result.amount0,
                "amount1": result.amount1,
                "tick": result.tick,
            }
        )
        return result

    def quote(
        self,
        zero_for_one: bool,
        amount_specified: int,
        sqrt_price_limit_x96: int
    ) -> SwapResult:
        """스왑 결과 미리보기 (상태 변경 없음, 토큰 전송 없음)"""
        with self._lock("quote", discard=True):
            return self._swap(zero_for_one, amount_specified, sqrt_price_limit_x96)

    def _swap(
        self,
        zero_for_one: bool,
        amount_specified: int,
        sqrt_price_limit_x96: int
    ) -> SwapResult:
        """스왑 루프 실행 및 상태 반영 (토큰 전송 제외)"""
        if amount_specified == 0:
            raise ZeroAmountError("스왑 수량은 0일 수 없습니다")

        state = self.state
        if zero_for_one:
            if not MIN_SQRT_RATIO < sqrt_price_limit_x96 <= state.sqrt_price_x96:
                raise InvalidPriceLimitError(
                    f"가격 한도는 (MIN_SQRT_RATIO, 현재가] 범위여야 합니다: {sqrt_price_limit_x96}"
                )
            fee_protocol = state.fee_protocol % 16
        else:
            if not state.sqrt_price_x96 <= sqrt_price_limit_x96 < MAX_SQRT_RATIO:
                raise InvalidPriceLimitError(
                    f"가격 한도는 [현재가, MAX_SQRT_RATIO) 범위여야 합니다: {sqrt_price_limit_x96}"
                )
            fee_protocol = state.fee_protocol >> 4

        exact_input = amount_specified > 0

        amount_specified_remaining = amount_specified
        amount_calculated = 0
        sqrt_price_x96 = state.sqrt_price_x96
        tick = state.tick
        liquidity = state.liquidity
        fee_growth_global_x128 = (
            state.fee_growth_global_0_x128 if zero_for_one else state.fee_growth_global_1_x128
        )
        protocol_fee = 0

        # 남은 수량을 모두 소비하거나 가격 한도에 도달할 때까지
        while amount_specified_remaining != 0 and sqrt_price_x96 != sqrt_price_limit_x96:
            sqrt_price_start_x96 = sqrt_price_x96

            tick_next, initialized = self.tick_bitmap.next_initialized_tick_within_one_word(
                tick, self.tick_spacing, zero_for_one
            )
            tick_next = max(MIN_TICK, min(MAX_TICK, tick_next))
            sqrt_price_next_x96 = get_sqrt_ratio_at_tick(tick_next)

            if zero_for_one:
                target = max(sqrt_price_next_x96, sqrt_price_limit_x96)
            else:
                target = min(sqrt_price_next_x96, sqrt_price_limit_x96)

            step = compute_swap_step(
                sqrt_price_x96, target, liquidity, amount_specified_remaining, self.fee
            )
            sqrt_price_x96 = step.sqrt_price_next_x96

            if exact_input:
                amount_specified_remaining -= step.amount_in + step.fee_amount
                amount_calculated -= step.amount_out
            else:
                amount_specified_remaining += step.amount_out
                amount_calculated += step.amount_in + step.fee_amount

            fee_amount = step.fee_amount
            if fee_protocol > 0:
                delta = fee_amount // fee_protocol
                fee_amount -= delta
                protocol_fee += delta

            if liquidity > 0:
                fee_growth_global_x128 += fee_growth_for_step(fee_amount, liquidity)

            logger.debug(
                "Swap step",
                extra={
                    "event": "pool.swap_step",
                    "tick_next": tick_next,
                    "initialized": initialized,
                    "amount_in": step.amount_in,
                    "amount_out": step.amount_out,
                    "fee_amount": step.fee_amount,
                }
            )

            if sqrt_price_x96 == sqrt_price_next_x96:
                # 다음 틱에 정확히 도달
                if initialized:
                    if zero_for_one:
                        liquidity_net = self.ticks.cross(
                            tick_next, fee_growth_global_x128, state.fee_growth_global_1_x128
                        )
                        liquidity_net = -liquidity_net
                    else:
                        liquidity_net = self.ticks.cross(
                            tick_next, state.fee_growth_global_0_x128, fee_growth_global_x128
                        )
                    liquidity = add_delta(liquidity, liquidity_net)

                tick = tick_next - 1 if zero_for_one else tick_next
            elif sqrt_price_x96 != sqrt_price_start_x96:
                # 틱 사이에서 멈춤: 가격에서 틱 재계산
                tick = get_tick_at_sqrt_ratio(sqrt_price_x96)

        # 상태 반영 (틱은 바뀐 경우에만)
        state.sqrt_price_x96 = sqrt_price_x96
        if tick != state.tick:
            state.tick = tick

        if liquidity != state.liquidity:
            state.liquidity = liquidity

        if zero_for_one:
            state.fee_growth_global_0_x128 = fee_growth_global_x128
            state.protocol_fees_0 += protocol_fee
        else:
            state.fee_growth_global_1_x128 = fee_growth_global_x128
            state.protocol_fees_1 += protocol_fee

        # 풀 기준 (양수 = 풀이 받음)
        if zero_for_one == exact_input:
            amount0 = amount_specified - amount_specified_remaining
            amount1 = amount_calculated
        else:
            amount0 = amount_calculated
            amount1 = amount_specified - amount_specified_remaining

        return SwapResult(-amount0, -amount1, state.sqrt_price_x96, state.liquidity, state.tick)

    # ==================== Protocol Fees ====================

    def set_fee_protocol(self, fee_protocol0: int, fee_protocol1: int) -> None:
        """프로토콜 수수료 설정 (각 0 또는 4~10, 스왑 수수료의 1/n)"""
        for value in (fee_protocol0, fee_protocol1):
            if not (value == 0 or 4 <= value <= 10):
                raise InvalidFeeProtocolError(f"프로토콜 수수료는 0 또는 4~10이어야 합니다: {value}")

        with self._lock("set_fee_protocol"):
            old = self.state.fee_protocol
            self.state.fee_protocol = fee_protocol0 + (fee_protocol1 << 4)

        logger.info(
            "Protocol fee updated",
            extra={
                "event": "pool.set_fee_protocol",
                "pool": self.address[:10],
                "old": old,
                "new": self.state.fee_protocol,
            }
        )

    def collect_protocol(
        self,
        recipient: str,
        amount0_requested: int,
        amount1_requested: int
    ) -> Tuple[int, int]:
        """적립된 프로토콜 수수료 인출"""
        with self._lock("collect_protocol"):
            amount0 = min(amount0_requested, self.state.protocol_fees_0)
            amount1 = min(amount1_requested, self.state.protocol_fees_1)

            self.state.protocol_fees_0 -= amount0
            self.state.protocol_fees_1 -= amount1

            self._pay(self.token0, recipient, amount0)
            self._pay(self.token1, recipient, amount1)

        logger.info(
            "Protocol fees collected",
            extra={
                "event": "pool.collect_protocol",
                "pool": self.address[:10],
                "recipient": recipient,
                "amount0": amount0,
                "amount1": amount1,
            }
        )
        return amount0, amount1

    # ==================== Settlement ====================

    def _receive(self, account: AssetAccount, payer: str, amount: int) -> None:
        if amount > 0 and not account.transfer_from(payer, self.address, amount):
            raise TransferFailedError(f"{account}: {payer} → {self.address} {amount} 전송 실패")

    def _pay(self, account: AssetAccount, recipient: str, amount: int) -> None:
        if amount > 0 and not account.transfer(recipient, amount):
            raise TransferFailedError(f"{account}: {self.address} → {recipient} {amount} 전송 실패")

    # ==================== Views ====================

    @property
    def price(self) -> float:
        """현재 가격 (token1/token0, 소수점 보정 없음)"""
        return sqrt_price_x96_to_price(self.state.sqrt_price_x96)

    def get_position(self, owner: str, tick_lower: int, tick_upper: int) -> PositionInfo:
        return self.positions.find(owner, tick_lower, tick_upper)

    def positions_of(self, owner: str) -> List[PositionInfo]:
        return self.positions.owned_by(owner)

    def position_amounts(self, owner: str, tick_lower: int, tick_upper: int) -> Tuple[int, int]:
        """포지션 유동성의 현재가 기준 토큰 수량 (내림, tokens_owed 제외)

        가격이 범위 안에 있으면 전량 burn 시 적립될 수량과 같습니다.
        """
        position = self.positions.find(owner, tick_lower, tick_upper)
        return get_amounts_for_liquidity(
            self.state.sqrt_price_x96,
            get_sqrt_ratio_at_tick(tick_lower),
            get_sqrt_ratio_at_tick(tick_upper),
            position.liquidity,
        )

    def liquidity_for_amounts(
        self,
        tick_lower: int,
        tick_upper: int,
        amount0: int,
        amount1: int
    ) -> int:
        """현재가에서 주어진 토큰 수량으로 민트 가능한 최대 유동성

        반환값으로 mint하면 지불액은 각각 amount0, amount1 이하입니다.
        """
        if self.state.sqrt_price_x96 == 0:
            raise NotInitializedError("풀이 초기화되지 않았습니다")
        self._check_ticks(tick_lower, tick_upper)
        return get_liquidity_for_amounts(
            self.state.sqrt_price_x96,
            get_sqrt_ratio_at_tick(tick_lower),
            get_sqrt_ratio_at_tick(tick_upper),
            amount0,
            amount1,
        )

    def get_tick(self, tick: int) -> TickInfo:
        return self.ticks.get(tick)

    def liquidity_net_sum(self) -> int:
        """모든 틱의 liquidity_net 합 (항상 0)"""
        return sum(info.liquidity_net for _, info in self.ticks.items())

    def ticks_frame(self, decimal0: int = 18, decimal1: int = 18) -> pd.DataFrame:
        """틱 원장을 DataFrame으로 변환

        Columns:
            tick, price, liquidity_gross, liquidity_net,
            fee_growth_outside_0_x128, fee_growth_outside_1_x128,
            active_liquidity (해당 틱 바로 위 구간의 활성 유동성)
        """
        columns = [
            "tick", "price", "liquidity_gross", "liquidity_net",
            "fee_growth_outside_0_x128", "fee_growth_outside_1_x128",
        ]
        rows = [
            {
                "tick": tick,
                "price": tick_to_price(tick, decimal0, decimal1),
                "liquidity_gross": info.liquidity_gross,
                "liquidity_net": info.liquidity_net,
                "fee_growth_outside_0_x128": info.fee_growth_outside_0_x128,
                "fee_growth_outside_1_x128": info.fee_growth_outside_1_x128,
            }
            for tick, info in sorted(self.ticks.items())
        ]
        df = pd.DataFrame(rows, columns=columns)
        df["active_liquidity"] = list(accumulate(row["liquidity_net"] for row in rows))
        return df
