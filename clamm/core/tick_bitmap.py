"""
Tick Bitmap - 초기화된 틱 인덱스

tick_spacing으로 압축한 틱을 256비트 워드로 묶어 초기화 여부를 비트로 저장합니다.
스왑 루프는 한 번에 한 워드만 스캔하므로 비활성 틱 수와 무관하게 탐색 비용이 제한됩니다.

References:
- Uniswap V3 Core: contracts/libraries/TickBitmap.sol
"""

from typing import Tuple

from ..constants import WORD_SIZE, UINT256_MAX
from ..exceptions import TickSpacingError
from .ledger import Ledger


def position(compressed: int) -> Tuple[int, int]:
    """압축된 틱의 (워드 위치, 비트 위치)

    음수 틱도 floor 의미로 동작합니다 (-1 → 워드 -1, 비트 255).
    """
    return compressed >> 8, compressed % WORD_SIZE


def _most_significant_bit(x: int) -> int:
    return x.bit_length() - 1


def _least_significant_bit(x: int) -> int:
    return (x & -x).bit_length() - 1


class TickBitmap(Ledger[int, int]):
    """워드 위치 → 256비트 마스크"""

    def word(self, word_pos: int) -> int:
        return self.peek(word_pos) or 0

    def is_initialized(self, tick: int, tick_spacing: int) -> bool:
        if tick % tick_spacing != 0:
            return False
        word_pos, bit_pos = position(tick // tick_spacing)
        return bool(self.word(word_pos) & (1 << bit_pos))

    def flip_tick(self, tick: int, tick_spacing: int) -> None:
        """틱의 초기화 비트를 뒤집음

        Raises:
            TickSpacingError: 틱이 tick_spacing의 배수가 아닌 경우
        """
        if tick % tick_spacing != 0:
            raise TickSpacingError(f"틱 {tick}이 틱 간격 {tick_spacing}의 배수가 아닙니다")

        word_pos, bit_pos = position(tick // tick_spacing)
        mask = 1 << bit_pos
        flipped = self.word(word_pos) ^ mask
        if flipped:
            self._store(word_pos, flipped)
        else:
            self._delete(word_pos)

    def next_initialized_tick_within_one_word(
        self,
        tick: int,
        tick_spacing: int,
        lte: bool
    ) -> Tuple[int, bool]:
        """같은 워드 안에서 다음 초기화된 틱 탐색

        Args:
            tick: 시작 틱
            tick_spacing: 틱 간격
            lte: True면 tick 이하(왼쪽), False면 tick 초과(오른쪽) 탐색

        Returns:
            (next_tick, initialized): 초기화된 틱을 찾지 못하면
            워드 경계 틱과 False를 반환
        """
        compressed = tick // tick_spacing

        if lte:
            word_pos, bit_pos = position(compressed)
            # 현재 비트와 그 오른쪽 모든 비트
            mask = (1 << bit_pos) - 1 + (1 << bit_pos)
            masked = self.word(word_pos) & mask

            initialized = masked != 0
            if initialized:
                next_tick = (compressed - (bit_pos - _most_significant_bit(masked))) * tick_spacing
            else:
                next_tick = (compressed - bit_pos) * tick_spacing
        else:
            # 다음 틱부터 시작
            word_pos, bit_pos = position(compressed + 1)
            # 현재 비트와 그 왼쪽 모든 비트
            mask = ~((1 << bit_pos) - 1) & UINT256_MAX
            masked = self.word(word_pos) & mask

            initialized = masked != 0
            if initialized:
                next_tick = (compressed + 1 + (_least_significant_bit(masked) - bit_pos)) * tick_spacing
            else:
                next_tick = (compressed + 1 + (WORD_SIZE - 1 - bit_pos)) * tick_spacing

        return next_tick, initialized
