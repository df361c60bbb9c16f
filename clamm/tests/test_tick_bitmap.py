"""
Tick Bitmap 테스트

워드 경계와 음수 틱을 포함한 초기화 비트 탐색을 검증합니다.
"""

import pytest

from ..core.tick_bitmap import TickBitmap, position
from ..exceptions import TickSpacingError

INITIALIZED = [-200, -55, -4, 70, 78, 84, 139, 240, 535]


@pytest.fixture
def bitmap():
    bm = TickBitmap()
    for tick in INITIALIZED:
        bm.flip_tick(tick, 1)
    return bm


class TestPosition:
    """압축 틱 → (워드, 비트)"""

    def test_positive(self):
        assert position(0) == (0, 0)
        assert position(255) == (0, 255)
        assert position(256) == (1, 0)

    def test_negative(self):
        assert position(-1) == (-1, 255)
        assert position(-256) == (-1, 0)
        assert position(-257) == (-2, 255)


class TestFlipTick:
    """flip_tick / is_initialized"""

    def test_false_at_start(self):
        assert not TickBitmap().is_initialized(1, 1)

    def test_flip_and_flip_back(self):
        bm = TickBitmap()
        bm.flip_tick(1, 1)
        assert bm.is_initialized(1, 1)
        bm.flip_tick(1, 1)
        assert not bm.is_initialized(1, 1)
        assert len(bm) == 0

    def test_only_affects_given_tick(self):
        bm = TickBitmap()
        bm.flip_tick(-230, 1)
        assert bm.is_initialized(-230, 1)
        assert not bm.is_initialized(-231, 1)
        assert not bm.is_initialized(-229, 1)
        assert not bm.is_initialized(-230 + 256, 1)
        assert not bm.is_initialized(-230 - 256, 1)

    def test_spacing(self):
        bm = TickBitmap()
        bm.flip_tick(-120, 60)
        assert bm.is_initialized(-120, 60)
        assert bm.word(-1) == 1 << 254

    def test_not_multiple_of_spacing(self):
        with pytest.raises(TickSpacingError):
            TickBitmap().flip_tick(61, 60)


class TestNextInitializedTickGreaterThan:
    """lte=False: tick 초과 방향"""

    def test_next_to_the_right(self, bitmap):
        assert bitmap.next_initialized_tick_within_one_word(78, 1, False) == (84, True)

    def test_from_below_initialized(self, bitmap):
        assert bitmap.next_initialized_tick_within_one_word(77, 1, False) == (78, True)

    def test_negative(self, bitmap):
        assert bitmap.next_initialized_tick_within_one_word(-56, 1, False) == (-55, True)

    def test_word_boundary_uninitialized(self, bitmap):
        assert bitmap.next_initialized_tick_within_one_word(255, 1, False) == (511, False)

    def test_next_word_negative(self, bitmap):
        assert bitmap.next_initialized_tick_within_one_word(-257, 1, False) == (-200, True)

    def test_does_not_exceed_boundary(self, bitmap):
        assert bitmap.next_initialized_tick_within_one_word(508, 1, False) == (511, False)

    def test_skips_entire_word(self, bitmap):
        assert bitmap.next_initialized_tick_within_one_word(329, 1, False) == (511, False)

    def test_initialized_in_next_word(self, bitmap):
        assert bitmap.next_initialized_tick_within_one_word(511, 1, False) == (535, True)


class TestNextInitializedTickLessThanOrEqual:
    """lte=True: tick 이하 방향"""

    def test_same_tick_if_initialized(self, bitmap):
        assert bitmap.next_initialized_tick_within_one_word(78, 1, True) == (78, True)

    def test_to_the_left(self, bitmap):
        assert bitmap.next_initialized_tick_within_one_word(79, 1, True) == (78, True)

    def test_word_boundary_uninitialized(self, bitmap):
        assert bitmap.next_initialized_tick_within_one_word(258, 1, True) == (256, False)

    def test_at_word_boundary(self, bitmap):
        assert bitmap.next_initialized_tick_within_one_word(256, 1, True) == (256, False)

    def test_left_of_word_boundary(self, bitmap):
        assert bitmap.next_initialized_tick_within_one_word(72, 1, True) == (70, True)

    def test_negative_word_boundary(self, bitmap):
        assert bitmap.next_initialized_tick_within_one_word(-257, 1, True) == (-512, False)

    def test_entire_empty_word(self, bitmap):
        assert bitmap.next_initialized_tick_within_one_word(1023, 1, True) == (768, False)

    def test_halfway_empty_word(self, bitmap):
        assert bitmap.next_initialized_tick_within_one_word(900, 1, True) == (768, False)

    def test_boundary_is_initialized(self):
        bm = TickBitmap()
        bm.flip_tick(329, 1)
        assert bm.next_initialized_tick_within_one_word(456, 1, True) == (329, True)

    def test_negative_tick_with_spacing(self):
        """음수 틱은 0이 아닌 음의 무한대 방향으로 압축"""
        bm = TickBitmap()
        bm.flip_tick(-60, 60)
        assert bm.next_initialized_tick_within_one_word(-1, 60, True) == (-60, True)
        assert bm.next_initialized_tick_within_one_word(0, 60, True) == (0, False)
