"""
State layer for the pool engine

풀 엔진이 소유하는 영속 원장들:
- types: 풀/틱/포지션 레코드
- ledger: 저널링 키 → 레코드 저장소
- tick: 틱 원장
- tick_bitmap: 초기화된 틱 인덱스
- position: 포지션 원장
"""

from .types import PoolState, TickInfo, PositionInfo, SwapResult
from .ledger import Ledger
from .tick import TickTable, tick_spacing_to_max_liquidity_per_tick
from .tick_bitmap import TickBitmap
from .position import PositionTable, position_key
