"""
Ledger - 저널링 키 → 레코드 저장소

틱 테이블, 비트맵, 포지션 테이블, 토큰 잔액이 공유하는 dict 기반 저장소.
checkpoint() 이후 처음 수정되는 키의 원본을 저널에 보관하여
rollback()으로 작업 전 상태를 복원합니다.

사용법:
    ledger.checkpoint()
    try:
        ...  # _entry / _store / _delete로 수정
    except Exception:
        ledger.rollback()
        raise
    else:
        ledger.commit()
"""

import copy
from typing import Callable, Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

K = TypeVar("K")
V = TypeVar("V")

_MISSING = object()


class Ledger(Generic[K, V]):
    """dict 기반 저장소 (중첩 가능한 저널 포함)"""

    def __init__(self):
        self._records: Dict[K, V] = {}
        self._journals: List[Dict[K, object]] = []

    def __contains__(self, key: K) -> bool:
        return key in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[K]:
        return iter(self._records)

    def items(self) -> Iterator[Tuple[K, V]]:
        return iter(self._records.items())

    def peek(self, key: K) -> Optional[V]:
        """레코드 조회 (생성하지 않음)"""
        return self._records.get(key)

    # ==================== Journal ====================

    def checkpoint(self) -> None:
        """새 저널 시작"""
        self._journals.append({})

    def commit(self) -> None:
        """현재 저널 확정. 중첩된 경우 원본을 상위 저널로 병합"""
        journal = self._journals.pop()
        if self._journals:
            parent = self._journals[-1]
            for key, original in journal.items():
                parent.setdefault(key, original)

    def rollback(self) -> None:
        """현재 저널의 모든 변경을 되돌림"""
        journal = self._journals.pop()
        for key, original in journal.items():
            if original is _MISSING:
                self._records.pop(key, None)
            else:
                self._records[key] = original

    def _touch(self, key: K) -> None:
        if self._journals and key not in self._journals[-1]:
            original = self._records.get(key, _MISSING)
            self._journals[-1][key] = original if original is _MISSING else copy.copy(original)

    # ==================== Mutation ====================

    def _entry(self, key: K, factory: Callable[[], V]) -> V:
        """수정용 레코드 접근 (없으면 생성)"""
        self._touch(key)
        record = self._records.get(key)
        if record is None:
            record = factory()
            self._records[key] = record
        return record

    def _store(self, key: K, value: V) -> None:
        self._touch(key)
        self._records[key] = value

    def _delete(self, key: K) -> None:
        self._touch(key)
        self._records.pop(key, None)
