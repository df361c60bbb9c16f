"""
자산 계정 - 풀이 호출하는 외부 토큰 전송 인터페이스

풀은 토큰 전송을 구현하지 않고 AssetAccount 프로토콜만 호출합니다.
Token은 시뮬레이션과 테스트에 쓰는 인메모리 잔액 원장입니다.
"""

import logging
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from .core.ledger import Ledger
from .exceptions import InsufficientBalanceError

logger = logging.getLogger(__name__)


@runtime_checkable
class AssetAccount(Protocol):
    """풀 주소에 바인딩된 토큰 계정

    - transfer: 풀 잔액에서 to로 전송
    - transfer_from: sender 잔액에서 to로 전송
    실패 시 False를 반환하거나 예외를 발생시킵니다.
    """

    def transfer(self, to: str, amount: int) -> bool:
        ...

    def transfer_from(self, sender: str, to: str, amount: int) -> bool:
        ...


class Balances(Ledger[str, int]):
    """주소 → 잔액"""

    def balance_of(self, holder: str) -> int:
        return self.peek(holder) or 0

    def move(self, sender: str, to: str, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"전송량은 음수일 수 없습니다: {amount}")
        balance = self.balance_of(sender)
        if balance < amount:
            raise InsufficientBalanceError(f"잔액 부족: {sender} 보유 {balance} < 요청 {amount}")
        self._store(sender, balance - amount)
        self._store(to, self.balance_of(to) + amount)

    def credit(self, holder: str, amount: int) -> None:
        self._store(holder, self.balance_of(holder) + amount)


@dataclass
class Token:
    """인메모리 ERC20 스타일 토큰"""
    symbol: str
    name: str = ""
    decimals: int = 18
    balances: Balances = field(default_factory=Balances, repr=False)

    def balance_of(self, holder: str) -> int:
        return self.balances.balance_of(holder)

    def mint_to(self, holder: str, amount: int) -> None:
        """테스트/시뮬레이션용 발행"""
        self.balances.credit(holder, amount)

    def account(self, holder: str) -> "TokenAccount":
        """holder 주소에 바인딩된 AssetAccount"""
        return TokenAccount(self, holder)


class TokenAccount:
    """Token을 특정 보유자(풀)에 바인딩한 AssetAccount 구현

    승인(allowance) 없이 transfer_from을 허용합니다.
    checkpoint/commit/rollback을 제공하므로 풀 작업이 실패하면 전송도 되돌려집니다.
    """

    def __init__(self, token: Token, holder: str):
        self.token = token
        self.holder = holder

    def __repr__(self) -> str:
        return f"TokenAccount({self.token.symbol}, {self.holder})"

    def transfer(self, to: str, amount: int) -> bool:
        self.token.balances.move(self.holder, to, amount)
        logger.debug(
            "Token transfer",
            extra={"event": "token.transfer", "token": self.token.symbol, "to": to, "amount": amount}
        )
        return True

    def transfer_from(self, sender: str, to: str, amount: int) -> bool:
        self.token.balances.move(sender, to, amount)
        logger.debug(
            "Token transfer_from",
            extra={
                "event": "token.transfer_from",
                "token": self.token.symbol,
                "from": sender,
                "to": to,
                "amount": amount,
            }
        )
        return True

    def checkpoint(self) -> None:
        self.token.balances.checkpoint()

    def commit(self) -> None:
        self.token.balances.commit()

    def rollback(self) -> None:
        self.token.balances.rollback()
