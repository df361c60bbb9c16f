"""
공용 테스트 픽스처
"""

import pytest

from ..math.tick_math import encode_price_sqrt
from ..pool import Pool
from ..token import Token

ALICE = "0xa11ce"
BOB = "0xb0b"

FUNDING = 10 ** 30


@pytest.fixture
def tokens():
    """잔액이 충전된 token0, token1"""
    token0 = Token("TK0", "Token Zero")
    token1 = Token("TK1", "Token One")
    for holder in (ALICE, BOB):
        token0.mint_to(holder, FUNDING)
        token1.mint_to(holder, FUNDING)
    return token0, token1


@pytest.fixture
def pool(tokens):
    """0.30% 수수료 풀 (초기화 전)"""
    token0, token1 = tokens
    return Pool.create(token0, token1, fee=3000)


@pytest.fixture
def initialized_pool(pool):
    """가격 1로 초기화된 풀"""
    pool.initialize(encode_price_sqrt(1, 1))
    return pool
