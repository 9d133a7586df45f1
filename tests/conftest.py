import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from flag_quiz.countries import COUNTRIES
from flag_quiz.engine import QuizEngine


class ScriptedRandom:
    """
    shuffle / randrange の結果を台本どおりに返す乱数源。

    orders: shuffle ごとに先頭へ並べる国のリスト（残りは元の順）
    indices: randrange ごとに返す値
    台本が尽きたら shuffle はそのまま、randrange は 0 を返す。
    """

    def __init__(self, orders=None, indices=None):
        self.orders = list(orders or [])
        self.indices = list(indices or [])
        self.shuffle_calls = 0

    def shuffle(self, seq):
        self.shuffle_calls += 1
        if not self.orders:
            return
        prefix = list(self.orders.pop(0))
        rest = [c for c in seq if c not in prefix]
        seq[:] = prefix + rest

    def randrange(self, n):
        value = self.indices.pop(0) if self.indices else 0
        assert 0 <= value < n
        return value


@pytest.fixture
def scripted_engine():
    """1 問目が France / Spain / Nigeria、正解 Spain (index 1) のエンジン"""
    rng = ScriptedRandom(orders=[["France", "Spain", "Nigeria"]], indices=[1])
    return QuizEngine(COUNTRIES, rng=rng)


@pytest.fixture
def engine():
    return QuizEngine.seeded(1234)
