"""
models.py
======================

クイズの状態を表す値オブジェクト群。

どれも frozen dataclass で、状態遷移のたびに「差し替え」られる。
UI 側は QuizSnapshot だけを見れば描画できる。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class Phase(str, Enum):
    """クイズ画面のフェーズ"""

    AWAITING_ANSWER = "awaiting_answer"  # 3 枚の国旗を表示中、フィードバックなし
    SHOWING_FEEDBACK = "showing_feedback"  # 正誤を表示中、国旗ボタンは無効
    SESSION_COMPLETE = "session_complete"  # 最終結果を表示中、次はリスタート


@dataclass(frozen=True)
class Round:
    """1 問分の出題（表示する国と正解位置）"""

    options: Tuple[str, ...]
    correct_index: int

    @property
    def correct_country(self) -> str:
        return self.options[self.correct_index]


@dataclass(frozen=True)
class Feedback:
    """
    解答後に表示するメッセージ。

    title はアラートの見出し、message はスコア表示。
    is_correct は「すでに完了済み」の通知では None。
    """

    title: str
    message: str
    is_correct: Optional[bool] = None

    @property
    def text(self) -> str:
        return f"{self.title} {self.message}"


@dataclass(frozen=True)
class AnswerRecord:
    """採点された 1 回の解答。履歴（history.py）に渡される。"""

    session_number: int
    question_number: int
    options: Tuple[str, ...]
    correct_index: int
    selected_index: int
    is_correct: bool
    answered_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    )

    @property
    def correct_country(self) -> str:
        return self.options[self.correct_index]

    @property
    def selected_country(self) -> str:
        return self.options[self.selected_index]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session": self.session_number,
            "question": self.question_number,
            "correct_country": self.correct_country,
            "selected_country": self.selected_country,
            "correct": self.is_correct,
            "answered_at": self.answered_at,
        }


@dataclass(frozen=True)
class QuizSnapshot:
    """描画用の状態スナップショット"""

    options: Tuple[str, ...]
    prompt_country: str
    score: int
    questions_asked: int
    questions_per_session: int
    phase: Phase
    feedback: Optional[Feedback]
    session_number: int
    last_answer: Optional[AnswerRecord] = None

    @property
    def accepts_answers(self) -> bool:
        return self.phase is Phase.AWAITING_ANSWER

    @property
    def acknowledge_label(self) -> Optional[str]:
        """フィードバックを閉じるボタンの表記。回答待ちの間は None。"""
        if self.phase is Phase.SESSION_COMPLETE:
            return "Restart?"
        if self.phase is Phase.SHOWING_FEEDBACK:
            return "Continue"
        return None

    @property
    def score_label(self) -> str:
        return f"Score: {self.score}/{self.questions_per_session}"
