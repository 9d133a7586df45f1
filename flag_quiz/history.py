"""
history.py
=====================================

解答履歴の管理を担当するモジュール。

QuizEngine を購読し、採点された解答（AnswerRecord）を
プロセス内のメモリにだけ記録する（永続化はしない）。

summary() の構造:

{
    "answered": 0,          # 採点された解答数
    "correct": 0,           # 正解数
    "accuracy": None,       # 正答率 (0.0〜1.0)、未解答なら None
    "completed_sessions": 0,
    "best_session_score": None
}
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import pandas as pd

from .models import AnswerRecord, QuizSnapshot

HISTORY_COLUMNS = [
    "session",
    "question",
    "correct_country",
    "selected_country",
    "correct",
    "answered_at",
]


class SessionHistory:
    """
    解答履歴と集計を扱うクラス。
    """

    def __init__(self, questions_per_session: int = 8):
        self.questions_per_session = questions_per_session
        self._records: List[AnswerRecord] = []
        self._last_seen: Optional[AnswerRecord] = None

    # ---------------------------------------------------------
    # QuizEngine.subscribe() 用
    # ---------------------------------------------------------
    def on_snapshot(self, snapshot: QuizSnapshot) -> None:
        """スナップショットに新しい解答があれば記録する。"""
        answer = snapshot.last_answer
        if answer is None:
            return
        # 同じ解答が複数回通知されることがある（完了後の再タップ・次の問題など）。
        # clear() 後も覚えておく。
        if answer is self._last_seen:
            return
        self._last_seen = answer
        self.record(answer)

    # ---------------------------------------------------------
    # 履歴を追加
    # ---------------------------------------------------------
    def record(self, answer: AnswerRecord) -> None:
        self._records.append(answer)

    def records(self) -> List[AnswerRecord]:
        return list(self._records)

    def clear(self) -> None:
        self._records.clear()

    # ---------------------------------------------------------
    # 集計（UI 用）
    # ---------------------------------------------------------
    def session_scores(self) -> Dict[int, int]:
        """セッション番号 → 正解数"""
        scores: Dict[int, int] = {}
        for r in self._records:
            scores.setdefault(r.session_number, 0)
            if r.is_correct:
                scores[r.session_number] += 1
        return scores

    def completed_sessions(self) -> List[int]:
        """全問解き終えたセッション番号の一覧"""
        counts: Dict[int, int] = {}
        for r in self._records:
            counts[r.session_number] = counts.get(r.session_number, 0) + 1
        return sorted(s for s, n in counts.items() if n >= self.questions_per_session)

    def summary(self) -> Dict[str, Any]:
        answered = len(self._records)
        correct = sum(1 for r in self._records if r.is_correct)
        accuracy: Optional[float] = correct / answered if answered else None

        completed = self.completed_sessions()
        scores = self.session_scores()
        best = max((scores[s] for s in completed), default=None)

        return {
            "answered": answered,
            "correct": correct,
            "accuracy": accuracy,
            "completed_sessions": len(completed),
            "best_session_score": best,
        }

    def to_dataframe(self) -> pd.DataFrame:
        """履歴を DataFrame にする。新しい解答が上。"""
        rows = [r.to_dict() for r in reversed(self._records)]
        return pd.DataFrame(rows, columns=HISTORY_COLUMNS)
