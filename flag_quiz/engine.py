"""
engine.py
======================

国旗クイズの状態機械（QuizEngine）。

状態:
    AWAITING_ANSWER  → submit_answer()       → SHOWING_FEEDBACK
                                               または SESSION_COMPLETE（最終問題）
    SHOWING_FEEDBACK → acknowledge_feedback() → AWAITING_ANSWER（次の問題）
    SESSION_COMPLETE → acknowledge_feedback() → AWAITING_ANSWER（スコアをリセット）

乱数源は注入可能（shuffle / randrange を持つオブジェクト）。
UI は subscribe() で状態変化の通知を受け取り、snapshot() を描画する。
Streamlit には依存しない。
"""

from __future__ import annotations

import logging
import random
from typing import Callable, List, Optional, Sequence

from .countries import COUNTRIES, validate_catalog
from .models import AnswerRecord, Feedback, Phase, QuizSnapshot, Round

logger = logging.getLogger(__name__)

Listener = Callable[[QuizSnapshot], None]

OPTIONS_PER_ROUND = 3
QUESTIONS_PER_SESSION = 8


class QuizUsageError(ValueError):
    """
    呼び出し側の契約違反。

    - 選択肢 index が範囲外
    - 回答受付中でないのに submit_answer() した
    - フィードバック表示中でないのに acknowledge_feedback() した
    """


class QuizEngine:
    """
    クイズのセッション状態と遷移をまとめたクラス。

    主な機能:
    - start_session(): スコアと出題数をリセットして最初の問題へ
    - new_round(): カタログをシャッフルして 3 択を作る
    - submit_answer(): 採点してフィードバックを作る
    - acknowledge_feedback(): 次の問題 or リスタート
    """

    def __init__(
        self,
        catalog: Sequence[str] = COUNTRIES,
        rng: Optional[random.Random] = None,
        *,
        options_per_round: int = OPTIONS_PER_ROUND,
        questions_per_session: int = QUESTIONS_PER_SESSION,
    ):
        if questions_per_session < 1:
            raise ValueError("questions_per_session は 1 以上にしてください。")

        self.catalog = validate_catalog(catalog, options_per_round)
        self.rng = rng if rng is not None else random.Random()
        self.options_per_round = options_per_round
        self.questions_per_session = questions_per_session

        self.score = 0
        self.questions_asked = 0
        self.session_number = 0
        self.phase = Phase.AWAITING_ANSWER
        self.feedback: Optional[Feedback] = None
        self.round: Optional[Round] = None
        self.last_answer: Optional[AnswerRecord] = None

        self._listeners: List[Listener] = []

        self.start_session()

    @classmethod
    def seeded(cls, seed: Optional[int], **kwargs) -> "QuizEngine":
        """シード付き random.Random を使うエンジンを作る（seed=None なら非決定的）。"""
        return cls(rng=random.Random(seed), **kwargs)

    # ------------------------------------------------------------------
    # 購読
    # ------------------------------------------------------------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        状態変化のたびに listener(snapshot) を呼ぶ。
        戻り値を呼ぶと購読解除。
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        snap = self.snapshot()
        for listener in list(self._listeners):
            listener(snap)

    # ------------------------------------------------------------------
    # 遷移
    # ------------------------------------------------------------------
    def start_session(self) -> None:
        """スコアと出題数を 0 に戻し、新しい問題を出す。"""
        self.score = 0
        self.questions_asked = 0
        self.session_number += 1
        self.last_answer = None
        logger.debug("セッション開始: #%d", self.session_number)
        self.new_round()

    def new_round(self) -> None:
        """カタログのコピーをシャッフルし、先頭 3 件と正解位置を決める。"""
        countries = list(self.catalog)
        self.rng.shuffle(countries)
        options = tuple(countries[: self.options_per_round])
        correct_index = self.rng.randrange(self.options_per_round)

        self.round = Round(options=options, correct_index=correct_index)
        self.feedback = None
        self.phase = Phase.AWAITING_ANSWER

        logger.debug("出題: %s (正解 %d)", options, correct_index)
        self._notify()

    def submit_answer(self, selected_index: int) -> Feedback:
        """
        選択された国旗を採点する。

        出題数の加算は完了判定より先に行う。
        questions_asked が questions_per_session に達した問題の
        フィードバックが「最終スコア」になる。
        """
        self._check_index(selected_index)

        if self.phase is Phase.SHOWING_FEEDBACK:
            logger.warning("フィードバック表示中の回答を拒否しました: %r", selected_index)
            raise QuizUsageError("フィードバック表示中は回答できません。")

        total = self.questions_per_session

        if self.phase is Phase.SESSION_COMPLETE:
            # リスタートせずに再度呼ばれた場合。スコアは動かさない。
            self.feedback = Feedback(
                title="You've completed this round - would you like to restart?",
                message=f"Final score: {self.score}/{total}",
                is_correct=None,
            )
            self._notify()
            return self.feedback

        round_ = self.round
        is_correct = selected_index == round_.correct_index

        if is_correct:
            self.score += 1
            title = "Correct!"
        else:
            title = f"Wrong, that's the flag of {round_.options[selected_index]}!"

        self.questions_asked += 1

        self.last_answer = AnswerRecord(
            session_number=self.session_number,
            question_number=self.questions_asked,
            options=round_.options,
            correct_index=round_.correct_index,
            selected_index=selected_index,
            is_correct=is_correct,
        )

        if self.questions_asked >= total:
            self.phase = Phase.SESSION_COMPLETE
            message = f"Final score: {self.score}/{total}"
            logger.info("セッション #%d 完了: %d/%d", self.session_number, self.score, total)
        else:
            self.phase = Phase.SHOWING_FEEDBACK
            message = f"Score: {self.score}/{total}"

        self.feedback = Feedback(title=title, message=message, is_correct=is_correct)
        self._notify()
        return self.feedback

    def acknowledge_feedback(self) -> None:
        """フィードバックを閉じる。完了後ならリスタート、それ以外は次の問題。"""
        if self.phase is Phase.SESSION_COMPLETE:
            self.start_session()
        elif self.phase is Phase.SHOWING_FEEDBACK:
            self.new_round()
        else:
            logger.warning("回答待ちの状態で acknowledge が呼ばれました。")
            raise QuizUsageError("閉じるフィードバックがありません。")

    # View からのイベント名
    def tap_option(self, index: int) -> Feedback:
        return self.submit_answer(index)

    def acknowledge(self) -> None:
        self.acknowledge_feedback()

    # ------------------------------------------------------------------
    # 参照
    # ------------------------------------------------------------------
    def snapshot(self) -> QuizSnapshot:
        round_ = self.round
        return QuizSnapshot(
            options=round_.options,
            prompt_country=round_.correct_country,
            score=self.score,
            questions_asked=self.questions_asked,
            questions_per_session=self.questions_per_session,
            phase=self.phase,
            feedback=self.feedback,
            session_number=self.session_number,
            last_answer=self.last_answer,
        )

    def _check_index(self, selected_index: int) -> None:
        if (
            isinstance(selected_index, bool)
            or not isinstance(selected_index, int)
            or not 0 <= selected_index < self.options_per_round
        ):
            logger.warning("不正な選択肢 index: %r", selected_index)
            raise QuizUsageError(
                f"選択肢 index は 0〜{self.options_per_round - 1} の整数です: {selected_index!r}"
            )
