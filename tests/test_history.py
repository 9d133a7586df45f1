from flag_quiz.engine import QuizEngine
from flag_quiz.history import HISTORY_COLUMNS, SessionHistory
from flag_quiz.models import AnswerRecord, Phase


def _record(session, question, correct):
    return AnswerRecord(
        session_number=session,
        question_number=question,
        options=("France", "Spain", "Nigeria"),
        correct_index=1,
        selected_index=1 if correct else 0,
        is_correct=correct,
    )


def test_empty_history_summary():
    history = SessionHistory()
    assert history.summary() == {
        "answered": 0,
        "correct": 0,
        "accuracy": None,
        "completed_sessions": 0,
        "best_session_score": None,
    }
    df = history.to_dataframe()
    assert df.empty
    assert list(df.columns) == HISTORY_COLUMNS


def test_summary_counts_completed_sessions_only_for_best_score():
    history = SessionHistory(questions_per_session=2)
    history.record(_record(1, 1, True))
    history.record(_record(1, 2, False))
    history.record(_record(2, 1, True))

    summary = history.summary()
    assert summary["answered"] == 3
    assert summary["correct"] == 2
    assert summary["accuracy"] == 2 / 3
    assert summary["completed_sessions"] == 1
    assert summary["best_session_score"] == 1


def test_history_follows_engine_without_duplicates():
    engine = QuizEngine.seeded(11)
    history = SessionHistory()
    engine.subscribe(history.on_snapshot)

    for _ in range(8):
        engine.submit_answer(engine.round.correct_index)
        engine.acknowledge_feedback()
    # 完了後にリスタート済み
    assert engine.phase is Phase.AWAITING_ANSWER
    assert len(history.records()) == 8
    assert history.summary()["best_session_score"] == 8


def test_repeated_completion_notice_is_not_recorded_twice():
    engine = QuizEngine.seeded(11, questions_per_session=1)
    history = SessionHistory(questions_per_session=1)
    engine.subscribe(history.on_snapshot)

    engine.submit_answer(0)
    engine.submit_answer(1)
    assert engine.phase is Phase.SESSION_COMPLETE
    assert len(history.records()) == 1


def test_dataframe_newest_first_and_clear():
    history = SessionHistory()
    history.record(_record(1, 1, True))
    history.record(_record(1, 2, False))

    df = history.to_dataframe()
    assert list(df["question"]) == [2, 1]
    assert list(df["selected_country"]) == ["France", "Spain"]
    assert list(df["correct_country"]) == ["Spain", "Spain"]

    history.clear()
    assert history.records() == []


def test_cleared_answer_is_not_recorded_again_on_next_round():
    engine = QuizEngine.seeded(11)
    history = SessionHistory()
    engine.subscribe(history.on_snapshot)

    engine.submit_answer(engine.round.correct_index)
    assert len(history.records()) == 1

    history.clear()
    engine.acknowledge_feedback()
    assert history.records() == []

    engine.submit_answer(engine.round.correct_index)
    assert [r.question_number for r in history.records()] == [2]
