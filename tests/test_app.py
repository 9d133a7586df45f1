import os

from streamlit.testing.v1 import AppTest

from flag_quiz.models import Phase

APP_PATH = os.path.join(os.path.dirname(__file__), "..", "app.py")


def _run_app():
    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.run()
    assert not at.exception
    return at


def test_quiz_page_renders_three_flag_buttons():
    at = _run_app()
    labels = [b.label for b in at.button]
    assert labels == ["Flag 1", "Flag 2", "Flag 3"]
    assert any("Guess the Flag" in m.value for m in at.markdown)


def test_tapping_a_flag_shows_feedback_and_continue():
    at = _run_app()
    engine = at.session_state["quiz_engine"]
    correct = engine.round.correct_index

    at.button(key=f"fq_option_{correct}").click().run()
    assert not at.exception

    engine = at.session_state["quiz_engine"]
    assert engine.phase is Phase.SHOWING_FEEDBACK
    assert engine.score == 1
    assert at.success[0].value.startswith("**Correct!**")
    assert at.button(key="fq_acknowledge").label == "Continue"
    assert at.button(key="fq_option_0").disabled

    at.button(key="fq_acknowledge").click().run()
    engine = at.session_state["quiz_engine"]
    assert engine.phase is Phase.AWAITING_ANSWER
    assert engine.questions_asked == 1


def test_invalid_seed_shows_error_instead_of_traceback(monkeypatch):
    monkeypatch.setenv("FLAG_QUIZ_SEED", "abc")

    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.run()

    assert not at.exception
    assert len(at.error) == 1
    assert "FLAG_QUIZ_SEED" in at.error[0].value
    assert len(at.button) == 0
