"""
ui.py
======================

Streamlit ベースの UI コンポーネントをまとめたモジュール。

責務:
- スマートフォンを主ターゲットとしたレイアウトとスタイル
- クイズ画面の描画（タイトル・スコア・問題の国名・3 枚の国旗）
- フィードバック（正誤とスコア）と Continue / Restart? ボタン

ここでは「見た目」と「ユーザー操作の入力」を扱い、
採点や出題などのロジックは QuizEngine（app.py 経由）に任せる。

戻り値として「どの国旗が押されたか」「フィードバックを閉じたか」を返す。
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

import streamlit as st

from .models import Phase, QuizSnapshot

# ----------------------------------------------------------------------
#  テーマ定義
# ----------------------------------------------------------------------


THEMES: Dict[str, Dict[str, str]] = {
    "light": {
        "bg_top": "#1a3373",  # 紺
        "bg_bottom": "#c22642",  # 赤
        "text": "#ffffff",
        "surface": "rgba(255, 255, 255, 0.85)",
        "surface_text": "#1c1c1e",
        "muted": "#6e6e73",
    },
    "dark": {
        "bg_top": "#0b1533",
        "bg_bottom": "#5a1220",
        "text": "#f5f5f7",
        "surface": "rgba(28, 28, 30, 0.85)",
        "surface_text": "#f5f5f7",
        "muted": "#a1a1a6",
    },
}

FLAG_WIDTH = 200


# ----------------------------------------------------------------------
#  CSS 生成
# ----------------------------------------------------------------------
def _generate_css(theme: Dict[str, str]) -> str:
    """テーマに応じたグローバル CSS を生成する。"""

    return f"""
    <style>
    .stApp {{
        background: radial-gradient(circle at top,
                    {theme['bg_top']} 0%, {theme['bg_top']} 30%,
                    {theme['bg_bottom']} 30%, {theme['bg_bottom']} 100%);
        -webkit-tap-highlight-color: rgba(0,0,0,0);
        font-family: -apple-system, BlinkMacSystemFont, "SF Pro Text",
                     "Helvetica Neue", Arial, sans-serif;
    }}

    .fq-title {{
        text-align: center;
        color: {theme['text']};
        font-size: 2.2rem;
        font-weight: 700;
        margin: 1rem 0 0.5rem 0;
    }}

    .fq-score {{
        text-align: center;
        color: {theme['text']};
        font-size: 1.6rem;
        font-weight: 700;
        margin-bottom: 0.75rem;
    }}

    .fq-card {{
        background: {theme['surface']};
        color: {theme['surface_text']};
        border-radius: 20px;
        padding: 1.25rem 1rem;
        text-align: center;
    }}

    .fq-prompt {{
        color: {theme['muted']};
        font-size: 0.9rem;
        font-weight: 800;
    }}

    .fq-country {{
        font-size: 2.1rem;
        font-weight: 600;
    }}

    /* 国旗はカプセル型 + 影 */
    [data-testid="stImage"] img {{
        border-radius: 999px;
        box-shadow: 0 0 5px rgba(0, 0, 0, 0.6);
    }}

    [data-testid="stImage"] {{
        display: flex;
        justify-content: center;
    }}
    </style>
    """


# ----------------------------------------------------------------------
#  テーマ関連
# ----------------------------------------------------------------------
def ensure_theme(default: str = "light") -> str:
    """セッションに theme キーを用意し、現在のテーマキーを返す。"""
    if "theme" not in st.session_state:
        st.session_state["theme"] = default if default in THEMES else "light"
    theme_key = st.session_state.get("theme", "light")
    if theme_key not in THEMES:
        theme_key = "light"
        st.session_state["theme"] = "light"
    return theme_key


def render_theme_selector(theme_key: str) -> str:
    """テーマ切替を表示し、選択されたテーマキーを返す。"""
    options = list(THEMES.keys())
    labels = {"light": "Light", "dark": "Dark"}

    idx = options.index(theme_key) if theme_key in options else 0
    selected = st.radio(
        "テーマ",
        options,
        index=idx,
        horizontal=True,
        format_func=lambda k: labels.get(k, k),
    )
    st.session_state["theme"] = selected
    return selected


# ----------------------------------------------------------------------
#  公開 API: クイズページの描画
# ----------------------------------------------------------------------
def render_quiz_page(
    snapshot: QuizSnapshot,
    *,
    flag_sources: Sequence[Optional[str]],
    title: str = "Guess the Flag",
    theme_key: str = "light",
) -> Dict[str, Any]:
    """
    クイズページ全体を描画し、ユーザー操作の結果を返す。

    引数:
        snapshot:
            QuizEngine.snapshot() の戻り値。
        flag_sources:
            snapshot.options と同じ順の国旗画像ソース（パス or URL）。
            解決できなかった国は None（国名の代わりに ? を表示）。
        title:
            画面上部のタイトル。
        theme_key:
            THEMES のキー。

    戻り値:
        {
          "selected_option": Optional[int],   # 新たに押された国旗の index (なければ None)
          "acknowledged": bool,               # Continue / Restart? が押されたか
        }
    """
    theme = THEMES.get(theme_key, THEMES["light"])
    st.markdown(_generate_css(theme), unsafe_allow_html=True)

    selected_option: Optional[int] = None
    acknowledged = False

    # ----------------------------------------
    # ヘッダー
    # ----------------------------------------
    st.markdown(f"<div class='fq-title'>{title}</div>", unsafe_allow_html=True)
    st.markdown(f"<div class='fq-score'>{snapshot.score_label}</div>", unsafe_allow_html=True)

    # ----------------------------------------
    # フィードバック（アラートの代わり）
    # ----------------------------------------
    if snapshot.feedback is not None:
        fb = snapshot.feedback
        if fb.is_correct is True:
            st.success(f"**{fb.title}**  \n{fb.message}")
        elif fb.is_correct is False:
            st.error(f"**{fb.title}**  \n{fb.message}")
        else:
            st.info(f"**{fb.title}**  \n{fb.message}")

        if st.button(
            snapshot.acknowledge_label or "Continue",
            key="fq_acknowledge",
            type="primary",
            use_container_width=True,
        ):
            acknowledged = True

    # ----------------------------------------
    # 問題の国名
    # ----------------------------------------
    st.markdown(
        "<div class='fq-card'>"
        "<div class='fq-prompt'>Tap the flag of</div>"
        f"<div class='fq-country'>{snapshot.prompt_country}</div>"
        "</div>",
        unsafe_allow_html=True,
    )

    # ----------------------------------------
    # 国旗
    # ----------------------------------------
    disabled = snapshot.phase is not Phase.AWAITING_ANSWER

    for idx, _country in enumerate(snapshot.options):
        source = flag_sources[idx] if idx < len(flag_sources) else None
        if source:
            st.image(source, width=FLAG_WIDTH)
        else:
            st.markdown("<div class='fq-card'>?</div>", unsafe_allow_html=True)

        if st.button(
            f"Flag {idx + 1}",
            key=f"fq_option_{idx}",
            disabled=disabled,
            use_container_width=True,
        ):
            selected_option = idx

    # 回答待ちの間は「これから答える問題」の番号
    number = snapshot.questions_asked + (0 if disabled else 1)
    st.caption(f"Question {number} / {snapshot.questions_per_session}")

    return {
        "selected_option": selected_option,
        "acknowledged": acknowledged,
    }


# ----------------------------------------------------------------------
#  履歴サマリ描画
# ----------------------------------------------------------------------
def render_summary(summary: Dict[str, Any], questions_per_session: int) -> None:
    """history.summary() の内容を表示する。"""
    accuracy = summary.get("accuracy")
    best = summary.get("best_session_score")

    col1, col2, col3 = st.columns(3)
    col1.metric("解答数", summary.get("answered", 0))
    col2.metric("正答率", "-" if accuracy is None else f"{accuracy:.0%}")
    col3.metric("最高スコア", "-" if best is None else f"{best}/{questions_per_session}")

    st.write(f"- 完了したセッション: **{summary.get('completed_sessions', 0)} 回**")
