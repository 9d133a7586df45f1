"""
app.py
======================

国旗当てクイズ（Streamlit）エントリーポイント。

特徴:
- 3 枚の国旗から、指定された国の国旗をタップする
- 1 セッション 8 問、最後にリスタート
- 解答履歴（このプロセスの間だけ保持）と使い方ページ

前提:
- config.toml があれば読み込む（なければ既定値）
- 環境変数 FLAG_QUIZ_SEED で出題を固定できる
"""

from __future__ import annotations

import logging
from typing import List, Optional

import streamlit as st

from flag_quiz.config import AppConfig, configure_logging
from flag_quiz.engine import QuizEngine
from flag_quiz.flags import FlagNotFoundError, FlagResolver
from flag_quiz.history import SessionHistory
from flag_quiz.ui import ensure_theme, render_quiz_page, render_summary, render_theme_selector

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
#  アプリ設定読み込み
# ----------------------------------------------------------------------
def load_app_config() -> AppConfig:
    """AppConfig をセッションに保持して返す。"""
    if "app_config" not in st.session_state:
        st.session_state["app_config"] = AppConfig.load()
    return st.session_state["app_config"]


# ----------------------------------------------------------------------
#  QuizEngine / SessionHistory のラッパー
# ----------------------------------------------------------------------
def get_history() -> SessionHistory:
    """SessionHistory をセッションに保持して返す。"""
    if "quiz_history" not in st.session_state:
        cfg = load_app_config()
        st.session_state["quiz_history"] = SessionHistory(
            questions_per_session=cfg.questions_per_session
        )
    return st.session_state["quiz_history"]


def get_engine() -> QuizEngine:
    """QuizEngine をセッションに保持して返す。履歴は生成時に 1 回だけ購読させる。"""
    if "quiz_engine" not in st.session_state:
        cfg = load_app_config()
        engine = QuizEngine.seeded(
            cfg.seed,
            catalog=cfg.countries,
            questions_per_session=cfg.questions_per_session,
        )
        engine.subscribe(get_history().on_snapshot)
        st.session_state["quiz_engine"] = engine
        logger.info("QuizEngine を作成しました (seed=%s)", cfg.seed)
    return st.session_state["quiz_engine"]


def get_flag_resolver() -> FlagResolver:
    if "flag_resolver" not in st.session_state:
        cfg = load_app_config()
        st.session_state["flag_resolver"] = FlagResolver(
            asset_dir=cfg.flag_asset_dir,
            url_template=cfg.flag_url_template,
        )
    return st.session_state["flag_resolver"]


def resolve_flags(countries: List[str]) -> List[Optional[str]]:
    """国旗画像を解決する。解決できない国は None（UI 側で代替表示）。"""
    resolver = get_flag_resolver()
    sources: List[Optional[str]] = []
    for country in countries:
        try:
            sources.append(resolver.resolve(country))
        except FlagNotFoundError as e:
            logger.warning("%s", e)
            sources.append(None)
    return sources


def set_page(page: str) -> None:
    st.session_state["page"] = page


def get_page() -> str:
    return st.session_state.get("page", "quiz")


# ----------------------------------------------------------------------
#  ページ: クイズ
# ----------------------------------------------------------------------
def render_quiz_main_page() -> None:
    cfg = load_app_config()
    engine = get_engine()
    snapshot = engine.snapshot()

    ui_result = render_quiz_page(
        snapshot,
        flag_sources=resolve_flags(list(snapshot.options)),
        title=cfg.app_name,
        theme_key=ensure_theme(cfg.theme),
    )

    # 新たに選択された場合のみ採点
    if ui_result["selected_option"] is not None and snapshot.accepts_answers:
        engine.tap_option(ui_result["selected_option"])
        st.rerun()
    elif ui_result["acknowledged"] and snapshot.feedback is not None:
        engine.acknowledge()
        st.rerun()


# ----------------------------------------------------------------------
#  ページ: 解答履歴
# ----------------------------------------------------------------------
def render_history_page() -> None:
    cfg = load_app_config()
    history = get_history()

    st.markdown("## 📊 解答履歴")

    render_summary(history.summary(), cfg.questions_per_session)

    st.write("---")

    df = history.to_dataframe()
    if df.empty:
        st.info("まだ解答の記録がありません。クイズを解いてから利用してください。")
    else:
        st.dataframe(df, use_container_width=True, hide_index=True)

        by_country = (
            df.groupby("correct_country")["correct"]
            .agg(["count", "mean"])
            .rename(columns={"count": "出題数", "mean": "正答率"})
            .sort_values("正答率")
        )
        st.markdown("### 国ごとの正答率")
        st.dataframe(by_country, use_container_width=True)

    if st.button("🗑 履歴を消去", use_container_width=True):
        history.clear()
        st.rerun()


# ----------------------------------------------------------------------
#  ページ: 使い方
# ----------------------------------------------------------------------
def render_help_page() -> None:
    cfg = load_app_config()
    st.markdown("## ❓ 使い方")

    st.markdown(
        f"""
1. 画面中央に国名が表示されます。
2. 3 枚の国旗から、その国の国旗の下のボタンを押してください。
3. 正誤と現在のスコアが表示されます。「Continue」で次の問題へ進みます。
4. {cfg.questions_per_session} 問解くと最終スコアが表示されます。「Restart?」で最初からやり直せます。
5. 「解答履歴」ページでは、このブラウザセッションで解いた問題を確認できます（アプリを閉じると消えます）。
        """
    )

    st.markdown("### 設定")
    render_theme_selector(ensure_theme(cfg.theme))


# ----------------------------------------------------------------------
#  メイン
# ----------------------------------------------------------------------
PAGES = {
    "quiz": "🚩 クイズ",
    "history": "📊 解答履歴",
    "help": "❓ 使い方",
}


def main() -> None:
    # 設定・カタログが不正なら画面にエラーを出して止める
    try:
        cfg = load_app_config()
        configure_logging(cfg.log_level)
        get_engine()
    except ValueError as e:
        logger.error("起動に失敗しました: %s", e)
        st.error(f"設定を確認してください: {e}")
        st.stop()

    st.set_page_config(
        page_title=cfg.app_name,
        page_icon="🚩",
        layout="centered",
    )

    # ページ選択
    with st.sidebar:
        keys = list(PAGES.keys())
        current = get_page() if get_page() in PAGES else "quiz"
        page = st.radio(
            "メニュー",
            keys,
            index=keys.index(current),
            format_func=lambda k: PAGES[k],
        )
        set_page(page)

    if page == "history":
        render_history_page()
    elif page == "help":
        render_help_page()
    else:
        render_quiz_main_page()


if __name__ == "__main__":
    main()
