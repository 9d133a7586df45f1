"""
flag_quiz パッケージ
======================

このパッケージは、国旗当てクイズ（Guess the Flag）の内部ロジックを提供する。

主な役割:
- 設定管理（config）
- 国カタログ（countries）
- 状態を表す値オブジェクト（models）
- クイズの状態機械（engine）
- 解答履歴（history）
- 国旗画像の解決（flags）
- UI コンポーネント（ui）

app.py は Streamlit UI のみを担当し、内部ロジックはすべて本パッケージから呼ぶ。
ui 以外は Streamlit なしで import できる。
"""

from .config import AppConfig, configure_logging
from .countries import COUNTRIES, CatalogError, validate_catalog
from .engine import QuizEngine, QuizUsageError
from .flags import FlagNotFoundError, FlagResolver
from .history import SessionHistory
from .models import AnswerRecord, Feedback, Phase, QuizSnapshot, Round

__all__ = [
    "AppConfig",
    "configure_logging",
    "COUNTRIES",
    "CatalogError",
    "validate_catalog",
    "QuizEngine",
    "QuizUsageError",
    "FlagResolver",
    "FlagNotFoundError",
    "SessionHistory",
    "AnswerRecord",
    "Feedback",
    "Phase",
    "QuizSnapshot",
    "Round",
]
