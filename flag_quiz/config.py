"""
config.py
=========

アプリ全体で利用する設定値を一元管理する。
カタログ、1 セッションの問題数、乱数シード、国旗アセット、テーマ、ログレベルなど
すべてこのクラスを通じて取得する。

優先順位: 環境変数 (.env 含む) > config.toml > コード上の既定値
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple
import logging
import os

import toml

from .countries import COUNTRIES
from .flags import DEFAULT_URL_TEMPLATE


# ------------------------------------------------------------
# 基本パス定義
# ------------------------------------------------------------

ROOT_DIR = Path(__file__).resolve().parent.parent
CONFIG_PATH = ROOT_DIR / "config.toml"
ASSET_DIR = ROOT_DIR / "assets" / "flags"

ENV_SEED = "FLAG_QUIZ_SEED"
ENV_LOG_LEVEL = "FLAG_QUIZ_LOG_LEVEL"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


# ------------------------------------------------------------
# AppConfig
# ------------------------------------------------------------

@dataclass
class AppConfig:
    """
    アプリ設定クラス。

    - 国カタログと 1 セッションの問題数
    - 乱数シード（テスト・デモ用に固定できる）
    - 国旗アセットの場所
    - テーマ / ログレベル
    """

    # ---------- アプリ ----------
    app_name: str = "Guess the Flag"
    theme: str = "light"

    # ---------- クイズ ----------
    countries: Tuple[str, ...] = COUNTRIES
    questions_per_session: int = 8
    seed: Optional[int] = None

    # ---------- 国旗 ----------
    flag_asset_dir: Path = ASSET_DIR
    flag_url_template: str = DEFAULT_URL_TEMPLATE

    # ---------- ログ ----------
    log_level: str = "INFO"

    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    # ============================================================
    # 初期化処理
    # ============================================================

    def __post_init__(self):
        self.countries = tuple(self.countries)
        self.flag_asset_dir = Path(self.flag_asset_dir)
        self.log_level = str(self.log_level).upper()

        if (
            isinstance(self.questions_per_session, bool)
            or not isinstance(self.questions_per_session, int)
            or self.questions_per_session < 1
        ):
            raise ValueError(
                f"questions_per_session は 1 以上の整数です: {self.questions_per_session!r}"
            )
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            raise ValueError(f"seed は整数です: {self.seed!r}")

    # ============================================================
    # 読み込み
    # ============================================================

    @classmethod
    def load(cls, path: Optional[Path] = None, env: Optional[Dict[str, str]] = None) -> "AppConfig":
        """
        config.toml と環境変数から設定を作る。
        config.toml が無い・読めない場合は既定値で続行する。
        """
        path = Path(path) if path is not None else CONFIG_PATH
        env = dict(os.environ) if env is None else env

        cfg = read_toml(path)
        app = _section(cfg, "app")
        quiz = _section(cfg, "quiz")
        flags = _section(cfg, "flags")
        ui = _section(cfg, "ui")
        log = _section(cfg, "logging")

        kwargs: Dict[str, Any] = {"raw": cfg}

        if "name" in app:
            kwargs["app_name"] = str(app["name"])
        if "theme" in ui:
            kwargs["theme"] = str(ui["theme"])
        if "countries" in quiz:
            kwargs["countries"] = tuple(quiz["countries"])
        if "questions_per_session" in quiz:
            kwargs["questions_per_session"] = quiz["questions_per_session"]
        if "seed" in quiz:
            kwargs["seed"] = quiz["seed"]
        if "asset_dir" in flags:
            asset_dir = Path(flags["asset_dir"])
            kwargs["flag_asset_dir"] = asset_dir if asset_dir.is_absolute() else ROOT_DIR / asset_dir
        if "url_template" in flags:
            kwargs["flag_url_template"] = str(flags["url_template"])
        if "level" in log:
            kwargs["log_level"] = str(log["level"])

        # 環境変数で上書き
        seed = _read_env(ENV_SEED, env)
        if seed:
            try:
                kwargs["seed"] = int(seed)
            except ValueError:
                raise ValueError(f"{ENV_SEED} は整数です: {seed!r}") from None

        level = _read_env(ENV_LOG_LEVEL, env)
        if level:
            kwargs["log_level"] = level

        return cls(**kwargs)


# ============================================================
# ユーティリティ
# ============================================================

def read_toml(path: Path) -> Dict[str, Any]:
    """config.toml を読む。無い・壊れている場合は空 dict。"""
    if not path.exists():
        return {}
    try:
        return toml.load(path)
    except Exception:
        logging.getLogger(__name__).warning("設定ファイルを読めませんでした: %s", path)
        return {}


def _section(cfg: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = cfg.get(name)
    return value if isinstance(value, dict) else {}


def _read_env(name: str, env: Dict[str, str]) -> str:
    """
    環境変数を読む。ローカル開発向けに ROOT_DIR/.env も見る。
    """
    value = env.get(name)
    if value:
        return value.strip()

    env_path = ROOT_DIR / ".env"
    if env_path.exists():
        for line in env_path.read_text().splitlines():
            if line.startswith(f"{name}="):
                return line.split("=", 1)[1].strip()

    return ""


def configure_logging(level: str = "INFO") -> None:
    """
    ルートロガーを設定する。Streamlit の再実行で何度呼ばれても 1 回だけ効く。
    """
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("flag_quiz").setLevel(level.upper())
