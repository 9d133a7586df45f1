"""
flags.py
======================

国名（カタログの識別子）から国旗画像のソースを引くモジュール。

- asset_dir/<国名>.png があればローカル画像のパスを返す
- なければ ISO 3166-1 alpha-2 コードから flagcdn の URL を組み立てる

QuizEngine はアセットに触れない。描画時に UI からだけ使う。
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Union

DEFAULT_URL_TEMPLATE = "https://flagcdn.com/w160/{code}.png"

COUNTRY_CODES: Dict[str, str] = {
    "Estonia": "ee",
    "France": "fr",
    "Germany": "de",
    "Ireland": "ie",
    "Italy": "it",
    "Nigeria": "ng",
    "Poland": "pl",
    "Russia": "ru",
    "Spain": "es",
    "UK": "gb",
    "US": "us",
}

ASSET_SUFFIXES = (".png", ".jpg", ".svg")


class FlagNotFoundError(LookupError):
    """ローカル画像も国コードも見つからない国。"""


class FlagResolver:
    """
    国旗画像の解決クラス。

    resolve() の戻り値は st.image にそのまま渡せる
    （ローカルパス文字列 or URL）。
    """

    def __init__(
        self,
        asset_dir: Optional[Union[str, Path]] = None,
        url_template: str = DEFAULT_URL_TEMPLATE,
        codes: Optional[Dict[str, str]] = None,
    ):
        self.asset_dir = Path(asset_dir) if asset_dir else None
        self.url_template = url_template
        self.codes = dict(COUNTRY_CODES if codes is None else codes)

    def local_asset(self, country: str) -> Optional[Path]:
        if self.asset_dir is None or not self.asset_dir.is_dir():
            return None
        for suffix in ASSET_SUFFIXES:
            path = self.asset_dir / f"{country}{suffix}"
            if path.is_file():
                return path
        return None

    def code_for(self, country: str) -> str:
        code = self.codes.get(country)
        if not code:
            raise FlagNotFoundError(f"国コードが未登録です: {country}")
        return code

    def resolve(self, country: str) -> str:
        local = self.local_asset(country)
        if local is not None:
            return str(local)
        return self.url_template.format(code=self.code_for(country))
