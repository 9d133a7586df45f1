"""
countries.py
======================

出題に使う国カタログを定義するモジュール。

カタログはプロセスの生存期間中は不変。
国名はそのまま国旗アセットの識別子としても使う（flags.py 参照）。
"""

from __future__ import annotations

from typing import Iterable, Tuple


# ----------------------------------------------------------------------
#  既定カタログ（11 か国）
# ----------------------------------------------------------------------
COUNTRIES: Tuple[str, ...] = (
    "Estonia",
    "France",
    "Germany",
    "Ireland",
    "Italy",
    "Nigeria",
    "Poland",
    "Russia",
    "Spain",
    "UK",
    "US",
)


class CatalogError(ValueError):
    """カタログが出題に使えない（件数不足・重複・空文字）場合の例外。"""


# ----------------------------------------------------------------------
#  検証
# ----------------------------------------------------------------------
def validate_catalog(countries: Iterable[str], options_per_round: int = 3) -> Tuple[str, ...]:
    """
    カタログを検証し、不変のタプルとして返す。

    - 空文字・文字列以外は不可
    - 重複は不可（3 択が必ず相異なることの前提）
    - options_per_round 件以上必要
    """
    catalog = tuple(countries)

    for name in catalog:
        if not isinstance(name, str) or not name.strip():
            raise CatalogError(f"不正な国名がカタログに含まれています: {name!r}")

    if len(set(catalog)) != len(catalog):
        raise CatalogError("カタログに重複した国名があります。")

    if len(catalog) < options_per_round:
        raise CatalogError(
            f"カタログには {options_per_round} か国以上が必要です（現在 {len(catalog)} か国）。"
        )

    return catalog
