"""設定スナップショットの定義。

読み込んだ設定は再帰的に凍結し、dataclass で保持する。辞書は
MappingProxyType、リストは tuple に変換されるため、呼び出し側が
取得した値を書き換えても以降の参照には影響しない。
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path


def freeze(value: Any) -> Any:
    """値を再帰的にコピーして不変化する。"""
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(freeze(v) for v in value)
    return value


def thaw(value: Any) -> Any:
    """freeze の逆変換。変更可能な dict/list のコピーを返す。"""
    if isinstance(value, Mapping):
        return {k: thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [thaw(v) for v in value]
    if isinstance(value, frozenset):
        return {thaw(v) for v in value}
    return value


EMPTY_DATA: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True)
class ConfigSnapshot:
    """ある時点で有効な、マージ済みかつ不変の設定ツリー。

    Attributes:
        data: 凍結済みの設定データ
        sources: マージに使われたファイル（マージ順）
        loaded_at: 読み込み時刻（エポック秒）
    """

    data: Mapping[str, Any] = field(default_factory=lambda: EMPTY_DATA)
    sources: tuple[Path, ...] = ()
    loaded_at: float = field(default_factory=time.time)

    @classmethod
    def build(cls, merged: Mapping[str, Any], sources: tuple[Path, ...] = ()) -> ConfigSnapshot:
        """マージ結果を凍結してスナップショットを生成する。"""
        return cls(data=freeze(merged), sources=sources)

    @property
    def region(self) -> str | None:
        """最上位の ``region`` フィールド（空でない文字列の場合のみ）。"""
        region = self.data.get("region")
        if isinstance(region, str) and region:
            return region
        return None

    def as_dict(self) -> dict[str, Any]:
        return thaw(self.data)
