"""デフォルト設定のマージと環境変数による上書きを行うリゾルバ。"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


def deep_merge(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """辞書を再帰的にマージする。

    キーが衝突した場合は overrides 側が優先される。両方が辞書の場合のみ
    再帰し、リストは連結せず丸ごと置き換える。入力はどちらも変更しない。

    Args:
        base: 下敷きになる設定（デフォルト）
        overrides: 上書きする設定（対象ファイル）

    Returns:
        新しく生成したマージ結果
    """
    merged: dict[str, Any] = {k: _copy_value(v) for k, v in base.items()}
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = _copy_value(value)
    return merged


def _copy_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _copy_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_copy_value(v) for v in value]
    return value


def env_key_for(property_name: str, separator: str) -> str:
    """プロパティパスから対応する環境変数名を求める。

    例: ``logging.name`` (区切り文字 ``.``) -> ``LOGGING_NAME``
    """
    return property_name.replace(separator, "_").upper()


class ValueKind(Enum):
    """環境変数の型変換先を決めるためのスナップショット値の分類。"""

    NUMBER = "number"
    SEQUENCE = "sequence"
    OTHER = "other"


def is_number(value: Any) -> bool:
    # bool は int のサブクラスだが数値としては扱わない
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def classify(value: Any) -> ValueKind:
    """スナップショット値を型変換の観点で分類する。"""
    if is_number(value):
        return ValueKind.NUMBER
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return ValueKind.SEQUENCE
    return ValueKind.OTHER


def parse_number(raw: str) -> int | float:
    """文字列を int として、失敗すれば float として解釈する。

    Raises:
        ValueError: どちらとしても解釈できない場合
    """
    text = raw.strip()
    try:
        return int(text)
    except ValueError:
        return float(text)


def coerce_env_value(raw: str, current: Any) -> Any:
    """環境変数の文字列を、スナップショット上の値の型に合わせて変換する。

    Args:
        raw: 環境変数の値（空でない文字列）
        current: 同じパスのスナップショット値（存在しない場合は None）

    Returns:
        数値・タプル・文字列のいずれか。真偽値への変換は行わない。
    """
    kind = classify(current)

    if kind is ValueKind.NUMBER:
        try:
            return parse_number(raw)
        except ValueError:
            logger.warning(f"環境変数の値を数値に変換できません。文字列のまま使用します: {raw!r}")
            return raw

    if kind is ValueKind.SEQUENCE:
        text = raw.strip()
        if not (text.startswith("[") and text.endswith("]")):
            return raw
        inner = text[1:-1].strip()
        if not inner:
            return ()
        items = []
        for i, element in enumerate(inner.split(",")):
            element = element.strip()
            if i < len(current) and is_number(current[i]):
                try:
                    items.append(parse_number(element))
                    continue
                except ValueError:
                    logger.warning(f"配列要素 {i} を数値に変換できません: {element!r}")
            items.append(element)
        return tuple(items)

    return raw
