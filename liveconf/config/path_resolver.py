"""区切り文字付きプロパティパスをスナップショットに対して解決する。"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, Sequence
from typing import Any

from liveconf.config.resolver import coerce_env_value, env_key_for
from liveconf.errors import InvalidArgumentError, MissingRequiredPropertyError

logger = logging.getLogger(__name__)


class _Missing:
    """デフォルト値が「指定されていない」ことを表す番兵。None とは区別する。"""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()

_ABSENT = object()


def _require_non_empty_str(name: str, value: Any) -> None:
    if not isinstance(value, str) or not value:
        raise InvalidArgumentError(f"{name} は空でない文字列である必要があります: {value!r}")


def traverse(data: Any, segments: Sequence[str]) -> Any:
    """セグメント列に沿って値をたどる。途中で見つからなければ _ABSENT を返す。

    辞書はキーで、リスト（tuple）は ASCII 数字のみからなる非負の整数インデックスでたどる。
    """
    node = data
    for segment in segments:
        if isinstance(node, Mapping):
            if segment not in node:
                return _ABSENT
            node = node[segment]
        elif (
            isinstance(node, Sequence)
            and not isinstance(node, (str, bytes))
            and segment.isascii()
            and segment.isdecimal()
        ):
            index = int(segment)
            if index >= len(node):
                return _ABSENT
            node = node[index]
        else:
            return _ABSENT
    return node


class PathResolver:
    """プロパティパスの解決を行う。

    呼び出しごとにスナップショットを受け取り、保持する状態は環境変数の
    マッピングのみ。環境変数による上書き → スナップショットの走査 →
    デフォルト値の順で値を決定する。

    Attributes:
        environ: 上書きに使う環境変数（デフォルトは os.environ）
    """

    def __init__(self, environ: Mapping[str, str] | None = None):
        self.environ = os.environ if environ is None else environ

    def get(
        self,
        data: Mapping[str, Any],
        property_name: str,
        default: Any = MISSING,
        separator: str = ".",
    ) -> Any:
        """プロパティの値を取得する。

        Args:
            data: 凍結済みのスナップショットデータ
            property_name: 区切り文字で連結したパス（例: 'server.port'）
            default: 値が見つからない場合に返す値
            separator: パスの区切り文字

        Returns:
            環境変数の値（型変換済み）、スナップショットの値、またはデフォルト値

        Raises:
            InvalidArgumentError: property_name / separator が空または文字列でない場合
            MissingRequiredPropertyError: 値が見つからず、デフォルト値も指定されていない場合
        """
        _require_non_empty_str("property_name", property_name)
        _require_non_empty_str("separator", separator)

        current = traverse(data, property_name.split(separator))

        env_key = env_key_for(property_name, separator)
        raw = self.environ.get(env_key)
        if isinstance(raw, str) and raw:
            value = coerce_env_value(raw, None if current is _ABSENT else current)
            logger.debug(f"環境変数 {env_key} で '{property_name}' を上書きしました")
            return value

        if current is not _ABSENT and current is not None:
            return current

        if default is MISSING:
            raise MissingRequiredPropertyError(property_name)
        return default

    def get_by_region(
        self,
        data: Mapping[str, Any],
        region: str | None,
        property_name: str,
        default: Any = MISSING,
        separator: str = ".",
    ) -> Any:
        """リージョン名を先頭に付けたパスで get を行う。

        リージョンが設定されていない場合はデフォルト値（未指定なら None）を返す。
        """
        _require_non_empty_str("property_name", property_name)
        _require_non_empty_str("separator", separator)

        if not region:
            return None if default is MISSING else default

        return self.get(data, f"{region}{separator}{property_name}", default, separator)
