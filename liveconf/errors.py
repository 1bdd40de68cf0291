"""設定アクセスで送出される例外の定義。

各例外は対応する組み込み例外も継承しているため、呼び出し側は
``ValueError`` や ``KeyError`` でも捕捉できる。
"""

from __future__ import annotations


class ConfigError(Exception):
    """liveconf が送出する例外の基底クラス。"""


class InvalidArgumentError(ConfigError, ValueError):
    """コンストラクタ・参照メソッドに不正な引数が渡された。"""


class ConfigFileNotFoundError(ConfigError, FileNotFoundError):
    """構築時に設定ファイルが見つからない。"""


class MissingRequiredPropertyError(ConfigError, KeyError):
    """デフォルト値なしで参照したプロパティが存在しない。"""

    def __init__(self, property_name: str):
        super().__init__(property_name)
        self.property_name = property_name

    def __str__(self) -> str:
        return f"必須プロパティ '{self.property_name}' が設定に存在しません"


class ConfigParseError(ConfigError, ValueError):
    """設定ファイルの解析に失敗した。

    ローダー内部でのみ送出され、リロード時は ConfigStore が空の辞書に置き換える。
    """
