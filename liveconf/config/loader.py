"""設定ファイルの読み込み専用モジュール。"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from liveconf.errors import ConfigFileNotFoundError, ConfigParseError

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}
JSON_SUFFIXES = {".json"}


def load_config_file(path: str | Path) -> dict[str, Any]:
    """YAML/JSON設定を辞書として読み込む。

    Raises:
        ConfigFileNotFoundError: ファイルが存在しない場合
        ConfigParseError: 解析に失敗した、または最上位が辞書でない場合
    """
    config_path = Path(path)
    if not config_path.is_file():
        raise ConfigFileNotFoundError(f"設定ファイルが見つかりません: {config_path}")

    suffix = config_path.suffix.lower()
    try:
        with config_path.open(encoding="utf-8") as f:
            if suffix in YAML_SUFFIXES:
                data = yaml.safe_load(f)
            elif suffix in JSON_SUFFIXES:
                data = json.load(f)
            else:
                raise ConfigParseError(f"サポートされない設定形式です: {suffix}")
    except yaml.YAMLError as e:
        raise ConfigParseError(f"YAML解析エラー ({config_path}): {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigParseError(f"JSON解析エラー ({config_path}): {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigParseError(f"文字コードエラー ({config_path}): {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigParseError(f"設定は辞書形式である必要があります: {config_path}")

    logger.debug(f"設定ファイルを読み込みました: {config_path}")
    return data


def resolve_path_template(
    template: str,
    environ: Mapping[str, str],
    env_var: str,
    placeholder: str = "##",
) -> str:
    """パス中のプレースホルダを環境変数の値で置き換える。

    環境変数が未設定または空の場合はテンプレートをそのまま返す。
    置き換えるのは最初の出現箇所のみ。

    Args:
        template: プレースホルダを含みうるパス（例: ``cfg_##.yaml``）
        environ: 環境変数のマッピング
        env_var: 置換値を読む環境変数名
        placeholder: 置換対象の文字列

    Returns:
        置換後のパス
    """
    if placeholder not in template:
        return template

    value = environ.get(env_var)
    if not isinstance(value, str) or not value:
        return template

    resolved = template.replace(placeholder, value, 1)
    logger.debug(f"パスのプレースホルダを置換しました: {template} -> {resolved}")
    return resolved


def defaults_path_for(path: str | Path, stem: str = "defaults") -> Path:
    """対象ファイルと同じディレクトリ・拡張子のデフォルト設定ファイルのパスを返す。"""
    target = Path(path)
    return target.with_name(f"{stem}{target.suffix}")
