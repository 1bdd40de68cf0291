"""Command-line argument parsing."""

from __future__ import annotations

import argparse
from typing import TYPE_CHECKING

from liveconf.config.config_store import ConfigStore

if TYPE_CHECKING:
    from collections.abc import Sequence


def positive_float(text: str) -> float:
    """正の数値を受け付ける argparse 用の型。"""
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"数値ではありません: {text!r}") from None
    if not value > 0:
        raise argparse.ArgumentTypeError(f"正の数値である必要があります: {text!r}")
    return value


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """コマンドライン引数をパースする

    Args:
        argv: 引数リスト（None の場合は sys.argv）

    Returns:
        パース済み引数
    """
    parser = argparse.ArgumentParser(prog="liveconf", description="liveconf - 設定ファイルの値を参照する")

    parser.add_argument("properties", nargs="*", metavar="PROPERTY", help="参照するプロパティパス（例: server.port）")

    parser.add_argument(
        "--config",
        type=str,
        default="config.yaml",
        help="設定ファイルのパス。'##' は $APP_ENV で置換される（デフォルト: config.yaml）",
    )

    parser.add_argument("--region", type=str, help="リージョンを明示指定し、リージョン配下の値を参照する")

    parser.add_argument("--by-region", action="store_true", help="設定内のリージョン配下の値を参照する")

    parser.add_argument(
        "--sep",
        type=str,
        default=ConfigStore.DEFAULT_SEPARATOR,
        help=f"プロパティパスの区切り文字（デフォルト: {ConfigStore.DEFAULT_SEPARATOR}）",
    )

    parser.add_argument("--default", type=str, help="プロパティが見つからない場合に表示する値")

    parser.add_argument("--dump", action="store_true", help="マージ済みの設定全体をYAMLで出力")

    parser.add_argument("--watch", action="store_true", help="ファイルの変更を監視し、再読み込みのたびに出力")

    parser.add_argument(
        "--interval",
        type=positive_float,
        default=ConfigStore.POLL_INTERVAL_SECONDS,
        help=f"監視のタイムアウト・ポーリング間隔（秒、デフォルト: {ConfigStore.POLL_INTERVAL_SECONDS}）",
    )

    parser.add_argument("--debug", action="store_true", help="デバッグモードで実行（詳細ログ）")

    parser.add_argument("--log-dir", type=str, help="ログファイルの出力ディレクトリ")

    return parser.parse_args(argv)
