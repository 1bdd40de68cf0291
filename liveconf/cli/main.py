"""liveconf のコマンドラインエントリーポイント。"""

from __future__ import annotations

import datetime
import json
import logging
import threading
from typing import TYPE_CHECKING, Any

import yaml

from liveconf.cli.arguments import parse_arguments
from liveconf.config import MISSING, ConfigStore
from liveconf.config.schema import thaw
from liveconf.errors import (
    ConfigFileNotFoundError,
    InvalidArgumentError,
    MissingRequiredPropertyError,
)
from liveconf.utils import setup_logging

if TYPE_CHECKING:
    import argparse
    from collections.abc import Sequence

EXIT_OK = 0
EXIT_MISSING = 1
EXIT_USAGE = 2

logger = logging.getLogger(__name__)


def json_default(value: Any) -> Any:
    """JSON に直接変換できない値（YAML の日付・集合など）を変換する。"""
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=repr)
    return str(value)


def print_values(store: ConfigStore, args: argparse.Namespace) -> int:
    """指定されたプロパティ（なければ設定全体）を標準出力に書き出す。"""
    if args.dump or not args.properties:
        print(yaml.safe_dump(store.as_dict(), default_flow_style=False, allow_unicode=True, sort_keys=False), end="")
        if not args.properties:
            return EXIT_OK

    default = MISSING if args.default is None else args.default
    getter = store.get_by_region if (args.region or args.by_region) else store.get

    exit_code = EXIT_OK
    for prop in args.properties:
        try:
            value = getter(prop, default)
        except MissingRequiredPropertyError as e:
            logger.error(str(e))
            exit_code = max(exit_code, EXIT_MISSING)
            continue
        except InvalidArgumentError as e:
            logger.error(f"不正なプロパティ指定です: {e}")
            exit_code = EXIT_USAGE
            continue
        print(json.dumps(thaw(value), ensure_ascii=False, default=json_default))
    return exit_code


def main(argv: Sequence[str] | None = None) -> int:
    """メイン処理"""
    args = parse_arguments(argv)

    setup_logging(args.debug, args.log_dir)

    try:
        store = ConfigStore(
            args.config,
            args.region,
            separator=args.sep,
            watch=args.watch,
            poll_interval=args.interval,
        )
    except (InvalidArgumentError, ConfigFileNotFoundError) as e:
        logger.error(f"設定ファイルを開けません: {e}")
        return EXIT_USAGE

    with store:
        exit_code = print_values(store, args)
        if not args.watch:
            return exit_code

        store.add_reload_listener(lambda _snapshot: print_values(store, args))
        logger.info(f"設定ファイルを監視しています: {store.path} (Ctrl+C で終了)")
        try:
            threading.Event().wait()
        except KeyboardInterrupt:
            logger.info("監視を終了します")
    return EXIT_OK
