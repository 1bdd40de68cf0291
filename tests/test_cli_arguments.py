"""Test cases for CLI arguments."""

from __future__ import annotations

import sys
from unittest.mock import patch

import pytest

from liveconf.cli.arguments import parse_arguments


def test_parse_arguments_default():
    """デフォルト引数のパース"""
    test_args = ["script_name"]

    with patch.object(sys, "argv", test_args):
        args = parse_arguments()

        assert args.properties == []
        assert args.config == "config.yaml"
        assert args.region is None
        assert args.by_region is False
        assert args.sep == "."
        assert args.default is None
        assert args.dump is False
        assert args.watch is False
        assert args.interval == 1.0
        assert args.debug is False
        assert args.log_dir is None


def test_parse_arguments_config():
    """設定ファイルパスの指定"""
    test_args = ["script_name", "--config", "custom_config.yaml"]

    with patch.object(sys, "argv", test_args):
        args = parse_arguments()

        assert args.config == "custom_config.yaml"


def test_parse_arguments_properties():
    """プロパティパスの指定"""
    args = parse_arguments(["server.port", "logging.name"])

    assert args.properties == ["server.port", "logging.name"]


def test_parse_arguments_region():
    """リージョンの指定"""
    args = parse_arguments(["--region", "de", "welcome"])

    assert args.region == "de"
    assert args.properties == ["welcome"]


def test_parse_arguments_watch_interval():
    """監視オプションの指定"""
    args = parse_arguments(["--watch", "--interval", "0.5"])

    assert args.watch is True
    assert args.interval == 0.5


def test_parse_arguments_all_options():
    """全てのオプションを指定"""
    test_args = [
        "script_name",
        "--config",
        "test_config.yaml",
        "--by-region",
        "--sep",
        "/",
        "--default",
        "none",
        "--dump",
        "--debug",
        "--log-dir",
        "logs",
        "server/port",
    ]

    with patch.object(sys, "argv", test_args):
        args = parse_arguments()

        assert args.config == "test_config.yaml"
        assert args.by_region is True
        assert args.sep == "/"
        assert args.default == "none"
        assert args.dump is True
        assert args.debug is True
        assert args.log_dir == "logs"
        assert args.properties == ["server/port"]


def test_parse_arguments_invalid_interval(capsys):
    """監視間隔が正の数値でなければ使用方法エラー"""
    for value in ("0", "-1", "abc", "nan"):
        with pytest.raises(SystemExit) as excinfo:
            parse_arguments(["--watch", "--interval", value])
        assert excinfo.value.code == 2
    assert "--interval" in capsys.readouterr().err
