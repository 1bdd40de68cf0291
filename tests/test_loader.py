"""Test cases for the configuration file loader."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from liveconf.config.loader import defaults_path_for, load_config_file, resolve_path_template
from liveconf.errors import ConfigFileNotFoundError, ConfigParseError


def test_load_yaml(example_config: Path):
    """YAML設定ファイルを辞書として読み込める。"""

    data = load_config_file(example_config)
    assert data["server"]["port"] == 4201
    assert data["server"]["tags"] == ["alpha", "beta"]


def test_load_json(tmp_path: Path):
    """JSON設定ファイルを辞書として読み込める。"""

    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"server": {"port": 4201}}), encoding="utf-8")

    assert load_config_file(path) == {"server": {"port": 4201}}


def test_load_empty_yaml(tmp_path: Path):
    """空のYAMLは空の辞書になる。"""

    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert load_config_file(path) == {}


def test_load_missing_file(tmp_path: Path):
    """存在しないファイルでは ConfigFileNotFoundError が発生する。"""

    with pytest.raises(ConfigFileNotFoundError):
        load_config_file(tmp_path / "missing.yaml")


@pytest.mark.parametrize(
    ("name", "content", "message"),
    [
        ("invalid.yaml", "invalid: yaml: content: [", "YAML解析エラー"),
        ("invalid.json", "{not json", "JSON解析エラー"),
        ("list.yaml", "- a\n- b\n", "辞書形式"),
        ("list.json", "[1, 2]", "辞書形式"),
        ("config.toml", "a = 1", "サポートされない設定形式"),
    ],
)
def test_load_parse_errors(tmp_path: Path, name: str, content: str, message: str):
    """解析できない設定では ConfigParseError が発生する。"""

    path = tmp_path / name
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigParseError, match=message):
        load_config_file(path)


def test_resolve_path_template():
    """'##' を環境変数の値で置換する。"""

    environ = {"APP_ENV": "PRODUCTION"}
    assert resolve_path_template("cfg_##.json", environ, "APP_ENV") == "cfg_PRODUCTION.json"
    assert resolve_path_template("##/##.yaml", environ, "APP_ENV") == "PRODUCTION/##.yaml"
    assert resolve_path_template("cfg.json", environ, "APP_ENV") == "cfg.json"


def test_resolve_path_template_without_value():
    """環境変数が未設定・空なら置換しない。"""

    assert resolve_path_template("cfg_##.json", {}, "APP_ENV") == "cfg_##.json"
    assert resolve_path_template("cfg_##.json", {"APP_ENV": ""}, "APP_ENV") == "cfg_##.json"


def test_defaults_path_for():
    """同じディレクトリ・拡張子の defaults ファイルを指す。"""

    assert defaults_path_for("/etc/app/cfg.yaml") == Path("/etc/app/defaults.yaml")
    assert defaults_path_for(Path("conf/app.json"), "base") == Path("conf/base.json")
