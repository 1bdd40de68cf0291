"""Test cases for ConfigSnapshot and the freeze helpers."""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from pathlib import Path
from types import MappingProxyType

import pytest

from liveconf.config.schema import ConfigSnapshot, freeze, thaw


def test_freeze_nested():
    """辞書・リストを再帰的に不変化する。"""

    frozen = freeze({"a": {"b": [1, {"c": 2}]}, "s": {1, 2}})

    assert isinstance(frozen, MappingProxyType)
    assert isinstance(frozen["a"], MappingProxyType)
    assert frozen["a"]["b"] == (1, MappingProxyType({"c": 2}))
    assert frozen["s"] == frozenset({1, 2})
    with pytest.raises(TypeError):
        frozen["a"]["b"][1]["c"] = 3


def test_freeze_copies_input():
    """元の辞書を変更しても凍結済みの値は変わらない。"""

    source = {"a": {"b": 1}, "l": [1]}
    frozen = freeze(source)
    source["a"]["b"] = 2
    source["l"].append(2)

    assert frozen["a"]["b"] == 1
    assert frozen["l"] == (1,)


def test_thaw_round_trip():
    """thaw は変更可能なコピーを返す。"""

    data = {"a": {"b": [1, {"c": 2}]}, "n": None}
    thawed = thaw(freeze(data))

    assert thawed == data
    thawed["a"]["b"].append(3)
    assert data["a"]["b"] == [1, {"c": 2}]


def test_snapshot_build():
    """build はデータを凍結し、ソースを保持する。"""

    sources = (Path("defaults.yaml"), Path("cfg.yaml"))
    snapshot = ConfigSnapshot.build({"region": "de", "x": [1]}, sources)

    assert snapshot.region == "de"
    assert snapshot.sources == sources
    assert snapshot.data["x"] == (1,)
    assert snapshot.as_dict() == {"region": "de", "x": [1]}
    assert snapshot.loaded_at > 0


@pytest.mark.parametrize("region", ["", 5, None, ["de"]])
def test_snapshot_region_requires_non_empty_string(region):
    """region フィールドが空でない文字列でなければ None。"""

    assert ConfigSnapshot.build({"region": region}).region is None


def test_snapshot_is_frozen():
    """スナップショット自体も変更できない。"""

    snapshot = ConfigSnapshot()
    assert snapshot.data == {}
    assert snapshot.region is None
    with pytest.raises(FrozenInstanceError):
        snapshot.data = {}


def test_snapshot_default_construction():
    """引数なしで構築でき、インスタンス間でデータを共有しても変更されない。"""

    first = ConfigSnapshot()
    second = ConfigSnapshot()

    assert first.data == {}
    assert first.sources == ()
    assert first.as_dict() == {}
    assert first.data is second.data
    with pytest.raises(TypeError):
        first.data["a"] = 1
    assert second.data == {}
