"""Live configuration store backed by a watched YAML/JSON file."""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import TYPE_CHECKING, Any

from liveconf.config.loader import defaults_path_for, load_config_file, resolve_path_template
from liveconf.config.path_resolver import MISSING, PathResolver
from liveconf.config.resolver import deep_merge
from liveconf.config.schema import ConfigSnapshot
from liveconf.config.watcher import FileWatcher, file_signature
from liveconf.errors import ConfigError, ConfigFileNotFoundError, InvalidArgumentError

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from liveconf.config.watcher import WatcherPort

    ReloadListener = Callable[[ConfigSnapshot], None]
    WatcherFactory = Callable[[Path, Callable[[], None], float], WatcherPort]

logger = logging.getLogger(__name__)


class ConfigStore:
    """設定ファイル管理クラス

    設定ファイル（と同じディレクトリの defaults ファイル）を読み込んでマージし、
    不変のスナップショットとして保持する。ファイルの変更を監視し、変更の
    たびに再読み込みしてスナップショットを丸ごと差し替える。

    Attributes:
        path: プレースホルダ置換後の設定ファイルのパス
        defaults_path: デフォルト設定ファイルのパス（存在しなくてもよい）
    """

    DEFAULT_REGION = "en"
    DEFAULT_SEPARATOR = "."
    PLACEHOLDER = "##"
    ENV_VAR = "APP_ENV"
    DEFAULTS_STEM = "defaults"
    POLL_INTERVAL_SECONDS = 1.0

    def __init__(
        self,
        path_template: str | os.PathLike,
        region: str | None = None,
        *,
        default_region: str | None = DEFAULT_REGION,
        separator: str = DEFAULT_SEPARATOR,
        env_var: str = ENV_VAR,
        environ: Mapping[str, str] | None = None,
        watch: bool = True,
        poll_interval: float = POLL_INTERVAL_SECONDS,
        watcher_factory: WatcherFactory | None = None,
    ):
        """ConfigStoreを初期化する

        Args:
            path_template: 設定ファイルのパス。``##`` は env_var の値で置換される
            region: 明示的なリージョン。未指定時は設定内の ``region`` か default_region
            default_region: リージョンが決まらない場合の値（None でリージョンなし）
            separator: プロパティパスの区切り文字
            env_var: プレースホルダの置換値を読む環境変数名
            environ: 環境変数のマッピング（デフォルトは os.environ）
            watch: ファイル監視を行うかどうか
            poll_interval: 監視のタイムアウト・ポーリング間隔（秒）
            watcher_factory: 監視オブジェクトの生成関数 ``(path, callback, interval)``

        Raises:
            InvalidArgumentError: 引数が不正な場合
            ConfigFileNotFoundError: 設定ファイルが存在しない場合
        """
        if isinstance(path_template, os.PathLike):
            path_template = os.fspath(path_template)
        if not isinstance(path_template, str) or not path_template:
            raise InvalidArgumentError(f"設定ファイルのパスは空でない文字列である必要があります: {path_template!r}")
        if region is not None and (not isinstance(region, str) or not region):
            raise InvalidArgumentError(f"region は空でない文字列である必要があります: {region!r}")
        if default_region is not None and (not isinstance(default_region, str) or not default_region):
            raise InvalidArgumentError(f"default_region は空でない文字列である必要があります: {default_region!r}")
        if not isinstance(separator, str) or not separator:
            raise InvalidArgumentError(f"separator は空でない文字列である必要があります: {separator!r}")
        if isinstance(poll_interval, bool) or not isinstance(poll_interval, (int, float)) or poll_interval <= 0:
            raise InvalidArgumentError(f"poll_interval は正の数値である必要があります: {poll_interval!r}")

        self._environ = os.environ if environ is None else environ

        resolved = resolve_path_template(path_template, self._environ, env_var, self.PLACEHOLDER)
        if not resolved:
            raise InvalidArgumentError("プレースホルダ置換後の設定ファイルのパスが空です")

        self.path = Path(resolved).resolve()
        if not self.path.is_file():
            raise ConfigFileNotFoundError(f"設定ファイル '{resolved}' が見つかりません。")
        if not os.access(self.path, os.R_OK):
            raise ConfigFileNotFoundError(f"設定ファイル '{resolved}' を読み込めません。")

        self.defaults_path = defaults_path_for(self.path, self.DEFAULTS_STEM)
        self._explicit_region = region
        self._default_region = default_region
        self._separator = separator
        self._resolver = PathResolver(self._environ)
        self._reload_lock = threading.Lock()
        self._listeners: list[ReloadListener] = []
        self._snapshot = ConfigSnapshot()
        self._watcher: WatcherPort | None = None

        # 初回読み込みの前に状態を記録し、監視開始までの変更を取りこぼさない
        baseline = file_signature(self.path)
        self.load_config()

        if watch:
            factory = watcher_factory or FileWatcher
            self._watcher = factory(self.path, self._on_file_changed, poll_interval)
            self._watcher.start()
            if file_signature(self.path) != baseline:
                logger.info(f"監視開始前に設定ファイルが変更されました。再読み込みします: {self.path}")
                self.load_config()

    def __enter__(self) -> ConfigStore:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"ConfigStore(path={str(self.path)!r}, region={self.region!r}, separator={self._separator!r})"

    @property
    def snapshot(self) -> ConfigSnapshot:
        """現在有効なスナップショット。"""
        return self._snapshot

    @property
    def separator(self) -> str:
        return self._separator

    @property
    def region(self) -> str | None:
        """有効なリージョン。

        明示指定 > 設定内の ``region`` フィールド > default_region の順で決まる。
        """
        if self._explicit_region is not None:
            return self._explicit_region
        return self._snapshot.region or self._default_region

    def _read_layer(self, path: Path, label: str) -> dict[str, Any]:
        try:
            return load_config_file(path)
        except (ConfigError, OSError) as e:
            logger.warning(f"{label}の読み込みに失敗しました。空の設定を使用します: {e}")
            return {}

    def load_config(self) -> ConfigSnapshot:
        """設定ファイルを読み込み、スナップショットを差し替える。

        defaults ファイル・対象ファイルの解析に失敗した場合はそれぞれ空の
        辞書として扱い、例外は送出しない。同一インスタンスでの読み込みは
        ロックで直列化される。

        Returns:
            新しく有効になったスナップショット
        """
        with self._reload_lock:
            sources: list[Path] = []

            defaults: dict[str, Any] = {}
            if self.defaults_path != self.path and self.defaults_path.is_file():
                defaults = self._read_layer(self.defaults_path, "デフォルト設定ファイル")
                sources.append(self.defaults_path)

            target = self._read_layer(self.path, "設定ファイル")
            sources.append(self.path)

            snapshot = ConfigSnapshot.build(deep_merge(defaults, target), tuple(sources))
            self._snapshot = snapshot
            listeners = list(self._listeners)

        logger.info(f"設定ファイル '{self.path}' を読み込みました。(region={self.region})")
        for listener in listeners:
            try:
                listener(snapshot)
            except Exception:
                logger.exception("リロードリスナーの実行中にエラーが発生しました")
        return snapshot

    def _on_file_changed(self) -> None:
        self.load_config()

    def add_reload_listener(self, listener: ReloadListener) -> None:
        """読み込みのたびに新しいスナップショットを受け取るコールバックを登録する。"""
        self._listeners.append(listener)

    def remove_reload_listener(self, listener: ReloadListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def close(self) -> None:
        """ファイル監視を停止する。複数回呼んでもよい。"""
        watcher = self._watcher
        self._watcher = None
        if watcher is not None:
            watcher.stop()

    def set_separator(self, separator: str) -> bool:
        """デフォルトの区切り文字を変更する

        Args:
            separator: 新しい区切り文字

        Returns:
            変更した場合True、不正な値で変更しなかった場合False
        """
        if not isinstance(separator, str) or not separator:
            logger.warning(f"不正な区切り文字のため変更しません: {separator!r}")
            return False
        self._separator = separator
        logger.debug(f"区切り文字を変更しました: {separator!r}")
        return True

    set_sep_chr = set_separator

    def get(self, property_name: str, default: Any = MISSING, separator: str | None = None) -> Any:
        """設定値を取得する

        区切り文字（例: 'server.port'）で階層的な設定値にアクセスできる。
        対応する環境変数（例: SERVER_PORT）が設定されていればそちらを優先する。

        Args:
            property_name: 設定キー
            default: キーが存在しない場合のデフォルト値
            separator: 区切り文字（省略時はインスタンスの区切り文字）

        Returns:
            設定値、またはデフォルト値

        Raises:
            InvalidArgumentError: property_name が空または文字列でない場合
            MissingRequiredPropertyError: 値が見つからずデフォルト値も指定されていない場合
        """
        sep = self._separator if separator is None else separator
        return self._resolver.get(self._snapshot.data, property_name, default, sep)

    def get_by_region(self, property_name: str, default: Any = MISSING, separator: str | None = None) -> Any:
        """現在のリージョン配下の設定値を取得する。

        リージョンが設定されていない場合はデフォルト値を返す。
        """
        snapshot = self._snapshot
        sep = self._separator if separator is None else separator
        region = self._explicit_region
        if region is None:
            region = snapshot.region or self._default_region
        return self._resolver.get_by_region(snapshot.data, region, property_name, default, sep)

    def as_dict(self) -> dict[str, Any]:
        """現在の設定を変更可能な辞書のコピーとして返す。"""
        return self._snapshot.as_dict()
