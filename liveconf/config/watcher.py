"""設定ファイルの変更を watchdog で監視するモジュール。"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer
from watchdog.observers.polling import PollingObserver

if TYPE_CHECKING:
    from collections.abc import Callable

    from watchdog.events import FileSystemEvent

logger = logging.getLogger(__name__)

FileSignature = tuple[int, int, int] | None


class WatcherPort(Protocol):
    """ファイル監視ポート。ConfigStore はこのインターフェースにのみ依存する。"""

    def start(self) -> None:
        """監視を開始する。"""

    def stop(self) -> None:
        """監視を停止する。"""


def file_signature(path: Path) -> FileSignature:
    """変更検知に使うファイルの (mtime_ns, size, inode) を返す。存在しなければ None。"""
    try:
        st = os.stat(path)
    except OSError:
        return None
    return (st.st_mtime_ns, st.st_size, st.st_ino)


class _TargetFileHandler(FileSystemEventHandler):
    """ディレクトリ内のイベントのうち、対象ファイルに関するものだけを通知する。"""

    def __init__(self, path: Path, callback: Callable[[], None]):
        super().__init__()
        self._path = path
        self._callback = callback

    def _concerns_target(self, event: FileSystemEvent) -> bool:
        if event.is_directory:
            return False
        paths = [event.src_path, getattr(event, "dest_path", "")]
        return any(p and Path(os.fsdecode(p)).resolve() == self._path for p in paths)

    def on_any_event(self, event: FileSystemEvent) -> None:
        # 開く・閉じる（書き込みなし）イベントでは再読み込みしない
        if event.event_type in ("opened", "closed_no_write"):
            return
        if not self._concerns_target(event):
            return
        logger.info(f"設定ファイルの変更を検知しました: {self._path} ({event.event_type})")
        try:
            self._callback()
        except Exception:
            logger.exception(f"変更通知の処理中にエラーが発生しました: {self._path}")


class FileWatcher:
    """watchdog の Observer で設定ファイルの親ディレクトリを監視する。

    エディタによる置き換え保存（一時ファイル → rename）も拾えるよう、
    ファイルではなくディレクトリを監視し、対象パスでイベントを絞り込む。
    削除・再作成も変化として通知する。通知は重複することがあり、
    イベントの内容はコールバックに渡さない。

    Attributes:
        path: 監視対象ファイル
        interval: Observer のタイムアウト（polling=True の場合はポーリング間隔）
        polling: inotify 等が使えない環境向けに PollingObserver を使うか
    """

    def __init__(
        self,
        path: str | Path,
        callback: Callable[[], None],
        interval: float = 1.0,
        polling: bool = False,
    ):
        if interval <= 0:
            raise ValueError(f"interval は正の数値である必要があります: {interval}")
        self.path = Path(path).resolve()
        self.interval = interval
        self.polling = polling
        self._handler = _TargetFileHandler(self.path, callback)
        self._observer: Observer | None = None

    @property
    def running(self) -> bool:
        return self._observer is not None and self._observer.is_alive()

    def start(self) -> None:
        if self._observer is not None:
            return
        observer = PollingObserver(timeout=self.interval) if self.polling else Observer(timeout=self.interval)
        observer.schedule(self._handler, str(self.path.parent), recursive=False)
        observer.daemon = True
        observer.start()
        self._observer = observer
        logger.debug(f"ファイル監視を開始しました: {self.path}")

    def stop(self) -> None:
        observer = self._observer
        self._observer = None
        if observer is None:
            return
        observer.stop()
        if observer is not threading.current_thread():
            observer.join(timeout=self.interval + 2.0)
        logger.debug(f"ファイル監視を停止しました: {self.path}")
