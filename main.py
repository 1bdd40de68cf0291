#!/usr/bin/env python
"""
liveconf - メインエントリーポイント

設定ファイル（と defaults ファイル）を読み込み、指定したプロパティの値を
表示します。--watch を付けるとファイルの変更を監視し続けます。
"""

import sys

from liveconf.cli import main

if __name__ == "__main__":
    sys.exit(main())
