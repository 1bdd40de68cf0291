"""``python -m liveconf`` エントリーポイント。"""

import sys

from liveconf.cli import main

sys.exit(main())
