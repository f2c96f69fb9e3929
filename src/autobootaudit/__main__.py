"""Allow ``python -m autobootaudit``."""

import sys

from autobootaudit.interface.cli import main

sys.exit(main())
