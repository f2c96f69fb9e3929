"""
AutoBootAudit - Boot and uptime diagnostics for Windows computers.

Run from a source checkout without installing:
    python src/main.py status HOST1 HOST2
"""

import sys
from autobootaudit.interface.cli import main


if __name__ == "__main__":
    sys.exit(main())
