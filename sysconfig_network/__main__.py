"""Allow running as ``python -m sysconfig_network``."""

import sys

from sysconfig_network.main import main

if __name__ == "__main__":
    sys.exit(main())
