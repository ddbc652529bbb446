"""
Allow running as a module: python -m ip_radar
"""

import sys
from .main import main

if __name__ == "__main__":
    sys.exit(main())
