#!/usr/bin/env python3

"""Blog Builder launch script."""

import sys
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent / 'src'))

from sitebuilder.cli import main

if __name__ == '__main__':
    sys.exit(main())
