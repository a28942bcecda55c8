#!/usr/bin/env python3
"""
softkeys main entry point for running as a module: python3 -m softkeys
"""

import sys
from softkeys.cli import main

if __name__ == '__main__':
    sys.exit(main())
