# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Entry point for running kotlex as a module: python -m kotlex"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
