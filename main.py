"""
Main entry point for running linediff from a source checkout.

    python main.py old.txt new.txt
"""

import sys

from linediff.cli import main


if __name__ == '__main__':
    sys.exit(main())
