"""Allow `python -m linediff old.txt new.txt`."""

import sys

from linediff.cli import main


if __name__ == '__main__':
    sys.exit(main())
