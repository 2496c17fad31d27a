import sys

from blackbox_harness.cli import main

if __name__ == "__main__":
    sys.exit(main())
