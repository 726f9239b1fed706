"""Module entry point for running with python -m adoc2dita."""

import sys

from adoc2dita.cli import main

if __name__ == "__main__":
    sys.exit(main())
