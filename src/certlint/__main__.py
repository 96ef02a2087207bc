# SPDX-License-Identifier: MIT
"""Package entry point — run the batch linter via `python -m certlint`."""

import sys

from certlint.batch import main

if __name__ == "__main__":
    sys.exit(main())
