# SPDX-License-Identifier: AGPL-3.0-only
"""Enable `python -m ariacheck` invocation."""
from ariacheck.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
