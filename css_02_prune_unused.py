#!/usr/bin/env python3
"""
Step 02: Remove unused CSS class rules, writing a backup of each changed stylesheet.

Thin wrapper around prune_tools/prune_unused_css.py:

  python css_02_prune_unused.py src/app

Flags pass-through to the underlying tool:
  --dry-run                Report only; stylesheets are not modified
  --no-backup              Skip <file>.prune.bak
  --ignore-prefix P        Keep rules for classes starting with P (repeatable)
  --report PATH            Write a JSON report
  --verbose                Print classes found per markup file
"""

import sys
import os


def main():
    # Ensure repo root is on sys.path so we can import prune_tools.*
    repo_root = os.path.dirname(os.path.abspath(__file__))
    sys.path.insert(0, repo_root)
    from prune_tools.prune_unused_css import main as tool_main  # type: ignore
    return tool_main()


if __name__ == "__main__":
    sys.exit(main())
