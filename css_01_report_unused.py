#!/usr/bin/env python3
"""
Step 01: Report unused CSS class rules per component without touching files.

Thin wrapper around prune_tools/report_unused_css.py:

  python css_01_report_unused.py --root src/app

Writes <root>/unused_css_report.json.

Flags:
  --root DIR               Directory to scan (default: current directory)
  --ignore-prefix P        Keep rules for classes starting with P (repeatable)
"""

import sys
import os


def main():
    # Ensure repo root is on sys.path so we can import prune_tools.*
    repo_root = os.path.dirname(os.path.abspath(__file__))
    sys.path.insert(0, repo_root)
    from prune_tools.report_unused_css import main as tool_main  # type: ignore
    return tool_main()


if __name__ == "__main__":
    sys.exit(main())
