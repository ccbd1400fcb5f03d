#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import List, Optional

from prune_tools.config import load_settings
from prune_tools.prune_unused_css import build_report, run


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description='Report CSS class rules that pruning would remove (never modifies files)')
    ap.add_argument('--root', default='.', help='Directory to scan (default: current directory)')
    ap.add_argument('--ignore-prefix', action='append', default=None, metavar='PREFIX',
                    help='Class prefix whose rules are always kept (repeatable; replaces PRUNE_IGNORE_PREFIXES)')
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    root = Path(args.root)
    if not root.is_dir():
        raise SystemExit(f"Root directory not found: {root}")

    settings = load_settings()
    settings.dry_run = True
    if args.ignore_prefix is not None:
        settings.ignore_prefixes = [p for p in args.ignore_prefix if p]

    report = build_report(run(root, settings), root)
    out = root / 'unused_css_report.json'
    out.write_text(json.dumps(report, ensure_ascii=False, indent=2), encoding='utf-8')
    s = report['summary']
    print(f"[UNUSED-CSS] Report: {out} (rules={s['removed_rules']}, stylesheets={s['changed_stylesheets']}, skipped={s['skipped']})")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
