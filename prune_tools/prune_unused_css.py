#!/usr/bin/env python3
"""
Drop CSS class rules that no markup in the same component uses.

For every markup file under the root directory, the stylesheets sharing its directory and
base name are pruned against the classes found in the markup. Changed
stylesheets get a backup (<file>.prune.bak by default) before being rewritten.

  python css_02_prune_unused.py src/app
  python css_02_prune_unused.py src/app --dry-run --report prune_report.json
"""
from __future__ import annotations

import argparse
import json
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from prune_tools.config import PruneSettings, load_settings
from prune_tools.errors import ParseError
from prune_tools.file_groups import FileCache, FileGroup, discover_groups
from prune_tools.markup_classes import extract_used_classes
from prune_tools.stylesheet_prune import prune_with_report


@dataclass
class StylesheetResult:
    path: Path
    status: str  # changed | unchanged | skipped
    removed: List[str] = field(default_factory=list)
    backup: Optional[Path] = None
    reason: str = ''


@dataclass
class GroupResult:
    group: FileGroup
    status: str  # processed | skipped
    used_classes: int = 0
    stylesheets: List[StylesheetResult] = field(default_factory=list)
    reason: str = ''


def backup_path(path: Path, suffix: str) -> Path:
    return path.with_name(path.name + (suffix or '.prune.bak'))


def prune_stylesheet_file(path: Path, used: set, cache: FileCache, settings: PruneSettings) -> StylesheetResult:
    try:
        css = cache.read(path)
    except OSError as e:
        print(f"[WARN] cannot read {path}: {e}")
        return StylesheetResult(path=path, status='skipped', reason=f"read failed: {e}")
    except UnicodeDecodeError as e:
        print(f"[SKIP] {path}: not valid utf-8 ({e.reason} at byte {e.start})")
        return StylesheetResult(path=path, status='skipped', reason='not valid utf-8')

    try:
        new_css, removed = prune_with_report(css, used, settings.ignore_prefixes)
    except ParseError as e:
        e.with_path(path)
        print(f"[SKIP] {e}")
        return StylesheetResult(path=path, status='skipped', reason=f"parse error: {e.message}")

    if new_css == css:
        return StylesheetResult(path=path, status='unchanged')

    result = StylesheetResult(path=path, status='changed', removed=removed)
    if settings.dry_run:
        print(f"[PRUNE-CSS] would remove {len(removed)} rules from {path}")
        return result

    try:
        if settings.backup:
            bak = backup_path(path, settings.backup_suffix)
            if not bak.exists():
                shutil.copy2(path, bak)
            result.backup = bak
        cache.write(path, new_css)
    except OSError as e:
        print(f"[WARN] cannot write {path}: {e}")
        return StylesheetResult(path=path, status='skipped', removed=removed, reason=f"write failed: {e}")
    print(f"[PRUNE-CSS] removed {len(removed)} rules from {path}")
    return result


def process_group(group: FileGroup, cache: FileCache, settings: PruneSettings) -> GroupResult:
    if group.markup_path is None:
        print(f"[SKIP] {group.label}: no markup file for {len(group.stylesheet_paths)} stylesheet(s)")
        return GroupResult(group=group, status='skipped', reason='no markup file')
    if group.duplicate_markup:
        names = ', '.join(p.name for p in [group.markup_path, *group.duplicate_markup])
        print(f"[SKIP] {group.label}: more than one markup file ({names})")
        return GroupResult(group=group, status='skipped', reason='more than one markup file')

    try:
        markup = cache.read(group.markup_path)
        used = extract_used_classes(markup, verbose=settings.verbose)
    except OSError as e:
        print(f"[WARN] cannot read {group.markup_path}: {e}")
        return GroupResult(group=group, status='skipped', reason=f"read failed: {e}")
    except UnicodeDecodeError as e:
        print(f"[SKIP] {group.markup_path}: not valid utf-8 ({e.reason} at byte {e.start})")
        return GroupResult(group=group, status='skipped', reason='not valid utf-8')
    except ParseError as e:
        e.with_path(group.markup_path)
        print(f"[SKIP] {e}")
        return GroupResult(group=group, status='skipped', reason=f"parse error: {e.message}")

    if settings.verbose:
        print(f"[MARKUP] {group.markup_path}: {len(used)} classes")
    result = GroupResult(group=group, status='processed', used_classes=len(used))
    for css_path in group.stylesheet_paths:
        result.stylesheets.append(prune_stylesheet_file(css_path, used, cache, settings))
    return result


def run(root: Path, settings: PruneSettings, cache: Optional[FileCache] = None) -> List[GroupResult]:
    cache = cache or FileCache()
    groups = discover_groups(root, settings.markup_extensions, settings.stylesheet_extensions, settings.skip_dirs)
    return [process_group(g, cache, settings) for g in groups]


def build_report(results: List[GroupResult], root: Optional[Path] = None) -> Dict[str, Any]:
    def rel(p: Optional[Path]) -> Optional[str]:
        if p is None:
            return None
        if root is not None:
            try:
                return str(Path(p).relative_to(root))
            except ValueError:
                pass
        return str(p)

    changed: List[Dict[str, Any]] = []
    skipped: List[Dict[str, Any]] = []
    unchanged = 0
    for gr in results:
        if gr.status == 'skipped':
            skipped.append({'group': rel(gr.group.directory / gr.group.base_name), 'reason': gr.reason})
            continue
        for sr in gr.stylesheets:
            if sr.status == 'changed':
                changed.append({
                    'stylesheet': rel(sr.path),
                    'markup': rel(gr.group.markup_path),
                    'removed_selectors': sr.removed,
                    'backup': rel(sr.backup),
                })
            elif sr.status == 'skipped':
                skipped.append({'stylesheet': rel(sr.path), 'reason': sr.reason})
            else:
                unchanged += 1

    return {
        'root': str(root) if root is not None else None,
        'summary': {
            'groups': len(results),
            'changed_stylesheets': len(changed),
            'unchanged_stylesheets': unchanged,
            'skipped': len(skipped),
            'removed_rules': sum(len(c['removed_selectors']) for c in changed),
        },
        'changed': changed,
        'skipped': skipped,
    }


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description='Remove CSS class rules not referenced by the markup file next to each stylesheet')
    ap.add_argument('root', nargs='?', default='.', help='Directory to scan (default: current directory)')
    ap.add_argument('--dry-run', action='store_true', help='Report only; do not modify stylesheets')
    ap.add_argument('--no-backup', action='store_true', help='Do not write <file>.prune.bak before rewriting')
    ap.add_argument('--ignore-prefix', action='append', default=None, metavar='PREFIX',
                    help='Class prefix whose rules are always kept (repeatable; replaces PRUNE_IGNORE_PREFIXES)')
    ap.add_argument('--report', help='Write a JSON report to this path')
    ap.add_argument('--verbose', action='store_true', help='Print discovered classes per markup file')
    return ap


def apply_args(settings: PruneSettings, args: argparse.Namespace) -> PruneSettings:
    if args.dry_run:
        settings.dry_run = True
    if args.no_backup:
        settings.backup = False
    if args.ignore_prefix is not None:
        settings.ignore_prefixes = [p for p in args.ignore_prefix if p]
    if args.verbose:
        settings.verbose = True
    return settings


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = apply_args(load_settings(), args)

    root = Path(args.root)
    if not root.is_dir():
        raise SystemExit(f"Root directory not found: {root}")

    results = run(root, settings)
    report = build_report(results, root)
    s = report['summary']
    verb = 'would change' if settings.dry_run else 'changed'
    print(f"[PRUNE-CSS] {s['groups']} groups, {verb} {s['changed_stylesheets']} stylesheets "
          f"({s['removed_rules']} rules), {s['unchanged_stylesheets']} unchanged, {s['skipped']} skipped")

    if args.report:
        out = Path(args.report)
        out.write_text(json.dumps(report, ensure_ascii=False, indent=2), encoding='utf-8')
        print(f"[PRUNE-CSS] Report: {out}")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
