#!/usr/bin/env python3
"""
Pair markup files with the stylesheets next to them.

``app.component.html`` + ``app.component.scss`` form one group keyed by
(directory, "app.component"). A group needs exactly one markup file to be
processed; stylesheets without one are reported and left alone.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple


@dataclass
class FileGroup:
    directory: Path
    base_name: str
    markup_path: Optional[Path] = None
    stylesheet_paths: List[Path] = field(default_factory=list)
    # extra markup files sharing the key (index.html + index.htm)
    duplicate_markup: List[Path] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.markup_path is not None and not self.duplicate_markup

    @property
    def label(self) -> str:
        return str(self.directory / self.base_name)


def split_name(filename: str) -> Tuple[str, str]:
    """'app.component.scss' -> ('app.component', '.scss')"""
    p = Path(filename)
    return p.stem, p.suffix.lower()


def discover_groups(
    root: Path,
    markup_extensions: Iterable[str],
    stylesheet_extensions: Iterable[str],
    skip_dirs: Iterable[str] = (),
) -> List[FileGroup]:
    """Walk root and return every group holding at least one stylesheet."""
    markup_exts = {e.lower() for e in markup_extensions}
    sheet_exts = {e.lower() for e in stylesheet_extensions}
    skip = set(skip_dirs)
    groups: Dict[Tuple[str, str], FileGroup] = {}

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in skip)
        for name in sorted(filenames):
            base, ext = split_name(name)
            if ext not in markup_exts and ext not in sheet_exts:
                continue
            key = (dirpath, base)
            g = groups.get(key)
            if g is None:
                g = groups[key] = FileGroup(directory=Path(dirpath), base_name=base)
            path = Path(dirpath) / name
            if ext in markup_exts:
                if g.markup_path is None:
                    g.markup_path = path
                else:
                    g.duplicate_markup.append(path)
            else:
                g.stylesheet_paths.append(path)

    out = [g for g in groups.values() if g.stylesheet_paths]
    out.sort(key=lambda g: (str(g.directory), g.base_name))
    return out


class FileCache:
    """Read each path once; writes refresh the cached text.

    Files are decoded strictly as utf-8 with newlines untranslated, so text
    written back differs from the file only where rules were removed.
    A file that is not valid utf-8 raises UnicodeDecodeError.
    """

    def __init__(self):
        self._texts: Dict[Path, str] = {}
        self.reads = 0

    def read(self, path: Path) -> str:
        key = Path(path).resolve()
        if key not in self._texts:
            with open(key, 'r', encoding='utf-8', newline='') as f:
                self._texts[key] = f.read()
            self.reads += 1
        return self._texts[key]

    def write(self, path: Path, text: str) -> None:
        key = Path(path).resolve()
        with open(key, 'w', encoding='utf-8', newline='') as f:
            f.write(text)
        self._texts[key] = text
