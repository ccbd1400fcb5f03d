#!/usr/bin/env python3
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Set

import tinycss2


def _collect(tokens, out: List[str]) -> None:
    prev = None
    for tok in tokens:
        if tok.type == 'error':
            raise ValueError(f"{tok.kind}: {tok.message}")
        if tok.type == 'ident' and prev is not None and prev.type == 'literal' and prev.value == '.':
            out.append(tok.value)
        elif tok.type == 'function':
            # :not(.x), :is(.a, .b), :host(.dark)
            _collect(tok.arguments, out)
        elif tok.type == '() block':
            _collect(tok.content, out)
        elif tok.type == '[] block':
            # attribute selector: only scanned for errors
            _collect_errors(tok.content)
        prev = tok


def _collect_errors(tokens) -> None:
    for tok in tokens:
        if tok.type == 'error':
            raise ValueError(f"{tok.kind}: {tok.message}")
        inner = getattr(tok, 'content', None) or getattr(tok, 'arguments', None)
        if inner:
            _collect_errors(inner)


def selector_classes(selector: str) -> List[str]:
    """Class names referenced anywhere in a selector list, in source order."""
    out: List[str] = []
    _collect(tinycss2.parse_component_value_list(selector), out)
    return out


def survival_reason(cls: str, used: Set[str], ignored_prefixes: Sequence[str]) -> Optional[str]:
    """Why a class keeps its rules alive, or None when nothing supports it.

    The substring fallback is deliberately loose: ``btn`` survives on
    ``btn-primary`` and ``btn-primary-lg`` survives on ``btn``. Rules kept this
    way are expected over-retention.
    """
    if cls in used:
        return 'used'
    if any(cls.startswith(p) for p in ignored_prefixes if p):
        return 'ignored-prefix'
    for u in used:
        if u and (cls in u or u in cls):
            return 'fuzzy'
    return None


def class_survives(cls: str, used: Set[str], ignored_prefixes: Sequence[str]) -> bool:
    return survival_reason(cls, used, ignored_prefixes) is not None


def should_keep(selector: str, used: Set[str], ignored_prefixes: Iterable[str] = ()) -> bool:
    """Decide whether a rule with this selector stays in the stylesheet.

    Only selectors starting with ``.`` are judged; everything else is kept.
    A class selector is kept when any class it references survives. Selectors
    that cannot be tokenized, or reference no class at all, are kept too.
    """
    if not selector.lstrip().startswith('.'):
        return True
    prefixes = tuple(ignored_prefixes)
    try:
        classes = selector_classes(selector)
    except Exception:
        return True
    if not classes:
        return True
    return any(class_survives(c, used, prefixes) for c in classes)
