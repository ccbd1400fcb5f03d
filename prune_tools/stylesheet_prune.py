#!/usr/bin/env python3
from __future__ import annotations

from typing import Iterable, List, Set, Tuple

import tinycss2

from prune_tools.errors import ParseError
from prune_tools.selector_survival import should_keep


CLOSERS = {'{': '}', '(': ')', '[': ']'}


def _position(text: str, index: int) -> Tuple[int, int]:
    line = text.count('\n', 0, index) + 1
    column = index - text.rfind('\n', 0, index)
    return line, column


def _fail(message: str, text: str, index: int) -> ParseError:
    line, column = _position(text, index)
    return ParseError(message, line=line, column=column)


def check_delimiters(text: str) -> None:
    """Raise ParseError unless every comment, string and block closes before EOF.

    tinycss2 silently closes whatever is still open at EOF, so this scan runs
    first and rejects the sheet instead.
    """
    stack: List[Tuple[str, int]] = []
    i = 0
    n = len(text)
    while i < n:
        c = text[i]
        if c == '/' and text.startswith('*', i + 1):
            end = text.find('*/', i + 2)
            if end == -1:
                raise _fail('comment not closed before end of file', text, i)
            i = end + 2
            continue
        if c in ('"', "'"):
            j = i + 1
            while j < n:
                ch = text[j]
                if ch == '\\':
                    j += 2
                    continue
                if ch == c:
                    break
                if ch == '\n':
                    raise _fail('newline inside string', text, i)
                j += 1
            else:
                raise _fail('string not closed before end of file', text, i)
            i = j + 1
            continue
        if c == '\\':
            i += 2
            continue
        if c in CLOSERS:
            stack.append((CLOSERS[c], i))
        elif c in ')]}':
            if not stack or stack[-1][0] != c:
                raise _fail(f"unmatched '{c}'", text, i)
            stack.pop()
        i += 1
    if stack:
        closer, opened = stack[-1]
        raise _fail(f"block not closed with '{closer}' before end of file", text, opened)


def _check_tokens(tokens) -> None:
    for tok in tokens or ():
        if tok.type == 'error':
            raise ParseError(f"{tok.kind}: {tok.message}", line=tok.source_line, column=tok.source_column)
        for attr in ('prelude', 'content', 'arguments'):
            inner = getattr(tok, attr, None)
            if isinstance(inner, list):
                _check_tokens(inner)


def parse_rules(stylesheet_text: str) -> list:
    """Top-level nodes of a stylesheet, comments and whitespace included.

    Anything tinycss2 would have to repair (unclosed blocks, comments or
    strings, bad-string / bad-url tokens, stray closers) makes the whole sheet
    a ParseError so that nothing is rewritten.
    """
    check_delimiters(stylesheet_text)
    nodes = tinycss2.parse_stylesheet(stylesheet_text, skip_comments=False, skip_whitespace=False)
    _check_tokens(nodes)
    return nodes


def selector_text(rule) -> str:
    return tinycss2.serialize(rule.prelude).strip()


def is_class_rule(node) -> bool:
    return node.type == 'qualified-rule' and selector_text(node).startswith('.')


def prune_with_report(stylesheet_text: str, used: Set[str], ignored_prefixes: Iterable[str] = ()) -> Tuple[str, List[str]]:
    """Return (pruned_text, removed_selectors).

    When no rule is removed the input text comes back untouched. Otherwise the
    surviving nodes are reserialized by tinycss2, which keeps their formatting
    except that strings come back double-quoted and escapes are canonical.
    """
    prefixes = tuple(ignored_prefixes)
    nodes = parse_rules(stylesheet_text)
    kept = []
    removed: List[str] = []
    drop_whitespace = False
    for node in nodes:
        if drop_whitespace and node.type == 'whitespace':
            drop_whitespace = False
            continue
        drop_whitespace = False
        if is_class_rule(node):
            sel = selector_text(node)
            if not should_keep(sel, used, prefixes):
                removed.append(' '.join(sel.split()))
                drop_whitespace = True
                continue
        kept.append(node)
    if not removed:
        return stylesheet_text, removed
    out = tinycss2.serialize(kept)
    # tinycss2 reads CRLF as LF; give a consistently CRLF sheet its endings back
    if '\r\n' in stylesheet_text and '\n' not in stylesheet_text.replace('\r\n', ''):
        out = out.replace('\r\n', '\n').replace('\n', '\r\n')
    return out, removed


def prune(stylesheet_text: str, used: Set[str], ignored_prefixes: Iterable[str] = ()) -> str:
    text, _ = prune_with_report(stylesheet_text, used, ignored_prefixes)
    return text
