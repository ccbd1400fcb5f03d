#!/usr/bin/env python3
"""
Collect the CSS classes a markup document can put on its elements.

Static ``class`` attributes are split on whitespace. Conditional class bindings
(``[ngClass]="{'active': isActive}"`` and its spellings) contribute every quoted
literal in their value. The result over-approximates: an extra class only keeps
an extra rule alive, a missing one deletes a rule that is still needed.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Set

from bs4 import BeautifulSoup, ParserRejectedMarkup
from bs4.element import Tag

from prune_tools.errors import ParseError


# html.parser lowercases attribute names, so these are compared lowercased
CONDITIONAL_CLASS_ATTRIBUTES = (
    '[ngClass]',
    'ngClass',
    '[ng-class]',
    'ng-class',
    'data-ng-class',
    'x-ng-class',
)

# boolean / empty values of a binding, never class names
NON_CLASS_LITERALS = {'true', 'false', 'null', 'undefined'}

QUOTED_RE = re.compile(r"'([^']*)'|\"([^\"]*)\"")


@dataclass
class MarkupNode:
    name: str
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List['MarkupNode'] = field(default_factory=list)


def _attr_text(value) -> str:
    # bs4 hands multi-valued attributes (class, rel, ...) back as lists
    if isinstance(value, (list, tuple)):
        return ' '.join(value)
    if value is None:
        return ''
    return str(value)


def parse_markup(markup_text: str) -> MarkupNode:
    """Parse markup into a MarkupNode tree rooted at the document node."""
    try:
        soup = BeautifulSoup(markup_text, 'html.parser')
    except ParserRejectedMarkup as e:
        raise ParseError(f"markup rejected by parser: {e}") from e

    root = MarkupNode(name=soup.name or '[document]')
    stack = [(soup, root)]
    while stack:
        tag, node = stack.pop()
        for child in tag.children:
            if not isinstance(child, Tag):
                continue
            attrs = {k: _attr_text(v) for k, v in (child.attrs or {}).items()}
            child_node = MarkupNode(name=child.name, attributes=attrs)
            node.children.append(child_node)
            stack.append((child, child_node))
    return root


def walk(root: MarkupNode) -> Iterator[MarkupNode]:
    """Depth-first, pre-order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def quoted_classes(binding_value: str) -> List[str]:
    """Class names quoted inside a conditional class binding value.

    ``{'active': isActive, "is-open": open}`` -> ``['active', 'is-open']``.
    A quoted run holding several names (``'btn btn-lg'``) yields each name.
    """
    out: List[str] = []
    for m in QUOTED_RE.finditer(binding_value or ''):
        raw = m.group(1) if m.group(1) is not None else m.group(2)
        literal = raw.strip()
        if not literal or literal in NON_CLASS_LITERALS:
            continue
        for token in literal.split():
            if token not in NON_CLASS_LITERALS:
                out.append(token)
    return out


def classes_of(node: MarkupNode) -> Set[str]:
    used: Set[str] = set()
    attrs = {k.lower(): v for k, v in node.attributes.items()}
    for token in (attrs.get('class') or '').split():
        if token:
            used.add(token)
    for name in CONDITIONAL_CLASS_ATTRIBUTES:
        value = attrs.get(name.lower())
        if value is None:
            continue
        used.update(quoted_classes(value))
    return used


def extract_used_classes(markup_text: str, verbose: bool = False) -> Set[str]:
    root = parse_markup(markup_text)
    used: Set[str] = set()
    for node in walk(root):
        used.update(classes_of(node))
        if verbose:
            attrs = {k.lower(): v for k, v in node.attributes.items()}
            for name in CONDITIONAL_CLASS_ATTRIBUTES:
                value = attrs.get(name.lower())
                if value is not None:
                    print(f"[MARKUP] <{node.name} {name}> dynamic classes: {quoted_classes(value)}")
    return used
