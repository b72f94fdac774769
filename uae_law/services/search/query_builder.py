"""
FTS5 query sanitizer and variant builder.

Turns a raw user query into a primary FTS5 MATCH expression plus fallback
variants tried when the primary finds nothing. Only three intentional
constructs survive sanitization:

- fully quoted phrases: ``"personal data"``
- boolean operators AND / OR / NOT (uppercase) placed between two operands
- trailing prefix wildcards: ``protect*``

Every other piece of FTS5 syntax (stray quotes, ``^``, ``:``, parentheses,
braces, ``+``, ``-``, ``NEAR(``, leading or embedded ``*``) is removed by
splitting the text into plain terms. The builder never runs a query.
"""

import re
from dataclasses import dataclass, field
from typing import List

# Word characters plus Arabic combining marks (tashkeel), which \w excludes
_WORD = r'[\w\u0610-\u061A\u064B-\u065F\u0670\u06D6-\u06ED]+'

WORD_RE = re.compile(_WORD)
TOKEN_RE = re.compile(r'"[^"]*"|\S+')
WILDCARD_RE = re.compile(r'^(' + _WORD + r')\*$')

OPERATORS = {"AND", "OR", "NOT"}

# Barewords FTS5 would read as syntax rather than as terms
_FTS_KEYWORDS = OPERATORS | {"NEAR"}


@dataclass
class SearchVariants:
    """Primary FTS5 expression, degraded fallbacks and the plain terms."""
    primary: str
    fallbacks: List[str] = field(default_factory=list)
    terms: List[str] = field(default_factory=list)

    @property
    def all(self) -> List[str]:
        """Primary first, then fallbacks; empty when the query had no terms."""
        return [self.primary] + self.fallbacks if self.primary else []


def _term(word: str) -> str:
    return f'"{word}"' if word in _FTS_KEYWORDS else word


def _tokenize(query: str) -> List[tuple]:
    """Split into ('phrase'|'op'|'wildcard'|'term', text) items."""
    items = []
    for token in TOKEN_RE.findall(query):
        if len(token) >= 2 and token.startswith('"') and token.endswith('"'):
            words = WORD_RE.findall(token[1:-1])
            if words:
                items.append(("phrase", words))
        elif token in OPERATORS:
            items.append(("op", token))
        elif WILDCARD_RE.match(token):
            items.append(("wildcard", WILDCARD_RE.match(token).group(1)))
        else:
            items.extend(("term", word) for word in WORD_RE.findall(token))
    return items


def _drop_dangling_operators(items: List[tuple]) -> List[tuple]:
    """Keep an operator only when an operand sits on both sides of it."""
    kept = []
    for i, (kind, value) in enumerate(items):
        if kind == "op":
            before = items[i - 1][0] if i > 0 else "op"
            after = items[i + 1][0] if i + 1 < len(items) else "op"
            if before == "op" or after == "op":
                continue
        kept.append((kind, value))
    return kept


def _render(kind: str, value) -> str:
    if kind == "phrase":
        return '"' + " ".join(value) + '"'
    if kind == "wildcard":
        return f"{value}*"
    if kind == "op":
        return value
    return _term(value)


def build_search_variants(query: str) -> SearchVariants:
    """
    Build the primary and fallback FTS5 expressions for a user query.

    Fallbacks, in order: all plain terms space-joined (implicit AND), then
    all plain terms joined with OR. A fallback equal to an earlier variant is
    left out.

    Args:
        query: Raw user query

    Returns:
        SearchVariants; ``primary`` is '' when the query holds no usable term
    """
    items = _drop_dangling_operators(_tokenize(query or ""))
    primary = " ".join(_render(kind, value) for kind, value in items)

    terms: List[str] = []
    for kind, value in items:
        words = value if kind == "phrase" else [] if kind == "op" else [value]
        for word in words:
            if word not in terms:
                terms.append(word)

    fallbacks: List[str] = []
    if terms:
        for candidate in (" ".join(_term(t) for t in terms), " OR ".join(_term(t) for t in terms)):
            if candidate != primary and candidate not in fallbacks:
                fallbacks.append(candidate)

    return SearchVariants(primary=primary, fallbacks=fallbacks, terms=terms)
