"""
Citation formatting.

Styles:
- full:     "Article 2, Federal Decree-Law No. 45 of 2021"
- short:    "Art. 2, Federal Decree-Law No. 45 of 2021" (law cut at the first '(')
- pinpoint: "Art. 2"

Free-text citations take their numbering label from the law text: a law
mentioning DIFC or ADGM is numbered in sections ("Section"/"s"), anything
else in articles ("Article"/"Art."). No database lookup is involved, so the
label may disagree with the zone stored for the law.
"""

import re
from typing import Optional, Tuple

from ...schemas.tools import FormattedCitation
from .validator import ResolvedReference

STYLES = ("full", "short", "pinpoint")

_NUMBER = r'(\d+[A-Za-z]*)'

ARTICLE_FIRST = re.compile(
    r'^(?:Article|Art\.?|المادة)\s*' + _NUMBER + r'\s*[,;]?\s+(?:من\s+)?(.+)$', re.IGNORECASE
)
ARTICLE_LAST = re.compile(r'^(.+?)[,;]\s*(?:Article|Art\.?|المادة)\s*' + _NUMBER + r'$', re.IGNORECASE)
SECTION_FIRST = re.compile(r'^(?:Section|s\.?)\s*' + _NUMBER + r'\s*[,;]?\s+(.+)$', re.IGNORECASE)
SECTION_LAST = re.compile(r'^(.+?)[,;]\s*(?:Section|s\.?)\s*' + _NUMBER + r'$', re.IGNORECASE)

# (pattern, number group, law group), first match wins
_SHAPES = (
    (ARTICLE_FIRST, 1, 2),
    (ARTICLE_LAST, 2, 1),
    (SECTION_FIRST, 1, 2),
    (SECTION_LAST, 2, 1),
)

FREE_ZONE_RE = re.compile(r'\b(?:DIFC|ADGM)\b', re.IGNORECASE)


def split_citation(text: str) -> Tuple[Optional[str], str]:
    """Split trimmed citation text into (article number, law text)."""
    for pattern, number_group, law_group in _SHAPES:
        match = pattern.match(text)
        if match:
            return match.group(number_group), match.group(law_group)
    return None, text


def _render(style: str, word: str, abbrev: str, number: Optional[str], law: str) -> str:
    if style not in STYLES:
        raise ValueError(f"Unknown citation style: {style!r} (expected one of {', '.join(STYLES)})")
    if not number:
        return law
    if style == "short":
        return f"{abbrev} {number}, {law.split('(')[0].strip()}"
    if style == "pinpoint":
        return f"{abbrev} {number}"
    return f"{word} {number}, {law}"


def format_citation(citation: str, style: str = "full") -> FormattedCitation:
    """
    Re-render a free-text citation in the requested style.

    Args:
        citation: Citation text in any of the supported shapes
        style: 'full', 'short' or 'pinpoint'

    Returns:
        FormattedCitation with the original text, the rendering and the style

    Raises:
        ValueError: Unknown style
    """
    trimmed = citation.strip()
    number, law = split_citation(trimmed)

    if FREE_ZONE_RE.search(law):
        word, abbrev = "Section", "s"
    else:
        word, abbrev = "Article", "Art."

    formatted = _render(style, word, abbrev, number, law)
    return FormattedCitation(original=citation, formatted=formatted, format=style)


def format_resolved_citation(reference: ResolvedReference, style: str = "full") -> str:
    """Render a resolved reference with the label of its stored legal zone and full title."""
    return _render(style, reference.label, reference.abbreviation, reference.number, reference.document_title)
