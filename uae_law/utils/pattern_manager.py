"""
Pattern Manager for Legislative Document Processing
Centralized regex vocabularies for federal, DIFC and ADGM legislation

Each legal zone numbers its provisions differently:

    federal (Arabic)   المادة N                      -> artN
    federal (English)  Article N  (case-sensitive)    -> artN
    DIFC               Article N / Section N          -> artN / sN
    ADGM               Section N / Rule N / Regulation N -> sN

A ``ZoneVocabulary`` bundles the provision marker, chapter heading,
definitions marker and definition-clause patterns for one zone/language, and
``PatternManager`` runs them over raw HTML.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Pattern, Tuple

# ASCII, Arabic-Indic and Extended Arabic-Indic digits
DIGIT = r'[0-9\u0660-\u0669\u06F0-\u06F9]'
PROVISION_NUMBER = rf'{DIGIT}+[A-Za-z]*'

ARABIC_LETTER = r'\u0600-\u06FF'

# Opening / closing quote classes for defined terms
OPEN_QUOTE = '"\u201c\u00ab'
CLOSE_QUOTE = '"\u201d\u00bb'


class VocabularyKey(Enum):
    """Provision numbering schemes."""
    FEDERAL_AR = "federal-ar"
    FEDERAL_EN = "federal-en"
    DIFC = "difc"
    ADGM = "adgm"


@dataclass(frozen=True)
class ZoneVocabulary:
    """Compiled patterns for one zone/language numbering scheme."""
    key: VocabularyKey
    language: str
    marker_prefixes: Dict[str, str]
    provision_pattern: Pattern
    chapter_pattern: Pattern
    definitions_marker: Pattern
    definition_pattern: Pattern

    def prefix_for(self, marker: str) -> str:
        """Canonical provision_ref prefix for a matched marker word."""
        return self.marker_prefixes[marker.lower()]


@dataclass
class ProvisionMatch:
    """Raw provision segment found in the HTML."""
    marker: str
    number: str
    body: str
    start: int
    end: int


@dataclass
class DefinitionMatch:
    """Raw quoted term and its defining clause."""
    term: str
    definition: str


def _provision_pattern(markers: Tuple[str, ...], letters: str, flags: int) -> Pattern:
    """
    Marker + optional parenthesised number + body up to the next marker or end.

    The lookbehind stops a marker embedded in a longer word ("Subsection",
    "بالمادة") from opening a new provision.
    """
    marker = '(?:' + '|'.join(markers) + ')'
    boundary = f'(?<![{letters}])'
    return re.compile(
        rf'{boundary}({marker})\s*\(?\s*({PROVISION_NUMBER})\s*\)?\s*(.*?)'
        rf'(?={boundary}{marker}\s*\(?\s*{DIGIT}|\Z)',
        flags | re.DOTALL,
    )


def _english_chapter_pattern(headings: Tuple[str, ...]) -> Pattern:
    """'Chapter 2 - Title' / 'Part 3: Title', title running up to the next tag."""
    return re.compile(
        r'\b(?:' + '|'.join(headings) + r')\s+(\d+[A-Za-z]*)\s*[-–—:]\s*(.+?)(?=<|\Z)',
        re.IGNORECASE,
    )


class PatternManager:
    """
    Centralized pattern manager for UAE legislation.

    Provides consistent regex patterns and matching functions for:
    - Provision markers (المادة, Article, Section, Rule, Regulation)
    - Chapter / Part / Division headings
    - Provision titles (first bold or heading element)
    - Definitions provisions and their quoted-term clauses
    """

    def __init__(self):
        """Initialize pattern manager with compiled patterns."""
        self._compile_patterns()

    def _compile_patterns(self) -> None:
        """Compile all regex patterns for performance."""

        english_definition = re.compile(
            rf'[{OPEN_QUOTE}]([^{CLOSE_QUOTE}]+)[{CLOSE_QUOTE}]\s*'
            rf'(?:means?|includes?|has the meaning)\s+(.*?)(?=[{OPEN_QUOTE}]|\Z)',
            re.IGNORECASE | re.DOTALL,
        )
        arabic_definition = re.compile(
            rf'[{OPEN_QUOTE}]([^{CLOSE_QUOTE}]+)[{CLOSE_QUOTE}]\s*[:：]\s*([^.]+\.)'
        )
        english_marker = re.compile(r'\bdefinitions?\b', re.IGNORECASE)
        arabic_marker = re.compile(r'تعريفات|تعاريف')

        self.vocabularies: Dict[VocabularyKey, ZoneVocabulary] = {
            VocabularyKey.FEDERAL_AR: ZoneVocabulary(
                key=VocabularyKey.FEDERAL_AR,
                language='ar',
                marker_prefixes={'المادة': 'art'},
                provision_pattern=_provision_pattern(('المادة',), ARABIC_LETTER, 0),
                chapter_pattern=re.compile(rf'(?:الباب|الفصل)\s+([{ARABIC_LETTER}\s]+)'),
                definitions_marker=arabic_marker,
                definition_pattern=arabic_definition,
            ),
            VocabularyKey.FEDERAL_EN: ZoneVocabulary(
                key=VocabularyKey.FEDERAL_EN,
                language='en',
                marker_prefixes={'article': 'art'},
                provision_pattern=_provision_pattern(('Article',), 'A-Za-z', 0),
                chapter_pattern=_english_chapter_pattern(('Chapter', 'Part')),
                definitions_marker=english_marker,
                definition_pattern=english_definition,
            ),
            VocabularyKey.DIFC: ZoneVocabulary(
                key=VocabularyKey.DIFC,
                language='en',
                marker_prefixes={'article': 'art', 'section': 's'},
                provision_pattern=_provision_pattern(('Article', 'Section'), 'A-Za-z', re.IGNORECASE),
                chapter_pattern=_english_chapter_pattern(('Part', 'Chapter')),
                definitions_marker=english_marker,
                definition_pattern=english_definition,
            ),
            VocabularyKey.ADGM: ZoneVocabulary(
                key=VocabularyKey.ADGM,
                language='en',
                marker_prefixes={'section': 's', 'rule': 's', 'regulation': 's'},
                provision_pattern=_provision_pattern(
                    ('Section', 'Rule', 'Regulation'), 'A-Za-z', re.IGNORECASE
                ),
                chapter_pattern=_english_chapter_pattern(('Part', 'Chapter', 'Division')),
                definitions_marker=english_marker,
                definition_pattern=english_definition,
            ),
        }

        # First bold/strong/heading element inside a provision body
        self.title_pattern = re.compile(
            r'<(strong|b|h[1-6])\b[^>]*>([^<]+)</\1\s*>',
            re.IGNORECASE,
        )

        # Arabic provision marker, used for federal language detection
        self.arabic_article_marker = re.compile(r'المادة')

    def get_vocabulary(self, key: VocabularyKey) -> ZoneVocabulary:
        """Get the compiled vocabulary for a numbering scheme."""
        return self.vocabularies[key]

    def is_arabic(self, html: str) -> bool:
        """True when the HTML contains the Arabic article marker."""
        return bool(self.arabic_article_marker.search(html))

    def find_provisions(self, html: str, vocabulary: ZoneVocabulary) -> Iterator[ProvisionMatch]:
        """
        Scan HTML left-to-right for provision segments.

        Args:
            html: Raw HTML of the whole document
            vocabulary: Zone vocabulary to apply

        Yields:
            ProvisionMatch objects in document order
        """
        for match in vocabulary.provision_pattern.finditer(html):
            yield ProvisionMatch(
                marker=match.group(1),
                number=match.group(2),
                body=match.group(3),
                start=match.start(),
                end=match.end(),
            )

    def find_last_chapter(self, html: str, vocabulary: ZoneVocabulary, endpos: int) -> Optional[str]:
        """
        Raw text of the last chapter heading found in ``html[:endpos]``.

        ``endpos`` makes the scan behave exactly as if the text ended at the
        provision start, so a heading straddling that offset is cut off the
        same way a sliced prefix would cut it.
        """
        last = None
        for last in vocabulary.chapter_pattern.finditer(html, 0, endpos):
            pass
        return last.group(0) if last else None

    def find_title(self, body: str) -> Optional[str]:
        """Inner text of the first bold/strong/heading element, if any."""
        match = self.title_pattern.search(body)
        return match.group(2) if match else None

    def is_definitions_provision(self, text: str, vocabulary: ZoneVocabulary) -> bool:
        """Check if a provision body carries the definitions marker."""
        return bool(vocabulary.definitions_marker.search(text))

    def find_definitions(self, text: str, vocabulary: ZoneVocabulary) -> List[DefinitionMatch]:
        """Quoted term / defining clause pairs in document order."""
        return [
            DefinitionMatch(term=match.group(1), definition=match.group(2))
            for match in vocabulary.definition_pattern.finditer(text)
        ]


_pattern_manager: Optional[PatternManager] = None


def get_pattern_manager() -> PatternManager:
    """Shared PatternManager (patterns are compiled once per process)."""
    global _pattern_manager
    if _pattern_manager is None:
        _pattern_manager = PatternManager()
    return _pattern_manager
