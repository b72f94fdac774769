"""
UAE Legal Citation Parser

Parses free-text citations into a document reference and an optional
article/section number. Supported formats:

- Arabic: "المادة 2 من المرسوم بقانون اتحادي رقم 45 لسنة 2021"
- Article prefix: "Article 2, Federal Decree-Law No. 45 of 2021", "Art. 2 PDPL"
- Section prefix: "Section 1, ADGM Data Protection Regulations 2021", "s. 12 ..."
- Article suffix: "Federal Decree-Law No. 45 of 2021, Article 2"
- Section suffix: "DIFC Law No. 5 of 2020, Section 10"
- ID-based: "fdl-45-2021, art. 2", "difc-law-5-2020; s. 10"

Patterns are tried in the order above and the first one that consumes the
whole string wins. Suffix forms come after prefix forms because they also
match titles that happen to contain a comma. A string matching none of them
is treated as a bare document reference.
"""

import re
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional

from ...utils.logging import get_logger
from ...utils.text_cleaner import normalize_digits

logger = get_logger(__name__)

# Number with optional alphabetic suffix: 2, 5A, ١٢
PROVISION_NUMBER = r'(\d+[A-Za-z]*)'

BARE_REFERENCE = 'bare'


@dataclass
class Citation:
    """A parsed citation."""
    document_ref: str
    article_ref: Optional[str] = None
    pattern: str = BARE_REFERENCE

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


class CitationParser:
    """Ordered regex cascade over the supported citation shapes."""

    CITATION_PATTERNS = [
        {
            'name': 'arabic',
            'pattern': r'^المادة\s+' + PROVISION_NUMBER + r'\s+(?:من\s+)?(.+)$',
            'flags': 0,
            'groups': ['article_ref', 'document_ref'],
        },
        {
            'name': 'article_prefix',
            'pattern': r'^(?:Article|Art\.?)\s*' + PROVISION_NUMBER + r'\s*[,;]?\s+(.+)$',
            'flags': re.IGNORECASE,
            'groups': ['article_ref', 'document_ref'],
        },
        {
            'name': 'section_prefix',
            'pattern': r'^(?:Section|s\.?)\s*' + PROVISION_NUMBER + r'\s*[,;]?\s+(.+)$',
            'flags': re.IGNORECASE,
            'groups': ['article_ref', 'document_ref'],
        },
        {
            'name': 'article_suffix',
            'pattern': r'^(.+?)[,;]\s*(?:Article|Art\.?)\s*' + PROVISION_NUMBER + r'$',
            'flags': re.IGNORECASE,
            'groups': ['document_ref', 'article_ref'],
        },
        {
            'name': 'section_suffix',
            'pattern': r'^(.+?)[,;]\s*(?:Section|s\.?)\s*' + PROVISION_NUMBER + r'$',
            'flags': re.IGNORECASE,
            'groups': ['document_ref', 'article_ref'],
        },
        {
            'name': 'id_based',
            'pattern': r'^([a-z]+-[\d-]+)\s*[,;]\s*(?:art\.?|s\.?)\s*' + PROVISION_NUMBER + r'$',
            'flags': re.IGNORECASE,
            'groups': ['document_ref', 'article_ref'],
        },
    ]

    def __init__(self):
        """Initialize citation parser with compiled regex patterns."""
        self.compiled_patterns = [
            {**config, 'compiled': re.compile(config['pattern'], config['flags'])}
            for config in self.CITATION_PATTERNS
        ]

    @property
    def pattern_names(self) -> List[str]:
        return [config['name'] for config in self.compiled_patterns]

    def parse(self, text: str) -> Optional[Citation]:
        """
        Parse a citation string.

        Args:
            text: Free-text citation

        Returns:
            Citation, or None for empty/whitespace input
        """
        if not text or not text.strip():
            return None

        trimmed = text.strip()
        for config in self.compiled_patterns:
            match = config['compiled'].match(trimmed)
            if match:
                return self._build_citation(match, config)

        return Citation(document_ref=trimmed)

    def _build_citation(self, match: re.Match, config: Dict) -> Citation:
        values = dict(zip(config['groups'], match.groups()))
        citation = Citation(
            document_ref=values['document_ref'].strip(),
            article_ref=normalize_digits(values['article_ref']),
            pattern=config['name'],
        )
        logger.debug(f"Parsed citation {match.group(0)!r} with pattern {config['name']}")
        return citation


# Module-level convenience functions
_parser = None


def get_citation_parser() -> CitationParser:
    """Get singleton citation parser instance."""
    global _parser
    if _parser is None:
        _parser = CitationParser()
    return _parser


def parse_citation(text: str) -> Optional[Citation]:
    """Parse a citation using the singleton parser."""
    return get_citation_parser().parse(text)
