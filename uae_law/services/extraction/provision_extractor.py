"""
Provision Extractor
Segments legislative HTML into provisions for any of the three legal zones

One algorithm, parameterised by a ZoneVocabulary:

1. Scan the raw HTML for ``<marker> <number> <body>`` segments, the body
   running to the next marker or the end of the document.
2. Chapter context is the last chapter/part heading before the segment start;
   the previous chapter carries forward when none is found.
3. Title is the first bold/strong/heading element of the body.
4. Content is the normalized body; segments of 5 characters or fewer are noise.
5. Content is hard-truncated at 12,000 characters.
6. provision_ref = marker prefix (art / s) + number.
7. Duplicate provision_refs keep the longest content.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from ...schemas.document_contract import ParsedDefinition, ParsedProvision
from ...utils.pattern_manager import PatternManager, VocabularyKey, get_pattern_manager
from ...utils.text_cleaner import normalize_digits, strip_html
from .definition_extractor import DefinitionExtractor, deduplicate_definitions

logger = logging.getLogger(__name__)

MAX_CONTENT_LENGTH = 12000
MIN_CONTENT_LENGTH = 5


@dataclass
class ExtractionResult:
    """Provisions and definitions extracted from one document."""
    provisions: List[ParsedProvision] = field(default_factory=list)
    definitions: List[ParsedDefinition] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


class ProvisionExtractor:
    """
    Zone-aware provision extractor.

    Stateless apart from the shared compiled patterns, so one instance can
    serve any number of documents.
    """

    def __init__(self, pattern_manager: Optional[PatternManager] = None):
        """Initialize with pattern manager and definition extractor."""
        self.pattern_manager = pattern_manager or get_pattern_manager()
        self.definition_extractor = DefinitionExtractor(self.pattern_manager)

    def extract(
        self,
        html: str,
        vocabulary_key: VocabularyKey,
        document_id: Optional[str] = None,
    ) -> ExtractionResult:
        """
        Extract provisions and definitions from a document's raw HTML.

        Args:
            html: Raw HTML of the whole document
            vocabulary_key: Numbering scheme to apply
            document_id: Used for diagnostics only

        Returns:
            ExtractionResult with deduplicated provisions and definitions
        """
        vocabulary = self.pattern_manager.get_vocabulary(vocabulary_key)
        provisions: List[ParsedProvision] = []
        definitions: List[ParsedDefinition] = []
        current_chapter = ''

        for match in self.pattern_manager.find_provisions(html, vocabulary):
            number = normalize_digits(match.number)
            provision_ref = f"{vocabulary.prefix_for(match.marker)}{number}"

            heading = self.pattern_manager.find_last_chapter(html, vocabulary, match.start)
            if heading is not None:
                current_chapter = strip_html(heading)

            raw_title = self.pattern_manager.find_title(match.body)
            title = strip_html(raw_title) if raw_title else ''

            content = strip_html(match.body)
            if len(content) > MIN_CONTENT_LENGTH:
                provisions.append(ParsedProvision(
                    provision_ref=provision_ref,
                    chapter=current_chapter or None,
                    section=number,
                    title=title,
                    content=content[:MAX_CONTENT_LENGTH],
                    language=vocabulary.language,
                ))

            definitions.extend(
                self.definition_extractor.extract(match.body, vocabulary, provision_ref)
            )

        result = ExtractionResult(
            provisions=deduplicate_provisions(provisions),
            definitions=deduplicate_definitions(definitions),
        )

        if not result.provisions:
            warning = f"No provisions extracted for {document_id or 'document'} ({vocabulary_key.value})"
            result.warnings.append(warning)
            logger.warning(warning)
        else:
            logger.debug(
                f"Extracted {len(result.provisions)} provisions, "
                f"{len(result.definitions)} definitions from {document_id or 'document'}"
            )

        return result


def deduplicate_provisions(provisions: Iterable[ParsedProvision]) -> List[ParsedProvision]:
    """
    Keep one provision per provision_ref.

    The longest content wins; on equal length the first-seen provision is
    kept, and the survivor sits at the position where its ref first appeared.
    """
    by_ref: Dict[str, ParsedProvision] = {}
    for provision in provisions:
        existing = by_ref.get(provision.provision_ref)
        if existing is None or len(provision.content) > len(existing.content):
            by_ref[provision.provision_ref] = provision
    return list(by_ref.values())


def extract_provisions(html: str, vocabulary_key: VocabularyKey) -> ExtractionResult:
    """Convenience wrapper around ProvisionExtractor.extract."""
    return ProvisionExtractor().extract(html, vocabulary_key)
