"""
Definition Extractor
Mines quoted term / defining clause pairs out of "definitions" provisions

English:  "Personal Data" means any data relating to ...
Arabic:   "البيانات الشخصية": أي بيانات تتعلق ...
"""

import logging
from typing import Dict, Iterable, List, Optional

from ...schemas.document_contract import ParsedDefinition
from ...utils.pattern_manager import PatternManager, ZoneVocabulary, get_pattern_manager
from ...utils.text_cleaner import strip_html

logger = logging.getLogger(__name__)

MAX_DEFINITION_LENGTH = 4000
MIN_DEFINITION_LENGTH = 3


class DefinitionExtractor:
    """Extract defined terms from a single provision body."""

    def __init__(self, pattern_manager: Optional[PatternManager] = None):
        self.pattern_manager = pattern_manager or get_pattern_manager()

    def extract(
        self,
        body: str,
        vocabulary: ZoneVocabulary,
        source_provision: Optional[str] = None,
    ) -> List[ParsedDefinition]:
        """
        Extract definitions from a raw provision body.

        The body is normalized first, so entity-encoded quotes are recognized
        and attribute quotes inside tags never open a term. Bodies without the
        definitions marker yield nothing.

        Args:
            body: Raw HTML of one provision body
            vocabulary: Zone vocabulary (selects the English or Arabic clause pattern)
            source_provision: provision_ref the definitions come from

        Returns:
            Accepted definitions in document order (not deduplicated)
        """
        text = strip_html(body)
        if not self.pattern_manager.is_definitions_provision(text, vocabulary):
            return []

        definitions = []
        for match in self.pattern_manager.find_definitions(text, vocabulary):
            term = strip_html(match.term).strip()
            definition = strip_html(match.definition).strip()
            if not term or len(definition) <= MIN_DEFINITION_LENGTH:
                continue
            definitions.append(ParsedDefinition(
                term=term,
                definition=f'“{term}” {definition}'[:MAX_DEFINITION_LENGTH],
                source_provision=source_provision,
            ))

        if definitions:
            logger.debug(f"Extracted {len(definitions)} definitions from {source_provision}")
        return definitions


def deduplicate_definitions(definitions: Iterable[ParsedDefinition]) -> List[ParsedDefinition]:
    """Keep one definition per term: the longest, first-seen on ties."""
    by_term: Dict[str, ParsedDefinition] = {}
    for definition in definitions:
        existing = by_term.get(definition.term)
        if existing is None or len(definition.definition) > len(existing.definition):
            by_term[definition.term] = definition
    return list(by_term.values())
