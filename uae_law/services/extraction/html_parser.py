"""
Zone document parsers.

Build a ParsedDocument from a publisher HTML page and its catalog entry:

* federal (moj.gov.ae): Arabic or English, language detected from content,
  optional description from the long title / preamble block
* DIFC (difclaws.com): English, Article/Section numbering
* ADGM (adgm.com): English, Section/Rule/Regulation numbering
"""

import logging
import re
from typing import Optional

from bs4 import BeautifulSoup

from ...schemas.document_contract import LawEntry, LegalZone, ParsedDocument
from ...utils.pattern_manager import VocabularyKey, get_pattern_manager
from ...utils.text_cleaner import strip_html
from .provision_extractor import ExtractionResult, ProvisionExtractor

logger = logging.getLogger(__name__)

_ARABIC_DESCRIPTION_CLASS = re.compile(r'long-title|preamble')
_ENGLISH_DESCRIPTION_CLASS = re.compile(r'long-title|preamble|subtitle')


def _extract_description(html: str, is_arabic: bool) -> Optional[str]:
    """Normalized text of the first long-title/preamble element."""
    soup = BeautifulSoup(html, 'html.parser')
    class_pattern = _ARABIC_DESCRIPTION_CLASS if is_arabic else _ENGLISH_DESCRIPTION_CLASS
    element = soup.find(class_=class_pattern)
    if element is None:
        return None
    return strip_html(element.decode_contents()) or None


def _build_document(
    entry: LawEntry,
    extraction: ExtractionResult,
    legal_zone: LegalZone,
    language: str,
    title_en: str,
    description: Optional[str] = None,
) -> ParsedDocument:
    return ParsedDocument(
        id=entry.id,
        title=entry.title,
        title_en=title_en,
        short_name=entry.short_name,
        status=entry.status,
        issued_date=entry.issued_date,
        in_force_date=entry.in_force_date,
        url=entry.url,
        description=description,
        legal_zone=legal_zone,
        language=language,
        provisions=extraction.provisions,
        definitions=extraction.definitions,
    )


def parse_federal_law_html(html: str, entry: LawEntry) -> ParsedDocument:
    """
    Parse a federal law page.

    The page is Arabic iff it contains the marker المادة; Arabic pages are
    segmented on المادة, English pages on Article (case-sensitive).
    """
    pattern_manager = get_pattern_manager()
    is_arabic = pattern_manager.is_arabic(html)
    key = VocabularyKey.FEDERAL_AR if is_arabic else VocabularyKey.FEDERAL_EN

    extraction = ProvisionExtractor(pattern_manager).extract(html, key, entry.id)

    return _build_document(
        entry,
        extraction,
        legal_zone=LegalZone.FEDERAL,
        language='ar' if is_arabic else 'en',
        title_en=entry.title_en or entry.title,
        description=_extract_description(html, is_arabic),
    )


def parse_difc_law_html(html: str, entry: LawEntry) -> ParsedDocument:
    """Parse a DIFC law page (English, Article -> artN, Section -> sN)."""
    extraction = ProvisionExtractor().extract(html, VocabularyKey.DIFC, entry.id)
    return _build_document(
        entry,
        extraction,
        legal_zone=LegalZone.DIFC,
        language='en',
        title_en=entry.title,
    )


def parse_adgm_regulation_html(html: str, entry: LawEntry) -> ParsedDocument:
    """Parse an ADGM regulation page (English, Section/Rule/Regulation -> sN)."""
    extraction = ProvisionExtractor().extract(html, VocabularyKey.ADGM, entry.id)
    return _build_document(
        entry,
        extraction,
        legal_zone=LegalZone.ADGM,
        language='en',
        title_en=entry.title,
    )


_PARSERS = {
    LegalZone.FEDERAL: parse_federal_law_html,
    LegalZone.DIFC: parse_difc_law_html,
    LegalZone.ADGM: parse_adgm_regulation_html,
}


def parse_law_html(html: str, entry: LawEntry) -> ParsedDocument:
    """Dispatch to the parser for the entry's legal zone."""
    return _PARSERS[entry.legal_zone](html, entry)
