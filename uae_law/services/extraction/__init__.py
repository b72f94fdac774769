"""HTML to structured document extraction."""

from .definition_extractor import DefinitionExtractor, deduplicate_definitions
from .html_parser import (
    parse_adgm_regulation_html,
    parse_difc_law_html,
    parse_federal_law_html,
    parse_law_html,
)
from .provision_extractor import ExtractionResult, ProvisionExtractor, deduplicate_provisions, extract_provisions

__all__ = [
    "DefinitionExtractor",
    "ExtractionResult",
    "ProvisionExtractor",
    "deduplicate_definitions",
    "deduplicate_provisions",
    "extract_provisions",
    "parse_adgm_regulation_html",
    "parse_difc_law_html",
    "parse_federal_law_html",
    "parse_law_html",
]
