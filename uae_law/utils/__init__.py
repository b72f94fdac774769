"""
Utilities Package
Logging, HTTP, text cleaning and pattern helpers shared by all services.
"""

from .logging import get_logger, log_api_request, log_document, log_error, log_timing, setup_logging
from .text_cleaner import normalize_digits, strip_html

__all__ = [
    'get_logger',
    'log_api_request',
    'log_document',
    'log_error',
    'log_timing',
    'setup_logging',
    'normalize_digits',
    'strip_html',
]
