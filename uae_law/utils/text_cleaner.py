"""
Text Cleaner for Legislative HTML
Turns raw HTML fragments from the three publishers into plain text

Tags are stripped (``<br>`` becomes a newline), every numeric and named
entity is decoded, non-breaking spaces become ordinary spaces, zero-width
spaces are removed, runs of spaces/tabs collapse to one, blank lines are
dropped and every line is trimmed.

Arabic script and its combining marks pass through untouched: there is no
Unicode normalization and no case folding anywhere in this module.
"""

import html as html_lib
import re

_BR_RE = re.compile(r'<br\s*/?>', re.IGNORECASE)
# Element tags and comments; a bare '<' in running text is not markup
_TAG_RE = re.compile(r'<!--.*?-->|</?[A-Za-z][^>]*>', re.DOTALL)
_SPACE_RUN_RE = re.compile(r'[ \t]+')

NBSP = '\u00a0'
ZERO_WIDTH_SPACE = '\u200b'

# Arabic-Indic (U+0660..) and Extended Arabic-Indic (U+06F0..) digits
_DIGIT_TABLE = str.maketrans(
    '٠١٢٣٤٥٦٧٨٩'
    '۰۱۲۳۴۵۶۷۸۹',
    '01234567890123456789',
)


def _normalize_once(text: str) -> str:
    """One pass of tag stripping, entity decoding and whitespace cleanup."""
    text = _BR_RE.sub('\n', text)
    text = _TAG_RE.sub(' ', text)
    text = html_lib.unescape(text)
    text = text.replace('\r\n', '\n').replace('\r', '\n')
    text = text.replace(NBSP, ' ').replace(ZERO_WIDTH_SPACE, '')
    text = _SPACE_RUN_RE.sub(' ', text)

    lines = (line.strip() for line in text.split('\n'))
    return '\n'.join(line for line in lines if line)


def strip_html(html: str) -> str:
    """
    Convert an HTML fragment to normalized plain text.

    The pass is repeated until the text stops changing, so that
    ``strip_html(strip_html(x)) == strip_html(x)`` holds even for input whose
    decoded entities spell out further markup (``&lt;b&gt;``) or entities
    (``&amp;amp;``). Every changing pass either shortens the text or removes
    a non-breaking space, so the loop terminates.

    Args:
        html: Raw HTML fragment (may be empty)

    Returns:
        Plain text, one trimmed non-empty line per line
    """
    if not html:
        return ''

    text = _normalize_once(html)
    while True:
        again = _normalize_once(text)
        if again == text:
            return text
        text = again


def normalize_digits(text: str) -> str:
    """Map Arabic-Indic and Extended Arabic-Indic digits to ASCII."""
    return text.translate(_DIGIT_TABLE)
