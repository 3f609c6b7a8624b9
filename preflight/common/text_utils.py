"""
Text Utilities

Helper functions for header normalization, handle slugs, money and URL checks.
"""

import math
import re
import unicodedata
from urllib.parse import urlparse

# BOM, zero-width space/joiners and word joiner
_INVISIBLE_RE = re.compile('[\ufeff\u200b\u200c\u200d\u2060]')
_WHITESPACE_RE = re.compile(r'\s+')

# A plain decimal number: optional minus, digits, optional fraction
PLAIN_NUMBER_RE = re.compile(r'-?\d+(?:\.\d+)?')
PLAIN_INTEGER_RE = re.compile(r'-?\d+')

# Thousands separators are only stripped when they sit in valid group positions
_GROUPED_NUMBER_RE = re.compile(r'-?\d{1,3}(?:,\d{3})+(?:\.\d+)?')

_CURRENCY_SYMBOLS = '$£€¥₹₽₩₺₴₪'
_CURRENCY_CODES = (
    'USD', 'EUR', 'GBP', 'CAD', 'AUD', 'NZD', 'JPY', 'CHF', 'SEK', 'NOK',
    'DKK', 'PLN', 'INR', 'BGN', 'MXN', 'BRL', 'CNY', 'HKD', 'SGD',
)
_CURRENCY_CODE_RE = re.compile(
    r'^(?:' + '|'.join(_CURRENCY_CODES) + r')\s*|\s*(?:' + '|'.join(_CURRENCY_CODES) + r')$',
    re.IGNORECASE,
)


def normalize_header(header: str | None) -> str:
    """
    Normalize header text for matching and display.

    Strips BOM and zero-width characters, turns non-breaking spaces into
    spaces, collapses internal whitespace and trims.

    Args:
        header: Raw header text (None is treated as empty)

    Returns:
        Normalized header text
    """
    if header is None:
        return ''
    text = _INVISIBLE_RE.sub('', str(header)).replace('\xa0', ' ')
    return _WHITESPACE_RE.sub(' ', text).strip()


def header_key(header: str | None) -> str:
    """Case-insensitive matching key for a header."""
    return normalize_header(header).casefold()


def value_key(value: str | None) -> str:
    """Trimmed, case-insensitive comparison key for a cell value."""
    if value is None:
        return ''
    return str(value).strip().casefold()


def is_blank(value: str | None) -> bool:
    return value is None or not str(value).strip()


def slugify_handle(text: str) -> str:
    """
    Build a URL handle from free text.

    Example:
        >>> slugify_handle("Crème & Co. Shirt")
        'creme-and-co-shirt'
    """
    if not text:
        return ''
    text = unicodedata.normalize('NFKD', text)
    text = ''.join(ch for ch in text if not unicodedata.combining(ch))
    text = text.lower().replace('&', ' and ')
    text = re.sub(r'[^a-z0-9\s-]', ' ', text)
    text = re.sub(r'\s+', '-', text.strip())
    text = re.sub(r'-+', '-', text)
    return text.strip('-')


def is_plain_number(value: str) -> bool:
    return bool(PLAIN_NUMBER_RE.fullmatch(value.strip()))


def is_plain_integer(value: str) -> bool:
    return bool(PLAIN_INTEGER_RE.fullmatch(value.strip()))


def clean_money(value: str) -> str | None:
    """
    Strip currency decoration from a money value.

    Removes currency symbols, ISO currency codes, thousands separators in
    valid group positions and whitespace. The remainder must be a plain
    finite number, otherwise nothing is returned.

    Args:
        value: Raw cell value (e.g., '$1,299.50', '19.99 EUR')

    Returns:
        The plain number text (e.g., '1299.50'), or None if the value
        cannot be cleaned without guessing
    """
    if value is None:
        return None
    text = str(value).replace('\xa0', ' ').strip()
    text = _CURRENCY_CODE_RE.sub('', text).strip()
    text = text.translate({ord(ch): None for ch in _CURRENCY_SYMBOLS})
    text = _WHITESPACE_RE.sub('', text)
    if ',' in text:
        if not _GROUPED_NUMBER_RE.fullmatch(text):
            return None
        text = text.replace(',', '')
    if not PLAIN_NUMBER_RE.fullmatch(text):
        return None
    if not math.isfinite(float(text)):
        return None
    return text


def is_http_url(value: str) -> bool:
    """Check that a value is an absolute http(s) URL with a host."""
    text = (value or '').strip()
    if not text or any(ch.isspace() for ch in text):
        return False
    parsed = urlparse(text)
    return parsed.scheme in ('http', 'https') and bool(parsed.netloc)


def split_list(value: str, separator: str) -> list[str]:
    """Split a delimited cell value into trimmed, non-empty parts."""
    return [part.strip() for part in (value or '').split(separator) if part.strip()]
