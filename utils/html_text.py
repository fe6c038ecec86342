"""
Text-level helpers for the Netscape bookmark dialect: attribute tokenizing,
entity decoding, tag stripping and timestamp interpretation.
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

# NAME="value", NAME='value' or NAME=value
_ATTR_RE = re.compile(r"""(\w+)=(?:"([^"]*)"|'([^']*)'|(\S+))""")

_ENTITY_RE = re.compile(r"&(?:(amp|lt|gt|quot|apos|nbsp)|#(\d+)|#[xX]([0-9a-fA-F]+));")

_NAMED_ENTITIES = {
    'amp': '&',
    'lt': '<',
    'gt': '>',
    'quot': '"',
    'apos': "'",
    'nbsp': ' ',
}

_TAG_RE = re.compile(r"<[^>]*>")

_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Above this magnitude a timestamp is read as milliseconds
MILLISECONDS_THRESHOLD = 10 ** 12


def parse_attributes(attr_text: str) -> Dict[str, str]:
    """
    Tokenize the raw attribute text of a tag into a mapping.
    Keys are upper-cased; a repeated attribute keeps its last value.
    """
    attributes = {}
    for match in _ATTR_RE.finditer(attr_text or ''):
        name, double_quoted, single_quoted, bare = match.groups()
        if double_quoted is not None:
            value = double_quoted
        elif single_quoted is not None:
            value = single_quoted
        else:
            value = bare or ''
        attributes[name.upper()] = value
    return attributes


def _replace_entity(match: 're.Match') -> str:
    named, decimal, hexadecimal = match.groups()
    if named:
        return _NAMED_ENTITIES[named]
    try:
        if decimal is not None:
            return chr(int(decimal, 10))
        return chr(int(hexadecimal, 16))
    except (ValueError, OverflowError):
        # Not a valid code point, leave it as written
        return match.group(0)


def decode_html_entities(text: str) -> str:
    """
    Decode the basic named entities plus decimal and hex references.
    Anything else (e.g. &eacute;) is left untouched.
    """
    return _ENTITY_RE.sub(_replace_entity, text)


def extract_text_content(html_fragment: str) -> str:
    """Strip tags from a fragment, trim it and decode its entities"""
    return decode_html_entities(_TAG_RE.sub('', html_fragment).strip())


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Convert an ADD_DATE / LAST_MODIFIED style value into a UTC datetime.

    Values above 1e12 are taken as milliseconds since the epoch, everything
    else as seconds. That misreads dates thousands of years away, which never
    occur in real exports.
    """
    if not value:
        return None

    match = _LEADING_INT_RE.match(value)
    if not match:
        return None
    number = int(match.group(1))

    try:
        if number > MILLISECONDS_THRESHOLD:
            return EPOCH + timedelta(milliseconds=number)
        return EPOCH + timedelta(seconds=number)
    except OverflowError:
        return None
