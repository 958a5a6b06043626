"""
MIME type sniffing for uploaded file contents

Signature detection (filetype) wins over the text heuristic, which wins over
the type declared by the client.
"""
import codecs
import logging
from typing import Optional

import filetype


logger = logging.getLogger(__name__)

TEXT_MIME_TYPE = 'text/plain'

# Bytes inspected by the text heuristic
TEXT_SAMPLE_SIZE = 8192

# Highest code point that marks a buffer as binary
BINARY_MAX_CODE_POINT = 0x08

REPLACEMENT_CHARACTER = '\ufffd'


def detect_signature(buffer: bytes) -> Optional[str]:
    """
    Return the canonical MIME type of a known binary format, or None
    """
    kind = filetype.guess(buffer)
    if kind is None:
        return None
    return kind.mime


def is_text(buffer: bytes) -> Optional[bool]:
    """
    Classify a buffer as text or binary

    The sample is decoded as UTF-8; it is binary when a character is U+0008
    or lower, or could not be decoded. Other control characters (DOS EOF,
    record separators, DEL) still count as text.

    Returns None for an empty buffer, where no determination is possible.
    """
    if not buffer:
        return None

    sample = buffer[:TEXT_SAMPLE_SIZE]

    # A multi-byte character may be cut at the end of the sample
    decoder = codecs.getincrementaldecoder('utf-8')(errors='replace')
    text = decoder.decode(sample, final=len(sample) == len(buffer))

    for char in text:
        if char == REPLACEMENT_CHARACTER or ord(char) <= BINARY_MAX_CODE_POINT:
            return False
    return True


def sniff_mime_type(buffer: bytes) -> Optional[str]:
    """
    Determine a trustworthy MIME type from file contents

    Returns None when the contents give no answer and the declared type
    should be kept.
    """
    mime_type = detect_signature(buffer)
    if mime_type:
        return mime_type

    if is_text(buffer):
        return TEXT_MIME_TYPE

    return None


def resolve_mime_type(buffer: bytes, declared_type: str) -> str:
    """
    Effective MIME type of an upload: the sniffed type, or the declared one
    """
    sniffed = sniff_mime_type(buffer)
    if sniffed is None:
        return declared_type

    if sniffed != declared_type:
        logger.debug("Declared type %s overridden by sniffed type %s", declared_type, sniffed)
    return sniffed
