# core/sanitizers.py
"""
Input sanitization for user-entered text.

All free text (titles, providers, descriptions, comments) should pass
through these functions before being stored or printed on a certificate.
"""
import html
import re
from typing import Optional

import bleach


def sanitize_text(text: Optional[str], max_length: Optional[int] = None, strip: bool = True) -> str:
    """
    Sanitize plain text input.

    - Strips leading/trailing whitespace
    - Removes control characters
    - Enforces maximum length
    - Returns empty string for None input
    """
    if text is None:
        return ""

    if strip:
        text = text.strip()

    # Remove control characters except newlines and tabs
    text = re.sub(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]', '', text)

    if max_length and len(text) > max_length:
        text = text[:max_length]

    return text


def sanitize_title(title: Optional[str], max_length: int = 255) -> str:
    """
    Single-line text: activity titles, provider and venue names.
    """
    text = sanitize_text(title, max_length=max_length)
    # Replace newlines with spaces
    text = re.sub(r'[\r\n]+', ' ', text)
    # Collapse multiple spaces
    text = re.sub(r'\s+', ' ', text)
    return text


def sanitize_description(description: Optional[str], max_length: int = 10000) -> str:
    """
    Multi-line plain text. Any markup is stripped, not escaped.
    """
    if description is None:
        return ""
    clean = bleach.clean(description, tags=set(), attributes={}, strip=True)
    # bleach escapes entities; the field is plain text, not HTML
    clean = html.unescape(clean)
    return sanitize_text(clean, max_length=max_length)
