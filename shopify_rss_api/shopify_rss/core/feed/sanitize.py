"""
Plain-text helpers for feed item fields.
"""

import re
from typing import List, Optional


MAX_DESCRIPTION_LENGTH = 500
ELLIPSIS = '...'

_TAG_RE = re.compile(r'<[^>]*>')
_WHITESPACE_RE = re.compile(r'\s+')

# Only these entities are decoded; order matters (&amp; first).
_ENTITIES = (
    ('&amp;', '&'),
    ('&lt;', '<'),
    ('&gt;', '>'),
    ('&quot;', '"'),
    ('&#39;', "'"),
    ('&nbsp;', ' '),
)


def clean_description(html: Optional[str]) -> str:
    """
    Turn an HTML product description into a short plain-text summary.

    Tags are stripped with a regex (not parsed), a fixed set of six named
    entities is decoded, whitespace is collapsed, and the result is cut to
    500 characters with a trailing ellipsis.
    """
    if not html:
        return ''

    clean = _TAG_RE.sub('', html)
    for entity, char in _ENTITIES:
        clean = clean.replace(entity, char)

    clean = _WHITESPACE_RE.sub(' ', clean).strip()

    if len(clean) > MAX_DESCRIPTION_LENGTH:
        clean = clean[:MAX_DESCRIPTION_LENGTH - len(ELLIPSIS)] + ELLIPSIS

    return clean


def split_tags(tags: Optional[str]) -> List[str]:
    """Split a comma-separated tag string, trimming tokens and dropping empty ones."""
    if not tags:
        return []
    return [tag.strip() for tag in tags.split(',') if tag.strip()]
