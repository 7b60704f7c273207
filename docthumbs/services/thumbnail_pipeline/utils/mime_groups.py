# docthumbs/services/thumbnail_pipeline/utils/mime_groups.py
"""
Mime type group matching used by the capability gate.
"""

import mimetypes
from fnmatch import fnmatchcase
from typing import Dict, Iterable, List, Optional

from ....constants import MIME_TYPE_GROUPS


def normalize_mime_type(mime_type: Optional[str]) -> Optional[str]:
    """Lower-case a mime type and strip parameters such as '; charset=utf-8'."""
    if not mime_type:
        return None
    base = mime_type.split(";", 1)[0].strip().lower()
    return base or None


def is_mime_type_group(
    mime_type: Optional[str],
    groups: Iterable[str],
    group_definitions: Optional[Dict[str, List[str]]] = None,
) -> bool:
    """
    Check whether a mime type belongs to any of the named groups.

    Args:
        mime_type: Mime type to test (parameters are ignored)
        groups: Group names, e.g. ["pdf", "word"]; unknown names match nothing
        group_definitions: Override of MIME_TYPE_GROUPS

    Returns:
        True if any pattern of any listed group matches
    """
    normalized = normalize_mime_type(mime_type)
    if normalized is None:
        return False

    definitions = MIME_TYPE_GROUPS if group_definitions is None else group_definitions
    for group in groups:
        for pattern in definitions.get(group.strip().lower(), ()):
            if fnmatchcase(normalized, pattern):
                return True
    return False


def guess_extension(mime_type: Optional[str]) -> str:
    """File suffix for a mime type (e.g. '.docx'), or '' when unknown."""
    normalized = normalize_mime_type(mime_type)
    if normalized is None:
        return ""
    return mimetypes.guess_extension(normalized) or ""
