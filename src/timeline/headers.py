"""
Header resolution for multilingual asset exports.

Maps whatever header text a given locale's export uses onto the fixed set
of canonical field names the rest of the pipeline works with.
"""

import logging
from typing import Dict, List

from src.timeline.locales import CANONICAL_FIELDS, HEADER_ALIASES

logger = logging.getLogger(__name__)

FieldMap = Dict[str, str]


class HeaderResolutionError(ValueError):
    """Raised when none of the export's headers match a known alias."""


def _normalize(header: str) -> str:
    return header.strip().casefold()


def resolve_headers(raw_headers: List[str]) -> FieldMap:
    """
    Resolve each canonical field to the header actually present in the file.

    Matching is exact after trimming whitespace and ignoring case. The
    first header (in file order) matching any alias of a field wins, and
    the original header text is kept so rows can be looked up with it.

    Parameters
    ----------
    raw_headers : List[str]
        Header row as found in the export

    Returns
    -------
    FieldMap
        Canonical field -> header text ("" for fields not present)

    Raises
    ------
    HeaderResolutionError
        If not a single canonical field could be resolved
    """
    normalized = [_normalize(h) for h in raw_headers]

    field_map: FieldMap = {}
    for canonical, aliases in HEADER_ALIASES.items():
        wanted = {_normalize(a) for a in aliases}
        for header, key in zip(raw_headers, normalized):
            if key in wanted:
                field_map[canonical] = header
                break

    if not field_map:
        raise HeaderResolutionError(
            "No recognised asset export headers found. Please check the file format."
        )

    missing = [f for f in CANONICAL_FIELDS if f not in field_map]
    logger.info(
        f"Resolved {len(field_map)}/{len(CANONICAL_FIELDS)} canonical fields "
        f"from {len(raw_headers)} headers"
    )
    if missing:
        logger.debug(f"Unresolved fields: {', '.join(missing)}")

    return {field: field_map.get(field, "") for field in CANONICAL_FIELDS}
