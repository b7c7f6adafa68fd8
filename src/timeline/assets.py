"""
Row normalisation, inclusion filtering and asset parsing.

A row is admitted only when it describes hardware, has an active
services status and carries a parseable end date.
"""

import logging
from datetime import date
from typing import Any, List, Mapping, Optional

from src.timeline.dates import parse_contract_date, parse_install_base_age
from src.timeline.headers import FieldMap
from src.timeline.locales import ACTIVE_VALUES, HARDWARE_VALUES
from src.timeline.store import ParsedAssetRecord, RawAssetRecord

logger = logging.getLogger(__name__)

_HARDWARE = {v.casefold() for v in HARDWARE_VALUES}
_ACTIVE = {v.casefold() for v in ACTIVE_VALUES}


class AssetRecordError(ValueError):
    """Raised when a record without a usable end date is parsed."""


def _cell(row: Mapping[str, Any], header: str) -> str:
    if not header:
        return ""
    value = row.get(header)
    if value is None:
        return ""
    return str(value).strip()


def to_raw_asset(row: Mapping[str, Any], field_map: FieldMap) -> RawAssetRecord:
    """Project a row keyed by the export's headers onto the canonical fields."""
    return RawAssetRecord(**{name: _cell(row, header) for name, header in field_map.items()})


def _contract_end(raw: RawAssetRecord) -> Optional[date]:
    # Contract end date takes priority over end of standard support
    return parse_contract_date(raw.contract_end_date) or parse_contract_date(
        raw.end_of_standard_support
    )


def is_hardware(raw: RawAssetRecord) -> bool:
    return raw.product_type.casefold() in _HARDWARE


def is_active(raw: RawAssetRecord) -> bool:
    return raw.services_status.casefold() in _ACTIVE


def is_included(raw: RawAssetRecord) -> bool:
    """
    Check whether a record belongs on the timeline.

    Returns
    -------
    bool
        True if the product is hardware, its services are active and it
        has a parseable contract end (or end of standard support) date
    """
    return is_hardware(raw) and is_active(raw) and _contract_end(raw) is not None


def _build_parsed(raw: RawAssetRecord, contract_end: date, today: date) -> ParsedAssetRecord:
    install_date = parse_install_base_age(raw.install_base_age, today) or contract_end
    return ParsedAssetRecord(
        asset_id=raw.asset_id,
        product_name=raw.product_name,
        location_id=raw.location_id,
        location_name=raw.location_name,
        city=raw.city,
        country=raw.country,
        install_date=install_date,
        contract_end=contract_end,
        days_remaining=(contract_end - today).days,
    )


def to_parsed_asset(raw: RawAssetRecord, today: Optional[date] = None) -> ParsedAssetRecord:
    """
    Derive install date, contract end and days remaining for a record.

    Parameters
    ----------
    raw : RawAssetRecord
        Record that already passed is_included()
    today : Optional[date]
        Reference date (default today)

    Returns
    -------
    ParsedAssetRecord
        Parsed asset

    Raises
    ------
    AssetRecordError
        If neither end date field parses
    """
    contract_end = _contract_end(raw)
    if contract_end is None:
        raise AssetRecordError(
            f"Asset {raw.asset_id or '<unknown>'} has no parseable contract end date"
        )
    return _build_parsed(raw, contract_end, today or date.today())


def try_parse_asset(raw: RawAssetRecord, today: Optional[date] = None) -> Optional[ParsedAssetRecord]:
    """Check inclusion and parse in one pass; None when the record is excluded."""
    if not (is_hardware(raw) and is_active(raw)):
        return None
    contract_end = _contract_end(raw)
    if contract_end is None:
        return None
    return _build_parsed(raw, contract_end, today or date.today())


def filter_assets(raws: List[RawAssetRecord], today: Optional[date] = None) -> List[ParsedAssetRecord]:
    """Parse every admitted record, keeping input order."""
    today = today or date.today()
    parsed = []
    for raw in raws:
        asset = try_parse_asset(raw, today)
        if asset is not None:
            parsed.append(asset)

    logger.info(f"Admitted {len(parsed)}/{len(raws)} rows as active hardware assets")
    return parsed
