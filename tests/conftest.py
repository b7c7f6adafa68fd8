"""Shared fixtures for the asset timeline tests."""

from datetime import date

import pytest

from src.timeline.store import ParsedAssetRecord

EN_HEADERS = [
    "Asset ID",
    "Product Name",
    "Product Type",
    "Install Base Age",
    "Location ID",
    "Location Name",
    "Services Status",
    "Contract End Date",
    "End of Standard Support",
    "City",
    "Country",
]


def make_row(**overrides):
    """Build an English export row for an active hardware asset."""
    row = {
        "Asset ID": "SVC001",
        "Product Name": "PowerEdge R740",
        "Product Type": "HARDWARE",
        "Install Base Age": "2yr, 0mo, 0d",
        "Location ID": "LOC001",
        "Location Name": "Main DC",
        "Services Status": "Active",
        "Contract End Date": "July 23, 2026",
        "End of Standard Support": "",
        "City": "Geneva",
        "Country": "Switzerland",
    }
    row.update(overrides)
    return row


def make_asset(**overrides) -> ParsedAssetRecord:
    """Build a parsed asset with sensible defaults."""
    values = {
        "asset_id": "A1",
        "product_name": "PowerEdge R740",
        "location_id": "LOC001",
        "location_name": "Main DC",
        "city": "Geneva",
        "country": "Switzerland",
        "install_date": date(2022, 1, 1),
        "contract_end": date(2027, 1, 1),
        "days_remaining": 730,
    }
    values.update(overrides)
    return ParsedAssetRecord(**values)


@pytest.fixture
def today():
    """Fixed reference date so day counts are stable."""
    return date(2025, 1, 1)


@pytest.fixture
def en_headers():
    return list(EN_HEADERS)


@pytest.fixture
def sample_rows():
    """
    Mixed export: four admitted assets over two locations plus three
    rows that must be dropped (software, expired status, no end date).
    """
    return [
        make_row(**{"Asset ID": "SVC001", "Contract End Date": "July 23, 2026"}),
        make_row(**{"Asset ID": "SVC002", "Contract End Date": "March 05, 2026"}),
        make_row(**{
            "Asset ID": "SVC003",
            "Product Name": "PowerVault ME4",
            "Contract End Date": "Unavailable",
            "End of Standard Support": "January 10, 2028",
        }),
        make_row(**{
            "Asset ID": "SVC004",
            "Location ID": "LOC002",
            "Location Name": "Remote Office",
            "City": "Zurich",
            "Contract End Date": "December 01, 2025",
        }),
        make_row(**{"Asset ID": "SW001", "Product Type": "SOFTWARE"}),
        make_row(**{"Asset ID": "SVC005", "Services Status": "Expired"}),
        make_row(**{"Asset ID": "SVC006", "Contract End Date": "2026-07-23"}),
    ]


@pytest.fixture
def row_factory():
    return make_row


@pytest.fixture
def asset_factory():
    return make_asset
