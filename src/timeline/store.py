"""
Data Models for the Asset Contract Timeline.

This module defines the records produced at each stage of the pipeline,
from raw spreadsheet rows to the snapshot handed to the renderer.

Key principles:
- ALL calendar values are plain dates (no time of day)
- Records are rebuilt from scratch on every load
- Snapshots are immutable (create a new snapshot for every load)
- The rendered hierarchy is a flat task list with integer parent ids
"""

import json
from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Literal, Optional, Tuple

ContractStatus = Literal["ok", "warning", "critical", "expired"]
TimeUnit = Literal["year", "month", "day"]

TIME_UNITS = ("year", "month", "day")


@dataclass(frozen=True)
class RawAssetRecord:
    """
    One export row projected onto the canonical fields.

    Values are trimmed strings, not yet interpreted. Fields whose header
    was not found in the export are empty strings.
    """

    asset_id: str = ""
    product_name: str = ""
    product_type: str = ""
    install_base_age: str = ""
    location_id: str = ""
    location_name: str = ""
    services_status: str = ""
    contract_end_date: str = ""
    end_of_standard_support: str = ""
    city: str = ""
    country: str = ""


@dataclass(frozen=True)
class ParsedAssetRecord:
    """
    Admitted hardware asset with its contract dates interpreted.

    Parameters
    ----------
    asset_id : str
        Asset (service tag) identifier
    product_name : str
        Product model name
    location_id : str
        Identifier of the site the asset is installed at
    location_name : str
        Site name
    city : str
        Site city
    country : str
        Site country
    install_date : date
        Estimated install date (contract end when the age is unknown)
    contract_end : date
        Contract end, falling back to end of standard support
    days_remaining : int
        Whole days from today to contract end (negative = lapsed)
    """

    asset_id: str
    product_name: str
    location_id: str
    location_name: str
    city: str
    country: str
    install_date: date
    contract_end: date
    days_remaining: int


@dataclass
class ProductGroup:
    """
    Assets sharing the same product name within a location.

    Parameters
    ----------
    product_name : str
        Shared product name
    assets : List[ParsedAssetRecord]
        Assets sorted by contract end (soonest first)
    group_start : date
        Earliest install date across the assets
    group_end : date
        Latest contract end across the assets
    """

    product_name: str
    assets: List[ParsedAssetRecord]
    group_start: date
    group_end: date


@dataclass
class LocationGroup:
    """
    Top-level grouping by location.

    Name, city and country come from the first asset seen for the
    location in the export, not from any sorted order.
    """

    location_id: str
    location_name: str
    city: str
    country: str
    product_groups: List[ProductGroup]
    location_start: date  # Earliest group_start
    location_end: date  # Latest group_end


@dataclass
class GanttTask:
    """
    Renderable timeline node.

    Parameters
    ----------
    id : int
        Sequential id, assigned in traversal order starting at 1
    text : str
        Bar label
    start : date
        Bar start
    end : date
        Bar end
    type : str
        'summary' for location and product nodes, 'task' for assets
    parent : Optional[int]
        Id of the parent node (None = root)
    color : Optional[str]
        Hex bar colour (assets only)
    open : Optional[bool]
        Initial expanded state (summary nodes only)
    """

    id: int
    text: str
    start: date
    end: date
    type: Literal["summary", "task"]
    parent: Optional[int] = None
    color: Optional[str] = None
    open: Optional[bool] = None


@dataclass
class GanttData:
    """Flat task list plus the dependency links (always empty for now)."""

    tasks: List[GanttTask] = field(default_factory=list)
    links: List[Dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class ZoomScale:
    """
    One row of the time axis.

    Parameters
    ----------
    unit : str
        One of: 'year', 'month', 'day'
    step : int
        Number of units per column (must be positive)
    label_format : str
        One of: '%Y', '%M', '%M %Y', '%j'
    """

    unit: TimeUnit
    step: int
    label_format: str

    def __post_init__(self) -> None:
        """Validate unit and step."""
        if self.unit not in TIME_UNITS:
            raise ValueError(f"Unknown time unit: {self.unit!r}")
        if self.step < 1:
            raise ValueError(f"Scale step must be positive, got {self.step}")


@dataclass(frozen=True)
class ZoomPreset:
    """Named pair of scales: (coarse top row, fine bottom row)."""

    label: str
    scales: Tuple[ZoomScale, ZoomScale]


@dataclass
class TimeColumn:
    label: str
    x: int
    width: int


@dataclass
class TimeAxis:
    """
    Two-row calendar axis geometry.

    Dates are None when the axis is degenerate (no tasks or missing scales).
    """

    top_row: List[TimeColumn] = field(default_factory=list)
    bottom_row: List[TimeColumn] = field(default_factory=list)
    total_width: int = 0
    start_date: Optional[date] = None
    end_date: Optional[date] = None


def _serialize(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _serialize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialize(v) for v in value]
    return value


@dataclass
class Snapshot:
    """
    Immutable result of loading one asset export.

    Parameters
    ----------
    snapshot_id : str
        Unique snapshot identifier
    snapshot_version : int
        Incrementing version, lets callers discard stale results
    timestamp : datetime
        When snapshot was created (must be timezone-aware UTC)
    file_name : Optional[str]
        Name of the loaded export, if known
    reference_date : date
        "Today" used for install ages and days remaining
    field_map : Dict[str, str]
        Canonical field -> header text found in the export
    total_rows : int
        Number of rows in the export
    total_assets : int
        Number of rows admitted as active hardware assets
    message : str
        Human-readable load summary
    zoom : str
        Label of the zoom preset used for the time axis
    location_groups : List[LocationGroup]
        Grouped assets, soonest-ending location first
    gantt : GanttData
        Flat task list for the renderer
    time_axis : TimeAxis
        Axis geometry for the task list
    """

    snapshot_id: str
    snapshot_version: int
    timestamp: datetime
    reference_date: date
    file_name: Optional[str] = None
    field_map: Dict[str, str] = field(default_factory=dict)
    total_rows: int = 0
    total_assets: int = 0
    message: str = ""
    zoom: str = ""
    location_groups: List[LocationGroup] = field(default_factory=list)
    gantt: GanttData = field(default_factory=GanttData)
    time_axis: TimeAxis = field(default_factory=TimeAxis)

    def __post_init__(self) -> None:
        """Validate timezone-aware timestamp."""
        if self.timestamp.tzinfo is None:
            raise ValueError("Snapshot timestamp must be timezone-aware")

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert snapshot to JSON-serializable dictionary.

        Returns
        -------
        dict
            JSON-serializable representation, dates as ISO strings
        """
        return _serialize(asdict(self))

    def to_json(self) -> str:
        """
        Convert snapshot to JSON string.

        Returns
        -------
        str
            JSON string representation
        """
        return json.dumps(self.to_dict(), indent=2)
