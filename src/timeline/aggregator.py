"""
Pipeline Aggregator for the Asset Contract Timeline.

Runs one asset export through every stage and returns an immutable
Snapshot ready for the renderer.

The aggregator:
1. Resolves the export's headers to canonical fields
2. Normalises rows and admits active hardware assets
3. Groups assets by location and product
4. Flattens the groups into a Gantt task list
5. Computes the time axis for the selected zoom preset
6. Returns an immutable Snapshot

Each call recomputes everything from scratch. When loads overlap, the
caller keeps the snapshot with the highest version (last caller wins).
"""

import logging
import uuid
from datetime import date, datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional

from src.timeline.assets import filter_assets, to_raw_asset
from src.timeline.gantt import filter_tasks, to_gantt_data
from src.timeline.grouper import filter_location_groups, group_assets
from src.timeline.headers import resolve_headers
from src.timeline.store import GanttData, Snapshot
from src.timeline.time_axis import (
    DEFAULT_CELL_WIDTH,
    DEFAULT_ZOOM,
    compute_time_axis,
    get_zoom_preset,
)

logger = logging.getLogger(__name__)

NO_MATCH_MESSAGE = "No hardware assets with active contracts found"


class Aggregator:
    """
    Builds timeline snapshots from asset exports.
    """

    def __init__(self, cell_width: int = DEFAULT_CELL_WIDTH, default_zoom: str = DEFAULT_ZOOM):
        """
        Initialize the aggregator.

        Parameters
        ----------
        cell_width : int
            Pixel width of one bottom axis column (default 70)
        default_zoom : str
            Zoom preset used when a load does not name one
        """
        # Fail early on a misconfigured preset
        get_zoom_preset(default_zoom)

        self.cell_width = cell_width
        self.default_zoom = default_zoom
        self.snapshot_version_counter = 0

        logger.info(f"Initialized Aggregator: cell_width={cell_width}, zoom={default_zoom}")

    def create_snapshot(
        self,
        headers: List[str],
        rows: Iterable[Mapping[str, Any]],
        file_name: Optional[str] = None,
        today: Optional[date] = None,
        zoom: Optional[str] = None,
        search: str = "",
        location_ids: Optional[Iterable[str]] = None,
        cell_width: Optional[int] = None,
    ) -> Snapshot:
        """
        Create a complete snapshot for one export.

        Parameters
        ----------
        headers : List[str]
            Header row of the export
        rows : Iterable[Mapping[str, Any]]
            Rows keyed by header text
        file_name : Optional[str]
            Name of the export, echoed in the snapshot
        today : Optional[date]
            Reference date for ages and days remaining (default today)
        zoom : Optional[str]
            Zoom preset label (default the aggregator's default zoom)
        search : str
            Optional asset label filter applied to the task list
        location_ids : Optional[Iterable[str]]
            Optional location selection (None or empty = all)
        cell_width : Optional[int]
            Override of the aggregator's bottom column width

        Returns
        -------
        Snapshot
            Complete snapshot with groups, tasks and time axis

        Raises
        ------
        HeaderResolutionError
            If none of the headers is recognised
        ValueError
            If the zoom preset is unknown
        """
        snapshot_start = datetime.now(timezone.utc)
        self.snapshot_version_counter += 1
        version = self.snapshot_version_counter
        today = today or date.today()
        preset = get_zoom_preset(zoom or self.default_zoom)

        logger.info(
            f"Creating snapshot v{version}: file={file_name}, today={today}, zoom={preset.label}"
        )

        # Step 1: Resolve headers (the only fatal failure)
        field_map = resolve_headers(headers)

        # Step 2: Normalise and admit rows
        raw_assets = [to_raw_asset(row, field_map) for row in rows]
        assets = filter_assets(raw_assets, today)

        if not assets:
            logger.warning(f"Snapshot v{version}: no matching assets in {len(raw_assets)} rows")
            return Snapshot(
                snapshot_id=str(uuid.uuid4()),
                snapshot_version=version,
                timestamp=snapshot_start,
                reference_date=today,
                file_name=file_name,
                field_map=field_map,
                total_rows=len(raw_assets),
                message=NO_MATCH_MESSAGE,
                zoom=preset.label,
            )

        # Step 3: Group, then narrow to the selected locations
        location_groups = group_assets(assets)
        visible_groups = filter_location_groups(location_groups, location_ids or [])

        # Step 4: Flatten and apply the label search
        gantt = to_gantt_data(visible_groups)
        tasks = filter_tasks(gantt.tasks, search)

        # Step 5: Lay out the axis for what will actually be drawn
        time_axis = compute_time_axis(tasks, preset.scales, cell_width or self.cell_width)

        snapshot = Snapshot(
            snapshot_id=str(uuid.uuid4()),
            snapshot_version=version,
            timestamp=snapshot_start,
            reference_date=today,
            file_name=file_name,
            field_map=field_map,
            total_rows=len(raw_assets),
            total_assets=len(assets),
            message=f"Loaded {len(assets)} assets across {len(location_groups)} locations",
            zoom=preset.label,
            location_groups=location_groups,
            gantt=GanttData(tasks=tasks, links=gantt.links),
            time_axis=time_axis,
        )

        elapsed_ms = (datetime.now(timezone.utc) - snapshot_start).total_seconds() * 1000
        logger.info(
            f"Snapshot v{version} created in {elapsed_ms:.1f}ms: "
            f"{len(assets)} assets, {len(location_groups)} locations, "
            f"{len(tasks)} tasks"
        )
        return snapshot
