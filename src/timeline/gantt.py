"""
Conversion of grouped assets into the flat Gantt task list.

The renderer expects a three-level hierarchy encoded with parent ids:

    Location (summary, no parent)
      └── ProductGroup (summary, parent=location task id)
            └── Asset (task, parent=product task id)
"""

import logging
from typing import Dict, List

from src.timeline.store import ContractStatus, GanttData, GanttTask, LocationGroup

logger = logging.getLogger(__name__)

STATUS_COLORS: Dict[ContractStatus, str] = {
    "ok": "#7EC8E3",  # light blue, more than 2 years left
    "warning": "#0076CE",  # blue, 1-2 years
    "critical": "#003B6F",  # dark blue, under a year
    "expired": "#9ca3af",  # gray
}


def contract_status(days_remaining: int) -> ContractStatus:
    if days_remaining < 0:
        return "expired"
    if days_remaining < 365:
        return "critical"
    if days_remaining < 730:
        return "warning"
    return "ok"


def contract_status_color(days_remaining: int) -> str:
    return STATUS_COLORS[contract_status(days_remaining)]


def to_gantt_data(location_groups: List[LocationGroup]) -> GanttData:
    """
    Flatten location groups into sequentially numbered Gantt tasks.

    Parameters
    ----------
    location_groups : List[LocationGroup]
        Groups in display order

    Returns
    -------
    GanttData
        Tasks in depth-first order, ids starting at 1, no links
    """
    tasks: List[GanttTask] = []
    next_id = 1

    for location in location_groups:
        location_task_id = next_id
        next_id += 1
        label = ", ".join(
            part for part in (location.location_name, location.city, location.country) if part
        )
        tasks.append(
            GanttTask(
                id=location_task_id,
                text=label,
                start=location.location_start,
                end=location.location_end,
                type="summary",
                open=True,
            )
        )

        for group in location.product_groups:
            product_task_id = next_id
            next_id += 1
            count = len(group.assets)
            tasks.append(
                GanttTask(
                    id=product_task_id,
                    text=f"{group.product_name} ({count})" if count > 1 else group.product_name,
                    start=group.group_start,
                    end=group.group_end,
                    type="summary",
                    parent=location_task_id,
                    open=False,
                )
            )

            for asset in group.assets:
                tasks.append(
                    GanttTask(
                        id=next_id,
                        text=f"{asset.product_name} ({asset.asset_id})",
                        start=asset.install_date,
                        end=asset.contract_end,
                        type="task",
                        parent=product_task_id,
                        color=contract_status_color(asset.days_remaining),
                    )
                )
                next_id += 1

    logger.info(f"Built {len(tasks)} Gantt tasks from {len(location_groups)} locations")
    return GanttData(tasks=tasks, links=[])


def filter_tasks(tasks: List[GanttTask], search: str) -> List[GanttTask]:
    """
    Filter asset tasks by label while keeping their ancestors.

    A product is kept with only its matching assets, and a location is
    kept when any of its products is. If nothing matches, the full list
    is returned so the chart never goes blank.

    Parameters
    ----------
    tasks : List[GanttTask]
        Flat task list from to_gantt_data()
    search : str
        Case-insensitive substring to look for in asset labels

    Returns
    -------
    List[GanttTask]
        Filtered tasks in their original relative order
    """
    needle = search.strip().lower()
    if not needle:
        return tasks

    children: Dict[int, List[GanttTask]] = {}
    for task in tasks:
        if task.parent:
            children.setdefault(task.parent, []).append(task)

    result: List[GanttTask] = []
    for location_task in tasks:
        if location_task.parent or location_task.type != "summary":
            continue

        kept: List[GanttTask] = []
        for product_task in children.get(location_task.id, []):
            matching = [
                a for a in children.get(product_task.id, []) if needle in a.text.lower()
            ]
            if matching:
                kept.append(product_task)
                kept.extend(matching)

        if kept:
            result.append(location_task)
            result.extend(kept)

    if not result:
        logger.info(f"No asset matches search {search!r}, showing all tasks")
        return tasks
    return result
