from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class TimelineRequest(BaseModel):
    headers: List[str]
    rows: List[Dict[str, Any]] = Field(default_factory=list)
    file_name: Optional[str] = None
    today: Optional[date] = None
    zoom: Optional[str] = None
    search: str = ""
    location_ids: List[str] = Field(default_factory=list)
    cell_width: Optional[int] = Field(default=None, gt=0)


class ZoomScaleModel(BaseModel):
    unit: str
    step: int
    label_format: str


class ZoomPresetModel(BaseModel):
    label: str
    scales: List[ZoomScaleModel]


class ZoomPresetsResponse(BaseModel):
    presets: List[ZoomPresetModel]
    default: str
