"""
FastAPI backend for the Asset Contract Timeline.

Accepts decoded asset export rows and returns a timeline snapshot:
grouped assets, the flat Gantt task list and the time axis geometry.
Supports CORS for local development.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from backend.schemas import (
    TimelineRequest,
    ZoomPresetModel,
    ZoomPresetsResponse,
    ZoomScaleModel,
)
from src.timeline.aggregator import Aggregator
from src.timeline.headers import HeaderResolutionError
from src.timeline.time_axis import DEFAULT_CELL_WIDTH, DEFAULT_ZOOM, ZOOM_PRESETS

logger = logging.getLogger(__name__)

DEFAULT_PORT = 4301


def load_config(config_path: Path) -> Dict[str, Any]:
    """
    Load config.json, falling back to an empty config.

    Parameters
    ----------
    config_path : Path
        Location of config.json

    Returns
    -------
    dict
        Parsed configuration ({} if missing or unreadable)
    """
    try:
        with open(config_path, "r") as f:
            config = json.load(f)
            logger.info(f"Loaded config from {config_path}")
            return config
    except Exception as e:
        logger.warning(f"Could not load config.json: {e}, using defaults")
        return {}


config = load_config(Path(__file__).parent.parent / "config.json")
timeline_config = config.get("timeline", {})

# Initialize FastAPI app
app = FastAPI(
    title="Asset Timeline API",
    description="Backend API for the asset contract timeline",
    version="1.0.0",
)

# Configure CORS - allow all localhost origins in development
app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=r"http://(localhost|127\.0\.0\.1):\d+",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

aggregator = Aggregator(
    cell_width=timeline_config.get("cell_width", DEFAULT_CELL_WIDTH),
    default_zoom=timeline_config.get("default_zoom", DEFAULT_ZOOM),
)


@app.get("/")  # type: ignore[misc]
async def root() -> Dict[str, Any]:
    """
    Root endpoint with API information.

    Returns
    -------
    dict
        API information and status
    """
    return {
        "name": "Asset Timeline API",
        "version": "1.0.0",
        "status": "running",
        "endpoints": {
            "/api/timeline": "Build a timeline snapshot from export rows",
            "/api/zoom-presets": "List time axis zoom presets",
            "/health": "Health check",
        },
    }


@app.get("/health")  # type: ignore[misc]
async def health() -> Dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/api/zoom-presets", response_model=ZoomPresetsResponse)  # type: ignore[misc]
async def get_zoom_presets() -> ZoomPresetsResponse:
    """List zoom presets, widest first."""
    return ZoomPresetsResponse(
        presets=[
            ZoomPresetModel(
                label=preset.label,
                scales=[
                    ZoomScaleModel(unit=s.unit, step=s.step, label_format=s.label_format)
                    for s in preset.scales
                ],
            )
            for preset in ZOOM_PRESETS
        ],
        default=aggregator.default_zoom,
    )


@app.post("/api/timeline")  # type: ignore[misc]
async def create_timeline(request: TimelineRequest) -> Dict[str, Any]:
    """
    Build a timeline snapshot from one decoded export.

    Parameters
    ----------
    request : TimelineRequest
        Headers, rows and view options

    Returns
    -------
    dict
        Snapshot with:
        - snapshot_id / snapshot_version: identify the load
        - total_rows / total_assets / message: load summary
        - field_map: header found for each canonical field
        - location_groups: grouped assets
        - gantt: flat task list and (empty) links
        - time_axis: two-row axis geometry
    """
    try:
        snapshot = aggregator.create_snapshot(
            headers=request.headers,
            rows=request.rows,
            file_name=request.file_name,
            today=request.today,
            zoom=request.zoom,
            search=request.search,
            location_ids=request.location_ids,
            cell_width=request.cell_width,
        )
        return snapshot.to_dict()

    except HeaderResolutionError as e:
        logger.warning(f"Rejected export {request.file_name}: {e}")
        raise HTTPException(status_code=422, detail=str(e))
    except ValueError as e:
        logger.warning(f"Invalid timeline request: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error creating timeline: {e}", exc_info=True)
        raise HTTPException(
            status_code=500, detail=f"Error creating timeline: {str(e)}"
        )


if __name__ == "__main__":
    import uvicorn

    port = config.get("backend", {}).get("port", DEFAULT_PORT)
    logger.info(f"Starting Asset Timeline API on http://0.0.0.0:{port}")
    uvicorn.run(app, host="0.0.0.0", port=port, log_level="info")  # nosec B104
