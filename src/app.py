"""
FastAPI web application for play-heatmap.

Serves the heatmap dashboard and REST API endpoints for records, metric
selection and draw instructions.
"""

import threading
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel, ConfigDict, Field

from src.app_logging import configure_logging, get_logger
from src.color_deriver import STYLES, MetricType
from src.config import HEATMAP_TITLE, build_config
from src.heatmap_renderer import HeatmapView

configure_logging()
logger = get_logger(__name__)

app = FastAPI(
    title="play-heatmap",
    description="A calendar heatmap of keyboard and scratch activity",
    version="0.1.0",
)

templates = Jinja2Templates(directory=Path(__file__).parent / "templates")

# Built on first use so that today's offset is fixed when the app starts serving
_view: HeatmapView | None = None
_view_lock = threading.Lock()


class ActivityRecordIn(BaseModel):
    """Request model for one day of activity."""

    model_config = ConfigDict(populate_by_name=True)

    date: str = Field(..., pattern=r"^\d{8}$", description="Day in yyyyMMdd format")
    keyboard_count: int = Field(0, ge=0, alias="keyboardCount")
    scratch_count: int = Field(0, ge=0, alias="scratchCount")


class MetricUpdate(BaseModel):
    """Request model for changing the selected metric."""

    metric: str = Field(..., description="One of: heat, keyboard, scratch")


def get_view() -> HeatmapView:
    """
    Return the application's heatmap view.

    Raises:
        HTTPException: on configuration errors
    """
    global _view
    # Endpoints run in a threadpool; only one request may build the view
    with _view_lock:
        if _view is None:
            try:
                config = build_config()
            except ValueError as e:
                raise HTTPException(status_code=500, detail=f"Configuration error: {e}")
            _view = HeatmapView(config)
        return _view


def _parse_metric(metric: str | None) -> MetricType | None:
    if metric is None:
        return None
    try:
        return MetricType.parse(metric)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/", response_class=HTMLResponse)
def index(request: Request, metric: str | None = None):
    """Render the dashboard page."""
    view = get_view()
    selected = _parse_metric(metric)
    if selected is not None:
        view.select_metric(selected)

    data = {
        "title": HEATMAP_TITLE,
        "metrics": list(MetricType),
        "selected": view.metric,
        "width": view.width,
        "height": view.height,
        "cells": view.render(),
        "summary": view.summary(),
    }
    return templates.TemplateResponse(request, "index.html", data)


@app.get("/api/metrics")
def get_metrics():
    """
    Get the metrics available to the type selector.

    Returns:
        JSON with each metric's name, label and color style, plus the
        current selection
    """
    view = get_view()
    return {
        "metrics": [
            {"name": m.value, "label": m.label, "style": STYLES[m].to_dict()}
            for m in MetricType
        ],
        "selected": view.metric.value,
    }


@app.put("/api/records")
def put_records(records: list[ActivityRecordIn]):
    """
    Replace the activity records and re-aggregate.

    Args:
        records: List of records with date, keyboardCount and scratchCount

    Returns:
        JSON with accepted and rejected counts and the new maxima
    """
    view = get_view()
    table = view.set_records([record.model_dump() for record in records])

    return {
        "accepted": table.accepted,
        "rejected": table.rejected,
        "maxima": table.maxima.to_dict(),
    }


@app.put("/api/metric")
def put_metric(update: MetricUpdate):
    """
    Select the metric used to color the cells.

    Args:
        update: MetricUpdate with the metric name

    Returns:
        JSON with the selected metric
    """
    view = get_view()
    try:
        metric = view.select_metric(update.metric)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info("Selected metric %s", metric.value)
    return {"metric": metric.value}


@app.get("/api/heatmap")
def get_heatmap(metric: str | None = None):
    """
    Get the draw instructions for the whole window.

    Args:
        metric: Optional metric for this render only; the selection is
            left unchanged

    Returns:
        JSON with grid width and height, the metric and one cell per day
    """
    view = get_view()
    selected = _parse_metric(metric) or view.metric
    cells = view.render(selected)

    return {
        "width": view.width,
        "height": view.height,
        "metric": selected.value,
        "cells": [cell.to_dict() for cell in cells],
    }


@app.get("/api/summary")
def get_summary():
    """
    Get activity totals for the days shown so far.

    Returns:
        JSON with active days, totals, maxima and record counts
    """
    return get_view().summary()
