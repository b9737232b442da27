#!/usr/bin/env python3
"""
netdash API Schemas - Pydantic Models for Telemetry Payload Validation
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class SeriesSpec(BaseModel):
    name: str
    data: List[float]  # bits/sec samples, one per scale
    color: Optional[str] = None
    type: Optional[Literal["line", "bar"]] = None
    show_avg_line: bool = False
    show_max_point: bool = False


class TelemetryPayload(BaseModel):
    scales: List[str]  # empty means "no data yet"
    series_vec: List[SeriesSpec]


class ViewportRequest(BaseModel):
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)
