"""
Series Adapter

Turns one telemetry payload into renderer-ready series descriptors and the
declarative chart option handed to the render surface. Everything here is
pure: a payload in, immutable values out.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np

from ..api.schemas import SeriesSpec, TelemetryPayload
from ..core.errors import NumericError, PayloadContractError
from ..web.template_helpers import format_rate
from .axis import axis_max, pick_interval

logger = logging.getLogger("netdash.dashboard")

MARKER_PRECISION = 4
MARKER_NAMES = {"average": "avg", "max": "max"}


@dataclass(frozen=True)
class Marker:
    """Average line or maximum point drawn on top of a series."""
    kind: str  # "average" or "max"
    value: float
    label: str

    def to_option(self) -> Dict[str, Any]:
        return {
            "type": self.kind,
            "name": MARKER_NAMES[self.kind],
            "label": {"formatter": self.label},
        }


@dataclass(frozen=True)
class RenderableSeries:
    name: str
    data: Tuple[float, ...]
    type: str = "line"
    smooth: bool = True
    color: Optional[str] = None
    avg_marker: Optional[Marker] = None
    max_marker: Optional[Marker] = None

    @classmethod
    def from_spec(cls, spec: SeriesSpec) -> "RenderableSeries":
        """Fold the payload flags of one series into a renderable value."""
        samples = np.asarray(spec.data, dtype=float)
        avg_marker = None
        max_marker = None
        if spec.show_avg_line:
            avg = float(samples.mean())
            avg_marker = Marker("average", avg, format_rate(avg, MARKER_PRECISION))
        if spec.show_max_point:
            peak = float(samples.max())
            max_marker = Marker("max", peak, format_rate(peak, MARKER_PRECISION))

        return cls(
            name=spec.name,
            data=tuple(spec.data),
            type=spec.type or "line",
            color=spec.color,
            avg_marker=avg_marker,
            max_marker=max_marker,
        )

    def to_option(self) -> Dict[str, Any]:
        option = {
            "name": self.name,
            "type": self.type,
            "smooth": self.smooth,
            "data": list(self.data),
        }
        if self.color:
            option["itemStyle"] = {"color": self.color}
        if self.avg_marker:
            option["markLine"] = {"data": [self.avg_marker.to_option()]}
        if self.max_marker:
            option["markPoint"] = {"data": [self.max_marker.to_option()]}
        return option


@dataclass(frozen=True)
class AxisPresentation:
    max_value: float
    interval: float
    label_formatter: Callable[..., str] = format_rate

    @property
    def axis_max(self) -> float:
        # A flat all-zero chart still gets one visible interval
        return max(axis_max(self.max_value, self.interval), self.interval)

    def tick_labels(self) -> Dict[str, str]:
        """Formatted label for every tick, keyed the way JavaScript prints the number."""
        labels = {}
        tick = 0.0
        while tick <= self.axis_max:
            labels[str(int(tick))] = self.label_formatter(tick)
            tick += self.interval
        return labels


@dataclass(frozen=True)
class AdaptedPayload:
    empty: bool
    categories: Tuple[str, ...] = ()
    series: Tuple[RenderableSeries, ...] = field(default_factory=tuple)
    axis: Optional[AxisPresentation] = None


def global_maximum(series_vec: List[SeriesSpec]) -> float:
    """
    Largest sample across all series.

    Raises:
        PayloadContractError: no samples at all, or a negative sample
        NumericError: any sample is NaN or infinite
    """
    arrays = [np.asarray(spec.data, dtype=float) for spec in series_vec if spec.data]
    if not arrays:
        raise PayloadContractError("payload has scales but every series is empty")

    samples = np.concatenate(arrays)
    if not np.isfinite(samples).all():
        raise NumericError("payload contains non-finite samples")
    if (samples < 0).any():
        raise PayloadContractError("payload contains negative rates")
    return float(samples.max())


def adapt(payload: TelemetryPayload) -> AdaptedPayload:
    """
    Shape a telemetry payload for rendering.

    Returns:
        AdaptedPayload(empty=True) when the payload has no scales yet,
        otherwise categories, renderable series and axis presentation

    Raises:
        PayloadContractError: series length differs from the scales length,
            two series share a name, a sample is negative, or scales are
            present without any samples
        NumericError: samples contain NaN or infinity
    """
    if not payload.scales:
        return AdaptedPayload(empty=True)

    expected = len(payload.scales)
    seen = set()
    for spec in payload.series_vec:
        if len(spec.data) != expected:
            raise PayloadContractError(
                f"series '{spec.name}' has {len(spec.data)} samples, expected {expected}"
            )
        if spec.name in seen:
            raise PayloadContractError(f"duplicate series name '{spec.name}'")
        seen.add(spec.name)

    max_value = global_maximum(payload.series_vec)
    # Idle links report all zeros; keep the base interval instead of failing
    interval = pick_interval(max_value) if max_value > 0 else 1.0

    series = tuple(RenderableSeries.from_spec(spec) for spec in payload.series_vec)
    logger.debug("adapted %d series over %d scales, max=%s interval=%s",
                 len(series), expected, max_value, interval)

    return AdaptedPayload(
        empty=False,
        categories=tuple(payload.scales),
        series=series,
        axis=AxisPresentation(max_value=max_value, interval=interval),
    )


def build_chart_option(adapted: AdaptedPayload) -> Dict[str, Any]:
    """
    Build the declarative chart configuration for a non-empty payload.

    Besides the standard chart keys the option carries a `rateLabels` side
    table (axis tick labels and per-sample tooltip labels) so the page can
    show Python-formatted rates without its own formatter.
    """
    if adapted.empty or adapted.axis is None:
        raise ValueError("cannot build a chart option for an empty payload")

    axis = adapted.axis
    return {
        "tooltip": {"trigger": "axis"},
        "legend": {"data": [s.name for s in adapted.series]},
        "toolbox": {
            "feature": {
                "dataView": {"readOnly": True},
                "magicType": {"type": ["line", "bar"]},
                "restore": {},
                "saveAsImage": {},
            }
        },
        "xAxis": {
            "type": "category",
            "boundaryGap": False,
            "data": list(adapted.categories),
        },
        "yAxis": {
            "type": "value",
            "min": 0,
            "max": axis.axis_max,
            "interval": axis.interval,
        },
        "series": [s.to_option() for s in adapted.series],
        "rateLabels": {
            "ticks": axis.tick_labels(),
            "tooltip": {
                s.name: [format_rate(v, MARKER_PRECISION) for v in s.data]
                for s in adapted.series
            },
        },
    }
