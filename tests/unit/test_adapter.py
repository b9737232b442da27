"""Unit tests for payload shaping and chart option building"""
import dataclasses

import pytest

from netdash.api.schemas import TelemetryPayload
from netdash.core.errors import NumericError, PayloadContractError
from netdash.dashboard.adapter import (
    AdaptedPayload,
    RenderableSeries,
    adapt,
    build_chart_option,
    global_maximum,
)


def payload(data):
    return TelemetryPayload.model_validate(data)


class TestEmptyPayload:

    def test_no_scales_is_empty(self, empty_payload):
        assert adapt(payload(empty_payload)) == AdaptedPayload(empty=True)

    def test_no_scales_ignores_series_content(self):
        result = adapt(payload({
            "scales": [],
            "series_vec": [{"name": "eth0", "data": [1, 2, 3]}, {"name": "bad", "data": []}],
        }))
        assert result.empty is True
        assert result.series == ()

    def test_empty_payload_has_no_chart_option(self, empty_payload):
        with pytest.raises(ValueError):
            build_chart_option(adapt(payload(empty_payload)))


class TestAdapt:

    def test_single_series_end_to_end(self, eth0_payload):
        result = adapt(payload(eth0_payload))

        assert result.empty is False
        assert result.categories == ("t0", "t1")
        assert len(result.series) == 1
        assert result.series[0].name == "eth0"
        assert result.series[0].data == (0, 2048)
        assert result.axis.max_value == 2048
        assert result.axis.interval == 1024
        assert result.axis.axis_max == 2048

    def test_series_defaults(self, eth0_payload):
        series = adapt(payload(eth0_payload)).series[0]
        assert series.type == "line"
        assert series.smooth is True
        assert series.color is None
        assert series.avg_marker is None
        assert series.max_marker is None

    def test_flags_become_markers(self, rich_payload):
        rx, tx = adapt(payload(rich_payload)).series

        assert rx.color == "#5470c6"
        assert rx.avg_marker.value == 2048
        assert rx.avg_marker.label == "2.000 Kb/s"
        assert rx.max_marker.value == 3072
        assert rx.max_marker.label == "3.000 Kb/s"
        assert tx.type == "bar"
        assert tx.avg_marker is None

    def test_global_maximum_spans_all_series(self, rich_payload):
        result = adapt(payload(rich_payload))
        assert result.axis.max_value == 3072
        assert result.axis.interval == 1024
        assert result.axis.axis_max == 3072

    def test_renderable_series_is_immutable(self, eth0_payload):
        series = adapt(payload(eth0_payload)).series[0]
        with pytest.raises(dataclasses.FrozenInstanceError):
            series.name = "eth1"

    def test_all_zero_samples_render_flat_axis(self):
        result = adapt(payload({
            "scales": ["t0", "t1"],
            "series_vec": [{"name": "lo", "data": [0, 0]}],
        }))
        assert result.axis.interval == 1
        assert result.axis.axis_max == 1


class TestPayloadContract:

    def test_length_mismatch_raises(self):
        with pytest.raises(PayloadContractError):
            adapt(payload({
                "scales": ["t0", "t1"],
                "series_vec": [{"name": "eth0", "data": [1]}],
            }))

    def test_every_series_empty_raises(self):
        with pytest.raises(PayloadContractError):
            adapt(payload({
                "scales": ["t0"],
                "series_vec": [{"name": "eth0", "data": []}, {"name": "eth1", "data": []}],
            }))

    def test_no_series_with_scales_raises(self):
        with pytest.raises(PayloadContractError):
            adapt(payload({"scales": ["t0"], "series_vec": []}))

    def test_non_finite_sample_raises_numeric_error(self):
        with pytest.raises(NumericError):
            adapt(payload({
                "scales": ["t0", "t1"],
                "series_vec": [{"name": "eth0", "data": [1, float("inf")]}],
            }))

    def test_global_maximum_rejects_nan(self):
        specs = payload({
            "scales": ["t0"],
            "series_vec": [{"name": "eth0", "data": [float("nan")]}],
        }).series_vec
        with pytest.raises(NumericError):
            global_maximum(specs)

    def test_duplicate_series_name_raises(self):
        with pytest.raises(PayloadContractError):
            adapt(payload({
                "scales": ["t0"],
                "series_vec": [{"name": "eth0", "data": [1024]}, {"name": "eth0", "data": [4096]}],
            }))

    def test_negative_sample_raises(self):
        with pytest.raises(PayloadContractError):
            adapt(payload({
                "scales": ["t0"],
                "series_vec": [{"name": "eth0", "data": [-5000]}],
            }))

    def test_one_negative_sample_among_positive_raises(self):
        with pytest.raises(PayloadContractError):
            adapt(payload({
                "scales": ["t0", "t1"],
                "series_vec": [{"name": "eth0", "data": [2048, 0]}, {"name": "eth1", "data": [-1, 10]}],
            }))


class TestRenderableSeriesOption:

    def test_plain_series_option(self, eth0_payload):
        option = adapt(payload(eth0_payload)).series[0].to_option()
        assert option == {"name": "eth0", "type": "line", "smooth": True, "data": [0, 2048]}

    def test_markers_and_color_in_option(self, rich_payload):
        option = adapt(payload(rich_payload)).series[0].to_option()

        assert option["itemStyle"] == {"color": "#5470c6"}
        assert option["markLine"]["data"][0]["type"] == "average"
        assert option["markLine"]["data"][0]["label"]["formatter"] == "2.000 Kb/s"
        assert option["markPoint"]["data"][0]["type"] == "max"
        assert option["markPoint"]["data"][0]["label"]["formatter"] == "3.000 Kb/s"

    def test_from_spec_type_override(self):
        spec = payload({
            "scales": ["t0"],
            "series_vec": [{"name": "eth0", "data": [5], "type": "bar"}],
        }).series_vec[0]
        assert RenderableSeries.from_spec(spec).type == "bar"


class TestBuildChartOption:

    def test_axis_and_legend(self, rich_payload):
        option = build_chart_option(adapt(payload(rich_payload)))

        assert option["xAxis"] == {
            "type": "category",
            "boundaryGap": False,
            "data": ["12:00:00", "12:00:05", "12:00:10"],
        }
        assert option["yAxis"]["interval"] == 1024
        assert option["yAxis"]["max"] == 3072
        assert option["legend"]["data"] == ["eth0 rx", "eth0 tx"]
        assert len(option["series"]) == 2

    def test_toolbox_features(self, eth0_payload):
        features = build_chart_option(adapt(payload(eth0_payload)))["toolbox"]["feature"]
        assert set(features) == {"dataView", "magicType", "restore", "saveAsImage"}
        assert features["magicType"]["type"] == ["line", "bar"]

    def test_tick_labels_use_rate_formatter(self, rich_payload):
        ticks = build_chart_option(adapt(payload(rich_payload)))["rateLabels"]["ticks"]
        assert ticks == {"0": "0b/s", "1024": "1 Kb/s", "2048": "2 Kb/s", "3072": "3 Kb/s"}

    def test_tooltip_labels_per_sample(self, eth0_payload):
        tooltip = build_chart_option(adapt(payload(eth0_payload)))["rateLabels"]["tooltip"]
        assert tooltip == {"eth0": ["0b/s", "2.000 Kb/s"]}
